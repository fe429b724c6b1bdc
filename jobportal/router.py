"""String-keyed page switch with per-page role rules and delayed redirects."""
from __future__ import annotations

import time

from jobportal import config
from jobportal.log import get_logger
from jobportal.models import Admin, Guest, Identity, User

log = get_logger(__name__)

HOME = "home"
LOGIN = "login"
SIGNUP = "signup"
USER_DASHBOARD = "userDashboard"
BROWSE_JOBS = "browseJobs"
APPLIED_JOBS = "appliedJobs"
ADMIN_DASHBOARD = "adminDashboard"
MANAGE_JOBS = "manageJobs"
VIEW_APPLICATIONS = "viewApplications"
ITEMS = "items"

PAGES: tuple[str, ...] = (
    HOME, LOGIN, SIGNUP, USER_DASHBOARD, BROWSE_JOBS, APPLIED_JOBS,
    ADMIN_DASHBOARD, MANAGE_JOBS, VIEW_APPLICATIONS, ITEMS,
)

USER_PAGES: dict[str, str] = {
    USER_DASHBOARD: "Access Denied. Please log in as a user.",
    BROWSE_JOBS: "Please log in as a user to browse jobs.",
    APPLIED_JOBS: "Please log in as a user to view applied jobs.",
}
ADMIN_PAGES: dict[str, str] = {
    ADMIN_DASHBOARD: "Access Denied. Please log in as an admin.",
    MANAGE_JOBS: "Access Denied. Please log in as an admin to manage jobs.",
    VIEW_APPLICATIONS: "Access Denied. Please log in as an admin to view applications.",
}


def check_access(identity: Identity, page: str) -> str | None:
    """Denial message for this identity on this page, or None if allowed."""
    if isinstance(identity, Admin):
        return USER_PAGES.get(page)
    if isinstance(identity, User):
        return ADMIN_PAGES.get(page)
    if isinstance(identity, Guest):
        return USER_PAGES.get(page) or ADMIN_PAGES.get(page)
    raise TypeError(f"Unknown identity: {identity!r}")


def landing_page(identity: Identity) -> str:
    """Where a freshly logged-in identity is sent."""
    if isinstance(identity, Admin):
        return ADMIN_DASHBOARD
    if isinstance(identity, User):
        return USER_DASHBOARD
    return HOME


def nav_entries(identity: Identity) -> list[tuple[str, str]]:
    """(label, page) pairs for the navbar."""
    entries = [("Home", HOME)]
    if isinstance(identity, Admin):
        entries.append(("Admin Dashboard", ADMIN_DASHBOARD))
    elif isinstance(identity, User):
        entries += [
            ("User Dashboard", USER_DASHBOARD),
            ("Browse Jobs", BROWSE_JOBS),
            ("Applied Jobs", APPLIED_JOBS),
        ]
    return entries


class Router:
    def __init__(self, clock=time.monotonic) -> None:
        self.current = HOME
        self._clock = clock
        self._pending: list[tuple[float, str]] = []

    def navigate(self, page: str) -> None:
        self.current = page

    def resolve(self) -> str:
        return self.current if self.current in PAGES else HOME

    def schedule(self, page: str, delay: float | None = None) -> None:
        """Navigate to `page` once `delay` seconds have passed."""
        delay = config.redirect_delay() if delay is None else delay
        self._pending.append((self._clock() + delay, page))
        log.debug("Scheduled redirect to %s in %.1fs", page, delay)

    def seconds_until_next(self) -> float | None:
        if not self._pending:
            return None
        return max(0.0, min(due for due, _ in self._pending) - self._clock())

    def tick(self, now: float | None = None) -> bool:
        """Apply every due redirect in schedule order; True if the page changed."""
        now = self._clock() if now is None else now
        due = [p for p in self._pending if p[0] <= now]
        if not due:
            return False
        self._pending = [p for p in self._pending if p[0] > now]
        before = self.current
        for _, page in sorted(due, key=lambda p: p[0]):
            self.navigate(page)
        return self.current != before
