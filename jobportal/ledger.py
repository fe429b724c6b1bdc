"""In-memory record of job applications, one per (job, user)."""
from __future__ import annotations

import uuid

from jobportal.log import get_logger
from jobportal.models import Application, Job, Result, utcnow

log = get_logger(__name__)

ALREADY_APPLIED = "You have already applied for this job."


def _app_id() -> str:
    return f"app-{uuid.uuid4().hex[:12]}"


class ApplicationLedger:
    def __init__(self) -> None:
        self._apps: list[Application] = []

    def __len__(self) -> int:
        return len(self._apps)

    def has_applied(self, job_id: str, user_id: str) -> bool:
        return any(a.job_id == job_id and a.user_id == user_id for a in self._apps)

    def apply(self, job: Job, user_email: str, user_id: str) -> Result:
        if self.has_applied(job.id, user_id):
            return Result.fail(ALREADY_APPLIED)

        app = Application(
            id=_app_id(),
            job_id=job.id,
            job_title=job.title,
            user_id=user_id,
            user_email=user_email,
            applied_at=utcnow(),
        )
        self._apps.append(app)
        log.info("Application %s: %s -> %s", app.id, user_email, job.title)
        return Result.ok(f'Successfully applied for "{job.title}"!')

    def list_for_user(self, user_id: str) -> list[Application]:
        return [a for a in self._apps if a.user_id == user_id]

    def list_all(self) -> list[Application]:
        return list(self._apps)

    def applied_job_ids(self, user_id: str) -> set[str]:
        return {a.job_id for a in self._apps if a.user_id == user_id}

    def purge_job(self, job_id: str) -> int:
        """Drop every application for a deleted job; returns how many went."""
        kept = [a for a in self._apps if a.job_id != job_id]
        removed = len(self._apps) - len(kept)
        self._apps = kept
        return removed
