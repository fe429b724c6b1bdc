"""Mock authentication: a fixed admin account plus one shared user password."""
from __future__ import annotations

import json

from jobportal import config
from jobportal.log import get_logger
from jobportal.models import Admin, Guest, Identity, Result, Session, User

log = get_logger(__name__)

KEY_CURRENT_USER = "currentUser"
KEY_USER_ID = "userId"
KEY_IS_ADMIN = "isAdmin"

INVALID_CREDENTIALS = "Invalid email or password."
ADMIN_EMAIL_TAKEN = "Email already registered as admin."


class SessionStore:
    def __init__(self, store) -> None:
        self._store = store
        self._session: Session | None = None
        self._rehydrate()

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def identity(self) -> Identity:
        s = self._session
        if s is None:
            return Guest()
        if s.is_admin:
            return Admin(email=s.email, user_id=s.user_id)
        return User(email=s.email, user_id=s.user_id)

    def _rehydrate(self) -> None:
        stored_user = self._store.get(KEY_CURRENT_USER)
        stored_id = self._store.get(KEY_USER_ID)
        if not stored_user or not stored_id:
            return
        try:
            email = json.loads(stored_user)["email"]
        except (json.JSONDecodeError, KeyError, TypeError):
            log.warning("Ignoring malformed persisted session")
            return
        is_admin = self._store.get(KEY_IS_ADMIN) == "true"
        self._session = Session(email=email, user_id=stored_id, is_admin=is_admin)
        log.info("Restored session for %s (admin=%s)", email, is_admin)

    def _persist(self, session: Session) -> None:
        self._store.set(KEY_CURRENT_USER, json.dumps({"email": session.email}))
        self._store.set(KEY_USER_ID, session.user_id)
        self._store.set(KEY_IS_ADMIN, "true" if session.is_admin else "false")

    def login(self, email: str, password: str) -> Result:
        if email == config.admin_email() and password == config.admin_password():
            session = Session(email=email, user_id=config.admin_user_id(), is_admin=True)
        elif password == config.user_password():
            # non-admin users are keyed by their email
            session = Session(email=email, user_id=email, is_admin=False)
        else:
            log.info("Rejected login for %s", email)
            return Result.fail(INVALID_CREDENTIALS)

        self._session = session
        self._persist(session)
        log.info("Logged in %s (admin=%s)", email, session.is_admin)
        return Result.ok()

    def signup(self, email: str, password: str) -> Result:
        """Accepts any email except the admin one; nothing is stored."""
        if email == config.admin_email():
            return Result.fail(ADMIN_EMAIL_TAKEN)
        log.debug("Signup accepted for %s", email)
        return Result.ok()

    def logout(self) -> None:
        if self._session is not None:
            log.info("Logged out %s", self._session.email)
        self._session = None
        for key in (KEY_CURRENT_USER, KEY_USER_ID, KEY_IS_ADMIN):
            self._store.remove(key)
