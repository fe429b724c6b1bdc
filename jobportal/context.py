"""One application context per UI session: owns every piece of portal state."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from jobportal import config
from jobportal.catalog import JobCatalog
from jobportal.ledger import ApplicationLedger
from jobportal.log import get_logger
from jobportal.router import Router
from jobportal.session import SessionStore
from jobportal.storage import FileKeyValueStore, NamespacedKeyValueStore

log = get_logger(__name__)


class AppContext:
    def __init__(self, store, seed: Iterable[dict[str, Any]] | None = None, router: Router | None = None) -> None:
        self.sessions = SessionStore(store)
        self.ledger = ApplicationLedger()
        self.catalog = JobCatalog(
            self.ledger, config.load_seed_jobs() if seed is None else seed
        )
        self.router = router or Router()

    @property
    def identity(self):
        return self.sessions.identity


def build_context(session_path: Path | None = None, client_id: str = "default") -> AppContext:
    """Context whose persisted session is keyed by `client_id` (one per browser)."""
    config.ensure_dirs()
    shared = FileKeyValueStore(session_path or config.session_file())
    ctx = AppContext(NamespacedKeyValueStore(shared, client_id))
    log.info("Portal context ready for client %s (%d job(s))", client_id[:8], len(ctx.catalog))
    return ctx
