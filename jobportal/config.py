"""Load env settings and the seed job catalog."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobportal.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
DATA_DIR: Path = ROOT_DIR / "data"
SEED_JOBS_PATH: Path = CONFIG_DIR / "seed_jobs.yaml"


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_float(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def admin_email() -> str:
    return get_env("ADMIN_EMAIL", "admin@jobportal.com")


def admin_password() -> str:
    return get_env("ADMIN_PASSWORD", "password123")


def admin_user_id() -> str:
    return get_env("ADMIN_USER_ID", "admin-id-123")


def user_password() -> str:
    """Shared password accepted for every non-admin email."""
    return get_env("USER_PASSWORD", "user123")


def redirect_delay() -> float:
    return get_float("REDIRECT_DELAY", 1.5)


def session_file() -> Path:
    custom = get_env("SESSION_FILE")
    return Path(custom) if custom else DATA_DIR / "session.json"


def mongo_uri() -> str:
    return get_env("MONGO_URI", "mongodb://localhost:27017")


def mongo_db() -> str:
    return get_env("MONGO_DB", "jobportal")


def api_port() -> int:
    return int(get_float("PORT", 5000))


def items_api_url() -> str:
    return get_env("ITEMS_API_URL", "http://localhost:5000/api/items")


def ensure_dirs() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_seed_jobs(path: Path | None = None) -> list[dict[str, Any]]:
    """Raw job records for the initial catalog; empty when the file is missing."""
    path = path or SEED_JOBS_PATH
    if not path.exists():
        log.warning("Seed file %s not found, starting with an empty catalog", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return list(data.get("jobs", []))
