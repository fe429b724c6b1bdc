"""Logging setup for the portal UI and the items API."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers capped at WARNING unless LOG_LEVEL=DEBUG.
NOISY_LOGGERS: tuple[str, ...] = ("pymongo", "urllib3", "watchdog", "PIL")

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _env_flag(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes")


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    third_party = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party)

    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not _env_flag("LOG_TO_FILE", True):
        return
    log_dir = Path(os.environ.get("LOG_DIR") or _DEFAULT_LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(
            log_dir / f"portal_{datetime.now().strftime('%Y-%m-%d')}.log",
            encoding="utf-8",
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        root.addHandler(fh)
    except OSError as exc:
        root.warning("File logging disabled (%s): %s", log_dir, exc)
