#!/usr/bin/env python3
"""Entry point to serve the items REST API."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobportal.config import api_port
from jobportal.items_api import create_app
from jobportal.log import get_logger

log = get_logger(__name__)


if __name__ == "__main__":
    port = api_port()
    log.info("Items API listening on port %d", port)
    create_app().run(host="0.0.0.0", port=port)
