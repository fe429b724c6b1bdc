"""HTTP client for the items API, used by the standalone item list page."""
from __future__ import annotations

from typing import Any

import requests

from jobportal import config
from jobportal.log import get_logger
from jobportal.retry import retry

log = get_logger(__name__)

_TIMEOUT = 10


@retry(max_attempts=3, base_delay=0.5, retryable=(requests.ConnectionError, requests.Timeout))
def get_items(url: str | None = None) -> list[dict[str, Any]]:
    url = url or config.items_api_url()
    resp = requests.get(url, timeout=_TIMEOUT)
    resp.raise_for_status()
    items = resp.json()
    log.debug("Fetched %d item(s)", len(items))
    return items


# Retried only on connect timeouts, where the request never reached the server.
@retry(max_attempts=2, base_delay=0.5, retryable=(requests.exceptions.ConnectTimeout,))
def add_item(item: dict[str, Any], url: str | None = None) -> dict[str, Any]:
    url = url or config.items_api_url()
    resp = requests.post(url, json=item, timeout=_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def format_item(item: dict[str, Any]) -> str:
    qty = item.get("quantity")
    return f"{item.get('name', '')} (Qty: {qty if qty is not None else '-'})"
