"""Retry decorator with exponential backoff, stdlib only."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Tuple, Type

from jobportal.log import get_logger

log = get_logger(__name__)


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 8.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """Retry the wrapped call on `retryable` errors, re-raising the last one."""

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if attempt >= max_attempts:
                        log.error(
                            "%s gave up after %d attempt(s): %s",
                            fn.__qualname__, attempt, exc,
                        )
                        raise
                    delay = min(base_delay * backoff_factor ** (attempt - 1), max_delay)
                    if jitter:
                        delay *= 0.5 + random.random()
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__, attempt, max_attempts, exc, delay,
                    )
                    (sleep or time.sleep)(delay)
                    attempt += 1

        return wrapper

    return decorator
