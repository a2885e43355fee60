"""
weibo_sdk.tier1_runtime.retry
──────────────────────────────
Retry/backoff policy with jitter for the httpx executor. Backed by
Tenacity. Only transport failures are retried; an HTTP response of any
status is a completed exchange and is handed back as-is.

The dispatcher never retries. Retrying is an executor concern and is off
by default (WEIBO_MAX_ATTEMPTS=1).

Usage:
    @retry_policy(max_attempts=3)
    def send(request):
        ...
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, Type

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from weibo_sdk.tier0_core.logging import get_logger

log = get_logger(__name__)

_RETRYABLE: tuple[Type[BaseException], ...] = (httpx.TransportError,)


def _log_retry(retry_state: Any) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    log.warning(
        "executor.retry",
        attempt=retry_state.attempt_number,
        error=type(exc).__name__ if exc else None,
    )


def retry_policy(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 10.0,
    jitter: float = 1.0,
    on: tuple[Type[BaseException], ...] = _RETRYABLE,
) -> Callable:
    """
    Decorator applying exponential backoff with jitter to a blocking call.

    Args:
        max_attempts: Total number of attempts (including first).
        min_wait:     Minimum wait seconds between retries.
        max_wait:     Maximum wait seconds between retries.
        jitter:       Maximum random seconds added to each wait.
        on:           Exception types that trigger a retry.
    """
    def decorator(fn: Callable) -> Callable:
        if max_attempts <= 1:
            return fn

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in Retrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(min=min_wait, max=max_wait) + wait_random(0, jitter),
                retry=retry_if_exception_type(on),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    return fn(*args, **kwargs)

        return wrapper
    return decorator


__all__ = ["retry_policy"]
