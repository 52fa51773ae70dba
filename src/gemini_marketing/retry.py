"""Bounded retry with deterministic exponential backoff.

The wrapped operation is assumed to be a read-style generation request that
is safe to repeat; there is no compensation logic. Backoff has no jitter so
delays are reproducible in tests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from gemini_marketing.constants import MAX_ATTEMPTS, RETRY_BASE_DELAY

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)


def is_retryable(error: Exception) -> bool:
    """Default retry predicate: honour a ``retryable`` attribute, else retry."""
    return bool(getattr(error, "retryable", True))


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Delay to wait after failed ``attempt`` (1-based) before the next one."""
    return base_delay * (2 ** (attempt - 1))


async def with_retry[T](
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay: float = RETRY_BASE_DELAY,
    should_retry: Callable[[Exception], bool] = is_retryable,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> T:
    """Run ``operation`` up to ``max_attempts`` times.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total attempts including the first one.
        base_delay: Seconds to wait after the first failure; doubles after
            each subsequent failure.
        should_retry: Errors for which this returns False propagate at once.
        sleep: Awaitable sleep, injectable for tests.
        on_retry: Optional hook called with ``(attempt, error, delay)`` before
            each backoff sleep.

    Returns:
        The first successful result.

    Raises:
        Exception: The last error raised by ``operation``, unchanged.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if base_delay < 0:
        raise ValueError("base_delay must be non-negative")

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as error:
            if attempt >= max_attempts or not should_retry(error):
                raise
            delay = backoff_delay(attempt, base_delay)
            log.warning(
                "Attempt %d/%d failed (%s: %s). Retrying in %.2fs",
                attempt,
                max_attempts,
                type(error).__name__,
                error,
                delay,
            )
            if on_retry is not None:
                on_retry(attempt, error, delay)
            await sleep(delay)
            attempt += 1
