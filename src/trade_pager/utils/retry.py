"""Retry utilities with a fixed delay between attempts."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .logging import log_with_context

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RetryExhausted(Exception):
    """Raised when every attempt failed. Wraps the last error."""

    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"Failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


async def retry_with_fixed_delay(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 4,
    delay: float = 1.0,
    exceptions: tuple = (Exception,),
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    label: str = "request",
) -> T:
    """
    Await ``func`` until it succeeds or ``max_attempts`` attempts have been made.

    Attempts are numbered from 1. The budget check runs before the counter is
    incremented, so ``func`` is awaited at most ``max_attempts`` times and the
    fixed ``delay`` is slept at most ``max_attempts - 1`` times.

    Args:
        func: Async callable to execute
        max_attempts: Total number of attempts, including the first one
        delay: Fixed delay between attempts (seconds)
        exceptions: Tuple of exceptions to catch and retry on
        sleep: Awaitable sleep used between attempts, asyncio.sleep by default
        label: Name of the operation used in log lines

    Returns:
        Result of the first successful call

    Raises:
        RetryExhausted: wrapping the last exception once the budget is spent
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    sleep = sleep or asyncio.sleep
    attempt = 1

    while True:
        try:
            return await func()
        except exceptions as e:
            if attempt == max_attempts:
                log_with_context(
                    logger, logging.ERROR,
                    f"[{attempt}] max retries reached for {label}: {e}",
                    attempt=attempt, label=label,
                )
                raise RetryExhausted(attempt, e) from e

            log_with_context(
                logger, logging.WARNING,
                f"[{attempt}] {label} failed: [{e}]. Retrying in {delay * 1000:.0f}ms",
                attempt=attempt, label=label,
            )

            await sleep(delay)
            attempt += 1
