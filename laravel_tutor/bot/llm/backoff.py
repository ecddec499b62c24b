import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
INITIAL_DELAY_MS = 1000


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    label: str,
    *,
    max_attempts: int = MAX_ATTEMPTS,
    initial_delay_ms: int = INITIAL_DELAY_MS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run an async operation, retrying with exponential backoff.

    Waits initial_delay_ms * 2**k before retry k (1s, then 2s by default).
    Every failure is retried the same way. When the last attempt fails, its
    exception is re-raised as is.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        label: Operation name for the logs
        max_attempts: Total number of attempts, including the first one
        initial_delay_ms: Delay before the first retry
        sleep: Awaitable sleep, replaced in tests

    Returns:
        Result of the first successful attempt
    """
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as e:
            logger.warning("Attempt %d/%d for %s failed: %s", attempt + 1, max_attempts, label, e)
            if attempt == max_attempts - 1:
                logger.error("All %d attempts for %s failed", max_attempts, label)
                raise
            delay_ms = initial_delay_ms * 2 ** attempt
            logger.info("Retrying %s in %.1f seconds...", label, delay_ms / 1000)
            await sleep(delay_ms / 1000)

    # max_attempts < 1: nothing was attempted
    raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
