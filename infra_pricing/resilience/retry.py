"""
Async retry with exponential backoff for transient upstream failures.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    max_retries: int,
    backoff_factor: float,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    operation_name: str = "operation",
) -> T:
    """
    Await operation, retrying on the listed exceptions.

    Sleeps backoff_factor * 2**attempt between attempts. The last error is re-raised once
    max_retries further attempts have failed. asyncio.CancelledError always propagates.

    Args:
        operation: Zero-argument coroutine factory
        max_retries: Retries after the first attempt
        backoff_factor: Base delay in seconds
        retry_on: Exception types considered transient
        operation_name: Label used in log messages

    Returns:
        The operation's result
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except retry_on as error:
            if attempt >= max_retries:
                logger.error("%s failed after %d attempts: %s", operation_name, attempt + 1, error)
                raise
            delay = backoff_factor * (2 ** attempt)
            logger.warning(
                "%s failed (attempt %d/%d), retrying in %.2fs: %s",
                operation_name,
                attempt + 1,
                max_retries + 1,
                delay,
                error,
            )
            await asyncio.sleep(delay)
            attempt += 1
