import asyncio
from functools import wraps

import httpx

from repeater_los.domain.exceptions import RateLimitException, TransientAPIException
from repeater_los.logging_config import get_logger

logger = get_logger(__name__)

RETRYABLE_EXCEPTIONS = (
    RateLimitException,
    TransientAPIException,
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.ProxyError,
    asyncio.TimeoutError,
)


def async_retry(max_retries=5, backoff_factor=0.5, initial_timeout=10.0, max_timeout=30.0):
    """
    Decorator for retrying async requests with exponential backoff.

    Retries rate limiting, transient server errors and network failures.
    Authentication and malformed-response errors propagate immediately.
    The wrapped function receives the timeout for the current attempt as
    the ``timeout`` keyword argument.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                timeout = min(initial_timeout * (2**attempt), max_timeout)
                kwargs["timeout"] = timeout
                logger.debug(
                    f"Attempt {attempt + 1}/{max_retries} with timeout {timeout:.1f}s for {func.__name__}"
                )
                try:
                    return await func(*args, **kwargs)
                except RETRYABLE_EXCEPTIONS as e:
                    error_type = type(e).__name__
                    if attempt == max_retries - 1:
                        logger.error(
                            f"All {max_retries} retry attempts for {func.__name__} failed. "
                            f"Last error: {error_type}: {e}"
                        )
                        raise
                    delay = backoff_factor * (2**attempt)
                    logger.warning(
                        f"{error_type} in {func.__name__}: {e}. "
                        f"Retrying in {delay:.2f}s (attempt {attempt + 1}/{max_retries})..."
                    )
                    await asyncio.sleep(delay)
            raise ValueError("max_retries must be positive")

        return wrapper

    return decorator
