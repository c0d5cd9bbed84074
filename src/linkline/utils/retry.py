"""Retry with exponential backoff for transient page fetch failures."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import httpx

from linkline.utils.errors import ErrorCode, classify_exception

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.5  # seconds
DEFAULT_MAX_DELAY = 8.0  # seconds

# Upstream statuses worth another attempt
RETRYABLE_STATUS_CODES = {
    408,  # Request Timeout
    429,  # Rate Limited
    500,  # Internal Server Error
    502,  # Bad Gateway
    503,  # Service Unavailable
    504,  # Gateway Timeout
}


class RetryError(Exception):
    """Error raised after all retry attempts are exhausted.

    Attributes:
        original_error: The last error that occurred.
        attempts: Number of attempts made.
    """

    def __init__(self, original_error: Exception, attempts: int):
        self.original_error = original_error
        self.attempts = attempts
        super().__init__(
            f"All {attempts} retry attempts exhausted. "
            f"Last error: {type(original_error).__name__}: {original_error}"
        )


def is_retryable_error(error: Exception) -> bool:
    """Determine if an error is retryable.

    Timeouts and connection failures are retryable, as are upstream
    responses with a status in RETRYABLE_STATUS_CODES.

    Args:
        error: The exception to check.

    Returns:
        True if the error is retryable, False otherwise.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRYABLE_STATUS_CODES

    if isinstance(error, (httpx.TooManyRedirects, httpx.DecodingError)):
        return False

    return classify_exception(error) in (ErrorCode.TIMEOUT, ErrorCode.NO_RESPONSE)


def calculate_backoff_delay(
    attempt: int,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
) -> float:
    """Calculate exponential backoff delay for a given attempt.

    Args:
        attempt: The current attempt number (0-indexed).
        base_delay: Base delay in seconds.
        max_delay: Maximum delay in seconds.

    Returns:
        Delay in seconds for this attempt.
    """
    delay = base_delay * (2**attempt)
    return min(delay, max_delay)


async def retry_with_backoff(
    func: Callable[P, Awaitable[T]],
    *args: P.args,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    **kwargs: P.kwargs,
) -> T:
    """Execute an async function with retry logic and exponential backoff.

    Args:
        func: The async function to execute.
        *args: Positional arguments to pass to the function.
        max_retries: Maximum number of attempts.
        base_delay: Base delay in seconds for exponential backoff.
        max_delay: Maximum delay in seconds.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        The result of the function call.

    Raises:
        RetryError: If all attempts fail with retryable errors.
        Exception: If a non-retryable error occurs.
    """
    last_error: Exception | None = None
    attempts = max(1, max_retries)

    for attempt in range(attempts):
        try:
            return await func(*args, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            last_error = e

            if not is_retryable_error(e):
                logger.debug(
                    f"Non-retryable error on attempt {attempt + 1}/{attempts}: "
                    f"{type(e).__name__}: {e}"
                )
                raise

            if attempt < attempts - 1:
                delay = calculate_backoff_delay(attempt, base_delay, max_delay)
                logger.warning(
                    f"Retryable error on attempt {attempt + 1}/{attempts}: "
                    f"{type(e).__name__}: {e}. Retrying in {delay:.1f}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.warning(
                    f"Final attempt {attempt + 1}/{attempts} failed: "
                    f"{type(e).__name__}: {e}"
                )

    assert last_error is not None
    raise RetryError(last_error, attempts)
