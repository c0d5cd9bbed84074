"""Utility functions for error handling and retry logic."""

from linkline.utils.errors import (
    ErrorCode,
    ErrorResponse,
    classify_exception,
    create_error_response,
    http_status_for,
)
from linkline.utils.retry import (
    RetryError,
    calculate_backoff_delay,
    is_retryable_error,
    retry_with_backoff,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "RetryError",
    "calculate_backoff_delay",
    "classify_exception",
    "create_error_response",
    "http_status_for",
    "is_retryable_error",
    "retry_with_backoff",
]
