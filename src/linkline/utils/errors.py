"""Error handling utilities for consistent error responses."""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    # Request errors
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    URL_REQUIRED = "URL_REQUIRED"

    # Upstream page errors
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NO_RESPONSE = "NO_RESPONSE"
    TIMEOUT = "TIMEOUT"
    REQUEST_SETUP = "REQUEST_SETUP"

    # Server errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """HTTP error response model."""

    error: str
    details: str | None = None
    code: ErrorCode | None = None
    request_id: str | None = None


# User-facing error messages by error code
USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Invalid request format",
    ErrorCode.VALIDATION_ERROR: "Request validation failed",
    ErrorCode.URL_REQUIRED: "URL is required",
    ErrorCode.UPSTREAM_ERROR: "Failed to fetch content: Server responded with an error",
    ErrorCode.NO_RESPONSE: "Failed to fetch content: No response from server",
    ErrorCode.TIMEOUT: "Failed to fetch content: No response from server",
    ErrorCode.REQUEST_SETUP: "Failed to fetch content: Error in request setup",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
}

# HTTP status returned for each code (UPSTREAM_ERROR mirrors the upstream status)
HTTP_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.URL_REQUIRED: 400,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.NO_RESPONSE: 500,
    ErrorCode.TIMEOUT: 500,
    ErrorCode.REQUEST_SETUP: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Default message for unknown errors
DEFAULT_USER_MESSAGE = "An unexpected error occurred"

# Maximum length for error details
MAX_ERROR_LENGTH = 500


def get_user_message(code: ErrorCode | None, default: str | None = None) -> str:
    """Get user-appropriate error message for an error code.

    Args:
        code: The error code.
        default: Default message if code not found.

    Returns:
        User-facing error message.
    """
    if code is None:
        return default or DEFAULT_USER_MESSAGE

    return USER_MESSAGES.get(code, default or DEFAULT_USER_MESSAGE)


def http_status_for(code: ErrorCode, upstream_status: int | None = None) -> int:
    """Get the HTTP status code to respond with for an error code.

    Args:
        code: The error code.
        upstream_status: Status returned by the fetched page, if any.

    Returns:
        HTTP status code.
    """
    if code == ErrorCode.UPSTREAM_ERROR and upstream_status is not None:
        return upstream_status

    return HTTP_STATUS_CODES.get(code, 500)


def truncate_error(error: str, max_length: int = MAX_ERROR_LENGTH) -> str:
    """Truncate error message if too long.

    Args:
        error: The error message.
        max_length: Maximum allowed length.

    Returns:
        Truncated error message.
    """
    if len(error) <= max_length:
        return error

    return error[: max_length - 3] + "..."


def create_error_response(
    code: ErrorCode,
    error: str | None = None,
    details: str | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Create a standardized error response.

    Args:
        code: The error code.
        error: Optional custom error message.
        details: Optional underlying error description.
        request_id: Optional request ID.

    Returns:
        ErrorResponse model.
    """
    message = error if error else get_user_message(code)
    return ErrorResponse(
        error=truncate_error(message),
        details=truncate_error(details) if details else None,
        code=code,
        request_id=request_id,
    )


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception to an error code.

    Args:
        exc: The exception to classify.

    Returns:
        Appropriate error code.
    """
    # Import here to avoid circular imports
    import httpx
    from pydantic import ValidationError

    # Validation errors
    if isinstance(exc, ValidationError):
        return ErrorCode.VALIDATION_ERROR

    # Non-2xx responses from the fetched page
    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCode.UPSTREAM_ERROR

    # Malformed URLs never reach the network
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
        return ErrorCode.REQUEST_SETUP

    # Timeout errors
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT

    # Request sent, nothing came back
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return ErrorCode.NO_RESPONSE

    # Redirect loops and undecodable bodies fail after the request was sent
    if isinstance(exc, httpx.RequestError):
        return ErrorCode.NO_RESPONSE

    # Default to internal error
    return ErrorCode.INTERNAL_ERROR


def log_error(
    exc: Exception,
    code: ErrorCode | None = None,
    request_id: str | None = None,
    **context: Any,
) -> None:
    """Log an error with context.

    Args:
        exc: The exception that occurred.
        code: Optional pre-classified error code.
        request_id: Optional request ID.
        **context: Additional context to include in log.
    """
    if code is None:
        code = classify_exception(exc)

    log_extra = {
        "error_code": code.value,
        "error_type": type(exc).__name__,
        "request_id": request_id,
        **context,
    }

    # Error level for upstream failures, exception level for internal errors
    if code == ErrorCode.INTERNAL_ERROR:
        logger.exception("Internal error occurred", extra=log_extra)
    else:
        logger.error(f"Request error: {exc}", extra=log_extra)
