"""Tests for error handling utilities."""

import logging

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from linkline.utils.errors import (
    DEFAULT_USER_MESSAGE,
    ErrorCode,
    ErrorResponse,
    classify_exception,
    create_error_response,
    get_user_message,
    http_status_for,
    log_error,
    truncate_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_codes_are_strings(self):
        """Test error codes serialize to strings."""
        assert ErrorCode.URL_REQUIRED.value == "URL_REQUIRED"
        assert ErrorCode.UPSTREAM_ERROR.value == "UPSTREAM_ERROR"

    def test_every_code_has_message_and_status(self):
        """Test every code maps to a message and an HTTP status."""
        for code in ErrorCode:
            assert get_user_message(code) != DEFAULT_USER_MESSAGE or code == ErrorCode.INTERNAL_ERROR
            assert 400 <= http_status_for(code) < 600


class TestGetUserMessage:
    """Tests for get_user_message function."""

    def test_returns_message_for_known_code(self):
        """Test returns user message for known code."""
        assert get_user_message(ErrorCode.URL_REQUIRED) == "URL is required"

    def test_returns_default_for_none(self):
        """Test returns default for None code."""
        assert get_user_message(None) == DEFAULT_USER_MESSAGE

    def test_returns_custom_default(self):
        """Test returns custom default when provided."""
        assert get_user_message(None, default="Custom error") == "Custom error"


class TestHttpStatusFor:
    """Tests for http_status_for function."""

    def test_upstream_status_mirrored(self):
        """Test upstream errors reuse the upstream status."""
        assert http_status_for(ErrorCode.UPSTREAM_ERROR, 403) == 403

    def test_upstream_without_status(self):
        """Test upstream errors without a status fall back to 502."""
        assert http_status_for(ErrorCode.UPSTREAM_ERROR) == 502

    def test_fetch_failures_are_500(self):
        """Test fetch failures without a response use 500."""
        assert http_status_for(ErrorCode.NO_RESPONSE) == 500
        assert http_status_for(ErrorCode.TIMEOUT) == 500
        assert http_status_for(ErrorCode.REQUEST_SETUP) == 500

    def test_url_required_is_400(self):
        """Test missing URL is a client error."""
        assert http_status_for(ErrorCode.URL_REQUIRED) == 400


class TestTruncateError:
    """Tests for truncate_error function."""

    def test_short_message_unchanged(self):
        """Test short messages are unchanged."""
        assert truncate_error("Short error") == "Short error"

    def test_long_message_truncated(self):
        """Test long messages are truncated."""
        result = truncate_error("A" * 1000, max_length=100)
        assert len(result) == 100
        assert result.endswith("...")


class TestCreateErrorResponse:
    """Tests for create_error_response function."""

    def test_creates_response_with_code(self):
        """Test default message comes from the code."""
        response = create_error_response(ErrorCode.URL_REQUIRED)
        assert response.code == ErrorCode.URL_REQUIRED
        assert response.error == "URL is required"
        assert response.details is None

    def test_custom_error_and_details(self):
        """Test custom error and details are kept."""
        response = create_error_response(
            ErrorCode.UPSTREAM_ERROR,
            error="Failed to fetch content: Server responded with 404",
            details="Not Found",
            request_id="req-123",
        )
        assert response.error == "Failed to fetch content: Server responded with 404"
        assert response.details == "Not Found"
        assert response.request_id == "req-123"

    def test_long_details_truncated(self):
        """Test details are truncated."""
        response = create_error_response(ErrorCode.NO_RESPONSE, details="x" * 2000)
        assert len(response.details) == 500


class TestClassifyException:
    """Tests for classify_exception function."""

    def test_classifies_validation_error(self):
        """Test classifies ValidationError correctly."""

        class TestModel(BaseModel):
            field: int

        with pytest.raises(ValidationError) as exc_info:
            TestModel(field="not-an-int")  # type: ignore

        assert classify_exception(exc_info.value) == ErrorCode.VALIDATION_ERROR

    def test_classifies_status_error(self):
        """Test non-2xx responses are upstream errors."""
        request = httpx.Request("GET", "https://example.com")
        response = httpx.Response(404, request=request)
        exc = httpx.HTTPStatusError("Not found", request=request, response=response)
        assert classify_exception(exc) == ErrorCode.UPSTREAM_ERROR

    def test_classifies_timeout(self):
        """Test classifies timeout errors."""
        assert classify_exception(httpx.ReadTimeout("Timeout")) == ErrorCode.TIMEOUT
        assert classify_exception(TimeoutError()) == ErrorCode.TIMEOUT

    def test_classifies_connection_error(self):
        """Test classifies connection errors."""
        assert classify_exception(httpx.ConnectError("refused")) == ErrorCode.NO_RESPONSE
        assert classify_exception(ConnectionError("refused")) == ErrorCode.NO_RESPONSE

    def test_classifies_failed_exchanges_as_no_response(self):
        """Test redirect and decoding failures are not internal errors."""
        assert classify_exception(httpx.TooManyRedirects("loop")) == ErrorCode.NO_RESPONSE
        assert classify_exception(httpx.DecodingError("bad gzip")) == ErrorCode.NO_RESPONSE

    def test_classifies_setup_errors(self):
        """Test malformed URLs are request setup errors."""
        assert classify_exception(httpx.UnsupportedProtocol("no scheme")) == ErrorCode.REQUEST_SETUP
        assert classify_exception(httpx.InvalidURL("bad")) == ErrorCode.REQUEST_SETUP

    def test_classifies_unknown_as_internal(self):
        """Test classifies unknown exceptions as internal error."""
        assert classify_exception(RuntimeError("Something unexpected")) == ErrorCode.INTERNAL_ERROR


class TestLogError:
    """Tests for log_error function."""

    def test_logs_upstream_error_at_error_level(self, caplog):
        """Test classified errors are logged with their code."""
        with caplog.at_level(logging.ERROR, logger="linkline.utils.errors"):
            log_error(httpx.ConnectError("refused"), request_id="req-1")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_code == "NO_RESPONSE"
        assert record.request_id == "req-1"

    def test_logs_internal_error_with_traceback(self, caplog):
        """Test internal errors are logged via logger.exception."""
        with caplog.at_level(logging.ERROR, logger="linkline.utils.errors"):
            try:
                raise RuntimeError("boom")
            except RuntimeError as e:
                log_error(e)

        record = caplog.records[-1]
        assert record.error_code == "INTERNAL_ERROR"
        assert record.exc_info is not None


class TestErrorResponse:
    """Tests for ErrorResponse model."""

    def test_serialization(self):
        """Test error response serializes correctly."""
        response = ErrorResponse(
            error="Test error",
            code=ErrorCode.TIMEOUT,
            request_id="req-456",
        )
        data = response.model_dump(mode="json")
        assert data["error"] == "Test error"
        assert data["code"] == "TIMEOUT"
        assert data["request_id"] == "req-456"
        assert data["details"] is None

    def test_optional_fields(self):
        """Test optional fields can be None."""
        response = ErrorResponse(error="Test error")
        assert response.code is None
        assert response.request_id is None
