"""
Tests for failure classification.

Run with:
    python -m pytest tests/test_error_classifier.py -v
"""

import json
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.video_generation.errors import (
    AUTH_ERROR_MESSAGE,
    BAD_REQUEST_FALLBACK,
    SERVER_ERROR_MESSAGE,
    NoVideosGeneratedError,
    PollTimeoutError,
    RemoteServiceError,
    classify_error,
)


def failure(code=None, message=None) -> Exception:
    """An exception whose text is the service's JSON error envelope."""
    error = {}
    if code is not None:
        error["code"] = code
    if message is not None:
        error["message"] = message
    return Exception(json.dumps({"error": error}))


class TestStructuredErrors:
    """Errors whose message text carries {"error": {"code", "message"}}."""

    @pytest.mark.parametrize("code", [401, 403])
    def test_auth_errors(self, code):
        result = classify_error(failure(code, "API key not valid"))
        assert result.display_message == AUTH_ERROR_MESSAGE
        assert result.is_quota_or_auth_error is True

    def test_quota_error_has_empty_message(self):
        result = classify_error(failure(429, "Resource has been exhausted"))
        assert result.display_message == ""
        assert result.is_quota_or_auth_error is True

    def test_bad_request_with_detail(self):
        result = classify_error(failure(400, "X"))
        assert result.display_message == "Bad Request: X"
        assert result.is_quota_or_auth_error is False

    def test_bad_request_without_detail(self):
        result = classify_error(failure(400))
        assert result.display_message == f"Bad Request: {BAD_REQUEST_FALLBACK}"

    def test_bad_request_with_empty_detail(self):
        result = classify_error(failure(400, ""))
        assert result.display_message == f"Bad Request: {BAD_REQUEST_FALLBACK}"

    @pytest.mark.parametrize("code", [500, 503])
    def test_server_errors(self, code):
        result = classify_error(failure(code, "backend exploded"))
        assert result.display_message == SERVER_ERROR_MESSAGE
        assert result.is_quota_or_auth_error is False

    def test_other_code_uses_provided_message(self):
        result = classify_error(failure(404, "Model not found"))
        assert result.display_message == "Model not found"
        assert result.is_quota_or_auth_error is False

    def test_other_code_without_message_uses_raw_text(self):
        exc = failure(418)
        result = classify_error(exc)
        assert result.display_message == str(exc)

    def test_string_code_is_not_a_known_code(self):
        result = classify_error(failure("401", "spelled as text"))
        assert result.display_message == "spelled as text"
        assert result.is_quota_or_auth_error is False

    def test_remote_service_error_round_trips(self):
        result = classify_error(RemoteServiceError(403, "Permission denied"))
        assert result.display_message == AUTH_ERROR_MESSAGE
        assert result.is_quota_or_auth_error is True


class TestUnstructuredErrors:
    """Errors that are not the JSON envelope."""

    def test_unparseable_text_is_verbatim(self):
        result = classify_error(Exception("boom"))
        assert result.display_message == "boom"
        assert result.is_quota_or_auth_error is False

    def test_json_without_error_object(self):
        result = classify_error(Exception('{"status": "bad"}'))
        assert result.display_message == '{"status": "bad"}'

    def test_json_scalar(self):
        result = classify_error(Exception("42"))
        assert result.display_message == "42"

    def test_no_videos(self):
        result = classify_error(NoVideosGeneratedError())
        assert result.display_message == "No videos generated"
        assert result.is_quota_or_auth_error is False

    def test_poll_timeout(self):
        result = classify_error(PollTimeoutError("operations/abc", 10))
        assert "operations/abc" in result.display_message
        assert "10" in result.display_message
