"""
Errors raised during video generation and the classifier that turns any
failure into a user facing status message.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

BAD_REQUEST_FALLBACK = "Please check your inputs and try again."
AUTH_ERROR_MESSAGE = "Authentication Error: Please add a valid API key to continue."
SERVER_ERROR_MESSAGE = (
    "Server Error: The service is temporarily unavailable. Please try again later."
)
NO_VIDEOS_MESSAGE = "No videos generated"


class VideoGenerationError(Exception):
    """Raised when video generation fails."""

    def __init__(self, message: str, error_code: str = None):
        self.error_code = error_code
        super().__init__(message)


class RemoteServiceError(VideoGenerationError):
    """
    Failure reported by the remote service.

    The message text is the JSON envelope ``{"error": {"code", "message"}}``
    so that it can be classified from its text alone.
    """

    def __init__(self, code: Any, message: Optional[str] = None, status: Optional[str] = None):
        self.code = code
        self.detail = message
        self.status = status
        payload = {"error": {"code": code, "message": message}}
        if status:
            payload["error"]["status"] = status
        super().__init__(json.dumps(payload), error_code=f"REMOTE_{code}")


class NoVideosGeneratedError(VideoGenerationError):
    def __init__(self):
        super().__init__(NO_VIDEOS_MESSAGE, error_code="NO_VIDEOS")


class PollTimeoutError(VideoGenerationError):
    """Raised when the poll loop hits its configured bound."""

    def __init__(self, operation_name: Optional[str], polls: int):
        self.operation_name = operation_name
        self.polls = polls
        super().__init__(
            f"Operation {operation_name} did not complete after {polls} status checks",
            error_code="POLL_TIMEOUT",
        )


class GenerationCancelledError(VideoGenerationError):
    def __init__(self, operation_name: Optional[str]):
        self.operation_name = operation_name
        super().__init__(f"Generation cancelled while waiting for {operation_name}", error_code="CANCELLED")


@dataclass(frozen=True)
class ClassifiedError:
    """User facing view of a failure."""
    display_message: str
    is_quota_or_auth_error: bool = False


def classify_error(exc: BaseException) -> ClassifiedError:
    """
    Classify a generation failure.

    The message text of the exception is parsed as JSON. When it holds an
    ``error`` object, its numeric ``code`` selects the message:

    - 400: "Bad Request: " plus the provided detail (or a generic hint)
    - 401/403: fixed authentication message, flagged as quota/auth
    - 429: empty message (the host shows its own quota notice), flagged
    - 500/503: fixed "temporarily unavailable" message
    - anything else: the provided message, or the raw text

    Text that is not JSON at all is shown verbatim.
    """
    raw_text = str(exc)

    try:
        detail = json.loads(raw_text)
    except (ValueError, TypeError):
        return ClassifiedError(display_message=raw_text)

    error = detail.get("error") if isinstance(detail, dict) else None
    if not isinstance(error, dict):
        error = {}
    code = error.get("code")
    message = error.get("message")

    if code == 400:
        return ClassifiedError(f"Bad Request: {message or BAD_REQUEST_FALLBACK}")
    if code in (401, 403):
        return ClassifiedError(AUTH_ERROR_MESSAGE, is_quota_or_auth_error=True)
    if code == 429:
        return ClassifiedError("", is_quota_or_auth_error=True)
    if code in (500, 503):
        return ClassifiedError(SERVER_ERROR_MESSAGE)

    return ClassifiedError(str(message) if message else raw_text)
