"""OneNote API response errors.

These are recorded on the response envelope rather than raised; callers
branch on ``status_code`` or call ``envelope.raise_for_status()``.
"""

from core.errors import OneNoteError
from core.errors.exceptions import classify_http_status
from core.types import ErrorCategory


class OneNoteApiError(OneNoteError):
    """Base class for errors tied to one API response."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        correlation_id: str = "",
        body: str = "",
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.body = body


class UnexpectedStatusError(OneNoteApiError):
    """Response status did not match the expected success status."""

    def __init__(self, message: str, status_code: int = 0, expected_status: int = 0, **kwargs):
        super().__init__(message, status_code=status_code, **kwargs)
        self.expected_status = expected_status
        self.category = classify_http_status(status_code)


class MalformedResponseBodyError(OneNoteApiError):
    """Body could not be parsed into the expected shape on a success status."""

    category = ErrorCategory.PERMANENT


__all__ = ["OneNoteApiError", "UnexpectedStatusError", "MalformedResponseBodyError"]
