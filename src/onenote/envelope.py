"""Normalized result of one OneNote API call."""

from dataclasses import dataclass
from typing import Any

from core.errors import OneNoteError


@dataclass
class ApiResponseEnvelope:
    """
    Result of an API call.

    Attributes:
        status_code: HTTP status code, 0 if no response was obtained
        correlation_id: Value of the X-CorrelationId response header, or ""
        body: Raw response body text, on success and failure alike
        entity: Parsed payload; set only when the status matched the
            expected status and the body parsed. A list endpoint yields a
            list (possibly empty).
        expected_status: Success status the call was made with
        error: What went wrong, if anything (unexpected status, malformed
            body, authentication or network failure)
    """

    status_code: int
    correlation_id: str = ""
    body: str = ""
    entity: Any = None
    expected_status: int | None = None
    error: OneNoteError | None = None

    @property
    def ok(self) -> bool:
        return self.expected_status is not None and self.status_code == self.expected_status

    @property
    def has_entity(self) -> bool:
        return self.entity is not None

    def raise_for_status(self) -> "ApiResponseEnvelope":
        """Raise the recorded error, if any. Returns self for chaining."""
        if self.error is not None:
            raise self.error
        return self

    def __str__(self) -> str:
        return f"HTTP {self.status_code} (correlation id: {self.correlation_id or '-'})"


__all__ = ["ApiResponseEnvelope"]
