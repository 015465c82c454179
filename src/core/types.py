"""
Core types shared across modules.

Keeps the error classification enum in one place so every module compares
the same enum members.
"""

from enum import Enum


class ErrorCategory(Enum):
    """
    Classification of error types for handling decisions.

    Categories:
        TRANSIENT: Temporary failures that should retry with backoff
                   (e.g., network timeouts, 429/503 responses)
        AUTH: Authentication failures requiring credential refresh
              (e.g., 401 responses, expired tokens)
        PERMANENT: Non-retriable failures that won't succeed on retry
                   (e.g., 404, malformed bodies, configuration issues)
        UNKNOWN: Unclassified errors, may retry conservatively
    """

    TRANSIENT = "transient"
    AUTH = "auth"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


__all__ = ["ErrorCategory"]
