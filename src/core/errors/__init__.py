"""
Error classification and exception hierarchy.

Provides:
- ErrorCategory enum for classifying errors
- OneNoteError hierarchy for typed exceptions
- Classification utilities for retry decisions
"""

from core.errors.exceptions import (
    AuthError,
    # Enums
    ErrorCategory,
    # Base classes
    OneNoteError,
    PermanentError,
    ThrottlingError,
    TransientError,
    # Classification utilities
    classify_exception,
    classify_http_status,
    wrap_exception,
)

__all__ = [
    # Enums
    "ErrorCategory",
    # Base classes
    "OneNoteError",
    "AuthError",
    "TransientError",
    "PermanentError",
    # Transient errors
    "ThrottlingError",
    # Classification utilities
    "classify_http_status",
    "classify_exception",
    "wrap_exception",
]
