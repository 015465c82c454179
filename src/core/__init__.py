"""
Core library: infrastructure shared by the OneNote client.

Modules:
    oauth2      - Microsoft Account and Office 365 sign-in, token lifecycle
    resilience  - Retry with exponential backoff and jitter
    logging     - Structured JSON logging with correlation ids
    errors      - Error classification and exception hierarchy
"""

from .types import ErrorCategory

__version__ = "0.1.0"

__all__ = [
    "ErrorCategory",
]
