"""
Resilience patterns module.

Components:
    - RetryConfig: Exponential backoff configuration
    - @with_retry_async decorator: Retry with jitter
    - call_with_retry: Same policy applied to a callable with a runtime config
"""

from .retry import (
    AUTH_RETRY,
    DEFAULT_RETRY,
    RetryConfig,
    call_with_retry,
    with_retry_async,
)

__all__ = [
    "RetryConfig",
    "with_retry_async",
    "call_with_retry",
    "DEFAULT_RETRY",
    "AUTH_RETRY",
]
