"""Context variables for structured logging."""

from contextvars import ContextVar
from typing import Dict, Optional

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_provider: ContextVar[str] = ContextVar("provider", default="")
_operation: ContextVar[str] = ContextVar("operation", default="")


def set_log_context(
    correlation_id: Optional[str] = None,
    provider: Optional[str] = None,
    operation: Optional[str] = None,
) -> None:
    if correlation_id is not None:
        _correlation_id.set(correlation_id)
    if provider is not None:
        _provider.set(provider)
    if operation is not None:
        _operation.set(operation)


def get_log_context() -> Dict[str, str]:
    return {
        "correlation_id": _correlation_id.get(),
        "provider": _provider.get(),
        "operation": _operation.get(),
    }


def clear_log_context() -> None:
    _correlation_id.set("")
    _provider.set("")
    _operation.set("")
