"""
Thread-safe in-memory token store.

One store exists per provider for the lifetime of the process. Nothing is
written to disk, so a restart requires signing in again.
"""

import logging
import threading

from core.oauth2.models import TokenState

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Holds the current TokenState for one provider.

    State is replaced wholesale on every set; readers never observe a
    partially updated token.

    Example:
        >>> store = TokenStore()
        >>> store.get().is_empty
        True
        >>> store.set(TokenState(access_token="eyJ0eXAi..."))
        >>> store.get().access_token
        'eyJ0eXAi...'
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._state = TokenState.empty()
        self._lock = threading.Lock()

    def get(self) -> TokenState:
        with self._lock:
            return self._state

    def set(self, state: TokenState) -> None:
        with self._lock:
            self._state = state
        logger.debug(
            "Token state updated",
            extra={
                "provider": self.name or None,
                "expires_at": state.expires_at.isoformat() if state.expires_at else None,
            },
        )

    def clear(self) -> None:
        with self._lock:
            self._state = TokenState.empty()
        logger.debug("Token state cleared", extra={"provider": self.name or None})


__all__ = ["TokenStore"]
