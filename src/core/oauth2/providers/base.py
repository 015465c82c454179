"""Base authenticator: the token lifecycle shared by every provider."""

import asyncio
import logging
from abc import ABC, abstractmethod

from core.errors import OneNoteError
from core.logging import log_exception
from core.oauth2.exceptions import (
    AuthenticationFailedError,
    OAuth2Error,
    TokenRefreshFailedError,
)
from core.oauth2.models import AuthProvider, AuthResult, TokenState
from core.oauth2.store import TokenStore
from core.resilience import AUTH_RETRY, RetryConfig, call_with_retry

logger = logging.getLogger(__name__)

# Refresh tokens that expire within this window (5 minutes)
DEFAULT_REFRESH_LOOKAHEAD_SECONDS = 300


class BaseAuthenticator(ABC):
    """
    Abstract base class for provider authenticators.

    Implements the shared acquisition algorithm:

    1. Reuse the stored token when one exists.
    2. Otherwise try silent (cache based) acquisition.
    3. If that yields nothing, fall back to interactive sign-in.
    4. Before returning, refresh the token if it expires within the
       lookahead window. A failed refresh keeps the stale token; a sign-out
       that lands while waiting to refresh fails the call with no token.

    Subclasses supply the provider-specific steps through the ``_acquire_*``,
    ``_refresh``, ``_fetch_user_name`` and ``_clear_cached_credentials`` hooks.
    Acquisition and refresh are single-flight per authenticator.
    """

    provider: AuthProvider

    def __init__(
        self,
        store: TokenStore,
        refresh_lookahead_seconds: float = DEFAULT_REFRESH_LOOKAHEAD_SECONDS,
        retry: RetryConfig | None = None,
    ):
        """
        Initialize authenticator.

        Args:
            store: Token store owned by this provider
            refresh_lookahead_seconds: Refresh when the token expires within
                this many seconds (default: 300s)
            retry: Retry policy for token refresh (default: AUTH_RETRY)
        """
        self.store = store
        self.refresh_lookahead_seconds = refresh_lookahead_seconds
        self.retry = retry or AUTH_RETRY
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Provider hooks
    # ------------------------------------------------------------------

    @abstractmethod
    async def _acquire_silent(self) -> AuthResult:
        """Acquire a token from cached credentials without prompting."""
        pass

    @abstractmethod
    async def _acquire_interactive(self) -> AuthResult:
        """Acquire a token by prompting the user."""
        pass

    @abstractmethod
    async def _refresh(self, state: TokenState) -> TokenState:
        """
        Mint a new token from the current state.

        Raises:
            TokenRefreshFailedError: If the identity provider rejects the refresh
        """
        pass

    @abstractmethod
    async def _fetch_user_name(self, state: TokenState) -> str:
        pass

    @abstractmethod
    async def _clear_cached_credentials(self) -> None:
        pass

    def _has_live_credentials(self) -> bool:
        """True if the underlying identity library still holds an account."""
        return True

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    async def get_auth_token(self) -> str:
        """
        Get a bearer token, signing in or refreshing as needed.

        Returns:
            Access token, or empty string if authentication failed
        """
        return (await self.get_auth_result()).token

    async def get_auth_result(self) -> AuthResult:
        """
        Get a bearer token as an explicit result.

        Returns:
            AuthResult with the token state, or with an
            AuthenticationFailedError when no token could be obtained
        """
        state = self.store.get()

        if state.is_empty:
            async with self._lock:
                state = self.store.get()
                if state.is_empty:
                    result = await self._sign_in()
                    if not result.ok:
                        return result
                    state = result.state
                    self.store.set(state)

        if state.expires_within(self.refresh_lookahead_seconds):
            state = await self._refresh_if_needed(state)
            if state is None:
                error = AuthenticationFailedError(
                    f"Signed out of {self.provider.value} during token refresh"
                )
                logger.info(
                    "Signed out while waiting to refresh, dropping token",
                    extra={"provider": self.provider.value},
                )
                return AuthResult.failed(error)
        else:
            remaining = state.remaining_lifetime
            logger.debug(
                "Using stored token",
                extra={
                    "provider": self.provider.value,
                    "remaining_seconds": remaining.total_seconds() if remaining else None,
                },
            )

        return AuthResult.succeeded(state)

    async def sign_out(self) -> None:
        """Forget cached credentials and empty the store. No-op when signed out."""
        async with self._lock:
            try:
                await self._clear_cached_credentials()
            except Exception as e:
                log_exception(
                    logger,
                    e,
                    "Failed to clear cached credentials",
                    level=logging.WARNING,
                    include_traceback=False,
                    provider=self.provider.value,
                )
            self.store.clear()

        logger.info("Signed out", extra={"provider": self.provider.value})

    def is_signed_in(self) -> bool:
        return not self.store.get().is_empty and self._has_live_credentials()

    async def get_user_name(self) -> str:
        """
        Get the display name for the signed-in user.

        Returns:
            Display name, or empty string if signed out or the lookup failed
        """
        state = self.store.get()
        if state.is_empty:
            return ""

        try:
            return await self._fetch_user_name(state) or ""
        except Exception as e:
            log_exception(
                logger,
                e,
                "User name lookup failed",
                level=logging.WARNING,
                include_traceback=False,
                provider=self.provider.value,
            )
            return ""

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _attempt(self, step: str, hook) -> AuthResult:
        """Run an acquisition hook, turning raised errors into a failed result."""
        try:
            return await hook()
        except OAuth2Error as e:
            return AuthResult.failed(e)
        except Exception as e:
            return AuthResult.failed(
                AuthenticationFailedError(
                    f"{step} acquisition failed for {self.provider.value}",
                    cause=e,
                )
            )

    async def _sign_in(self) -> AuthResult:
        result = await self._attempt("Silent", self._acquire_silent)
        if result.ok:
            logger.info("Acquired token silently", extra={"provider": self.provider.value})
            return result

        logger.debug(
            "Silent acquisition unavailable, prompting user",
            extra={
                "provider": self.provider.value,
                "error_message": str(result.error) if result.error else None,
            },
        )

        result = await self._attempt("Interactive", self._acquire_interactive)
        if result.ok:
            logger.info(
                "Acquired token interactively",
                extra={"provider": self.provider.value, "interactive": True},
            )
            return result

        error = result.error or AuthenticationFailedError(
            f"No token returned for {self.provider.value}"
        )
        if not isinstance(error, AuthenticationFailedError):
            error = AuthenticationFailedError(str(error), cause=error)
        log_exception(
            logger,
            error,
            "Authentication failed",
            include_traceback=False,
            provider=self.provider.value,
        )
        return AuthResult.failed(error)

    async def _refresh_if_needed(self, stale: TokenState) -> TokenState | None:
        """Refresh under the lock. Returns None if signed out meanwhile."""
        async with self._lock:
            current = self.store.get()
            # Signed out while we waited
            if current.is_empty:
                return None
            # Another coroutine already refreshed
            if current != stale and not current.expires_within(self.refresh_lookahead_seconds):
                return current

            try:
                refreshed = await call_with_retry(self._refresh, current, config=self.retry)
            except OneNoteError as e:
                error = e if isinstance(e, TokenRefreshFailedError) else TokenRefreshFailedError(
                    f"Token refresh failed for {self.provider.value}", cause=e
                )
                log_exception(
                    logger,
                    error,
                    "Token refresh failed, keeping current token",
                    level=logging.WARNING,
                    include_traceback=False,
                    provider=self.provider.value,
                )
                return current

            if refreshed.is_empty:
                logger.warning(
                    "Token refresh returned no token, keeping current token",
                    extra={"provider": self.provider.value},
                )
                return current

            self.store.set(refreshed)
            logger.info(
                "Token refreshed",
                extra={
                    "provider": self.provider.value,
                    "expires_at": refreshed.expires_at.isoformat() if refreshed.expires_at else None,
                },
            )
            return refreshed


__all__ = ["BaseAuthenticator", "DEFAULT_REFRESH_LOOKAHEAD_SECONDS"]
