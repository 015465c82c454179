"""Shared msal plumbing for public-client authenticators."""

import asyncio
import logging
from collections.abc import Callable

import msal

from core.oauth2.exceptions import (
    AuthenticationFailedError,
    InvalidConfigurationError,
    TokenRefreshFailedError,
)
from core.oauth2.models import AuthResult, TokenState
from core.oauth2.providers.base import BaseAuthenticator
from core.oauth2.store import TokenStore
from core.resilience import RetryConfig

logger = logging.getLogger(__name__)

INTERACTIVE_MODES = ("browser", "device_code")


def _result_error_message(result: dict | None) -> str:
    if not result:
        return "no result"
    return result.get("error_description") or result.get("error") or "unknown error"


class MsalAuthenticator(BaseAuthenticator):
    """
    Authenticator backed by an msal PublicClientApplication.

    msal is synchronous, so every call into it runs in a worker thread. The
    msal token cache is in-memory only and is shared across rebinds of the
    application to a different authority.
    """

    def __init__(
        self,
        store: TokenStore,
        client_id: str,
        authority: str,
        scopes: list[str],
        interactive_mode: str = "browser",
        timeout_seconds: float = 30.0,
        refresh_lookahead_seconds: float = 300,
        retry: RetryConfig | None = None,
        on_device_code: Callable[[str], None] | None = None,
    ):
        """
        Initialize msal-backed authenticator.

        Args:
            store: Token store owned by this provider
            client_id: Application (client) ID registered with the identity provider
            authority: Authority URL to sign in against
            scopes: Scopes to request
            interactive_mode: "browser" or "device_code"
            timeout_seconds: Network timeout for identity calls
            refresh_lookahead_seconds: Refresh window before expiry
            retry: Retry policy for token refresh
            on_device_code: Receives the device code prompt (default: print)

        Raises:
            InvalidConfigurationError: If client_id, scopes or mode are invalid
        """
        super().__init__(store, refresh_lookahead_seconds=refresh_lookahead_seconds, retry=retry)

        if not client_id:
            raise InvalidConfigurationError(f"client_id is required for {self.provider.value}")
        if not scopes:
            raise InvalidConfigurationError(f"At least one scope is required for {self.provider.value}")
        if interactive_mode not in INTERACTIVE_MODES:
            raise InvalidConfigurationError(
                f"interactive_mode must be one of {INTERACTIVE_MODES}, got '{interactive_mode}'"
            )

        self.client_id = client_id
        self.authority = authority
        self.scopes = list(scopes)
        self.interactive_mode = interactive_mode
        self.timeout_seconds = timeout_seconds
        self._on_device_code = on_device_code or (lambda message: print(message, flush=True))

        self._token_cache = msal.TokenCache()
        self._app: msal.PublicClientApplication | None = None
        self._id_token_claims: dict = {}

        logger.debug(
            f"Initialized {self.__class__.__name__}",
            extra={"provider": self.provider.value, "authority": authority},
        )

    # ------------------------------------------------------------------
    # msal application handling (sync, called from worker threads)
    # ------------------------------------------------------------------

    def _build_app(self, authority: str) -> msal.PublicClientApplication:
        return msal.PublicClientApplication(
            self.client_id,
            authority=authority,
            token_cache=self._token_cache,
            timeout=self.timeout_seconds,
        )

    def _get_app(self) -> msal.PublicClientApplication:
        if self._app is None:
            self._app = self._build_app(self.authority)
        return self._app

    def _rebind(self, authority: str) -> msal.PublicClientApplication:
        """Point the application at another authority, keeping the token cache."""
        logger.debug(
            "Rebinding to cached credential authority",
            extra={"provider": self.provider.value, "authority": authority},
        )
        self._app = self._build_app(authority)
        return self._app

    def _accounts(self) -> list[dict]:
        return self._get_app().get_accounts()

    def _to_result(self, result: dict | None, step: str) -> AuthResult:
        if result and "access_token" in result:
            self._remember_claims(result)
            return AuthResult.succeeded(TokenState.from_response(result))
        return AuthResult.failed(
            AuthenticationFailedError(
                f"{step} acquisition failed: {_result_error_message(result)}",
                context={"error": (result or {}).get("error")},
            )
        )

    def _remember_claims(self, result: dict) -> None:
        claims = result.get("id_token_claims")
        if claims:
            self._id_token_claims = dict(claims)

    def _claims_user_name(self) -> str:
        """Display name from the ID token: given + family name, else ``name``."""
        claims = self._id_token_claims
        given = claims.get("given_name", "")
        family = claims.get("family_name", "")
        if given or family:
            return f"{given} {family}".strip()
        return claims.get("name", "")

    def _silent_for_first_account(self) -> dict | None:
        app = self._get_app()
        accounts = app.get_accounts()
        if not accounts:
            return None
        return app.acquire_token_silent(self.scopes, account=accounts[0])

    def _interactive_sync(self, prompt: str | None) -> dict | None:
        app = self._get_app()
        if self.interactive_mode == "device_code":
            flow = app.initiate_device_flow(scopes=self.scopes)
            if "user_code" not in flow:
                return flow
            self._on_device_code(flow["message"])
            return app.acquire_token_by_device_flow(flow)
        return app.acquire_token_interactive(self.scopes, prompt=prompt)

    def _refresh_sync(self, state: TokenState) -> dict | None:
        app = self._get_app()
        if state.refresh_token:
            return app.acquire_token_by_refresh_token(state.refresh_token, self.scopes)

        accounts = app.get_accounts()
        if not accounts:
            return None
        return app.acquire_token_silent(self.scopes, account=accounts[0], force_refresh=True)

    def _remove_accounts_sync(self) -> int:
        if self._app is None:
            return 0
        accounts = self._app.get_accounts()
        for account in accounts:
            self._app.remove_account(account)
        return len(accounts)

    # ------------------------------------------------------------------
    # Hooks shared by msal providers
    # ------------------------------------------------------------------

    interactive_prompt: str | None = "select_account"

    async def _acquire_silent(self) -> AuthResult:
        result = await asyncio.to_thread(self._silent_for_first_account)
        return self._to_result(result, "Silent")

    async def _acquire_interactive(self) -> AuthResult:
        result = await asyncio.to_thread(self._interactive_sync, self.interactive_prompt)
        return self._to_result(result, "Interactive")

    async def _refresh(self, state: TokenState) -> TokenState:
        result = await asyncio.to_thread(self._refresh_sync, state)
        if not result or "access_token" not in result:
            raise TokenRefreshFailedError(
                f"Token refresh rejected: {_result_error_message(result)}",
                context={"error": (result or {}).get("error")},
            )
        self._remember_claims(result)
        return TokenState.from_response(result, previous=state)

    async def _clear_cached_credentials(self) -> None:
        removed = await asyncio.to_thread(self._remove_accounts_sync)
        self._id_token_claims = {}
        logger.debug(
            "Removed cached accounts",
            extra={"provider": self.provider.value, "entity_count": removed},
        )

    async def _fetch_user_name(self, state: TokenState) -> str:
        return self._claims_user_name()

    def _has_live_credentials(self) -> bool:
        if self._app is None:
            return False
        return bool(self._app.get_accounts())


__all__ = ["MsalAuthenticator", "INTERACTIVE_MODES"]
