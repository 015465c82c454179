"""Auth facade: one entry point dispatching to the selected provider."""

import logging
from collections.abc import Mapping
from typing import Any

from core.oauth2.models import AuthProvider, AuthResult
from core.oauth2.providers.azure_ad import O365Authenticator
from core.oauth2.providers.base import BaseAuthenticator
from core.oauth2.providers.microsoft_account import MicrosoftAccountAuthenticator
from core.oauth2.store import TokenStore

logger = logging.getLogger(__name__)


class AuthFacade:
    """
    Dispatches token operations to the authenticator for a provider.

    Holds no state of its own beyond the provider mapping, which is fixed at
    construction.

    Usage:
        facade = build_auth_facade(config)
        token = await facade.get_auth_token(AuthProvider.O365)
        headers = {"Authorization": f"Bearer {token}"}
    """

    def __init__(self, authenticators: Mapping[AuthProvider, BaseAuthenticator]):
        self._authenticators = dict(authenticators)

    @property
    def providers(self) -> list[AuthProvider]:
        return list(self._authenticators)

    def authenticator(self, provider: AuthProvider | str) -> BaseAuthenticator:
        """
        Get the authenticator for a provider.

        Raises:
            KeyError: If no authenticator is configured for the provider
        """
        provider = AuthProvider.parse(provider)
        if provider not in self._authenticators:
            raise KeyError(
                f"Provider '{provider.value}' not configured. "
                f"Available: {[p.value for p in self._authenticators]}"
            )
        return self._authenticators[provider]

    async def get_auth_token(self, provider: AuthProvider | str) -> str:
        return await self.authenticator(provider).get_auth_token()

    async def get_auth_result(self, provider: AuthProvider | str) -> AuthResult:
        return await self.authenticator(provider).get_auth_result()

    async def sign_out(self, provider: AuthProvider | str) -> None:
        await self.authenticator(provider).sign_out()

    def is_signed_in(self, provider: AuthProvider | str) -> bool:
        return self.authenticator(provider).is_signed_in()

    async def get_user_name(self, provider: AuthProvider | str) -> str:
        return await self.authenticator(provider).get_user_name()


def build_auth_facade(config: Any) -> AuthFacade:
    """
    Build a facade with one authenticator and one token store per provider.

    Providers without a client id are left out; the selected provider is
    guaranteed to have one by config validation.

    Args:
        config: AppConfig with microsoft_account, o365, retry,
            api.timeout_seconds and refresh_lookahead_seconds

    Returns:
        AuthFacade covering every configured provider
    """
    common = {
        "refresh_lookahead_seconds": config.refresh_lookahead_seconds,
        "retry": config.retry,
        "timeout_seconds": config.api.timeout_seconds,
    }

    authenticators: dict[AuthProvider, BaseAuthenticator] = {}
    for provider, authenticator_class, settings, extra in (
        (
            AuthProvider.MICROSOFT_ACCOUNT,
            MicrosoftAccountAuthenticator,
            config.microsoft_account,
            {"me_endpoint": config.microsoft_account.me_endpoint},
        ),
        (AuthProvider.O365, O365Authenticator, config.o365, {}),
    ):
        if not settings.client_id:
            logger.debug("Provider not configured, skipping", extra={"provider": provider.value})
            continue
        authenticators[provider] = authenticator_class(
            TokenStore(provider.value),
            client_id=settings.client_id,
            authority=settings.authority,
            scopes=settings.scopes,
            interactive_mode=settings.interactive_mode,
            **common,
            **extra,
        )

    logger.debug("Built auth facade", extra={"entity_count": len(authenticators)})
    return AuthFacade(authenticators)


__all__ = ["AuthFacade", "build_auth_facade"]
