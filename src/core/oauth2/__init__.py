"""
Token lifecycle for the OneNote API.

One authenticator per identity provider, each owning a TokenStore, behind an
AuthFacade that dispatches on the AuthProvider selector.

Basic Usage:
    from config import load_config
    from core.oauth2 import AuthProvider, build_auth_facade

    facade = build_auth_facade(load_config())

    # Silent when possible, prompts otherwise; refreshes near expiry
    token = await facade.get_auth_token(AuthProvider.MICROSOFT_ACCOUNT)
    if not token:
        ...  # authentication failed, see get_auth_result() for the error

    name = await facade.get_user_name(AuthProvider.MICROSOFT_ACCOUNT)
    await facade.sign_out(AuthProvider.MICROSOFT_ACCOUNT)

Explicit results:
    result = await facade.get_auth_result(AuthProvider.O365)
    if result.ok:
        headers = {"Authorization": f"Bearer {result.token}"}
    else:
        logger.warning("Sign-in failed: %s", result.error)
"""

from core.oauth2.exceptions import (
    AuthenticationFailedError,
    InvalidConfigurationError,
    OAuth2Error,
    TokenRefreshFailedError,
)
from core.oauth2.facade import AuthFacade, build_auth_facade
from core.oauth2.models import AuthProvider, AuthResult, TokenState
from core.oauth2.providers import (
    BaseAuthenticator,
    MicrosoftAccountAuthenticator,
    MsalAuthenticator,
    O365Authenticator,
)
from core.oauth2.providers.base import DEFAULT_REFRESH_LOOKAHEAD_SECONDS
from core.oauth2.store import TokenStore

__all__ = [
    # Facade
    "AuthFacade",
    "build_auth_facade",
    # Models
    "AuthProvider",
    "AuthResult",
    "TokenState",
    "TokenStore",
    # Authenticators
    "BaseAuthenticator",
    "MsalAuthenticator",
    "MicrosoftAccountAuthenticator",
    "O365Authenticator",
    "DEFAULT_REFRESH_LOOKAHEAD_SECONDS",
    # Exceptions
    "OAuth2Error",
    "AuthenticationFailedError",
    "TokenRefreshFailedError",
    "InvalidConfigurationError",
]
