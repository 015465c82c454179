"""OAuth2-specific exceptions."""

from core.errors import AuthError
from core.types import ErrorCategory


class OAuth2Error(AuthError):
    """Base exception for OAuth2 operations."""

    pass


class AuthenticationFailedError(OAuth2Error):
    """Neither silent nor interactive acquisition produced a token."""

    pass


class TokenRefreshFailedError(OAuth2Error):
    """Token refresh failed; the previous token is kept."""

    pass


class InvalidConfigurationError(OAuth2Error):
    """Provider configuration is invalid."""

    category = ErrorCategory.PERMANENT


__all__ = [
    "OAuth2Error",
    "AuthenticationFailedError",
    "TokenRefreshFailedError",
    "InvalidConfigurationError",
]
