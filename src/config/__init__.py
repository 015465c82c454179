"""Configuration loading for the OneNote client.

Configuration lives in a single YAML file (config/config.yaml by default, or
the path in ONENOTE_CONFIG).

Usage Examples
--------------

    >>> from config import load_config
    >>>
    >>> config = load_config()
    >>> config.auth_provider
    <AuthProvider.MICROSOFT_ACCOUNT: 'microsoft-account'>
    >>> config.api.api_route
    'https://www.onenote.com/api/v1.0/me/notes/'
"""

from config.config import (
    DEFAULT_CONFIG_FILE,
    ApiSettings,
    AppConfig,
    MicrosoftAccountSettings,
    O365Settings,
    load_config,
    load_yaml,
)

__all__ = [
    "AppConfig",
    "ApiSettings",
    "MicrosoftAccountSettings",
    "O365Settings",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_yaml",
]
