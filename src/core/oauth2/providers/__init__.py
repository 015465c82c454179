"""Provider authenticator implementations."""

from core.oauth2.providers.azure_ad import O365Authenticator
from core.oauth2.providers.base import BaseAuthenticator
from core.oauth2.providers.microsoft_account import MicrosoftAccountAuthenticator
from core.oauth2.providers.msal_app import MsalAuthenticator

__all__ = [
    "BaseAuthenticator",
    "MsalAuthenticator",
    "MicrosoftAccountAuthenticator",
    "O365Authenticator",
]
