"""Azure AD (Office 365) authenticator."""

import asyncio
import logging
import re
import time

import msal

from core.oauth2.exceptions import AuthenticationFailedError
from core.oauth2.models import AuthProvider, AuthResult
from core.oauth2.providers.msal_app import MsalAuthenticator

logger = logging.getLogger(__name__)

DEFAULT_AUTHORITY = "https://login.microsoftonline.com/common"
DEFAULT_SCOPES = ["https://onenote.com/Notes.ReadWrite.All"]

# Authorities issued by Azure AD (login.windows.net, login.microsoftonline.com)
O365_AUTHORITY_PATTERN = re.compile(r"^https://[^/]*\.(windows|microsoftonline)[^/]*\.(net|com)/[^/]+/$")


def is_o365_authority(authority: str) -> bool:
    return bool(O365_AUTHORITY_PATTERN.match(authority))


class O365Authenticator(MsalAuthenticator):
    """
    Sign-in for work or school accounts through Azure AD.

    Silent acquisition scans the msal cache for unexpired access tokens
    issued by an Azure AD authority, newest expiry first, rebinds the
    application to that token's authority and asks for a token silently.
    When nothing usable is cached the cache is cleared and the user is
    prompted to log in again. The display name is read from the ID token
    claims of the last result.
    """

    provider = AuthProvider.O365
    interactive_prompt = "login"

    def __init__(self, store, client_id: str, authority: str = DEFAULT_AUTHORITY,
                 scopes: list[str] | None = None, **kwargs):
        super().__init__(
            store,
            client_id=client_id,
            authority=authority,
            scopes=scopes or DEFAULT_SCOPES,
            **kwargs,
        )

    def _cached_candidates(self) -> list[dict]:
        """Unexpired Azure AD access tokens in the cache, latest expiry first."""
        now = int(time.time())
        candidates = []
        for item in self._token_cache.find(msal.TokenCache.CredentialType.ACCESS_TOKEN):
            try:
                expires_on = int(item.get("expires_on", 0))
            except (TypeError, ValueError):
                continue
            authority = f"https://{item.get('environment', '')}/{item.get('realm', '')}/"
            if expires_on > now and is_o365_authority(authority):
                candidates.append({**item, "authority": authority, "expires_on": expires_on})
        return sorted(candidates, key=lambda i: i["expires_on"], reverse=True)

    def _silent_from_cache(self) -> dict | None:
        candidates = self._cached_candidates()
        if not candidates:
            return None

        cached = candidates[0]
        app = self._rebind(cached["authority"])
        accounts = [
            a for a in app.get_accounts()
            if a.get("home_account_id") == cached.get("home_account_id")
        ]
        if not accounts:
            return None
        return app.acquire_token_silent(self.scopes, account=accounts[0])

    async def _acquire_silent(self) -> AuthResult:
        result = await asyncio.to_thread(self._silent_from_cache)
        if result is None:
            return AuthResult.failed(AuthenticationFailedError("No cached Azure AD credential"))
        return self._to_result(result, "Silent")

    async def _acquire_interactive(self) -> AuthResult:
        await self._clear_cached_credentials()
        return await super()._acquire_interactive()


__all__ = ["O365Authenticator", "DEFAULT_AUTHORITY", "DEFAULT_SCOPES", "is_o365_authority"]
