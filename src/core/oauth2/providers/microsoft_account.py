"""Microsoft Account (consumer) authenticator."""

import logging

import aiohttp

from core.oauth2.models import AuthProvider, TokenState
from core.oauth2.providers.msal_app import MsalAuthenticator

logger = logging.getLogger(__name__)

DEFAULT_AUTHORITY = "https://login.microsoftonline.com/consumers"
DEFAULT_SCOPES = ["https://onenote.com/Notes.ReadWrite"]

# Live Connect profile endpoint. Only accepts tokens issued for the legacy
# wl.* scopes, so it is opt-in for app registrations that still use them.
LIVE_ME_ENDPOINT = "https://apis.live.net/v5.0/me"


class MicrosoftAccountAuthenticator(MsalAuthenticator):
    """
    Delegated sign-in for personal Microsoft accounts.

    Silent acquisition uses the first account in the msal cache. The display
    name comes from the ID token claims. When ``me_endpoint`` is set (for
    example LIVE_ME_ENDPOINT together with the ``wl.signin wl.basic`` scopes)
    the name is fetched from that endpoint instead, passing the access token
    as a query credential.
    """

    provider = AuthProvider.MICROSOFT_ACCOUNT

    def __init__(self, store, client_id: str, authority: str = DEFAULT_AUTHORITY,
                 scopes: list[str] | None = None, me_endpoint: str | None = None, **kwargs):
        super().__init__(
            store,
            client_id=client_id,
            authority=authority,
            scopes=scopes or DEFAULT_SCOPES,
            **kwargs,
        )
        self.me_endpoint = me_endpoint or None

    async def _fetch_user_name(self, state: TokenState) -> str:
        if not self.me_endpoint:
            return self._claims_user_name()

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(
                self.me_endpoint,
                params={"access_token": state.access_token},
            ) as response:
                if response.status != 200:
                    logger.warning(
                        "Identity endpoint returned unexpected status",
                        extra={
                            "provider": self.provider.value,
                            "http_status": response.status,
                            "expected_status": 200,
                        },
                    )
                    return ""
                payload = await response.json(content_type=None)

        return (payload or {}).get("name") or ""


__all__ = ["MicrosoftAccountAuthenticator", "DEFAULT_AUTHORITY", "DEFAULT_SCOPES", "LIVE_ME_ENDPOINT"]
