"""Token lifecycle data models."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from core.oauth2.exceptions import OAuth2Error


class AuthProvider(str, Enum):
    """Identity provider selector. Chosen once per session."""

    MICROSOFT_ACCOUNT = "microsoft-account"
    O365 = "o365"

    @classmethod
    def parse(cls, value: "str | AuthProvider") -> "AuthProvider":
        """
        Parse a provider name.

        Accepts the enum values as well as the spellings used in older
        settings files ("MicrosoftAccount", "O365", "microsoft_account").

        Raises:
            ValueError: If the name is not a known provider
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        if normalized == "microsoftaccount":
            normalized = cls.MICROSOFT_ACCOUNT.value
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Unknown auth provider '{value}'. "
            f"Expected one of: {[m.value for m in cls]}"
        )


@dataclass(frozen=True)
class TokenState:
    """
    Authentication state held for one provider.

    Attributes:
        access_token: Current bearer token; empty means not authenticated
        expires_at: UTC expiry instant, None when the provider does not track it
        refresh_token: Credential used to mint a new access token without a prompt
    """

    access_token: str = ""
    expires_at: datetime | None = None
    refresh_token: str = ""

    @classmethod
    def empty(cls) -> "TokenState":
        return cls()

    @classmethod
    def from_response(cls, response: dict, previous: "TokenState | None" = None) -> "TokenState":
        """
        Create state from a token endpoint (or msal) result dict.

        Args:
            response: Result containing access_token and optionally
                expires_in / refresh_token
            previous: Prior state; its refresh token is kept when the
                response does not carry a new one

        Returns:
            TokenState instance
        """
        expires_in = response.get("expires_in")
        expires_at = None
        if expires_in is not None:
            expires_at = datetime.now(UTC) + timedelta(seconds=int(expires_in))

        refresh_token = response.get("refresh_token") or ""
        if not refresh_token and previous is not None:
            refresh_token = previous.refresh_token

        return cls(
            access_token=response.get("access_token") or "",
            expires_at=expires_at,
            refresh_token=refresh_token,
        )

    @property
    def is_empty(self) -> bool:
        return not self.access_token

    def expires_within(self, seconds: float) -> bool:
        """
        Check if the token expires within the given window.

        Tokens without a tracked expiry never report as expiring.
        """
        if self.expires_at is None:
            return False
        return datetime.now(UTC) + timedelta(seconds=seconds) > self.expires_at

    @property
    def remaining_lifetime(self) -> timedelta | None:
        """Get remaining time before token expires."""
        if self.expires_at is None:
            return None
        return self.expires_at - datetime.now(UTC)


@dataclass(frozen=True)
class AuthResult:
    """
    Outcome of one acquisition step.

    Exactly one of ``state`` and ``error`` is set.
    """

    state: TokenState | None = None
    error: OAuth2Error | None = None

    @classmethod
    def succeeded(cls, state: TokenState) -> "AuthResult":
        return cls(state=state)

    @classmethod
    def failed(cls, error: OAuth2Error) -> "AuthResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.state is not None and not self.state.is_empty

    @property
    def token(self) -> str:
        """Bearer token, or empty string on failure."""
        return self.state.access_token if self.ok else ""


__all__ = ["AuthProvider", "TokenState", "AuthResult"]
