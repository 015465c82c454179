"""OneNote client configuration from YAML file.

Loads from config/config.yaml with all settings in one place:
- Provider selection and API route (v1.0 or beta)
- Microsoft Account and Office 365 app registrations
- Token refresh window and retry policy
- Logging options

Environment variables ARE supported using ${VAR_NAME} syntax in YAML files.
ONENOTE_CONFIG, ONENOTE_AUTH_PROVIDER and ONENOTE_USE_BETA override the file.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core.oauth2.exceptions import InvalidConfigurationError
from core.oauth2.models import AuthProvider
from core.oauth2.providers.azure_ad import DEFAULT_AUTHORITY as O365_AUTHORITY
from core.oauth2.providers.azure_ad import DEFAULT_SCOPES as O365_SCOPES
from core.oauth2.providers.base import DEFAULT_REFRESH_LOOKAHEAD_SECONDS
from core.oauth2.providers.microsoft_account import DEFAULT_AUTHORITY as MSA_AUTHORITY
from core.oauth2.providers.microsoft_account import DEFAULT_SCOPES as MSA_SCOPES
from core.oauth2.providers.msal_app import INTERACTIVE_MODES
from core.resilience import RetryConfig

# Configure module logger
logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        # Support both ${VAR} and ${VAR:-default} syntax
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _as_scopes(value: Any, default: List[str]) -> List[str]:
    if not value:
        return list(default)
    if isinstance(value, str):
        return value.split()
    return [str(v) for v in value]


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge overlay into base dict."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


# Default config file: config/config.yaml in src/ directory
DEFAULT_CONFIG_FILE = Path(__file__).parent / "config.yaml"

API_BASE_URL = "https://www.onenote.com/api"


@dataclass
class ApiSettings:
    """OneNote REST endpoint settings."""

    base_url: str = API_BASE_URL
    use_beta: bool = False
    timeout_seconds: float = 30.0

    @property
    def version(self) -> str:
        return "beta" if self.use_beta else "v1.0"

    @property
    def api_route(self) -> str:
        """Route prefix for every resource, e.g. https://www.onenote.com/api/v1.0/me/notes/"""
        return f"{self.base_url.rstrip('/')}/{self.version}/me/notes/"


@dataclass
class MicrosoftAccountSettings:
    client_id: str = ""
    authority: str = MSA_AUTHORITY
    scopes: List[str] = field(default_factory=lambda: list(MSA_SCOPES))
    interactive_mode: str = "browser"
    # Profile endpoint for the display name; empty reads the ID token claims
    me_endpoint: str = ""


@dataclass
class O365Settings:
    client_id: str = ""
    authority: str = O365_AUTHORITY
    scopes: List[str] = field(default_factory=lambda: list(O365_SCOPES))
    interactive_mode: str = "browser"


@dataclass
class AppConfig:
    """OneNote client configuration.

    Configuration structure:
        onenote:
          auth_provider: microsoft-account | o365
          refresh_lookahead_seconds: 300
          api: {base_url, use_beta, timeout_seconds}
          microsoft_account: {client_id, authority, scopes, interactive_mode, me_endpoint}
          o365: {client_id, authority, scopes, interactive_mode}
          retry: {max_attempts, base_delay, max_delay}
          logging: {...}            # keyword arguments for setup_logging
    """

    auth_provider: AuthProvider = AuthProvider.MICROSOFT_ACCOUNT
    api: ApiSettings = field(default_factory=ApiSettings)
    microsoft_account: MicrosoftAccountSettings = field(default_factory=MicrosoftAccountSettings)
    o365: O365Settings = field(default_factory=O365Settings)
    retry: RetryConfig = field(default_factory=RetryConfig)
    refresh_lookahead_seconds: float = DEFAULT_REFRESH_LOOKAHEAD_SECONDS
    logging: Dict[str, Any] = field(default_factory=dict)

    def provider_settings(self, provider: AuthProvider) -> MicrosoftAccountSettings | O365Settings:
        if provider == AuthProvider.O365:
            return self.o365
        return self.microsoft_account

    def validate(self) -> None:
        """Validate configuration for correctness and constraints.

        Only the selected provider must carry a client id; the other may be
        left unconfigured.
        """
        selected = self.provider_settings(self.auth_provider)
        if not selected.client_id:
            raise InvalidConfigurationError(
                f"client_id is required for the selected provider '{self.auth_provider.value}'"
            )

        for name, settings in (("microsoft_account", self.microsoft_account), ("o365", self.o365)):
            if settings.interactive_mode not in INTERACTIVE_MODES:
                raise InvalidConfigurationError(
                    f"{name}: interactive_mode must be one of {list(INTERACTIVE_MODES)}, "
                    f"got '{settings.interactive_mode}'"
                )
            if not settings.scopes:
                raise InvalidConfigurationError(f"{name}: at least one scope is required")

        if self.api.timeout_seconds <= 0:
            raise InvalidConfigurationError(
                f"api: timeout_seconds must be > 0, got {self.api.timeout_seconds}"
            )
        if self.refresh_lookahead_seconds < 0:
            raise InvalidConfigurationError(
                f"refresh_lookahead_seconds must be >= 0, got {self.refresh_lookahead_seconds}"
            )
        if self.retry.max_attempts < 1:
            raise InvalidConfigurationError(
                f"retry: max_attempts must be >= 1, got {self.retry.max_attempts}"
            )


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> AppConfig:
    """Load OneNote client configuration from config.yaml file.

    Resolution order for the file: explicit argument, then ONENOTE_CONFIG,
    then the bundled config/config.yaml. A missing file yields defaults.

    Raises:
        InvalidConfigurationError: If the provider name is unknown or
            required settings are missing
    """
    if config_path is None:
        env_path = os.getenv("ONENOTE_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_FILE
    config_path = Path(config_path)

    if config_path.exists():
        logger.info(f"Loading configuration from file: {config_path}")
    else:
        logger.warning(f"Configuration file not found, using defaults: {config_path}")

    yaml_data = _expand_env_vars(load_yaml(config_path))
    onenote = yaml_data.get("onenote", yaml_data)

    env_overrides: Dict[str, Any] = {}
    if os.getenv("ONENOTE_AUTH_PROVIDER"):
        env_overrides["auth_provider"] = os.getenv("ONENOTE_AUTH_PROVIDER")
    if os.getenv("ONENOTE_USE_BETA") is not None:
        env_overrides["api"] = {"use_beta": os.getenv("ONENOTE_USE_BETA")}
    onenote = _deep_merge(onenote, env_overrides)

    # Explicit overrides (CLI flags) win over environment and file
    if overrides:
        logger.debug(f"Applying overrides: {list(overrides.keys())}")
        onenote = _deep_merge(onenote, overrides)

    api = onenote.get("api", {}) or {}
    msa = onenote.get("microsoft_account", {}) or {}
    o365 = onenote.get("o365", {}) or {}
    retry = onenote.get("retry", {}) or {}

    provider_name = onenote.get("auth_provider") or AuthProvider.MICROSOFT_ACCOUNT.value
    try:
        auth_provider = AuthProvider.parse(provider_name)
    except ValueError as e:
        raise InvalidConfigurationError(str(e), cause=e)

    config = AppConfig(
        auth_provider=auth_provider,
        api=ApiSettings(
            base_url=api.get("base_url") or API_BASE_URL,
            use_beta=_as_bool(api.get("use_beta", False)),
            timeout_seconds=float(api.get("timeout_seconds", 30)),
        ),
        microsoft_account=MicrosoftAccountSettings(
            client_id=msa.get("client_id", "") or "",
            authority=msa.get("authority") or MSA_AUTHORITY,
            scopes=_as_scopes(msa.get("scopes"), MSA_SCOPES),
            interactive_mode=msa.get("interactive_mode", "browser"),
            me_endpoint=msa.get("me_endpoint", "") or "",
        ),
        o365=O365Settings(
            client_id=o365.get("client_id", "") or "",
            authority=o365.get("authority") or O365_AUTHORITY,
            scopes=_as_scopes(o365.get("scopes"), O365_SCOPES),
            interactive_mode=o365.get("interactive_mode", "browser"),
        ),
        retry=RetryConfig(
            max_attempts=retry.get("max_attempts", 3),
            base_delay=retry.get("base_delay", 1.0),
            max_delay=retry.get("max_delay", 30.0),
        ),
        refresh_lookahead_seconds=float(
            onenote.get("refresh_lookahead_seconds", DEFAULT_REFRESH_LOOKAHEAD_SECONDS)
        ),
        logging=onenote.get("logging", {}) or {},
    )

    logger.debug(f"Configuration loaded successfully:")
    logger.debug(f"  - Auth provider: {config.auth_provider.value}")
    logger.debug(f"  - API route: {config.api.api_route}")

    config.validate()
    return config


__all__ = [
    "AppConfig",
    "ApiSettings",
    "MicrosoftAccountSettings",
    "O365Settings",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_yaml",
]
