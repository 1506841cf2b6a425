"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes credential lookup and provider defaults for `app.llm.service`
    and `app.llm.adapters`. Configuration is read once into an immutable
    `Settings` object and handed to the dispatcher at construction time.

Credential model:
    Each provider declares the environment fields it needs (`REQUIRED_FIELDS`).
    An unset or empty field is absent. Absence is a normal state that the probe
    reports and the adapters refuse to run with.

Determinism:
    Deterministic for a fixed process environment. `.env` values are loaded at
    import time via `load_dotenv()` and never override variables that are
    already set.
"""

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType

from dotenv import load_dotenv

from app.core.contracts import ProviderId

load_dotenv()

logger = logging.getLogger(__name__)


OPENAI_API_KEY = "OPENAI_API_KEY"
GOOGLE_API_KEY = "GOOGLE_API_KEY"
AZURE_OPENAI_KEY = "AZURE_OPENAI_KEY"
AZURE_OPENAI_ENDPOINT = "AZURE_OPENAI_ENDPOINT"
AZURE_OPENAI_DEPLOYMENT = "AZURE_OPENAI_DEPLOYMENT"

REQUIRED_FIELDS = MappingProxyType({
    ProviderId.CHATGPT: (OPENAI_API_KEY,),
    ProviderId.GEMINI: (GOOGLE_API_KEY,),
    ProviderId.COPILOT: (AZURE_OPENAI_KEY, AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_DEPLOYMENT),
})

DEFAULT_PROVIDER = ProviderId.CHATGPT
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_timeout(raw):
    """Parse `LLM_REQUEST_TIMEOUT`; unset or invalid means no timeout."""
    raw = _clean(raw)
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid LLM_REQUEST_TIMEOUT=%r", raw)
        return None
    return timeout if timeout > 0 else None


@dataclass(frozen=True)
class Settings:
    """Process-wide, read-only configuration.

    Attributes:
        secrets: Credential fields keyed by environment name; absent fields are
            omitted.
        default_provider: Provider used when a request names none.
        gemini_model: Model name interpolated into the Gemini endpoint.
        request_timeout: Optional transport timeout in seconds.
    """

    secrets: dict = field(default_factory=dict)
    default_provider: ProviderId = DEFAULT_PROVIDER
    gemini_model: str = DEFAULT_GEMINI_MODEL
    request_timeout: float | None = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from `environ` (defaults to `os.environ`).

        Edge cases:
            - Blank credential values are treated as absent.
            - Unknown `DEFAULT_PROVIDER` falls back to `chatgpt` with a warning.
        """
        env = os.environ if environ is None else environ

        secrets = {}
        for names in REQUIRED_FIELDS.values():
            for name in names:
                value = _clean(env.get(name))
                if value is not None:
                    secrets[name] = value

        default_provider = DEFAULT_PROVIDER
        raw_default = _clean(env.get("DEFAULT_PROVIDER"))
        if raw_default is not None:
            try:
                default_provider = ProviderId(raw_default)
            except ValueError:
                logger.warning(
                    "Unknown DEFAULT_PROVIDER=%r, using %s", raw_default, DEFAULT_PROVIDER.value
                )

        return cls(
            secrets=MappingProxyType(secrets),
            default_provider=default_provider,
            gemini_model=_clean(env.get("GEMINI_MODEL")) or DEFAULT_GEMINI_MODEL,
            request_timeout=_parse_timeout(env.get("LLM_REQUEST_TIMEOUT")),
        )

    def credentials_for(self, provider: ProviderId) -> dict:
        """Return the credential bag for `provider` (absent fields map to `None`)."""
        return {name: self.secrets.get(name) for name in REQUIRED_FIELDS[provider]}

    def missing_fields(self, provider: ProviderId) -> tuple:
        return tuple(
            name for name, value in self.credentials_for(provider).items() if not value
        )

    def is_configured(self, provider: ProviderId) -> bool:
        return not self.missing_fields(provider)


def list_available_providers(settings: Settings) -> list:
    """Return providers whose credential sets are complete.

    The result keeps `ProviderId` declaration order. An empty list means no
    provider is usable; turning that into a user-facing message is up to the
    caller. Never raises.
    """
    return [provider for provider in ProviderId if settings.is_configured(provider)]


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the cached process-wide settings, reading the environment once."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached settings so the next `get_settings` re-reads the env."""
    global _SETTINGS
    _SETTINGS = None
