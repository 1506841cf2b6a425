"""Vendor request/response adapters.

Architectural role:
    Each adapter knows one vendor wire protocol: how to shape the outbound HTTP
    request from a system prompt and user input, and where the generated text
    lives in the vendor's JSON response. Adapters do no I/O; the dispatcher owns
    the single network call.

Provider handling:
    - chatgpt (OpenAI chat completions): bearer auth, system + user messages.
    - gemini (Google generateContent): `x-goog-api-key`, no native system role,
      so system and user text are merged into one user turn.
    - copilot (Azure OpenAI deployment): `api-key`, endpoint built from the
      configured base URL, deployment, and a fixed API version.

Credential handling:
    `build_request` checks the full credential set first and raises
    `ConfigurationError` before any request is constructed.

Text extraction:
    Absent paths, nulls, and empty arrays resolve to `""`. A completion with no
    text is a valid (empty) result, not an error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType

from app.core.contracts import ProviderId
from app.core.errors import ConfigurationError
from app.llm.provider_config import (
    AZURE_OPENAI_DEPLOYMENT,
    AZURE_OPENAI_ENDPOINT,
    AZURE_OPENAI_KEY,
    DEFAULT_GEMINI_MODEL,
    GOOGLE_API_KEY,
    OPENAI_API_KEY,
    REQUIRED_FIELDS,
)


OPENAI_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL = "gpt-4o-mini"

GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

AZURE_API_VERSION = "2024-06-01"
AZURE_URL_TEMPLATE = (
    "{endpoint}/openai/deployments/{deployment}/chat/completions"
    "?api-version={api_version}"
)

# Favour varied, less repetitive prose for the chat-style providers.
CHAT_SAMPLING = MappingProxyType({
    "temperature": 0.85,
    "presence_penalty": 0.2,
    "frequency_penalty": 0.2,
})
GEMINI_TEMPERATURE = 0.7


@dataclass(frozen=True)
class OutboundRequest:
    """Vendor-specific HTTP POST description."""

    url: str
    headers: dict = field(default_factory=dict)
    body: dict = field(default_factory=dict)


def _dig(data, *path):
    """Follow dict keys / list indexes, returning `None` on any miss."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        else:
            if step not in current:
                return None
        current = current[step]
    return current


def _as_text(value) -> str:
    """Coerce message content to text.

    List-form content (`[{"type": "text", "text": ...}]`) is joined; any other
    non-string value yields `""`.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "".join(
            part["text"] for part in value
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
    return ""


def _chat_messages(system_prompt: str, user_input: str) -> list:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_input},
    ]


class ProviderAdapter(ABC):
    """Shared shape of a vendor integration.

    Subclasses set `provider` and implement `_build` and `extract_text`.
    """

    provider: ProviderId

    @property
    def required_fields(self) -> tuple:
        return REQUIRED_FIELDS[self.provider]

    def check_credentials(self, credentials) -> dict:
        """Return the credential bag or raise `ConfigurationError` naming gaps."""
        credentials = credentials or {}
        missing = [name for name in self.required_fields if not credentials.get(name)]
        if missing:
            raise ConfigurationError(self.provider.value, missing)
        return credentials

    def build_request(self, system_prompt: str, user_input: str, credentials) -> OutboundRequest:
        credentials = self.check_credentials(credentials)
        return self._build(system_prompt, user_input, credentials)

    @abstractmethod
    def _build(self, system_prompt, user_input, credentials) -> OutboundRequest:
        """Shape the vendor request from a checked credential bag."""

    @abstractmethod
    def extract_text(self, data) -> str:
        """Return the generated text from a decoded vendor response."""


class ChatGPTAdapter(ProviderAdapter):
    """OpenAI chat-completions protocol."""

    provider = ProviderId.CHATGPT

    def _build(self, system_prompt, user_input, credentials):
        return OutboundRequest(
            url=OPENAI_URL,
            headers={
                "Authorization": f"Bearer {credentials[OPENAI_API_KEY]}",
                "Content-Type": "application/json",
            },
            body={
                "model": OPENAI_MODEL,
                "messages": _chat_messages(system_prompt, user_input),
                **CHAT_SAMPLING,
            },
        )

    def extract_text(self, data):
        return _as_text(_dig(data, "choices", 0, "message", "content"))


class GeminiAdapter(ProviderAdapter):
    """Google generateContent protocol (single user turn)."""

    provider = ProviderId.GEMINI

    def __init__(self, model: str = DEFAULT_GEMINI_MODEL):
        self.model = model

    def _build(self, system_prompt, user_input, credentials):
        return OutboundRequest(
            url=GEMINI_URL_TEMPLATE.format(model=self.model),
            headers={
                "x-goog-api-key": credentials[GOOGLE_API_KEY],
                "Content-Type": "application/json",
            },
            body={
                "contents": [
                    {
                        "role": "user",
                        "parts": [{"text": f"{system_prompt}\n\nUser:\n{user_input}"}],
                    }
                ],
                "generationConfig": {"temperature": GEMINI_TEMPERATURE},
            },
        )

    def extract_text(self, data):
        parts = _dig(data, "candidates", 0, "content", "parts")
        if not isinstance(parts, list):
            return ""
        return "".join(_as_text(_dig(part, "text")) for part in parts)


class CopilotAdapter(ProviderAdapter):
    """Azure OpenAI deployment-routed chat protocol."""

    provider = ProviderId.COPILOT

    def _build(self, system_prompt, user_input, credentials):
        url = AZURE_URL_TEMPLATE.format(
            endpoint=credentials[AZURE_OPENAI_ENDPOINT].rstrip("/"),
            deployment=credentials[AZURE_OPENAI_DEPLOYMENT],
            api_version=AZURE_API_VERSION,
        )
        return OutboundRequest(
            url=url,
            headers={
                "api-key": credentials[AZURE_OPENAI_KEY],
                "Content-Type": "application/json",
            },
            body={
                "messages": _chat_messages(system_prompt, user_input),
                **CHAT_SAMPLING,
            },
        )

    def extract_text(self, data):
        return _as_text(_dig(data, "choices", 0, "message", "content"))


def build_adapters(gemini_model: str = DEFAULT_GEMINI_MODEL) -> dict:
    """Return one adapter per `ProviderId`."""
    return {
        ProviderId.CHATGPT: ChatGPTAdapter(),
        ProviderId.GEMINI: GeminiAdapter(model=gemini_model),
        ProviderId.COPILOT: CopilotAdapter(),
    }


ADAPTERS = MappingProxyType(build_adapters())
