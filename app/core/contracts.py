"""Request/result data contracts shared by the API, CLI, and dispatcher.

Architectural role:
    Defines the inbound generation request and the uniform result returned for
    every request, success or failure.

Determinism:
    Purely structural. `GenerationRequest.from_payload` is deterministic for a
    given payload.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.errors import CLIENT, ClientError, GenerationError


DEFAULT_MODE = "default"


class ProviderId(str, Enum):
    """Supported vendor integrations, in probe/display order."""

    CHATGPT = "chatgpt"
    GEMINI = "gemini"
    COPILOT = "copilot"

    @classmethod
    def parse(cls, value) -> "ProviderId":
        """Resolve a raw provider id, raising `ClientError` when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ClientError("Unknown provider") from None


@dataclass(frozen=True)
class GenerationRequest:
    """One content-generation request.

    Attributes:
        task: Task identifier selecting the prompt contract.
        input: User text. For phase 2 of the sermon workflow this is the approved
            outline.
        mode: Workflow stage; only meaningful for `sermonCrafter`.
        provider: Raw provider id, or `None` to use the configured default.
            Kept raw so that an unknown id is reported by the dispatcher as a
            client error result rather than raised at construction.
    """

    task: str
    input: str
    mode: str = DEFAULT_MODE
    provider: Any = None

    @classmethod
    def from_payload(cls, payload) -> "GenerationRequest":
        """Build a request from a decoded JSON body.

        Missing `mode` becomes `"default"`. Field validation is left to the
        dispatcher so that every path reports failures the same way.
        """
        if not isinstance(payload, dict):
            raise ClientError("Request body must be a JSON object")

        mode = payload.get("mode")
        return cls(
            task=payload.get("task"),
            input=payload.get("input"),
            mode=DEFAULT_MODE if mode is None else mode,
            provider=payload.get("provider"),
        )


@dataclass(frozen=True)
class GenerationResult:
    """Uniform outcome of `generate`.

    Exactly one shape is populated: `ok=True` with `output` (possibly `""`), or
    `ok=False` with `error`, `status_hint` and `error_kind`.
    """

    ok: bool
    output: str | None = None
    error: str | None = None
    status_hint: str | None = None
    error_kind: str | None = None

    @classmethod
    def success(cls, output: str | None) -> "GenerationResult":
        return cls(ok=True, output=output or "")

    @classmethod
    def failure(cls, err: GenerationError) -> "GenerationResult":
        return cls(
            ok=False,
            error=err.message,
            status_hint=err.status_hint,
            error_kind=err.kind,
        )

    @property
    def is_client_error(self) -> bool:
        return not self.ok and self.status_hint == CLIENT

    def to_dict(self) -> dict:
        """Return the wire shape used by the HTTP API."""
        if self.ok:
            return {"ok": True, "output": self.output}
        return {"ok": False, "error": self.error}
