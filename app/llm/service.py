"""Generation dispatch: validation, prompt composition, and provider calls.

Architectural role:
    Provides the single generation entrypoint used by the HTTP API and the CLI.
    Bridges prompt composition (`app.prompting`) to vendor adapters
    (`app.llm.adapters`) and the HTTP transport (`app.llm.client`).

Model call flow:
    request -> validate -> `compose_system_prompt` -> adapter by `ProviderId`
    -> credential check -> `build_request` -> one `transport.post` ->
    `extract_text` -> `GenerationResult`.

Failure mapping:
    - Missing/empty task or input, unknown provider -> client error.
    - Missing credential field -> configuration error (internal status).
    - Non-2xx vendor status -> upstream error, vendor body passed verbatim.
    - Non-JSON success body, transport exceptions, anything unexpected ->
      internal error with the underlying message.
    No exception escapes `generate`.

Concurrency:
    The dispatcher holds only immutable configuration, so one instance can serve
    concurrent requests. No retries, no fan-out, no fallback between providers.
"""

import json
import logging

import requests

from app.core.contracts import GenerationRequest, GenerationResult, ProviderId
from app.core.errors import ClientError, GenerationError, InternalError, UpstreamError
from app.llm.adapters import ADAPTERS, build_adapters
from app.llm.client import HttpTransport, Transport
from app.llm.provider_config import (
    DEFAULT_GEMINI_MODEL,
    Settings,
    get_settings,
    list_available_providers,
)
from app.prompting.prompt_builder import compose_system_prompt


logger = logging.getLogger(__name__)


def _require_text(value) -> str:
    if not isinstance(value, str) or not value:
        raise ClientError("task and input required")
    return value


class GenerationDispatcher:
    """Route generation requests to the configured vendor adapter.

    Args:
        settings: Immutable configuration; defaults to `get_settings()`.
        transport: HTTP client; defaults to `HttpTransport` using the configured
            timeout.
        adapters: Mapping of `ProviderId` to adapter; defaults to the shared
            `ADAPTERS` registry, rebuilt only when `GEMINI_MODEL` is overridden.
    """

    def __init__(self, settings: Settings | None = None, transport: Transport | None = None,
                 adapters=None):
        self.settings = settings or get_settings()
        self.transport = transport or HttpTransport(timeout=self.settings.request_timeout)
        if adapters is None:
            if self.settings.gemini_model == DEFAULT_GEMINI_MODEL:
                adapters = ADAPTERS
            else:
                adapters = build_adapters(gemini_model=self.settings.gemini_model)
        self.adapters = adapters

    def list_available_providers(self) -> list:
        return list_available_providers(self.settings)

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Fulfil one request and return a uniform result."""
        try:
            return GenerationResult.success(self._generate(request))
        except GenerationError as err:
            return GenerationResult.failure(err)
        except Exception as err:
            logger.exception("Unexpected generation failure")
            return GenerationResult.failure(InternalError(str(err) or type(err).__name__))

    dispatch = generate

    def _resolve_provider(self, raw) -> ProviderId:
        if raw is None:
            return self.settings.default_provider
        return ProviderId.parse(raw)

    def _generate(self, request: GenerationRequest) -> str:
        task = _require_text(request.task)
        user_input = _require_text(request.input)
        provider = self._resolve_provider(request.provider)

        adapter = self.adapters.get(provider)
        if adapter is None:
            raise ClientError("Unknown provider")

        logger.info(
            "Dispatching generation provider=%s task=%s mode=%s",
            provider.value, task, request.mode,
        )

        system_prompt = compose_system_prompt(task, request.mode)

        try:
            outbound = adapter.build_request(
                system_prompt, user_input, self.settings.credentials_for(provider)
            )
        except GenerationError as err:
            logger.error("Provider misconfigured: %s", err.message)
            raise

        try:
            response = self.transport.post(outbound.url, outbound.headers, outbound.body)
        except requests.exceptions.RequestException as err:
            logger.warning("Request to %s failed: %s", provider.value, type(err).__name__)
            raise InternalError(str(err) or type(err).__name__) from err

        if not response.ok:
            logger.warning(
                "Provider %s returned HTTP %s", provider.value, response.status_code
            )
            raise UpstreamError(provider.value, response.status_code, response.text)

        try:
            data = json.loads(response.text)
        except ValueError as err:
            raise InternalError(f"Invalid JSON from {provider.value}: {err}") from err

        return adapter.extract_text(data)


def generate(request: GenerationRequest, dispatcher: GenerationDispatcher | None = None):
    """Module-level convenience wrapper around `GenerationDispatcher.generate`."""
    return (dispatcher or GenerationDispatcher()).generate(request)
