"""HTTP transport for provider requests.

Architectural role:
    Executes one POST per call and hands the status code and raw body back to
    the dispatcher. It does not interpret vendor payloads; that is the job of
    `app.llm.adapters`.

Model invocation flow:
    `service.GenerationDispatcher.generate` -> adapter `build_request` ->
    `HttpTransport.post(url, headers, body)` -> `TransportResponse`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once.

Timeout behavior:
    No timeout unless one is configured (`LLM_REQUEST_TIMEOUT`). A hung vendor
    call otherwise hangs the request.

Failure handling model:
    Non-2xx responses are returned, not raised. Connection-level failures
    propagate as `requests.exceptions.RequestException` for the dispatcher to
    classify.
"""

from dataclasses import dataclass
from typing import Protocol

import requests


@dataclass(frozen=True)
class TransportResponse:
    """Status code plus undecoded response text."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Minimal interface the dispatcher needs from an HTTP client."""

    def post(self, url: str, headers: dict, body: dict) -> TransportResponse:
        """Send `body` as JSON and return the vendor's status and body."""
        ...


class HttpTransport:
    """`requests`-backed transport."""

    def __init__(self, timeout: float | None = None, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session

    def post(self, url, headers, body):
        poster = self.session.post if self.session is not None else requests.post
        response = poster(url, headers=headers, json=body, timeout=self.timeout)
        response.encoding = response.encoding or "utf-8"
        return TransportResponse(status_code=response.status_code, text=response.text)
