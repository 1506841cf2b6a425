from __future__ import annotations

import json

import pytest

from app.llm.client import TransportResponse
from app.llm.provider_config import Settings


FULL_ENV = {
    "OPENAI_API_KEY": "sk-test",
    "GOOGLE_API_KEY": "g-test",
    "AZURE_OPENAI_KEY": "az-test",
    "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com/",
    "AZURE_OPENAI_DEPLOYMENT": "sermons",
}


class StubTransport:
    """Records every POST and replays a canned response."""

    def __init__(self, status_code: int = 200, body=None, exc: Exception | None = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.exc = exc
        self.calls: list[dict] = []

    def post(self, url, headers, body):
        self.calls.append({"url": url, "headers": headers, "body": body})
        if self.exc is not None:
            raise self.exc
        text = self.body if isinstance(self.body, str) else json.dumps(self.body)
        return TransportResponse(status_code=self.status_code, text=text)


@pytest.fixture
def full_settings() -> Settings:
    return Settings.from_env(FULL_ENV)


@pytest.fixture
def empty_settings() -> Settings:
    return Settings.from_env({})


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport(body={"choices": [{"message": {"content": "Grace and peace."}}]})


@pytest.fixture
def make_transport():
    return StubTransport
