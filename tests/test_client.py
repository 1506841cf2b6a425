from __future__ import annotations

from app.llm import client
from app.llm.client import HttpTransport, TransportResponse


class _FakeResponse:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        self.encoding = None


def test_http_transport_posts_json_once(monkeypatch) -> None:
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return _FakeResponse(503, "unavailable")

    monkeypatch.setattr(client.requests, "post", fake_post)

    response = HttpTransport(timeout=12.5).post("https://vendor", {"a": "b"}, {"x": 1})

    assert response == TransportResponse(status_code=503, text="unavailable")
    assert not response.ok
    assert calls == [
        {"url": "https://vendor", "headers": {"a": "b"}, "json": {"x": 1}, "timeout": 12.5}
    ]


def test_http_transport_defaults_to_no_timeout(monkeypatch) -> None:
    seen = {}

    def fake_post(url, headers=None, json=None, timeout="unset"):
        seen["timeout"] = timeout
        return _FakeResponse(200, "{}")

    monkeypatch.setattr(client.requests, "post", fake_post)

    assert HttpTransport().post("https://vendor", {}, {}).ok
    assert seen["timeout"] is None
