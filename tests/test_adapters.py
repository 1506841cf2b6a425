from __future__ import annotations

import pytest

from app.core.contracts import ProviderId
from app.core.errors import ConfigurationError
from app.llm.adapters import (
    ADAPTERS,
    AZURE_API_VERSION,
    ChatGPTAdapter,
    CopilotAdapter,
    GeminiAdapter,
    ProviderAdapter,
    build_adapters,
)


def test_registry_has_one_adapter_per_provider() -> None:
    assert set(ADAPTERS) == set(ProviderId)
    for provider, adapter in ADAPTERS.items():
        assert adapter.provider is provider


def test_chatgpt_request_shape(full_settings) -> None:
    request = ChatGPTAdapter().build_request(
        "SYSTEM", "Joseph", full_settings.credentials_for(ProviderId.CHATGPT)
    )

    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["Content-Type"] == "application/json"
    assert request.body == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "SYSTEM"},
            {"role": "user", "content": "Joseph"},
        ],
        "temperature": 0.85,
        "presence_penalty": 0.2,
        "frequency_penalty": 0.2,
    }


def test_gemini_request_merges_system_into_user_turn(full_settings) -> None:
    request = GeminiAdapter().build_request(
        "SYSTEM", "Psalm 23", full_settings.credentials_for(ProviderId.GEMINI)
    )

    assert request.url == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.5-flash:generateContent"
    )
    assert request.headers["x-goog-api-key"] == "g-test"
    assert "Authorization" not in request.headers
    assert request.body == {
        "contents": [{"role": "user", "parts": [{"text": "SYSTEM\n\nUser:\nPsalm 23"}]}],
        "generationConfig": {"temperature": 0.7},
    }


def test_gemini_model_is_part_of_endpoint() -> None:
    request = build_adapters(gemini_model="gemini-flash-latest")[ProviderId.GEMINI].build_request(
        "S", "U", {"GOOGLE_API_KEY": "k"}
    )

    assert "/models/gemini-flash-latest:generateContent" in request.url


def test_copilot_request_is_deployment_routed(full_settings) -> None:
    request = CopilotAdapter().build_request(
        "SYSTEM", "Ruth", full_settings.credentials_for(ProviderId.COPILOT)
    )

    assert request.url == (
        "https://example.openai.azure.com/openai/deployments/sermons/chat/completions"
        f"?api-version={AZURE_API_VERSION}"
    )
    assert request.headers["api-key"] == "az-test"
    assert "model" not in request.body
    assert request.body["messages"][0] == {"role": "system", "content": "SYSTEM"}
    assert request.body["temperature"] == 0.85


@pytest.mark.parametrize(
    ("adapter", "credentials", "missing"),
    [
        (ChatGPTAdapter(), {}, ("OPENAI_API_KEY",)),
        (ChatGPTAdapter(), {"OPENAI_API_KEY": ""}, ("OPENAI_API_KEY",)),
        (GeminiAdapter(), None, ("GOOGLE_API_KEY",)),
        (
            CopilotAdapter(),
            {"AZURE_OPENAI_KEY": "k", "AZURE_OPENAI_ENDPOINT": "https://x"},
            ("AZURE_OPENAI_DEPLOYMENT",),
        ),
        (
            CopilotAdapter(),
            {"AZURE_OPENAI_DEPLOYMENT": "d"},
            ("AZURE_OPENAI_KEY", "AZURE_OPENAI_ENDPOINT"),
        ),
    ],
)
def test_partial_credentials_are_rejected(adapter, credentials, missing) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        adapter.build_request("S", "U", credentials)

    assert exc_info.value.missing == missing
    assert exc_info.value.status_hint == "internal"
    assert exc_info.value.kind == "configuration"


@pytest.mark.parametrize("adapter", [ChatGPTAdapter(), CopilotAdapter()])
@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"choices": [{"message": {"content": "Amen"}}]}, "Amen"),
        ({"choices": []}, ""),
        ({"choices": [{"message": {"content": None}}]}, ""),
        ({"choices": [{}]}, ""),
        ({}, ""),
        ({"choices": "oops"}, ""),
    ],
)
def test_chat_text_extraction(adapter, data, expected) -> None:
    assert adapter.extract_text(data) == expected


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"candidates": [{"content": {"parts": [{"text": "Grace "}, {"text": "abounds"}]}}]},
         "Grace abounds"),
        ({"candidates": [{"content": {"parts": [{"text": "A"}, {}, {"text": "B"}]}}]}, "AB"),
        ({"candidates": []}, ""),
        ({"candidates": [{"finishReason": "SAFETY"}]}, ""),
        ({}, ""),
    ],
)
def test_gemini_text_extraction(data, expected) -> None:
    assert GeminiAdapter().extract_text(data) == expected


def test_incomplete_adapter_cannot_be_instantiated() -> None:
    class _NoExtraction(ProviderAdapter):
        provider = ProviderId.CHATGPT

        def _build(self, system_prompt, user_input, credentials):
            return None

    with pytest.raises(TypeError):
        _NoExtraction()


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ([{"type": "text", "text": "Grace "}, {"type": "text", "text": "abounds"}],
         "Grace abounds"),
        ([{"type": "image_url", "image_url": {"url": "x"}}], ""),
        ({"text": "nested"}, ""),
        (42, ""),
    ],
)
def test_non_string_message_content(content, expected) -> None:
    data = {"choices": [{"message": {"content": content}}]}

    assert ChatGPTAdapter().extract_text(data) == expected
