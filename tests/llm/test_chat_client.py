"""Tests for the chat-completion client."""

from __future__ import annotations

import json
from urllib.error import URLError

import pytest

from readmegen.config import AIConfig
from readmegen.llm.client import NO_CONTENT, ChatClient, LLMError


def _config(**overrides) -> AIConfig:
    ai = AIConfig(api_key="secret", max_tokens=1000, request_timeout=30.0)
    ai.apply_provider("openai")
    for key, value in overrides.items():
        setattr(ai, key, value)
    return ai


def test_client_builds_request_from_config() -> None:
    captured = {}

    def fake_transport(request):
        captured["url"] = request.url
        captured["api_key"] = request.api_key
        captured["payload"] = request.payload()
        captured["timeout"] = request.timeout
        return {"choices": [{"message": {"content": "# Foo"}}]}

    client = ChatClient(_config(), transport=fake_transport)

    assert client.complete("Describe foo") == "# Foo"
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["api_key"] == "secret"
    assert captured["timeout"] == 30.0
    assert captured["payload"] == {
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Describe foo"}],
        "max_tokens": 1000,
    }


def test_client_joins_groq_endpoint() -> None:
    ai = AIConfig(api_key="k")
    ai.apply_provider("groq")

    assert ChatClient(ai, transport=lambda _: {}).url == "https://api.groq.com/openai/v1/chat/completions"


def test_client_returns_placeholder_without_content() -> None:
    client = ChatClient(_config(), transport=lambda _: {"choices": []})

    assert client.complete("x") == NO_CONTENT


def test_client_requires_model_and_endpoint() -> None:
    with pytest.raises(LLMError):
        ChatClient(AIConfig(api_key="k"))


def test_http_transport_posts_json(monkeypatch) -> None:
    captured = {}

    class FakeResponse:
        def read(self):
            return json.dumps({"choices": [{"message": {"content": "README body"}}]}).encode("utf-8")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    def fake_urlopen(request, timeout=None):
        captured["url"] = request.full_url
        captured["headers"] = {k.lower(): v for k, v in request.header_items()}
        captured["payload"] = json.loads(request.data.decode("utf-8"))
        captured["timeout"] = timeout
        return FakeResponse()

    monkeypatch.setattr("readmegen.llm.client.urlopen", fake_urlopen)

    result = ChatClient(_config(model="gpt-4")).complete("prompt text")

    assert result == "README body"
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"]["authorization"] == "Bearer secret"
    assert captured["headers"]["content-type"] == "application/json"
    assert captured["payload"]["model"] == "gpt-4"
    assert captured["timeout"] == 30.0


def test_http_transport_wraps_network_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise URLError("connection refused")

    monkeypatch.setattr("readmegen.llm.client.urlopen", fake_urlopen)

    with pytest.raises(LLMError, match="connection refused"):
        ChatClient(_config()).complete("prompt")
