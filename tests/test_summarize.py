"""Tests for summarization providers and the summarize operation."""

from __future__ import annotations

import json

import httpx
import pytest

from rss_reader.config import AppConfig, ProviderConfig, SummaryConfig
from rss_reader.core.errors import (
    ConfigError,
    EmptySummaryError,
    SummaryResponseError,
    SummaryTransportError,
)
from rss_reader.llm.providers.factory import available_providers, create_provider
from rss_reader.llm.providers.gemini import GeminiProvider, _extract_text as gemini_text
from rss_reader.llm.providers.openai_compatible import OpenAICompatibleProvider
from rss_reader.service import AggregationService
from rss_reader.store import FeedStore


def _openai(**summary_kwargs):
    return OpenAICompatibleProvider(ProviderConfig(), SummaryConfig(**summary_kwargs), "test-key")


def test_available_providers_contains_expected_backends():
    names = available_providers()
    assert "gemini" in names
    assert "openai" in names
    assert "openai_compatible" in names


def test_create_provider_openai_by_default():
    provider = create_provider(ProviderConfig(api_key="test-key"), SummaryConfig())
    assert isinstance(provider, OpenAICompatibleProvider)


def test_create_provider_gemini():
    provider = create_provider(
        ProviderConfig(
            name="gemini",
            model="gemini-3-flash-preview",
            api_key="test-key",
        ),
        SummaryConfig(),
    )
    assert isinstance(provider, GeminiProvider)


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider(ProviderConfig(name="unknown-provider", api_key="k"), SummaryConfig())


def test_create_provider_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigError):
        create_provider(ProviderConfig(), SummaryConfig())


def test_openai_request_payload(monkeypatch):
    captured = {}

    def fake_post(self, payload):
        captured.update(payload)
        return {"choices": [{"message": {"content": "  Short summary. "}}]}

    monkeypatch.setattr(OpenAICompatibleProvider, "_post", fake_post)

    summary = _openai().summarize("Long article text")

    assert summary == "Short summary."
    assert captured["model"] == "gpt-4o-mini"
    assert captured["temperature"] == 0.7
    assert captured["messages"] == [
        {"role": "system", "content": "You are a helpful assistant that summarizes text."},
        {"role": "user", "content": "Summarize the following article:\n\nLong article text"},
    ]


def test_prompt_respects_max_chars():
    assert _openai(max_chars=4).build_prompt("abcdefgh").endswith("\n\nabcd")


def test_prompt_keeps_braces_in_text():
    assert _openai().build_prompt("dict {key}").endswith("dict {key}")


def test_openai_transport_error(monkeypatch):
    def fake_post(self, payload):
        raise httpx.ConnectError("refused")

    monkeypatch.setattr(OpenAICompatibleProvider, "_post", fake_post)

    with pytest.raises(SummaryTransportError):
        _openai().summarize("text")


def test_openai_non_json_response(monkeypatch):
    def fake_post(self, payload):
        raise json.JSONDecodeError("Expecting value", "<html>", 0)

    monkeypatch.setattr(OpenAICompatibleProvider, "_post", fake_post)

    with pytest.raises(SummaryResponseError):
        _openai().summarize("text")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"choices": []},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
    ],
)
def test_openai_missing_summary_field(monkeypatch, body):
    monkeypatch.setattr(OpenAICompatibleProvider, "_post", lambda self, payload: body)

    with pytest.raises(EmptySummaryError):
        _openai().summarize("text")


def test_openai_post_over_http(monkeypatch):
    real_client = httpx.Client
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Done"}}]})

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        kwargs["trust_env"] = False
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", factory)

    assert _openai().summarize("text") == "Done"
    assert str(requests[0].url) == "https://api.openai.com/v1/chat/completions"
    assert requests[0].headers["Authorization"] == "Bearer test-key"


def _capture_requests(monkeypatch, body):
    real_client = httpx.Client
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=body)

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        kwargs["trust_env"] = False
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", factory)
    return requests


def test_gemini_posts_to_its_own_default_base_url(monkeypatch):
    requests = _capture_requests(
        monkeypatch, {"candidates": [{"content": {"parts": [{"text": "Gist"}]}}]}
    )
    provider = create_provider(
        ProviderConfig(name="gemini", model="gemini-2.5-flash", api_key="test-key"),
        SummaryConfig(),
    )

    assert provider.summarize("text") == "Gist"
    assert requests[0].url.host == "generativelanguage.googleapis.com"
    assert requests[0].url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert requests[0].url.params["key"] == "test-key"


def test_base_url_override_is_used(monkeypatch):
    requests = _capture_requests(monkeypatch, {"choices": [{"message": {"content": "Done"}}]})
    provider = OpenAICompatibleProvider(
        ProviderConfig(base_url="http://localhost:8080/v1/"), SummaryConfig(), "test-key"
    )

    assert provider.summarize("text") == "Done"
    assert str(requests[0].url) == "http://localhost:8080/v1/chat/completions"


def test_invalid_base_url_is_transport_error():
    provider = OpenAICompatibleProvider(
        ProviderConfig(base_url="https://example.com:abc/v1"), SummaryConfig(), "test-key"
    )

    with pytest.raises(SummaryTransportError):
        provider.summarize("text")



def test_gemini_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "Part one,"},
                        {"text": " part two."},
                    ]
                }
            }
        ]
    }

    assert gemini_text(data) == "Part one, part two."


def test_gemini_extract_text_falls_back_to_all_text_when_only_thought():
    data = {"candidates": [{"content": {"parts": [{"thought": True, "text": "first"}]}}]}

    assert gemini_text(data) == "first"


def test_gemini_extract_text_missing_candidates():
    assert gemini_text({}) == ""


# Service


class _FakeProvider:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.texts = []

    def summarize(self, text):
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def _service(tmp_path, provider=None, factory=None):
    if factory is None:
        factory = lambda provider_cfg, summary_cfg: provider  # noqa: E731
    return AggregationService(FeedStore.open(tmp_path / "feeds.json"), AppConfig(), factory)


def test_summarize_success(tmp_path):
    provider = _FakeProvider(result="Summary")

    response = _service(tmp_path, provider).summarize("Article")

    assert response.success
    assert response.data == "Summary"
    assert provider.texts == ["Article"]


@pytest.mark.parametrize(
    "error, message",
    [
        (SummaryTransportError("down"), "Failed to communicate with OpenAI API"),
        (SummaryResponseError("bad"), "Failed to parse OpenAI API response"),
        (EmptySummaryError("empty"), "Failed to generate summary"),
    ],
)
def test_summarize_failures_have_distinct_messages(tmp_path, error, message):
    response = _service(tmp_path, _FakeProvider(error=error)).summarize("Article")

    assert not response.success
    assert response.data is None
    assert response.error == message


def test_summarize_without_api_key(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    svc = AggregationService(FeedStore.open(tmp_path / "feeds.json"), AppConfig())

    response = svc.summarize("Article")

    assert response.error == "OpenAI API key not configured"


def test_summarize_rejects_empty_text(tmp_path):
    provider = _FakeProvider(result="unused")

    response = _service(tmp_path, provider).summarize("   ")

    assert response.error == "Nothing to summarize"
    assert provider.texts == []
