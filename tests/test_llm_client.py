"""Tests for summarization clients and provider dispatch."""

from unittest.mock import patch

import pytest
import requests

from smartsearch.core.credentials import CredentialSet
from smartsearch.core.errors import MissingApiKeyError, UpstreamSummaryError
from smartsearch.llm.client import GeminiProvider, GrokProvider, OpenAIProvider, SummaryProvider
from smartsearch.llm.service import generate_summary
from conftest import chat_payload, gemini_payload, llm_response

SOURCES = ["Title: A\nURL: https://a\nContent: alpha...", "Title: B\nURL: https://b\nContent: beta..."]


def test_gemini_request_shape():
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response(gemini_payload("## Summary\nText"))
        text = GeminiProvider().summarize(SOURCES, "solar", "g-key")

    assert text == "## Summary\nText"
    url = post.call_args.args[0]
    kwargs = post.call_args.kwargs
    assert url.endswith("/models/gemini-2.5-flash:generateContent")
    assert kwargs["headers"]["x-goog-api-key"] == "g-key"
    instruction = kwargs["json"]["systemInstruction"]["parts"][0]["text"]
    assert 'User Query: "solar"' in instruction
    contents = kwargs["json"]["contents"]
    assert len(contents) == 1
    assert contents[0]["role"] == "user"
    assert "\n---\n" in contents[0]["parts"][0]["text"]


@pytest.mark.parametrize(
    "provider_cls, url, model",
    [
        (OpenAIProvider, "https://api.openai.com/v1/chat/completions", "gpt-4o-mini"),
        (GrokProvider, "https://api.x.ai/v1/chat/completions", "grok-beta"),
    ],
)
def test_chat_completion_request_shape(provider_cls, url, model):
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response(chat_payload("answer"))
        text = provider_cls().summarize(SOURCES, "solar", "secret")

    assert text == "answer"
    assert post.call_args.args[0] == url
    kwargs = post.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["json"]["model"] == model
    roles = [message["role"] for message in kwargs["json"]["messages"]]
    assert roles == ["system", "user"]


def test_empty_response_defaults_text():
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response({"choices": []})
        assert OpenAIProvider().summarize(SOURCES, "q", "k") == "No summary generated."
        post.return_value = llm_response({"candidates": []})
        assert GeminiProvider().summarize(SOURCES, "q", "k") == "No summary generated."


def test_missing_key_raises_before_io():
    with patch("smartsearch.llm.client.requests.post") as post:
        with pytest.raises(MissingApiKeyError, match="Missing Grok API Key"):
            GrokProvider().summarize(SOURCES, "q", None)
    post.assert_not_called()


def test_http_error_raises_summary_error():
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response({"error": "quota"}, status_code=429)
        with pytest.raises(UpstreamSummaryError, match=r"OpenAI API Error \(429\)"):
            OpenAIProvider().summarize(SOURCES, "q", "k")


def test_transport_error_raises_summary_error():
    with patch("smartsearch.llm.client.requests.post", side_effect=requests.exceptions.ConnectionError("down")):
        with pytest.raises(UpstreamSummaryError, match="Gemini request failed"):
            GeminiProvider().summarize(SOURCES, "q", "k")


def test_dispatch_uses_only_selected_provider_key():
    creds = CredentialSet(exa="e", gemini="g", openai="o", grok="x")
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response(chat_payload("grok answer"))
        outcome = generate_summary(SOURCES, "q", "grok", creds)

    assert outcome.ok is True
    assert outcome.text == "grok answer"
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer x"


def test_dispatch_converts_failures_to_text():
    with patch("smartsearch.llm.client.requests.post") as post:
        outcome = generate_summary(SOURCES, "q", "openai", CredentialSet(exa="e"))

    post.assert_not_called()
    assert outcome.ok is False
    assert outcome.text == "Error generating summary with OpenAI: Missing OpenAI API Key"


@pytest.mark.parametrize("model", ["claude", "", None])
def test_dispatch_unknown_model(model):
    outcome = generate_summary(SOURCES, "q", model, CredentialSet(exa="e"))
    assert outcome.text == "Selected model provider not implemented."
    assert outcome.ok is False


@pytest.mark.parametrize(
    "provider_cls, provider_body",
    [
        (GeminiProvider, {"candidates": [{"content": "oops"}]}),
        (GeminiProvider, {"candidates": [{"content": {"parts": "oops"}}]}),
        (GeminiProvider, {"candidates": "oops"}),
        (OpenAIProvider, {"choices": [{"message": "oops"}]}),
        (OpenAIProvider, {"choices": {"0": {}}}),
        (GrokProvider, ["not", "an", "object"]),
    ],
)
def test_unexpected_shapes_default_text(provider_cls, provider_body):
    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response(provider_body)
        assert provider_cls().summarize(SOURCES, "q", "k") == "No summary generated."


def test_extraction_failure_becomes_summary_error():
    class BrokenGemini(GeminiProvider):
        def _extract_text(self, data):
            raise KeyError("parts")

    with patch("smartsearch.llm.client.requests.post") as post:
        post.return_value = llm_response(gemini_payload("x"))
        with pytest.raises(UpstreamSummaryError, match="Gemini returned an unexpected response"):
            BrokenGemini().summarize(SOURCES, "q", "k")


def test_dispatch_converts_unexpected_exceptions_to_text():
    class ExplodingOpenAI(OpenAIProvider):
        def summarize(self, source_texts, query, api_key):
            raise RuntimeError("boom")

    outcome = generate_summary(
        SOURCES, "q", "openai", CredentialSet(exa="e", openai="o"), providers={"openai": ExplodingOpenAI()}
    )
    assert outcome.ok is False
    assert outcome.text == "Error generating summary with OpenAI: boom"


def test_base_provider_is_abstract():
    with pytest.raises(TypeError):
        SummaryProvider()
