"""Shared fixtures: isolated environment and fake outbound services."""

import json

import httpx
import pytest
from unittest.mock import MagicMock

from smartsearch.api import http_api
from smartsearch.core.engine import SearchOrchestrator
from smartsearch.retrieval.search_client import ExaSearchClient

ENV_KEYS = ("EXA_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY", "GROK_API_KEY", "DEBUG")

SAMPLE_RESULTS = [
    {
        "id": "doc-1",
        "title": "Carbon Pricing Report",
        "url": "https://example.org/carbon.pdf",
        "publishedDate": "2024-03-01",
        "author": "A. Researcher",
        "score": 0.92,
        "text": "Carbon pricing " * 100,
    },
    {
        "url": "https://example.org/adaptation.pdf",
        "text": "Adaptation finance overview.",
    },
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No fallback keys unless a test sets them."""
    for name in ENV_KEYS:
        monkeypatch.delenv(name, raising=False)
    yield
    http_api.set_orchestrator(None)


class ExaRecorder:
    """Fake Exa endpoint recording every request it receives."""

    def __init__(self, results=None, status_code=200, body=None):
        self.results = results if results is not None else []
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text=self.body or "error")
        return httpx.Response(200, json={"results": self.results})

    @property
    def payloads(self):
        return [json.loads(request.content) for request in self.requests]

    def client(self) -> ExaSearchClient:
        return ExaSearchClient(transport=httpx.MockTransport(self))


@pytest.fixture
def exa():
    return ExaRecorder(results=list(SAMPLE_RESULTS))


@pytest.fixture
def install(exa):
    """Wire the HTTP app to the fake Exa endpoint."""
    http_api.set_orchestrator(SearchOrchestrator(search_client=exa.client()))
    return exa


def llm_response(payload, status_code=200):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.text = json.dumps(payload)
    response.json.return_value = payload
    return response


def chat_payload(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def gemini_payload(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}
