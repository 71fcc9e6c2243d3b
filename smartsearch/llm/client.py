"""Provider-specific summarization clients.

Architectural role:
    One `SummaryProvider` implementation per backend. Each translates the shared
    system instruction and joined source content into its provider's payload,
    performs a single HTTP call, and extracts plain Markdown text.

Provider handling:
    - Gemini: `generateContent` with the instruction in `systemInstruction` and
      the content as the only user turn; key sent as `x-goog-api-key`.
    - OpenAI / Grok: chat completions with a system + user message pair;
      bearer-token authorization.

Retry behavior:
    None. Each call is attempted once with `REQUEST_TIMEOUT_SECONDS`.

Failure handling model:
    Missing credentials raise `MissingApiKeyError` before any I/O. HTTP,
    transport, and decoding failures raise `UpstreamSummaryError`. Callers in
    `smartsearch.llm.service` turn both into in-band text.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from smartsearch.core.errors import MissingApiKeyError, UpstreamSummaryError
from smartsearch.llm.provider_config import (
    NO_SUMMARY_TEXT,
    PROVIDERS,
    REQUEST_TIMEOUT_SECONDS,
)
from smartsearch.prompting.prompt_builder import build_system_prompt, build_user_content


logger = logging.getLogger(__name__)


class SummaryProvider(ABC):
    """Common contract for summarization backends.

    Subclasses implement `_build_request` and `_extract_text`; `summarize`
    owns credential checks, transport, and error translation.
    """

    name = ""

    def __init__(self, timeout_seconds: float = REQUEST_TIMEOUT_SECONDS) -> None:
        config = PROVIDERS[self.name]
        self.label = config["label"]
        self.url = config["url"]
        self.model = config["model"]
        self.timeout_seconds = timeout_seconds

    def summarize(self, source_texts: list[str], query: str, api_key: str | None) -> str:
        """Generate a Markdown synthesis of `source_texts` for `query`.

        Args:
            source_texts: Already-truncated source blocks in relevance order.
            query: Original user query, used only in the system instruction.
            api_key: Credential for this provider.

        Returns:
            Generated Markdown, or `NO_SUMMARY_TEXT` when the provider returns
            no text.

        Raises:
            MissingApiKeyError: `api_key` is empty.
            UpstreamSummaryError: The provider call failed.
        """
        if not api_key:
            raise MissingApiKeyError(self.label)

        system_prompt = build_system_prompt(query)
        user_content = build_user_content(source_texts)
        url, headers, payload = self._build_request(system_prompt, user_content, api_key)

        try:
            response = requests.post(
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as err:
            raise UpstreamSummaryError(self.label, f"{self.label} request failed: {err}") from err

        if not response.ok:
            raise UpstreamSummaryError(
                self.label,
                f"{self.label} API Error ({response.status_code}): {response.text}",
            )

        try:
            data = response.json()
        except ValueError as err:
            raise UpstreamSummaryError(self.label, f"{self.label} returned a non-JSON response") from err

        try:
            text = self._extract_text(data)
        except Exception as err:
            logger.exception("Unexpected %s response shape", self.label)
            raise UpstreamSummaryError(self.label, f"{self.label} returned an unexpected response: {err}") from err

        return text or NO_SUMMARY_TEXT

    @abstractmethod
    def _build_request(self, system_prompt: str, user_content: str, api_key: str):
        """Return `(url, headers, payload)` for one provider call."""

    @abstractmethod
    def _extract_text(self, data: Any) -> str | None:
        """Return generated text from a decoded response, or `None`."""


class GeminiProvider(SummaryProvider):
    name = "gemini"

    def _build_request(self, system_prompt, user_content, api_key):
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": user_content}],
                }
            ],
        }
        return self.url.format(model=self.model), headers, payload

    def _extract_text(self, data):
        # Text parts of the first candidate, joined the way the SDK's `.text` does.
        if not isinstance(data, dict):
            return None
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return None
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return None
        parts = content.get("parts")
        if not isinstance(parts, list):
            return None
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str) and not part.get("thought")
        ]
        return "".join(texts)


class ChatCompletionProvider(SummaryProvider):
    """OpenAI-compatible `/chat/completions` backend."""

    def _build_request(self, system_prompt, user_content, api_key):
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        }
        return self.url, headers, payload

    def _extract_text(self, data):
        if not isinstance(data, dict):
            return None
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        return content if isinstance(content, str) else None


class OpenAIProvider(ChatCompletionProvider):
    name = "openai"


class GrokProvider(ChatCompletionProvider):
    name = "grok"
