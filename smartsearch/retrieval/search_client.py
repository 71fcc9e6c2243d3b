"""Exa search client for the `POST /api/search` pipeline.

Architectural role:
    Shapes one provider request from `(query, filter)` and returns the raw
    `results` list from Exa, unprocessed. Normalization happens in
    `smartsearch.retrieval.normalizer`.

Query shaping by filter:
    - `pdf`: appends ` filetype:pdf` to the query text.
    - `github`: restricts results with `includeDomains=["github.com"]`.
    - `all`, `news`, `blogs` and unknown values: no transformation. News/blog
      distinctions are not enforced server-side.

Request parameters:
    Auto-prompt expansion on, result count capped at `SEARCH_MAX_RESULTS`, and
    full page text requested inline so no separate fetch step is needed.

Failure model:
    Single attempt, no retry. Non-2xx responses and transport errors raise
    `UpstreamSearchError`; without results there is nothing to summarize.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smartsearch.core.errors import UpstreamSearchError
from smartsearch.core.schemas import FilterType
from smartsearch.llm.provider_config import (
    EXA_SEARCH_URL,
    REQUEST_TIMEOUT_SECONDS,
    SEARCH_MAX_RESULTS,
)


logger = logging.getLogger(__name__)

PDF_QUERY_SUFFIX = " filetype:pdf"
GITHUB_DOMAINS = ["github.com"]


def build_search_payload(query: str, filter_value: str | None) -> dict[str, Any]:
    """Build the Exa JSON body for a query and coarse content filter.

    Args:
        query: User query text.
        filter_value: One of the `FilterType` values; anything else means `all`.

    Returns:
        JSON-serializable request body. `includeDomains` is present only for
        the GitHub filter.
    """
    final_query = query
    include_domains = None

    if filter_value == FilterType.PDF.value:
        final_query += PDF_QUERY_SUFFIX
    elif filter_value == FilterType.GITHUB.value:
        include_domains = list(GITHUB_DOMAINS)

    payload: dict[str, Any] = {
        "query": final_query,
        "useAutoprompt": True,
        "numResults": SEARCH_MAX_RESULTS,
        "contents": {"text": True},
    }
    if include_domains is not None:
        payload["includeDomains"] = include_domains
    return payload


class ExaSearchClient:
    """Single-shot Exa `/search` caller.

    Args:
        url: Search endpoint, overridable for tests.
        timeout_seconds: Transport timeout.
        transport: Optional httpx transport (e.g. `httpx.MockTransport`).
    """

    def __init__(
        self,
        url: str = EXA_SEARCH_URL,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def search(self, query: str, filter_value: str | None, api_key: str) -> list[dict[str, Any]]:
        """Run one search and return Exa's raw result records.

        Raises:
            UpstreamSearchError: On non-2xx status, transport failure, or a body
                that is not a JSON object.
        """
        payload = build_search_payload(query, filter_value)
        headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.RequestError as err:
            raise UpstreamSearchError(f"Exa request failed: {err}") from err

        if not response.is_success:
            message = f"Exa API Error ({response.status_code}): {response.text}"
            raise UpstreamSearchError(message, status_code=response.status_code, body=response.text)

        try:
            data = response.json()
        except ValueError as err:
            raise UpstreamSearchError("Exa returned a non-JSON response") from err

        if not isinstance(data, dict):
            raise UpstreamSearchError("Exa returned an unexpected response shape")

        results = data.get("results") or []
        return [item for item in results if isinstance(item, dict)]
