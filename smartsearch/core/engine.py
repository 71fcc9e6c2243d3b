"""Core search-and-summarize orchestration.

Architectural role:
    Sits between the API/CLI adapters and the retrieval and LLM layers. One call
    to `SearchOrchestrator.run` handles exactly one request.

Request lifecycle:
    1. RESOLVE_KEYS: build the `CredentialSet`; a missing search key raises
       `ConfigurationError` before any outbound call.
    2. SEARCH: one Exa call; failures raise `UpstreamSearchError`.
    3. NORMALIZE: every raw record becomes a `SearchResultItem`, order kept.
    4. SUMMARIZE: with at least one result, sources are truncated and sent to
       the provider matching `model`. With none, the summary is the fixed
       no-results text and no provider is called.
    5. RESPOND: `SearchResponse(results, summary)`.

Error boundaries:
    Summarization failures are returned as text by `smartsearch.llm.service`
    and never abort the request, so fetched results are always returned.

Concurrency:
    No state is shared between requests. The blocking provider call runs in a
    worker thread via `asyncio.to_thread`.
"""

import asyncio
import logging

from smartsearch.core.credentials import resolve_credentials
from smartsearch.core.schemas import SearchRequest, SearchResponse
from smartsearch.llm.provider_config import NO_RESULTS_TEXT, debug_enabled
from smartsearch.llm.service import generate_summary
from smartsearch.prompting.prompt_builder import format_source
from smartsearch.retrieval.normalizer import normalize_all
from smartsearch.retrieval.search_client import ExaSearchClient


logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Request handler for the search-and-summarize pipeline.

    Args:
        search_client: Object exposing `async search(query, filter, api_key)`.
        providers: Optional summarization registry passed to `generate_summary`.
    """

    def __init__(self, search_client=None, providers=None):
        self.search_client = search_client or ExaSearchClient()
        self.providers = providers

    async def run(self, request: SearchRequest) -> SearchResponse:
        """Execute one search request.

        Raises:
            ConfigurationError: No search credential in request or environment.
            UpstreamSearchError: The search provider call failed.
        """
        logger.info("Search request: provider=%s filter=%s", request.model, request.filter)
        credentials = resolve_credentials(request.api_keys)
        exa_key = credentials.require_search_key()

        if debug_enabled():
            logger.debug("Searching Exa for: %r", request.query)
        raw_results = await self.search_client.search(request.query, request.filter, exa_key)
        logger.info("Found %d results.", len(raw_results))

        results = normalize_all(raw_results)

        if not raw_results:
            return SearchResponse(results=results, summary=NO_RESULTS_TEXT)

        source_texts = [format_source(raw) for raw in raw_results]
        logger.info("Generating summary with %s", request.model)
        outcome = await asyncio.to_thread(
            generate_summary,
            source_texts,
            request.query,
            request.model,
            credentials,
            self.providers,
        )
        if not outcome.ok:
            logger.warning("Summary degraded for provider=%s", request.model)

        return SearchResponse(results=results, summary=outcome.text)
