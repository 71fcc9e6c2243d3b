"""Summarization dispatch for the orchestration layer.

Architectural role:
    Single dispatch point from a requested `model` value to its
    `SummaryProvider`, using only that provider's credential.

Failure scenarios:
    - Unknown model: `NOT_IMPLEMENTED_TEXT`, no provider call.
    - `UpstreamSummaryError` (missing key or failed call) and any other
      exception raised by the provider: converted to
      `"Error generating summary with <Provider>: <message>"`.
    Both are returned as a `SummaryOutcome`; nothing is raised to the caller for
    summarization failures.
"""

import logging
from dataclasses import dataclass

from smartsearch.core.credentials import CredentialSet
from smartsearch.core.errors import UpstreamSummaryError
from smartsearch.llm.client import GeminiProvider, GrokProvider, OpenAIProvider, SummaryProvider
from smartsearch.llm.provider_config import NOT_IMPLEMENTED_TEXT


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryOutcome:
    """Typed summarization result, collapsed to `text` at the HTTP boundary."""

    text: str
    ok: bool
    provider: str | None = None


def failed_outcome(provider: SummaryProvider, err: Exception) -> SummaryOutcome:
    return SummaryOutcome(
        text=f"Error generating summary with {provider.label}: {err}",
        ok=False,
        provider=provider.name,
    )


def default_providers() -> dict[str, SummaryProvider]:
    return {
        "gemini": GeminiProvider(),
        "openai": OpenAIProvider(),
        "grok": GrokProvider(),
    }


def generate_summary(
    source_texts: list[str],
    query: str,
    model: str | None,
    credentials: CredentialSet,
    providers: dict[str, SummaryProvider] | None = None,
) -> SummaryOutcome:
    """Summarize `source_texts` with the provider selected by `model`.

    Args:
        source_texts: Truncated source blocks.
        query: User query.
        model: Requested provider name; unrecognized values are not an error.
        credentials: Resolved request credentials.
        providers: Optional registry override (tests, alternate endpoints).

    Returns:
        `SummaryOutcome` whose `text` is always a non-null string.
    """
    registry = providers if providers is not None else default_providers()
    provider = registry.get(model) if model else None

    if provider is None:
        logger.warning("Unsupported summarization provider requested: %r", model)
        return SummaryOutcome(text=NOT_IMPLEMENTED_TEXT, ok=False)

    try:
        text = provider.summarize(source_texts, query, credentials.for_provider(provider.name))
    except UpstreamSummaryError as err:
        logger.error("%s summarization failed: %s", provider.label, err)
        return failed_outcome(provider, err)
    except Exception as err:
        logger.exception("%s summarization raised unexpectedly", provider.label)
        return failed_outcome(provider, err)

    return SummaryOutcome(text=text, ok=True, provider=provider.name)
