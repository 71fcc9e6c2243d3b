"""Prompt assembly helpers for result summarization.

This module only builds strings. Provider selection, transport, and error
handling happen in `smartsearch.llm`.

Design constraints:
    - Deterministic construction for identical inputs.
    - The system instruction is parameterized by the query only.
    - Source blocks keep provider relevance order.

Prompt safety model:
    Source text is interpolated as raw, untrusted content. Length is bounded
    per source (`SOURCE_TEXT_LIMIT`) before it reaches a provider.
"""

from typing import Any

from smartsearch.llm.provider_config import SOURCE_TEXT_LIMIT


# =========================================================
# SYSTEM INSTRUCTION
# =========================================================
# Shared by every summarization provider. Gemini receives it as
# `systemInstruction`; chat-completion providers as the system message.

SYSTEM_TEMPLATE = (
    "You are a helpful research assistant.\n"
    'User Query: "{query}"\n\n'
    "Task: Analyze the provided search results and generate a response in Markdown format with:\n"
    "1. A concise summary (2-3 paragraphs).\n"
    "2. Key Insights (bullet points).\n"
    "3. Pros & Cons (if applicable).\n\n"
    "Keep it objective and cite the sources by title if possible."
)

SOURCE_SEPARATOR = "\n---\n"
NO_TEXT_AVAILABLE = "No text available"


def build_system_prompt(query: str) -> str:
    return SYSTEM_TEMPLATE.format(query=query)


def format_source(raw: dict[str, Any], limit: int = SOURCE_TEXT_LIMIT) -> str:
    """Render one raw search record as a bounded source block.

    Args:
        raw: Raw provider record (`title`, `url`, `text` are read).
        limit: Maximum number of characters of page text kept.

    Returns:
        Block with title, URL and truncated content.
    """
    text = raw.get("text")
    content = text[:limit] if isinstance(text, str) and text else NO_TEXT_AVAILABLE
    return (
        f"Title: {raw.get('title')}\n"
        f"URL: {raw.get('url')}\n"
        f"Content: {content}..."
    )


def build_user_content(source_texts: list[str]) -> str:
    """Join source blocks into the single user message sent to a provider."""
    return "Here are the search results content:\n\n" + SOURCE_SEPARATOR.join(source_texts)
