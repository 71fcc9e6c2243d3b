"""Map raw Exa result records onto `SearchResultItem`.

Rules:
    - `id`: raw id, else raw url.
    - `title`: raw title, else `"Untitled"`.
    - `snippet`: first `SNIPPET_LIMIT` characters of raw text plus `"..."`,
      else `"No preview available."`.
    - `publishedDate`, `author`, `score`: passed through when present.

Normalization is total over records carrying a url and preserves order.
Scalar fields of an unexpected type are stringified; a `score` that is neither
a number nor a string, and non-string text, are treated as absent.
"""

from typing import Any

from smartsearch.core.schemas import SearchResultItem
from smartsearch.llm.provider_config import SNIPPET_LIMIT

UNTITLED = "Untitled"
NO_PREVIEW = "No preview available."


def make_snippet(text: str | None, limit: int = SNIPPET_LIMIT) -> str:
    if text:
        return text[:limit] + "..."
    return NO_PREVIEW


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def _score(value: Any) -> float | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


def normalize(raw: dict[str, Any]) -> SearchResultItem:
    """Build one canonical result item from a raw provider record."""
    url = _text(raw.get("url")) or ""
    text = raw.get("text")
    return SearchResultItem(
        id=_text(raw.get("id")) or url,
        title=_text(raw.get("title")) or UNTITLED,
        url=url,
        published_date=_text(raw.get("publishedDate")),
        author=_text(raw.get("author")),
        score=_score(raw.get("score")),
        snippet=make_snippet(text if isinstance(text, str) else None),
    )


def normalize_all(raw_results: list[dict[str, Any]]) -> list[SearchResultItem]:
    return [normalize(raw) for raw in raw_results]
