"""Request/response data contracts for the search-and-summarize pipeline.

Architectural role:
    Defines the inbound request shape parsed by `smartsearch.api`, the canonical
    result item produced by `smartsearch.retrieval.normalizer`, and the outbound
    response assembled by `smartsearch.core.engine`.

Wire format:
    JSON field names are camelCase (`apiKeys`, `publishedDate`) to match the
    browser client. Python attribute names are snake_case; models accept both.

Validation:
    `filter` and `model` are kept as plain strings on the request. Unknown
    filters behave like `all`; unknown models degrade to an in-band summary
    placeholder, so neither is rejected at parse time. Non-string values are
    read as absent.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterType(str, Enum):
    """Coarse content-type filter selectable by the client."""

    ALL = "all"
    NEWS = "news"
    BLOGS = "blogs"
    PDF = "pdf"
    GITHUB = "github"


class ModelProvider(str, Enum):
    """Closed set of summarization backends."""

    GEMINI = "gemini"
    OPENAI = "openai"
    GROK = "grok"


class ApiKeys(BaseModel):
    """Optional per-request credential bundle."""

    model_config = ConfigDict(extra="ignore")

    exa: str | None = None
    gemini: str | None = None
    openai: str | None = None
    grok: str | None = None


class SearchRequest(BaseModel):
    """Inbound body of `POST /api/search`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    query: str = ""
    filter: str | None = FilterType.ALL.value
    model: str | None = None
    api_keys: ApiKeys | None = Field(default=None, alias="apiKeys")

    @field_validator("filter", "model", mode="before")
    @classmethod
    def non_string_to_none(cls, value):
        # Non-string selectors behave like unknown values instead of failing.
        return value if isinstance(value, str) else None


class SearchResultItem(BaseModel):
    """Canonical, provider-independent representation of one search hit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    url: str
    published_date: str | None = Field(default=None, alias="publishedDate")
    author: str | None = None
    score: float | str | None = None
    snippet: str


class SearchResponse(BaseModel):
    """Outbound body of a successful search."""

    results: list[SearchResultItem]
    summary: str

    def to_payload(self) -> dict:
        """Serialize with wire field names, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
