"""Exception taxonomy for the search-and-summarize pipeline.

Propagation policy:
    - `ConfigurationError` and `UpstreamSearchError` are request-fatal and are
      mapped to HTTP 400 / 500 by the API adapter.
    - `UpstreamSummaryError` (including `MissingApiKeyError`) never reaches the
      HTTP layer. The orchestrator converts it into in-band summary text.
"""


class SmartSearchError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(SmartSearchError):
    """A mandatory credential is not available from request or environment."""


class UpstreamSearchError(SmartSearchError):
    """The search provider failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamSummaryError(SmartSearchError):
    """A summarization provider failed to produce an answer."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class MissingApiKeyError(UpstreamSummaryError):
    """The selected summarization provider has no credential."""

    def __init__(self, provider: str):
        super().__init__(provider, f"Missing {provider} API Key")
