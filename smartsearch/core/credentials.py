"""Per-request credential resolution.

Resolution order, applied to each service independently:
    1. Non-empty value from the request's `apiKeys` bundle.
    2. Process-wide fallback from the environment (`provider_config.load_key`).
    3. Unresolved (`None`).

Side effects:
    None besides a debug log line. Only presence booleans are ever logged,
    never the key material itself.
"""

import logging
from dataclasses import dataclass

from smartsearch.core.errors import ConfigurationError
from smartsearch.core.schemas import ApiKeys
from smartsearch.llm.provider_config import load_key


logger = logging.getLogger(__name__)

SERVICES = ("exa", "gemini", "openai", "grok")


@dataclass(frozen=True)
class CredentialSet:
    """Resolved credentials for one request."""

    exa: str | None = None
    gemini: str | None = None
    openai: str | None = None
    grok: str | None = None

    def for_provider(self, provider: str) -> str | None:
        """Return the credential slot for a summarization provider name."""
        if provider not in SERVICES or provider == "exa":
            return None
        return getattr(self, provider)

    def presence(self) -> dict[str, bool]:
        return {service: bool(getattr(self, service)) for service in SERVICES}

    def require_search_key(self) -> str:
        """Return the search credential or raise `ConfigurationError`."""
        if not self.exa:
            raise ConfigurationError("Exa API Key is missing. Please add it in Settings.")
        return self.exa


def resolve_key(service: str, request_value: str | None) -> str | None:
    if request_value and request_value.strip():
        return request_value.strip()
    return load_key(service)


def resolve_credentials(api_keys: ApiKeys | None) -> CredentialSet:
    """Build the `CredentialSet` for a request.

    Args:
        api_keys: Optional per-request bundle; any slot may be missing or blank.

    Returns:
        Frozen credential set; unresolved slots are `None`.
    """
    bundle = api_keys or ApiKeys()
    credentials = CredentialSet(
        **{service: resolve_key(service, getattr(bundle, service)) for service in SERVICES}
    )

    presence = credentials.presence()
    logger.info(
        "Keys resolved: exa=%s gemini=%s openai=%s grok=%s",
        presence["exa"],
        presence["gemini"],
        presence["openai"],
        presence["grok"],
    )
    return credentials
