"""Provider/runtime configuration for the search and summarization layers.

Architectural role:
    Centralizes endpoint URLs, model identifiers, numeric limits, and fallback
    credential lookup for `smartsearch.retrieval` and `smartsearch.llm`.

Credential lookup:
    Fallback keys are read from the process environment at call time (after
    `.env` has been loaded once at import), so per-request overrides and test
    patches of `os.environ` are always observed.

Determinism:
    Deterministic for a fixed process environment.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Search provider.
EXA_SEARCH_URL = "https://api.exa.ai/search"
SEARCH_MAX_RESULTS = int(os.getenv("SEARCH_MAX_RESULTS", "5"))

# Per-source truncation before prompt assembly, and preview length for results.
SOURCE_TEXT_LIMIT = int(os.getenv("SOURCE_TEXT_LIMIT", "1000"))
SNIPPET_LIMIT = int(os.getenv("SNIPPET_LIMIT", "200"))

# Transport timeout for every outbound call. No retries are attempted.
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "120"))

# Summarization providers.
PROVIDERS = {

    "gemini": {
        "label": "Gemini",
        "url": (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "{model}:generateContent"
        ),
        "model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        "env_key": "GEMINI_API_KEY",
    },

    "openai": {
        "label": "OpenAI",
        "url": "https://api.openai.com/v1/chat/completions",
        "model": os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        "env_key": "OPENAI_API_KEY",
    },

    "grok": {
        "label": "Grok",
        "url": "https://api.x.ai/v1/chat/completions",
        "model": os.getenv("GROK_MODEL", "grok-beta"),
        "env_key": "GROK_API_KEY",
    },

}

# Environment variable per credential slot, search provider first.
ENV_KEYS = {
    "exa": "EXA_API_KEY",
    "gemini": PROVIDERS["gemini"]["env_key"],
    "openai": PROVIDERS["openai"]["env_key"],
    "grok": PROVIDERS["grok"]["env_key"],
}

NO_SUMMARY_TEXT = "No summary generated."
NO_RESULTS_TEXT = "No results found to summarize."
NOT_IMPLEMENTED_TEXT = "Selected model provider not implemented."


def load_key(service):
    """Return the process-wide fallback credential for `service`.

    Args:
        service: Credential slot name (`exa`, `gemini`, `openai`, `grok`).

    Returns:
        Stripped key string, or `None` when unset, blank, or the slot is unknown.
    """
    env_name = ENV_KEYS.get(service)
    if not env_name:
        return None
    value = os.getenv(env_name, "").strip()
    return value or None


def debug_enabled() -> bool:
    """Whether request-level debug logging is switched on."""
    return os.getenv("DEBUG") == "true"
