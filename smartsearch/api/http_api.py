"""
HTTP API adapter for the SmartSearch backend.

Architectural role:
- Expose the search-and-summarize pipeline to the browser client.
- Enforce adapter-level input validation.
- Delegate all pipeline work to `smartsearch.core.engine.SearchOrchestrator`.
- Map pipeline exceptions onto HTTP status codes.

Endpoint responsibilities:
- `GET /api/providers`: list filters and summarization providers.
- `POST /api/search`: validate input, run one search, return results + summary.

Input validation behavior:
- Body is not valid JSON -> HTTP 400.
- Body is not a JSON object or has wrongly typed fields -> HTTP 400.
- Missing or blank `query` -> HTTP 400.

Error handling strategy:
- `ConfigurationError` (no search key) -> HTTP 400 `{error}`.
- `UpstreamSearchError` -> HTTP 500 `{error}` carrying provider status/body.
- Any other exception -> logged, HTTP 500 `{error}` with the exception message.
- Summarization failures never surface here; they arrive as summary text.

Side effects:
- Loads `.env` at import via `smartsearch.llm.provider_config`.
- Logs key presence as booleans only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from smartsearch.core.engine import SearchOrchestrator
from smartsearch.core.errors import ConfigurationError, UpstreamSearchError
from smartsearch.core.schemas import FilterType, SearchRequest
from smartsearch.llm.provider_config import PROVIDERS, load_key


logger = logging.getLogger(__name__)

app = FastAPI(title="SmartSearch API")

# The browser client is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Orchestrator wiring
# ============================================================

_ORCHESTRATOR: SearchOrchestrator | None = None


def set_orchestrator(orchestrator: SearchOrchestrator | None) -> None:
    """Override or clear the orchestrator used by `POST /api/search`."""
    global _ORCHESTRATOR
    _ORCHESTRATOR = orchestrator


def get_orchestrator() -> SearchOrchestrator:
    """Return the configured orchestrator, creating the default on first use."""
    global _ORCHESTRATOR
    if _ORCHESTRATOR is None:
        _ORCHESTRATOR = SearchOrchestrator()
    return _ORCHESTRATOR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================
# Provider Listing
# ============================================================

@app.get("/api/providers")
def list_providers():
    """
    Return selectable filters and summarization providers.

    `configured` only reports whether a process-wide fallback key exists.
    Key material is never included.
    """
    return {
        "filters": [item.value for item in FilterType],
        "providers": [
            {
                "id": name,
                "label": config["label"],
                "model": config["model"],
                "configured": load_key(name) is not None,
            }
            for name, config in PROVIDERS.items()
        ],
        "search": {"id": "exa", "configured": load_key("exa") is not None},
    }


# ============================================================
# Search
# ============================================================

@app.post("/api/search")
async def search(request: Request):
    """
    Run one search-and-summarize request.

    Request lifecycle:
    1. Parse and validate the JSON body into `SearchRequest`.
    2. Delegate to `SearchOrchestrator.run`.
    3. Map request-fatal exceptions onto 400/500 JSON errors.

    The 200 path is reached even when summarization failed; the failure is
    described inside `summary`.
    """
    try:
        body = await request.json()
    except ValueError:
        return error_response(400, "Request body must be valid JSON.")

    if not isinstance(body, dict):
        return error_response(400, "Request body must be a JSON object.")

    try:
        search_request = SearchRequest.model_validate(body)
    except ValidationError as err:
        return error_response(400, f"Invalid request: {err.errors()[0].get('msg', 'validation failed')}")

    if not search_request.query.strip():
        return error_response(400, "Query is required.")

    try:
        response = await get_orchestrator().run(search_request)
    except ConfigurationError as err:
        logger.warning("Rejected search request: %s", err)
        return error_response(400, str(err))
    except UpstreamSearchError as err:
        logger.error("Search provider failed: %s", err)
        return error_response(500, str(err))
    except Exception as err:
        logger.exception("Server error while handling search request")
        return error_response(500, str(err) or "Internal Server Error")

    return response.to_payload()
