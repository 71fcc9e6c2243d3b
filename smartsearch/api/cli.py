"""
Terminal entrypoint for SmartSearch.

Architectural role:
- Runs one search-and-summarize request through the same orchestrator as the
  HTTP API, using environment credentials only.
- Renders the Markdown summary followed by a numbered result list, or the raw
  JSON response with `--json`.

Exit status:
- 0: request completed (the summary may still describe a provider failure).
- 1: search provider failed or an unexpected error occurred.
- 2: configuration error (no search key) or invalid arguments.
"""

import argparse
import asyncio
import json
import logging
import sys

from smartsearch.core.engine import SearchOrchestrator
from smartsearch.core.errors import ConfigurationError, UpstreamSearchError
from smartsearch.core.schemas import FilterType, ModelProvider, SearchRequest, SearchResponse
from smartsearch.llm.provider_config import debug_enabled


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartsearch",
        description="Search the web with Exa and summarize the results with an LLM.",
    )
    parser.add_argument("query", help="Search query text.")
    parser.add_argument(
        "--filter",
        default=FilterType.ALL.value,
        choices=[item.value for item in FilterType],
        help="Content-type filter (default: all).",
    )
    parser.add_argument(
        "--model",
        default=ModelProvider.GEMINI.value,
        choices=[item.value for item in ModelProvider],
        help="Summarization provider (default: gemini).",
    )
    parser.add_argument("--json", action="store_true", help="Print the JSON response.")
    parser.add_argument("--verbose", action="store_true", help="Enable info logging.")
    return parser


def log_level(verbose: bool) -> int:
    """`DEBUG=true` wins over `--verbose`; otherwise only warnings are shown."""
    if debug_enabled():
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def render_text(response: SearchResponse) -> str:
    """Format a response as summary followed by a numbered source list."""
    lines = [response.summary, "", "-" * 60, "Sources:"]
    for number, item in enumerate(response.results, start=1):
        lines.append(f"{number}. {item.title}")
        lines.append(f"   {item.url}")
    if not response.results:
        lines.append("(none)")
    return "\n".join(lines)


def main(argv=None, orchestrator: SearchOrchestrator | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=log_level(args.verbose),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.query.strip():
        print("Query is required.", file=sys.stderr)
        return 2

    request = SearchRequest(query=args.query, filter=args.filter, model=args.model)
    runner = orchestrator or SearchOrchestrator()

    try:
        response = asyncio.run(runner.run(request))
    except ConfigurationError as err:
        print(str(err), file=sys.stderr)
        return 2
    except UpstreamSearchError as err:
        print(str(err), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 1
    except Exception as err:
        logger.exception("Search failed")
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
    else:
        print(render_text(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
