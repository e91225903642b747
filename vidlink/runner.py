from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from vidlink.config import ExtractConfig
from vidlink.errors import InvalidInput, VidlinkError
from vidlink.extractor import extract
from vidlink.http_utils import build_fetcher
from vidlink.models import ExtractionOutcome
from vidlink.strategies.registry import build_strategies
from vidlink.text_utils import debug_snippet, is_http_url

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2

NOT_FOUND_MESSAGE = "No video URL found (public videos only)."


class Fetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


def validate_source_url(url: str | None) -> str:
    if url is None or not url.strip():
        raise InvalidInput("No URL provided")
    url = url.strip()
    if not is_http_url(url):
        raise InvalidInput("Invalid URL")
    return url


def extract_from_text(page_url: str, text: str, config: ExtractConfig) -> ExtractionOutcome:
    candidates = extract(text, build_strategies(config.strategies))
    if candidates:
        return ExtractionOutcome(page_url=page_url, candidates=candidates)

    LOGGER.warning(f"No video URLs extracted from {page_url} ({len(text)} chars fetched)")
    snippet = debug_snippet(text, config.debug_snippet_chars) if config.debug_snippet_chars else None
    return ExtractionOutcome(page_url=page_url, candidates=[], debug_snippet=snippet)


async def resolve_video_urls(url: str | None, fetcher: Fetcher, config: ExtractConfig) -> ExtractionOutcome:
    """Validate, fetch once and extract.

    InvalidInput is raised before any network call. Fetch failures propagate
    as UpstreamUnavailable. An empty outcome means the page had no video urls.
    """
    page_url = validate_source_url(url)
    text = await fetcher.fetch(page_url)
    return extract_from_text(page_url, text, config)


def error_payload(message: str, **extra: Any) -> dict[str, Any]:
    return {"status": "error", "message": message, **extra}


def not_found_payload(outcome: ExtractionOutcome) -> dict[str, Any]:
    if outcome.debug_snippet is None:
        return error_payload(NOT_FOUND_MESSAGE)
    return error_payload(NOT_FOUND_MESSAGE, debugSnippet=outcome.debug_snippet)


def run_sync(url: str, config: ExtractConfig, fetcher: Fetcher | None = None) -> tuple[int, dict[str, Any]]:
    """CLI entry: returns (exit_code, response envelope)."""
    fetcher = fetcher or build_fetcher(config)
    try:
        outcome = asyncio.run(resolve_video_urls(url, fetcher, config))
    except VidlinkError as exc:
        return EXIT_ERROR, error_payload(str(exc))
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Extraction failed")
        return EXIT_ERROR, error_payload("Server error", error=f"{type(exc).__name__}: {exc}")

    if outcome.found:
        return EXIT_OK, outcome.to_payload()
    return EXIT_NOT_FOUND, not_found_payload(outcome)


def dump_payload(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)
