from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import httpx

from vidlink.config import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT, ExtractConfig
from vidlink.errors import FetchTimeout, InvalidInput, UpstreamStatus, UpstreamUnavailable

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_headers(user_agent: str | None = None) -> dict[str, str]:
    headers = dict(DEFAULT_HEADERS)
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers


class PageFetcher:
    """Single-shot page download posing as a desktop browser.

    No retries: one failed attempt is reported to the caller as-is.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = float(timeout_seconds)
        self.headers = headers or build_headers()
        self.transport = transport

    def request_url(self, url: str) -> str:
        return url

    async def fetch(self, url: str) -> str:
        target = self.request_url(url)
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            headers=self.headers,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            try:
                # wait_for bounds the whole exchange (connect + body), not just each socket read.
                response = await asyncio.wait_for(client.get(target), timeout=self.timeout_seconds)
            except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                LOGGER.warning(f"Remote fetch timed out after {self.timeout_seconds:g}s: {url}")
                raise FetchTimeout(url, self.timeout_seconds) from exc
            except httpx.InvalidURL as exc:
                raise InvalidInput("Invalid URL") from exc
            except httpx.HTTPError as exc:
                LOGGER.warning(f"Remote fetch error: {type(exc).__name__}: {exc} url={url}")
                raise UpstreamUnavailable(f"Remote fetch failed: {type(exc).__name__}", url=url) from exc

        if not response.is_success:
            LOGGER.warning(f"Remote fetch returned non-2xx: {response.status_code} {response.reason_phrase} url={url}")
            raise UpstreamStatus(url, response.status_code)

        return response.text


class RelayFetcher(PageFetcher):
    """Fetch the page through a CORS-bypass relay, e.g. ``https://relay.example/raw?url={url}``."""

    def __init__(self, relay_url: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.relay_url = relay_url

    def request_url(self, url: str) -> str:
        return self.relay_url.format(url=quote(url, safe=""))


def build_fetcher(config: ExtractConfig, transport: httpx.AsyncBaseTransport | None = None) -> PageFetcher:
    kwargs = {
        "timeout_seconds": config.timeout_seconds,
        "headers": build_headers(config.user_agent),
        "transport": transport,
    }
    if config.relay_url:
        return RelayFetcher(config.relay_url, **kwargs)
    return PageFetcher(**kwargs)
