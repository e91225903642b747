import asyncio

import pytest

from vidlink.config import ExtractConfig
from vidlink.errors import FetchTimeout, InvalidInput, UpstreamStatus
from vidlink.runner import (
    EXIT_ERROR,
    EXIT_NOT_FOUND,
    EXIT_OK,
    NOT_FOUND_MESSAGE,
    resolve_video_urls,
    run_sync,
    validate_source_url,
)

OG_PAGE = '<meta property="og:video" content="https://video.example.com/v.mp4">'


@pytest.mark.parametrize("bad", [None, "", "   ", "ftp://example.com/v", "www.example.com/v", "javascript:alert(1)"])
def test_invalid_url_never_reaches_fetcher(bad, fake_fetcher):
    fetcher = fake_fetcher(OG_PAGE)
    with pytest.raises(InvalidInput):
        asyncio.run(resolve_video_urls(bad, fetcher, ExtractConfig()))
    assert fetcher.calls == []


def test_validate_source_url_messages():
    with pytest.raises(InvalidInput, match="No URL provided"):
        validate_source_url(None)
    with pytest.raises(InvalidInput, match="Invalid URL"):
        validate_source_url("file:///etc/passwd")
    assert validate_source_url(" HTTPS://example.com/v ") == "HTTPS://example.com/v"


def test_resolve_success(fake_fetcher):
    fetcher = fake_fetcher(OG_PAGE)
    outcome = asyncio.run(resolve_video_urls("https://www.example.com/watch", fetcher, ExtractConfig()))
    assert fetcher.calls == ["https://www.example.com/watch"]
    assert outcome.found
    assert outcome.debug_snippet is None
    assert outcome.to_payload() == {
        "status": "success",
        "data": [{"url": "https://video.example.com/v.mp4", "quality": "unknown", "source": "og:video"}],
    }


def test_resolve_not_found_keeps_bounded_snippet(fake_fetcher):
    page = "<html><body>" + "hello " * 1000 + "</body></html>"
    outcome = asyncio.run(resolve_video_urls("https://www.example.com/", fake_fetcher(page), ExtractConfig()))
    assert not outcome.found
    assert outcome.debug_snippet == page[:2000]


def test_resolve_not_found_without_snippet(fake_fetcher):
    config = ExtractConfig(debug_snippet_chars=0)
    outcome = asyncio.run(resolve_video_urls("https://www.example.com/", fake_fetcher("<p>hi</p>"), config))
    assert outcome.debug_snippet is None


def test_resolve_propagates_upstream_errors(fake_fetcher):
    fetcher = fake_fetcher(error=UpstreamStatus("https://www.example.com/", 403))
    with pytest.raises(UpstreamStatus):
        asyncio.run(resolve_video_urls("https://www.example.com/", fetcher, ExtractConfig()))


def test_run_sync_exit_codes(fake_fetcher):
    config = ExtractConfig()

    code, payload = run_sync("https://www.example.com/", config, fake_fetcher(OG_PAGE))
    assert code == EXIT_OK
    assert payload["status"] == "success"

    code, payload = run_sync("https://www.example.com/", config, fake_fetcher("<html></html>"))
    assert code == EXIT_NOT_FOUND
    assert payload["message"] == NOT_FOUND_MESSAGE
    assert payload["debugSnippet"] == "<html></html>"

    code, payload = run_sync("https://www.example.com/", config, fake_fetcher(error=FetchTimeout("https://www.example.com/", 15)))
    assert code == EXIT_ERROR
    assert payload == {"status": "error", "message": "Remote fetch timed out after 15s"}

    code, payload = run_sync("nope", config, fake_fetcher(OG_PAGE))
    assert code == EXIT_ERROR
    assert payload == {"status": "error", "message": "Invalid URL"}


def test_run_sync_unexpected_failure_is_reported_not_raised(fake_fetcher):
    code, payload = run_sync("https://www.example.com/", ExtractConfig(), fake_fetcher(error=RuntimeError("boom")))
    assert code == EXIT_ERROR
    assert payload == {"status": "error", "message": "Server error", "error": "RuntimeError: boom"}


def test_run_sync_url_rejected_by_http_client():
    code, payload = run_sync("https://exa\tmple.com:99999/", ExtractConfig())
    assert code == EXIT_ERROR
    assert payload == {"status": "error", "message": "Invalid URL"}
