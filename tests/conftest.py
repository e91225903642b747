"""Shared fixtures. Nothing here touches the network."""

import pytest


class FakeFetcher:
    """Records every url it is asked for and replays a canned body or error."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def facebook_like_page():
    """A trimmed page mixing meta tags and an inlined relay payload."""
    return (
        "<html><head>"
        '<meta property="og:title" content="Some video">'
        '<meta property="og:video" content="https://video.xx.fbcdn.net/v/og.mp4?a=1">'
        '<meta name="twitter:player:stream" content="https://video.example.com/stream.mp4">'
        "</head><body>"
        "<script>"
        '{"playable_url":"https:\\/\\/video.xx.fbcdn.net\\/v\\/sd.mp4?x=1\\u0026y=2",'
        '"playable_url_quality_hd":"https:\\/\\/video.xx.fbcdn.net\\/v\\/hd.mp4?x=1\\u0026y=2"}'
        "</script>"
        "</body></html>"
    )
