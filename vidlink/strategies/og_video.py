from __future__ import annotations

import re
from functools import lru_cache

from bs4 import BeautifulSoup

from vidlink.models import QUALITY_UNKNOWN, SOURCE_OG_VIDEO, Candidate
from vidlink.text_utils import is_http_url, unescape_value


@lru_cache(maxsize=2)
def parse_html(text: str) -> BeautifulSoup:
    """Parsed page shared by the meta tag strategies. Treat the result as read-only."""
    return BeautifulSoup(text, "lxml")


def scan_meta_content(text: str, attr_names: tuple[str, ...], pattern: re.Pattern[str]) -> list[str]:
    """Return the ``content`` of every <meta> whose name-like attribute matches.

    Values come back in document order, trimmed and unescaped, with anything
    that is not an absolute http(s) URL dropped.
    """
    soup = parse_html(text)
    found: list[str] = []
    for meta in soup.find_all("meta"):
        if not any(isinstance(meta.get(attr), str) and pattern.match(meta.get(attr)) for attr in attr_names):
            continue
        content = meta.get("content")
        if not isinstance(content, str):
            continue
        value = unescape_value(content.strip())
        if value and is_http_url(value):
            found.append(value)
    return found


class OpenGraphVideoStrategy:
    name = SOURCE_OG_VIDEO
    property_re = re.compile(r"^og:video(?::url|:secure_url)?$", re.IGNORECASE)

    def scan(self, text: str) -> list[Candidate]:
        return [
            Candidate(url=value, quality=QUALITY_UNKNOWN, source=self.name)
            for value in scan_meta_content(text, ("property",), self.property_re)
        ]
