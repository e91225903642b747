from __future__ import annotations

import re

from vidlink.models import QUALITY_HD, QUALITY_SD, QUALITY_UNKNOWN, SOURCE_JSON_BLOB, Candidate
from vidlink.text_utils import is_http_url, unescape_json_value

# Scanned in this order; earlier keys win attribution for a shared url.
PLAYABLE_KEYS = [
    r"playable_url_quality_hd",
    r"playable_url_quality_low",
    r"playable_url",
    r"playable_url_quality[^\"]*",
    r"hd_src_no_ratelimit",
    r"sd_src_no_ratelimit",
    r"hd_src",
    r"sd_src",
    r"playable_url_no_dash",
]

_HD_RE = re.compile(r"hd", re.IGNORECASE)
_SD_RE = re.compile(r"sd|low", re.IGNORECASE)


def _key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(
        r'"(?P<key>' + key + r')"\s*:\s*(?:"(?P<dq>[^"]+)"|\'(?P<sq>[^\']+)\')',
        re.IGNORECASE,
    )


def guess_quality(key: str) -> str:
    if _HD_RE.search(key):
        return QUALITY_HD
    if _SD_RE.search(key):
        return QUALITY_SD
    return QUALITY_UNKNOWN


class JsonBlobStrategy:
    """Pull playable urls out of JSON inlined anywhere in the page (script blobs, relay payloads)."""

    name = SOURCE_JSON_BLOB

    def __init__(self, keys: list[str] | None = None) -> None:
        self.patterns = [_key_pattern(key) for key in (keys or PLAYABLE_KEYS)]

    def scan(self, text: str) -> list[Candidate]:
        candidates: list[Candidate] = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                raw = match.group("dq") or match.group("sq")
                if not raw:
                    continue
                value = unescape_json_value(raw.strip())
                if not is_http_url(value):
                    continue
                candidates.append(Candidate(url=value, quality=guess_quality(match.group("key")), source=self.name))
        return candidates
