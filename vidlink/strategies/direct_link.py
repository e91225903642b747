from __future__ import annotations

import html
import re

from vidlink.models import QUALITY_UNKNOWN, SOURCE_DIRECT_LINK, Candidate
from vidlink.text_utils import is_http_url, unescape_value

# Host must start with "video"; the tail stops at whitespace, quotes and angle brackets.
DIRECT_LINK_RE = re.compile(
    r"(https?://video[-.\w/%=?&\[\]]+"
    r"(?:\.mp4|drm|&dl=1|_nc_cat|fbcdn\.net|cdn\.instagram\.com)"
    r"[^\s\"'<>]*)",
    re.IGNORECASE,
)


class DirectLinkStrategy:
    name = SOURCE_DIRECT_LINK

    def scan(self, text: str) -> list[Candidate]:
        candidates: list[Candidate] = []
        for match in DIRECT_LINK_RE.finditer(text):
            # Meta attributes come back entity-decoded from the parser; match that here.
            value = unescape_value(html.unescape(match.group(1)))
            if is_http_url(value):
                candidates.append(Candidate(url=value, quality=QUALITY_UNKNOWN, source=self.name))
        return candidates
