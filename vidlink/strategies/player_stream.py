from __future__ import annotations

import re

from vidlink.models import QUALITY_UNKNOWN, SOURCE_PLAYER_STREAM, Candidate
from vidlink.strategies.og_video import scan_meta_content


class PlayerStreamStrategy:
    name = SOURCE_PLAYER_STREAM
    # Twitter cards use name=, some pages emit property= instead.
    attr_names = ("name", "property")
    stream_re = re.compile(r"^twitter:player:stream(?::source)?$", re.IGNORECASE)

    def scan(self, text: str) -> list[Candidate]:
        return [
            Candidate(url=value, quality=QUALITY_UNKNOWN, source=self.name)
            for value in scan_meta_content(text, self.attr_names, self.stream_re)
        ]
