from __future__ import annotations

from dataclasses import dataclass, field

QUALITY_HD = "hd"
QUALITY_SD = "sd"
QUALITY_UNKNOWN = "unknown"

SOURCE_OG_VIDEO = "og:video"
SOURCE_JSON_BLOB = "json-blob"
SOURCE_PLAYER_STREAM = "twitter:player:stream"
SOURCE_DIRECT_LINK = "direct-link"


@dataclass(slots=True)
class Candidate:
    url: str
    quality: str
    source: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "quality": self.quality, "source": self.source}


@dataclass(slots=True)
class ExtractionOutcome:
    page_url: str
    candidates: list[Candidate] = field(default_factory=list)
    # Bounded prefix of the fetched page, only populated when nothing was found.
    debug_snippet: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.candidates)

    def to_payload(self) -> dict:
        return {"status": "success", "data": [c.to_dict() for c in self.candidates]}
