from __future__ import annotations

from vidlink.models import Candidate


class ResultSet:
    """Insertion-ordered candidates keyed by url. The first report of a url wins."""

    def __init__(self) -> None:
        self._by_url: dict[str, Candidate] = {}

    def add(self, candidate: Candidate) -> bool:
        if candidate.url in self._by_url:
            return False
        self._by_url[candidate.url] = candidate
        return True

    def extend(self, candidates: list[Candidate]) -> int:
        return sum(1 for cand in candidates if self.add(cand))

    def values(self) -> list[Candidate]:
        return list(self._by_url.values())

    def __len__(self) -> int:
        return len(self._by_url)
