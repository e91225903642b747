from __future__ import annotations

import logging
from typing import Sequence

from vidlink.dedup import ResultSet
from vidlink.models import Candidate
from vidlink.strategies.registry import Strategy, build_strategies

LOGGER = logging.getLogger(__name__)


def extract(text: str, strategies: Sequence[Strategy] | None = None) -> list[Candidate]:
    """Run every strategy over the whole text and merge the hits.

    Strategies never short-circuit each other. A url reported by more than one
    strategy keeps the quality/source of the first report, in strategy order.
    An empty list means nothing recognizable was found.
    """
    if strategies is None:
        strategies = build_strategies()

    results = ResultSet()
    for strategy in strategies:
        found = strategy.scan(text)
        added = results.extend(found)
        LOGGER.debug(f"strategy={strategy.name} matched={len(found)} new={added}")

    candidates = results.values()
    LOGGER.info(f"Extracted {len(candidates)} unique video url(s)")
    return candidates
