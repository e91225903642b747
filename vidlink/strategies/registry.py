from __future__ import annotations

from typing import Protocol

from vidlink.errors import ConfigError
from vidlink.models import Candidate
from vidlink.strategies.direct_link import DirectLinkStrategy
from vidlink.strategies.json_blob import JsonBlobStrategy
from vidlink.strategies.og_video import OpenGraphVideoStrategy
from vidlink.strategies.player_stream import PlayerStreamStrategy


class Strategy(Protocol):
    name: str

    def scan(self, text: str) -> list[Candidate]: ...


# Fixed scan order. The direct-link heuristic is the last resort.
STRATEGY_TYPES = [
    OpenGraphVideoStrategy,
    JsonBlobStrategy,
    PlayerStreamStrategy,
    DirectLinkStrategy,
]
ALL_STRATEGIES = [strategy_type.name for strategy_type in STRATEGY_TYPES]


def build_strategies(names: list[str] | None = None) -> list[Strategy]:
    """Instantiate the selected strategies, always in the fixed scan order."""
    if names is None:
        return [strategy_type() for strategy_type in STRATEGY_TYPES]

    unknown = [name for name in names if name not in ALL_STRATEGIES]
    if unknown:
        raise ConfigError(f"Unknown strategy(s): {','.join(unknown)}")
    if len(set(names)) != len(names):
        raise ConfigError(f"Duplicate strategy name(s): {','.join(names)}")
    return [strategy_type() for strategy_type in STRATEGY_TYPES if strategy_type.name in names]
