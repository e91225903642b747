from __future__ import annotations

import os
from dataclasses import dataclass, field

from vidlink.errors import ConfigError
from vidlink.strategies.registry import ALL_STRATEGIES
from vidlink.text_utils import MAX_DEBUG_SNIPPET_CHARS

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class ExtractConfig:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    # e.g. "https://api.allorigins.win/raw?url={url}"; None means fetch the page directly.
    relay_url: str | None = None

    # 0 disables the snippet in not-found responses.
    debug_snippet_chars: int = MAX_DEBUG_SNIPPET_CHARS

    strategies: list[str] = field(default_factory=lambda: list(ALL_STRATEGIES))

    @classmethod
    def from_env(cls) -> ExtractConfig:
        config = cls()

        raw_timeout = os.getenv("VIDLINK_TIMEOUT_SECONDS")
        if raw_timeout:
            try:
                config.timeout_seconds = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError(f"VIDLINK_TIMEOUT_SECONDS is not a number: {raw_timeout!r}") from exc
            if config.timeout_seconds <= 0:
                raise ConfigError("VIDLINK_TIMEOUT_SECONDS must be positive")

        user_agent = os.getenv("VIDLINK_USER_AGENT")
        if user_agent:
            config.user_agent = user_agent

        relay_url = os.getenv("VIDLINK_RELAY_URL")
        if relay_url:
            config.relay_url = relay_url

        raw_snippet = os.getenv("VIDLINK_DEBUG_SNIPPET_CHARS")
        if raw_snippet:
            try:
                chars = int(raw_snippet)
            except ValueError as exc:
                raise ConfigError(f"VIDLINK_DEBUG_SNIPPET_CHARS is not an integer: {raw_snippet!r}") from exc
            config.debug_snippet_chars = max(0, min(chars, MAX_DEBUG_SNIPPET_CHARS))

        raw_strategies = os.getenv("VIDLINK_STRATEGIES")
        if raw_strategies:
            config.strategies = parse_csv(raw_strategies)

        config.validate()
        # Selection only; scan order stays fixed.
        config.strategies = [name for name in ALL_STRATEGIES if name in config.strategies]
        return config

    def validate(self) -> None:
        if self.relay_url is not None and "{url}" not in self.relay_url:
            raise ConfigError("relay url must contain a {url} placeholder")
        unknown = [name for name in self.strategies if name not in ALL_STRATEGIES]
        if unknown:
            raise ConfigError(f"Unknown strategy(s): {','.join(unknown)}")
        if len(set(self.strategies)) != len(self.strategies):
            raise ConfigError(f"Duplicate strategy name(s): {','.join(self.strategies)}")
        if not self.strategies:
            raise ConfigError("at least one strategy is required")


def parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
