from __future__ import annotations


class VidlinkError(Exception):
    """Base class for failures the boundary layers know how to report."""


class InvalidInput(VidlinkError):
    pass


class ConfigError(VidlinkError):
    pass


class UpstreamUnavailable(VidlinkError):
    """The source page could not be fetched (network failure, bad status or timeout)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeout(UpstreamUnavailable):
    def __init__(self, url: str, timeout_seconds: float) -> None:
        super().__init__(f"Remote fetch timed out after {timeout_seconds:g}s", url=url)
        self.timeout_seconds = timeout_seconds


class UpstreamStatus(UpstreamUnavailable):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Remote fetch failed: {status_code}", url=url)
        self.status_code = status_code
