"""
Exception hierarchy for the crawler.
"""
from __future__ import annotations


class CrawlerError(Exception):
    """Base class for every error raised by the crawler."""


class TransportError(CrawlerError):
    """A page could not be fetched (connection failure, timeout, non-2xx)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.reason = reason


class InvalidUrlError(CrawlerError, ValueError):
    """A URL is not an absolute http(s) URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url!r} (expected absolute http or https URL)")
        self.url = url


class LevelNotFoundError(CrawlerError, LookupError):
    """A frontier level was requested that was never populated."""

    def __init__(self, level: int) -> None:
        super().__init__(f"Requested level {level} not found")
        self.level = level
