"""
Immutable crawler configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from linkcrawler.errors import InvalidUrlError
from linkcrawler.events import EndedObserver, StartedObserver
from linkcrawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from linkcrawler.urls import is_valid_url, normalize_url

DEFAULT_TARGET_DEPTH = 5
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """
    Settings shared by every crawl strategy.

    Instances are never mutated; every with_* method returns a new value.
    Observer tuples are shared between a config and the configs derived
    from it, which is safe because tuples are immutable.
    """
    base_url: Optional[str] = None
    target_depth: int = DEFAULT_TARGET_DEPTH
    ignore_http_errors: bool = True
    started_observers: Tuple[StartedObserver, ...] = ()
    ended_observers: Tuple[EndedObserver, ...] = ()
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        if self.target_depth < 0:
            raise ValueError(f"target_depth must be >= 0, got {self.target_depth}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    def with_url(self, url: str) -> "CrawlConfig":
        if not is_valid_url(url):
            raise InvalidUrlError(url)
        return replace(self, base_url=normalize_url(url))

    def with_target_depth(self, target_depth: int) -> "CrawlConfig":
        return replace(self, target_depth=target_depth)

    def with_ignore_http_errors(self, ignore: bool) -> "CrawlConfig":
        return replace(self, ignore_http_errors=ignore)

    def with_started_observer(self, observer: StartedObserver) -> "CrawlConfig":
        return replace(self, started_observers=self.started_observers + (observer,))

    def with_ended_observer(self, observer: EndedObserver) -> "CrawlConfig":
        return replace(self, ended_observers=self.ended_observers + (observer,))

    def with_timeout(self, timeout: float) -> "CrawlConfig":
        return replace(self, timeout=timeout)

    def with_user_agent(self, user_agent: str) -> "CrawlConfig":
        return replace(self, user_agent=user_agent)

    def with_max_workers(self, max_workers: int) -> "CrawlConfig":
        return replace(self, max_workers=max_workers)
