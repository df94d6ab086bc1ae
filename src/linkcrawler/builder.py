"""
Factory for crawler instances.
"""
from __future__ import annotations

from typing import Dict, Optional, Type, TypeVar

from linkcrawler.config import CrawlConfig
from linkcrawler.core import Crawler
from linkcrawler.eager import EagerDescendingCrawler
from linkcrawler.fetcher import PageFetcher
from linkcrawler.level import LevelDescendingCrawler

C = TypeVar("C", bound=Crawler)

STRATEGIES: Dict[str, Type[Crawler]] = {
    "eager": EagerDescendingCrawler,
    "level": LevelDescendingCrawler,
}


def create(
    crawler_cls: Type[C],
    config: Optional[CrawlConfig] = None,
    fetcher: Optional[PageFetcher] = None,
) -> C:
    """Return a new crawler of the given strategy with default (or given) settings."""
    return crawler_cls(config, fetcher=fetcher)


def create_by_name(
    name: str,
    config: Optional[CrawlConfig] = None,
    fetcher: Optional[PageFetcher] = None,
) -> Crawler:
    """Same as create(), looking the strategy up by its short name ("eager" or "level")."""
    try:
        crawler_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown crawl strategy {name!r}; expected one of {', '.join(sorted(STRATEGIES))}"
        ) from None
    return create(crawler_cls, config, fetcher)
