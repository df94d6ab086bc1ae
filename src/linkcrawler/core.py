"""
Crawler base class: chainable configuration, run contract and the per-page
steps shared by every traversal strategy.
"""
from __future__ import annotations

import abc
import logging
from typing import List, Optional, Tuple, TypeVar

from linkcrawler.config import CrawlConfig
from linkcrawler.document import extract_unseen_links, page_title
from linkcrawler.errors import CrawlerError, TransportError
from linkcrawler.events import (
    EndedObserver,
    EventNotifier,
    PageCrawlEndedEvent,
    PageCrawlStartedEvent,
    StartedObserver,
)
from linkcrawler.fetcher import PageFetcher, RequestsFetcher

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="Crawler")


class Crawler(abc.ABC):
    """
    A configured crawl of one site.

    Configuration methods never modify the receiver: each returns a new
    crawler of the same class carrying the updated settings and empty
    traversal state. ``run()`` walks the link graph from the base URL and
    reports every page through the registered observers.

    Example:
        crawler = (
            LevelDescendingCrawler()
            .with_url("https://example.com")
            .with_target_depth(2)
            .on_page_crawl_ended(print)
        )
        crawler.run()
    """

    def __init__(
        self,
        config: Optional[CrawlConfig] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self._config = config if config is not None else CrawlConfig()
        # only an explicitly given fetcher is handed on to derived crawlers
        self._fetcher = fetcher
        self._default_fetcher: Optional[RequestsFetcher] = None
        self._has_run = False
        self._notifier = EventNotifier()
        self._reset_state()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> CrawlConfig:
        return self._config

    @property
    def base_url(self) -> Optional[str]:
        return self._config.base_url

    @property
    def target_depth(self) -> int:
        return self._config.target_depth

    @property
    def ignore_http_errors(self) -> bool:
        return self._config.ignore_http_errors

    @property
    def started_observers(self) -> Tuple[StartedObserver, ...]:
        return self._config.started_observers

    @property
    def ended_observers(self) -> Tuple[EndedObserver, ...]:
        return self._config.ended_observers

    @property
    def fetcher(self) -> PageFetcher:
        """Fetcher used by run(); defaults to requests with the configured timeout/UA."""
        if self._fetcher is not None:
            return self._fetcher
        if self._default_fetcher is None:
            self._default_fetcher = RequestsFetcher(
                timeout=self._config.timeout,
                user_agent=self._config.user_agent,
            )
        return self._default_fetcher

    def _derive(self: C, config: CrawlConfig) -> C:
        return type(self)(config, fetcher=self._fetcher)

    def with_url(self: C, url: str) -> C:
        return self._derive(self._config.with_url(url))

    def with_target_depth(self: C, target_depth: int) -> C:
        return self._derive(self._config.with_target_depth(target_depth))

    def set_ignore_http_errors(self: C, ignore: bool) -> C:
        return self._derive(self._config.with_ignore_http_errors(ignore))

    def on_page_crawl_started(self: C, observer: StartedObserver) -> C:
        return self._derive(self._config.with_started_observer(observer))

    def on_page_crawl_ended(self: C, observer: EndedObserver) -> C:
        return self._derive(self._config.with_ended_observer(observer))

    def with_timeout(self: C, timeout: float) -> C:
        return self._derive(self._config.with_timeout(timeout))

    def with_user_agent(self: C, user_agent: str) -> C:
        return self._derive(self._config.with_user_agent(user_agent))

    def with_max_workers(self: C, max_workers: int) -> C:
        return self._derive(self._config.with_max_workers(max_workers))

    def with_fetcher(self: C, fetcher: PageFetcher) -> C:
        return type(self)(self._config, fetcher=fetcher)

    def clone(self: C, other: "Crawler") -> C:
        """New instance of this strategy configured like ``other``, with empty state."""
        return type(self)(other.config, fetcher=other._fetcher)

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def run(self) -> None:
        """
        Crawl from the base URL down to the target depth.

        Can be called once per instance; use clone() to crawl again with the
        same settings. A TransportError is raised when a page fails and
        ``ignore_http_errors`` is off; the visited state stays queryable.
        """
        if self._has_run:
            raise CrawlerError(f"{type(self).__name__} has already run; clone() it to crawl again")
        if self._config.base_url is None:
            raise CrawlerError("No base URL configured; call with_url() first")

        self._has_run = True
        self._reset_state()
        self._notifier = self._make_notifier()

        logger.info(
            "Starting %s crawl from %s (target depth %d)",
            type(self).__name__, self._config.base_url, self._config.target_depth,
        )
        self._crawl(self._config.base_url)
        logger.info("Finished crawl of %s", self._config.base_url)

    def _make_notifier(self) -> EventNotifier:
        return EventNotifier(self._config.started_observers, self._config.ended_observers)

    def _visit(self, url: str, previous_url: str, depth: int) -> Optional[List[str]]:
        """
        Fetch one page and report it.

        Returns the page's unseen links, or None when the page was skipped
        (too deep, already crawled, suppressed fetch error).
        """
        if depth > self._config.target_depth or self.has_crawled(url):
            return None

        if not self._begin(PageCrawlStartedEvent(depth=depth, url=url, previous_url=previous_url)):
            return None

        try:
            document = self.fetcher.fetch(url)
        except TransportError as e:
            if not self._config.ignore_http_errors:
                raise
            logger.warning("Skipping %s: %s", url, e.reason)
            return None

        links = extract_unseen_links(document, self.has_seen)
        title = page_title(document)

        self._notifier.notify_ended(PageCrawlEndedEvent(
            depth=depth,
            url=url,
            previous_url=previous_url,
            title=title,
            document=document,
        ))
        self._mark_crawled(url)

        logger.debug("Crawled %s at depth %d (+%d links)", url, depth, len(links))
        return links

    def _begin(self, event: PageCrawlStartedEvent) -> bool:
        """Deliver the started event; False means the page must not be fetched."""
        self._notifier.notify_started(event)
        return True

    # ------------------------------------------------------------------
    # Strategy hooks
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def _reset_state(self) -> None:
        """Replace the visited state with an empty one."""

    @abc.abstractmethod
    def _crawl(self, base_url: str) -> None:
        """Traverse the link graph starting at base_url."""

    @abc.abstractmethod
    def _mark_crawled(self, url: str) -> None: ...

    @abc.abstractmethod
    def has_seen(self, url: str) -> bool:
        """Whether url was discovered. It is not necessarily crawled yet."""

    @abc.abstractmethod
    def has_crawled(self, url: str) -> bool:
        """Whether url was fetched and parsed successfully."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_url={self.base_url!r}, "
            f"target_depth={self.target_depth}, ignore_http_errors={self.ignore_http_errors})"
        )


