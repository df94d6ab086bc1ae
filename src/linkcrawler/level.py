"""
Breadth-first crawl strategy with parallel fetching inside each level.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional

from linkcrawler.core import Crawler
from linkcrawler.events import ROOT_PREVIOUS_URL, EventNotifier, PageCrawlStartedEvent
from linkcrawler.state import FrontierNode, LevelFrontier

logger = logging.getLogger(__name__)


class LevelDescendingCrawler(Crawler):
    """
    Crawls the site level by level.

    Every page found at depth D is fetched, concurrently, before any page at
    depth D + 1 is started, so each page is reported at its shortest link
    distance from the seed. Observers are never called concurrently; fetching
    and parsing are.

    A fatal error in one page lets the pages of that level that are already
    running finish, stops the ones that have not started yet, and is raised
    from run() once the level has drained.
    """

    def _reset_state(self) -> None:
        self._frontier = LevelFrontier()
        self._event_lock = threading.RLock()
        self._aborted = threading.Event()

    def _make_notifier(self) -> EventNotifier:
        return EventNotifier(
            self._config.started_observers,
            self._config.ended_observers,
            lock=self._event_lock,
        )

    def _crawl(self, base_url: str) -> None:
        root = FrontierNode(base_url, ROOT_PREVIOUS_URL)
        self._frontier.discover(root.url, root.previous_url, 0)
        self._crawl_page(root, 0)

        with ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix="linkcrawler",
        ) as executor:
            level = 1
            while level <= min(self._config.target_depth, self._frontier.deepest_level()):
                nodes = self._frontier.nodes_at(level)

                logger.debug("Crawling level %d (%d pages)", level, len(nodes))
                futures = [executor.submit(self._crawl_task, node, level) for node in nodes]
                wait(futures)

                for future in futures:
                    error = future.exception()
                    if error is not None:
                        raise error
                level += 1

        logger.debug("Stopped after level %d", level - 1)

    def _crawl_task(self, node: FrontierNode, depth: int) -> None:
        try:
            self._crawl_page(node, depth)
        except BaseException:
            self._aborted.set()
            raise

    def _crawl_page(self, node: FrontierNode, depth: int) -> None:
        links = self._visit(node.url, node.previous_url, depth)
        if links is None:
            return

        for link in links:
            self._frontier.discover(link, node.url, depth + 1)

    def _begin(self, event: PageCrawlStartedEvent) -> bool:
        with self._event_lock:
            if self._aborted.is_set():
                return False
            self._notifier.notify_started(event)
        return True

    def _mark_crawled(self, url: str) -> None:
        self._frontier.mark_crawled(url)

    def has_seen(self, url: str) -> bool:
        return self._frontier.has_seen(url)

    def has_crawled(self, url: str) -> bool:
        return self._frontier.has_crawled(url)

    def depth_of(self, url: str) -> Optional[int]:
        """Depth url was first discovered at, or None if it was never seen."""
        return self._frontier.level_of(url)
