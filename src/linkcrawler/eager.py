"""
Depth-first crawl strategy.
"""
from __future__ import annotations

import logging

from linkcrawler.core import Crawler
from linkcrawler.events import ROOT_PREVIOUS_URL
from linkcrawler.state import VisitedState

logger = logging.getLogger(__name__)


class EagerDescendingCrawler(Crawler):
    """
    Follows every link as soon as it is found, exhausting a branch before
    moving on to its siblings.

    Because a URL is only crawled once, a page linked from the seed can end
    up being visited as a deep descendant of an earlier sibling instead, and
    is then reported with that deeper depth. A page whose earlier visit was
    cut short (too deep, or a suppressed fetch error) is tried again when it
    comes up in a later link list. Use LevelDescendingCrawler when every page
    should be reported at its shortest distance from the seed.
    """

    def _reset_state(self) -> None:
        self._state = VisitedState()

    def _crawl(self, base_url: str) -> None:
        self._state.mark_seen(base_url)
        self._crawl_page(base_url, ROOT_PREVIOUS_URL, 0)

    def _crawl_page(self, url: str, previous_url: str, depth: int) -> None:
        links = self._visit(url, previous_url, depth)
        if links is None:
            return

        for link in links:
            self._state.mark_seen(link)
            self._crawl_page(link, url, depth + 1)

    def _mark_crawled(self, url: str) -> None:
        self._state.mark_crawled(url)

    def has_seen(self, url: str) -> bool:
        return self._state.has_seen(url)

    def has_crawled(self, url: str) -> bool:
        return self._state.has_crawled(url)
