from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Iterable, List, Optional

import pytest

from linkcrawler import Document, PageCrawlEndedEvent, PageCrawlStartedEvent, TransportError

SITE = "http://site.test/"


def url(path: str) -> str:
    """Normalized URL of a page on the fake site."""
    return f"{SITE}{path}/" if path else SITE


def page(title: Optional[str], *links: str) -> str:
    head = f"<head><title>{title}</title></head>" if title is not None else "<head></head>"
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return f"<html>{head}<body>{anchors}</body></html>"


class FakeFetcher:
    """In-memory PageFetcher; unknown URLs fail like a 404."""

    def __init__(self, pages: Dict[str, str], delays: Optional[Dict[str, float]] = None) -> None:
        self.pages = pages
        self.delays = delays or {}
        self.requested: List[str] = []
        self._lock = threading.Lock()

    def fetch(self, target: str) -> Document:
        with self._lock:
            self.requested.append(target)
        if target in self.delays:
            time.sleep(self.delays[target])
        if target not in self.pages:
            raise TransportError(target, "404 Client Error: Not Found")
        return Document.from_html(self.pages[target])


class Recorder:
    """Observer pair that keeps every event in arrival order."""

    def __init__(self) -> None:
        self.log: List[object] = []
        self._lock = threading.Lock()

    def started(self, event: PageCrawlStartedEvent) -> None:
        with self._lock:
            self.log.append(event)

    def ended(self, event: PageCrawlEndedEvent) -> None:
        with self._lock:
            self.log.append(event)

    @property
    def started_events(self) -> List[PageCrawlStartedEvent]:
        return [e for e in self.log if isinstance(e, PageCrawlStartedEvent)]

    @property
    def ended_events(self) -> List[PageCrawlEndedEvent]:
        return [e for e in self.log if isinstance(e, PageCrawlEndedEvent)]

    @property
    def started_urls(self) -> List[str]:
        return [e.url for e in self.started_events]

    @property
    def ended_urls(self) -> List[str]:
        return [e.url for e in self.ended_events]

    def attach(self, crawler):
        return crawler.on_page_crawl_started(self.started).on_page_crawl_ended(self.ended)


def make_site(graph: Dict[str, Iterable[str]]) -> Dict[str, str]:
    """Build pages from {path: [linked paths]}; titles are the upper-cased path."""
    return {
        url(path): page(path.upper() or "Home", *(url(link) for link in links))
        for path, links in graph.items()
    }


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture(autouse=True)
def reset_crawler_logger():
    yield
    logger = logging.getLogger("linkcrawler")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
