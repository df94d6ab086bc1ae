"""
Website crawler with pluggable depth-first and level-by-level traversal.
Reports every visited page (title, URL, originating link) to observers.
"""
from linkcrawler.builder import create, create_by_name
from linkcrawler.config import CrawlConfig
from linkcrawler.core import Crawler
from linkcrawler.document import Anchor, Document, extract_unseen_links, page_title
from linkcrawler.eager import EagerDescendingCrawler
from linkcrawler.errors import CrawlerError, InvalidUrlError, LevelNotFoundError, TransportError
from linkcrawler.events import PageCrawlEndedEvent, PageCrawlStartedEvent
from linkcrawler.fetcher import PageFetcher, RequestsFetcher
from linkcrawler.level import LevelDescendingCrawler
from linkcrawler.urls import is_valid_url, normalize_url

__version__ = "1.0.0"
__all__ = [
    "Anchor",
    "CrawlConfig",
    "Crawler",
    "CrawlerError",
    "Document",
    "EagerDescendingCrawler",
    "InvalidUrlError",
    "LevelDescendingCrawler",
    "LevelNotFoundError",
    "PageCrawlEndedEvent",
    "PageCrawlStartedEvent",
    "PageFetcher",
    "RequestsFetcher",
    "TransportError",
    "create",
    "create_by_name",
    "extract_unseen_links",
    "is_valid_url",
    "normalize_url",
    "page_title",
]
