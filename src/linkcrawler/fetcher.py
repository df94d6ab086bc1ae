"""
HTTP transport: downloads pages and hands them to the HTML parser.
"""
from __future__ import annotations

import logging
import threading
from typing import Protocol

import requests

from linkcrawler.document import Document
from linkcrawler.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "linkcrawler/1.0"


class PageFetcher(Protocol):
    """Anything that turns a URL into a parsed Document."""

    def fetch(self, url: str) -> Document: ...


class RequestsFetcher:
    """
    Fetch pages with requests.

    Each thread gets its own Session so the level crawler's worker pool never
    shares connection state between threads.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.user_agent
            self._local.session = session
        return session

    def fetch(self, url: str) -> Document:
        """Download url and parse it; raise TransportError on any HTTP failure."""
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e

        logger.debug("GET %s -> %s (%d bytes)", url, resp.status_code, len(resp.content))
        return Document.from_html(resp.text)

    def __repr__(self) -> str:
        return f"RequestsFetcher(timeout={self.timeout!r}, user_agent={self.user_agent!r})"
