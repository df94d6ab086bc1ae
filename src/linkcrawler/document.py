"""
Parsed HTML documents and link extraction.
"""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from bs4 import BeautifulSoup

from linkcrawler.urls import is_valid_url, normalize_url

NO_TITLE = "No title"


@dataclass(frozen=True, slots=True)
class Anchor:
    """A single <a> element; href is None when the attribute is missing."""
    href: Optional[str] = None


class DocumentParser(Protocol):
    """What the crawler needs from a parsed page."""

    def anchors(self) -> List[Anchor]: ...

    def title(self) -> Optional[str]: ...


class Document:
    """HTML page parsed with BeautifulSoup (lxml backend)."""

    __slots__ = ("soup",)

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, markup: str) -> "Document":
        return cls(BeautifulSoup(markup, "lxml"))

    def anchors(self) -> List[Anchor]:
        """All <a> elements in document order."""
        return [Anchor(href=a.get("href")) for a in self.soup.find_all("a")]

    def title(self) -> Optional[str]:
        """Raw text of the first <title> element, or None if there is none."""
        tag = self.soup.find("title")
        if tag is None:
            return None
        return tag.get_text()

    def __repr__(self) -> str:
        return f"<Document title={self.title()!r}>"


def extract_unseen_links(
    document: DocumentParser,
    has_been_seen: Callable[[str], bool],
) -> List[str]:
    """
    Return normalized outbound links not yet seen, in document order.

    Anchors without href and hrefs that are not absolute http(s) URLs are
    dropped. Surrounding whitespace is trimmed from each href before it is
    validated and normalized. Duplicates within the page keep their first
    position.
    """
    links: List[str] = []
    found: set[str] = set()

    for anchor in document.anchors():
        if anchor.href is None:
            continue
        href = anchor.href.strip()
        if not is_valid_url(href):
            continue

        target = normalize_url(href)
        if target in found:
            continue
        found.add(target)

        if not has_been_seen(target):
            links.append(target)

    return links


def page_title(document: DocumentParser) -> str:
    """Page title with HTML entities decoded, or "No title"."""
    title = document.title()
    if title is None:
        return NO_TITLE
    return html.unescape(title)
