"""
Visited-state tracking for both crawl strategies.

Both trackers answer the same two questions: has a URL been *seen*
(discovered and scheduled, possibly not fetched yet) and has it been
*crawled* (fetched and parsed successfully).
"""
from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from linkcrawler.errors import LevelNotFoundError


class VisitedState:
    """
    Flat seen/crawled sets for the eager crawler.

    Every mutation swaps in a new frozenset rather than growing the old one.
    """

    def __init__(self) -> None:
        self._seen: FrozenSet[str] = frozenset()
        self._crawled: FrozenSet[str] = frozenset()

    def has_seen(self, url: str) -> bool:
        return url in self._seen

    def has_crawled(self, url: str) -> bool:
        return url in self._crawled

    def mark_seen(self, url: str) -> None:
        self._seen = self._seen | {url}

    def mark_crawled(self, url: str) -> None:
        self._crawled = self._crawled | {url}


@dataclass(frozen=True, slots=True)
class FrontierNode:
    """A discovered link waiting to be fetched at its level."""
    url: str
    previous_url: str


class LevelFrontier:
    """
    Seen URLs partitioned by the depth they were first discovered at.

    Pages of one level are crawled by several threads at once, so every
    read and write goes through a single lock. ``discover`` checks and
    records in one step; two pages that link to the same URL therefore
    schedule it only once.
    """

    def __init__(self) -> None:
        self._levels: Dict[int, List[FrontierNode]] = defaultdict(list)
        self._index: Dict[str, int] = {}
        self._crawled: set[str] = set()
        self._lock = threading.Lock()

    def discover(self, url: str, previous_url: str, level: int) -> bool:
        """Record url at level unless it was seen before. Returns True if recorded."""
        with self._lock:
            if url in self._index:
                return False
            self._index[url] = level
            self._levels[level].append(FrontierNode(url, previous_url))
            return True

    def has_seen(self, url: str) -> bool:
        with self._lock:
            return url in self._index

    def level_of(self, url: str) -> Optional[int]:
        """Depth url was first discovered at, or None if never seen."""
        with self._lock:
            return self._index.get(url)

    def level(self, level: int) -> List[FrontierNode]:
        """Snapshot of the nodes recorded at level; raises if it was never populated."""
        with self._lock:
            if level not in self._levels:
                raise LevelNotFoundError(level)
            return list(self._levels[level])

    def nodes_at(self, level: int) -> List[FrontierNode]:
        """Like level(), but an unpopulated level is simply empty."""
        with self._lock:
            return list(self._levels.get(level, ()))

    def deepest_level(self) -> int:
        """Highest populated level, or -1 when nothing was recorded."""
        with self._lock:
            return max(self._levels, default=-1)

    def has_crawled(self, url: str) -> bool:
        with self._lock:
            return url in self._crawled

    def mark_crawled(self, url: str) -> None:
        with self._lock:
            self._crawled.add(url)
