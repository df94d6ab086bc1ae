"""
Crawl lifecycle events and their delivery to observers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Sequence

from linkcrawler.document import Document

ROOT_PREVIOUS_URL = "Root"


@dataclass(frozen=True, slots=True)
class PageCrawlStartedEvent:
    """Emitted right before a page is fetched."""
    depth: int
    url: str
    previous_url: str


@dataclass(frozen=True, slots=True)
class PageCrawlEndedEvent:
    """Emitted after a page was fetched and parsed. Never sent for failed fetches."""
    depth: int
    url: str
    previous_url: str
    title: str
    document: Document


StartedObserver = Callable[[PageCrawlStartedEvent], None]
EndedObserver = Callable[[PageCrawlEndedEvent], None]


class EventNotifier:
    """
    Calls observers in registration order with the same event value.

    Observer exceptions propagate to the caller. When a lock is given, each
    delivery holds it, so observers never run concurrently with each other.
    """

    def __init__(
        self,
        started_observers: Sequence[StartedObserver] = (),
        ended_observers: Sequence[EndedObserver] = (),
        lock: Optional[ContextManager] = None,
    ) -> None:
        self.started_observers = tuple(started_observers)
        self.ended_observers = tuple(ended_observers)
        self._lock = lock

    def notify_started(self, event: PageCrawlStartedEvent) -> None:
        if self._lock is None:
            self._deliver(self.started_observers, event)
        else:
            with self._lock:
                self._deliver(self.started_observers, event)

    def notify_ended(self, event: PageCrawlEndedEvent) -> None:
        if self._lock is None:
            self._deliver(self.ended_observers, event)
        else:
            with self._lock:
                self._deliver(self.ended_observers, event)

    @staticmethod
    def _deliver(observers, event) -> None:
        for observer in observers:
            observer(event)
