"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from news_aggregator.core.entities import FeedRegistration, NewsItem


class NewsSource(ABC):
    """Interface for fetching normalized, ranked items from an upstream feed."""

    name: str

    @abstractmethod
    async def fetch_items(self, limit: int) -> list[NewsItem]:
        """Fetch up to ``limit`` items; raise SourceFetchError on failure."""
        pass


class NewsStore(ABC):
    """Interface for the durable item cache."""

    @abstractmethod
    def upsert(self, item: NewsItem) -> None:
        """Insert or fully replace the item with the same id."""
        pass

    @abstractmethod
    def upsert_batch(self, items: Iterable[NewsItem]) -> int:
        """Upsert all items atomically; return how many were written."""
        pass

    @abstractmethod
    def query(
        self,
        source: Optional[str] = None,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[NewsItem]:
        """Filter by source and publication time, best ranked first."""
        pass

    @abstractmethod
    def search(self, text: str, limit: int = 50) -> list[NewsItem]:
        """Substring search over title and content, best ranked first."""
        pass

    @abstractmethod
    def list_sources(self) -> list[str]:
        """Distinct sources with cached items."""
        pass

    @abstractmethod
    def evict_older_than(self, days: float = 7, now: Optional[datetime] = None) -> int:
        """Delete items cached before ``now - days``; return the count."""
        pass


class FeedRegistry(ABC):
    """Interface for the persisted list of RSS feed registrations."""

    @abstractmethod
    def list_feeds(self) -> list[FeedRegistration]:
        pass

    @abstractmethod
    def add_feed(self, registration: FeedRegistration) -> None:
        """Persist a new registration; raise DuplicateFeedError if known."""
        pass

    @abstractmethod
    def remove_feed(self, name: str) -> bool:
        """Remove by name; return whether a registration was removed."""
        pass
