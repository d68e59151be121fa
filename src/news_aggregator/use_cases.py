"""Business logic use cases."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from news_aggregator.core import (
    FeedRegistration,
    FeedRegistry,
    InvalidQueryError,
    NewsItem,
    NewsSource,
    NewsStore,
    RefreshReport,
    SourceListing,
    SourceOutcome,
)
from news_aggregator.core.entities import ensure_utc

logger = logging.getLogger(__name__)

ALL_SOURCES = "all"
RSS_PREFIX = "rss:"

DEFAULT_FEED_LIMIT = 30
DEFAULT_SEARCH_LIMIT = 50


class AggregationService:
    """Refresh the cache from every source and answer feed queries.

    The store, registry and sources are handed in once at start-up; the
    service holds no other state.
    """

    def __init__(
        self,
        store: NewsStore,
        registry: FeedRegistry,
        hackernews: NewsSource,
        rss_source_factory: Callable[[FeedRegistration], NewsSource],
        fetch_timeout: float = 10.0,
        hackernews_limit: int = 30,
        rss_limit: int = 50,
        retention_days: int = 7,
    ) -> None:
        self.store = store
        self.registry = registry
        self.hackernews = hackernews
        self.rss_source_factory = rss_source_factory
        self.fetch_timeout = fetch_timeout
        self.hackernews_limit = hackernews_limit
        self.rss_limit = rss_limit
        self.retention_days = retention_days

    def list_sources(self) -> SourceListing:
        """Configured sources and sources with cached data, reported separately."""
        feeds = self.registry.list_feeds()
        return SourceListing(
            configured=[self.hackernews.name] + [feed.source_tag for feed in feeds],
            cached=self.store.list_sources(),
        )

    def get_feed(
        self,
        source: Optional[str] = None,
        limit: Optional[int] = DEFAULT_FEED_LIMIT,
        hours_ago: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> list[NewsItem]:
        """Return cached items, best ranked first.

        Args:
            source: Exact source tag, or "all"/None for every source
            limit: Maximum number of items (None for no limit)
            hours_ago: Only items published within the last N hours
            now: Reference time for ``hours_ago``
        """
        selector = self._normalize_selector(source)

        since = None
        if hours_ago is not None:
            if hours_ago <= 0:
                raise InvalidQueryError(f"hours_ago must be positive, got {hours_ago!r}")
            now = ensure_utc(now) if now else datetime.now(timezone.utc)
            since = now - timedelta(hours=hours_ago)

        return self.store.query(source=selector, since=since, limit=limit)

    async def refresh(self, source: Optional[str] = None) -> RefreshReport:
        """Fetch the selected sources concurrently and upsert each batch.

        A failing or slow source is recorded in the report and does not stop
        the others. Store errors propagate.
        """
        targets = self._select_sources(source)

        results = await asyncio.gather(
            *(self._fetch_source(target, limit) for target, limit in targets)
        )

        report = RefreshReport()
        for (target, _), (items, error) in zip(targets, results):
            if error is not None:
                report.outcomes.append(SourceOutcome(source=target.name, error=error))
                continue
            count = self.store.upsert_batch(items)
            report.outcomes.append(SourceOutcome(source=target.name, item_count=count))

        logger.info(
            "Refresh finished: %d items, %d source(s) failed",
            report.total_items,
            len(report.failures),
        )
        return report

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[NewsItem]:
        return self.store.search(query, limit)

    def add_rss_feed(
        self, name: str, url: str, refresh_interval_minutes: Optional[int] = None
    ) -> FeedRegistration:
        """Register a feed; raises DuplicateFeedError if the URL or name is taken."""
        try:
            registration = FeedRegistration(
                name=name.strip(),
                url=url.strip(),
                refresh_interval_minutes=refresh_interval_minutes,
            )
        except ValueError as e:
            raise InvalidQueryError(str(e)) from e

        self.registry.add_feed(registration)
        return registration

    def remove_rss_feed(self, name: str) -> bool:
        """Remove a feed by name; False means no such feed was registered."""
        return self.registry.remove_feed(name)

    def prune(self, days: Optional[float] = None) -> int:
        """Evict items cached longer than the retention window."""
        return self.store.evict_older_than(self.retention_days if days is None else days)

    async def _fetch_source(
        self, source: NewsSource, limit: int
    ) -> tuple[list[NewsItem], Optional[str]]:
        """Fetch one source, converting any failure into an error message."""
        try:
            items = await asyncio.wait_for(source.fetch_items(limit), timeout=self.fetch_timeout)
        except asyncio.TimeoutError:
            error = f"timed out after {self.fetch_timeout:g}s"
        except Exception as e:
            error = str(e) or e.__class__.__name__
        else:
            return items, None

        logger.warning("Failed to refresh %s: %s", source.name, error)
        return [], error

    def _select_sources(self, source: Optional[str]) -> list[tuple[NewsSource, int]]:
        selector = self._normalize_selector(source)
        feeds = self.registry.list_feeds()

        if selector is None:
            return [(self.hackernews, self.hackernews_limit)] + [
                (self.rss_source_factory(feed), self.rss_limit) for feed in feeds
            ]

        if selector == self.hackernews.name:
            return [(self.hackernews, self.hackernews_limit)]

        if selector.startswith(RSS_PREFIX):
            matching = [feed for feed in feeds if feed.source_tag == selector]
            if not matching:
                raise InvalidQueryError(f"No RSS feed registered as {selector!r}")
            return [(self.rss_source_factory(feed), self.rss_limit) for feed in matching]

        raise InvalidQueryError(f"Unknown source {selector!r}")

    @staticmethod
    def _normalize_selector(source: Optional[str]) -> Optional[str]:
        """Map None/"all" to no filter; reject blank selectors."""
        if source is None:
            return None
        selector = source.strip()
        if not selector:
            raise InvalidQueryError("Source selector cannot be blank")
        if selector == ALL_SOURCES:
            return None
        return selector
