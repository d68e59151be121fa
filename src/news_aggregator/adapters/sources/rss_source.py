"""RSS/Atom feed source."""

import calendar
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import feedparser
import httpx

from news_aggregator.adapters.sources.text import strip_html
from news_aggregator.core import FeedRegistration, NewsItem, NewsSource, SourceFetchError, make_item_id
from news_aggregator.core.ranking import rank_item

logger = logging.getLogger(__name__)

USER_AGENT = "news-aggregator/1.0"


class RSSFeedSource(NewsSource):
    """Fetch entries from a registered RSS or Atom feed."""

    def __init__(
        self,
        registration: FeedRegistration,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.registration = registration
        self.name = registration.source_tag
        self.timeout = timeout
        self.transport = transport

    async def fetch_items(self, limit: int = 50) -> list[NewsItem]:
        """Download and parse the feed, returning up to ``limit`` ranked items."""
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        ) as client:
            try:
                response = await client.get(self.registration.url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise SourceFetchError(self.name, f"could not download {self.registration.url}: {e}") from e

        parsed = feedparser.parse(response.content)
        if parsed.bozo and not parsed.entries:
            raise SourceFetchError(self.name, f"could not parse feed: {parsed.get('bozo_exception')}")

        now = datetime.now(timezone.utc)
        items = []
        for entry in parsed.entries[:limit]:
            item = self._create_item(entry, now)
            if item:
                items.append(rank_item(item, now))

        logger.info("%s: fetched %d entries", self.name, len(items))
        return items

    def _create_item(self, entry: Any, now: datetime) -> Optional[NewsItem]:
        link = (entry.get("link") or "").strip()
        if not link:
            logger.debug("%s: skipping entry without link: %s", self.name, entry.get("title"))
            return None

        title = strip_html(entry.get("title")) or "Untitled"
        upstream_id = entry.get("id") or link or title

        return NewsItem(
            id=make_item_id(self.name, upstream_id),
            source=self.name,
            title=title,
            url=link,
            content=strip_html(self._raw_content(entry)) or None,
            author=entry.get("author") or None,
            published_at=self._published_at(entry) or now,
            cached_at=now,
        )

    @staticmethod
    def _raw_content(entry: Any) -> str:
        """Prefer full content (content:encoded) over summary/description."""
        for block in entry.get("content") or []:
            value = block.get("value")
            if value:
                return value
        return entry.get("summary") or entry.get("description") or ""

    @staticmethod
    def _published_at(entry: Any) -> Optional[datetime]:
        for key in ("published_parsed", "updated_parsed", "created_parsed"):
            parsed = entry.get(key)
            if parsed:
                return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        return None
