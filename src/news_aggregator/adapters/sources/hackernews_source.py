"""Hacker News Firebase API source."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from news_aggregator.adapters.sources.text import strip_html
from news_aggregator.core import Engagement, NewsItem, NewsSource, SourceFetchError, make_item_id
from news_aggregator.core.ranking import rank_item

logger = logging.getLogger(__name__)


class HackerNewsSource(NewsSource):
    """Fetch stories from one of the Hacker News story lists."""

    # Story list endpoints; "top" is the default front page.
    FEEDS = {
        "top": "topstories",
        "best": "beststories",
        "new": "newstories",
    }

    def __init__(
        self,
        feed: str = "top",
        timeout: float = 10.0,
        base_url: str = "https://hacker-news.firebaseio.com/v0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if feed not in self.FEEDS:
            raise ValueError(f"Unknown Hacker News feed {feed!r}, expected one of {sorted(self.FEEDS)}")
        self.feed = feed
        self.name = "hackernews" if feed == "top" else f"hackernews:{feed}"
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def fetch_items(self, limit: int = 30) -> list[NewsItem]:
        """Fetch up to ``limit`` stories from the configured list."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/{self.FEEDS[self.feed]}.json")
                response.raise_for_status()
                story_ids = response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise SourceFetchError(self.name, f"could not load story list: {e}") from e

            if not isinstance(story_ids, list):
                raise SourceFetchError(self.name, "story list is not a JSON array")

            stories = await asyncio.gather(
                *(self._fetch_story(client, story_id) for story_id in story_ids[:limit])
            )

        now = datetime.now(timezone.utc)
        items = []
        for story in stories:
            if story is None:
                continue
            try:
                item = self._create_item(story, now)
            except (TypeError, ValueError, OverflowError) as e:
                logger.debug("%s: skipping malformed story %r: %s", self.name, story.get("id"), e)
                continue
            if item:
                items.append(rank_item(item, now))

        logger.info("%s: fetched %d stories", self.name, len(items))
        return items

    async def _fetch_story(self, client: httpx.AsyncClient, story_id: Any) -> Optional[dict]:
        """Fetch a single story; failures drop the story, not the feed."""
        try:
            response = await client.get(f"{self.base_url}/item/{story_id}.json")
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("%s: error fetching story %s: %s", self.name, story_id, e)
            return None

    def _create_item(self, story: dict, now: datetime) -> Optional[NewsItem]:
        """Build an item from a story payload; deleted or untitled stories are skipped."""
        if not isinstance(story, dict) or story.get("deleted") or story.get("dead"):
            return None

        story_id = story.get("id")
        title = story.get("title")
        if story_id is None or not title:
            return None

        published = story.get("time")
        published_at = datetime.fromtimestamp(published, tz=timezone.utc) if published else now

        return NewsItem(
            id=make_item_id("hn", story_id),
            source=self.name,
            title=title,
            url=story.get("url") or f"https://news.ycombinator.com/item?id={story_id}",
            content=strip_html(story.get("text")) or None,
            author=story.get("by"),
            engagement=Engagement(
                points=max(0, int(story.get("score") or 0)),
                comments=max(0, int(story.get("descendants") or 0)),
            ),
            published_at=published_at,
            cached_at=now,
        )
