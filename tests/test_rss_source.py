"""Tests for the RSS/Atom source."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from news_aggregator.adapters.sources import RSSFeedSource
from news_aggregator.core import FeedRegistration, SourceFetchError

FEED_URL = "https://example.com/feed.xml"

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Example blog</title>
    <link>https://example.com</link>
    <description>Example</description>
    <item>
      <title>How to build an MCP server</title>
      <link>https://example.com/mcp</link>
      <guid>https://example.com/?p=1</guid>
      <description>Short &lt;b&gt;summary&lt;/b&gt;</description>
      <content:encoded><![CDATA[<p>Full <strong>tutorial</strong> body</p>]]></content:encoded>
      <dc:creator>Jane</dc:creator>
      <pubDate>Mon, 15 Jan 2024 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>No link here</title>
      <description>Dropped</description>
    </item>
    <item>
      <title>Undated post</title>
      <link>https://example.com/undated</link>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom example</title>
  <id>urn:example:feed</id>
  <updated>2024-01-16T08:30:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <link href="https://example.com/atom-1"/>
    <id>urn:uuid:1</id>
    <updated>2024-01-16T08:30:00Z</updated>
    <summary>Plain summary</summary>
    <author><name>Bob</name></author>
  </entry>
</feed>
"""


def make_source(body: str, status_code: int = 200, name: str = "example") -> RSSFeedSource:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == FEED_URL
        return httpx.Response(status_code, text=body)

    return RSSFeedSource(
        FeedRegistration(name=name, url=FEED_URL),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_rss_items() -> None:
    items = await make_source(RSS_FEED).fetch_items()

    assert [item.title for item in items] == ["How to build an MCP server", "Undated post"]

    first = items[0]
    assert first.id == "rss:example:https://example.com/?p=1"
    assert first.source == "rss:example"
    assert first.url == "https://example.com/mcp"
    assert first.content == "Full tutorial body"
    assert first.author == "Jane"
    assert first.engagement is None
    assert first.published_at == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    # ai_techniques + practical_content; old post, neutral source
    assert first.rank_score == pytest.approx(50.0)


@pytest.mark.asyncio
async def test_missing_date_is_backfilled_with_ingestion_time() -> None:
    before = datetime.now(timezone.utc)
    items = await make_source(RSS_FEED).fetch_items()

    undated = items[1]
    assert undated.id == "rss:example:https://example.com/undated"
    assert undated.published_at == undated.cached_at
    assert undated.published_at - before < timedelta(minutes=1)


@pytest.mark.asyncio
async def test_fetch_atom_items() -> None:
    items = await make_source(ATOM_FEED, name="atom").fetch_items()

    assert len(items) == 1
    entry = items[0]
    assert entry.id == "rss:atom:urn:uuid:1"
    assert entry.url == "https://example.com/atom-1"
    assert entry.content == "Plain summary"
    assert entry.author == "Bob"
    assert entry.published_at == datetime(2024, 1, 16, 8, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_fetch_respects_limit() -> None:
    items = await make_source(RSS_FEED).fetch_items(limit=1)
    assert len(items) == 1


@pytest.mark.asyncio
async def test_http_error_raises() -> None:
    with pytest.raises(SourceFetchError) as excinfo:
        await make_source("", status_code=404).fetch_items()

    assert excinfo.value.source == "rss:example"


@pytest.mark.asyncio
async def test_unparseable_feed_raises() -> None:
    with pytest.raises(SourceFetchError, match="could not parse"):
        await make_source("this is definitely not <xml").fetch_items()
