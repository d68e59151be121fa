"""Source adapters for fetching news items."""

from news_aggregator.adapters.sources.hackernews_source import HackerNewsSource
from news_aggregator.adapters.sources.rss_source import RSSFeedSource

__all__ = ["HackerNewsSource", "RSSFeedSource"]
