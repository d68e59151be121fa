"""Shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from news_aggregator.adapters.storage import SQLiteNewsStore
from news_aggregator.core import NewsItem

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def build_item(**overrides: Any) -> NewsItem:
    """Create a NewsItem with sensible defaults."""
    values: dict[str, Any] = {
        "id": "hn:1",
        "source": "hackernews",
        "title": "Plain title",
        "url": "https://example.com/1",
        "published_at": NOW - timedelta(hours=1),
        "cached_at": NOW,
    }
    values.update(overrides)
    return NewsItem(**values)


@pytest.fixture
def make_item() -> Callable[..., NewsItem]:
    return build_item


@pytest.fixture
def store(tmp_path):
    """SQLite store in a temporary directory."""
    news_store = SQLiteNewsStore(tmp_path / "cache.db")
    yield news_store
    news_store.close()
