"""Cache store adapters."""

from news_aggregator.adapters.storage.sqlite_store import SQLiteNewsStore

__all__ = ["SQLiteNewsStore"]
