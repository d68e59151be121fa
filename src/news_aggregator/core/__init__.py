"""Core domain layer."""

from news_aggregator.core.entities import (
    Engagement,
    FeedRegistration,
    NewsItem,
    RefreshReport,
    ScoreBreakdown,
    SourceListing,
    SourceOutcome,
    make_item_id,
)
from news_aggregator.core.errors import (
    DuplicateFeedError,
    InvalidQueryError,
    NewsAggregatorError,
    RegistryError,
    SourceFetchError,
    StoreError,
)
from news_aggregator.core.interfaces import FeedRegistry, NewsSource, NewsStore
from news_aggregator.core.ranking import rank_item, score, score_breakdown

__all__ = [
    "Engagement",
    "FeedRegistration",
    "NewsItem",
    "RefreshReport",
    "ScoreBreakdown",
    "SourceListing",
    "SourceOutcome",
    "make_item_id",
    "DuplicateFeedError",
    "InvalidQueryError",
    "NewsAggregatorError",
    "RegistryError",
    "SourceFetchError",
    "StoreError",
    "FeedRegistry",
    "NewsSource",
    "NewsStore",
    "rank_item",
    "score",
    "score_breakdown",
]
