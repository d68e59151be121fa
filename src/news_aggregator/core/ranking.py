"""Heuristic ranking of news items.

The rank score is the sum of four independent components, floored at zero:

* keyword relevance, one hit per category from ``KEYWORD_CATEGORIES``
* engagement, linear in upvotes and comments
* recency, linear decay from 100 to 0 over ``RECENCY_CEILING_HOURS``
* source quality, from the premium and general source lists

Scores are computed once at ingestion time and persisted with the item.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from news_aggregator.core.entities import NewsItem, ScoreBreakdown, ensure_utc
from news_aggregator.core.keywords import (
    COMMENTS_WEIGHT,
    GENERAL_SOURCE_SCORE,
    GENERAL_SOURCES,
    KEYWORD_CATEGORIES,
    POINTS_WEIGHT,
    PREMIUM_SOURCE_SCORE,
    PREMIUM_SOURCES,
    RECENCY_CEILING_HOURS,
    KeywordCategory,
)


def keyword_score(
    item: NewsItem,
    categories: Optional[dict[str, KeywordCategory]] = None,
) -> float:
    """Sum category weights for every category with at least one keyword hit."""
    text = item.searchable_text().lower()
    score = 0.0

    if categories is None:
        categories = KEYWORD_CATEGORIES

    for category in categories.values():
        for keyword in category.keywords:
            if keyword.lower() in text:
                score += category.weight
                break

    return score


def engagement_score(item: NewsItem) -> float:
    """Score upvotes and comments; items without metrics score zero."""
    if item.engagement is None:
        return 0.0
    return item.engagement.points * POINTS_WEIGHT + item.engagement.comments * COMMENTS_WEIGHT


def recency_score(item: NewsItem, now: Optional[datetime] = None) -> float:
    """Linear decay from 100 at publication to 0 after 100 hours."""
    now = ensure_utc(now) if now else datetime.now(timezone.utc)
    age_hours = max(0.0, (now - item.published_at).total_seconds() / 3600)
    return max(0.0, RECENCY_CEILING_HOURS - age_hours)


def source_score(item: NewsItem) -> float:
    """Bonus for premium sources, penalty for general tech news."""
    source = item.source.strip().lower()

    if any(premium in source for premium in PREMIUM_SOURCES):
        return PREMIUM_SOURCE_SCORE
    if any(general in source for general in GENERAL_SOURCES):
        return GENERAL_SOURCE_SCORE
    return 0.0


def score_breakdown(item: NewsItem, now: Optional[datetime] = None) -> ScoreBreakdown:
    return ScoreBreakdown(
        keyword=keyword_score(item),
        engagement=engagement_score(item),
        recency=recency_score(item, now),
        source=source_score(item),
    )


def score(item: NewsItem, now: Optional[datetime] = None) -> float:
    """Overall rank score, never negative."""
    return score_breakdown(item, now).total


def rank_item(item: NewsItem, now: Optional[datetime] = None) -> NewsItem:
    """Return a copy of ``item`` with ``rank_score`` populated."""
    return replace(item, rank_score=score(item, now))
