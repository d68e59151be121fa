"""Tests for the ranking heuristic."""

from datetime import timedelta

import pytest

from conftest import NOW
from news_aggregator.core import Engagement, rank_item, score, score_breakdown
from news_aggregator.core.keywords import KeywordCategory
from news_aggregator.core.ranking import (
    engagement_score,
    keyword_score,
    recency_score,
    source_score,
)


def test_worked_example_hackernews_agent(make_item) -> None:
    """Fresh, popular HN story about agents."""
    item = make_item(
        title="New AI agent released",
        content="",
        engagement=Engagement(points=200, comments=50),
        published_at=NOW - timedelta(hours=1),
        source="hackernews",
    )

    breakdown = score_breakdown(item, now=NOW)

    assert breakdown.keyword == 30
    assert breakdown.engagement == pytest.approx(22.5)
    assert breakdown.recency == pytest.approx(99.0)
    assert breakdown.source == 20
    assert score(item, now=NOW) == pytest.approx(171.5)


def test_worked_example_funding_news(make_item) -> None:
    item = make_item(
        id="rss:techcrunch:1",
        title="Acme raises Series B",
        source="rss:techcrunch",
        published_at=NOW,
    )

    assert keyword_score(item) == -40
    assert source_score(item) == -10
    assert score(item, now=NOW) == pytest.approx(50.0)


def test_negative_total_is_floored_at_zero(make_item) -> None:
    """Old funding post with no engagement."""
    item = make_item(
        title="Acme raises Series B",
        source="rss:techcrunch",
        published_at=NOW - timedelta(hours=200),
    )

    breakdown = score_breakdown(item, now=NOW)
    assert breakdown.keyword + breakdown.source + breakdown.recency == -50
    assert score(item, now=NOW) == 0.0


def test_keyword_category_counts_once(make_item) -> None:
    item = make_item(title="LLM agents with GPT and Claude")
    assert keyword_score(item) == 30


def test_keyword_categories_stack(make_item) -> None:
    item = make_item(title="How to exploit XSS in React apps")
    # tools + security + practical
    assert keyword_score(item) == 50 + 30 + 20


def test_keyword_matching_uses_content_and_ignores_case(make_item) -> None:
    assert keyword_score(make_item(title="Weekly notes", content="A TUTORIAL for everyone")) == 20
    assert keyword_score(make_item(title="TYPESCRIPT tips")) == 50
    assert keyword_score(make_item(title="Weekly notes", content=None)) == 0


def test_keyword_score_with_custom_table(make_item) -> None:
    categories = {"python": KeywordCategory(keywords=("python", "pip"), weight=15)}
    item = make_item(title="Python packaging with pip")
    assert keyword_score(item, categories) == 15


def test_engagement_score(make_item) -> None:
    assert engagement_score(make_item(engagement=Engagement(points=200, comments=50))) == pytest.approx(22.5)
    assert engagement_score(make_item(engagement=Engagement(points=10))) == pytest.approx(1.0)
    assert engagement_score(make_item(engagement=None)) == 0.0


def test_recency_score_decays_linearly(make_item) -> None:
    assert recency_score(make_item(published_at=NOW), now=NOW) == 100.0
    assert recency_score(make_item(published_at=NOW - timedelta(hours=10)), now=NOW) == pytest.approx(90.0)
    assert recency_score(make_item(published_at=NOW - timedelta(hours=150)), now=NOW) == 0.0


def test_recency_score_caps_future_timestamps(make_item) -> None:
    item = make_item(published_at=NOW + timedelta(hours=5))
    assert recency_score(item, now=NOW) == 100.0


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("hackernews", 20),
        ("hackernews:best", 20),
        ("HackerNews", 20),
        ("rss:krebs", 20),
        ("rss:techcrunch", -10),
        ("rss:techcrunch-uk", -10),
        ("rss:verge", -10),
        ("rss:someblog", 0),
    ],
)
def test_source_score(make_item, source: str, expected: float) -> None:
    assert source_score(make_item(source=source)) == expected


def test_score_is_reproducible_and_recency_only_decreases(make_item) -> None:
    item = make_item(
        title="Deep dive into RAG",
        engagement=Engagement(points=50, comments=10),
        published_at=NOW - timedelta(hours=3),
    )

    first = score_breakdown(item, now=NOW)
    again = score_breakdown(item, now=NOW)
    later = score_breakdown(item, now=NOW + timedelta(hours=2))

    assert first == again
    assert later.keyword == first.keyword
    assert later.engagement == first.engagement
    assert later.source == first.source
    assert later.recency < first.recency


def test_score_never_negative(make_item) -> None:
    titles = [
        "Acme raises Series C valuation",
        "CEO appoints new board after acquisition",
        "Startup rebrands",
        "Nothing to see",
    ]
    for title in titles:
        for source in ("rss:techcrunch", "rss:verge", "rss:other"):
            item = make_item(title=title, source=source, published_at=NOW - timedelta(days=30))
            assert score(item, now=NOW) >= 0


def test_rank_item_returns_scored_copy(make_item) -> None:
    item = make_item(title="GitHub Copilot tutorial", published_at=NOW)

    ranked = rank_item(item, now=NOW)

    assert item.rank_score == 0.0
    assert ranked.id == item.id
    # tools + practical + recency + premium source
    assert ranked.rank_score == pytest.approx(50 + 20 + 100 + 20)


def test_announcement_words_count_as_practical_content(make_item) -> None:
    assert keyword_score(make_item(title="Introducing Widgets")) == 20
    assert keyword_score(make_item(title="A new feature for notebooks")) == 20
    assert keyword_score(make_item(title="Weekly update")) == 20
    assert keyword_score(make_item(title="Widgets 2.0 released")) == 0


def test_keyword_score_with_empty_table(make_item) -> None:
    item = make_item(title="How to exploit XSS in React apps")
    assert keyword_score(item, {}) == 0
