"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def make_item_id(namespace: str, upstream_id: object) -> str:
    """Build the stable item id from a source namespace and upstream identifier."""
    upstream = str(upstream_id).strip()
    if not namespace or not upstream:
        raise ValueError("Item id needs both a namespace and an upstream identifier")
    return f"{namespace}:{upstream}"


@dataclass(frozen=True)
class Engagement:
    """Engagement metrics exposed by sources such as Hacker News."""

    points: int = 0
    comments: int = 0

    def __post_init__(self) -> None:
        if self.points < 0 or self.comments < 0:
            raise ValueError("Engagement counts cannot be negative")


@dataclass
class NewsItem:
    """Normalized piece of content from any source."""

    id: str
    source: str
    title: str
    url: str
    published_at: datetime
    cached_at: datetime
    content: Optional[str] = None
    author: Optional[str] = None
    engagement: Optional[Engagement] = None
    rank_score: float = 0.0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ID cannot be empty")
        if not self.source:
            raise ValueError("Source cannot be empty")
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")
        if self.rank_score < 0:
            raise ValueError("Rank score cannot be negative")
        self.published_at = ensure_utc(self.published_at)
        self.cached_at = ensure_utc(self.cached_at)

    @property
    def points(self) -> int:
        return self.engagement.points if self.engagement else 0

    @property
    def comments(self) -> int:
        return self.engagement.comments if self.engagement else 0

    def searchable_text(self) -> str:
        """Title and content joined, as used by keyword scoring."""
        return f"{self.title} {self.content or ''}"


@dataclass(frozen=True)
class FeedRegistration:
    """A configured RSS/Atom feed."""

    name: str
    url: str
    refresh_interval_minutes: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError("Feed name must be non-empty and contain no whitespace")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Feed URL must be an http(s) URL: {self.url!r}")
        if self.refresh_interval_minutes is not None and self.refresh_interval_minutes <= 0:
            raise ValueError("Refresh interval must be positive")

    @property
    def source_tag(self) -> str:
        return f"rss:{self.name}"


@dataclass(frozen=True)
class ScoreBreakdown:
    """The four ranking components of one item."""

    keyword: float
    engagement: float
    recency: float
    source: float

    @property
    def total(self) -> float:
        return max(0.0, self.keyword + self.engagement + self.recency + self.source)


@dataclass
class SourceOutcome:
    """Result of refreshing a single source."""

    source: str
    item_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshReport:
    """Per-source summary of a cache refresh."""

    outcomes: list[SourceOutcome] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(outcome.item_count for outcome in self.outcomes if outcome.ok)

    @property
    def failures(self) -> list[SourceOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def succeeded(self) -> list[SourceOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]


@dataclass
class SourceListing:
    """Configured sources next to the sources that have cached items."""

    configured: list[str]
    cached: list[str]
