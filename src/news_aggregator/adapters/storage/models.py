"""ORM mapping for cached news items."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from news_aggregator.core.entities import Engagement, NewsItem


class Base(DeclarativeBase):
    pass


def to_epoch(value: datetime) -> int:
    return int(value.timestamp())


def from_epoch(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


class NewsItemRecord(Base):
    """One row per item id; timestamps stored as epoch seconds."""

    __tablename__ = "news_items"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    source: Mapped[str] = mapped_column(String, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text)
    author: Mapped[Optional[str]] = mapped_column(String)
    points: Mapped[Optional[int]] = mapped_column(Integer)
    comments: Mapped[Optional[int]] = mapped_column(Integer)
    published_at: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    cached_at: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    rank_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, index=True)

    @classmethod
    def from_item(cls, item: NewsItem) -> "NewsItemRecord":
        return cls(
            id=item.id,
            source=item.source,
            title=item.title,
            url=item.url,
            content=item.content,
            author=item.author,
            points=item.engagement.points if item.engagement else None,
            comments=item.engagement.comments if item.engagement else None,
            published_at=to_epoch(item.published_at),
            cached_at=to_epoch(item.cached_at),
            rank_score=max(0.0, item.rank_score),
        )

    def to_item(self) -> NewsItem:
        engagement = None
        if self.points is not None or self.comments is not None:
            engagement = Engagement(points=self.points or 0, comments=self.comments or 0)

        return NewsItem(
            id=self.id,
            source=self.source,
            title=self.title,
            url=self.url,
            content=self.content,
            author=self.author,
            engagement=engagement,
            published_at=from_epoch(self.published_at),
            cached_at=from_epoch(self.cached_at),
            rank_score=self.rank_score,
        )
