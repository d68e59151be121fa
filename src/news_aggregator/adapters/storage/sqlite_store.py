"""SQLite-backed cache of news items."""

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from sqlalchemy import create_engine, delete, func, literal_column, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from news_aggregator.adapters.storage.models import Base, NewsItemRecord, to_epoch
from news_aggregator.core.entities import NewsItem, ensure_utc
from news_aggregator.core.errors import InvalidQueryError, StoreError
from news_aggregator.core.interfaces import NewsStore

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50
DEFAULT_RETENTION_DAYS = 7

# Best ranked first; ties broken by newest publication, then first insertion.
RANKED_ORDER = (
    NewsItemRecord.rank_score.desc(),
    NewsItemRecord.published_at.desc(),
    literal_column("rowid").asc(),
)


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
        raise InvalidQueryError(f"Limit must be a positive integer, got {limit!r}")


class SQLiteNewsStore(NewsStore):
    """Durable keyed collection of news items.

    Every write runs in its own transaction and is committed before the call
    returns. Records are replaced wholesale on upsert, so readers never see
    a mix of old and new fields.
    """

    def __init__(self, db_path: Union[Path, str] = Path("cache.db")) -> None:
        self.db_path = db_path
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self.engine = create_engine(f"sqlite:///{db_path}")
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not open cache database {db_path}: {e}") from e

        self._sessions = sessionmaker(self.engine, expire_on_commit=False)

    def __enter__(self) -> "SQLiteNewsStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Session committed on success, rolled back on error."""
        try:
            with self._sessions.begin() as session:
                yield session
        except SQLAlchemyError as e:
            raise StoreError(f"Cache database error: {e}") from e

    def upsert(self, item: NewsItem) -> None:
        with self._transaction() as session:
            session.merge(NewsItemRecord.from_item(item))

    def upsert_batch(self, items: Iterable[NewsItem]) -> int:
        # Last occurrence of a repeated id wins
        records = {item.id: NewsItemRecord.from_item(item) for item in items}
        if not records:
            return 0

        with self._transaction() as session:
            for record in records.values():
                session.merge(record)

        logger.info("Upserted %d items", len(records))
        return len(records)

    def get(self, item_id: str) -> Optional[NewsItem]:
        with self._transaction() as session:
            record = session.get(NewsItemRecord, item_id)
            return record.to_item() if record else None

    def count(self) -> int:
        with self._transaction() as session:
            return session.scalar(select(func.count()).select_from(NewsItemRecord)) or 0

    def query(
        self,
        source: Optional[str] = None,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[NewsItem]:
        _check_limit(limit)

        stmt = select(NewsItemRecord)
        if source is not None:
            stmt = stmt.where(NewsItemRecord.source == source)
        if since is not None:
            stmt = stmt.where(NewsItemRecord.published_at >= to_epoch(ensure_utc(since)))
        stmt = stmt.order_by(*RANKED_ORDER)
        if limit is not None:
            stmt = stmt.limit(limit)

        return self._fetch(stmt)

    def search(self, text: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[NewsItem]:
        """Case-insensitive substring match against title or content."""
        if not text or not text.strip():
            raise InvalidQueryError("Search query cannot be empty")
        _check_limit(limit)

        stmt = (
            select(NewsItemRecord)
            .where(
                or_(
                    NewsItemRecord.title.icontains(text, autoescape=True),
                    NewsItemRecord.content.icontains(text, autoescape=True),
                )
            )
            .order_by(*RANKED_ORDER)
            .limit(limit)
        )
        return self._fetch(stmt)

    def list_sources(self) -> list[str]:
        stmt = select(NewsItemRecord.source).distinct().order_by(NewsItemRecord.source)
        with self._transaction() as session:
            return list(session.scalars(stmt))

    def evict_older_than(
        self, days: float = DEFAULT_RETENTION_DAYS, now: Optional[datetime] = None
    ) -> int:
        """Delete items cached more than ``days`` ago, whatever their publish date."""
        if days < 0:
            raise InvalidQueryError(f"Retention days cannot be negative, got {days!r}")

        now = ensure_utc(now) if now else datetime.now(timezone.utc)
        cutoff = to_epoch(now - timedelta(days=days))

        with self._transaction() as session:
            result = session.execute(
                delete(NewsItemRecord).where(NewsItemRecord.cached_at < cutoff)
            )
            removed = result.rowcount or 0

        logger.info("Evicted %d items cached before %s", removed, now - timedelta(days=days))
        return removed

    def close(self) -> None:
        self.engine.dispose()

    def _fetch(self, stmt) -> list[NewsItem]:
        with self._transaction() as session:
            return [record.to_item() for record in session.scalars(stmt)]
