"""SQL Article Store — indexed record store keyed by id (database backend).

Invariants:
    - get()/put() touch a single row; load_all() orders by insertion position
    - put() of an unknown id appends it after the current last position
    - Timestamps are written in UTC; naive values read back are treated as UTC by ArticleRecord
    - All SQLAlchemy failures surface as DatabaseError via ArticleDatabase.session()
    - readable() is True only when the articles table itself can be queried

Design Decisions:
    - Same ArticleStore protocol as JsonArticleStore: the pipeline cannot tell them apart
"""

import logging
from datetime import timezone

from sqlalchemy import func, select

from ledger.core.domain_types import ArticleId
from ledger.core.errors import DatabaseError
from ledger.infrastructure.database import ArticleDatabase
from ledger.models.article import Article
from ledger.schemas.article import ArticleRecord

logger = logging.getLogger(__name__)


def _to_record(row: Article) -> ArticleRecord:
    return ArticleRecord(
        id=row.id,
        timestamp=row.timestamp,
        encrypted_holder=row.encrypted_holder,
        amount=row.amount,
        country=row.country,
        agent=row.agent,
    )


class SqlArticleStore:
    """ArticleStore over the `articles` table."""

    def __init__(self, database: ArticleDatabase):
        self._db = database

    async def load_all(self) -> list[ArticleRecord]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Article).order_by(Article.position),
            )
            return [_to_record(row) for row in result.scalars().all()]

    async def get(self, article_id: ArticleId) -> ArticleRecord | None:
        async with self._db.session() as db:
            row = await db.get(Article, article_id)
            return _to_record(row) if row else None

    async def put(self, article: ArticleRecord) -> None:
        async with self._db.session() as db:
            row = await db.get(Article, article.id)
            if row is None:
                last = await db.execute(
                    select(func.coalesce(func.max(Article.position), -1)),
                )
                row = Article(id=article.id, position=last.scalar_one() + 1)
                db.add(row)
                logger.info(
                    f"Appending article {article.id}",
                    extra={"article_id": article.id},
                )
            row.timestamp = article.timestamp.astimezone(timezone.utc)
            row.encrypted_holder = article.encrypted_holder
            row.amount = article.amount
            row.country = article.country
            row.agent = article.agent
            await db.commit()

    async def readable(self) -> bool:
        try:
            async with self._db.session() as db:
                await db.execute(select(Article.id).limit(1))
        except DatabaseError:
            return False
        return True
