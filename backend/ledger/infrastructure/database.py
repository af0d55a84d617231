"""Article Database — async engine and sessions behind the SQL article store.

Invariants:
    - A session that raises is rolled back before the error leaves session()
    - Every SQLAlchemyError leaving session() is a DatabaseError, so an unreachable
      database answers 503 exactly like an unreadable JSON file
    - DatabaseError messages name the failed operation only; driver text stays in the log
    - At most one ArticleDatabase per process (article_db), created by init_db() in the
      lifespan and only when store_backend == "database"

Design Decisions:
    - SQLite URLs get no pool sizing: aiosqlite engines bring their own pool class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ledger.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "write", "article row violates a table constraint"),
    (OperationalError, "read", "articles table unreachable"),
    (DBAPIError, "query", "database driver rejected the statement"),
    (SQLAlchemyError, "query", "article query failed"),
)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options: dict = {"pool_pre_ping": True}
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy failure into the store outage error."""
    for exc_type, operation, message in _FAILURES:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("article query failed", "query")


class ArticleDatabase:
    """Engine plus session factory for the `articles` table."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._sessions() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                error = to_database_error(e)
                logger.error(
                    f"Article database {error.message}: {e}",
                    extra={"error_code": error.code},
                )
                raise error from e

    async def dispose(self) -> None:
        await self.engine.dispose()


article_db: ArticleDatabase | None = None


def init_db(database_url: str, **kwargs) -> ArticleDatabase:
    global article_db
    article_db = ArticleDatabase(database_url, **kwargs)
    return article_db


async def close_db() -> None:
    global article_db
    if article_db is not None:
        await article_db.dispose()
        article_db = None
