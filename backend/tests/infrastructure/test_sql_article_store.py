"""SQL Article Store — positional order, upsert, UTC round-trip, error mapping."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError

from ledger.core.errors import DatabaseError, StoreUnavailableError
from ledger.db.base import Base
from ledger.infrastructure.database import (
    ArticleDatabase, engine_options, to_database_error,
)
from ledger.infrastructure.sql_article_store import SqlArticleStore
from ledger.schemas.article import ArticleRecord

T0 = datetime(2023, 1, 1, tzinfo=timezone.utc)


def _record(article_id: str, **overrides) -> ArticleRecord:
    fields = dict(
        id=article_id, timestamp=T0, encrypted_holder="Jane",
        amount=1000.0, country="Chile", agent="Comercial",
    )
    fields.update(overrides)
    return ArticleRecord(**fields)


@pytest.fixture
async def database(tmp_path):
    database = ArticleDatabase(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield database
    await database.dispose()


@pytest.fixture
def sql_store(database):
    return SqlArticleStore(database)


async def test_empty_table_loads_nothing(sql_store):
    assert await sql_store.load_all() == []
    assert await sql_store.get("a1") is None


async def test_put_appends_in_insertion_order(sql_store):
    for article_id in ["c", "a", "b"]:
        await sql_store.put(_record(article_id))
    assert [r.id for r in await sql_store.load_all()] == ["c", "a", "b"]


async def test_put_existing_id_updates_in_place(sql_store):
    await sql_store.put(_record("a1"))
    await sql_store.put(_record("a2"))
    await sql_store.put(_record("a1", amount=-5.0, encrypted_holder="tok"))

    records = await sql_store.load_all()
    assert [r.id for r in records] == ["a1", "a2"]
    assert records[0].amount == -5.0
    assert records[0].encrypted_holder == "tok"


async def test_timestamps_come_back_as_the_same_utc_instant(sql_store):
    offset = datetime(2024, 3, 5, 10, 30, tzinfo=timezone(timedelta(hours=2)))
    await sql_store.put(_record("a1", timestamp=offset))
    stored = await sql_store.get("a1")
    assert stored.timestamp == datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)
    assert stored.timestamp.tzinfo is not None


async def test_get_returns_full_record(sql_store):
    await sql_store.put(_record("a1", country="Perú", agent="XYZ"))
    stored = await sql_store.get("a1")
    assert stored == _record("a1", country="Perú", agent="XYZ")


async def test_readable_when_connected(sql_store):
    assert await sql_store.readable() is True


async def test_missing_table_maps_to_database_error(tmp_path):
    database = ArticleDatabase(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        with pytest.raises(DatabaseError) as exc_info:
            await SqlArticleStore(database).load_all()
        assert isinstance(exc_info.value, StoreUnavailableError)
        assert exc_info.value.http_status == 503
    finally:
        await database.dispose()


async def test_not_readable_without_articles_table(tmp_path):
    database = ArticleDatabase(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        assert await SqlArticleStore(database).readable() is False
    finally:
        await database.dispose()


async def test_failed_session_rolls_back_and_keeps_rows(sql_store, database):
    await sql_store.put(_record("a1"))
    with pytest.raises(DatabaseError):
        async with database.session() as db:
            await db.execute(text("UPDATE articles SET amount = -1"))
            await db.execute(text("SELECT * FROM no_such_table"))
    assert (await sql_store.get("a1")).amount == 1000.0


# ─── error mapping & engine options ──────────────────────────────

@pytest.mark.parametrize(("exc", "code_operation"), [
    (IntegrityError("stmt", {}, Exception("dup")), "write"),
    (OperationalError("stmt", {}, Exception("gone")), "read"),
    (DBAPIError("stmt", {}, Exception("driver")), "query"),
    (SQLAlchemyError("other"), "query"),
])
def test_sqlalchemy_failures_become_database_errors(exc, code_operation):
    error = to_database_error(exc)
    assert error.code == "DATABASE_ERROR"
    assert error.message.startswith(f"Record store {code_operation} failed")
    assert "dup" not in error.message and "gone" not in error.message


def test_sqlite_gets_no_pool_sizing():
    assert engine_options("sqlite+aiosqlite:///x.db", 20, 10) == {"pool_pre_ping": True}


def test_server_databases_get_pool_sizing():
    options = engine_options("postgresql+asyncpg://u:p@db/ledger", 5, 2)
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 2
