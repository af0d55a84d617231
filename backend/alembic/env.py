"""Alembic environment — migrations for the `articles` table of the database store.

The target database is always Settings.database_url (DATABASE_URL / .env), the same
value the API passes to init_db(), so `alembic upgrade head` and the running service
cannot drift apart. alembic.ini only configures script location and logging.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from ledger.config import get_settings
from ledger.db.base import Base
from ledger.models.article import Article  # noqa: F401  registers the table

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**options) -> None:
    context.configure(target_metadata=Base.metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


def _upgrade_connection(connection: Connection) -> None:
    # SQLite cannot ALTER columns in place; batch mode recreates the table
    _configure(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )


async def _upgrade_online(database_url: str) -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_upgrade_connection)
    finally:
        await engine.dispose()


database_url = get_settings().database_url

if context.is_offline_mode():
    _configure(
        url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_upgrade_online(database_url))
