"""Composition Root — builds the pipeline from settings and exposes it to routes.

Invariants:
    - build_pipeline is the only place concrete store/cipher/rate classes are chosen
    - The database backend requires init_db() to have run first (lifespan does this)
    - get_pipeline reads app.state; tests replace it via app.dependency_overrides

Design Decisions:
    - Explicit construction over module-level singletons: tests inject fake stores,
      keys and clocks without patching imports
"""

from fastapi import Request

from ledger.config import Settings
from ledger.core.domain_types import StoreBackend
from ledger.core.repository_protocols import ArticleStore
from ledger.infrastructure import database
from ledger.infrastructure.json_article_store import JsonArticleStore
from ledger.infrastructure.name_cipher import NameCipher
from ledger.infrastructure.rate_table_source import FileRateTableSource
from ledger.infrastructure.sql_article_store import SqlArticleStore
from ledger.services.article_pipeline import ArticlePipeline


def build_store(settings: Settings) -> ArticleStore:
    if settings.store_backend == StoreBackend.DATABASE:
        if database.article_db is None:
            raise RuntimeError("Database not initialized")
        return SqlArticleStore(database.article_db)
    return JsonArticleStore(settings.articles_path)


def build_pipeline(settings: Settings) -> ArticlePipeline:
    """Wire the production pipeline."""
    return ArticlePipeline(
        store=build_store(settings),
        cipher=NameCipher(settings.encryption_key),
        rates=FileRateTableSource(settings.exchange_rates_path),
        undecryptable_placeholder=settings.undecryptable_placeholder,
        strict_amounts=settings.strict_amount_updates,
    )


def get_pipeline(request: Request) -> ArticlePipeline:
    """FastAPI dependency for the process-wide pipeline."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError("Pipeline not initialized")
    return pipeline
