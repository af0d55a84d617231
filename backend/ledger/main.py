"""Article Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Pipeline (and the database, for the database backend) built on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Pipeline stored on app.state: one instance per process, memoized rate table included
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledger.api.dependencies import build_pipeline
from ledger.api.error_handlers import register_error_handlers
from ledger.api.routes import articles, health
from ledger.config import get_settings
from ledger.core.domain_types import StoreBackend
from ledger.infrastructure.database import close_db, init_db
from ledger.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.store_backend == StoreBackend.DATABASE:
        init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    app.state.pipeline = build_pipeline(settings)
    logger.info(
        f"Article Ledger API started ({settings.store_backend.value} store)",
    )
    yield
    await close_db()
    logger.info("Article Ledger API shutting down")


app = FastAPI(
    title="Article Ledger API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(articles.router)

register_error_handlers(app)


@app.get("/", include_in_schema=False)
async def root():
    """Service banner with the main endpoints."""
    return {
        "service": "Article Ledger API",
        "version": "1.0.0",
        "endpoints": {
            "articles": "/api/articles",
            "stats": "/api/articles/stats",
            "health": "/api/health/",
        },
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("ledger.main:app", host=settings.host, port=settings.port)
