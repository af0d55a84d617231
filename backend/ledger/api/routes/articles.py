"""Article Routes — list, stats and single-field update.

Invariants:
    - Responses use the camelCase ServedArticle shape (never the encrypted holder)
    - Unknown update fields → 400 INVALID_FIELD, unknown ids → 404, store outage → 503,
      all raised as LedgerError and rendered by the global handlers
"""

import logging

from fastapi import APIRouter, Depends

from ledger.api.dependencies import get_pipeline
from ledger.schemas.article import (
    ArticleListResponse, ArticleStats, ArticleUpdate, ServedArticle,
)
from ledger.services.article_pipeline import ArticlePipeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=ArticleListResponse)
async def list_articles(pipeline: ArticlePipeline = Depends(get_pipeline)):
    """All served articles in store order."""
    articles = await pipeline.list_articles()
    return ArticleListResponse(articles=articles, count=len(articles))


@router.get("/stats", response_model=ArticleStats)
async def get_article_stats(pipeline: ArticlePipeline = Depends(get_pipeline)):
    """Counts per status plus excluded count."""
    return await pipeline.get_stats()


@router.put("/{article_id}", response_model=ServedArticle)
async def update_article(
    article_id: str,
    body: ArticleUpdate,
    pipeline: ArticlePipeline = Depends(get_pipeline),
):
    """Update holderName or amount, return the re-valuated article."""
    return await pipeline.update_article(article_id, body.field, body.value)
