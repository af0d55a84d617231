"""API test fixtures — app with the pipeline dependency overridden.

Invariants:
    - No lifespan runs: the pipeline comes from dependency_overrides, never from disk
    - Overrides are cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from ledger.api.dependencies import get_pipeline
from ledger.infrastructure.name_cipher import NameCipher
from ledger.main import app
from ledger.services.article_pipeline import ArticlePipeline
from tests.services.fake_store import NOW, InMemoryArticleStore, StaticRateSource


@pytest.fixture
def api_cipher():
    return NameCipher("test-secret-key")


@pytest.fixture
def api_store():
    return InMemoryArticleStore()


@pytest.fixture
def api_pipeline(api_store, api_cipher):
    return ArticlePipeline(
        store=api_store, cipher=api_cipher, rates=StaticRateSource(), clock=lambda: NOW,
    )


@pytest.fixture
async def client(api_pipeline):
    app.dependency_overrides[get_pipeline] = lambda: api_pipeline
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
