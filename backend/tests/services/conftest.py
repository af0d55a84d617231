"""Service test fixtures — pipeline wired to in-memory collaborators.

Invariants:
    - Clock is frozen at NOW so classification and exclusion are deterministic
    - Cipher is real (NameCipher) so round-trips exercise AES, not a mock
"""

import pytest

from ledger.infrastructure.name_cipher import NameCipher
from ledger.services.article_pipeline import ArticlePipeline
from tests.services.fake_store import NOW, InMemoryArticleStore, StaticRateSource


@pytest.fixture
def cipher():
    return NameCipher("test-secret-key")


@pytest.fixture
def store():
    return InMemoryArticleStore()


@pytest.fixture
def pipeline(store, cipher):
    return ArticlePipeline(
        store=store,
        cipher=cipher,
        rates=StaticRateSource(),
        clock=lambda: NOW,
    )
