"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, JSON and SQL stores share no base class
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core functions that consume records are never async themselves
"""

from datetime import datetime
from typing import Protocol

from ledger.core.domain_types import ArticleId
from ledger.core.exchange_rates import ExchangeRateTable


class ArticleLike(Protocol):
    """Structural contract for raw records passed to pure rules."""
    id: str
    timestamp: datetime
    amount: float
    country: str
    agent: str


class ArticleStore(Protocol):
    """Contract for raw record persistence — implemented by shell.

    load_all preserves natural (insertion) order. put replaces the record with
    the same id, appending when none exists.
    """
    async def load_all(self) -> list: ...
    async def get(self, article_id: ArticleId): ...
    async def put(self, article) -> None: ...
    async def readable(self) -> bool: ...


class RateTableSource(Protocol):
    """Contract for the memoized exchange rate table — implemented by shell."""
    async def get_table(self) -> ExchangeRateTable: ...


class NameCipherLike(Protocol):
    """Contract for holder-name encryption."""
    def encrypt(self, plaintext: str) -> str: ...
    def decrypt(self, token: str) -> str: ...
