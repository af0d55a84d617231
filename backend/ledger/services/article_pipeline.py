"""Article Pipeline — loads raw records and turns them into served records.

Invariants:
    - One `now` per operation: exclusion and classification see the same instant
    - list_articles() drops excluded records, keeps store order, never exposes encrypted_holder
    - update_article() rejects unknown fields before touching the store, re-encrypts
      holder names, persists, then re-valuates the stored record from scratch
    - A record that cannot be decrypted is served with the configured placeholder;
      the batch never fails because of one record
    - Store failures propagate as StoreUnavailableError (no partial results)

Design Decisions:
    - Imperative shell around the pure core: IO here, rules in core/
    - Collaborators injected (store, cipher, rate source, clock): build_pipeline in
      api/dependencies.py is the only place that wires concrete classes
    - stats classify survivors directly instead of calling list_articles(): counts only
      need status, so holder names are not decrypted for stats
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ledger.core.article_stats import compute_article_stats
from ledger.core.classify_status import classify_status
from ledger.core.coerce_amount import coerce_amount, parse_amount
from ledger.core.domain_types import ArticleId, EditableField
from ledger.core.errors import (
    ArticleNotFoundError, DecryptionError, InvalidAmountError, InvalidFieldError,
)
from ledger.core.exchange_rates import ExchangeRateTable, convert_amount
from ledger.core.exclusion_filter import partition_excluded
from ledger.core.repository_protocols import (
    ArticleStore, NameCipherLike, RateTableSource,
)
from ledger.schemas.article import ArticleRecord, ArticleStats, ServedArticle

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ArticlePipeline:
    """Exclusion → decryption → classification → conversion, plus update and stats."""

    def __init__(
        self,
        store: ArticleStore,
        cipher: NameCipherLike,
        rates: RateTableSource,
        clock: Callable[[], datetime] = utc_now,
        undecryptable_placeholder: str = "[undecryptable]",
        strict_amounts: bool = False,
    ):
        self.store = store
        self._cipher = cipher
        self._rates = rates
        self._clock = clock
        self._placeholder = undecryptable_placeholder
        self._strict_amounts = strict_amounts

    async def list_articles(self) -> list[ServedArticle]:
        """All non-excluded records, valuated, in store order."""
        now = self._clock()
        records = await self.store.load_all()
        survivors, excluded = partition_excluded(records, now)
        table = await self._rates.get_table()
        served = [self._value(record, table, now) for record in survivors]
        logger.info(
            f"Served {len(served)} articles ({excluded} excluded)",
            extra={"count": len(served)},
        )
        return served

    async def update_article(
        self, article_id: str, field: str, value: object,
    ) -> ServedArticle:
        """Edit holderName or amount of one record and return it re-valuated."""
        editable = self._resolve_field(field)
        changes = self._changes_for(editable, value)

        record = await self.store.get(ArticleId(article_id))
        if record is None:
            raise ArticleNotFoundError(article_id)

        updated = record.model_copy(update=changes)
        await self.store.put(updated)
        logger.info(
            f"Updated {editable.value} of article {article_id}",
            extra={"article_id": article_id, "field": editable.value},
        )

        table = await self._rates.get_table()
        return self._value(updated, table, self._clock())

    async def get_stats(self) -> ArticleStats:
        """Status counts over served records plus the excluded count."""
        now = self._clock()
        records = await self.store.load_all()
        survivors, excluded = partition_excluded(records, now)
        statuses = [
            classify_status(record.amount, record.timestamp, now)
            for record in survivors
        ]
        return ArticleStats(**compute_article_stats(statuses, excluded))

    async def ready(self) -> bool:
        return await self.store.readable()

    # ─── helpers ─────────────────────────────────────────────────

    def _value(
        self, record: ArticleRecord, table: ExchangeRateTable, now: datetime,
    ) -> ServedArticle:
        return ServedArticle(
            id=record.id,
            timestamp=record.timestamp,
            holder_name=self._holder_name(record),
            amount=record.amount,
            country=record.country,
            agent=record.agent,
            amount_converted=convert_amount(
                record.amount, table.rate(record.country),
            ),
            status=classify_status(record.amount, record.timestamp, now),
        )

    def _holder_name(self, record: ArticleRecord) -> str:
        try:
            return self._cipher.decrypt(record.encrypted_holder)
        except DecryptionError as e:
            logger.warning(
                f"Holder name of article {record.id} is undecryptable: {e.reason}",
                extra={"article_id": record.id, "error_code": e.code},
            )
            return self._placeholder

    @staticmethod
    def _resolve_field(field: str) -> EditableField:
        try:
            return EditableField(field)
        except ValueError:
            raise InvalidFieldError(field) from None

    def _changes_for(self, editable: EditableField, value: object) -> dict:
        if editable is EditableField.HOLDER_NAME:
            name = "" if value is None else str(value)
            return {"encrypted_holder": self._cipher.encrypt(name)}
        return {"amount": self._amount(value)}

    def _amount(self, value: object) -> float:
        if not self._strict_amounts:
            return coerce_amount(value)
        try:
            return parse_amount(value)
        except ValueError:
            raise InvalidAmountError(value) from None
