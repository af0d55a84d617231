"""Rate Table Source — loads the exchange rate table once, falls back to built-in rates.

Invariants:
    - The first get_table() call loads; every later call returns the same table object
    - A missing, unreadable or malformed file yields ExchangeRateTable.fallback(), logged
      as a warning and never raised to callers
    - The fallback is memoized too: no retry path within a process

Design Decisions:
    - File read runs in a worker thread (asyncio.to_thread): request handlers stay non-blocking
    - TypeAdapter(dict[str, float]) validates the file shape at the boundary
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from ledger.core.exchange_rates import ExchangeRateTable

logger = logging.getLogger(__name__)

_RATES = TypeAdapter(dict[str, float])


def load_rate_table(path: Path) -> ExchangeRateTable:
    """Read a {country: factor} JSON object, or return the fallback table."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        rates = _RATES.validate_python(raw)
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and pydantic ValidationError
        logger.warning(
            f"Exchange rates unavailable at {path}, using built-in table: {e}",
            extra={"source": "fallback"},
        )
        return ExchangeRateTable.fallback()
    logger.info(
        f"Loaded {len(rates)} exchange rates from {path}",
        extra={"source": "file", "count": len(rates)},
    )
    return ExchangeRateTable(rates, source="file")


class FileRateTableSource:
    """Memoized rate table backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._table: ExchangeRateTable | None = None

    async def get_table(self) -> ExchangeRateTable:
        if self._table is None:
            self._table = await asyncio.to_thread(load_rate_table, self.path)
        return self._table
