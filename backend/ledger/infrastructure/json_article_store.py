"""JSON Article Store — whole-collection read/replace over a single JSON array file.

Invariants:
    - Every operation reads the entire file; put() rewrites the entire file
    - load_all() preserves file order (natural insertion order)
    - put() edits the parsed array in place: only the keys whose values changed in the
      target element are rewritten; every other element keeps its original keys and
      values (extra keys, date-only timestamps, integer amounts)
    - Any read/parse/validation failure raises StoreUnavailableError (no partial results)
    - No locking: concurrent put() calls race and the last writer wins

Design Decisions:
    - Records are validated to be served, never to be written back: the raw list is the
      source of truth for the file contents
    - File IO in asyncio.to_thread: the event loop never blocks on disk
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ledger.core.domain_types import ArticleId
from ledger.core.errors import StoreUnavailableError
from ledger.schemas.article import ArticleRecord

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[ArticleRecord])


class JsonArticleStore:
    """ArticleStore over a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def load_all(self) -> list[ArticleRecord]:
        return await asyncio.to_thread(self._read)

    async def get(self, article_id: ArticleId) -> ArticleRecord | None:
        for article in await self.load_all():
            if article.id == article_id:
                return article
        return None

    async def put(self, article: ArticleRecord) -> None:
        await asyncio.to_thread(self._replace_one, article)

    async def readable(self) -> bool:
        try:
            await self.load_all()
        except StoreUnavailableError:
            return False
        return True

    def _read(self) -> list[ArticleRecord]:
        return self._validate(self._read_raw())

    def _read_raw(self) -> list:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read articles file {self.path}: {e}")
            raise StoreUnavailableError("cannot read record file", "read") from e
        try:
            raw = json.loads(text)
        except ValueError as e:
            logger.error(f"Articles file {self.path} is not JSON: {e}")
            raise StoreUnavailableError("record file is not valid JSON", "read") from e
        if not isinstance(raw, list):
            logger.error(f"Articles file {self.path} holds {type(raw).__name__}, not an array")
            raise StoreUnavailableError(
                "record file is not a valid article array", "read",
            )
        return raw

    def _validate(self, raw: list) -> list[ArticleRecord]:
        try:
            return _RECORDS.validate_python(raw)
        except ValidationError as e:
            logger.error(
                f"Articles file {self.path} is invalid: "
                f"{e.error_count()} validation error(s)",
            )
            raise StoreUnavailableError(
                "record file is not a valid article array", "read",
            ) from e

    def _replace_one(self, article: ArticleRecord) -> None:
        raw = self._read_raw()
        records = self._validate(raw)
        stored = article.to_storage()
        for element, current in zip(raw, records):
            if current.id == article.id:
                before = current.to_storage()
                element.update(
                    {key: value for key, value in stored.items() if before[key] != value},
                )
                break
        else:
            raw.append(stored)
        self._write(raw)

    def _write(self, raw: list) -> None:
        payload = json.dumps(raw, indent=2, ensure_ascii=False)
        try:
            self.path.write_text(payload + "\n", encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write articles file {self.path}: {e}")
            raise StoreUnavailableError("cannot write record file", "write") from e
