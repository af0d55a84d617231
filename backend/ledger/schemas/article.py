"""Article Schemas — stored record, served record, update request and stats.

Invariants:
    - ArticleRecord mirrors one element of the stored JSON array (camelCase keys)
    - ServedArticle has holderName and never an encrypted holder field
    - Naive timestamps are read as UTC so comparisons with an aware `now` are total
    - ArticleUpdate.field is a free string: unknown names are rejected by the pipeline
      with INVALID_FIELD, not by request validation

Design Decisions:
    - alias_generator=to_camel + populate_by_name: Python code uses snake_case,
      files and HTTP bodies use the camelCase the frontend reads
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ledger.core.domain_types import ArticleStatus

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ArticleRecord(BaseModel):
    """Raw record as persisted — holder name is a cipher token (or legacy plain text)."""
    model_config = _CAMEL

    id: str = Field(min_length=1)
    timestamp: datetime
    encrypted_holder: str
    amount: float
    country: str
    agent: str

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    def to_storage(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class ServedArticle(BaseModel):
    """Record as served — derived on every read, never persisted."""
    model_config = _CAMEL

    id: str
    timestamp: datetime
    holder_name: str
    amount: float
    country: str
    agent: str
    amount_converted: float
    status: ArticleStatus


class ArticleUpdate(BaseModel):
    """PUT body — `value` may be any JSON scalar, including null."""
    field: str = Field(min_length=1)
    value: str | int | float | bool | None


class ArticleListResponse(BaseModel):
    articles: list[ServedArticle]
    count: int


class ArticleStats(BaseModel):
    """Counts per status over the served set, plus the excluded count."""
    total: int = Field(ge=0)
    valid: int = Field(ge=0)
    invalid: int = Field(ge=0)
    pending: int = Field(ge=0)
    excluded: int = Field(ge=0)
