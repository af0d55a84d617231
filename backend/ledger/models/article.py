"""Article ORM — indexed persistence for raw records (database store backend).

Invariants:
    - id is the string primary key assigned by the importer, never reused
    - position preserves natural (insertion) order for list queries
    - timestamp stored in UTC; encrypted_holder stores the cipher token, never plain text

Design Decisions:
    - One row per record with single-row get/put: updates touch only the edited row
      instead of rewriting the collection
"""

from datetime import datetime

from sqlalchemy import String, Text, Integer, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from ledger.db.base import Base


class Article(Base):
    """Raw article record."""
    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, index=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    encrypted_holder: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    agent: Mapped[str] = mapped_column(String(100), nullable=False)
