"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ArticleStatus has exactly three members; every record maps to one of them
    - EditableField lists the only fields an update may touch
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ArticleId = NewType("ArticleId", str)


# ─── Value Types ─────────────────────────────────────────────────

CipherToken = NewType("CipherToken", str)       # hex(iv) + ":" + hex(ciphertext)
RateFactor = NewType("RateFactor", float)       # multiplicative, native → reporting unit


# ─── Enums ───────────────────────────────────────────────────────

class ArticleStatus(str, Enum):
    """Lifecycle status computed on read, never persisted."""
    VALID = "Valid"
    INVALID = "Invalid"
    PENDING = "Pending"


class EditableField(str, Enum):
    """Fields an update may target, by their external (API) name.

    holderName writes the stored encryptedHolder token; amount writes amount.
    """
    HOLDER_NAME = "holderName"
    AMOUNT = "amount"


class StoreBackend(str, Enum):
    """Record store implementations selectable from settings."""
    JSON = "json"
    DATABASE = "database"
