"""Status Classification — total, deterministic mapping from a record to its lifecycle status.

Invariants:
    - Priority ordered, first match wins: non-positive amount → Invalid,
      future timestamp → Pending, everything else → Valid
    - Invalid takes precedence over the date check
    - Pure: `now` is a parameter, never read from the clock here
"""

from datetime import datetime

from ledger.core.domain_types import ArticleStatus


def classify_status(
    amount: float, timestamp: datetime, now: datetime,
) -> ArticleStatus:
    """Classify a record at instant `now`."""
    if amount <= 0:
        return ArticleStatus.INVALID
    if timestamp > now:
        return ArticleStatus.PENDING
    return ArticleStatus.VALID
