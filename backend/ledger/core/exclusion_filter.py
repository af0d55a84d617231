"""Exclusion Filter — decides which raw records are dropped from every served view.

Invariants:
    - Exclusion is a conjunction: strictly past timestamp AND agent "XYZ" AND country "Chile"
    - Agent and country comparisons are exact and case-sensitive
    - Excluded records are removed before classification; they are not a status

Design Decisions:
    - Three named checks chained with `and`: each condition testable on its own
"""

from datetime import datetime

from ledger.core.repository_protocols import ArticleLike

EXCLUDED_AGENT = "XYZ"
EXCLUDED_COUNTRY = "Chile"


def is_past(timestamp: datetime, now: datetime) -> bool:
    return timestamp < now


def should_exclude(article: ArticleLike, now: datetime) -> bool:
    """True when the record must never be served."""
    return (
        is_past(article.timestamp, now)
        and article.agent == EXCLUDED_AGENT
        and article.country == EXCLUDED_COUNTRY
    )


def partition_excluded(
    articles: list, now: datetime,
) -> tuple[list, int]:
    """Split records into (survivors in original order, excluded count)."""
    survivors = []
    excluded = 0
    for article in articles:
        if should_exclude(article, now):
            excluded += 1
        else:
            survivors.append(article)
    return survivors, excluded
