"""Article Stats — pure computation of status counts over the served set.

Invariants:
    - total == valid + invalid + pending (excluded records never in total)
    - excluded reported alongside, computed by the caller from the raw set
    - Returns a flat dict of integer counts (serializable as JSON)

Design Decisions:
    - Pure function over already-classified statuses: the pipeline owns IO and classification
"""

from collections.abc import Iterable

from ledger.core.domain_types import ArticleStatus


def compute_article_stats(
    statuses: Iterable[ArticleStatus], excluded: int,
) -> dict:
    """Count statuses. Pure, no IO."""
    counts = {status: 0 for status in ArticleStatus}
    for status in statuses:
        counts[status] += 1

    return {
        "total": sum(counts.values()),
        "valid": counts[ArticleStatus.VALID],
        "invalid": counts[ArticleStatus.INVALID],
        "pending": counts[ArticleStatus.PENDING],
        "excluded": excluded,
    }
