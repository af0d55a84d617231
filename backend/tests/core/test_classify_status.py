"""Status Classification — priority order and totality of classify_status.

Tests cover:
    - non-positive amounts are Invalid regardless of timestamp
    - positive amounts with a future timestamp are Pending
    - positive amounts at or before now are Valid
"""

from datetime import datetime, timedelta, timezone

import pytest

from ledger.core.classify_status import classify_status
from ledger.core.domain_types import ArticleStatus

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
PAST = NOW - timedelta(days=30)
FUTURE = NOW + timedelta(days=30)


@pytest.mark.parametrize("amount", [0, -0.01, -5, -1_000_000])
@pytest.mark.parametrize("timestamp", [PAST, NOW, FUTURE])
def test_non_positive_amount_is_invalid_for_any_timestamp(amount, timestamp):
    assert classify_status(amount, timestamp, NOW) == ArticleStatus.INVALID


def test_future_timestamp_with_positive_amount_is_pending():
    assert classify_status(1000, FUTURE, NOW) == ArticleStatus.PENDING


def test_past_timestamp_with_positive_amount_is_valid():
    assert classify_status(1000, PAST, NOW) == ArticleStatus.VALID


def test_timestamp_equal_to_now_is_valid():
    assert classify_status(0.01, NOW, NOW) == ArticleStatus.VALID


def test_one_microsecond_in_the_future_is_pending():
    later = NOW + timedelta(microseconds=1)
    assert classify_status(1, later, NOW) == ArticleStatus.PENDING
