"""Bucket Fill — verifies dense, ordered series from sparse aggregate rows.

Invariants:
    - Day fill: one bucket per calendar day, inclusive, ascending, unique keys
    - Hour fill: always 24 buckets 00:00..23:00
    - COUNT gaps are 0; AVERAGE_MS gaps are None, measured zero stays 0
    - start after end is a ValueError
"""

from datetime import date, datetime, timezone

import pytest

from admin_console.core.bucket_fill import (
    day_label, fill, milliseconds_to_seconds, normalize_bucket_key,
)
from admin_console.core.domain_types import AggregateKind, Granularity


def test_day_fill_places_counts_and_zero_fills_gaps():
    rows = [("2024-01-01", 5), ("2024-01-03", 2)]
    buckets = fill(rows, date(2024, 1, 1), date(2024, 1, 3), Granularity.DAY)
    assert [(b.key, b.value) for b in buckets] == [
        ("2024-01-01", 5), ("2024-01-02", 0), ("2024-01-03", 2),
    ]


def test_day_fill_average_converts_to_seconds_and_leaves_gaps_none():
    rows = [(date(2024, 1, 1), 1500), (date(2024, 1, 3), 0)]
    buckets = fill(
        rows, date(2024, 1, 1), date(2024, 1, 3),
        Granularity.DAY, AggregateKind.AVERAGE_MS,
    )
    assert [b.value for b in buckets] == [2, None, 0]


def test_day_fill_length_order_and_uniqueness_over_thirty_one_days():
    buckets = fill([], date(2024, 1, 15), date(2024, 2, 14), Granularity.DAY)
    keys = [b.key for b in buckets]
    assert len(buckets) == 31
    assert keys == sorted(keys)
    assert len(set(keys)) == 31
    assert keys[0] == "2024-01-15"
    assert keys[-1] == "2024-02-14"


def test_single_day_range_has_one_bucket():
    buckets = fill([], date(2024, 3, 1), date(2024, 3, 1), Granularity.DAY)
    assert len(buckets) == 1


def test_day_fill_crosses_leap_day():
    buckets = fill([], date(2024, 2, 28), date(2024, 3, 1), Granularity.DAY)
    assert [b.key for b in buckets] == ["2024-02-28", "2024-02-29", "2024-03-01"]


def test_start_after_end_raises():
    with pytest.raises(ValueError):
        fill([], date(2024, 1, 2), date(2024, 1, 1), Granularity.DAY)


def test_hour_fill_is_always_twenty_four_buckets():
    rows = [(9, 4), (23, 1)]
    buckets = fill(rows, date(2024, 1, 1), date(2024, 1, 7), Granularity.HOUR)
    assert len(buckets) == 24
    assert buckets[0].key == "00:00"
    assert buckets[9].value == 4
    assert buckets[23].key == "23:00"
    assert buckets[23].value == 1
    assert sum(b.value for b in buckets) == 5


def test_hour_keys_accept_labels_and_floats():
    assert normalize_bucket_key("07:00", Granularity.HOUR) == "07:00"
    assert normalize_bucket_key(7.0, Granularity.HOUR) == "07:00"
    assert normalize_bucket_key("7", Granularity.HOUR) == "07:00"


def test_day_keys_accept_dates_datetimes_and_strings():
    when = datetime(2024, 5, 6, 13, 0, tzinfo=timezone.utc)
    assert normalize_bucket_key(when, Granularity.DAY) == "2024-05-06"
    assert normalize_bucket_key(date(2024, 5, 6), Granularity.DAY) == "2024-05-06"
    assert normalize_bucket_key("2024-05-06 00:00:00", Granularity.DAY) == "2024-05-06"


def test_day_label_is_short_month_and_unpadded_day():
    assert day_label(date(2024, 1, 2)) == "Jan 2"
    assert day_label(date(2024, 12, 25)) == "Dec 25"


def test_milliseconds_round_half_up():
    assert milliseconds_to_seconds(1499) == 1
    assert milliseconds_to_seconds(1500) == 2
    assert milliseconds_to_seconds(2500) == 3
    assert milliseconds_to_seconds(0) == 0
