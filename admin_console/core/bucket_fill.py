"""Bucket Fill — turns sparse grouped-aggregate rows into a dense, gap-free series.

Invariants:
    - Output has exactly one bucket per unit in [range_start, range_end], inclusive
    - Keys are unique and strictly increasing; no bucket is dropped or reordered
    - HOUR granularity is hour-of-day: always 24 buckets "00:00".."23:00"
    - Missing COUNT buckets are 0; missing AVERAGE_MS buckets are None
    - Averages are milliseconds converted to whole seconds, rounded half up

Design Decisions:
    - Pure function over (key, aggregate) pairs: the grouped SQL lives in the
      shell, the enumeration and gap filling live here
    - Sparse keys are normalized to bucket keys (date → ISO string, hour int → "HH:00")
      before lookup, so drivers returning date objects or strings match alike
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from admin_console.core.domain_types import AggregateKind, Granularity

HOURS_PER_DAY = 24


@dataclass(frozen=True)
class TimeBucket:
    key: str
    label: str
    value: int | None


def fill(
    sparse_rows: Iterable[tuple[object, float | int | None]],
    range_start: date,
    range_end: date,
    granularity: Granularity,
    kind: AggregateKind = AggregateKind.COUNT,
) -> list[TimeBucket]:
    """Enumerate every bucket in the range and fill it from the sparse rows."""
    if granularity is Granularity.DAY and _as_date(range_start) > _as_date(range_end):
        raise ValueError("range_start must not be after range_end")

    found: dict[str, float | int | None] = {}
    for key, aggregate in sparse_rows:
        found[normalize_bucket_key(key, granularity)] = aggregate

    return [
        TimeBucket(key=key, label=label, value=_bucket_value(found, key, kind))
        for key, label in enumerate_buckets(range_start, range_end, granularity)
    ]


def enumerate_buckets(
    range_start: date, range_end: date, granularity: Granularity,
) -> list[tuple[str, str]]:
    """(key, label) for every unit in the range, ascending."""
    if granularity is Granularity.HOUR:
        return [(hour_label(h), hour_label(h)) for h in range(HOURS_PER_DAY)]
    start, end = _as_date(range_start), _as_date(range_end)
    days = (end - start).days + 1
    return [
        (d.isoformat(), day_label(d))
        for d in (start + timedelta(days=i) for i in range(days))
    ]


def normalize_bucket_key(key: object, granularity: Granularity) -> str:
    if granularity is Granularity.HOUR:
        if isinstance(key, str) and ":" in key:
            return key
        return hour_label(int(float(key)))
    if isinstance(key, (date, datetime)):
        return _as_date(key).isoformat()
    return str(key)[:10]


def hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def day_label(day: date) -> str:
    """Short display label, e.g. 'Jan 2'."""
    return f"{day:%b} {day.day}"


def milliseconds_to_seconds(value: float) -> int:
    """Round half up, matching how the dashboard displays durations."""
    return math.floor(float(value) / 1000 + 0.5)


def _bucket_value(
    found: dict[str, float | int | None], key: str, kind: AggregateKind,
) -> int | None:
    aggregate = found.get(key)
    if kind is AggregateKind.COUNT:
        return int(aggregate) if aggregate is not None else 0
    if aggregate is None:
        return None
    return milliseconds_to_seconds(aggregate)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value
