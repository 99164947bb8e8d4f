"""Time Series — grouped aggregate reads feeding the dashboard charts.

Invariants:
    - Lookback windows are fixed: 30 days for daily charts, 7 days for hour-of-day
    - Daily ranges run from (today - 30 days) to today inclusive, in UTC
    - Gap filling is delegated to core.bucket_fill; this module only does SQL

Design Decisions:
    - date()/extract(hour) grouping works on both PostgreSQL and SQLite; keys are
      normalized in core.bucket_fill, so driver return types do not matter
"""

from datetime import date, datetime, timedelta, timezone

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.core.bucket_fill import fill
from admin_console.core.domain_types import AggregateKind, GenerationStatus, Granularity
from admin_console.models.generation import Generation

DAILY_LOOKBACK_DAYS = 30
HOURLY_LOOKBACK_DAYS = 7


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def daily_range(now: datetime) -> tuple[date, date, datetime]:
    """(first day, last day, lower-bound instant) of the daily window."""
    since = now - timedelta(days=DAILY_LOOKBACK_DAYS)
    return since.date(), now.date(), since


async def image_uploads_series(
    db: AsyncSession, now: datetime | None = None,
) -> list[dict]:
    """Generations created per day over the last 30 days."""
    start, end, since = daily_range(_now(now))
    day = func.date(Generation.created_at)
    result = await db.execute(
        select(day, func.count())
        .where(Generation.created_at >= since)
        .group_by(day)
        .order_by(day),
    )
    buckets = fill(result.all(), start, end, Granularity.DAY, AggregateKind.COUNT)
    return [{"date": b.key, "images": b.value, "label": b.label} for b in buckets]


async def processing_time_series(
    db: AsyncSession, now: datetime | None = None,
) -> list[dict]:
    """Daily average processing time (seconds) and count of completed generations."""
    start, end, since = daily_range(_now(now))
    day = func.date(Generation.completed_at)
    result = await db.execute(
        select(day, func.avg(Generation.processing_time_ms), func.count())
        .where(
            Generation.completed_at >= since,
            Generation.processing_time_ms.is_not(None),
            Generation.status == GenerationStatus.COMPLETED.value,
        )
        .group_by(day)
        .order_by(day),
    )
    rows = result.all()
    averages = fill(
        [(key, avg) for key, avg, _ in rows],
        start, end, Granularity.DAY, AggregateKind.AVERAGE_MS,
    )
    counts = fill(
        [(key, count) for key, _, count in rows],
        start, end, Granularity.DAY, AggregateKind.COUNT,
    )
    return [
        {"date": a.key, "avgTime": a.value, "count": c.value, "label": a.label}
        for a, c in zip(averages, counts)
    ]


async def activity_distribution_series(
    db: AsyncSession, now: datetime | None = None,
) -> list[dict]:
    """Generations per hour of day over the last 7 days."""
    current = _now(now)
    since = current - timedelta(days=HOURLY_LOOKBACK_DAYS)
    hour = extract("hour", Generation.created_at)
    result = await db.execute(
        select(hour, func.count())
        .where(Generation.created_at >= since)
        .group_by(hour)
        .order_by(hour),
    )
    buckets = fill(
        result.all(), since.date(), current.date(),
        Granularity.HOUR, AggregateKind.COUNT,
    )
    return [{"hour": b.key, "activity": b.value} for b in buckets]
