"""Dashboard Stats — summary counts for the admin landing page and audit overview.

Invariants:
    - The four summary counts are independent and fetched in one round trip
    - Audit stats are scoped to a trailing window of `days` days
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.core.domain_types import Role
from admin_console.models.admin_action import AdminAction
from admin_console.models.generation import Generation
from admin_console.models.user import User

WEEKLY_WINDOW_DAYS = 7


async def summary_stats(db: AsyncSession, now: datetime | None = None) -> dict:
    """Total users, total images, admin count, generations in the last 7 days."""
    week_ago = (now or datetime.now(timezone.utc)) - timedelta(days=WEEKLY_WINDOW_DAYS)
    stmt = select(
        select(func.count()).select_from(User).scalar_subquery(),
        select(func.count()).select_from(Generation).scalar_subquery(),
        select(func.count()).select_from(User)
        .where(User.role == Role.ADMIN.value).scalar_subquery(),
        select(func.count()).select_from(Generation)
        .where(Generation.created_at >= week_ago).scalar_subquery(),
    )
    total_users, total_images, active_admins, weekly = (await db.execute(stmt)).one()
    return {
        "totalUsers": total_users or 0,
        "totalImages": total_images or 0,
        "activeAdmins": active_admins or 0,
        "weeklyActivity": weekly or 0,
    }


async def audit_stats(
    db: AsyncSession, days: int, now: datetime | None = None,
) -> dict:
    """Action totals, distinct admins, and per-action counts within the window."""
    end = now or datetime.now(timezone.utc)
    start = end - timedelta(days=days)
    in_window = AdminAction.created_at >= start

    totals = await db.execute(
        select(func.count(), func.count(func.distinct(AdminAction.admin_id)))
        .where(in_window),
    )
    total_actions, unique_admins = totals.one()

    by_type = await db.execute(
        select(AdminAction.action, func.count())
        .where(in_window)
        .group_by(AdminAction.action)
        .order_by(func.count().desc(), AdminAction.action),
    )
    return {
        "totalActions": total_actions,
        "uniqueAdmins": unique_admins,
        "actionsByType": {action: count for action, count in by_type.all()},
        "dateRange": {"start": start, "end": end},
    }
