"""Admin Dashboard — summary counts, audit statistics, and chart series.

Invariants:
    - Every route sits behind require_admin
    - Chart lookback windows are fixed (30 days daily, 7 days hourly)
    - Only the summary view is audited; chart reads are not
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import get_audit_logger, require_admin
from admin_console.core.domain_types import AuditAction, Principal
from admin_console.infrastructure.database import get_db
from admin_console.schemas.envelope import ok
from admin_console.services.audit_logger import AuditLogger, RequestContext
from admin_console.services.dashboard_stats import audit_stats, summary_stats
from admin_console.services.time_series import (
    activity_distribution_series, image_uploads_series, processing_time_series,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin-dashboard"])


@router.get("/stats")
async def get_stats(
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Headline counts for the dashboard."""
    stats = await summary_stats(db)
    audit.record(
        admin.id, AuditAction.ACCESS_ADMIN_DASHBOARD,
        resource_type="dashboard", resource_id="stats",
        description="Admin dashboard",
        request_context=RequestContext.from_request(request),
    )
    return ok(stats)


@router.get("/audit/stats")
async def get_audit_stats(
    days: int = Query(30, ge=1, le=365),
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ok(await audit_stats(db, days))


@router.get("/charts/image-uploads")
async def image_uploads_chart(
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ok(await image_uploads_series(db))


@router.get("/charts/processing-time")
async def processing_time_chart(
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ok(await processing_time_series(db))


@router.get("/charts/activity-distribution")
async def activity_distribution_chart(
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return ok(await activity_distribution_series(db))
