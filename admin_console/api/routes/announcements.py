"""Announcements — public banner read plus admin publish/clear.

Invariants:
    - GET /api/announcements/current needs no session; data is null when nothing is active
    - Publish and clear require an admin and are audited as UPDATE_SETTINGS
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from admin_console.api.deps import get_audit_logger, require_admin
from admin_console.core.domain_types import AuditAction, Principal
from admin_console.infrastructure.cache import get_kv_store
from admin_console.schemas.announcement import AnnouncementCreate
from admin_console.schemas.envelope import ok
from admin_console.services.announcement_cache import AnnouncementCache
from admin_console.services.audit_logger import AuditLogger, RequestContext

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["announcements"])


def get_announcement_cache(store=Depends(get_kv_store)) -> AnnouncementCache:
    return AnnouncementCache(store)


@router.get("/announcements/current")
async def current_announcement(
    announcements: AnnouncementCache = Depends(get_announcement_cache),
):
    return ok(await announcements.get_active())


@router.post("/admin/announcements", status_code=status.HTTP_201_CREATED)
async def publish_announcement(
    body: AnnouncementCreate,
    request: Request,
    admin: Principal = Depends(require_admin),
    announcements: AnnouncementCache = Depends(get_announcement_cache),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Replace the active announcement."""
    announcement = await announcements.publish(
        body.message, body.severity, body.start_at, body.end_at,
    )
    audit.record(
        admin.id, AuditAction.UPDATE_SETTINGS,
        resource_type="announcement", resource_id=announcement.id,
        description="Published announcement",
        metadata=announcement.model_dump(by_alias=True),
        request_context=RequestContext.from_request(request),
    )
    return ok(announcement, message="Announcement published")


@router.delete("/admin/announcements/active")
async def clear_announcement(
    request: Request,
    admin: Principal = Depends(require_admin),
    announcements: AnnouncementCache = Depends(get_announcement_cache),
    audit: AuditLogger = Depends(get_audit_logger),
):
    cleared_id = await announcements.clear()
    if cleared_id is None:
        return ok(None, message="No active announcement")
    audit.record(
        admin.id, AuditAction.UPDATE_SETTINGS,
        resource_type="announcement", resource_id=cleared_id,
        description="Cleared announcement",
        request_context=RequestContext.from_request(request),
    )
    return ok({"id": cleared_id}, message="Announcement cleared")
