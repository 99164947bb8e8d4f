"""Admin Listings — paginated, filtered, sorted views over users, projects, images, audit.

Invariants:
    - Query parameters are validated against the listing's whitelist before any query
    - Every listing read is audited with the applied filters as metadata
    - Response data is {items, pagination}

Design Decisions:
    - Raw request.query_params instead of typed Query(...) args: unknown
      parameters must be rejected, and all offending fields reported together
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import get_audit_logger, require_admin
from admin_console.core.domain_types import AuditAction, Principal
from admin_console.core.filter_spec import FilterSpec, parse_filter_spec
from admin_console.infrastructure.database import get_db
from admin_console.schemas.envelope import ok
from admin_console.services.audit_logger import AuditLogger, RequestContext
from admin_console.services.listing_catalog import (
    AUDIT_SOURCE, IMAGES_SOURCE, PROJECTS_SOURCE, USERS_SOURCE,
)
from admin_console.services.query_engine import ListingSource, list_rows
from admin_console.services.user_directory import get_user_profile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin-listings"])


def _describe(spec: FilterSpec) -> dict:
    return {
        "page": spec.page,
        "pageSize": spec.page_size,
        "sortField": spec.sort_field,
        "sortDir": spec.sort_dir.value,
        "filters": spec.filters,
    }


async def _serve_listing(
    request: Request,
    source: ListingSource,
    action: AuditAction,
    admin: Principal,
    db: AsyncSession,
    audit: AuditLogger,
) -> dict:
    spec = parse_filter_spec(request.query_params, source.definition)
    result = await list_rows(db, source, spec)
    audit.record(
        admin.id, action,
        resource_type=source.definition.name,
        resource_id="list",
        description=f"Viewed {source.definition.name} list",
        metadata={**_describe(spec), "total": result.total},
        request_context=RequestContext.from_request(request),
    )
    return ok({"items": result.items, "pagination": result.pagination()})


@router.get("/users")
async def list_users(
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    return await _serve_listing(
        request, USERS_SOURCE, AuditAction.SEARCH_USERS, admin, db, audit,
    )


@router.get("/users/{user_id}")
async def get_user(
    user_id: str,
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Single user profile with project and image counts."""
    profile = await get_user_profile(db, user_id)
    audit.record(
        admin.id, AuditAction.VIEW_USER_PROFILE,
        resource_type="user", resource_id=user_id,
        description=profile.get("email") or user_id,
        request_context=RequestContext.from_request(request),
        target_user_id=user_id,
    )
    return ok(profile)


@router.get("/projects")
async def list_projects(
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    return await _serve_listing(
        request, PROJECTS_SOURCE, AuditAction.VIEW_PROJECTS_LIST, admin, db, audit,
    )


@router.get("/images")
async def list_images(
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    return await _serve_listing(
        request, IMAGES_SOURCE, AuditAction.VIEW_IMAGES_LIST, admin, db, audit,
    )


@router.get("/audit")
async def list_audit_entries(
    request: Request,
    admin: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    return await _serve_listing(
        request, AUDIT_SOURCE, AuditAction.VIEW_AUDIT_LOGS, admin, db, audit,
    )
