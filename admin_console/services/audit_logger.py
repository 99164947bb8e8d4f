"""Audit Logger — queues an append-only audit entry for every observed admin action.

Invariants:
    - record() returns immediately; the write runs as a background task before
      the request cycle completes
    - A failed write is logged on the audit error channel and never reaches the caller
    - Entries are never updated after insert

Design Decisions:
    - BackgroundTasks over asyncio.create_task: Starlette runs the task after the
      response is sent but inside the request lifecycle, so it completes before shutdown
    - The write uses its own DB session — the request session is closed by then
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import BackgroundTasks, Request
from fastapi.encoders import jsonable_encoder

from admin_console.core.domain_types import AuditAction
from admin_console.models.admin_action import AdminAction

logger = logging.getLogger("admin_console.audit")


@dataclass(frozen=True)
class RequestContext:
    ip_address: str | None = None
    user_agent: str | None = None
    path: str | None = None

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        return cls(
            ip_address=client_ip(request),
            user_agent=request.headers.get("user-agent"),
            path=request.url.path,
        )


@dataclass(frozen=True)
class AuditEntry:
    actor_id: str
    action: AuditAction
    resource_type: str
    resource_id: str
    description: str
    metadata: dict[str, Any] = field(default_factory=dict)
    request_context: RequestContext = field(default_factory=RequestContext)
    target_user_id: str | None = None


def client_ip(request: Request) -> str | None:
    """First hop of x-forwarded-for, then x-real-ip, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


class AuditLogger:
    """Fire-and-forget audit writer bound to one request's background tasks."""

    def __init__(self, background_tasks: BackgroundTasks):
        self._tasks = background_tasks

    def record(
        self,
        actor_id: str,
        action: AuditAction,
        resource_type: str,
        resource_id: str,
        description: str,
        metadata: dict[str, Any] | None = None,
        request_context: RequestContext | None = None,
        target_user_id: str | None = None,
    ) -> None:
        entry = AuditEntry(
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            description=description,
            metadata=metadata or {},
            request_context=request_context or RequestContext(),
            target_user_id=target_user_id,
        )
        self._tasks.add_task(write_audit_entry, entry)


async def write_audit_entry(entry: AuditEntry) -> None:
    """Persist one entry. Never raises: failures go to the audit error channel."""
    from admin_console.infrastructure.database import db_manager

    log_extra = {
        "actor_id": entry.actor_id,
        "action": entry.action.value,
        "resource_type": entry.resource_type,
        "resource_id": entry.resource_id,
    }
    if not db_manager:
        logger.error("Audit write skipped: database not initialized", extra=log_extra)
        return

    try:
        async with db_manager.session() as db:
            db.add(AdminAction(
                action=entry.action.value,
                admin_id=entry.actor_id,
                target_user_id=entry.target_user_id,
                target_resource_type=entry.resource_type,
                target_resource_id=entry.resource_id,
                target_resource_name=entry.description,
                ip_address=entry.request_context.ip_address,
                user_agent=entry.request_context.user_agent,
                request_path=entry.request_context.path,
                details=jsonable_encoder(entry.metadata),
            ))
            await db.commit()
        logger.info(f"Admin action {entry.action.value}", extra=log_extra)
    except Exception:
        logger.error("Audit write failed", exc_info=True, extra=log_extra)
