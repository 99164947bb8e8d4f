"""Route Dependencies — admin gate and audit logger for FastAPI Depends.

Invariants:
    - require_admin raises UnauthenticatedError (401) or ForbiddenError (403);
      handlers behind it only ever see an admin Principal
    - Nothing is written (audit included) before require_admin succeeds
"""

from fastapi import BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.config import get_settings
from admin_console.core.authorization import Authorized, Forbidden
from admin_console.core.domain_types import Principal
from admin_console.core.errors import ErrorContext, ForbiddenError, UnauthenticatedError
from admin_console.infrastructure.database import get_db
from admin_console.infrastructure.session_resolver import DatabaseSessionResolver
from admin_console.services.audit_logger import AuditLogger
from admin_console.services.auth_gate import AuthGate


async def require_admin(
    request: Request, db: AsyncSession = Depends(get_db),
) -> Principal:
    gate = AuthGate(
        DatabaseSessionResolver(db), get_settings().session_cookie_name,
    )
    outcome = await gate.authorize(request)
    if isinstance(outcome, Authorized):
        return outcome.principal
    if isinstance(outcome, Forbidden):
        raise ForbiddenError(
            ErrorContext(actor_id=outcome.principal_id, path=request.url.path),
        )
    raise UnauthenticatedError(ErrorContext(path=request.url.path))


def get_audit_logger(background_tasks: BackgroundTasks) -> AuditLogger:
    return AuditLogger(background_tasks)
