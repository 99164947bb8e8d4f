"""Session Resolver — SessionResolver over the auth provider's sessions and users tables.

Invariants:
    - Read-only: never extends, refreshes, or deletes a session
    - Expired sessions, unknown tokens, suspended users, and unknown roles resolve to None
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.core.domain_types import Principal, Role, UserId
from admin_console.models.auth_session import AuthSession
from admin_console.models.user import User

logger = logging.getLogger(__name__)


class DatabaseSessionResolver:
    """Resolves a session token to a Principal with one joined read."""

    def __init__(self, db: AsyncSession, clock=None):
        self._db = db
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def resolve(self, token: str) -> Principal | None:
        result = await self._db.execute(
            select(User.id, User.role, User.suspended)
            .join(AuthSession, AuthSession.user_id == User.id)
            .where(
                AuthSession.token == token,
                AuthSession.expires_at > self._clock(),
            ),
        )
        row = result.one_or_none()
        if row is None:
            return None
        if row.suspended:
            logger.info(
                "Suspended user attempted admin access",
                extra={"actor_id": row.id},
            )
            return None
        try:
            role = Role(row.role)
        except ValueError:
            logger.warning(
                f"User has unknown role {row.role!r}", extra={"actor_id": row.id},
            )
            return None
        return Principal(id=UserId(row.id), role=role)
