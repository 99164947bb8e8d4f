"""User Directory — single-user profile read for the admin user detail view."""

from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.core.errors import ResourceNotFoundError
from admin_console.models.user import User
from admin_console.services.listing_catalog import USERS_SOURCE


async def get_user_profile(db: AsyncSession, user_id: str) -> dict:
    """Profile with project/image counts, or ResourceNotFoundError."""
    result = await db.execute(USERS_SOURCE.base().where(User.id == user_id))
    row = result.one_or_none()
    if row is None:
        raise ResourceNotFoundError("User", user_id)
    return USERS_SOURCE.serialize(row)
