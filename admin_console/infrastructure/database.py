"""Database — async engine and sessions for the admin read paths and the audit writer.

Invariants:
    - A failed session is rolled back before the error leaves it
    - Any SQLAlchemy failure surfaces as DatabaseError; driver text stays in the log

Design Decisions:
    - One mapping for every SQLAlchemy failure: the console only reads, apart
      from single-row audit inserts, so the cause is logged rather than classified
    - db_manager is created by init_db and disposed by close_db from the FastAPI
      lifespan; importing this module opens nothing
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from admin_console.core.errors import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine; hands out sessions that never leak a half-done transaction."""

    def __init__(self, database_url: str, **pool_options):
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **pool_options,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"Admin query failed: {type(e).__name__}",
                    extra={"operation": "query"}, exc_info=True,
                )
                raise DatabaseError(type(e).__name__, "query") from e

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.warning(f"Database readiness check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **pool_options):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **pool_options)


async def close_db():
    global db_manager
    if db_manager:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
