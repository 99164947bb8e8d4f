"""Service test fixtures — async DB, in-memory key-value store, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_kv_store overridden with an in-memory KeyValueStore
    - db_manager initialized for background tasks (audit writes) that bypass get_db

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Sessions are sent as Bearer tokens; the cookie path is covered in core tests
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from admin_console.db.base import Base
from admin_console.infrastructure.cache import get_kv_store
from admin_console.infrastructure.database import get_db, DatabaseSessionManager
from admin_console.models import (
    AuthSession, Generation, Project, SourceImage, User,
)
import admin_console.infrastructure.database as db_module
from admin_console.main import app


class FakeKeyValueStore:
    """Dict-backed KeyValueStore; records the TTL passed with each set."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ttl_seconds=None):
        self.data[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, *keys):
        for key in keys:
            self.data.pop(key, None)
            self.ttls.pop(key, None)

    async def ping(self):
        return True


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def kv_store():
    return FakeKeyValueStore()


@pytest.fixture
async def client(test_engine, test_session_factory, kv_store):
    """FastAPI test client with DB and key-value store overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_kv_store] = lambda: kv_store

    # Patch db_manager for background tasks that use it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_user(test_db):
    """Factory: insert a user, optionally with a live session token."""
    async def _seed(
        role="user",
        *,
        email=None,
        name=None,
        token=None,
        suspended=False,
        expires_in=timedelta(hours=1),
        created_at=None,
    ):
        user_id = uuid.uuid4().hex
        user = User(
            id=user_id,
            email=email or f"{user_id[:8]}@example.com",
            name=name or f"User {user_id[:6]}",
            role=role,
            suspended=suspended,
            created_at=created_at or datetime.now(timezone.utc),
        )
        test_db.add(user)
        if token:
            test_db.add(AuthSession(
                id=uuid.uuid4().hex,
                token=token,
                user_id=user_id,
                expires_at=datetime.now(timezone.utc) + expires_in,
            ))
        await test_db.commit()
        return user
    return _seed


@pytest.fixture
async def admin_user(seed_user):
    return await seed_user("admin", email="admin@example.com", name="Ada Admin", token="admin-token")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
async def member_headers(seed_user):
    await seed_user("user", email="member@example.com", name="Mia Member", token="member-token")
    return {"Authorization": "Bearer member-token"}


@pytest.fixture
def seed_generation(test_db):
    """Factory: insert a generation (plus its project and source image) for a user."""
    async def _seed(
        user,
        *,
        project=None,
        file_name="living.jpg",
        status="completed",
        room_type="living_room",
        staging_style="modern",
        processing_time_ms=None,
        created_at=None,
        completed_at=None,
    ):
        created_at = created_at or datetime.now(timezone.utc)
        if project is None:
            project = Project(user_id=user.id, name=f"{user.name} project")
            test_db.add(project)
            await test_db.flush()
        image = SourceImage(
            user_id=user.id, project_id=project.id, original_file_name=file_name,
            created_at=created_at,
        )
        test_db.add(image)
        await test_db.flush()
        generation = Generation(
            user_id=user.id,
            project_id=project.id,
            source_image_id=image.id,
            room_type=room_type,
            staging_style=staging_style,
            status=status,
            processing_time_ms=processing_time_ms,
            created_at=created_at,
            completed_at=completed_at,
        )
        test_db.add(generation)
        await test_db.commit()
        return generation
    return _seed
