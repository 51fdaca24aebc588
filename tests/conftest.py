"""Pytest configuration and fixtures for API tests."""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from poi_api.config import settings
from poi_api.database import Base, get_db
from poi_api.main import app
from poi_api.models import UserRole
from poi_api.schemas import POI, POICreate, POIType, User
from poi_api.services import POIService

# Test user IDs (sent as X-User-Id in dev auth mode)
ADMIN_ID = "00000000-0000-0000-0000-00000000000a"
EDITOR_ID = "00000000-0000-0000-0000-00000000000b"
OTHER_EDITOR_ID = "00000000-0000-0000-0000-00000000000c"
VIEWER_ID = "00000000-0000-0000-0000-00000000000d"

TEST_USERS = [
    (ADMIN_ID, "admin@example.com", UserRole.ADMIN),
    (EDITOR_ID, "editor@example.com", UserRole.EDITOR),
    (OTHER_EDITOR_ID, "other-editor@example.com", UserRole.EDITOR),
    (VIEWER_ID, "viewer@example.com", UserRole.VIEWER),
]

# Use SQLite for local tests, PostgreSQL in CI (when TEST_DATABASE_URL is set)
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

is_sqlite = TEST_DATABASE_URL.startswith("sqlite")


def headers_for(user_id: str) -> dict[str, str]:
    """Dev-mode auth headers for a test user."""
    return {"X-User-Id": user_id}


def make_user(user_id: str, role: UserRole) -> User:
    return User(id=user_id, email=f"{user_id}@example.com", role=role)


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class InMemoryPOIRepository:
    """POI store kept in a dict, for service tests."""

    def __init__(self):
        self._pois: dict[int, POI] = {}
        self._next_id = 1
        self.calls: list[str] = []

    async def create(self, data: POICreate, created_by: str, now: datetime) -> POI:
        self.calls.append("create")
        poi = POI(
            id=self._next_id,
            name=data.name,
            type=data.type,
            description=data.description,
            latitude=data.latitude,
            longitude=data.longitude,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        self._pois[poi.id] = poi
        self._next_id += 1
        return poi

    async def get(self, poi_id: int) -> POI | None:
        self.calls.append("get")
        return self._pois.get(poi_id)

    async def list_pois(self, poi_type: POIType | None = None) -> list[POI]:
        self.calls.append("list")
        pois = [p for p in self._pois.values() if poi_type is None or p.type == poi_type]
        return sorted(pois, key=lambda p: (p.created_at, p.id), reverse=True)

    async def update(self, poi_id: int, changes: dict[str, Any], now: datetime) -> POI | None:
        self.calls.append("update")
        existing = self._pois.get(poi_id)
        if existing is None:
            return None
        updated = POI.model_validate({**existing.model_dump(), **changes, "updated_at": now})
        self._pois[poi_id] = updated
        return updated

    async def delete(self, poi_id: int) -> bool:
        self.calls.append("delete")
        return self._pois.pop(poi_id, None) is not None


class InMemoryUserRepository:
    """User store kept in a dict, for service tests."""

    def __init__(self, users: list[User] | None = None):
        self._users = {u.id: u for u in users or []}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    async def create(
        self,
        email: str,
        password_hash: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        role: UserRole = UserRole.VIEWER,
    ) -> User:
        user = User(
            id=f"user-{len(self._users) + 1}",
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        self._users[user.id] = user
        return user

    def set_role(self, user_id: str, role: UserRole) -> None:
        self._users[user_id] = self._users[user_id].model_copy(update={"role": role})


# ============================================================================
# In-memory service fixtures
# ============================================================================


@pytest.fixture
def admin() -> User:
    return make_user(ADMIN_ID, UserRole.ADMIN)


@pytest.fixture
def editor() -> User:
    return make_user(EDITOR_ID, UserRole.EDITOR)


@pytest.fixture
def other_editor() -> User:
    return make_user(OTHER_EDITOR_ID, UserRole.EDITOR)


@pytest.fixture
def viewer() -> User:
    return make_user(VIEWER_ID, UserRole.VIEWER)


@pytest.fixture
def poi_store() -> InMemoryPOIRepository:
    return InMemoryPOIRepository()


@pytest.fixture
def user_store(admin, editor, other_editor, viewer) -> InMemoryUserRepository:
    return InMemoryUserRepository([admin, editor, other_editor, viewer])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(poi_store, user_store, clock) -> POIService:
    return POIService(pois=poi_store, users=user_store, now=clock)


# ============================================================================
# Database fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine():
    """Fresh database per test; SQLite in-memory needs StaticPool to stay alive."""
    if is_sqlite:
        test_engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
        for user_id, email, role in TEST_USERS:
            await conn.execute(
                text("INSERT INTO users (id, email, role) VALUES (:id, :email, :role)"),
                {"id": user_id, "email": email, "role": role.value},
            )

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for the FastAPI app in dev auth mode."""
    monkeypatch.setattr(settings, "auth_mode", "dev")

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
