"""Pytest fixtures for testing."""
import os

# Settings are read at import time by api.main, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-bytes"

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
from fakeredis import aioredis
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from core.config import Settings
from core.redis import RedisCache
from core.security import TokenService
from db.session import create_session_factory
from db.store import Store
from models.base import Base
from schemas.role import RoleCreate
from schemas.user import ChangeRoleItem, UserCreate
from services.container import ServiceContainer, build_container
from services.role_service import RoleService
from services.todo_service import TodoService
from services.user_service import UserService

TEST_JWT_SECRET = os.environ["JWT_SECRET"]
TEST_PASSWORD = "correct-horse"


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def settings() -> Settings:
    """Settings for the test run, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        JWT_SECRET=TEST_JWT_SECRET,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an in-memory SQLite engine with the schema applied.

    StaticPool keeps a single connection so every session sees the same database.
    Foreign keys are switched on so ON DELETE CASCADE behaves as in production.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def store(async_engine: AsyncEngine) -> Store:
    """Store over the test engine."""
    return Store(create_session_factory(async_engine))


@pytest.fixture
async def redis_client() -> AsyncGenerator[aioredis.FakeRedis]:
    """In-process fake Redis, empty for each test."""
    client = aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache(redis_client: aioredis.FakeRedis) -> RedisCache:
    """The production cache wrapper over fake Redis."""
    return RedisCache(redis_client)


@pytest.fixture
def token_service() -> TokenService:
    """Token service signing with the test secret."""
    return TokenService(TEST_JWT_SECRET)


@pytest.fixture
def container(settings: Settings, store: Store, cache: RedisCache) -> ServiceContainer:
    """All services wired over the test store and cache."""
    return build_container(settings, store, cache)


@pytest.fixture
def user_service(container: ServiceContainer) -> UserService:
    """User service under test."""
    return container.users


@pytest.fixture
def role_service(container: ServiceContainer) -> RoleService:
    """Role service under test."""
    return container.roles


@pytest.fixture
def todo_service(container: ServiceContainer) -> TodoService:
    """Todo service under test."""
    return container.todos


async def make_user(
    user_service: UserService,
    email: str = "alice@example.com",
    username: str = "alice",
    password: str = TEST_PASSWORD,
) -> UUID:
    """Create a user through the service and return its ID."""
    user = await user_service.create_user(
        UserCreate(email=email, username=username, password=password),
    )
    return user.id


async def grant_level(
    user_service: UserService,
    role_service: RoleService,
    user_id: UUID,
    auth_level: int,
) -> UUID:
    """Create a role with the given level and attach it to the user."""
    role = await role_service.create_role(
        RoleCreate(name=f"level-{auth_level}", auth_level=auth_level),
    )
    await user_service.change_role(user_id, [ChangeRoleItem(id=role.id, action="add")])
    return role.id


@pytest.fixture
async def client(container: ServiceContainer) -> AsyncGenerator[AsyncClient]:
    """
    Create a test client bound to the test container.

    ASGITransport does not run the lifespan, so the container is placed on
    app.state directly.
    """
    from api.main import app

    app.state.services = container

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    del app.state.services
