"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time; point them at throwaway backends first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from bluechain_mrv.main import app
from bluechain_mrv.database import Base, get_db
from bluechain_mrv.models import Profile, Project, User, UserRole
from bluechain_mrv.services.auth_service import AuthService
from bluechain_mrv.services.realtime_service import EventBroker
from bluechain_mrv.services.redis_service import RedisService
from bluechain_mrv.services.role_gate import Caller


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture(autouse=True)
def mock_redis():
    """Redis is never reached from tests; revocation and throttling are mocked"""
    with patch.object(RedisService, "is_token_blacklisted", new=AsyncMock(return_value=False)) as blacklisted, \
            patch.object(RedisService, "blacklist_token", new=AsyncMock()) as blacklist, \
            patch.object(RedisService, "get_login_attempts", new=AsyncMock(return_value=0)) as attempts, \
            patch.object(RedisService, "increment_login_attempts", new=AsyncMock(return_value=1)) as increment, \
            patch.object(RedisService, "reset_login_attempts", new=AsyncMock()) as reset:
        yield {
            "is_token_blacklisted": blacklisted,
            "blacklist_token": blacklist,
            "get_login_attempts": attempts,
            "increment_login_attempts": increment,
            "reset_login_attempts": reset,
        }


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create an in-memory test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def broker() -> EventBroker:
    """A fresh broker so tests do not see each other's subscribers"""
    return EventBroker()


async def create_account(
    db: AsyncSession,
    email: str,
    role: UserRole,
    password: str = "Password123",
) -> Caller:
    """Insert a user with a profile and return the matching Caller"""
    user = User(email=email, password_hash=AuthService.hash_password(password))
    db.add(user)
    await db.flush()

    profile = Profile(
        id=user.id,
        role=role.value,
        organization_name=f"{role.value.title()} Org",
        registration_number=f"REG-{role.value.upper()}",
        email=email,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(user)
    await db.refresh(profile)

    return Caller(user_id=user.id, email=user.email, profile=profile)


def headers_for(caller: Caller) -> dict:
    """Bearer headers carrying an access token for the caller"""
    token = AuthService.create_access_token(str(caller.user_id), caller.email, caller.role)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def generator(db_session: AsyncSession) -> Caller:
    return await create_account(db_session, "ngo@example.org", UserRole.GENERATOR)


@pytest_asyncio.fixture
async def other_generator(db_session: AsyncSession) -> Caller:
    return await create_account(db_session, "other-ngo@example.org", UserRole.GENERATOR)


@pytest_asyncio.fixture
async def validator(db_session: AsyncSession) -> Caller:
    return await create_account(db_session, "validator@example.org", UserRole.VALIDATOR)


@pytest_asyncio.fixture
async def consumer(db_session: AsyncSession) -> Caller:
    return await create_account(db_session, "buyer@example.com", UserRole.CONSUMER)


@pytest_asyncio.fixture
async def sample_project(db_session: AsyncSession, generator: Caller) -> Project:
    """A submitted project owned by the generator fixture"""
    project = Project(
        user_id=generator.user_id,
        name="Mangrove A",
        hectares=12.5,
        latitude=21.95,
        longitude=89.18,
        address="Sundarbans, West Bengal",
        photo_urls=["https://project-photos.s3.ap-south-1.amazonaws.com/a.jpg"],
        status="submitted",
    )
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
def make_account(db_session: AsyncSession):
    """Factory fixture: `await make_account(email, role)`"""

    async def _make(email: str, role: UserRole, password: str = "Password123") -> Caller:
        return await create_account(db_session, email, role, password)

    return _make


@pytest.fixture
def auth_headers():
    """Factory fixture: `auth_headers(caller)` returns bearer headers"""
    return headers_for
