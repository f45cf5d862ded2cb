"""
Test configuration and fixtures for the real estate API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-with-at-least-32-chars")

import pytest
import pytest_asyncio
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from estate_api.main import app
from estate_api.config import Settings, get_settings
from estate_api.database import Base, get_db
from estate_api.models.user import User, UserRole
from estate_api.models.property import Property
from estate_api.repositories.user import UserRepository
from estate_api.repositories.property import PropertyRepository
from estate_api.utils.auth import create_access_token


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

DEFAULT_PASSWORD = "testpassword123"
VALID_IMAGE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the test database."""
    return Settings(
        environment="testing",
        database_url=TEST_DATABASE_URL,
        jwt_secret=os.environ["JWT_SECRET"],
        admin_name="Bootstrap Admin",
        admin_email="admin@realestate.com",
        admin_password="bootstrap-password",
    )


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh schema for every test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False}
        )

        # SQLite ignores foreign keys unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker,
    test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client; each request gets its own session like in production."""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: str = None,
        password: str = DEFAULT_PASSWORD
    ) -> dict:
        """Create a signup body."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password
        }

    @staticmethod
    async def create_user(
        session: AsyncSession,
        name: str = "Test User",
        email: str = None,
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.USER
    ) -> User:
        """Create a test user in the database."""
        data = UserFactory.create_user_data(name=name, email=email, password=password)
        return await UserRepository(session).create_user(
            name=data["name"],
            email=data["email"],
            password=data["password"],
            role=role
        )


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(**overrides) -> dict:
        """Create a complete, valid property body."""
        data = {
            "title": "Test Property",
            "description": "A beautiful test property",
            "price": 250000,
            "address": "1 Test Street",
            "city": "Testville",
            "state": "TS",
            "zip_code": "12345",
            "latitude": 40.7128,
            "longitude": -74.006,
            "type": "House",
            "beds": 3,
            "baths": 2,
            "sqft": 1500,
            "images": [VALID_IMAGE],
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(session: AsyncSession, owner_id: int, **overrides) -> Property:
        """Create a test property in the database."""
        data = PropertyFactory.create_property_data(**overrides)
        data["price"] = Decimal(str(data["price"]))
        return await PropertyRepository(session).create_property(owner_id, data)


# Common test fixtures
@pytest_asyncio.fixture
async def test_user(session_factory: async_sessionmaker) -> User:
    """Create a regular user."""
    async with session_factory() as session:
        return await UserFactory.create_user(session, name="Test User", email="user@test.com")


@pytest_asyncio.fixture
async def other_user(session_factory: async_sessionmaker) -> User:
    """Create a second regular user."""
    async with session_factory() as session:
        return await UserFactory.create_user(session, name="Other User", email="other@test.com")


@pytest_asyncio.fixture
async def test_admin(session_factory: async_sessionmaker) -> User:
    """Create an admin user."""
    async with session_factory() as session:
        return await UserFactory.create_user(
            session,
            name="Test Admin",
            email="admin@test.com",
            role=UserRole.ADMIN
        )


@pytest_asyncio.fixture
async def test_property(session_factory: async_sessionmaker, test_admin: User) -> Property:
    """Create a property owned by the test admin."""
    async with session_factory() as session:
        return await PropertyFactory.create_property(session, test_admin.id)


# Utility functions for tests
def auth_headers(user: User, settings: Settings) -> Dict[str, str]:
    """Bearer header for a user."""
    token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        settings=settings
    )
    return {"Authorization": f"Bearer {token}"}
