"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import UserProfile
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.realtime.profile_feed import ProfileFeed

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed IDs for consistency
TEST_USER_ID = uuid4()
ADMIN_USER_ID = uuid4()

# First entry of the default allow-list
ADMIN_EMAIL = "tgantasa@gitam.in"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """One in-memory database per test; StaticPool keeps it on one connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def profile_feed(session_factory: async_sessionmaker[AsyncSession]) -> ProfileFeed:
    return ProfileFeed(lambda: SQLAlchemyUnitOfWork(session_factory))


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession], profile_feed: ProfileFeed
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory wired to the feed, as in production."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory, on_commit=profile_feed.publish)

    return factory


@pytest.fixture
def seed_profile(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[UserProfile], object]:
    """Write a profile straight to the store."""

    async def seed(profile: UserProfile) -> UserProfile:
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            saved = await uow.profiles.set(profile)
            await uow.commit()
        return saved

    return seed


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="participant@gitam.in",
        display_name="Test User",
    )


@pytest.fixture
def admin_user() -> TokenUser:
    """Allow-listed administrator identity."""
    return TokenUser(
        id=ADMIN_USER_ID,
        email=ADMIN_EMAIL,
        display_name="T Gantasa",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def app_factory(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    profile_feed: ProfileFeed,
    auth_provider: JWTAuthProvider,
) -> Callable[[TokenUser | None], FastAPI]:
    """
    Build an app bound to the in-memory database.

    Services and the feed are swapped for test instances; when a user is
    given, authentication is bypassed and every request acts as that user.
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.dependencies.services import (
        get_admin_resolution_service,
        get_admin_service,
        get_game_service,
        get_profile_feed,
        get_profile_service,
    )
    from core.config import settings
    from domain.services.admin_resolution_service import AdminResolutionService
    from domain.services.admin_service import AdminService
    from domain.services.game_service import GameService
    from domain.services.profile_service import ProfileService
    from main import create_app

    def build(user: TokenUser | None = None) -> FastAPI:
        app = create_app()
        resolver = AdminResolutionService(uow_factory, settings.admin_emails_list)

        app.dependency_overrides[get_auth_provider] = lambda: auth_provider
        app.dependency_overrides[get_profile_feed] = lambda: profile_feed
        app.dependency_overrides[get_admin_resolution_service] = lambda: resolver
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(
            uow_factory, resolver
        )
        app.dependency_overrides[get_game_service] = lambda: GameService(uow_factory)
        app.dependency_overrides[get_admin_service] = lambda: AdminService(uow_factory)

        if user is not None:

            async def override_get_user() -> TokenUser:
                return user

            app.dependency_overrides[get_current_user] = override_get_user

        return app

    return build


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def unauthenticated_client(
    app_factory: Callable[[TokenUser | None], FastAPI],
) -> AsyncGenerator[AsyncClient, None]:
    """Test-database client that still requires a bearer token."""
    transport = ASGITransport(app=app_factory(None))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app_factory: Callable[[TokenUser | None], FastAPI],
    test_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as a regular participant (no profile seeded)."""
    transport = ASGITransport(app=app_factory(test_user))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_client(
    app_factory: Callable[[TokenUser | None], FastAPI],
    admin_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as the allow-listed administrator."""
    transport = ASGITransport(app=app_factory(admin_user))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
