"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting and point the app at SQLite before anything imports settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()


class GitHubStub:
    """Stands in for api.github.com behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.repos: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        # Path is /users/{username}/repos
        username = request.url.path.split("/")[2]
        if username in self.repos:
            return httpx.Response(200, json=self.repos[username])
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
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
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        name="Test User",
    )


@pytest.fixture
async def test_user_record(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> UserModel:
    """Insert the test user's account row."""
    async with session_factory() as session:
        user = UserModel(
            id=test_user.id,
            name=test_user.name,
            email=test_user.email,
            avatar="//www.gravatar.com/avatar/test",
        )
        session.add(user)
        await session.commit()
        return user


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
def github_stub() -> GitHubStub:
    """Fake GitHub API; tests fill in ``repos`` or set ``fail_with``."""
    return GitHubStub()


@pytest.fixture
def github_client(github_stub: GitHubStub) -> GitHubClient:
    """GitHub client wired to the stub transport."""
    return GitHubClient(
        base_url="https://api.github.test",
        client_id="test-client-id",
        client_secret="test-client-secret",
        user_agent="devprofile-tests",
        timeout=5.0,
        per_page=5,
        transport=httpx.MockTransport(github_stub.handler),
    )


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    github_client: GitHubClient,
) -> FastAPI:
    """
    Create an app wired to the test database, test signing key and GitHub stub.

    Overrides:
    - Auth provider uses the test secret
    - Profile service uses a UoW bound to the in-memory database
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_profile_service
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    def override_get_auth_provider() -> JWTAuthProvider:
        return auth_provider

    def override_get_profile_service() -> ProfileService:
        return ProfileService(test_uow_factory, github_client=github_client)

    app.dependency_overrides[get_auth_provider] = override_get_auth_provider
    app.dependency_overrides[get_profile_service] = override_get_profile_service
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app: FastAPI,
    test_user_record: UserModel,
    auth_headers: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client that sends the test user's bearer token."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers,
    ) as c:
        yield c
