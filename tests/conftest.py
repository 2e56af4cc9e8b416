"""Test fixtures — a fresh database per test, real session auth.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own engine with the schema created from the models.
   The default URL is an in-memory SQLite database (aiosqlite) held on a
   single shared connection, so every test starts empty. Point
   FOLIO_TEST_DATABASE_URL at a scratch PostgreSQL database to run the
   same suite against asyncpg; tables are dropped after each test.
2. The app's get_db dependency is overridden to yield that session.
3. Auth is NOT mocked: admin_client logs in through POST /api/login and
   carries the real session cookie.
"""

import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from folio.db.engine import get_db
from folio.db.models import Base
from folio.main import app
from folio.services.auth_service import AuthService

TEST_DB_URL = os.environ.get("FOLIO_TEST_DATABASE_URL", "sqlite+aiosqlite://")

ADMIN_USERNAME = "admin@example.com"
ADMIN_PASSWORD = "admin-password-123"
EDITOR_USERNAME = "editor@example.com"
EDITOR_PASSWORD = "editor-password-123"


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {}


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a freshly created schema."""
    engine = create_async_engine(TEST_DB_URL, echo=False, **_engine_kwargs(TEST_DB_URL))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        await session.close()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture()
async def admin_user(db_session):
    return await AuthService(db_session).create_user(
        ADMIN_USERNAME,
        ADMIN_PASSWORD,
        email=ADMIN_USERNAME,
        full_name="Site Admin",
        is_admin=True,
    )


@pytest_asyncio.fixture()
async def editor_user(db_session):
    """A principal that can log in but is not an admin."""
    return await AuthService(db_session).create_user(
        EDITOR_USERNAME,
        EDITOR_PASSWORD,
        full_name="Guest Editor",
        is_admin=False,
    )


def _client_for(db_session) -> AsyncClient:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture()
async def client(db_session):
    """Anonymous HTTP client with the app's get_db overridden."""
    async with _client_for(db_session) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def admin_client(db_session, admin_user):
    """HTTP client holding a real admin session cookie."""
    async with _client_for(db_session) as ac:
        r = await ac.post(
            "/api/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )
        assert r.status_code == 200, r.text
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def editor_client(db_session, editor_user):
    """HTTP client logged in as a non-admin principal."""
    async with _client_for(db_session) as ac:
        r = await ac.post(
            "/api/login",
            json={"username": EDITOR_USERNAME, "password": EDITOR_PASSWORD},
        )
        assert r.status_code == 200, r.text
        yield ac
    app.dependency_overrides.clear()
