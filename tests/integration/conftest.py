import os
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_blob_store, get_session
from src.adapter.services.blob_store import LocalBlobStore
import src.domain  # noqa: F401

# Set TEST_DB_URI to run against PostgreSQL instead of in-memory SQLite
TEST_DB_URI = os.environ.get("TEST_DB_URI", "sqlite+aiosqlite://")

ADMIN_EMAIL = "ops@example.com"
ADMIN_PASSWORD = "admin-pass"


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create a fresh database for each test"""
    if TEST_DB_URI.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        engine = create_async_engine(
            TEST_DB_URI, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    else:
        engine = create_async_engine(TEST_DB_URI, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session for arranging and inspecting data directly"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, tmp_path):
    """Create test client with database session and upload store overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_blob_store] = lambda: LocalBlobStore(str(tmp_path))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_headers(client):
    """Register and log in an administrator; returns the Authorization header"""
    await client.post(
        "/api/admin/register",
        json={"name": "Ops", "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    response = await client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
