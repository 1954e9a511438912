"""Shared pytest fixtures.

The app is pointed at an in-memory SQLite database and a fixed signing
secret before it is imported; each test gets a fresh database through a
``get_db`` dependency override.
"""

import os
import uuid

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FORMAT"] = "text"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.pop("API_PREFIX", None)
os.environ.pop("FRONTEND_DIR", None)
os.environ.pop("LOGIN_AUDIT_FILE", None)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, build_engine_options, get_db
from app.main import app

PASSWORD = "TestPassword123!"


@pytest.fixture
async def db_engine():
    url, options = build_engine_options("sqlite+aiosqlite:///:memory:")
    engine = create_async_engine(url, **options)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory):
    """HTTP client talking to the ASGI app in-process."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


async def register_and_login(client: AsyncClient, email: str, name: str = "Annapurna Mess") -> dict:
    resp = await client.post(
        "/register",
        json={"name": name, "email": email, "password": PASSWORD, "restaurant": f"{name} Kitchen"},
    )
    assert resp.status_code == 201, resp.text
    vendor_id = resp.json()["data"]["vendor_id"]

    login_resp = await client.post("/login", json={"email": email, "password": PASSWORD})
    assert login_resp.status_code == 200, login_resp.text
    token = login_resp.json()["data"]["token"]

    return {
        "email": email,
        "password": PASSWORD,
        "name": name,
        "vendor_id": vendor_id,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def vendor_factory(async_client: AsyncClient):
    """Register and log in extra vendors: ``await vendor_factory(email)``."""

    async def _make(email: str, name: str = "Annapurna Mess") -> dict:
        return await register_and_login(async_client, email, name)

    return _make


@pytest.fixture
async def registered_vendor(async_client: AsyncClient, unique_suffix: str) -> dict:
    """Register a vendor and log in; returns credentials and auth headers."""
    return await register_and_login(async_client, f"vendor_{unique_suffix}@example.com")


@pytest.fixture
async def other_vendor(async_client: AsyncClient, unique_suffix: str) -> dict:
    """A second, unrelated vendor for tenant-isolation checks."""
    return await register_and_login(
        async_client, f"other_{unique_suffix}@example.com", name="Sagar Canteen"
    )


@pytest.fixture
def student_payload() -> dict:
    return {
        "name": "Ravi Kumar",
        "phone": "9876543210",
        "meals": "Lunch + Dinner",
        "startDate": "2024-01-01",
        "endDate": "2024-01-31",
        "totalAmount": 1000,
        "paidAmount": 300,
    }


@pytest.fixture
async def created_student(async_client: AsyncClient, registered_vendor: dict, student_payload: dict) -> dict:
    resp = await async_client.post(
        "/students", headers=registered_vendor["headers"], json=student_payload
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
