"""Integration tests: Health, root and frontend fallback."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.exceptions import register_exception_handlers
from app.main import app, register_frontend


@pytest.mark.asyncio
async def test_health():
    """Health endpoint at /health."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert resp.headers["X-Request-ID"]
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_request_id_is_propagated():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert resp.headers["X-Request-ID"] == "trace-123"


@pytest.mark.asyncio
async def test_root_without_frontend():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["health"] == "/health"


@pytest.fixture
def frontend_app(tmp_path):
    (tmp_path / "index.html").write_text("<html>spa</html>")
    (tmp_path / "app.js").write_text("console.log('hi')")
    spa = FastAPI()
    register_exception_handlers(spa)
    register_frontend(spa, str(tmp_path))
    return spa


@pytest.mark.asyncio
async def test_frontend_serves_files_and_falls_back_to_index(frontend_app):
    async with AsyncClient(
        transport=ASGITransport(app=frontend_app), base_url="http://test"
    ) as client:
        asset = await client.get("/app.js")
        deep_link = await client.get("/dashboard/students/42")
        root = await client.get("/")

    assert asset.status_code == 200
    assert "console.log" in asset.text
    assert deep_link.status_code == 200
    assert "spa" in deep_link.text
    assert "spa" in root.text


@pytest.mark.asyncio
async def test_frontend_never_answers_api_paths(frontend_app):
    async with AsyncClient(
        transport=ASGITransport(app=frontend_app), base_url="http://test"
    ) as client:
        resp = await client.get("/students/anything")
    assert resp.status_code == 404
