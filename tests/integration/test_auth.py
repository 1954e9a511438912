"""Integration tests: registration and login."""

import json

import pytest
from httpx import AsyncClient
from jose import jwt

from app.config import settings


@pytest.mark.asyncio
async def test_register_success(async_client: AsyncClient, unique_suffix: str):
    resp = await async_client.post(
        "/register",
        json={
            "name": "Annapurna Mess",
            "email": f"reg_{unique_suffix}@example.com",
            "password": "SecurePass123!",
            "restaurant": "Annapurna",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert "vendor_id" in body["data"]
    assert "token" not in body["data"]


@pytest.mark.asyncio
async def test_register_accepts_vendorname(async_client: AsyncClient, unique_suffix: str):
    email = f"legacy_{unique_suffix}@example.com"
    resp = await async_client.post(
        "/register",
        json={"vendorname": "Legacy Mess", "email": email, "password": "pw"},
    )
    assert resp.status_code == 201

    login = await async_client.post("/login", json={"email": email, "password": "pw"})
    token = login.json()["data"]["token"]
    profile = await async_client.get("/vendor", headers={"Authorization": f"Bearer {token}"})
    assert profile.json()["data"]["name"] == "Legacy Mess"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "password"])
async def test_register_missing_field(async_client: AsyncClient, unique_suffix: str, missing: str):
    payload = {"name": "A", "email": f"m_{unique_suffix}@example.com", "password": "pw"}
    payload.pop(missing)
    resp = await async_client.post("/register", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert missing in body["error"]["message"]


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client: AsyncClient, unique_suffix: str):
    email = f"dup_{unique_suffix}@example.com"
    first = await async_client.post(
        "/register", json={"name": "One", "email": email, "password": "Pass123!"}
    )
    assert first.status_code == 201

    resp = await async_client.post(
        "/register", json={"name": "Two", "email": email, "password": "Different!", "restaurant": "X"}
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"
    assert "already exists" in resp.json()["error"]["message"].lower()


@pytest.mark.asyncio
async def test_register_then_login(async_client: AsyncClient, registered_vendor: dict):
    resp = await async_client.post(
        "/login",
        json={"email": registered_vendor["email"], "password": registered_vendor["password"]},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 4 * 24 * 60 * 60

    claims = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert claims["sub"] == registered_vendor["vendor_id"]
    assert claims["email"] == registered_vendor["email"]
    assert claims["name"] == registered_vendor["name"]


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_the_same(
    async_client: AsyncClient, registered_vendor: dict, unique_suffix: str
):
    wrong_password = await async_client.post(
        "/login",
        json={"email": registered_vendor["email"], "password": "WrongPassword123!"},
    )
    unknown_email = await async_client.post(
        "/login",
        json={"email": f"nobody_{unique_suffix}@example.com", "password": "WrongPassword123!"},
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_email_is_case_sensitive(async_client: AsyncClient, vendor_factory, unique_suffix: str):
    vendor = await vendor_factory(f"Case_{unique_suffix}@example.com")
    resp = await async_client.post(
        "/login",
        json={"email": vendor["email"].lower(), "password": vendor["password"]},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"email": "a@example.com"}, {"password": "x"}, {}])
async def test_login_missing_fields(async_client: AsyncClient, payload: dict):
    resp = await async_client.post("/login", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["not-an-email", "missing-at.example.com", "a@b"])
async def test_login_malformed_email_is_invalid_credentials(
    async_client: AsyncClient, registered_vendor: dict, email: str
):
    malformed = await async_client.post(
        "/login", json={"email": email, "password": "WrongPassword123!"}
    )
    wrong_password = await async_client.post(
        "/login",
        json={"email": registered_vendor["email"], "password": "WrongPassword123!"},
    )
    assert malformed.status_code == 401
    assert malformed.json() == wrong_password.json()


@pytest.mark.asyncio
async def test_login_empty_email_is_validation_error(async_client: AsyncClient):
    resp = await async_client.post("/login", json={"email": "", "password": "x"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_login_domain_case_is_normalized_like_registration(
    async_client: AsyncClient, registered_vendor: dict
):
    local, domain = registered_vendor["email"].split("@")
    resp = await async_client.post(
        "/login",
        json={"email": f"{local}@{domain.upper()}", "password": registered_vendor["password"]},
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_login_records_audit_entry(
    async_client: AsyncClient, registered_vendor: dict, monkeypatch, tmp_path
):
    path = tmp_path / "logins.json"
    monkeypatch.setattr(settings, "LOGIN_AUDIT_FILE", str(path))

    resp = await async_client.post(
        "/login",
        json={"email": registered_vendor["email"], "password": registered_vendor["password"]},
    )
    assert resp.status_code == 200
    assert registered_vendor["email"] in json.loads(path.read_text())


@pytest.mark.asyncio
async def test_login_succeeds_when_audit_file_unwritable(
    async_client: AsyncClient, registered_vendor: dict, monkeypatch, tmp_path
):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    monkeypatch.setattr(settings, "LOGIN_AUDIT_FILE", str(blocker / "logins.json"))

    resp = await async_client.post(
        "/login",
        json={"email": registered_vendor["email"], "password": registered_vendor["password"]},
    )
    assert resp.status_code == 200
