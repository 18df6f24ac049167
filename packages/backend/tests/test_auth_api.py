"""Auth API tests — registration, login, and using the issued token.

Tests cover:
1. User registration + duplicate prevention + validation
2. Login → JWT token and profile
3. Full flow through the real gate: register → login → protected route
"""

import uuid

import pytest

from yogastudio.auth.jwt import subject_of, validate_token


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


def _signup(email: str, password: str = "password123") -> dict:
    return {
        "email": email,
        "password": password,
        "firstName": "John",
        "lastName": "Doee",
    }


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/register", json=_signup(_email("new"))
    )
    assert r.status_code == 200
    assert r.json() == {"message": "User registered successfully!"}


@pytest.mark.asyncio
async def test_register_duplicate_email(unauthenticated_client):
    body = _signup(_email("dup"))

    r1 = await unauthenticated_client.post("/api/auth/register", json=body)
    assert r1.status_code == 200

    r2 = await unauthenticated_client.post("/api/auth/register", json=body)
    assert r2.status_code == 400
    assert r2.json() == {"message": "Error: Email is already taken!"}


@pytest.mark.asyncio
async def test_register_empty_body(unauthenticated_client):
    r = await unauthenticated_client.post("/api/auth/register", json={})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_register_short_password(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/register", json=_signup(_email("short"), password="abc")
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_register_invalid_email(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/register", json=_signup("not-an-email")
    )
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(unauthenticated_client):
    email = _email("login")
    await unauthenticated_client.post("/api/auth/register", json=_signup(email))

    r = await unauthenticated_client.post(
        "/api/auth/login", json={"email": email, "password": "password123"}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["username"] == email
    assert data["firstName"] == "John"
    assert data["lastName"] == "Doee"
    assert data["admin"] is False
    assert data["type"] == "Bearer"
    assert isinstance(data["id"], int)
    assert validate_token(data["token"])
    assert subject_of(data["token"]) == email


@pytest.mark.asyncio
async def test_login_wrong_password(unauthenticated_client):
    email = _email("wrong")
    await unauthenticated_client.post("/api/auth/register", json=_signup(email))

    r = await unauthenticated_client.post(
        "/api/auth/login", json={"email": email, "password": "wrong_password"}
    )
    assert r.status_code == 401
    assert r.json() == {
        "status": 401,
        "error": "Unauthorized",
        "message": "Bad credentials",
        "path": "/api/auth/login",
    }


@pytest.mark.asyncio
async def test_login_nonexistent_user(unauthenticated_client):
    r = await unauthenticated_client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_login_validation(unauthenticated_client):
    r = await unauthenticated_client.post("/api/auth/login", json={})
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Token in use
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_token_opens_protected_routes(unauthenticated_client):
    """register → login → bearer token → protected route."""
    email = _email("flow")
    await unauthenticated_client.post("/api/auth/register", json=_signup(email))
    r = await unauthenticated_client.post(
        "/api/auth/login", json={"email": email, "password": "password123"}
    )
    login = r.json()
    headers = {"Authorization": f"Bearer {login['token']}"}

    r = await unauthenticated_client.get(f"/api/user/{login['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json()["email"] == email

    r = await unauthenticated_client.get(f"/api/user/{login['id']}")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_lowercase_bearer_prefix_is_anonymous(unauthenticated_client):
    email = _email("case")
    await unauthenticated_client.post("/api/auth/register", json=_signup(email))
    r = await unauthenticated_client.post(
        "/api/auth/login", json={"email": email, "password": "password123"}
    )
    token = r.json()["token"]

    r = await unauthenticated_client.get(
        "/api/session", headers={"Authorization": f"bearer {token}"}
    )
    assert r.status_code == 401
