"""Teacher API tests."""

import pytest

from conftest import make_teacher


@pytest.mark.asyncio
async def test_get_teacher(client, teacher):
    r = await client.get(f"/api/teacher/{teacher.id}")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == teacher.id
    assert data["firstName"] == "Margot"
    assert data["lastName"] == "DELAHAYE"


@pytest.mark.asyncio
async def test_get_teacher_not_found(client):
    r = await client.get("/api/teacher/999")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_get_teacher_invalid_id(client):
    r = await client.get("/api/teacher/invalid")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_teachers(client, db_session):
    await make_teacher(db_session, "John", "Doe")
    await make_teacher(db_session, "Jane", "Smith")

    r = await client.get("/api/teacher")
    assert r.status_code == 200
    teachers = r.json()
    assert len(teachers) == 2
    assert teachers[0]["lastName"] == "Doe"
    assert teachers[1]["lastName"] == "Smith"


@pytest.mark.asyncio
async def test_list_teachers_empty(client):
    r = await client.get("/api/teacher")
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_teachers_require_auth(unauthenticated_client):
    r = await unauthenticated_client.get("/api/teacher")
    assert r.status_code == 401
    assert r.json()["path"] == "/api/teacher"
