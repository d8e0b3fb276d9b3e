"""Tests for auth API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from app.main import app
from app.models.database import Base, get_db


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override():
        async with factory() as s:
            yield s

    app.dependency_overrides[get_db] = override
    yield
    app.dependency_overrides.clear()
    await engine.dispose()


REGISTRATION = {"email": "asha@example.com", "password": "secret", "full_name": "Asha Rao"}


@pytest.mark.asyncio
async def test_register(db_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.post("/api/auth/register", json=REGISTRATION)
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["email"] == "asha@example.com"
    assert "password" not in user


@pytest.mark.asyncio
async def test_register_twice(db_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        await c.post("/api/auth/register", json=REGISTRATION)
        resp = await c.post("/api/auth/register", json=REGISTRATION)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_login(db_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        reg = await c.post("/api/auth/register", json=REGISTRATION)
        resp = await c.post(
            "/api/auth/login", json={"email": "asha@example.com", "password": "secret"}
        )
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == reg.json()["user"]["id"]


@pytest.mark.asyncio
async def test_login_bad_password(db_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        await c.post("/api/auth/register", json=REGISTRATION)
        resp = await c.post(
            "/api/auth/login", json={"email": "asha@example.com", "password": "wrong"}
        )
    assert resp.status_code == 401
