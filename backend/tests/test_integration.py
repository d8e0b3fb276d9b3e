"""Integration test: register, add a fund, record transactions, read the dashboard."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from app.main import app
from app.models.database import Base, get_db
from app.services.fund_catalog import FundCatalogService
from app.services.nav_source import NavSource


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with session_factory() as session:
        await FundCatalogService().sync_from_nav_source(session, NavSource())
    yield
    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.mark.asyncio
async def test_full_flow(db_session):
    """Test: register -> add fund -> SIP -> dashboard -> remove fund."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        # 1. Register
        resp = await client.post(
            "/api/auth/register",
            json={"email": "asha@example.com", "password": "pw", "full_name": "Asha"},
        )
        assert resp.status_code == 200
        user_id = resp.json()["user"]["id"]

        # 2. Pick a fund from the catalog
        resp = await client.get("/api/catalog")
        fund = next(f for f in resp.json() if f["fund_code"] == "MIRAE-LARGECAP")

        # 3. Add it at 80 per unit
        resp = await client.post(
            "/api/funds",
            json={
                "user_id": user_id,
                "fund_code": fund["fund_code"],
                "units": 10.0,
                "purchase_nav": 80.0,
                "purchase_date": "2026-01-10",
            },
        )
        assert resp.status_code == 200
        position_id = resp.json()["id"]

        resp = await client.get(f"/api/portfolio/{user_id}/dashboard")
        before = resp.json()["funds"][0]
        assert before["current_value"] == 10.0 * 85.23

        # 4. SIP of 500 at 50
        resp = await client.post(
            "/api/transactions",
            json={
                "user_id": user_id,
                "fund_id": position_id,
                "type": "sip",
                "amount": 500.0,
                "nav": 50.0,
                "date": "2026-02-10",
            },
        )
        assert resp.status_code == 200
        assert resp.json()["position"]["units"] == 20.0
        assert resp.json()["position"]["investment"] == 1300.0

        # 5. Valuation follows the new units
        resp = await client.get(f"/api/portfolio/{user_id}/dashboard")
        data = resp.json()
        after = data["funds"][0]
        assert after["units"] == 20.0
        assert after["current_value"] - before["current_value"] == pytest.approx(
            500.0 * (85.23 / 50.0)
        )
        assert data["total_investment"] == 1300.0

        resp = await client.get(f"/api/portfolio/{user_id}/analytics")
        assert resp.json()["best_fund"]["position_id"] == position_id

        # 6. Removing the fund keeps its history
        resp = await client.delete(f"/api/funds/{position_id}")
        assert resp.status_code == 200
        resp = await client.get(f"/api/transactions/{user_id}")
        assert len(resp.json()) == 1
        resp = await client.get(f"/api/portfolio/{user_id}/dashboard")
        assert resp.json()["total_current_value"] == 0
