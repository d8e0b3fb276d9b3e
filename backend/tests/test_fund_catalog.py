"""Tests for the fund catalog service."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from app.models.database import Base
from app.models.fund import Fund
from app.services.fund_catalog import FundCatalogService
from app.services.nav_source import NavSource, parse_nav_table


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def catalog():
    return FundCatalogService()


@pytest.mark.asyncio
async def test_add_and_get_fund(db_session, catalog):
    await catalog.add_fund(db_session, "AXIS-BLUECHIP", "Axis Bluechip Fund", "Large Cap")
    fund = await catalog.get_fund(db_session, "AXIS-BLUECHIP")
    assert fund is not None
    assert fund.fund_name == "Axis Bluechip Fund"


@pytest.mark.asyncio
async def test_get_missing_fund(db_session, catalog):
    assert await catalog.get_fund(db_session, "NOPE") is None


@pytest.mark.asyncio
async def test_sync_seeds_catalog(db_session, catalog):
    inserted = await catalog.sync_from_nav_source(db_session, NavSource())
    assert inserted == 6
    funds = await catalog.list_funds(db_session)
    assert len(funds) == 6
    # Ordered by display name
    assert funds[0].fund_name == "Axis Bluechip Fund"


@pytest.mark.asyncio
async def test_sync_is_idempotent(db_session, catalog):
    source = NavSource()
    await catalog.sync_from_nav_source(db_session, source)
    assert await catalog.sync_from_nav_source(db_session, source) == 0


@pytest.mark.asyncio
async def test_sync_keeps_funds_dropped_from_source(db_session, catalog):
    await catalog.sync_from_nav_source(db_session, NavSource())
    smaller = NavSource(
        parse_nav_table(
            {"HDFC-TOP100": {"fund_name": "HDFC Top 100 Fund (G)", "current": 600.0}}
        )
    )
    changed = await catalog.sync_from_nav_source(db_session, smaller)
    assert changed == 1
    assert len(await catalog.list_funds(db_session)) == 6
    fund = await catalog.get_fund(db_session, "HDFC-TOP100")
    assert fund.fund_name == "HDFC Top 100 Fund (G)"
