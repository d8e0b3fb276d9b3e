"""Fund catalog CRUD service."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.fund import Fund
from app.services.nav_source import NavSource

logger = logging.getLogger(__name__)


class FundCatalogService:
    """Manages the funds positions may reference."""

    async def add_fund(
        self,
        session: AsyncSession,
        fund_code: str,
        fund_name: str,
        fund_category: str = "Equity",
    ) -> Fund:
        fund = Fund(
            fund_code=fund_code,
            fund_name=fund_name,
            fund_category=fund_category,
        )
        session.add(fund)
        await session.commit()
        return fund

    async def get_fund(self, session: AsyncSession, fund_code: str) -> Fund | None:
        return await session.get(Fund, fund_code)

    async def list_funds(self, session: AsyncSession) -> list[Fund]:
        result = await session.execute(select(Fund).order_by(Fund.fund_name))
        return list(result.scalars().all())

    async def sync_from_nav_source(
        self, session: AsyncSession, source: NavSource
    ) -> int:
        """Insert funds the NAV source knows about and refresh their names.

        Funds missing from the source are kept so existing positions stay
        valid. Returns the number of rows inserted or changed.
        """
        changed = 0
        for record in source.list_funds():
            fund = await session.get(Fund, record.fund_code)
            if fund is None:
                session.add(
                    Fund(
                        fund_code=record.fund_code,
                        fund_name=record.fund_name,
                        fund_category=record.fund_category,
                    )
                )
                changed += 1
            elif (fund.fund_name, fund.fund_category) != (
                record.fund_name,
                record.fund_category,
            ):
                fund.fund_name = record.fund_name
                fund.fund_category = record.fund_category
                fund.updated_at = datetime.now().isoformat()
                changed += 1
        await session.commit()
        if changed:
            logger.info(f"Fund catalog synced, {changed} funds added or updated")
        return changed


fund_catalog_service = FundCatalogService()
