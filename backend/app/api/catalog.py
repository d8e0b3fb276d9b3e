"""Fund catalog and NAV routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database import get_db
from app.services.fund_catalog import fund_catalog_service
from app.services.nav_source import nav_source
from app.api.schemas import CatalogFundResponse, FundNavResponse

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("", response_model=list[CatalogFundResponse])
async def list_catalog(db: AsyncSession = Depends(get_db)):
    funds = await fund_catalog_service.list_funds(db)
    return [
        CatalogFundResponse(
            fund_code=f.fund_code,
            fund_name=f.fund_name,
            fund_category=f.fund_category,
            current_nav=nav_source.get_current_nav(f.fund_code),
        )
        for f in funds
    ]


@router.get("/{fund_code}/nav", response_model=FundNavResponse)
async def get_fund_nav(fund_code: str, db: AsyncSession = Depends(get_db)):
    """Current and historical NAV (oldest first) for one catalog fund."""
    fund = await fund_catalog_service.get_fund(db, fund_code)
    if fund is None:
        raise HTTPException(status_code=404, detail="Fund not found")
    return FundNavResponse(
        fund_code=fund.fund_code,
        fund_name=fund.fund_name,
        current=nav_source.get_current_nav(fund_code),
        historical=nav_source.get_historical_nav(fund_code),
    )
