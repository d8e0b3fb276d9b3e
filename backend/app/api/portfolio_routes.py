"""Portfolio API routes: positions, transactions, dashboard and analytics."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database import get_db
from app.models.portfolio import FundPosition, Transaction
from app.services.aggregator import FundMetrics, portfolio_aggregator
from app.services.formatting import format_inr
from app.services.fund_catalog import fund_catalog_service
from app.services.nav_source import nav_source
from app.services.portfolio import portfolio_service
from app.services.users import user_service
from app.services.valuation import InvalidInputError
from app.api.schemas import (
    AnalyticsResponse,
    DashboardResponse,
    FundMetricsResponse,
    PositionCreateRequest,
    PositionResponse,
    PositionUpdateRequest,
    RankedFundResponse,
    RecordTransactionResponse,
    TransactionCreateRequest,
    TransactionResponse,
)

router = APIRouter(prefix="/api", tags=["portfolio"])


def _position_response(p: FundPosition) -> PositionResponse:
    return PositionResponse(
        id=p.id,
        user_id=p.user_id,
        fund_code=p.fund_code,
        fund_name=p.fund_name,
        units=p.units,
        purchase_nav=p.purchase_nav,
        investment=p.investment,
        purchase_date=p.purchase_date,
    )


def _transaction_response(t: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=t.id,
        user_id=t.user_id,
        fund_id=t.fund_id,
        fund_name=t.fund_name,
        type=t.type,
        amount=t.amount,
        nav=t.nav,
        units=t.units,
        date=t.date,
    )


def _metrics_response(m: FundMetrics) -> FundMetricsResponse:
    return FundMetricsResponse(
        position_id=m.position_id,
        fund_code=m.fund_code,
        fund_name=m.fund_name,
        units=m.units,
        investment=m.investment,
        current_nav=m.current_nav,
        current_value=m.current_value,
        gain=m.gain,
        return_pct=m.return_pct,
    )


async def _require_user(db: AsyncSession, user_id: int) -> None:
    if await user_service.get_user(db, user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")


async def _user_metrics(db: AsyncSession, user_id: int) -> list[FundMetrics]:
    positions = await portfolio_service.list_positions(db, user_id)
    return portfolio_aggregator.fund_metrics(positions, nav_source.get_current_nav)


@router.get("/funds/{user_id}", response_model=list[PositionResponse])
async def list_positions(user_id: int, db: AsyncSession = Depends(get_db)):
    positions = await portfolio_service.list_positions(db, user_id)
    return [_position_response(p) for p in positions]


@router.post("/funds", response_model=PositionResponse)
async def add_position(req: PositionCreateRequest, db: AsyncSession = Depends(get_db)):
    await _require_user(db, req.user_id)
    fund = await fund_catalog_service.get_fund(db, req.fund_code)
    if fund is None:
        raise HTTPException(status_code=404, detail="Fund not found")

    purchase_nav = req.purchase_nav
    if purchase_nav is None:
        purchase_nav = nav_source.get_current_nav(fund.fund_code)
        if purchase_nav <= 0:
            raise HTTPException(
                status_code=400, detail=f"No NAV available for {fund.fund_code}"
            )

    try:
        position = await portfolio_service.create_position(
            db,
            user_id=req.user_id,
            fund_code=fund.fund_code,
            fund_name=fund.fund_name,
            units=req.units,
            purchase_nav=purchase_nav,
            purchase_date=req.purchase_date,
            investment=req.investment,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _position_response(position)


@router.put("/funds/{position_id}", response_model=PositionResponse)
async def update_position(
    position_id: int,
    req: PositionUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    fields = {
        k: v for k, v in req.model_dump(exclude_unset=True).items() if v is not None
    }
    try:
        position = await portfolio_service.update_position(db, position_id, **fields)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if position is None:
        raise HTTPException(status_code=404, detail="Fund not found")
    return _position_response(position)


@router.delete("/funds/{position_id}")
async def delete_position(position_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await portfolio_service.delete_position(db, position_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Fund not found")
    return {"success": True}


@router.get("/transactions/{user_id}", response_model=list[TransactionResponse])
async def list_transactions(user_id: int, db: AsyncSession = Depends(get_db)):
    transactions = await portfolio_service.list_transactions(db, user_id)
    return [_transaction_response(t) for t in transactions]


@router.post("/transactions", response_model=RecordTransactionResponse)
async def record_transaction(
    req: TransactionCreateRequest, db: AsyncSession = Depends(get_db)
):
    """Record a transaction and update the position it belongs to."""
    position = await portfolio_service.get_position(db, req.fund_id)
    if position is None or position.user_id != req.user_id:
        raise HTTPException(status_code=404, detail="Fund not found")

    nav = req.nav if req.nav is not None else nav_source.get_current_nav(position.fund_code)
    if nav <= 0:
        raise HTTPException(
            status_code=400, detail=f"No NAV available for {position.fund_code}"
        )

    try:
        result = await portfolio_service.record_transaction(
            db, req.user_id, req.fund_id, req.type, req.amount, nav, req.date
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Fund not found")

    tx, position = result
    return RecordTransactionResponse(
        transaction=_transaction_response(tx),
        position=_position_response(position),
    )


@router.get("/portfolio/{user_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(user_id: int, db: AsyncSession = Depends(get_db)):
    await _require_user(db, user_id)
    metrics = await _user_metrics(db, user_id)
    totals = portfolio_aggregator.totals(metrics)

    return DashboardResponse(
        user_id=user_id,
        funds=[_metrics_response(m) for m in metrics],
        total_investment=totals.total_investment,
        total_current_value=totals.total_current_value,
        total_gain=totals.total_gain,
        total_return_pct=totals.total_return_pct,
        display={
            "total_investment": format_inr(totals.total_investment),
            "total_current_value": format_inr(totals.total_current_value),
            "total_gain": format_inr(totals.total_gain),
            "total_return_pct": f"{totals.total_return_pct:+.2f}%",
        },
    )


@router.get("/portfolio/{user_id}/analytics", response_model=AnalyticsResponse)
async def get_analytics(user_id: int, db: AsyncSession = Depends(get_db)):
    await _require_user(db, user_id)
    metrics = await _user_metrics(db, user_id)
    analytics = portfolio_aggregator.analyze(metrics)

    return AnalyticsResponse(
        user_id=user_id,
        best_fund=_metrics_response(analytics.best_fund) if analytics.best_fund else None,
        worst_fund=_metrics_response(analytics.worst_fund) if analytics.worst_fund else None,
        diversity=analytics.diversity,
        ranking=[
            RankedFundResponse(
                position_id=r.metrics.position_id,
                fund_name=r.metrics.fund_name,
                return_pct=r.metrics.return_pct,
                normalized=r.normalized,
            )
            for r in analytics.ranking
        ],
    )
