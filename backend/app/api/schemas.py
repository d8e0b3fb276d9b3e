"""Pydantic schemas for API request/response."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

TransactionType = Literal["purchase", "redemption", "sip"]


def _today() -> str:
    return date.today().isoformat()


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    full_name: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: str


class AuthResponse(BaseModel):
    user: UserResponse


class CatalogFundResponse(BaseModel):
    fund_code: str
    fund_name: str
    fund_category: str
    current_nav: float


class FundNavResponse(BaseModel):
    fund_code: str
    fund_name: str
    current: float
    historical: list[float]


class PositionCreateRequest(BaseModel):
    user_id: int
    fund_code: str
    units: float = Field(ge=0, allow_inf_nan=False)
    # Defaults to the fund's current NAV when omitted.
    purchase_nav: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    purchase_date: str = Field(default_factory=_today)
    investment: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class PositionUpdateRequest(BaseModel):
    units: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    investment: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    purchase_nav: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    purchase_date: str | None = None


class PositionResponse(BaseModel):
    id: int
    user_id: int
    fund_code: str
    fund_name: str
    units: float
    purchase_nav: float
    investment: float
    purchase_date: str


class TransactionCreateRequest(BaseModel):
    user_id: int
    fund_id: int
    type: TransactionType
    amount: float = Field(gt=0, allow_inf_nan=False)
    # Defaults to the fund's current NAV when omitted.
    nav: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    date: str = Field(default_factory=_today)


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    fund_id: int
    fund_name: str
    type: str
    amount: float
    nav: float
    units: float
    date: str


class RecordTransactionResponse(BaseModel):
    transaction: TransactionResponse
    position: PositionResponse


class FundMetricsResponse(BaseModel):
    position_id: int
    fund_code: str
    fund_name: str
    units: float
    investment: float
    current_nav: float
    current_value: float
    gain: float
    return_pct: float


class DashboardResponse(BaseModel):
    user_id: int
    funds: list[FundMetricsResponse]
    total_investment: float
    total_current_value: float
    total_gain: float
    total_return_pct: float
    display: dict[str, str]


class RankedFundResponse(BaseModel):
    position_id: int
    fund_name: str
    return_pct: float
    normalized: float


class AnalyticsResponse(BaseModel):
    user_id: int
    best_fund: FundMetricsResponse | None = None
    worst_fund: FundMetricsResponse | None = None
    diversity: int
    ranking: list[RankedFundResponse]
