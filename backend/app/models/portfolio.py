"""FundPosition and Transaction models."""

from datetime import datetime
from sqlalchemy import String, Float, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.models.database import Base
from app.models.fund import Fund  # noqa: F401  (foreign key target)
from app.models.user import User  # noqa: F401  (foreign key target)

TRANSACTION_TYPES = ("purchase", "redemption", "sip")


class FundPosition(Base):
    __tablename__ = "fund_position"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("app_user.id"), index=True)
    fund_code: Mapped[str] = mapped_column(ForeignKey("fund.fund_code"))
    fund_name: Mapped[str] = mapped_column(String(100))
    units: Mapped[float] = mapped_column(Float)
    purchase_nav: Mapped[float] = mapped_column(Float)
    investment: Mapped[float] = mapped_column(Float)
    purchase_date: Mapped[str] = mapped_column(String(10))  # "YYYY-MM-DD"
    created_at: Mapped[str] = mapped_column(
        String(30), default=lambda: datetime.now().isoformat()
    )


class Transaction(Base):
    """Append-only log entry.

    ``fund_id`` is deliberately not a foreign key: removing a position leaves
    its transactions in place.
    """

    __tablename__ = "fund_transaction"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("app_user.id"), index=True)
    fund_id: Mapped[int] = mapped_column(Integer, index=True)
    fund_name: Mapped[str] = mapped_column(String(100))
    type: Mapped[str] = mapped_column(String(12))  # purchase | redemption | sip
    amount: Mapped[float] = mapped_column(Float)
    nav: Mapped[float] = mapped_column(Float)
    units: Mapped[float] = mapped_column(Float)
    date: Mapped[str] = mapped_column(String(10))  # "YYYY-MM-DD"
    created_at: Mapped[str] = mapped_column(
        String(30), default=lambda: datetime.now().isoformat()
    )
