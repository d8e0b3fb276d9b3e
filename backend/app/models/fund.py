"""Fund catalog model."""

from datetime import datetime
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from app.models.database import Base


class Fund(Base):
    """A fund known to the tracker, keyed by a stable code.

    Positions reference ``fund_code``; ``fund_name`` is for display only.
    """

    __tablename__ = "fund"

    fund_code: Mapped[str] = mapped_column(String(20), primary_key=True)
    fund_name: Mapped[str] = mapped_column(String(100))
    fund_category: Mapped[str] = mapped_column(String(30), default="Equity")
    updated_at: Mapped[str] = mapped_column(
        String(30), default=lambda: datetime.now().isoformat()
    )
