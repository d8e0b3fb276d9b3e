"""Position and transaction store."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.portfolio import TRANSACTION_TYPES, FundPosition, Transaction
from app.services.valuation import (
    InvalidInputError,
    validate_quantity,
    valuation_engine,
)

logger = logging.getLogger(__name__)

# Fields a caller may change after creation; identity fields are immutable.
UPDATABLE_FIELDS = ("units", "investment", "purchase_nav", "purchase_date")


class PortfolioService:
    """Persists fund positions and the append-only transaction log."""

    async def list_positions(
        self, session: AsyncSession, user_id: int
    ) -> list[FundPosition]:
        result = await session.execute(
            select(FundPosition)
            .where(FundPosition.user_id == user_id)
            .order_by(FundPosition.id)
        )
        return list(result.scalars().all())

    async def get_position(
        self, session: AsyncSession, position_id: int
    ) -> FundPosition | None:
        return await session.get(FundPosition, position_id)

    async def create_position(
        self,
        session: AsyncSession,
        user_id: int,
        fund_code: str,
        fund_name: str,
        units: float,
        purchase_nav: float,
        purchase_date: str,
        investment: float | None = None,
    ) -> FundPosition:
        """Create a position; `investment` defaults to units * purchase_nav."""
        units = validate_quantity("units", units)
        purchase_nav = validate_quantity("purchase_nav", purchase_nav)
        if investment is None:
            investment = units * purchase_nav
        investment = validate_quantity("investment", investment)

        position = FundPosition(
            user_id=user_id,
            fund_code=fund_code,
            fund_name=fund_name,
            units=units,
            purchase_nav=purchase_nav,
            investment=investment,
            purchase_date=purchase_date,
        )
        session.add(position)
        await session.commit()
        logger.info(f"User {user_id} added {fund_code} ({units} units)")
        return position

    async def update_position(
        self, session: AsyncSession, position_id: int, **fields
    ) -> FundPosition | None:
        """Apply a partial update. Returns None if the position does not exist."""
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise InvalidInputError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )
        for name in ("units", "investment", "purchase_nav"):
            if name in fields:
                fields[name] = validate_quantity(name, fields[name])

        position = await session.get(FundPosition, position_id)
        if position is None:
            return None
        for name, value in fields.items():
            setattr(position, name, value)
        await session.commit()
        return position

    async def delete_position(self, session: AsyncSession, position_id: int) -> bool:
        """Remove a position. Its transactions are left in the log."""
        position = await session.get(FundPosition, position_id)
        if position is None:
            return False
        await session.delete(position)
        await session.commit()
        return True

    async def list_transactions(
        self, session: AsyncSession, user_id: int
    ) -> list[Transaction]:
        """A user's transactions, newest first."""
        result = await session.execute(
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )
        return list(result.scalars().all())

    async def create_transaction(
        self,
        session: AsyncSession,
        user_id: int,
        fund_id: int,
        fund_name: str,
        tx_type: str,
        amount: float,
        nav: float,
        date: str,
    ) -> Transaction:
        """Append a log entry without touching the position.

        Most callers want record_transaction instead.
        """
        if tx_type not in TRANSACTION_TYPES:
            raise InvalidInputError(f"Unknown transaction type {tx_type!r}")
        units = valuation_engine.transaction_units(amount, nav)
        tx = Transaction(
            user_id=user_id,
            fund_id=fund_id,
            fund_name=fund_name,
            type=tx_type,
            amount=float(amount),
            nav=float(nav),
            units=units,
            date=date,
        )
        session.add(tx)
        await session.commit()
        return tx

    async def record_transaction(
        self,
        session: AsyncSession,
        user_id: int,
        position_id: int,
        tx_type: str,
        amount: float,
        nav: float,
        date: str,
    ) -> tuple[Transaction, FundPosition] | None:
        """Log a transaction and move the position to its new units/investment.

        Both writes go out in one commit. Returns None if the position does
        not exist or belongs to another user.
        """
        position = await session.get(FundPosition, position_id)
        if position is None or position.user_id != user_id:
            return None

        update = valuation_engine.apply_transaction(
            position.units, position.investment, tx_type, amount, nav
        )
        if tx_type == "redemption" and (
            update.tx_units > position.units or float(amount) > position.investment
        ):
            logger.warning(
                f"Redemption on position {position_id} floored holdings at zero"
            )

        tx = Transaction(
            user_id=user_id,
            fund_id=position.id,
            fund_name=position.fund_name,
            type=tx_type,
            amount=float(amount),
            nav=float(nav),
            units=update.tx_units,
            date=date,
        )
        session.add(tx)
        position.units = update.units
        position.investment = update.investment
        try:
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        return tx, position


portfolio_service = PortfolioService()
