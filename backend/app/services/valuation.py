"""Fund valuation and position bookkeeping engine.

Valuation of a single position against the current NAV:
    current_value = units * current_nav
    gain = current_value - investment
    return_pct = gain / investment * 100        (0 when investment is 0)

Position update when a transaction of `amount` at `nav` is recorded:
    tx_units = amount / nav
    purchase, sip:  units + tx_units,            investment + amount
    redemption:     max(0, units - tx_units),    max(0, investment - amount)

Redemptions larger than the holding floor at zero instead of failing.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any

from app.models.portfolio import TRANSACTION_TYPES


class InvalidInputError(ValueError):
    """A quantity was non-numeric, non-finite or out of range."""


@dataclass(frozen=True)
class FundValuation:
    units: float
    investment: float
    current_nav: float
    current_value: float
    gain: float
    return_pct: float


@dataclass(frozen=True)
class PositionUpdate:
    """New position state after applying one transaction."""

    units: float
    investment: float
    tx_units: float


def validate_quantity(name: str, value: Any, positive: bool = False) -> float:
    """Return `value` as a float, rejecting non-numbers, NaN/inf and negatives."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    if positive and number <= 0:
        raise InvalidInputError(f"{name} must be greater than 0, got {value!r}")
    if number < 0:
        raise InvalidInputError(f"{name} must not be negative, got {value!r}")
    return number


class ValuationEngine:
    """Pure arithmetic over a position's units, investment and NAV."""

    def return_pct(self, gain: float, investment: float) -> float:
        if investment > 0:
            return gain / investment * 100
        return 0.0

    def value_position(
        self, units: Any, investment: Any, current_nav: Any
    ) -> FundValuation:
        """Value a holding at `current_nav`.

        A `current_nav` of 0 means the NAV source had no price; the holding is
        then valued at 0 rather than rejected.
        """
        units = validate_quantity("units", units)
        investment = validate_quantity("investment", investment)
        current_nav = validate_quantity("current_nav", current_nav)

        current_value = units * current_nav
        gain = current_value - investment
        return FundValuation(
            units=units,
            investment=investment,
            current_nav=current_nav,
            current_value=current_value,
            gain=gain,
            return_pct=self.return_pct(gain, investment),
        )

    def transaction_units(self, amount: Any, nav: Any) -> float:
        amount = validate_quantity("amount", amount, positive=True)
        nav = validate_quantity("nav", nav, positive=True)
        return amount / nav

    def apply_transaction(
        self,
        units: Any,
        investment: Any,
        tx_type: str,
        amount: Any,
        nav: Any,
    ) -> PositionUpdate:
        """Return the units/investment a position moves to after a transaction."""
        if tx_type not in TRANSACTION_TYPES:
            raise InvalidInputError(
                f"type must be one of {', '.join(TRANSACTION_TYPES)}, got {tx_type!r}"
            )
        units = validate_quantity("units", units)
        investment = validate_quantity("investment", investment)
        tx_units = self.transaction_units(amount, nav)
        amount = float(amount)

        if tx_type == "redemption":
            new_units = max(0.0, units - tx_units)
            new_investment = max(0.0, investment - amount)
        else:
            new_units = units + tx_units
            new_investment = investment + amount

        return PositionUpdate(
            units=new_units, investment=new_investment, tx_units=tx_units
        )


# Global instance
valuation_engine = ValuationEngine()
