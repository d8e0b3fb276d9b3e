"""Portfolio-level totals and comparative analytics.

Totals over all positions of a user:
    total_investment = Σ investment
    total_current_value = Σ units * current_nav(fund)
    total_gain = total_current_value - total_investment
    total_return_pct = total_gain / total_investment * 100   (0 when nothing invested)

Best/worst fund are picked by return_pct; on ties the position seen first wins.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from app.services.valuation import valuation_engine


@dataclass(frozen=True)
class FundMetrics:
    position_id: int
    fund_code: str
    fund_name: str
    units: float
    investment: float
    current_nav: float
    current_value: float
    gain: float
    return_pct: float


@dataclass(frozen=True)
class PortfolioTotals:
    total_investment: float = 0.0
    total_current_value: float = 0.0
    total_gain: float = 0.0
    total_return_pct: float = 0.0


@dataclass(frozen=True)
class RankedFund:
    metrics: FundMetrics
    normalized: float


@dataclass(frozen=True)
class PortfolioAnalytics:
    best_fund: FundMetrics | None = None
    worst_fund: FundMetrics | None = None
    diversity: int = 0
    ranking: list[RankedFund] = field(default_factory=list)


class PortfolioAggregator:
    """Stateless folds over a snapshot of positions."""

    def fund_metrics(
        self, positions: Iterable[Any], nav_lookup: Callable[[str], float]
    ) -> list[FundMetrics]:
        """Value each position with the NAV returned by `nav_lookup(fund_code)`."""
        result = []
        for position in positions:
            valuation = valuation_engine.value_position(
                position.units,
                position.investment,
                nav_lookup(position.fund_code),
            )
            result.append(
                FundMetrics(
                    position_id=position.id,
                    fund_code=position.fund_code,
                    fund_name=position.fund_name,
                    units=valuation.units,
                    investment=valuation.investment,
                    current_nav=valuation.current_nav,
                    current_value=valuation.current_value,
                    gain=valuation.gain,
                    return_pct=valuation.return_pct,
                )
            )
        return result

    def totals(self, metrics: list[FundMetrics]) -> PortfolioTotals:
        total_investment = 0.0
        total_current_value = 0.0
        for m in metrics:
            total_investment += m.investment
            total_current_value += m.current_value

        total_gain = total_current_value - total_investment
        return PortfolioTotals(
            total_investment=total_investment,
            total_current_value=total_current_value,
            total_gain=total_gain,
            total_return_pct=valuation_engine.return_pct(total_gain, total_investment),
        )

    def best_fund(self, metrics: list[FundMetrics]) -> FundMetrics | None:
        best = None
        for m in metrics:
            if best is None or m.return_pct > best.return_pct:
                best = m
        return best

    def worst_fund(self, metrics: list[FundMetrics]) -> FundMetrics | None:
        worst = None
        for m in metrics:
            if worst is None or m.return_pct < worst.return_pct:
                worst = m
        return worst

    def normalize_returns(self, returns: list[float]) -> list[float]:
        """Scale returns onto 0..100 for display.

        The spread max - min is replaced by 1 when every return is equal.
        """
        if not returns:
            return []
        low = min(returns)
        spread = (max(returns) - low) or 1
        return [(r - low) / spread * 100 for r in returns]

    def analyze(self, metrics: list[FundMetrics]) -> PortfolioAnalytics:
        if not metrics:
            return PortfolioAnalytics()

        normalized = self.normalize_returns([m.return_pct for m in metrics])
        return PortfolioAnalytics(
            best_fund=self.best_fund(metrics),
            worst_fund=self.worst_fund(metrics),
            diversity=len(metrics),
            ranking=[
                RankedFund(metrics=m, normalized=n)
                for m, n in zip(metrics, normalized)
            ],
        )


# Global instance
portfolio_aggregator = PortfolioAggregator()
