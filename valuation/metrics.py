"""
Valuation metrics: current value and profit/loss per holding and in total.

Pure transform of a Portfolio and an id -> price mapping. Holdings without a
price in the mapping are valued at 0; holdings without a cost basis are their
own baseline (zero profit/loss).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field

import numpy as np
import pandas as pd

from coinfolio_core.portfolio import Portfolio


@dataclass(frozen=True)
class HoldingValuation:
    """Valuation of one holding at the given prices."""

    id: str
    name: str
    amount: float
    cost_basis: float | None
    current_price: float
    current_value: float
    investment: float
    profit_loss: float
    profit_loss_percent: float


@dataclass(frozen=True)
class ValuationReport:
    """Snapshot of portfolio value. Rows are in portfolio order."""

    rows: list[HoldingValuation] = field(default_factory=list)
    total_value: float = 0.0
    total_investment: float = 0.0
    total_profit_loss: float = 0.0
    total_profit_loss_percent: float = 0.0

    @property
    def count(self) -> int:
        return len(self.rows)

    def row(self, holding_id: str) -> HoldingValuation | None:
        for r in self.rows:
            if r.id == holding_id:
                return r
        return None

    def to_frame(self) -> pd.DataFrame:
        """Rows as a DataFrame indexed by holding id."""
        columns = list(HoldingValuation.__dataclass_fields__)
        df = pd.DataFrame([asdict(r) for r in self.rows], columns=columns)
        return df.set_index("id")


def _percent(profit_loss: float, investment: float) -> float:
    return profit_loss / investment * 100.0 if investment > 0 else 0.0


def valuate(portfolio: Portfolio, current_prices: Mapping[str, float]) -> ValuationReport:
    """
    Value every holding against current_prices (id -> price).

    Parameters
    ----------
    portfolio : Portfolio
        Holdings to value; output rows keep this order.
    current_prices : mapping of id -> price
        May be partial, empty, or contain ids not held. Looked up by id, never by position.

    Returns
    -------
    ValuationReport
        Per-holding current_value, investment, profit_loss, profit_loss_percent and totals.
    """
    holdings = portfolio.holdings
    if not holdings:
        return ValuationReport()

    amounts = np.array([h.amount for h in holdings], dtype=float)
    prices = np.array([current_prices.get(h.id) or 0.0 for h in holdings], dtype=float)
    known = np.array([h.cost_basis is not None for h in holdings], dtype=bool)
    costs = np.array([h.cost_basis if h.cost_basis is not None else 0.0 for h in holdings], dtype=float)

    current_value = amounts * prices
    # Unknown cost: invested amount is taken to be the current value
    investment = np.where(known, amounts * costs, current_value)
    profit_loss = current_value - investment
    pl_percent = (
        np.divide(profit_loss, investment, out=np.zeros_like(profit_loss), where=investment > 0) * 100.0
    )

    rows = [
        HoldingValuation(
            id=h.id,
            name=h.name,
            amount=h.amount,
            cost_basis=h.cost_basis,
            current_price=float(prices[i]),
            current_value=float(current_value[i]),
            investment=float(investment[i]),
            profit_loss=float(profit_loss[i]),
            profit_loss_percent=float(pl_percent[i]),
        )
        for i, h in enumerate(holdings)
    ]

    total_value = float(current_value.sum())
    total_investment = float(investment.sum())
    total_pl = total_value - total_investment
    return ValuationReport(
        rows=rows,
        total_value=total_value,
        total_investment=total_investment,
        total_profit_loss=total_pl,
        total_profit_loss_percent=_percent(total_pl, total_investment),
    )
