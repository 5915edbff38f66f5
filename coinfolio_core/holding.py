"""
Holding: one row per distinct asset the user owns.

Quantity plus average cost. No prices, no valuation; those are computed
against a price mapping in valuation.metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Holding:
    """
    A recorded position in one asset.

    cost_basis is the average price paid per unit in quote currency;
    None means the cost is unknown and the holding is valued at market.
    """

    id: str
    name: str
    amount: float
    cost_basis: float | None = None
    added_at: datetime = field(default_factory=_utcnow)

    @property
    def has_cost_basis(self) -> bool:
        return self.cost_basis is not None
