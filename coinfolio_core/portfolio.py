"""
Portfolio: holdings in insertion order. Read model for valuation and the store.

At most one holding per id. The store owns mutation and persistence; this type
only answers lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from coinfolio_core.holding import Holding


@dataclass
class Portfolio:
    """Ordered collection of holdings. Order is insertion order and never changes on update."""

    holdings: list[Holding] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.holdings)

    def __iter__(self):
        return iter(self.holdings)

    @property
    def ids(self) -> list[str]:
        return [h.id for h in self.holdings]

    def get(self, holding_id: str) -> Holding | None:
        """Holding with the given id, or None if not held."""
        for h in self.holdings:
            if h.id == holding_id:
                return h
        return None

    def index_of(self, holding_id: str) -> int:
        """Position of the holding in the collection. -1 if not present."""
        for i, h in enumerate(self.holdings):
            if h.id == holding_id:
                return i
        return -1

    def amount(self, holding_id: str) -> float:
        """Quantity held of the asset. 0 if not present."""
        h = self.get(holding_id)
        return h.amount if h is not None else 0.0
