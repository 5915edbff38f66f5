"""
PortfolioStore: owns persisted holdings and merges new buys into them.

Every mutation is read-modify-write against the injected Persistence: load the
document, change it, overwrite it wholesale. No batching, no diffing, no
rendering dependency; callers re-invoke load/valuate after each mutation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from coinfolio_core.codec import dumps_portfolio, loads_portfolio
from coinfolio_core.errors import ValidationError
from coinfolio_core.holding import Holding
from coinfolio_core.persistence.base import Persistence
from coinfolio_core.portfolio import Portfolio

logger = logging.getLogger(__name__)


def _require_positive(field_name: str, value: Any) -> float:
    """Return value as float, or raise ValidationError unless it is a positive finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ValidationError(f"{field_name} is out of range, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name} must be a positive finite number, got {value!r}")
    return number


class PortfolioStore:
    """
    Load, upsert and remove holdings. Write-through: each successful mutation
    persists the full portfolio before returning it.
    """

    def __init__(self, persistence: Persistence) -> None:
        self.persistence = persistence

    def load(self) -> Portfolio:
        """
        Read the persisted portfolio. Missing or malformed documents load as an
        empty portfolio; this never raises.
        """
        try:
            doc = self.persistence.read()
            if doc is None:
                return Portfolio()
            return loads_portfolio(doc)
        except (ValueError, OverflowError, RecursionError) as e:
            logger.warning("Ignoring malformed portfolio document: %s", e)
            return Portfolio()

    def _save(self, portfolio: Portfolio) -> None:
        self.persistence.write(dumps_portfolio(portfolio))

    def upsert(
        self,
        holding_id: str,
        name: str,
        amount: float,
        unit_price: float | None = None,
        *,
        now: datetime | None = None,
    ) -> Portfolio:
        """
        Record a buy of amount units at unit_price (None if the price is unknown).

        New ids are appended with cost_basis=unit_price. Existing holdings keep
        their position, name and added_at; amount is summed and, when a price is
        given, cost basis becomes the quantity-weighted average (an unknown
        previous cost counts as 0). Without a price the cost basis is unchanged.

        Raises ValidationError, leaving the stored portfolio untouched, if
        amount or unit_price is not a positive finite number.
        """
        if not isinstance(holding_id, str) or not holding_id:
            raise ValidationError(f"holding id must be a non-empty string, got {holding_id!r}")
        if not isinstance(name, str):
            raise ValidationError(f"name must be a string, got {name!r}")
        qty = _require_positive("amount", amount)
        price = _require_positive("unit_price", unit_price) if unit_price is not None else None

        portfolio = self.load()
        idx = portfolio.index_of(holding_id)
        if idx < 0:
            portfolio.holdings.append(
                Holding(
                    id=holding_id,
                    name=name,
                    amount=qty,
                    cost_basis=price,
                    added_at=now or datetime.now(timezone.utc),
                )
            )
            logger.info("Added holding %s: amount=%s cost_basis=%s", holding_id, qty, price)
        else:
            prev = portfolio.holdings[idx]
            new_amount = prev.amount + qty
            new_cost = prev.cost_basis
            if price is not None:
                prev_cost = prev.cost_basis or 0.0
                new_cost = (prev.amount * prev_cost + qty * price) / new_amount
            if not math.isfinite(new_amount) or (new_cost is not None and not math.isfinite(new_cost)):
                raise ValidationError(
                    f"buy of {qty!r} at {price!r} overflows holding {holding_id!r} "
                    f"(amount={prev.amount!r}, cost_basis={prev.cost_basis!r})"
                )
            portfolio.holdings[idx] = replace(prev, amount=new_amount, cost_basis=new_cost)
            logger.info(
                "Merged buy into %s: amount %s -> %s, cost_basis %s -> %s",
                holding_id,
                prev.amount,
                new_amount,
                prev.cost_basis,
                new_cost,
            )

        self._save(portfolio)
        return portfolio

    def remove(self, holding_id: str) -> Portfolio:
        """
        Delete the holding with this id and persist the result. Absent ids are a
        no-op: the stored document is left exactly as it was, not rewritten.
        """
        portfolio = self.load()
        kept = [h for h in portfolio.holdings if h.id != holding_id]
        if len(kept) == len(portfolio.holdings):
            logger.debug("remove(%s): not held, nothing to delete", holding_id)
            return portfolio
        logger.info("Removed holding %s", holding_id)
        portfolio = Portfolio(holdings=kept)
        self._save(portfolio)
        return portfolio
