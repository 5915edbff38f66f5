"""
Portfolio document codec: Portfolio <-> JSON string.

The document is a JSON array of {id, name, amount, buyPrice, added}, the same
shape the browser dashboard kept in local storage, so existing documents load
unchanged. Encoding is deterministic: the same portfolio always yields the
same bytes.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any

from coinfolio_core.holding import Holding
from coinfolio_core.portfolio import Portfolio


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        # ints beyond float range
        return False


def _format_timestamp(ts: datetime) -> str:
    return ts.isoformat()


def _parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"added must be an ISO-8601 string, got {raw!r}")
    text = raw.strip()
    # JavaScript's toISOString() ends in "Z"
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def holding_to_dict(holding: Holding) -> dict[str, Any]:
    return {
        "id": holding.id,
        "name": holding.name,
        "amount": holding.amount,
        "buyPrice": holding.cost_basis,
        "added": _format_timestamp(holding.added_at),
    }


def holding_from_dict(raw: Any) -> Holding:
    """Build a Holding from one document entry. Raises ValueError if the entry is malformed."""
    if not isinstance(raw, dict):
        raise ValueError(f"holding entry must be an object, got {type(raw).__name__}")
    holding_id = raw.get("id")
    if not isinstance(holding_id, str) or not holding_id:
        raise ValueError(f"holding id must be a non-empty string, got {holding_id!r}")
    name = raw.get("name")
    if not isinstance(name, str):
        raise ValueError(f"holding {holding_id!r}: name must be a string")
    amount = raw.get("amount")
    if not _is_number(amount) or amount < 0:
        raise ValueError(f"holding {holding_id!r}: amount must be a non-negative number")
    cost = raw.get("buyPrice")
    if cost is not None and not _is_number(cost):
        raise ValueError(f"holding {holding_id!r}: buyPrice must be a number or null")
    return Holding(
        id=holding_id,
        name=name,
        amount=float(amount),
        cost_basis=float(cost) if cost is not None else None,
        added_at=_parse_timestamp(raw.get("added")),
    )


def dumps_portfolio(portfolio: Portfolio) -> str:
    """Serialize the whole portfolio to one compact JSON document."""
    return json.dumps(
        [holding_to_dict(h) for h in portfolio.holdings],
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def loads_portfolio(doc: str) -> Portfolio:
    """
    Parse a persisted document. Raises ValueError (json.JSONDecodeError included)
    if the document is not a JSON array of valid, uniquely keyed holdings.
    """
    data = json.loads(doc)
    if not isinstance(data, list):
        raise ValueError(f"portfolio document must be a JSON array, got {type(data).__name__}")
    holdings = [holding_from_dict(entry) for entry in data]
    seen: set[str] = set()
    for h in holdings:
        if h.id in seen:
            raise ValueError(f"duplicate holding id {h.id!r}")
        seen.add(h.id)
    return Portfolio(holdings=holdings)
