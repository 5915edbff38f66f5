"""
Static price feed: serves market rows from memory. No network.

Market data comes from a provided source: a dict of id -> price, or a callable
returning a DataFrame for the requested ids.
"""

from __future__ import annotations

from typing import Callable

import pandas as pd

from coinfolio_core.feeds.base import DEFAULT_PER_PAGE, DEFAULT_VS_CURRENCY, MARKET_COLUMNS, PriceFeed


def _empty_market_frame() -> pd.DataFrame:
    return pd.DataFrame(columns=list(MARKET_COLUMNS))


def _prices_to_dataframe(ids: list[str] | None, prices: dict[str, float]) -> pd.DataFrame:
    """Build one row per id with current_price from the prices dict, highest price first."""
    rows = [
        {
            "id": asset_id,
            "name": asset_id,
            "symbol": asset_id[:3],
            "image": None,
            "current_price": p,
            "price_change_percentage_24h": None,
            "market_cap": None,
            "market_cap_rank": None,
        }
        for asset_id, p in prices.items()
        if ids is None or asset_id in ids
    ]
    rows.sort(key=lambda r: r["current_price"], reverse=True)
    return pd.DataFrame(rows, columns=list(MARKET_COLUMNS)) if rows else _empty_market_frame()


class StaticPriceFeed(PriceFeed):
    """
    In-memory feed. Pass latest_prices (id -> price) or market_data_source(ids -> DataFrame).
    The prices dict is read on every call, so updating it changes later results.
    """

    def __init__(
        self,
        latest_prices: dict[str, float] | None = None,
        *,
        market_data_source: Callable[[list[str] | None], pd.DataFrame] | None = None,
    ) -> None:
        if market_data_source is not None:
            self._market_data_source = market_data_source
        elif latest_prices is not None:
            self._market_data_source = lambda ids: _prices_to_dataframe(ids, latest_prices)
        else:
            self._market_data_source = lambda ids: _empty_market_frame()
        self.requests: list[dict] = []

    def get_market_data(
        self,
        ids: list[str] | None = None,
        *,
        vs_currency: str = DEFAULT_VS_CURRENCY,
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> pd.DataFrame:
        self.requests.append({"ids": ids, "vs_currency": vs_currency, "per_page": per_page, "page": page})
        df = self._market_data_source(ids)
        start = (page - 1) * per_page
        return df.iloc[start : start + per_page].reset_index(drop=True)
