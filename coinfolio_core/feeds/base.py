"""
Price feed abstraction layer.

PriceFeed ABC: get_market_data. CoinGecko adapter queries the public REST API;
static adapter serves in-memory prices for offline use and tests.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pandas as pd

# Columns of one market row, as returned by /coins/markets
MARKET_COLUMNS = (
    "id",
    "name",
    "symbol",
    "image",
    "current_price",
    "price_change_percentage_24h",
    "market_cap",
    "market_cap_rank",
)

DEFAULT_VS_CURRENCY = "usd"
DEFAULT_PER_PAGE = 50


class PriceFeed(ABC):
    """
    Abstract market data source. Same interface for live and static feeds.
    Implementations: CoinGeckoPriceFeed, StaticPriceFeed.
    """

    @abstractmethod
    def get_market_data(
        self,
        ids: list[str] | None = None,
        *,
        vs_currency: str = DEFAULT_VS_CURRENCY,
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> "pd.DataFrame":
        """
        Return one row per asset with MARKET_COLUMNS, ordered by market cap.
        ids=None lists the top assets. Rows may be missing for requested ids and
        may come back in any order. Raises PriceFeedError on failure.
        """
        ...


def prices_from_market_data(df: "pd.DataFrame") -> dict[str, float]:
    """Map asset id -> current price. Rows without a usable price are skipped."""
    prices: dict[str, float] = {}
    if df.empty or "id" not in df.columns or "current_price" not in df.columns:
        return prices
    for asset_id, price in zip(df["id"], df["current_price"]):
        if asset_id is None or price is None:
            continue
        try:
            value = float(price)
        except (TypeError, ValueError):
            continue
        if math.isnan(value):
            continue
        prices[str(asset_id)] = value
    return prices
