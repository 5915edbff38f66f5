"""
Price feed layer: market data sources consumed by the tracker.

PriceFeed interface; CoinGecko adapter (requests); static adapter for offline use.
"""

from coinfolio_core.feeds.base import MARKET_COLUMNS, PriceFeed, prices_from_market_data
from coinfolio_core.feeds.coingecko import CoinGeckoPriceFeed
from coinfolio_core.feeds.static import StaticPriceFeed

__all__ = [
    "MARKET_COLUMNS",
    "PriceFeed",
    "prices_from_market_data",
    "CoinGeckoPriceFeed",
    "StaticPriceFeed",
]
