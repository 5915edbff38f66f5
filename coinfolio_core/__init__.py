"""
coinfolio-core: crypto buy-in portfolio with weighted-average cost basis.

Holdings persisted as one JSON document through an injected Persistence; prices
from an injected PriceFeed. No UI, no background jobs.
"""

__version__ = "0.1.0"

from coinfolio_core.config import Settings
from coinfolio_core.errors import CoinfolioError, PriceFeedError, ValidationError
from coinfolio_core.holding import Holding
from coinfolio_core.portfolio import Portfolio
from coinfolio_core.store import PortfolioStore

__all__ = [
    "Settings",
    "CoinfolioError",
    "PriceFeedError",
    "ValidationError",
    "Holding",
    "Portfolio",
    "PortfolioStore",
]
