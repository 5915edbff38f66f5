"""
Portfolio tracker: wires PortfolioStore, PriceFeed and valuate together.

Flow: load portfolio → fetch prices for held ids → valuate. Feed failures are
logged and kept in last_error for the caller to surface; valuation then runs
against an empty price mapping.
"""

from __future__ import annotations

import logging

import pandas as pd

from coinfolio_core.config import Settings
from coinfolio_core.errors import PriceFeedError
from coinfolio_core.feeds import MARKET_COLUMNS, CoinGeckoPriceFeed, PriceFeed, prices_from_market_data
from coinfolio_core.persistence import FilePersistence
from coinfolio_core.portfolio import Portfolio
from coinfolio_core.store import PortfolioStore
from valuation.metrics import ValuationReport, valuate

logger = logging.getLogger(__name__)

# Page size used by the dashboard when pricing holdings
MIN_PRICE_PAGE = 50


class PortfolioTracker:
    """
    Caller-side façade over the store and the price feed.
    Mutations go straight to the store; refresh() recomputes the valuation.
    """

    def __init__(
        self,
        store: PortfolioStore,
        feed: PriceFeed,
        *,
        vs_currency: str = "usd",
    ) -> None:
        self.store = store
        self.feed = feed
        self.vs_currency = vs_currency
        self.last_error: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PortfolioTracker":
        """File-backed store and CoinGecko feed configured from Settings (default: environment)."""
        settings = settings or Settings.from_env()
        store = PortfolioStore(FilePersistence(settings.storage_dir, settings.storage_key))
        return cls(store, CoinGeckoPriceFeed.from_settings(settings), vs_currency=settings.vs_currency)

    def load(self) -> Portfolio:
        return self.store.load()

    def add(self, holding_id: str, name: str, amount: float, unit_price: float | None = None) -> Portfolio:
        """Record a buy. Raises ValidationError on bad input; see PortfolioStore.upsert."""
        return self.store.upsert(holding_id, name, amount, unit_price)

    def remove(self, holding_id: str) -> Portfolio:
        return self.store.remove(holding_id)

    def fetch_prices(self, ids: list[str], *, vs_currency: str | None = None) -> dict[str, float]:
        """Current price per id. Returns {} (and sets last_error) if the feed fails."""
        if not ids:
            return {}
        try:
            df = self.feed.get_market_data(
                ids,
                vs_currency=vs_currency or self.vs_currency,
                per_page=max(MIN_PRICE_PAGE, len(ids)),
                page=1,
            )
        except PriceFeedError as e:
            self.last_error = str(e)
            logger.warning("Price feed failed, valuing without prices: %s", e)
            return {}
        self.last_error = None
        prices = prices_from_market_data(df)
        missing = [i for i in ids if i not in prices]
        if missing:
            logger.info("No price for %s", ", ".join(missing))
        return prices

    def refresh(self, *, vs_currency: str | None = None) -> ValuationReport:
        """
        Load the portfolio and value it at current prices.
        An empty portfolio is valued without calling the feed.
        """
        portfolio = self.load()
        if not portfolio.holdings:
            return valuate(portfolio, {})
        prices = self.fetch_prices(portfolio.ids, vs_currency=vs_currency)
        return valuate(portfolio, prices)

    def markets(self, *, per_page: int = MIN_PRICE_PAGE, vs_currency: str | None = None) -> pd.DataFrame:
        """
        Top assets by market cap (e.g. to pick a coin to add).
        Returns an empty frame (and sets last_error) if the feed fails.
        """
        try:
            df = self.feed.get_market_data(None, vs_currency=vs_currency or self.vs_currency, per_page=per_page, page=1)
        except PriceFeedError as e:
            self.last_error = str(e)
            logger.warning("Market listing failed: %s", e)
            return pd.DataFrame(columns=list(MARKET_COLUMNS))
        self.last_error = None
        return df
