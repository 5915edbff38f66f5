"""
Offline portfolio example: record buys, value them with a static price feed.

Shows: PortfolioStore with in-memory persistence, weighted-average cost basis,
StaticPriceFeed, PortfolioTracker.refresh and the summary report. No network.
"""

from __future__ import annotations

import logging

from coinfolio_core import PortfolioStore, ValidationError
from coinfolio_core.feeds import StaticPriceFeed
from coinfolio_core.persistence import InMemoryPersistence
from valuation import PortfolioTracker, print_report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    latest_prices: dict[str, float] = {"bitcoin": 30000.0, "ethereum": 1800.0}
    persistence = InMemoryPersistence()
    tracker = PortfolioTracker(PortfolioStore(persistence), StaticPriceFeed(latest_prices=latest_prices))

    print("--- Buys ---")
    tracker.add("bitcoin", "Bitcoin", 0.5, 20000.0)
    tracker.add("bitcoin", "Bitcoin", 0.5, 28000.0)
    tracker.add("ethereum", "Ethereum", 2.0)
    tracker.add("solana", "Solana", 10.0, 25.0)  # not priced by the feed: valued at 0
    print(f"Stored document: {persistence.read()}")

    try:
        tracker.add("ethereum", "Ethereum", -1.0)
    except ValidationError as e:
        print(f"Rejected buy: {e}")

    print()
    print_report(tracker.refresh())

    print("\n--- Price move, then delete Solana ---")
    latest_prices["bitcoin"] = 33000.0
    tracker.remove("solana")
    print_report(tracker.refresh())


if __name__ == "__main__":
    main()
