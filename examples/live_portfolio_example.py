"""
Live portfolio example: value a file-backed portfolio with CoinGecko prices.

Configuration comes from COINFOLIO_* environment variables (see coinfolio_core.config).
Feed failures are reported, not raised: the portfolio is then valued at zero prices.
"""

from __future__ import annotations

import logging

from coinfolio_core import Settings
from valuation import PortfolioTracker, print_report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    tracker = PortfolioTracker.from_settings(settings)

    print(f"=== Top markets ({settings.vs_currency}) ===")
    markets = tracker.markets(per_page=10)
    if tracker.last_error:
        print(f"  Market listing unavailable: {tracker.last_error}")
    for row in markets.itertuples(index=False):
        print(f"  {row.market_cap_rank!s:>4}  {row.name:<20} {row.current_price:>14,.2f}")

    if not tracker.load().holdings:
        print("\nEmpty portfolio; seeding one bitcoin buy at 20000.")
        tracker.add("bitcoin", "Bitcoin", 1.0, 20000.0)

    print()
    report = tracker.refresh()
    if tracker.last_error:
        print(f"Prices unavailable: {tracker.last_error}")
    print_report(report)


if __name__ == "__main__":
    main()
