"""
Portfolio valuation on top of coinfolio-core.

Values holdings against a price mapping; computes profit/loss per holding and
in total; formats the summary panel. PortfolioTracker runs load → price → valuate.
"""

from valuation.metrics import HoldingValuation, ValuationReport, valuate
from valuation.portfolio_report import PortfolioSummary, format_summary, print_report
from valuation.tracker import PortfolioTracker

__all__ = [
    "HoldingValuation",
    "ValuationReport",
    "valuate",
    "PortfolioSummary",
    "format_summary",
    "print_report",
    "PortfolioTracker",
]
