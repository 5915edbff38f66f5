"""
Portfolio report: summary figures and a printed table from a ValuationReport.
"""

from __future__ import annotations

from dataclasses import dataclass

from valuation.metrics import ValuationReport


@dataclass(frozen=True)
class PortfolioSummary:
    """Display strings for the summary panel."""

    total_value: str
    change: str
    coins: str


def _signed_percent(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def format_summary(report: ValuationReport | None, *, currency_symbol: str = "$") -> PortfolioSummary:
    """
    Summary panel text: total value, total profit/loss percent with sign, coin count.
    None (no portfolio loaded) renders as zeros.
    """
    if report is None:
        return PortfolioSummary(total_value=f"{currency_symbol}0.00", change="+0.00%", coins="0")
    return PortfolioSummary(
        total_value=f"{currency_symbol}{report.total_value:.2f}",
        change=_signed_percent(report.total_profit_loss_percent),
        coins=str(report.count),
    )


def print_report(report: ValuationReport, *, currency_symbol: str = "$") -> PortfolioSummary:
    """
    Print per-holding rows and the summary.

    Returns
    -------
    PortfolioSummary
        The summary strings (e.g. for programmatic use).
    """
    summary = format_summary(report, currency_symbol=currency_symbol)
    print("--- Portfolio ---")
    if not report.rows:
        print("No holdings.")
    for r in report.rows:
        print(
            f"{r.name:<20} {r.amount:>14g} {currency_symbol}{r.current_value:>14,.2f}  "
            f"{_signed_percent(r.profit_loss_percent)} ({currency_symbol}{abs(r.profit_loss):,.2f})"
        )
    print(f"Total value:     {summary.total_value}")
    print(f"Change:          {summary.change}")
    print(f"Coins:           {summary.coins}")
    print("-----------------")
    return summary
