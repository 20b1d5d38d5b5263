"""
Reports: performance summary, instrument leaderboard, chart-ready frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from macross_core import AnnotatedBar

from macross_backtest.engine import CompanyResult


@dataclass(frozen=True)
class LeaderboardRow:
    """One instrument's line in the leaderboard."""

    name: str
    total_profit: float
    total_trades: int
    win_rate: float
    total_return: float


def rank_results(results: Iterable[CompanyResult]) -> list[LeaderboardRow]:
    """Instruments sorted by total profit, highest first. Ties keep input order."""
    rows = [
        LeaderboardRow(
            name=r.identifier,
            total_profit=r.summary.total_profit,
            total_trades=r.summary.total_trades,
            win_rate=r.summary.win_rate,
            total_return=r.summary.total_return,
        )
        for r in results
    ]
    return sorted(rows, key=lambda row: row.total_profit, reverse=True)


def slice_series(series: Sequence[AnnotatedBar], start: int, end: int) -> list[AnnotatedBar]:
    """Bars from start to end inclusive, clamped to the series bounds. Empty if start > end."""
    if not series:
        return []
    start = max(0, start)
    end = min(len(series) - 1, end)
    return list(series[start:end + 1])


def to_frame(result: CompanyResult) -> pd.DataFrame:
    """
    Annotated series as a DataFrame indexed by date.

    Columns: Open, High, Low, Close, Volume, one column per indicator named
    like "DEMA20" / "DEMA30", and Signal ("Hold", "Buy", "Sell").
    """
    s = result.summary
    fast_col = f"{s.indicator.value}{s.span_fast}"
    slow_col = f"{s.indicator.value}{s.span_slow}"
    if fast_col == slow_col:
        fast_col, slow_col = f"{fast_col}_1", f"{slow_col}_2"
    df = pd.DataFrame(
        {
            "Open": [a.bar.open for a in result.series],
            "High": [a.bar.high for a in result.series],
            "Low": [a.bar.low for a in result.series],
            "Close": [a.bar.close for a in result.series],
            "Volume": [a.bar.volume for a in result.series],
            fast_col: [a.fast for a in result.series],
            slow_col: [a.slow for a in result.series],
            "Signal": [a.signal.value for a in result.series],
        },
        index=pd.Index([a.date for a in result.series], name="Date"),
    )
    return df


def print_report(result: CompanyResult) -> None:
    """Print a performance summary for one instrument."""
    s = result.summary
    print(f"--- {result.identifier}: {s.indicator.value} {s.span_fast}/{s.span_slow} ---")
    print(f"Starting capital: {s.starting_capital:,.2f}")
    print(f"Final capital:    {s.final_capital:,.2f}")
    print(f"Total profit:     {s.total_profit:,.2f}")
    print(f"Total return:     {s.total_return:.2f}%")
    print(f"Trades:           {s.total_trades} ({s.win_count} won, {s.loss_count} lost)")
    print(f"Win rate:         {s.win_rate:.2f}%")
    print("----------------------------")


def print_leaderboard(results: Iterable[CompanyResult]) -> list[LeaderboardRow]:
    """Print instruments ranked by total profit and return the rows."""
    rows = rank_results(results)
    print(f"{'Rank':>4}  {'Instrument':<16} {'Profit':>14} {'Trades':>6} {'Win %':>7} {'Return %':>9}")
    for i, row in enumerate(rows, start=1):
        print(
            f"{i:>4}  {row.name:<16} {row.total_profit:>14,.2f} {row.total_trades:>6} "
            f"{row.win_rate:>7.2f} {row.total_return:>9.2f}"
        )
    return rows
