"""
Backtest summary: trade count, profit, win rate, return.

Only completed round trips (sell legs) are counted; an open buy at the end of the
series is unrealized and excluded. Values are kept at full precision; rounding
happens in Summary.to_dict() for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from macross_core import IndicatorKind, Trade, TradeType


@dataclass(frozen=True)
class Summary:
    """Performance of one backtest run, plus the parameters it was run with."""

    total_trades: int
    total_profit: float
    win_rate: float
    total_return: float
    final_capital: float
    win_count: int
    loss_count: int
    break_even_count: int
    indicator: IndicatorKind
    span_fast: int
    span_slow: int
    starting_capital: float

    def to_dict(self) -> dict[str, Any]:
        """Display mapping; percentages rounded to two decimals."""
        return {
            "Total Trades": self.total_trades,
            "Total Profit": self.total_profit,
            "Win Rate (%)": round(self.win_rate, 2),
            "Total Return (%)": round(self.total_return, 2),
            "Final Capital": self.final_capital,
            "Win Trades": self.win_count,
            "Loss Trades": self.loss_count,
            "Indicator Type": self.indicator.value,
            "Indicator 1 Span": self.span_fast,
            "Indicator 2 Span": self.span_slow,
        }


def compute_summary(
    trades: Sequence[Trade],
    starting_capital: float,
    *,
    indicator: IndicatorKind,
    span_fast: int,
    span_slow: int,
) -> Summary:
    """
    Reduce a trade log to a Summary.

    Parameters
    ----------
    trades : sequence of Trade
        Trade log in chronological order.
    starting_capital : float
        Capital the run started with; must be positive.
    indicator, span_fast, span_slow
        Strategy parameters, recorded on the summary.

    Returns
    -------
    Summary
        win_rate is 0 when there are no completed trades. A zero-profit trade
        counts as a loss and is also reported in break_even_count.
    """
    profits = np.array(
        [t.total_profit or 0.0 for t in trades if t.type is TradeType.SELL],
        dtype=float,
    )
    total_trades = len(profits)
    total_profit = float(profits.sum()) if total_trades else 0.0
    win_count = int((profits > 0).sum())
    loss_count = total_trades - win_count
    break_even_count = int((profits == 0).sum())

    win_rate = win_count / total_trades * 100.0 if total_trades else 0.0
    final_capital = starting_capital + total_profit
    total_return = (final_capital - starting_capital) / starting_capital * 100.0

    return Summary(
        total_trades=total_trades,
        total_profit=total_profit,
        win_rate=win_rate,
        total_return=total_return,
        final_capital=final_capital,
        win_count=win_count,
        loss_count=loss_count,
        break_even_count=break_even_count,
        indicator=indicator,
        span_fast=span_fast,
        span_slow=span_slow,
        starting_capital=starting_capital,
    )
