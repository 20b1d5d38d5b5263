"""
TradeLedger: long-only, single-position simulation driven by crossover signals.

Walks bars in order, opens a position on BUY while flat and closes it on SELL
while open. Signals that do not match the position state are ignored, so the
emitted log always alternates BUY, SELL, BUY, ... and may end with an open BUY.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from macross_core.bar import PriceBar
from macross_core.position import Position
from macross_core.signal import Signal
from macross_core.trade import Trade, TradeType

logger = logging.getLogger(__name__)


def _tradable(price: float) -> bool:
    return math.isfinite(price) and price > 0


class TradeLedger:
    """
    Simulates the strategy for a fixed amount of capital.

    Every buy is sized as floor(capital / close). Profits are not compounded
    into the buying power of later trades.
    """

    def __init__(self, capital: float) -> None:
        self.capital = capital

    def run(self, bars: Sequence[PriceBar], signals: Sequence[Signal]) -> list[Trade]:
        """
        Return the trade log for the given bars and per-bar signals.

        A bar whose close is not a positive finite number never opens or closes
        a position; the signal on it is skipped.
        """
        if len(bars) != len(signals):
            raise ValueError(f"got {len(signals)} signals for {len(bars)} bars")

        position = Position()
        trades: list[Trade] = []
        for bar, signal in zip(bars, signals):
            if signal is Signal.HOLD:
                continue
            if signal is Signal.BUY and position.is_open:
                continue
            if signal is Signal.SELL and not position.is_open:
                continue
            price = bar.close
            if not _tradable(price):
                logger.warning("Skipping %s on %s: close price %r is not tradable", signal.value, bar.date, price)
                continue

            if signal is Signal.BUY:
                shares = math.floor(self.capital / price)
                position.open(price, shares)
                trades.append(Trade(date=bar.date, type=TradeType.BUY, price=price, shares=shares))
            else:
                profit_per_share = price - position.entry_price
                trades.append(
                    Trade(
                        date=bar.date,
                        type=TradeType.SELL,
                        price=price,
                        shares=position.shares,
                        profit_per_share=profit_per_share,
                        total_profit=profit_per_share * position.shares,
                    )
                )
                position.close()

        if position.is_open:
            logger.debug("Position opened at %.4f is still open at end of series", position.entry_price)
        return trades


def ensure_alternating(trades: Iterable[Trade]) -> list[Trade]:
    """
    Repair a trade log so it alternates BUY, SELL, BUY, ...

    Any trade with the same type as the previous kept trade is dropped (the first
    one seen wins), as is a SELL at the start of the log. Logs produced by
    TradeLedger already satisfy this and come back unchanged.
    """
    kept: list[Trade] = []
    for trade in trades:
        expected = TradeType.BUY if not kept or kept[-1].type is TradeType.SELL else TradeType.SELL
        if trade.type is expected:
            kept.append(trade)
        else:
            logger.debug("Dropping out-of-sequence %s on %s", trade.type.value, trade.date)
    return kept
