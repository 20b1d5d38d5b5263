"""
Trade: one leg of a round trip, as appended to the trade log.

Immutable. Sell legs carry the realized profit of the round trip they close.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class TradeType(Enum):
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class Trade:
    """A filled buy or sell at a bar's close. Profit fields are None on buys."""

    date: date
    type: TradeType
    price: float
    shares: int
    profit_per_share: float | None = None
    total_profit: float | None = None

    @property
    def outcome(self) -> str | None:
        """Result of a sell: win, loss or break-even. None for a buy."""
        if self.type is not TradeType.SELL or self.total_profit is None:
            return None
        if self.total_profit > 0:
            return "win"
        if self.total_profit < 0:
            return "loss"
        return "break-even"
