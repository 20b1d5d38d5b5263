"""
Position: the single long position held while the ledger walks a series.

Transient state; it exists only for the duration of one ledger pass.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Position:
    """Entry price and share count of the open position. Mutable; updated by the ledger."""

    entry_price: float = 0.0
    shares: int = 0
    is_open: bool = False

    def open(self, price: float, shares: int) -> None:
        self.entry_price = price
        self.shares = shares
        self.is_open = True

    def close(self) -> None:
        """Go flat."""
        self.entry_price = 0.0
        self.shares = 0
        self.is_open = False
