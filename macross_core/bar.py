"""
PriceBar: one period of OHLCV data, and AnnotatedBar: a bar plus engine output.

Immutable data carriers. Dates are normalized to calendar dates on construction;
non-numeric prices become NaN so the engine can treat them as undefined.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from macross_core.signal import Signal

_PRICE_FIELDS = ("open", "high", "low", "close", "volume")


def _to_date(value: Any) -> date:
    """Truncate a datetime, ISO string or pandas Timestamp to a calendar date."""
    if hasattr(value, "to_pydatetime"):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # "2024-01-02 09:30:00" and "2024-01-02T09:30:00" both keep only the date part
    return date.fromisoformat(text.split(" ")[0].split("T")[0])


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


@dataclass(frozen=True)
class PriceBar:
    """One trading period. Only close is read by the engine; the rest passes through."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _to_date(self.date))
        for name in _PRICE_FIELDS:
            object.__setattr__(self, name, _to_float(getattr(self, name)))


@dataclass(frozen=True)
class AnnotatedBar:
    """A price bar with the fast/slow indicator values and the crossover label for that bar."""

    bar: PriceBar
    fast: float
    slow: float
    signal: Signal = Signal.HOLD

    @property
    def date(self) -> date:
        return self.bar.date

    @property
    def close(self) -> float:
        return self.bar.close
