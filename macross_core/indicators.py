"""
Moving-average indicators on a close-price sequence: SMA, EMA, DEMA.

All functions are pure: they return a new float array of the same length as the
input and never modify it. NaN marks an undefined value.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


class IndicatorKind(Enum):
    SMA = "SMA"
    EMA = "EMA"
    DEMA = "DEMA"

    @classmethod
    def parse(cls, value: "IndicatorKind | str") -> "IndicatorKind":
        """Accept a member or its name in any case ("dema", "DEMA")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            names = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown indicator {value!r}; expected one of {names}") from None


def _check_span(span: int) -> None:
    if isinstance(span, bool) or not isinstance(span, (int, np.integer)):
        raise ValueError(f"span must be an integer, got {span!r}")
    if span <= 0:
        raise ValueError(f"span must be positive, got {span}")


def sma(values: Sequence[float] | np.ndarray, span: int) -> np.ndarray:
    """Simple moving average. The first span - 1 entries are NaN (warm-up)."""
    _check_span(span)
    x = np.asarray(values, dtype=float)
    out = np.full(len(x), np.nan)
    if len(x) >= span:
        out[span - 1:] = sliding_window_view(x, span).mean(axis=1)
    return out


def ema(values: Sequence[float] | np.ndarray, span: int) -> np.ndarray:
    """
    Exponential moving average, k = 2 / (span + 1), seeded with the first value.

    There is no warm-up gap: ema[0] == values[0]. A NaN input carries through
    the recurrence to every later value.
    """
    _check_span(span)
    x = np.asarray(values, dtype=float)
    out = np.empty(len(x))
    if len(x) == 0:
        return out
    k = 2.0 / (span + 1)
    out[0] = x[0]
    # same as x*k + prev*(1-k), but stays exact on a constant series
    for i in range(1, len(x)):
        out[i] = out[i - 1] + k * (x[i] - out[i - 1])
    return out


def dema(values: Sequence[float] | np.ndarray, span: int) -> np.ndarray:
    """Double exponential moving average: 2 * EMA - EMA(EMA), both with the same span."""
    first = ema(values, span)
    second = ema(first, span)
    return 2.0 * first - second


_FUNCTIONS = {
    IndicatorKind.SMA: sma,
    IndicatorKind.EMA: ema,
    IndicatorKind.DEMA: dema,
}


def compute(kind: IndicatorKind | str, values: Sequence[float] | np.ndarray, span: int) -> np.ndarray:
    """Compute the indicator named by kind."""
    return _FUNCTIONS[IndicatorKind.parse(kind)](values, span)
