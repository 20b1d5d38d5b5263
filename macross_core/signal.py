"""
Signal: per-bar crossover label, and the stateless generator that produces it.

The generator reports raw crossovers only. Whether a crossover results in a trade
is decided by the ledger, which knows about the open position.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np


class Signal(Enum):
    HOLD = "Hold"
    BUY = "Buy"
    SELL = "Sell"


def generate_signals(
    fast: Sequence[float] | np.ndarray,
    slow: Sequence[float] | np.ndarray,
) -> list[Signal]:
    """
    Classify every bar as BUY (upward cross), SELL (downward cross) or HOLD.

    Parameters
    ----------
    fast, slow : sequence of float
        Indicator values aligned to the same price series. NaN marks an
        undefined value (warm-up or malformed input).

    Returns
    -------
    list of Signal
        One label per bar. Index 0 is always HOLD; so is any bar where the
        current or previous value of either indicator is undefined.
    """
    f = np.asarray(fast, dtype=float)
    s = np.asarray(slow, dtype=float)
    if f.shape != s.shape:
        raise ValueError(f"indicator lengths differ: {len(f)} != {len(s)}")

    signals = [Signal.HOLD] * len(f)
    if len(f) < 2:
        return signals

    defined = np.isfinite(f) & np.isfinite(s)
    comparable = defined[1:] & defined[:-1]
    up = comparable & (f[1:] > s[1:]) & (f[:-1] <= s[:-1])
    down = comparable & (f[1:] < s[1:]) & (f[:-1] >= s[:-1])

    # masks are offset by one: position j describes bar j + 1
    for j in np.flatnonzero(up):
        signals[j + 1] = Signal.BUY
    for j in np.flatnonzero(down):
        signals[j + 1] = Signal.SELL
    return signals
