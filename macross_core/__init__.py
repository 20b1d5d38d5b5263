"""
macross-core: deterministic moving-average crossover engine.

Indicators, crossover signals, and a single-position trade ledger. No I/O, no
shared state; every call recomputes from the full series.
"""

__version__ = "0.1.0"

from macross_core.bar import AnnotatedBar, PriceBar
from macross_core.indicators import IndicatorKind, dema, ema, sma
from macross_core.ledger import TradeLedger, ensure_alternating
from macross_core.position import Position
from macross_core.signal import Signal, generate_signals
from macross_core.trade import Trade, TradeType

__all__ = [
    "AnnotatedBar",
    "PriceBar",
    "IndicatorKind",
    "sma",
    "ema",
    "dema",
    "TradeLedger",
    "ensure_alternating",
    "Position",
    "Signal",
    "generate_signals",
    "Trade",
    "TradeType",
]
