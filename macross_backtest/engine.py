"""
Backtesting engine: composes the core into one call per instrument.

bars → indicators (fast, slow) → signals → ledger → summary.
Stateless: parameters are validated up front and passed on every call; a batch of
instruments runs on a thread pool with no shared mutable state.
"""

from __future__ import annotations

import logging
import math
import numbers
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Mapping, Sequence

from macross_core import (
    AnnotatedBar,
    IndicatorKind,
    PriceBar,
    Trade,
    TradeLedger,
    generate_signals,
)
from macross_core.indicators import compute

from macross_backtest.metrics import Summary, compute_summary

logger = logging.getLogger(__name__)


class InvalidParameterError(ValueError):
    """Raised when backtest parameters are out of range. No computation is attempted."""


@dataclass(frozen=True)
class BacktestParams:
    """
    Strategy parameters for a run. Validated on construction.

    fast < slow is a convention of the caller and is not enforced.
    """

    indicator: IndicatorKind = IndicatorKind.DEMA
    span_fast: int = 20
    span_slow: int = 30
    capital: float = 100_000.0

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "indicator", IndicatorKind.parse(self.indicator))
        except ValueError as exc:
            raise InvalidParameterError(str(exc)) from exc
        for name in ("span_fast", "span_slow"):
            span = getattr(self, name)
            if isinstance(span, bool) or not isinstance(span, numbers.Integral) or span <= 0:
                raise InvalidParameterError(f"{name} must be a positive integer, got {span!r}")
            object.__setattr__(self, name, int(span))
        capital = self.capital
        if isinstance(capital, bool) or not isinstance(capital, numbers.Real):
            raise InvalidParameterError(f"capital must be a number, got {capital!r}")
        if not math.isfinite(capital) or capital <= 0:
            raise InvalidParameterError(f"capital must be positive, got {capital!r}")
        object.__setattr__(self, "capital", float(capital))


@dataclass(frozen=True)
class CompanyResult:
    """Result of a backtest on one instrument: annotated bars, trades, summary."""

    identifier: str
    series: tuple[AnnotatedBar, ...]
    trades: tuple[Trade, ...]
    summary: Summary


class BacktestEngine:
    """
    Runs the crossover strategy with fixed parameters on one or many price series.

    Holds only its (immutable) parameters, so a single engine may be shared
    across threads.
    """

    def __init__(self, params: BacktestParams) -> None:
        self.params = params

    def run(self, bars: Sequence[PriceBar], identifier: str = "UNKNOWN") -> CompanyResult:
        """
        Backtest one instrument.

        Parameters
        ----------
        bars : sequence of PriceBar
            Chronological bars, one per trading period.
        identifier : str
            Name of the instrument, carried onto the result.

        Returns
        -------
        CompanyResult
            Annotated series (same length as bars), trade log, and summary.
        """
        p = self.params
        close = [bar.close for bar in bars]
        fast = compute(p.indicator, close, p.span_fast)
        slow = compute(p.indicator, close, p.span_slow)
        signals = generate_signals(fast, slow)
        trades = TradeLedger(p.capital).run(bars, signals)
        summary = compute_summary(
            trades,
            p.capital,
            indicator=p.indicator,
            span_fast=p.span_fast,
            span_slow=p.span_slow,
        )
        series = tuple(
            AnnotatedBar(bar=bar, fast=float(f), slow=float(s), signal=sig)
            for bar, f, s, sig in zip(bars, fast, slow, signals)
        )
        logger.debug(
            "%s: %d bars, %d trades, total profit %.2f",
            identifier,
            len(bars),
            len(trades),
            summary.total_profit,
        )
        return CompanyResult(identifier=identifier, series=series, trades=tuple(trades), summary=summary)

    def run_batch(
        self,
        series: Mapping[str, Sequence[PriceBar]],
        *,
        max_workers: int | None = None,
    ) -> dict[str, CompanyResult]:
        """
        Backtest several instruments concurrently.

        Results are keyed by identifier and ordered like the input mapping,
        whatever order the runs complete in. The first failing run's exception
        is raised.
        """
        p = self.params
        logger.info("Running %s %d/%d on %d instruments", p.indicator.value, p.span_fast, p.span_slow, len(series))
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {ident: pool.submit(self.run, bars, ident) for ident, bars in series.items()}
            return {ident: future.result() for ident, future in futures.items()}


def run_backtest(
    bars: Sequence[PriceBar],
    indicator: IndicatorKind | str = IndicatorKind.DEMA,
    span_fast: int = 20,
    span_slow: int = 30,
    capital: float = 100_000.0,
    *,
    identifier: str = "UNKNOWN",
) -> CompanyResult:
    """Validate parameters and backtest one instrument. Raises InvalidParameterError on bad input."""
    params = BacktestParams(indicator=indicator, span_fast=span_fast, span_slow=span_slow, capital=capital)
    return BacktestEngine(params).run(bars, identifier)
