"""
Crossover backtesting on top of macross-core.

Runs the strategy for one instrument or a batch, summarizes trades, loads bars
from CSV, and prints reports.
"""

from macross_backtest.engine import (
    BacktestEngine,
    BacktestParams,
    CompanyResult,
    InvalidParameterError,
    run_backtest,
)
from macross_backtest.data_loader import DataLoadError, load_csv, load_dataframe, load_many
from macross_backtest.metrics import Summary, compute_summary
from macross_backtest.report import print_leaderboard, print_report, rank_results, slice_series, to_frame

__all__ = [
    "BacktestEngine",
    "BacktestParams",
    "CompanyResult",
    "InvalidParameterError",
    "run_backtest",
    "DataLoadError",
    "load_csv",
    "load_dataframe",
    "load_many",
    "Summary",
    "compute_summary",
    "print_leaderboard",
    "print_report",
    "rank_results",
    "slice_series",
    "to_frame",
]
