"""
Moving-average crossover backtest over one or more CSV files.

Demonstrates: load CSVs → run batch → per-instrument summary → leaderboard.

    python examples/crossover_backtest.py data/AAPL.csv data/MSFT.csv --indicator ema --fast 10 --slow 30
"""

import argparse
import logging

from macross_backtest import BacktestEngine, BacktestParams, load_many, print_leaderboard, print_report


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("files", nargs="+", help="CSV files with Date,Open,High,Low,Close,Volume rows")
    parser.add_argument("--indicator", default="DEMA", help="SMA, EMA or DEMA (default DEMA)")
    parser.add_argument("--fast", type=int, default=20, help="fast span (default 20)")
    parser.add_argument("--slow", type=int, default=30, help="slow span (default 30)")
    parser.add_argument("--capital", type=float, default=100_000.0, help="starting capital")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    params = BacktestParams(
        indicator=args.indicator,
        span_fast=args.fast,
        span_slow=args.slow,
        capital=args.capital,
    )
    series = load_many(args.files)
    results = BacktestEngine(params).run_batch(series)

    for result in results.values():
        print_report(result)
    print_leaderboard(results.values())


if __name__ == "__main__":
    main()
