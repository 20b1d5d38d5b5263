"""
Load daily price bars from CSV files or DataFrames.

Files may be headerless (Date, Open, High, Low, Close, Volume in that order) or
carry a header row with any casing or common aliases. Dates keep only their
calendar-date part.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from macross_core import PriceBar

logger = logging.getLogger(__name__)

# Standard column names; lowercase for normalization
COLUMNS = ("date", "open", "high", "low", "close", "volume")

# Common aliases
ALIASES = {
    "datetime": "date",
    "timestamp": "date",
    "o": "open",
    "h": "high",
    "l": "low",
    "c": "close",
    "adj close": "close",
    "v": "volume",
    "vol": "volume",
}


class DataLoadError(ValueError):
    """Raised when a file or frame cannot be turned into price bars."""


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Ensure columns are lowercase; map common aliases to date/open/high/low/close/volume."""
    out = df.copy()
    out.columns = [str(c).lower().strip() for c in out.columns]
    renames = {k: v for k, v in ALIASES.items() if k in out.columns and v not in out.columns}
    return out.rename(columns=renames)


def _has_header(path: Path) -> bool:
    with path.open(newline="") as fh:
        first = fh.readline()
    cells = [c.strip().lower() for c in first.split(",")]
    return any(c in COLUMNS or c in ALIASES for c in cells)


def load_dataframe(df: pd.DataFrame, *, date_column: str | None = None) -> list[PriceBar]:
    """
    Convert a DataFrame of OHLC(V) rows to price bars.

    Parameters
    ----------
    df : pd.DataFrame
        Rows in chronological order. Columns may be mixed case or aliased.
    date_column : str, optional
        Column holding the date. If None, 'date' is used, or the index when
        there is no such column.

    Returns
    -------
    list of PriceBar
        One bar per row, in the frame's order. Non-numeric prices become NaN.
    """
    out = _normalize_columns(df)
    if date_column is not None:
        date_col = date_column.lower().strip()
    elif "date" in out.columns:
        date_col = "date"
    else:
        out = out.reset_index()
        date_col = str(out.columns[0]).lower()
        out.columns = [str(c).lower() for c in out.columns]
    if date_col not in out.columns:
        raise DataLoadError(f"date column {date_col!r} not found in {list(out.columns)}")
    if "close" not in out.columns:
        raise DataLoadError(f"close column not found in {list(out.columns)}")

    raw = out[date_col]
    blank = raw.isna() | (raw.astype(str).str.strip() == "")
    missing = [i for i, is_blank in enumerate(blank) if is_blank]
    if missing:
        raise DataLoadError(f"missing date in row(s) {missing} of column {date_col!r}")
    try:
        dates = pd.to_datetime(raw.astype(str).str.split(" ").str[0])
    except (ValueError, TypeError) as exc:
        raise DataLoadError(f"unparseable dates in column {date_col!r}: {exc}") from exc
    missing = [i for i, is_na in enumerate(dates.isna()) if is_na]
    if missing:
        raise DataLoadError(f"missing date in row(s) {missing} of column {date_col!r}")
    prices = {
        c: pd.to_numeric(out[c], errors="coerce") if c in out.columns else pd.Series(0.0, index=out.index)
        for c in COLUMNS[1:]
    }
    # missing open/high/low fall back to close, as in a close-only file
    for c in ("open", "high", "low"):
        if c not in out.columns:
            prices[c] = prices["close"]

    return [
        PriceBar(
            date=dates.iloc[i],
            open=prices["open"].iloc[i],
            high=prices["high"].iloc[i],
            low=prices["low"].iloc[i],
            close=prices["close"].iloc[i],
            volume=prices["volume"].iloc[i],
        )
        for i in range(len(out))
    ]


def load_csv(path: str | Path, *, header: bool | None = None) -> list[PriceBar]:
    """
    Load price bars from a CSV file.

    Parameters
    ----------
    path : str or Path
        Path to the CSV file.
    header : bool, optional
        Whether the first row is a header. If None, it is detected from the
        presence of any known column name or alias.
        Cells past the sixth column of a headerless row are dropped.

    Returns
    -------
    list of PriceBar
        Bars in file order. Blank lines are skipped.
    """
    path = Path(path)
    if header is None:
        header = _has_header(path)
    if header:
        df = pd.read_csv(path, index_col=False, skip_blank_lines=True)
    else:
        df = pd.read_csv(path, header=None, names=list(COLUMNS), index_col=False, skip_blank_lines=True)
    if df.empty:
        raise DataLoadError(f"{path} contains no rows")
    bars = load_dataframe(df)
    logger.debug("Loaded %d bars from %s", len(bars), path)
    return bars


def load_many(paths: Iterable[str | Path]) -> dict[str, list[PriceBar]]:
    """Load several CSV files keyed by file name without extension, in the given order."""
    return {Path(p).stem: load_csv(p) for p in paths}
