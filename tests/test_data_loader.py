"""
Tests for macross_backtest data_loader: load_csv, load_dataframe, load_many.
"""

import math
from datetime import date

import pandas as pd
import pytest

from macross_backtest.data_loader import DataLoadError, load_csv, load_dataframe, load_many


def test_load_csv_headerless_truncates_time(tmp_path):
    path = tmp_path / "ACME.csv"
    path.write_text(
        "2024-01-02 00:00:00,100,102,99,101,1000000\n"
        "2024-01-03 00:00:00,101,103,100,102.5,1200000\n"
        "\n"
        "2024-01-04,102,104,101,103,900000\n"
    )
    bars = load_csv(path)
    assert [b.date for b in bars] == [date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)]
    assert [b.close for b in bars] == [101.0, 102.5, 103.0]
    assert bars[1].volume == 1_200_000.0
    assert bars[0].high == 102.0


def test_load_csv_with_header(tmp_path):
    path = tmp_path / "acme.csv"
    path.write_text("Date,Open,High,Low,Close,Volume\n2024-01-02,1,2,0.5,1.5,10\n")
    bars = load_csv(path)
    assert len(bars) == 1
    assert bars[0].close == 1.5
    assert bars[0].low == 0.5


def test_load_csv_headerless_ignores_trailing_cells(tmp_path):
    path = tmp_path / "trailing.csv"
    path.write_text(
        "2024-01-02,100,102,99,101,1000,\n"
        "2024-01-03,101,103,100,102,1100,\n"
    )
    bars = load_csv(path)
    assert [b.date for b in bars] == [date(2024, 1, 2), date(2024, 1, 3)]
    assert [b.open for b in bars] == [100.0, 101.0]
    assert [b.close for b in bars] == [101.0, 102.0]
    assert bars[1].volume == 1100.0


def test_load_csv_detects_adj_close_header(tmp_path):
    path = tmp_path / "adj.csv"
    path.write_text("Date,Open,High,Low,Adj Close,Volume\n2024-01-02,1,2,0.5,1.5,10\n")
    bars = load_csv(path)
    assert len(bars) == 1
    assert bars[0].date == date(2024, 1, 2)
    assert bars[0].close == 1.5


def test_load_csv_missing_date_rejected(tmp_path):
    path = tmp_path / "nodate.csv"
    path.write_text("2024-01-02,1,2,0.5,1.5,10\n,1,2,0.5,1.6,10\n")
    with pytest.raises(DataLoadError, match=r"missing date in row\(s\) \[1\]"):
        load_csv(path)


def test_load_dataframe_missing_date_rejected():
    df = pd.DataFrame({"date": ["2024-01-02", None], "close": [1.0, 2.0]})
    with pytest.raises(DataLoadError, match="missing date"):
        load_dataframe(df)


def test_load_csv_non_numeric_close_is_nan(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("2024-01-02,1,2,0.5,1.5,10\n2024-01-03,1,2,0.5,null,10\n")
    bars = load_csv(path)
    assert math.isnan(bars[1].close)


def test_load_csv_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("Date,Open,High,Low,Close,Volume\n")
    with pytest.raises(DataLoadError):
        load_csv(path)


def test_load_dataframe_normalizes_columns():
    df = pd.DataFrame({
        "Date": ["2024-01-01", "2024-01-02"],
        "Open": [100.0, 101.0],
        "High": [102.0, 103.0],
        "Low": [99.0, 100.0],
        "Close": [101.0, 102.0],
        "Volume": [1e6, 1e6],
    })
    bars = load_dataframe(df)
    assert [b.close for b in bars] == [101.0, 102.0]
    assert bars[0].date == date(2024, 1, 1)


def test_load_dataframe_aliases_and_index_dates():
    df = pd.DataFrame({
        "datetime": pd.date_range("2024-01-01 09:30", periods=3, freq="D"),
        "o": [100.0, 101.0, 102.0],
        "c": [100.5, 101.5, 102.5],
        "vol": [1e6, 1e6, 1e6],
    }).set_index("datetime")
    bars = load_dataframe(df)
    assert [b.date for b in bars] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    assert bars[2].close == 102.5
    assert bars[0].open == 100.0
    assert bars[0].high == 100.5  # missing high falls back to close


def test_load_dataframe_requires_close():
    df = pd.DataFrame({"date": ["2024-01-01"], "open": [1.0]})
    with pytest.raises(DataLoadError, match="close"):
        load_dataframe(df)


def test_load_many_keys_by_file_stem(tmp_path):
    paths = []
    for name, close in (("AAA.csv", 10), ("BBB.csv", 20)):
        p = tmp_path / name
        p.write_text(f"2024-01-02,1,1,1,{close},1\n")
        paths.append(p)
    series = load_many(paths)
    assert list(series) == ["AAA", "BBB"]
    assert series["BBB"][0].close == 20.0
