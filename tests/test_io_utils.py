from __future__ import annotations

import json
from pathlib import Path

import pytest

from trendcast.errors import InputOutputError
from trendcast.io_utils import load_series, write_output_json


def test_load_csv_numeric_timestamps(tmp_path: Path):
    path = tmp_path / "series.csv"
    path.write_text("TIME,TARGET,VALUE\n3,sat-a,30\n1,sat-a,10\n2,sat-a,20\n", encoding="utf-8")
    # Rows come back sorted by timestamp; the string column is skipped
    assert load_series(path) == [(1.0, 10.0), (2.0, 20.0), (3.0, 30.0)]


def test_load_csv_date_timestamps(tmp_path: Path):
    path = tmp_path / "series.csv"
    path.write_text(
        "time,value\n2024-01-01T00:00:00Z,1\n2024-01-01T00:01:00Z,2\n2024-01-01T00:03:00Z,4\n",
        encoding="utf-8",
    )
    points = load_series(path)
    assert [y for _, y in points] == [1.0, 2.0, 4.0]
    assert points[0][0] == pytest.approx(1704067200.0)
    assert points[2][0] - points[0][0] == pytest.approx(180.0)


def test_load_csv_selected_column_and_bad_rows(tmp_path: Path):
    path = tmp_path / "series.csv"
    path.write_text("t,a,b\n0,1,5\n1,x,6\n2,3,7\n", encoding="utf-8")
    assert load_series(path, column="b") == [(0.0, 5.0), (1.0, 6.0), (2.0, 7.0)]
    assert load_series(path, column="a") == [(0.0, 1.0), (2.0, 3.0)]
    with pytest.raises(InputOutputError, match="not found"):
        load_series(path, column="c")


def test_load_json_pairs(tmp_path: Path):
    path = tmp_path / "series.json"
    path.write_text(json.dumps([[2, 4.5], [1, 3.5]]), encoding="utf-8")
    assert load_series(path) == [(1.0, 3.5), (2.0, 4.5)]


def test_load_errors(tmp_path: Path):
    with pytest.raises(InputOutputError, match="does not exist"):
        load_series(tmp_path / "missing.csv")

    short = tmp_path / "short.csv"
    short.write_text("t,v\n1,2\n", encoding="utf-8")
    with pytest.raises(InputOutputError, match="at least 2 valid"):
        load_series(short)

    no_numeric = tmp_path / "labels.csv"
    no_numeric.write_text("t,label\n1,a\n2,b\n", encoding="utf-8")
    with pytest.raises(InputOutputError, match="No numeric data columns"):
        load_series(no_numeric)


def test_write_output_json(tmp_path: Path):
    target = tmp_path / "nested" / "fit.json"
    written = write_output_json(target, {"r2": 1.0})
    assert Path(written) == target
    assert json.loads(target.read_text(encoding="utf-8")) == {"r2": 1.0}
