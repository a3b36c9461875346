from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import pandas as pd

from .errors import InputOutputError

logger = logging.getLogger(__name__)

_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


def _timestamps_to_seconds(column: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(column, errors="coerce")
    if numeric.notna().any():
        return numeric
    parsed = pd.to_datetime(column, errors="coerce", utc=True, format="mixed")
    return (parsed - _EPOCH) / pd.Timedelta(seconds=1)


def _frame_to_points(frame: pd.DataFrame) -> list[tuple[float, float]]:
    frame = frame.dropna().sort_values("x", kind="stable")
    return [(float(x), float(y)) for x, y in zip(frame["x"], frame["y"])]


def load_series(path: str | Path, column: str | None = None) -> list[tuple[float, float]]:
    """Load a ``(timestamp, value)`` series from a JSON or CSV file.

    JSON files hold a list of ``[x, y]`` pairs. CSV files use the first column as
    the timestamp (numeric, or a date string converted to epoch seconds) and
    ``column`` (default: first numeric column after the timestamp) as the value.
    Rows with unparseable cells are dropped and the result is sorted by timestamp.
    """
    source = Path(path)
    if not source.is_file():
        raise InputOutputError(f"Input file does not exist: {source}")

    try:
        if source.suffix.lower() == ".json":
            with source.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
            frame = pd.DataFrame(
                {
                    "x": pd.to_numeric(pd.Series([row[0] for row in raw]), errors="coerce"),
                    "y": pd.to_numeric(pd.Series([row[1] for row in raw]), errors="coerce"),
                }
            )
        else:
            table = pd.read_csv(source, skipinitialspace=True)
            if table.shape[1] < 2:
                raise InputOutputError(
                    "CSV must have at least 2 columns (timestamp + one data column)."
                )
            value_col = column or _first_numeric_column(table)
            if value_col not in table.columns:
                raise InputOutputError(f"Column '{value_col}' not found in {source.name}")
            frame = pd.DataFrame(
                {
                    "x": _timestamps_to_seconds(table.iloc[:, 0]),
                    "y": pd.to_numeric(table[value_col], errors="coerce"),
                }
            )
    except (OSError, ValueError, TypeError, IndexError) as exc:
        raise InputOutputError(f"Failed reading series from {source}: {exc}") from exc

    points = _frame_to_points(frame)
    if len(points) < 2:
        raise InputOutputError(
            f"Could not parse at least 2 valid numeric data rows from {source.name}"
        )
    logger.debug("Loaded %d points from %s", len(points), source)
    return points


def _first_numeric_column(table: pd.DataFrame) -> str:
    for name in table.columns[1:]:
        if pd.to_numeric(table[name], errors="coerce").notna().any():
            return str(name)
    raise InputOutputError("No numeric data columns found besides the timestamp.")


def write_output_json(path: str | Path, payload: dict[str, Any]) -> str:
    target = Path(path)
    os.makedirs(target.parent, exist_ok=True)
    try:
        target.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as exc:
        msg = f"Failed writing output file {target}: {exc}"
        raise InputOutputError(msg) from exc
    logger.info("Wrote output: %s", target)
    return str(target)
