from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .config import Settings
from .errors import TrendcastError
from .io_utils import load_series, write_output_json
from .logging_config import configure_logging
from .trend.engine import TREND_TYPES, fit_trend, generate_prediction_points, to_fit_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fit a trend or forecast model to a time series")
    p.add_argument("--input", required=True, help="Path to a CSV or JSON time series")
    p.add_argument("--column", help="CSV value column (default: first numeric column)")
    p.add_argument("--output", help="Write the fit as JSON to this path instead of stdout")

    # Model selection (override env)
    p.add_argument("--type", dest="trend_type", choices=list(TREND_TYPES), help="Trend family")
    p.add_argument("--order", type=int, help="Polynomial degree (default: 2)")
    p.add_argument("--alpha", type=float, help="EMA/Holt's level smoothing (default: 0.3)")
    p.add_argument("--beta", type=float, help="Holt's trend smoothing (default: 0.1)")
    p.add_argument("--window-size", type=float, help="SMA window (default: 10)")

    # Forecast sampling
    p.add_argument(
        "--horizon",
        dest="horizon_s",
        type=float,
        help="Forecast span beyond the last timestamp, in timestamp units (default: 0)",
    )
    p.add_argument("--num-points", type=int, help="Number of forecast samples (default: 200)")

    # Logging
    p.add_argument("--log-level", default=None, help="Logging level (e.g., INFO, DEBUG)")
    p.add_argument("--log-format", default=None, choices=["plain", "json"], help="Log format")
    p.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Enable DEBUG logs for the trendcast package",
    )
    p.add_argument(
        "--log-libraries",
        action="store_true",
        default=None,
        help="Allow third-party library logs at the configured level",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {k: v for k, v in vars(args).items() if v is not None}
    input_path = overrides.pop("input")
    column = overrides.pop("column", None)
    output_path = overrides.pop("output", None)

    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(
        level=settings.log_level,
        fmt=settings.log_format,
        verbose=bool(settings.verbose),
        log_libraries=bool(settings.log_libraries),
    )

    try:
        series = load_series(input_path, column=column)
    except TrendcastError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    result = fit_trend(series, settings.fit_config())
    if result is None:
        print(f"Error: no {settings.trend_type} fit available for {input_path}", file=sys.stderr)
        return 1

    forecast = generate_prediction_points(
        result.predict,
        series[0][0],
        series[-1][0],
        settings.horizon_s,
        settings.num_points,
    )
    payload = to_fit_json(settings.trend_type, result, forecast)
    logger.info(
        "Fitted %s: %s (r2=%.4f, rmse=%.4g)",
        settings.trend_type,
        result.equation,
        result.r2,
        result.rmse,
    )

    if output_path:
        try:
            print(write_output_json(output_path, payload))
        except TrendcastError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
