"""Trend fitting entry point.

``fit_trend`` selects a model family from the configuration, prepares the series
for it, dispatches to the matching fitter and returns a uniform ``FitResult``:

- Smoothing families (sma, ema, holts) consume the raw series directly.
- Curve families (linear, polynomial, exponential, logarithmic, power,
  sinusoidal) are fitted on a ``DomainTransform``-ed copy of the series, and the
  returned ``predict`` maps original timestamps through the same transform and
  undoes the y shift. Quality statistics are always scored on the original data.

Any failure inside a fitter is logged and reported as ``None``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel

from ..models.fit_config import (
    EmaConfig,
    FitConfig,
    HoltsConfig,
    PolynomialConfig,
    SinusoidalConfig,
    SmaConfig,
    parse_fit_config,
)
from .regression import DEFAULT_PRECISION, fit_regression
from .results import FitResult, ModelFit, Point
from .sinusoidal import sinusoidal_fit
from .smoothing import ema_fit, holts_linear_fit, sma_fit
from .transforms import DomainTransform
from .utils import score_predictions

_logger = logging.getLogger(__name__)

TREND_TYPES = (
    "linear",
    "polynomial",
    "exponential",
    "logarithmic",
    "power",
    "sinusoidal",
    "sma",
    "ema",
    "holts",
)

SMOOTHING_TYPES = frozenset({"sma", "ema", "holts"})

TREND_LABELS = {
    "sma": "Simple Moving Avg",
    "ema": "Exponential Moving Avg",
    "holts": "Holt's Linear",
}

DEFAULT_NUM_POINTS = 200

# Signature of the pluggable least-squares backend for the closed-form families
Regressor = Callable[..., ModelFit]


def trend_label(trend_type: str) -> str:
    """Return the display label for a trend family."""
    return TREND_LABELS.get(trend_type) or trend_type[:1].upper() + trend_type[1:]


def _scalar(value: Any) -> float:
    # Inner models may answer with a bare value or an (x, y) pair
    if isinstance(value, (tuple, list)):
        value = value[1]
    return float(value)


def _fit_smoothing(series: Sequence[Point], config: FitConfig) -> FitResult | None:
    if isinstance(config, SmaConfig):
        return sma_fit(series, config.window_size)
    if isinstance(config, EmaConfig):
        return ema_fit(series, config.alpha)
    if isinstance(config, HoltsConfig):
        return holts_linear_fit(series, config.alpha, config.beta)
    raise ValueError(f"Not a smoothing configuration: {config.type}")


def _fit_curve(
    series: Sequence[Point], config: FitConfig, regressor: Regressor
) -> FitResult | None:
    transform = DomainTransform.for_family(config.type, series)
    transformed = transform.apply(series)

    if isinstance(config, SinusoidalConfig):
        inner = sinusoidal_fit(transformed)
    elif isinstance(config, PolynomialConfig):
        inner = regressor(
            "polynomial", transformed, order=config.order, precision=DEFAULT_PRECISION
        )
    else:
        inner = regressor(config.type, transformed, precision=DEFAULT_PRECISION)

    if inner is None or inner.predict is None:
        _logger.warning("fit_trend: %s fitter returned no predictor", config.type)
        return None

    inner_predict = inner.predict

    def predict(x: float) -> float:
        with np.errstate(all="ignore"):
            try:
                raw = _scalar(inner_predict(transform.forward_x(x)))
            except (ArithmeticError, TypeError, ValueError):
                return math.nan
        return transform.inverse_y(raw)

    xs = [float(x) for x, _ in series]
    ys = [float(y) for _, y in series]
    stats = score_predictions(xs, ys, predict)

    _logger.debug(
        "fit_trend: %s t0=%s x_offset=%s y_shift=%s r2=%.4f rmse=%.4g",
        config.type,
        transform.t0,
        transform.x_offset,
        transform.y_shift,
        stats.r2,
        stats.rmse,
    )
    return FitResult(
        equation=inner.equation or "",
        r2=stats.r2,
        rmse=stats.rmse,
        predict=predict,
        t0=transform.t0,
        points=[(x, predict(x)) for x in xs],
    )


def fit_trend(
    series: Sequence[Sequence[float]] | None,
    config: Mapping[str, Any] | BaseModel | None,
    regressor: Regressor = fit_regression,
) -> FitResult | None:
    """Fit a trend model to a time series.

    Args:
        series: Sequence of ``(timestamp, value)`` pairs ordered by timestamp
        config: Fit configuration (mapping with a ``type`` key or a config model)
        regressor: Least-squares backend for the closed-form curve families

    Returns:
        FitResult, or None when the series has fewer than 2 points, the
        configuration is not recognized, or the fitter fails
    """
    if series is None or len(series) < 2:
        return None

    parsed = parse_fit_config(config)
    if parsed is None:
        return None

    try:
        points = [(float(x), float(y)) for x, y in series]
        if parsed.type in SMOOTHING_TYPES:
            return _fit_smoothing(points, parsed)
        return _fit_curve(points, parsed, regressor)
    except Exception as exc:
        _logger.warning("fit_trend: %s fit failed: %s", parsed.type, exc)
        return None


def generate_prediction_points(
    predict: Callable[[float], float],
    start_x: float,
    last_x: float,
    horizon: float,
    num_points: int = DEFAULT_NUM_POINTS,
) -> list[Point]:
    """Sample ``predict`` evenly over ``[start_x, last_x + horizon]``.

    Samples with a non-finite prediction are dropped, so fewer than
    ``num_points`` points may be returned.
    """
    if num_points <= 0:
        return []

    points: list[Point] = []
    for x in np.linspace(start_x, last_x + horizon, num_points):
        y = predict(float(x))
        if math.isfinite(y):
            points.append((float(x), float(y)))
    return points


def to_fit_json(
    trend_type: str,
    result: FitResult,
    forecast: Sequence[Point] | None = None,
) -> dict[str, Any]:
    """Serialize a FitResult (and optional forecast samples) to a JSON-compatible dict."""
    return {
        "type": trend_type,
        "label": trend_label(trend_type),
        "equation": result.equation,
        "r2": result.r2,
        "rmse": result.rmse,
        "t0": result.t0,
        "points": [{"x": x, "y": y} for x, y in result.points],
        "forecast": [{"x": x, "y": y} for x, y in (forecast or [])],
    }
