"""Smoothing-based forecasters: SMA, EMA and Holt's linear (double exponential) smoothing.

Each forecaster fits a smoothed curve over the raw series and returns a
``FitResult`` whose ``predict`` interpolates the curve inside the observed range
and extrapolates beyond the last timestamp:

- SMA / EMA continue linearly along a weighted average of the most recent slopes.
- Holt's linear model continues along its converged ``level + trend * dx``.

Timestamps are used as given (no normalization), so ``t0`` is always 0.0.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from itertools import accumulate
from typing import NamedTuple

import numpy as np
import pandas as pd

from .results import FitResult
from .utils import calc_fit_stats, interpolate, weighted_average_slope

_logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10
DEFAULT_ALPHA = 0.3
DEFAULT_BETA = 0.1


def _split(data: Sequence[Sequence[float]] | None) -> tuple[np.ndarray, np.ndarray] | None:
    if data is None or len(data) < 2:
        return None
    arr = np.asarray(data, dtype=float)
    return arr[:, 0], arr[:, 1]


def _slope_extrapolator(xs: np.ndarray, curve: np.ndarray):
    """Build a predictor that interpolates ``curve`` and extends it linearly."""
    slope = weighted_average_slope(xs, curve)
    last_x = float(xs[-1])
    last_val = float(curve[-1])

    def predict(x: float) -> float:
        if x <= last_x:
            return interpolate(xs, curve, x)
        return last_val + slope * (x - last_x)

    return predict, slope


def _result(equation: str, xs: np.ndarray, ys: np.ndarray, curve: np.ndarray, predict) -> FitResult:
    stats = calc_fit_stats(ys, curve)
    return FitResult(
        equation=equation,
        r2=stats.r2,
        rmse=stats.rmse,
        predict=predict,
        t0=0.0,
        points=[(float(x), float(v)) for x, v in zip(xs, curve)],
    )


def _effective_window(window_size: float | None, n: int) -> int:
    if window_size is None or not math.isfinite(window_size):
        window_size = DEFAULT_WINDOW_SIZE
    # Round half up, then clamp to [2, n]
    return max(2, min(math.floor(window_size + 0.5), n))


def sma_fit(
    data: Sequence[Sequence[float]] | None, window_size: float = DEFAULT_WINDOW_SIZE
) -> FitResult | None:
    """Simple moving average over a trailing window.

    The window is rounded and clamped to ``[2, n]``; the first ``w - 1`` points
    average over however many points are available.
    """
    split = _split(data)
    if split is None:
        return None
    xs, ys = split
    w = _effective_window(window_size, len(xs))

    sma = pd.Series(ys).rolling(window=w, min_periods=1).mean().to_numpy()
    predict, slope = _slope_extrapolator(xs, sma)

    _logger.debug("sma_fit: window=%d, n=%d, slope=%.6g", w, len(xs), slope)
    return _result(f"SMA(window={w})", xs, ys, sma, predict)


def ema_fit(
    data: Sequence[Sequence[float]] | None, alpha: float = DEFAULT_ALPHA
) -> FitResult | None:
    """Exponential moving average: ``ema[i] = alpha * y[i] + (1 - alpha) * ema[i-1]``."""
    split = _split(data)
    if split is None:
        return None
    xs, ys = split

    ema = np.fromiter(
        accumulate(ys, lambda prev, y: alpha * y + (1 - alpha) * prev),
        dtype=float,
        count=len(ys),
    )
    predict, slope = _slope_extrapolator(xs, ema)

    _logger.debug("ema_fit: alpha=%s, n=%d, slope=%.6g", alpha, len(xs), slope)
    return _result(f"EMA(α={alpha})", xs, ys, ema, predict)


class HoltState(NamedTuple):
    """Level/trend state of Holt's linear smoothing after one observation."""

    level: float
    trend: float


def holt_step(state: HoltState, dx: float, y: float, alpha: float, beta: float) -> HoltState:
    """Advance Holt's state by one observation ``y`` taken ``dx`` after the previous one."""
    level = alpha * y + (1 - alpha) * (state.level + state.trend * dx)
    step = dx or 1.0
    trend = beta * ((level - state.level) / step) + (1 - beta) * state.trend
    return HoltState(level=level, trend=trend)


def holts_linear_fit(
    data: Sequence[Sequence[float]] | None,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
) -> FitResult | None:
    """Holt's linear (double exponential) smoothing over irregular timestamps.

    The trend is expressed per unit of x, so uneven sampling intervals scale the
    level projection. A zero interval is treated as 1 wherever it divides.
    """
    split = _split(data)
    if split is None:
        return None
    xs, ys = split

    initial = HoltState(level=float(ys[0]), trend=float((ys[1] - ys[0]) / ((xs[1] - xs[0]) or 1.0)))
    states = list(
        accumulate(
            zip(np.diff(xs), ys[1:]),
            lambda state, obs: holt_step(state, float(obs[0]), float(obs[1]), alpha, beta),
            initial=initial,
        )
    )
    fitted = np.array([s.level for s in states], dtype=float)
    final = states[-1]
    last_x = float(xs[-1])

    def predict(x: float) -> float:
        if x <= last_x:
            return interpolate(xs, fitted, x)
        return final.level + final.trend * (x - last_x)

    _logger.debug(
        "holts_linear_fit: alpha=%s, beta=%s, level=%.6g, trend=%.6g",
        alpha,
        beta,
        final.level,
        final.trend,
    )
    return _result(f"Holt's(α={alpha}, β={beta})", xs, ys, fitted, predict)
