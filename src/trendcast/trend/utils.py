"""Numeric helpers shared by the trend fitters.

Interpolation over fitted curves, recent-slope extrapolation and goodness-of-fit
statistics. All functions are pure and never mutate their inputs.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import NamedTuple

import numpy as np

# Share of the fitted curve (most recent end) used to estimate the forecast slope
_RECENT_SLOPE_FRACTION = 0.2


class FitStats(NamedTuple):
    """Goodness-of-fit statistics."""

    r2: float
    rmse: float


def interpolate(xs: Sequence[float], vals: Sequence[float], x: float) -> float:
    """Linearly interpolate ``vals`` at ``x`` over sorted positions ``xs``.

    Values outside ``[xs[0], xs[-1]]`` are clamped to the first/last value.
    """
    n = len(xs)
    if x <= xs[0]:
        return float(vals[0])
    if x >= xs[n - 1]:
        return float(vals[n - 1])

    # Largest index whose position is <= x; x is strictly inside so hi stays in range
    lo = int(np.searchsorted(xs, x, side="right")) - 1
    hi = lo + 1

    dx = xs[hi] - xs[lo]
    if dx == 0:
        return float(vals[lo])
    t = (x - xs[lo]) / dx
    return float(vals[lo] + t * (vals[hi] - vals[lo]))


def weighted_average_slope(xs: Sequence[float], vals: Sequence[float]) -> float:
    """Weighted mean slope over the most recent part of a curve.

    Looks at the last ``max(2, ceil(0.2 * n))`` points. Each adjacent pair with a
    non-zero step contributes its slope weighted by its 1-based position in the
    window, so later segments count more. Returns 0.0 when no pair qualifies.
    """
    n = len(xs)
    if n < 2:
        return 0.0

    window = min(n, max(2, math.ceil(_RECENT_SLOPE_FRACTION * n)))
    start = n - window

    weighted_sum = 0.0
    weight_total = 0.0
    for i in range(start + 1, n):
        dx = xs[i] - xs[i - 1]
        if dx == 0:
            continue
        weight = i - start
        weighted_sum += weight * (vals[i] - vals[i - 1]) / dx
        weight_total += weight

    return weighted_sum / weight_total if weight_total > 0 else 0.0


def calc_fit_stats(ys: Sequence[float], fitted: Sequence[float]) -> FitStats:
    """Compute R² and RMSE of ``fitted`` against observations ``ys``.

    R² is 0.0 for a constant series (zero total variance).
    """
    y = np.asarray(ys, dtype=float)
    f = np.asarray(fitted, dtype=float)
    n = len(y)
    if n == 0:
        return FitStats(r2=0.0, rmse=0.0)

    ss_tot = float(np.sum((y - y.mean()) ** 2))
    ss_res = float(np.sum((y - f) ** 2))
    r2 = 0.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot
    return FitStats(r2=r2, rmse=math.sqrt(ss_res / n))


def score_predictions(
    xs: Sequence[float], ys: Sequence[float], predict: Callable[[float], float]
) -> FitStats:
    """Score a prediction function against observed points.

    Non-finite predictions are skipped: they add nothing to the residual sum and
    are excluded from the RMSE average (RMSE is 0.0 when nothing is finite).
    """
    y = np.asarray(ys, dtype=float)
    if len(y) == 0:
        return FitStats(r2=0.0, rmse=0.0)

    predicted = np.array([predict(x) for x in xs], dtype=float)
    finite = np.isfinite(predicted)

    ss_tot = float(np.sum((y - y.mean()) ** 2))
    ss_res = float(np.sum((y[finite] - predicted[finite]) ** 2))
    count = int(finite.sum())

    r2 = 0.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot
    rmse = math.sqrt(ss_res / count) if count > 0 else 0.0
    return FitStats(r2=r2, rmse=rmse)
