"""Sinusoidal curve fitting: y = A * sin(B * x + C) + D.

The fit proceeds in stages:

1. D and A start from the mean and half the peak-to-peak range.
2. B (angular frequency) comes from the first dominant autocorrelation peak of
   the mean-centered series, falling back to zero-crossing counting.
3. C (phase) is found by a coarse grid search over [0, 2π) followed by a fine
   search around the best coarse phase.
4. With B and C fixed the model is linear in A and D, which are refined by
   ordinary least squares.

The fitter never returns ``None``: short or flat series yield a degraded model
with R² = 0.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from .results import ModelFit
from .utils import calc_fit_stats

_logger = logging.getLogger(__name__)

MIN_POINTS = 4

# Coarse phase grid: 72 steps of 5 degrees
_PHASE_STEPS = 72
# Fine phase search: ±5 sub-steps of 1/10 coarse step
_FINE_SUBSTEPS = 5
_FINE_DIVISOR = 10
# Lags at or below this are too short to count as a period
_MIN_PEAK_LAG = 2
_SINGULAR_DET = 1e-12


def sinusoidal_fit(data: Sequence[Sequence[float]] | None) -> ModelFit:
    """Fit ``y = A sin(Bx + C) + D`` to ``data``.

    ``predict`` on the returned fit produces ``(x, y)`` pairs.
    """
    if data is None or len(data) < MIN_POINTS:
        return ModelFit(
            equation="Insufficient data for sinusoidal fit",
            predict=lambda x: (x, 0.0),
            points=[(float(x), float(y)) for x, y in (data or [])],
            r2=0.0,
        )

    arr = np.asarray(data, dtype=float)
    xs, ys = arr[:, 0], arr[:, 1]

    offset = float(ys.mean())
    amplitude = float(ys.max() - ys.min()) / 2

    if amplitude == 0:
        _logger.debug("sinusoidal_fit: flat series, using constant model y=%.4f", offset)
        return ModelFit(
            equation=f"y = {offset:.4f}",
            predict=lambda x: (x, offset),
            points=[(float(x), offset) for x in xs],
            r2=0.0,
        )

    freq = estimate_frequency(xs, ys, offset)
    phase = estimate_phase(xs, ys, amplitude, freq, offset)
    amplitude, offset = refine_amplitude_offset(xs, ys, freq, phase)

    fitted = amplitude * np.sin(freq * xs + phase) + offset
    r2 = calc_fit_stats(ys, fitted).r2

    def predict(x: float) -> tuple[float, float]:
        return (x, amplitude * math.sin(freq * x + phase) + offset)

    _logger.debug(
        "sinusoidal_fit: A=%.4f, B=%.4f, C=%.4f, D=%.4f, r2=%.4f",
        amplitude,
        freq,
        phase,
        offset,
        r2,
    )
    return ModelFit(
        equation=(
            f"y = {amplitude:.4f} * sin({freq:.4f} * x + {phase:.4f}) + {offset:.4f}"
        ),
        predict=predict,
        points=[(float(x), float(v)) for x, v in zip(xs, fitted)],
        r2=r2,
    )


def estimate_frequency(xs: np.ndarray, ys: np.ndarray, mean: float) -> float:
    """Estimate angular frequency B from the autocorrelation of the centered series.

    Picks the first lag beyond 2 that is a local rise and the largest such value
    seen so far. Without a positive peak, the period is estimated from zero
    crossings; without crossings, one full cycle is assumed over the data span.
    """
    n = len(ys)
    centered = ys - mean
    span = float(xs[-1] - xs[0])
    dt = span / (n - 1)

    max_lag = n // 2
    autocorr = np.zeros(max(max_lag, 1))
    autocorr[0] = float(np.dot(centered, centered))

    best_lag = 1
    best_val = -math.inf
    for lag in range(1, max_lag):
        value = float(np.dot(centered[:-lag], centered[lag:]))
        autocorr[lag] = value
        if lag > _MIN_PEAK_LAG and value > best_val and autocorr[lag - 1] <= value:
            best_val = value
            best_lag = lag

    if best_val <= 0 or best_lag <= _MIN_PEAK_LAG:
        crossings = int(np.sum(centered[:-1] * centered[1:] < 0))
        if crossings > 0:
            period = 2 * span / crossings
            _logger.debug("estimate_frequency: zero-crossing fallback (%d crossings)", crossings)
            return 2 * math.pi / period
        _logger.debug("estimate_frequency: no crossings, assuming one cycle over the span")
        return 2 * math.pi / span

    return 2 * math.pi / (best_lag * dt)


def _phase_sse(
    xs: np.ndarray, ys: np.ndarray, amplitude: float, freq: float, offset: float, phases: np.ndarray
) -> np.ndarray:
    predicted = amplitude * np.sin(freq * xs[np.newaxis, :] + phases[:, np.newaxis]) + offset
    return np.sum((ys[np.newaxis, :] - predicted) ** 2, axis=1)


def estimate_phase(
    xs: np.ndarray, ys: np.ndarray, amplitude: float, freq: float, offset: float
) -> float:
    """Grid-search the phase C minimizing squared error, then refine locally."""
    coarse = np.arange(_PHASE_STEPS) / _PHASE_STEPS * 2 * math.pi
    coarse_sse = _phase_sse(xs, ys, amplitude, freq, offset, coarse)
    best_idx = int(np.argmin(coarse_sse))
    best_phase = float(coarse[best_idx])
    best_sse = float(coarse_sse[best_idx])

    fine_step = 2 * math.pi / _PHASE_STEPS / _FINE_DIVISOR
    fine = best_phase + np.arange(-_FINE_SUBSTEPS, _FINE_SUBSTEPS + 1) * fine_step
    fine_sse = _phase_sse(xs, ys, amplitude, freq, offset, fine)
    fine_idx = int(np.argmin(fine_sse))
    if fine_sse[fine_idx] < best_sse:
        best_phase = float(fine[fine_idx])

    return best_phase


def refine_amplitude_offset(
    xs: np.ndarray, ys: np.ndarray, freq: float, phase: float
) -> tuple[float, float]:
    """Least-squares A and D for fixed B and C.

    Solves the normal equations ``[ΣS², ΣS; ΣS, n] [A; D] = [ΣSy; Σy]`` with
    ``S = sin(Bx + C)``. Falls back to the range/mean heuristic when singular.
    """
    n = len(xs)
    s = np.sin(freq * xs + phase)
    sum_s = float(s.sum())
    sum_y = float(ys.sum())
    sum_ss = float(np.dot(s, s))
    sum_sy = float(np.dot(s, ys))

    det = sum_ss * n - sum_s * sum_s
    if abs(det) < _SINGULAR_DET:
        _logger.debug("refine_amplitude_offset: near-singular system (det=%.3g)", det)
        return float(ys.max() - ys.min()) / 2, sum_y / n

    amplitude = (sum_sy * n - sum_s * sum_y) / det
    offset = (sum_ss * sum_y - sum_s * sum_sy) / det
    return amplitude, offset
