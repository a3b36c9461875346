"""Trend fitting and forecasting for irregularly spaced time series."""

from .engine import (
    TREND_LABELS,
    TREND_TYPES,
    fit_trend,
    generate_prediction_points,
    to_fit_json,
    trend_label,
)
from .regression import REGRESSION_TYPES, fit_regression
from .results import FitResult, ModelFit
from .sinusoidal import sinusoidal_fit
from .smoothing import ema_fit, holts_linear_fit, sma_fit
from .transforms import DomainTransform
from .utils import FitStats, calc_fit_stats, interpolate, weighted_average_slope

__all__ = [
    # Orchestration
    "TREND_LABELS",
    "TREND_TYPES",
    "fit_trend",
    "generate_prediction_points",
    "to_fit_json",
    "trend_label",
    # Fitters
    "REGRESSION_TYPES",
    "ema_fit",
    "fit_regression",
    "holts_linear_fit",
    "sinusoidal_fit",
    "sma_fit",
    # Types and helpers
    "DomainTransform",
    "FitResult",
    "FitStats",
    "ModelFit",
    "calc_fit_stats",
    "interpolate",
    "weighted_average_slope",
]
