"""trendcast: trend fitting and forecasting for time series."""

from .trend import FitResult, fit_trend, generate_prediction_points

__all__ = ["FitResult", "fit_trend", "generate_prediction_points"]
