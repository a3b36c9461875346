class TrendcastError(Exception):
    """Base exception for trendcast."""


class ConfigurationError(TrendcastError):
    """Raised when configuration is invalid or incomplete."""


class InputOutputError(TrendcastError):
    """Raised for input/output related failures."""


class FitError(TrendcastError):
    """Raised when a model cannot be fitted to the supplied points."""
