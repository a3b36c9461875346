from .fit_config import (
    EmaConfig,
    ExponentialConfig,
    FitConfig,
    HoltsConfig,
    LinearConfig,
    LogarithmicConfig,
    PolynomialConfig,
    PowerConfig,
    SinusoidalConfig,
    SmaConfig,
    parse_fit_config,
)

__all__ = [
    "EmaConfig",
    "ExponentialConfig",
    "FitConfig",
    "HoltsConfig",
    "LinearConfig",
    "LogarithmicConfig",
    "PolynomialConfig",
    "PowerConfig",
    "SinusoidalConfig",
    "SmaConfig",
    "parse_fit_config",
]
