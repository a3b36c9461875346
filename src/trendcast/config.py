from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .trend.engine import TREND_TYPES


class Settings(BaseSettings):
    """Application settings loaded from environment with sensible defaults.

    CLI-provided overrides should be passed as keyword args to `Settings` which will
    supersede environment/.env values.
    """

    # Model selection and per-family options
    trend_type: str = Field(default="linear", alias="TREND_TYPE")
    order: int = Field(default=2, alias="TREND_ORDER")
    alpha: float = Field(default=0.3, alias="TREND_ALPHA")
    beta: float = Field(default=0.1, alias="TREND_BETA")
    window_size: float = Field(default=10, alias="TREND_WINDOW_SIZE")

    # Forecast sampling
    horizon_s: float = Field(default=0.0, alias="TREND_HORIZON_S")
    num_points: int = Field(default=200, alias="TREND_NUM_POINTS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="plain", alias="LOG_FORMAT")
    verbose: bool = Field(default=False, alias="VERBOSE")
    log_libraries: bool = Field(default=False, alias="LOG_LIBRARIES")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("trend_type")
    @classmethod
    def _validate_trend_type(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in TREND_TYPES:
            raise ValueError(f"TREND_TYPE must be one of {', '.join(TREND_TYPES)}")
        return value

    @field_validator("alpha", "beta")
    @classmethod
    def _validate_smoothing(cls, value: float) -> float:
        if not 0.0 <= float(value) <= 1.0:
            raise ValueError("Smoothing factors must be between 0 and 1")
        return float(value)

    @field_validator("order")
    @classmethod
    def _validate_order(cls, value: int) -> int:
        if int(value) < 1:
            raise ValueError("TREND_ORDER must be at least 1")
        return int(value)

    @field_validator("num_points")
    @classmethod
    def _validate_num_points(cls, value: int) -> int:
        if int(value) < 2:
            raise ValueError("TREND_NUM_POINTS must be at least 2")
        return int(value)

    def fit_config(self) -> dict[str, Any]:
        """Build the fit configuration mapping for the selected trend type."""
        config: dict[str, Any] = {"type": self.trend_type}
        if self.trend_type == "polynomial":
            config["order"] = self.order
        elif self.trend_type == "sma":
            config["windowSize"] = self.window_size
        elif self.trend_type == "ema":
            config["alpha"] = self.alpha
        elif self.trend_type == "holts":
            config["alpha"] = self.alpha
            config["beta"] = self.beta
        return config
