from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

_logger = logging.getLogger(__name__)


class _FamilyConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_unset(cls, data: Any) -> Any:
        # Explicit nulls fall back to the family defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class LinearConfig(_FamilyConfig):
    type: Literal["linear"] = "linear"


class PolynomialConfig(_FamilyConfig):
    type: Literal["polynomial"] = "polynomial"
    order: int = Field(default=2, ge=1, description="Polynomial degree")


class ExponentialConfig(_FamilyConfig):
    type: Literal["exponential"] = "exponential"


class LogarithmicConfig(_FamilyConfig):
    type: Literal["logarithmic"] = "logarithmic"


class PowerConfig(_FamilyConfig):
    type: Literal["power"] = "power"


class SinusoidalConfig(_FamilyConfig):
    type: Literal["sinusoidal"] = "sinusoidal"


class SmaConfig(_FamilyConfig):
    type: Literal["sma"] = "sma"
    # Clamped to [2, n] at fit time, so any finite value is accepted here
    window_size: float = Field(default=10, alias="windowSize", allow_inf_nan=False)


class EmaConfig(_FamilyConfig):
    type: Literal["ema"] = "ema"
    alpha: float = Field(default=0.3, ge=0.0, le=1.0, description="Smoothing factor")


class HoltsConfig(_FamilyConfig):
    type: Literal["holts"] = "holts"
    alpha: float = Field(default=0.3, ge=0.0, le=1.0, description="Level smoothing")
    beta: float = Field(default=0.1, ge=0.0, le=1.0, description="Trend smoothing")


FitConfig = Annotated[
    Union[
        LinearConfig,
        PolynomialConfig,
        ExponentialConfig,
        LogarithmicConfig,
        PowerConfig,
        SinusoidalConfig,
        SmaConfig,
        EmaConfig,
        HoltsConfig,
    ],
    Field(discriminator="type"),
]

_FIT_CONFIG_ADAPTER: TypeAdapter[FitConfig] = TypeAdapter(FitConfig)


def parse_fit_config(raw: Mapping[str, Any] | BaseModel | None) -> FitConfig | None:
    """Validate a raw configuration mapping into its family model.

    Returns ``None`` for a missing or unknown ``type`` or invalid option values.
    """
    if raw is None:
        return None
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    try:
        return _FIT_CONFIG_ADAPTER.validate_python(dict(raw))
    except (TypeError, ValueError) as exc:
        _logger.warning("parse_fit_config: rejected configuration %r: %s", raw, exc)
        return None
