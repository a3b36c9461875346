"""Result containers returned by the trend fitters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

Point = tuple[float, float]


@dataclass
class ModelFit:
    """Raw output of an inner model fitter (regression or sinusoidal).

    Attributes:
        equation: Human-readable model description
        predict: Prediction callable; may return a bare value or an ``(x, y)`` pair
        points: Fitted values at the inputs the model was fitted on
        r2: Coefficient of determination on the fitted (possibly transformed) data
    """

    equation: str
    predict: Callable[[float], Any]
    points: list[Point] = field(default_factory=list)
    r2: float = 0.0


@dataclass
class FitResult:
    """Unified fit returned for every trend family.

    Attributes:
        equation: Human-readable model description with parameter values
        r2: Coefficient of determination against the original series
        rmse: Root mean squared error against the original series
        predict: Total prediction function over original-scale timestamps
        t0: Reference time subtracted internally (0.0 when timestamps were not normalized)
        points: Fitted value at each observed timestamp, in input order
    """

    equation: str
    r2: float
    rmse: float
    predict: Callable[[float], float]
    t0: float = 0.0
    points: list[Point] = field(default_factory=list)

    def fitted_values(self) -> list[float]:
        """Return just the fitted y values."""
        return [y for _, y in self.points]
