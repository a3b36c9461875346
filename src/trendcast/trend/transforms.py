"""Invertible domain transforms applied around curve fitting.

Curve families are fitted on timestamps shifted to start at zero. Logarithmic
and power models additionally need x > 0, and exponential and power models need
y > 0. ``DomainTransform`` records the offsets so the prediction path can undo
them in one place.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Families fitted in log-x space (require x > 0)
X_OFFSET_FAMILIES = frozenset({"logarithmic", "power"})
# Families fitted in log-y space (require y > 0)
Y_SHIFT_FAMILIES = frozenset({"exponential", "power"})


@dataclass(frozen=True)
class DomainTransform:
    """Forward/inverse mapping between original and model coordinates.

    Attributes:
        t0: First observed timestamp, subtracted from every x
        x_offset: Added to normalized x so the domain starts at 1
        y_shift: Added to every y so the range stays positive
    """

    t0: float = 0.0
    x_offset: float = 0.0
    y_shift: float = 0.0

    @classmethod
    def for_family(cls, family: str, points: Sequence[Sequence[float]]) -> DomainTransform:
        """Derive the transform a family needs for ``points``."""
        t0 = float(points[0][0])
        x_offset = 1.0 if family in X_OFFSET_FAMILIES else 0.0
        y_shift = 0.0
        if family in Y_SHIFT_FAMILIES:
            min_y = min(float(y) for _, y in points)
            if min_y <= 0:
                y_shift = abs(min_y) + 1.0
        return cls(t0=t0, x_offset=x_offset, y_shift=y_shift)

    def forward_x(self, x: float) -> float:
        return x - self.t0 + self.x_offset

    def forward_y(self, y: float) -> float:
        return y + self.y_shift

    def inverse_y(self, y: float) -> float:
        return y - self.y_shift

    def apply(self, points: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
        """Map original points into model coordinates."""
        return [(self.forward_x(float(x)), self.forward_y(float(y))) for x, y in points]
