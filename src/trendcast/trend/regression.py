"""Least-squares regression for the closed-form curve families.

Fits linear, polynomial, exponential, logarithmic and power models with
``numpy.polyfit``, linearizing the non-polynomial families first:

    exponential  y = a e^(bx)   ->  ln y = ln a + b x     (weighted by y)
    logarithmic  y = a + b ln x ->  y    = a + b ln x
    power        y = a x^b      ->  ln y = ln a + b ln x

Callers must supply x > 0 for logarithmic/power and y > 0 for
exponential/power; violations raise ``FitError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from ..errors import FitError
from .results import ModelFit
from .utils import score_predictions

_logger = logging.getLogger(__name__)

REGRESSION_TYPES = ("linear", "polynomial", "exponential", "logarithmic", "power")

DEFAULT_PRECISION = 10


def _fmt(value: float, precision: int) -> str:
    return f"{round(float(value), precision):.{precision}g}"


def _paired(fn: Callable[[float], float]) -> Callable[[float], tuple[float, float]]:
    def predict(x: float) -> tuple[float, float]:
        with np.errstate(all="ignore"):
            return (x, float(fn(x)))

    return predict


def _fit_linear(x: np.ndarray, y: np.ndarray, precision: int):
    gradient, intercept = np.polyfit(x, y, 1)
    equation = f"y = {_fmt(gradient, precision)}x + {_fmt(intercept, precision)}"
    return (lambda v: gradient * v + intercept), equation


def _fit_polynomial(x: np.ndarray, y: np.ndarray, precision: int, order: int):
    coeffs = np.polyfit(x, y, order)
    terms = []
    for power, coef in zip(range(order, -1, -1), coeffs):
        if power > 1:
            terms.append(f"{_fmt(coef, precision)}x^{power}")
        elif power == 1:
            terms.append(f"{_fmt(coef, precision)}x")
        else:
            terms.append(_fmt(coef, precision))
    equation = "y = " + " + ".join(terms)
    return (lambda v: np.polyval(coeffs, v)), equation


def _fit_exponential(x: np.ndarray, y: np.ndarray, precision: int):
    if np.any(y <= 0):
        raise FitError("exponential regression requires y > 0")
    # Weight residuals by y so large values are not under-fitted after the log
    b, ln_a = np.polyfit(x, np.log(y), 1, w=np.sqrt(y))
    a = np.exp(ln_a)
    equation = f"y = {_fmt(a, precision)}e^({_fmt(b, precision)}x)"
    return (lambda v: a * np.exp(b * v)), equation


def _fit_logarithmic(x: np.ndarray, y: np.ndarray, precision: int):
    if np.any(x <= 0):
        raise FitError("logarithmic regression requires x > 0")
    b, a = np.polyfit(np.log(x), y, 1)
    equation = f"y = {_fmt(a, precision)} + {_fmt(b, precision)} ln(x)"
    return (lambda v: a + b * np.log(v)), equation


def _fit_power(x: np.ndarray, y: np.ndarray, precision: int):
    if np.any(x <= 0) or np.any(y <= 0):
        raise FitError("power regression requires x > 0 and y > 0")
    b, ln_a = np.polyfit(np.log(x), np.log(y), 1)
    a = np.exp(ln_a)
    equation = f"y = {_fmt(a, precision)}x^{_fmt(b, precision)}"
    return (lambda v: a * np.power(v, b)), equation


def fit_regression(
    kind: str,
    points: Sequence[Sequence[float]],
    order: int | None = None,
    precision: int = DEFAULT_PRECISION,
) -> ModelFit:
    """Fit a regression model of family ``kind`` to ``points``.

    Args:
        kind: One of ``REGRESSION_TYPES``
        points: Sequence of ``(x, y)`` pairs
        order: Polynomial degree (polynomial only, default 2)
        precision: Decimal places used for coefficients in the equation string

    Returns:
        ModelFit whose ``predict`` returns ``(x, y)`` pairs

    Raises:
        FitError: For unknown families, too few points or invalid domains
    """
    if kind not in REGRESSION_TYPES:
        raise FitError(f"Unknown regression type '{kind}'. Supported: {REGRESSION_TYPES}")

    arr = np.asarray(points, dtype=float)
    if arr.ndim != 2 or arr.shape[0] < 2:
        raise FitError(f"{kind} regression requires at least 2 points")
    x, y = arr[:, 0], arr[:, 1]

    try:
        if kind == "linear":
            fn, equation = _fit_linear(x, y, precision)
        elif kind == "polynomial":
            fn, equation = _fit_polynomial(x, y, precision, order or 2)
        elif kind == "exponential":
            fn, equation = _fit_exponential(x, y, precision)
        elif kind == "logarithmic":
            fn, equation = _fit_logarithmic(x, y, precision)
        else:
            fn, equation = _fit_power(x, y, precision)
    except (np.linalg.LinAlgError, ValueError) as exc:
        raise FitError(f"{kind} regression failed: {exc}") from exc

    predict = _paired(fn)
    fitted = [predict(v)[1] for v in x]
    r2 = score_predictions(x, y, lambda v: predict(v)[1]).r2

    _logger.debug("fit_regression: %s -> %s (r2=%.4f)", kind, equation, r2)
    return ModelFit(
        equation=equation,
        predict=predict,
        points=[(float(v), float(f)) for v, f in zip(x, fitted)],
        r2=r2,
    )
