from __future__ import annotations

import logging

import numpy as np
import pytest


@pytest.fixture
def linear_series() -> list[tuple[float, float]]:
    """y = 3x + 5 sampled at x = 0..19."""
    return [(float(i), 3.0 * i + 5.0) for i in range(20)]


@pytest.fixture
def epoch_series() -> list[tuple[float, float]]:
    """Linear series on large epoch-second timestamps, one sample per minute."""
    t0 = 1_700_000_000.0
    return [(t0 + 60.0 * i, 0.05 * 60.0 * i + 10.0) for i in range(50)]


@pytest.fixture
def sine_series() -> list[tuple[float, float]]:
    """y = 3 sin(1.5x + 0.5) + 7 sampled every 0.1 over 200 points."""
    xs = np.arange(200) * 0.1
    ys = 3 * np.sin(1.5 * xs + 0.5) + 7
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


@pytest.fixture(autouse=True)
def _reset_trendcast_logging():
    """Drop handlers installed by configure_logging so they do not outlive captured streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_tc_handler", False):
            root.removeHandler(handler)
