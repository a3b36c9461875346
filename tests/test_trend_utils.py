"""Tests for shared numeric helpers (interpolation, slopes, fit statistics)."""

from __future__ import annotations

import math

import numpy as np
import pytest

from trendcast.trend.utils import (
    FitStats,
    calc_fit_stats,
    interpolate,
    score_predictions,
    weighted_average_slope,
)


class TestInterpolate:
    """Tests for interpolate."""

    xs = [0.0, 1.0, 2.0, 4.0]
    vals = [0.0, 10.0, 20.0, 40.0]

    def test_clamps_below_and_above_domain(self):
        """Values outside the observed range clamp to the end values."""
        assert interpolate(self.xs, self.vals, -5.0) == 0.0
        assert interpolate(self.xs, self.vals, 100.0) == 40.0

    def test_exact_at_stored_positions(self):
        """Interpolating at a stored x returns the stored value."""
        for x, v in zip(self.xs, self.vals):
            assert interpolate(self.xs, self.vals, x) == v

    def test_linear_between_points(self):
        """Midpoints are linearly interpolated, including uneven spacing."""
        assert interpolate(self.xs, self.vals, 0.5) == pytest.approx(5.0)
        assert interpolate(self.xs, self.vals, 3.0) == pytest.approx(30.0)

    def test_duplicate_positions_return_stored_value(self):
        """Duplicate x positions resolve to one of the stored values, not a blend."""
        xs = [0.0, 1.0, 1.0, 2.0]
        vals = [0.0, 5.0, 7.0, 9.0]
        assert interpolate(xs, vals, 1.0) == 7.0

    def test_accepts_numpy_arrays(self):
        """Works with numpy arrays as well as lists."""
        xs = np.linspace(0, 10, 11)
        vals = xs * 2
        assert interpolate(xs, vals, 2.5) == pytest.approx(5.0)


class TestWeightedAverageSlope:
    """Tests for weighted_average_slope."""

    def test_constant_slope(self):
        """A straight line yields its slope."""
        xs = list(range(10))
        vals = [2.0 * x + 1 for x in xs]
        assert weighted_average_slope(xs, vals) == pytest.approx(2.0)

    def test_recent_segments_weigh_more(self):
        """Slopes in the recent window are weighted 1, 2, 3 toward the end."""
        xs = list(range(20))
        vals = [0.0] * 20
        # Window is the last ceil(0.2 * 20) = 4 points: segments with slopes 1, 2, 3
        vals[17], vals[18], vals[19] = 1.0, 3.0, 6.0
        expected = (1 * 1 + 2 * 2 + 3 * 3) / (1 + 2 + 3)
        assert weighted_average_slope(xs, vals) == pytest.approx(expected)

    def test_older_segments_ignored(self):
        """Segments before the recent window do not contribute."""
        xs = list(range(10))
        vals = [100.0 * x for x in range(8)] + [700.0, 700.0]
        assert weighted_average_slope(xs, vals) == 0.0

    def test_zero_step_pairs_skipped(self):
        """Pairs with zero x step are ignored; none valid returns 0."""
        assert weighted_average_slope([1.0, 1.0], [0.0, 5.0]) == 0.0

    def test_short_input(self):
        """Fewer than 2 points returns 0."""
        assert weighted_average_slope([], []) == 0.0
        assert weighted_average_slope([1.0], [3.0]) == 0.0


class TestCalcFitStats:
    """Tests for calc_fit_stats."""

    def test_perfect_fit(self):
        """Identical observed and fitted values give r2=1 and rmse=0."""
        ys = [1.0, 4.0, 2.0, 8.0, 5.0]
        stats = calc_fit_stats(ys, ys)
        assert isinstance(stats, FitStats)
        assert stats.r2 == pytest.approx(1.0)
        assert stats.rmse == pytest.approx(0.0)

    def test_flat_series_r2_zero(self):
        """Constant observations give r2=0 regardless of the fitted values."""
        stats = calc_fit_stats([3.0, 3.0, 3.0], [1.0, 9.0, -4.0])
        assert stats.r2 == 0.0
        assert stats.rmse > 0

    def test_rmse_value(self):
        """RMSE is the root of the mean squared residual."""
        stats = calc_fit_stats([1.0, 2.0, 3.0], [1.0, 2.0, 4.0])
        assert stats.rmse == pytest.approx(math.sqrt(1 / 3))
        assert stats.r2 == pytest.approx(0.5)


class TestScorePredictions:
    """Tests for score_predictions."""

    def test_scores_callable(self):
        """Scores a prediction function against observed points."""
        xs = [0.0, 1.0, 2.0]
        ys = [1.0, 3.0, 5.0]
        stats = score_predictions(xs, ys, lambda x: 2 * x + 1)
        assert stats.r2 == pytest.approx(1.0)
        assert stats.rmse == pytest.approx(0.0)

    def test_skips_non_finite_predictions(self):
        """Non-finite predictions are excluded from the residuals and RMSE count."""
        xs = [0.0, 1.0, 2.0]
        ys = [1.0, 3.0, 5.0]
        stats = score_predictions(xs, ys, lambda x: math.nan if x == 0 else 2 * x + 2)
        assert stats.rmse == pytest.approx(1.0)

    def test_nothing_finite(self):
        """When nothing is finite, RMSE is 0."""
        stats = score_predictions([0.0, 1.0], [1.0, 2.0], lambda x: math.inf)
        assert stats.rmse == 0.0
