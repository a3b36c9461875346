"""Tests for the per-family fit configuration models."""

from __future__ import annotations

import pytest

from trendcast.models import (
    EmaConfig,
    HoltsConfig,
    LinearConfig,
    PolynomialConfig,
    SinusoidalConfig,
    SmaConfig,
    parse_fit_config,
)


class TestParseFitConfig:
    """Tests for parse_fit_config."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"type": "linear"}, LinearConfig),
            ({"type": "polynomial"}, PolynomialConfig),
            ({"type": "sinusoidal"}, SinusoidalConfig),
            ({"type": "sma"}, SmaConfig),
            ({"type": "ema"}, EmaConfig),
            ({"type": "holts"}, HoltsConfig),
        ],
    )
    def test_dispatches_on_type(self, raw, expected):
        """The type tag selects the family model."""
        assert isinstance(parse_fit_config(raw), expected)

    def test_defaults(self):
        """Families carry their documented defaults."""
        assert parse_fit_config({"type": "polynomial"}).order == 2
        assert parse_fit_config({"type": "sma"}).window_size == 10
        assert parse_fit_config({"type": "ema"}).alpha == 0.3
        holts = parse_fit_config({"type": "holts"})
        assert (holts.alpha, holts.beta) == (0.3, 0.1)

    def test_window_size_alias(self):
        """SMA accepts both windowSize and window_size."""
        assert parse_fit_config({"type": "sma", "windowSize": 4}).window_size == 4
        assert parse_fit_config({"type": "sma", "window_size": 5}).window_size == 5

    def test_options_of_other_families_ignored(self):
        """Options that do not belong to the family are ignored."""
        config = parse_fit_config({"type": "linear", "order": 4, "alpha": 0.9})
        assert config == LinearConfig()

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            {"type": "bogus"},
            {"type": "ema", "alpha": -0.1},
            {"type": "holts", "beta": 2},
            {"type": "sma", "windowSize": "wide"},
            "linear",
        ],
    )
    def test_rejected(self, raw):
        """Unknown types and invalid values are reported as None."""
        assert parse_fit_config(raw) is None

    def test_model_instance_round_trips(self):
        """Config model instances are accepted as input."""
        assert parse_fit_config(SmaConfig(windowSize=3)) == SmaConfig(window_size=3)
