"""Tests for the Monte Carlo expected exposure calculator."""

import numpy as np
import pytest

from calc_tools.calculators import expected_exposure
from calc_tools.calculators.exposure import simulate_paths
from calc_tools.exceptions import InvalidInputError

BASE_INPUTS = {
    "initial_price": 100,
    "strike_price": 100,
    "time_to_maturity": 1,
    "risk_free_rate": 5,
    "volatility": 20,
    "num_simulations": 500,
    "num_time_steps": 12,
}


class TestSimulatePaths:
    def test_shape(self):
        paths = simulate_paths(100, 0.05, 0.2, 0.1, 7, 10, np.random.default_rng(0))

        assert paths.shape == (7, 10)
        assert np.all(paths > 0)

    def test_zero_volatility_is_deterministic_growth(self):
        paths = simulate_paths(100, 0.05, 0.0, 0.5, 3, 2, np.random.default_rng(0))

        expected = [100 * np.exp(0.025), 100 * np.exp(0.05)]
        assert np.allclose(paths, np.tile(expected, (3, 1)))


class TestExpectedExposure:
    def test_profile_shape(self):
        result = expected_exposure(**BASE_INPUTS, seed=1)

        assert len(result.profile) == 13
        assert result.profile[0].time == 0
        assert result.profile[0].ee == 0
        assert result.profile[-1].time == pytest.approx(1.0)
        assert all(point.ee >= 0 for point in result.profile)

    def test_same_seed_same_profile(self):
        first = expected_exposure(**BASE_INPUTS, seed=42)
        second = expected_exposure(**BASE_INPUTS, seed=42)

        assert first.profile == second.profile
        assert first.peak == second.peak

    def test_different_seeds_differ(self):
        first = expected_exposure(**BASE_INPUTS, seed=1)
        second = expected_exposure(**BASE_INPUTS, seed=2)

        assert first.profile != second.profile

    def test_deep_in_the_money_is_intrinsic_value(self):
        """With almost no volatility and no drift EE stays at S - K."""
        result = expected_exposure(
            initial_price=100,
            strike_price=50,
            time_to_maturity=1,
            risk_free_rate=0,
            volatility=0.0001,
            num_simulations=100,
            num_time_steps=5,
            seed=7,
        )

        for point in result.profile[1:]:
            assert point.ee == pytest.approx(50, rel=1e-3)

    def test_peak_is_the_highest_point(self):
        result = expected_exposure(**BASE_INPUTS, seed=3)

        assert result.peak.ee == max(point.ee for point in result.profile)
        assert result.peak in result.profile

    def test_no_exposure_peaks_at_time_zero(self):
        """Far out of the money every point is 0; the first one is the peak."""
        result = expected_exposure(
            initial_price=100,
            strike_price=10_000,
            time_to_maturity=1,
            risk_free_rate=1,
            volatility=10,
            num_simulations=100,
            num_time_steps=10,
            seed=0,
        )

        assert result.peak.time == 0
        assert result.peak.ee == 0

    def test_too_many_cells_rejected(self):
        inputs = {**BASE_INPUTS, "num_simulations": 1000, "num_time_steps": 1000}

        with pytest.raises(InvalidInputError) as exc_info:
            expected_exposure(**inputs, max_cells=10_000)

        assert "num_simulations" in exc_info.value.errors

    @pytest.mark.parametrize(
        "field",
        ["initial_price", "strike_price", "time_to_maturity", "volatility", "num_time_steps"],
    )
    def test_non_positive_inputs_rejected(self, field):
        with pytest.raises(InvalidInputError) as exc_info:
            expected_exposure(**{**BASE_INPUTS, field: 0})

        assert field in exc_info.value.errors

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            expected_exposure(**{**BASE_INPUTS, "risk_free_rate": -1})

        assert "risk_free_rate" in exc_info.value.errors

    def test_logs_summary(self, caplog):
        with caplog.at_level("INFO"):
            expected_exposure(**BASE_INPUTS, seed=1)

        assert "500 simulations x 12 steps" in caplog.text
