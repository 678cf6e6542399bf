"""
Tests for calibration factories, the simulated likelihood and estimators.
"""

import numpy as np
import pandas as pd
import pytest

from montecarlo.accumulator import HistogramAccumulator
from montecarlo.calibration import (
    CalibrationFactory,
    GbmCalibrationFactory,
    OrnsteinUhlenbeckCalibrationFactory,
    SimulatedLikelihood,
    estimate_gbm_parameters,
)
from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck
from montecarlo.simulation import GaussianDeviates, PathGenerator, SequenceDeviates


class TestGbmCalibrationFactory:
    """Test suite for GbmCalibrationFactory."""

    @pytest.fixture
    def factory(self):
        """Create a GBM factory for one year of daily steps."""
        return GbmCalibrationFactory(duration=1.0, time_steps=252)

    def test_fixed_start_vectors(self, factory):
        """Test that start vectors are the fixed literals on every call."""
        for _ in range(3):
            np.testing.assert_array_equal(factory.get_starting_point(), [0.1, 0.1])
            np.testing.assert_array_equal(factory.get_start_configuration(), [0.1, 0.1])

    def test_start_vectors_are_fresh(self, factory):
        """Test that mutating a returned vector has no side effects."""
        point = factory.get_starting_point()
        point[0] = 42.0

        np.testing.assert_array_equal(factory.get_starting_point(), [0.1, 0.1])

    def test_create_process(self, factory):
        """Test that valid parameters map onto the process."""
        process = factory.create_process(100.0, [0.05, 0.2])

        assert process == GeometricBrownianMotion(100.0, 0.05, 0.2)

    @pytest.mark.parametrize("x0", [0.0, 1.0, 250.0])
    @pytest.mark.parametrize("mu", [-1.0, 0.0, 0.3])
    def test_negative_sigma_is_sanitized(self, factory, x0, mu):
        """Test that negative volatility gives the zero process."""
        process = factory.create_process(x0, [mu, -0.01])

        assert process == GeometricBrownianMotion(0.0, 0.0, 0.0)
        assert process.parameters == (0.0, 0.0)

    def test_non_finite_parameters_are_sanitized(self, factory):
        """Test that NaN or infinite proposals also map to the zero process."""
        assert factory.create_process(1.0, [np.nan, 0.2]) == GeometricBrownianMotion(0.0, 0.0, 0.0)
        assert factory.create_process(1.0, [0.1, np.inf]) == GeometricBrownianMotion(0.0, 0.0, 0.0)

    def test_zero_sigma_is_valid(self, factory):
        """Test the boundary of the volatility domain."""
        assert factory.create_process(5.0, [0.1, 0.0]) == GeometricBrownianMotion(5.0, 0.1, 0.0)

    def test_create_process_is_deterministic(self, factory):
        """Test that identical inputs give equal processes."""
        assert factory.create_process(3.0, np.array([0.2, 0.4])) == factory.create_process(3.0, [0.2, 0.4])

    def test_wrong_dimension(self, factory):
        """Test that parameter vectors of the wrong size are rejected."""
        with pytest.raises(ValueError, match="expects 2 parameters"):
            factory.create_process(1.0, [0.1])

    def test_create_path_generator(self, factory):
        """Test that the generator uses the factory configuration."""
        generator = factory.create_path_generator(100.0, [0.05, 0.2], GaussianDeviates(0))

        assert isinstance(generator, PathGenerator)
        assert generator.time_steps == 252
        assert generator.dt == pytest.approx(1.0 / 252)
        assert generator.process == GeometricBrownianMotion(100.0, 0.05, 0.2)
        assert len(generator.next()) == 252

    def test_horizon(self, factory):
        """Test the time of the last sample of a generated path."""
        assert factory.horizon == pytest.approx(251.0 / 252)

    @pytest.mark.parametrize("duration, time_steps", [(0.0, 10), (1.0, 0)])
    def test_invalid_configuration(self, duration, time_steps):
        """Test that non-positive configuration is rejected."""
        with pytest.raises(ValueError):
            GbmCalibrationFactory(duration, time_steps)

    def test_base_class_is_abstract(self):
        """Test that the protocol cannot be instantiated directly."""
        with pytest.raises(TypeError):
            CalibrationFactory(1.0, 10)


class TestOrnsteinUhlenbeckCalibrationFactory:
    """Test suite for OrnsteinUhlenbeckCalibrationFactory."""

    @pytest.fixture
    def factory(self):
        """Create an OU factory."""
        return OrnsteinUhlenbeckCalibrationFactory(duration=1.0, time_steps=10)

    def test_start_vectors(self, factory):
        """Test the fixed start vectors."""
        np.testing.assert_array_equal(factory.get_starting_point(), [1.0, 0.0, 0.1])
        np.testing.assert_array_equal(factory.get_start_configuration(), [0.1, 0.1, 0.1])

    def test_create_process(self, factory):
        """Test mapping valid and invalid proposals."""
        assert factory.create_process(0.5, [2.0, 0.1, 0.3]) == OrnsteinUhlenbeck(0.5, 2.0, 0.1, 0.3)
        assert factory.create_process(0.5, [-2.0, 0.1, 0.3]) == OrnsteinUhlenbeck(0.0, 0.0, 0.0, 0.0)
        assert factory.create_process(0.5, [2.0, 0.1, -0.3]) == OrnsteinUhlenbeck(0.0, 0.0, 0.0, 0.0)

    def test_degenerate_process_generates_zero_path(self, factory):
        """Test that a sanitized process yields a well-defined path."""
        generator = factory.create_path_generator(
            7.0, [-1.0, 0.0, 0.1], SequenceDeviates([1.0] * 9)
        )

        np.testing.assert_array_equal(generator.next().values, np.zeros(10))


class TestSimulatedLikelihood:
    """Test suite for SimulatedLikelihood."""

    @pytest.fixture
    def factory(self):
        """Create a factory whose paths end one trading day later."""
        return GbmCalibrationFactory(duration=2.0 / 252, time_steps=2)

    @pytest.fixture
    def observations(self):
        """Simulate 30 daily prices from a known GBM."""
        process = GeometricBrownianMotion(100.0, 0.05, 0.2)
        generator = PathGenerator(process, 30, 30.0 / 252, GaussianDeviates(5))
        return generator.next().values

    def test_density_from_histogram(self, factory):
        """Test the windowed density estimate."""
        objective = SimulatedLikelihood(factory, [1.0, 2.0], bandwidth=0.5)
        acc = HistogramAccumulator()
        acc.add_values([1.0, 1.0, 1.0, 2.0])

        assert objective.density(acc, 1.0) == pytest.approx(0.75)
        assert objective.density(acc, 10.0) == 0.0

    def test_deterministic(self, factory, observations):
        """Test that repeated evaluations agree exactly."""
        objective = SimulatedLikelihood(factory, observations, num_paths=100, seed=3, bandwidth=0.5)

        assert objective([0.05, 0.2]) == objective([0.05, 0.2])

    def test_true_parameters_beat_bad_ones(self, factory, observations):
        """Test that the generating parameters are more likely."""
        objective = SimulatedLikelihood(factory, observations, num_paths=500, seed=3, bandwidth=1.0)

        true_nll = objective([0.05, 0.2])

        assert true_nll < objective([0.05, 2.0])
        assert true_nll < objective([0.05, -0.2])

    def test_degenerate_region_hits_density_floor(self, factory, observations):
        """Test that sanitized proposals give a finite, large objective."""
        objective = SimulatedLikelihood(factory, observations, num_paths=10, seed=3, bandwidth=0.5)

        value = objective([0.0, -1.0])

        assert np.isfinite(value)
        assert value == pytest.approx(-29 * np.log(objective.density_floor))

    def test_terminal_histogram(self, factory):
        """Test the per-transition histogram of terminal samples."""
        objective = SimulatedLikelihood(factory, [100.0, 101.0], num_paths=40, seed=1)

        acc = objective.terminal_histogram(100.0, [0.0, 0.0])

        assert acc.total == 40
        assert acc[100.0] == 40

    def test_validation(self, factory):
        """Test constructor validation."""
        with pytest.raises(ValueError, match="two observations"):
            SimulatedLikelihood(factory, [1.0])
        with pytest.raises(ValueError):
            SimulatedLikelihood(factory, [1.0, 2.0], num_paths=0)
        with pytest.raises(ValueError, match="bandwidth"):
            SimulatedLikelihood(factory, [1.0, 2.0], bandwidth=1e-5)


class TestEstimation:
    """Test suite for moment-based estimates."""

    def test_constant_growth(self):
        """Test estimates for prices growing 1% per period."""
        prices = pd.Series(100.0 * 1.01 ** np.arange(50))

        mu, sigma = estimate_gbm_parameters(prices)

        assert mu == pytest.approx(2.52)
        assert sigma == pytest.approx(0.0, abs=1e-9)

    def test_accepts_sequences(self):
        """Test that plain lists are accepted."""
        mu, sigma = estimate_gbm_parameters([100.0, 101.0, 99.0, 102.0], periods_per_year=12)

        assert isinstance(mu, float)
        assert sigma > 0

    def test_too_few_prices(self):
        """Test that short series are rejected."""
        with pytest.raises(ValueError, match="At least three prices"):
            estimate_gbm_parameters([100.0, 101.0])
