"""
Tests for the stochastic process variants.
"""

import dataclasses
import math

import pytest

from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck, StochasticProcess


class TestGeometricBrownianMotion:
    """Test suite for GeometricBrownianMotion."""

    @pytest.fixture
    def gbm(self):
        """Create a GBM process for testing."""
        return GeometricBrownianMotion(x0=100.0, mu=0.1, sigma=0.2)

    def test_capabilities(self, gbm):
        """Test that the variant satisfies the process interface."""
        assert isinstance(gbm, StochasticProcess)
        assert gbm.initial_value == 100.0
        assert gbm.parameters == (0.1, 0.2)

    def test_drift_and_diffusion(self, gbm):
        """Test the SDE coefficients."""
        assert gbm.drift(0.0, 50.0) == pytest.approx(5.0)
        assert gbm.diffusion(0.0, 50.0) == pytest.approx(10.0)

    def test_evolve_exact_lognormal(self, gbm):
        """Test the log-normal one-step update."""
        dt, dw = 0.01, 0.7
        expected = 100.0 * math.exp((0.1 - 0.02) * dt + 0.2 * math.sqrt(dt) * dw)

        assert gbm.evolve(0.0, 100.0, dt, dw) == pytest.approx(expected, rel=1e-14)

    def test_evolve_is_pure(self, gbm):
        """Test that replaying inputs reproduces the output exactly."""
        first = gbm.evolve(0.3, 101.5, 0.004, -1.2)
        second = gbm.evolve(0.3, 101.5, 0.004, -1.2)

        assert first == second
        assert gbm == GeometricBrownianMotion(100.0, 0.1, 0.2)

    def test_immutable(self, gbm):
        """Test that parameters cannot be changed after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            gbm.sigma = 0.5

    def test_degenerate_process_is_constant_zero(self):
        """Test that the all-zero process stays at zero."""
        degenerate = GeometricBrownianMotion(0.0, 0.0, 0.0)

        assert degenerate.evolve(0.0, 0.0, 0.1, 3.0) == 0.0
        assert degenerate.drift(0.0, 5.0) == 0.0
        assert degenerate.diffusion(0.0, 5.0) == 0.0


class TestOrnsteinUhlenbeck:
    """Test suite for OrnsteinUhlenbeck."""

    def test_capabilities(self):
        """Test that the variant satisfies the process interface."""
        ou = OrnsteinUhlenbeck(x0=1.0, theta=2.0, mean=0.5, sigma=0.3)

        assert isinstance(ou, StochasticProcess)
        assert ou.initial_value == 1.0
        assert ou.parameters == (2.0, 0.5, 0.3)
        assert ou.drift(0.0, 1.0) == pytest.approx(-1.0)
        assert ou.diffusion(0.0, 1.0) == 0.3

    def test_mean_reversion_without_noise(self):
        """Test that the deterministic part decays towards the mean."""
        ou = OrnsteinUhlenbeck(x0=1.0, theta=2.0, mean=0.5, sigma=0.3)
        x = ou.evolve(0.0, 1.0, 0.25, 0.0)

        assert x == pytest.approx(0.5 + 0.5 * math.exp(-0.5))

    def test_exact_transition_variance(self):
        """Test the noise scale of the exact transition."""
        ou = OrnsteinUhlenbeck(x0=0.0, theta=1.5, mean=0.0, sigma=0.4)
        dt = 0.2
        expected_std = 0.4 * math.sqrt((1 - math.exp(-2 * 1.5 * dt)) / (2 * 1.5))

        assert ou.evolve(0.0, 0.0, dt, 1.0) == pytest.approx(expected_std)

    def test_zero_reversion_is_brownian(self):
        """Test that theta == 0 reduces to arithmetic Brownian motion."""
        ou = OrnsteinUhlenbeck(x0=1.0, theta=0.0, mean=5.0, sigma=0.5)

        assert ou.evolve(0.0, 1.0, 0.04, 2.0) == pytest.approx(1.0 + 0.5 * 0.2 * 2.0)
