"""
Tests for the run configuration.
"""

import dataclasses

import pytest

from montecarlo.config import SimulationConfig


class TestSimulationConfig:
    """Test suite for SimulationConfig."""

    def test_defaults(self):
        """Test the default daily-steps configuration."""
        config = SimulationConfig()

        assert config.time_steps == 252
        assert config.num_paths == 500
        assert config.seed == 20
        assert config.precision == 3
        assert config.dt == pytest.approx(1.0 / 252)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"duration": 0.0},
            {"duration": -1.0},
            {"time_steps": 0},
            {"num_paths": 0},
            {"precision": -1},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test that out-of-range settings are rejected."""
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)

    def test_frozen(self):
        """Test that a configuration cannot be modified."""
        config = SimulationConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.num_paths = 10
