"""
Tests for deviate sources, the path generator and path ensembles.
"""

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pandas as pd
import pytest

from montecarlo.exceptions import DeviateSourceExhausted, FunctionEvaluationFailure
from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck
from montecarlo.simulation import (
    GaussianDeviates,
    Path,
    PathEnsemble,
    PathGenerator,
    SequenceDeviates,
    UniformDeviates,
)


class NanProcess:
    """Process whose evolution always fails to produce a number."""

    initial_value = 1.0
    parameters = ()

    def drift(self, t, x):
        return 0.0

    def diffusion(self, t, x):
        return 0.0

    def evolve(self, t, x, dt, dw):
        return float("nan")


class TestDeviateSources:
    """Test suite for deviate sources."""

    def test_sequence_replays_then_exhausts(self):
        """Test that a finite source hands out its values in order."""
        source = SequenceDeviates([0.5, -1.0])

        assert source.next_normalized() == 0.5
        assert source.next_normalized() == -1.0
        assert source.remaining == 0
        with pytest.raises(DeviateSourceExhausted):
            source.next_normalized()

        source.rewind()
        assert source.next_normalized() == 0.5

    def test_gaussian_reproducible_with_seed(self):
        """Test that equal seeds give equal streams."""
        a = GaussianDeviates(42)
        b = GaussianDeviates(42)

        assert [a.next_normalized() for _ in range(10)] == [
            b.next_normalized() for _ in range(10)
        ]

    def test_uniform_normalized(self):
        """Test that uniform deviates have zero mean and unit variance."""
        source = UniformDeviates(7)
        samples = np.array([source.next_normalized() for _ in range(10000)])

        assert np.all(np.abs(samples) <= math.sqrt(3.0))
        assert abs(samples.mean()) < 0.05
        assert abs(samples.var() - 1.0) < 0.05


class TestPathGenerator:
    """Test suite for PathGenerator."""

    @pytest.fixture
    def gbm(self):
        """Create a GBM process for testing."""
        return GeometricBrownianMotion(x0=100.0, mu=0.05, sigma=0.2)

    def test_path_shape(self, gbm):
        """Test length, first sample and step size of a path."""
        generator = PathGenerator(gbm, 50, 2.0, GaussianDeviates(1))
        path = generator.next()

        assert isinstance(path, Path)
        assert len(path) == 50
        assert path[0] == gbm.initial_value
        assert path.dt == pytest.approx(2.0 / 50)
        np.testing.assert_allclose(path.time_grid, np.arange(50) * 0.04)

    def test_steps_follow_evolve(self, gbm):
        """Test that each sample evolves the previous one with one deviate."""
        deviates = [0.3, -0.8, 1.1]
        path = PathGenerator(gbm, 4, 1.0, SequenceDeviates(deviates)).next()

        t, x = 0.0, gbm.initial_value
        for i, dw in enumerate(deviates, start=1):
            x = gbm.evolve(t, x, 0.25, dw)
            assert path[i] == x
            t += 0.25

    def test_deterministic_replay(self, gbm):
        """Test that identical deviates produce bit-identical paths."""
        deviates = list(np.random.default_rng(3).standard_normal(99))
        first = PathGenerator(gbm, 100, 1.0, SequenceDeviates(deviates)).next()
        second = PathGenerator(gbm, 100, 1.0, SequenceDeviates(deviates)).next()

        assert first == second
        assert np.array_equal(first.values, second.values)

    def test_single_step_draws_nothing(self, gbm):
        """Test that a one-sample path only holds the initial value."""
        source = SequenceDeviates([])
        path = PathGenerator(gbm, 1, 1.0, source).next()

        assert list(path) == [100.0]
        assert path.dt == 1.0

    def test_deviate_exhaustion(self, gbm):
        """Test that running out of deviates fails the call."""
        generator = PathGenerator(gbm, 10, 1.0, SequenceDeviates([0.0] * 8))

        with pytest.raises(FunctionEvaluationFailure, match="exhausted") as info:
            generator.next()
        assert isinstance(info.value.__cause__, DeviateSourceExhausted)

    def test_overflow_is_evaluation_failure(self):
        """Test that an arithmetic error while evolving is surfaced."""
        process = GeometricBrownianMotion(1.0, 1e6, 0.0)
        generator = PathGenerator(process, 2, 2.0, SequenceDeviates([0.0]))

        with pytest.raises(FunctionEvaluationFailure) as info:
            generator.next()
        assert isinstance(info.value.__cause__, OverflowError)

    def test_non_finite_is_evaluation_failure(self):
        """Test that a NaN sample is rejected."""
        generator = PathGenerator(NanProcess(), 3, 1.0, SequenceDeviates([0.0, 0.0]))

        with pytest.raises(FunctionEvaluationFailure, match="nan"):
            generator.next()

    @pytest.mark.parametrize("time_steps, duration", [(0, 1.0), (10, 0.0), (10, -1.0)])
    def test_invalid_configuration(self, gbm, time_steps, duration):
        """Test that non-positive steps or duration are rejected."""
        with pytest.raises(ValueError):
            PathGenerator(gbm, time_steps, duration, GaussianDeviates(0))

    def test_iterator_protocol(self, gbm):
        """Test that the generator can be iterated."""
        generator = PathGenerator(gbm, 5, 1.0, GaussianDeviates(0))
        paths = [path for _, path in zip(range(3), generator)]

        assert len(paths) == 3
        assert paths[0] != paths[1]

    def test_path_is_immutable(self, gbm):
        """Test that path samples cannot be modified."""
        path = PathGenerator(gbm, 5, 1.0, GaussianDeviates(0)).next()

        with pytest.raises(ValueError):
            path.values[1] = 0.0

    def test_parallel_workers_match_sequential(self, gbm):
        """Test that workers with private deviate sources are independent."""
        def run(seed):
            return PathGenerator(gbm, 30, 1.0, GaussianDeviates(seed)).next()

        sequential = [run(seed) for seed in range(4)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(run, range(4)))

        assert parallel == sequential


class TestPathEnsemble:
    """Test suite for PathEnsemble."""

    @pytest.fixture
    def ensemble(self):
        """Simulate a small OU ensemble."""
        process = OrnsteinUhlenbeck(x0=1.0, theta=1.0, mean=0.0, sigma=0.3)
        generator = PathGenerator(process, 20, 1.0, GaussianDeviates(11))
        return PathEnsemble.simulate(generator, 25)

    def test_shape(self, ensemble):
        """Test the stacked sample array."""
        assert ensemble.values.shape == (25, 20)
        assert ensemble.num_paths == 25
        assert ensemble.num_steps == 20
        assert ensemble.dt == pytest.approx(0.05)
        np.testing.assert_array_equal(ensemble.values[:, 0], np.ones(25))

    def test_statistics_at_step(self, ensemble):
        """Test the cross-sectional statistics."""
        stats = ensemble.get_statistics_at_step(-1)
        terminal = ensemble.terminal_values()

        assert set(stats) == {"min", "max", "mean", "std", "median"}
        assert stats["min"] == terminal.min()
        assert stats["max"] == terminal.max()
        assert stats["mean"] == pytest.approx(terminal.mean())

        initial = ensemble.get_statistics_at_step(0)
        assert initial["std"] == 0.0
        assert initial["median"] == 1.0

    def test_accumulate(self, ensemble):
        """Test histogramming one step across paths."""
        accumulator = ensemble.accumulate(step=0)

        assert accumulator.total == 25
        assert accumulator[1.0] == 25
        assert ensemble.accumulate().total == 25

    def test_to_frame(self, ensemble):
        """Test conversion to a DataFrame with paths as columns."""
        frame = ensemble.to_frame()

        assert isinstance(frame, pd.DataFrame)
        assert frame.shape == (20, 25)
        assert frame.index.name == "t"
        assert frame.index[1] == pytest.approx(0.05)
        assert list(frame.columns[:2]) == ["path_0", "path_1"]

    def test_rejects_inconsistent_paths(self):
        """Test that paths on different grids cannot be combined."""
        with pytest.raises(ValueError):
            PathEnsemble([])
        with pytest.raises(ValueError):
            PathEnsemble([Path(np.zeros(3), 0.1), Path(np.zeros(4), 0.1)])
        with pytest.raises(ValueError):
            PathEnsemble([Path(np.zeros(3), 0.1), Path(np.zeros(3), 0.2)])

    def test_simulate_requires_paths(self):
        """Test that an empty simulation is rejected."""
        generator = PathGenerator(GeometricBrownianMotion(1.0, 0.0, 0.1), 5, 1.0, GaussianDeviates(0))

        with pytest.raises(ValueError):
            PathEnsemble.simulate(generator, 0)
