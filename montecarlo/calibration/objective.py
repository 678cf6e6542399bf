"""Simulated maximum-likelihood objective for calibration factories."""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from montecarlo.accumulator import HistogramAccumulator
from montecarlo.calibration.factory import CalibrationFactory
from montecarlo.simulation.deviates import GaussianDeviates

logger = logging.getLogger(__name__)


class SimulatedLikelihood:
    """Negative log-likelihood of observations estimated by simulation.

    The observations are treated as a series sampled every
    ``factory.horizon`` time units. For each consecutive pair the process is
    restarted at the earlier value, ``num_paths`` paths are simulated, and
    their terminal samples are histogrammed. The transition density at the
    later value is the share of samples within ``bandwidth`` of it, divided
    by the window width.

    The deviate streams are fixed per transition when the objective is
    built, so repeated calls with the same parameters return the same value
    and the surface stays smooth enough for simplex-style optimizers.

    Parameters
    ----------
    factory : CalibrationFactory
        Maps parameter vectors to processes
    observations : sequence of float
        Observed values, at least two
    num_paths : int, default=500
        Paths simulated per transition
    seed : int, optional
        Seed for the per-transition deviate streams
    bandwidth : float, default=0.05
        Half-width of the density window around each observation
    precision : int, default=3
        Decimal precision of the terminal-value histogram
    density_floor : float, default=1e-12
        Lower bound applied to every density estimate before taking logs
    """

    def __init__(
        self,
        factory: CalibrationFactory,
        observations: Sequence[float],
        num_paths: int = 500,
        seed: Optional[int] = None,
        bandwidth: float = 0.05,
        precision: int = 3,
        density_floor: float = 1e-12,
    ):
        observations = np.asarray(observations, dtype=float)
        if observations.ndim != 1 or len(observations) < 2:
            raise ValueError("At least two observations are required")
        if num_paths <= 0:
            raise ValueError("num_paths must be positive")
        if bandwidth < 0.5 * 10.0 ** -precision:
            raise ValueError("bandwidth must cover at least one histogram bucket")

        self.factory = factory
        self.observations = observations
        self.num_paths = num_paths
        self.bandwidth = bandwidth
        self.precision = precision
        self.density_floor = density_floor
        self._seeds = np.random.SeedSequence(seed).spawn(len(observations) - 1)

    def terminal_histogram(
        self,
        x0: float,
        parameters: Sequence[float],
        transition: int = 0,
    ) -> HistogramAccumulator:
        """Histogram the terminal samples of paths started at ``x0``."""
        generator = self.factory.create_path_generator(
            x0, parameters, GaussianDeviates(self._seeds[transition])
        )
        accumulator = HistogramAccumulator(self.precision)
        for _ in range(self.num_paths):
            accumulator.add_value(generator.next().terminal_value)
        return accumulator

    def density(self, accumulator: HistogramAccumulator, x: float) -> float:
        """Estimate the density of ``x`` from a histogram."""
        counts = accumulator.to_series()
        window = counts.loc[x - self.bandwidth : x + self.bandwidth]
        return float(window.sum()) / (accumulator.total * 2.0 * self.bandwidth)

    def __call__(self, parameters: Sequence[float]) -> float:
        """Return the negative log-likelihood at ``parameters``.

        Raises
        ------
        FunctionEvaluationFailure
            If a simulated path cannot be evolved at these parameters
        """
        nll = 0.0
        pairs = zip(self.observations[:-1], self.observations[1:])
        for transition, (start, end) in enumerate(pairs):
            accumulator = self.terminal_histogram(start, parameters, transition)
            density = max(self.density(accumulator, end), self.density_floor)
            nll -= math.log(density)

        logger.debug("Negative log-likelihood at %s: %.6f", list(parameters), nll)
        return nll
