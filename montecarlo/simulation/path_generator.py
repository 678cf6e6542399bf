"""Monte Carlo path generator driving a process with supplied deviates."""

import logging
import math

import numpy as np

from montecarlo.exceptions import DeviateSourceExhausted, FunctionEvaluationFailure
from montecarlo.process import StochasticProcess
from montecarlo.simulation.deviates import DeviateSource
from montecarlo.simulation.path import Path

logger = logging.getLogger(__name__)


class PathGenerator:
    """Generates discretized paths of a stochastic process.

    Each call to :meth:`next` produces a path of exactly ``time_steps``
    samples. The first sample is the process's initial value and each later
    sample evolves the previous one over ``dt = duration / time_steps`` using
    one deviate drawn from ``deviates``.

    The generator keeps no state between calls other than its configuration
    and the deviate cursor it was handed, so generators that own separate
    deviate sources can run concurrently.

    Parameters
    ----------
    process : StochasticProcess
        Process whose ``evolve`` rule is applied step by step
    time_steps : int
        Number of samples per path (at least 1)
    duration : float
        Total duration; determines the step size
    deviates : DeviateSource
        Source of normalized random deviates, polled once per step

    Raises
    ------
    ValueError
        If ``time_steps`` or ``duration`` is not positive
    """

    def __init__(
        self,
        process: StochasticProcess,
        time_steps: int,
        duration: float,
        deviates: DeviateSource,
    ):
        if time_steps < 1:
            raise ValueError("time_steps must be at least 1")
        if not duration > 0:
            raise ValueError("duration must be positive")

        self.process = process
        self.time_steps = int(time_steps)
        self.duration = float(duration)
        self.deviates = deviates
        self.dt = self.duration / self.time_steps

    def next(self) -> Path:
        """Generate a single path.

        Returns
        -------
        Path
            ``time_steps`` samples spaced ``dt`` apart

        Raises
        ------
        FunctionEvaluationFailure
            If the deviate source runs out, or the process fails to produce
            a finite value
        """
        values = np.empty(self.time_steps)
        values[0] = self.process.initial_value

        t = 0.0
        for i in range(1, self.time_steps):
            try:
                dw = self.deviates.next_normalized()
            except DeviateSourceExhausted as e:
                raise FunctionEvaluationFailure(
                    f"Deviate source exhausted at step {i} of {self.time_steps}"
                ) from e
            try:
                x = self.process.evolve(t, values[i - 1], self.dt, dw)
            except (ArithmeticError, ValueError) as e:
                raise FunctionEvaluationFailure(
                    f"Process evolution failed at step {i} (t={t:.6g}): {e}"
                ) from e
            if not math.isfinite(x):
                raise FunctionEvaluationFailure(
                    f"Process evolution produced {x} at step {i} (t={t:.6g})"
                )
            values[i] = x
            t += self.dt

        logger.debug("Generated path of %d samples, dt=%g", self.time_steps, self.dt)
        return Path(values, self.dt)

    def __iter__(self) -> "PathGenerator":
        return self

    def __next__(self) -> Path:
        return self.next()
