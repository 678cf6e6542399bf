"""
Calibration factories: the bridge between an optimizer and the processes.

An external optimizer proposes parameter vectors; a factory turns each
proposal into a concrete process, and tells the optimizer where to start and
how large its initial steps should be. Factories never raise on parameters
outside their natural domain. Such proposals map to a degenerate all-zero
process so the search can keep probing without aborting.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck, StochasticProcess
from montecarlo.simulation.deviates import DeviateSource
from montecarlo.simulation.path_generator import PathGenerator


class CalibrationFactory(ABC):
    """Base class for process factories consumed by an optimizer.

    Parameters
    ----------
    duration : float
        Duration of every simulated path
    time_steps : int
        Number of samples per simulated path

    Raises
    ------
    ValueError
        If ``duration`` or ``time_steps`` is not positive
    """

    #: Names of the entries of a parameter vector, in order.
    parameter_names: Sequence[str] = ()

    def __init__(self, duration: float, time_steps: int):
        if not duration > 0:
            raise ValueError("duration must be positive")
        if time_steps < 1:
            raise ValueError("time_steps must be at least 1")
        self.duration = float(duration)
        self.time_steps = int(time_steps)

    @property
    def dt(self) -> float:
        return self.duration / self.time_steps

    @property
    def horizon(self) -> float:
        """Time of the last sample of a generated path."""
        return self.dt * (self.time_steps - 1)

    @abstractmethod
    def get_starting_point(self) -> np.ndarray:
        """Initial parameter vector for the optimizer."""

    @abstractmethod
    def get_start_configuration(self) -> np.ndarray:
        """Initial step size for every parameter."""

    @abstractmethod
    def create_process(self, x0: float, parameters: Sequence[float]) -> StochasticProcess:
        """Build the process a parameter vector describes."""

    def create_path_generator(
        self,
        x0: float,
        parameters: Sequence[float],
        deviates: DeviateSource,
    ) -> PathGenerator:
        """Build a path generator for the process at ``parameters``."""
        return PathGenerator(
            self.create_process(x0, parameters),
            self.time_steps,
            self.duration,
            deviates,
        )

    def _check_dimension(self, parameters: Sequence[float]) -> None:
        if len(parameters) != len(self.parameter_names):
            raise ValueError(
                f"{type(self).__name__} expects {len(self.parameter_names)} "
                f"parameters ({', '.join(self.parameter_names)}), got {len(parameters)}"
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(duration={self.duration}, "
            f"time_steps={self.time_steps})"
        )


class GbmCalibrationFactory(CalibrationFactory):
    """Factory for geometric Brownian motion with parameters ``[mu, sigma]``.

    A negative ``sigma``, or any non-finite parameter, yields
    ``GeometricBrownianMotion(0, 0, 0)`` whatever the other inputs are.
    """

    parameter_names = ("mu", "sigma")

    def get_starting_point(self) -> np.ndarray:
        return np.array([0.1, 0.1])

    def get_start_configuration(self) -> np.ndarray:
        return np.array([0.1, 0.1])

    def create_process(self, x0: float, parameters: Sequence[float]) -> GeometricBrownianMotion:
        self._check_dimension(parameters)
        mu, sigma = (float(p) for p in parameters)
        if sigma < 0 or not np.all(np.isfinite(parameters)):
            return GeometricBrownianMotion(0.0, 0.0, 0.0)
        return GeometricBrownianMotion(float(x0), mu, sigma)


class OrnsteinUhlenbeckCalibrationFactory(CalibrationFactory):
    """Factory for Ornstein-Uhlenbeck processes, ``[theta, mean, sigma]``.

    A negative reversion speed or volatility, or any non-finite parameter,
    yields ``OrnsteinUhlenbeck(0, 0, 0, 0)``.
    """

    parameter_names = ("theta", "mean", "sigma")

    def get_starting_point(self) -> np.ndarray:
        return np.array([1.0, 0.0, 0.1])

    def get_start_configuration(self) -> np.ndarray:
        return np.array([0.1, 0.1, 0.1])

    def create_process(self, x0: float, parameters: Sequence[float]) -> OrnsteinUhlenbeck:
        self._check_dimension(parameters)
        theta, mean, sigma = (float(p) for p in parameters)
        if theta < 0 or sigma < 0 or not np.all(np.isfinite(parameters)):
            return OrnsteinUhlenbeck(0.0, 0.0, 0.0, 0.0)
        return OrnsteinUhlenbeck(float(x0), theta, mean, sigma)
