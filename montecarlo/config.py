"""Run configuration for Monte Carlo simulations."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SimulationConfig:
    """Validated settings shared by the CLI, factories and ensembles.

    Parameters
    ----------
    duration : float, default=1.0
        Total duration of each path (years)
    time_steps : int, default=252
        Samples per path
    num_paths : int, default=500
        Number of paths per ensemble
    seed : int, optional
        Seed for the deviate source; None draws fresh entropy
    precision : int, default=3
        Decimal precision used when histogramming samples
    """

    duration: float = 1.0
    time_steps: int = 252
    num_paths: int = 500
    seed: Optional[int] = 20
    precision: int = 3

    def __post_init__(self) -> None:
        if not self.duration > 0:
            raise ValueError("duration must be positive")
        if self.time_steps < 1:
            raise ValueError("time_steps must be at least 1")
        if self.num_paths < 1:
            raise ValueError("num_paths must be at least 1")
        if self.precision < 0:
            raise ValueError("precision must be non-negative")

    @property
    def dt(self) -> float:
        return self.duration / self.time_steps
