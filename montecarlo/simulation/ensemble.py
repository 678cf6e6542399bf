"""Collections of simulated paths and their cross-sectional statistics."""

from typing import Dict, List

import numpy as np
import pandas as pd

from montecarlo.accumulator import HistogramAccumulator
from montecarlo.simulation.path import Path
from montecarlo.simulation.path_generator import PathGenerator


class PathEnsemble:
    """A set of equally long paths sharing one time step.

    Parameters
    ----------
    paths : list of Path
        Paths to collect; all must have the same length and ``dt``

    Raises
    ------
    ValueError
        If ``paths`` is empty or the paths do not share a common grid
    """

    def __init__(self, paths: List[Path]):
        if not paths:
            raise ValueError("An ensemble needs at least one path")
        dt = paths[0].dt
        length = len(paths[0])
        for path in paths:
            if len(path) != length or path.dt != dt:
                raise ValueError("All paths must share the same length and dt")

        self.paths = list(paths)
        self.dt = dt
        self.num_paths = len(paths)
        self.values = np.vstack([path.values for path in paths])
        self.values.flags.writeable = False

    @classmethod
    def simulate(cls, generator: PathGenerator, num_paths: int) -> "PathEnsemble":
        """Draw ``num_paths`` consecutive paths from ``generator``."""
        if num_paths <= 0:
            raise ValueError("num_paths must be positive")
        return cls([generator.next() for _ in range(num_paths)])

    @property
    def time_grid(self) -> np.ndarray:
        return self.paths[0].time_grid

    @property
    def num_steps(self) -> int:
        return self.values.shape[1]

    def terminal_values(self) -> np.ndarray:
        """Last sample of every path."""
        return self.values[:, -1]

    def get_statistics_at_step(self, step: int) -> Dict[str, float]:
        """Get min/max/mean/std/median across paths at one step.

        Parameters
        ----------
        step : int
            Sample index; negative values count from the end

        Returns
        -------
        dict
            Dictionary with 'min', 'max', 'mean', 'std' and 'median' keys
        """
        samples = self.values[:, step]
        return {
            "min": float(np.min(samples)),
            "max": float(np.max(samples)),
            "mean": float(np.mean(samples)),
            "std": float(np.std(samples)),
            "median": float(np.median(samples)),
        }

    def accumulate(self, step: int = -1, precision: int = 3) -> HistogramAccumulator:
        """Histogram the samples of every path at ``step``."""
        accumulator = HistogramAccumulator(precision)
        accumulator.add_values(self.values[:, step])
        return accumulator

    def to_frame(self) -> pd.DataFrame:
        """Return paths as columns of a DataFrame indexed by time."""
        return pd.DataFrame(
            self.values.T,
            index=pd.Index(self.time_grid, name="t"),
            columns=[f"path_{i}" for i in range(self.num_paths)],
        )
