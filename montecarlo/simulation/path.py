"""Discretized sample path of a single-factor process."""

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True, eq=False)
class Path:
    """Fixed-length sequence of samples spaced ``dt`` apart.

    The sample array is copied on construction and marked read-only.

    Parameters
    ----------
    values : sequence of float
        Samples; ``values[i]`` is the process value at time ``i * dt``
    dt : float
        Time step between consecutive samples
    """

    values: np.ndarray
    dt: float

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=float)
        if values.ndim != 1:
            raise ValueError("Path values must be one-dimensional")
        values.flags.writeable = False
        object.__setattr__(self, "values", values)

    @property
    def time_grid(self) -> np.ndarray:
        return np.arange(len(self.values)) * self.dt

    @property
    def initial_value(self) -> float:
        return float(self.values[0])

    @property
    def terminal_value(self) -> float:
        return float(self.values[-1])

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: Union[int, slice]) -> Union[float, np.ndarray]:
        item = self.values[index]
        return float(item) if np.ndim(item) == 0 else item

    def __iter__(self):
        return (float(v) for v in self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.dt == other.dt and np.array_equal(self.values, other.values)
