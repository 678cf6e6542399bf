"""Sources of normalized random deviates consumed by path generators.

A deviate source is a sequential cursor: every call to ``next_normalized``
advances it. Sources are not thread-safe; give each worker its own.
"""

import math
from typing import Iterable, Protocol, Union

import numpy as np

from montecarlo.exceptions import DeviateSourceExhausted


class DeviateSource(Protocol):
    def next_normalized(self) -> float:
        ...


SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


class GaussianDeviates:
    """Standard normal deviates from a NumPy random generator.

    Parameters
    ----------
    seed : int or np.random.Generator, optional
        Seed (or seed sequence) for a fresh generator, or an existing
        generator to draw from
    """

    def __init__(self, seed: SeedLike = None):
        self.rng = np.random.default_rng(seed)

    def next_normalized(self) -> float:
        return float(self.rng.standard_normal())


class UniformDeviates:
    """Uniform deviates rescaled to zero mean and unit variance.

    Values are spread evenly over ``[-sqrt(3), sqrt(3)]``.
    """

    _HALF_WIDTH = math.sqrt(3.0)

    def __init__(self, seed: SeedLike = None):
        self.rng = np.random.default_rng(seed)

    def next_normalized(self) -> float:
        return float(self.rng.uniform(-self._HALF_WIDTH, self._HALF_WIDTH))


class SequenceDeviates:
    """Replays a fixed, finite sequence of deviates.

    Useful for deterministic tests and for feeding externally generated
    (e.g. quasi-random) deviates into a path generator.

    Parameters
    ----------
    values : iterable of float
        Deviates handed out in order

    Raises
    ------
    DeviateSourceExhausted
        From ``next_normalized`` once every value has been consumed
    """

    def __init__(self, values: Iterable[float]):
        self.values = tuple(float(v) for v in values)
        self.position = 0

    @property
    def remaining(self) -> int:
        return len(self.values) - self.position

    def next_normalized(self) -> float:
        if self.position >= len(self.values):
            raise DeviateSourceExhausted(
                f"All {len(self.values)} deviates have been consumed"
            )
        value = self.values[self.position]
        self.position += 1
        return value

    def rewind(self) -> None:
        self.position = 0
