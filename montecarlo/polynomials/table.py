"""Capacity-tiered table of primitive polynomials modulo two."""

import bisect
import logging
from typing import NamedTuple, Tuple

import numpy as np

from montecarlo.exceptions import CapacityExceeded
from montecarlo.polynomials.data import PRIMITIVE_POLYNOMIALS
from montecarlo.polynomials.gf2 import decode

logger = logging.getLogger(__name__)

SENTINEL = -1


class PolynomialTier(NamedTuple):
    """One capacity tier: every primitive polynomial up to ``index`` degrees."""

    index: int
    cumulative_count: int


# Number of primitive polynomials of degree at most 1, 2, ..., 27.
TIERS: Tuple[PolynomialTier, ...] = tuple(
    PolynomialTier(degree, count)
    for degree, count in enumerate(
        (
            1, 2, 4, 6, 12, 18, 36, 52, 100, 160, 336, 480, 1110, 1866,
            3666, 5714, 13424, 21200, 48794, 72794, 157466, 277498, 634458,
            910938, 2206938, 3926838, 8129334,
        ),
        start=1,
    )
)

_BOUNDS = tuple(tier.cumulative_count for tier in TIERS)

MAX_CAPACITY = TIERS[-1].cumulative_count
DEFAULT_CAPACITY = TIERS[17].cumulative_count
BUNDLED_MAX_DEGREE = len(PRIMITIVE_POLYNOMIALS)


def select_tier(capacity: int) -> PolynomialTier:
    """Return the smallest tier able to serve ``capacity`` polynomials.

    Parameters
    ----------
    capacity : int
        Number of polynomials the caller needs. Values at or below the first
        tier's bound select the first tier.

    Returns
    -------
    PolynomialTier
        Selected tier

    Raises
    ------
    CapacityExceeded
        If ``capacity`` exceeds the largest tier
    """
    position = bisect.bisect_left(_BOUNDS, capacity)
    if position == len(TIERS):
        raise CapacityExceeded(
            f"Requested capacity {capacity} exceeds the maximum of {MAX_CAPACITY}"
        )
    return TIERS[position]


class PolynomialTable:
    """Encoded primitive polynomials for every degree a capacity tier needs.

    The table keeps one contiguous, read-only integer array per degree.
    Each array lists the encoded polynomials of that degree in ascending
    order and ends with the sentinel ``-1``. Instances never change after
    construction and can be shared freely between readers.

    Parameters
    ----------
    capacity : int, default=21200
        Number of polynomials the caller intends to consume

    Attributes
    ----------
    tier : PolynomialTier
        Selected capacity tier
    ppmt_max_dim : int
        Total number of polynomials available through the selected tier
    n_max_degree : int
        Highest degree covered by the selected tier

    Raises
    ------
    CapacityExceeded
        If ``capacity`` is larger than every tier
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.tier = select_tier(capacity)
        self.ppmt_max_dim = self.tier.cumulative_count
        self.n_max_degree = self.tier.index

        built = min(self.n_max_degree, BUNDLED_MAX_DEGREE)
        arrays = []
        for entries in PRIMITIVE_POLYNOMIALS[:built]:
            array = np.array(entries + (SENTINEL,), dtype=np.int64)
            array.flags.writeable = False
            arrays.append(array)
        self._arrays: Tuple[np.ndarray, ...] = tuple(arrays)

        logger.debug(
            "Built primitive polynomial table: tier %d, capacity %d",
            self.n_max_degree,
            self.ppmt_max_dim,
        )
        if self.n_max_degree > BUNDLED_MAX_DEGREE:
            logger.warning(
                "Tier %d selected but polynomials are only bundled up to degree %d; "
                "degrees %d-%d are unavailable",
                self.n_max_degree,
                BUNDLED_MAX_DEGREE,
                BUNDLED_MAX_DEGREE + 1,
                self.n_max_degree,
            )

    @property
    def degrees(self) -> range:
        """Degrees whose polynomial lists are available."""
        return range(1, len(self._arrays) + 1)

    def get_max_capacity(self) -> int:
        """Return the selected tier's cumulative polynomial count."""
        return self.ppmt_max_dim

    def polynomials(self, degree: int) -> np.ndarray:
        """Return the read-only, sentinel-terminated array for ``degree``.

        Raises
        ------
        CapacityExceeded
            If the degree is outside the table
        """
        if not 1 <= degree <= self.n_max_degree:
            raise CapacityExceeded(
                f"Degree {degree} is outside this table (1-{self.n_max_degree})"
            )
        if degree > len(self._arrays):
            raise CapacityExceeded(
                f"Degree {degree} polynomials are not provided by bundled data"
            )
        return self._arrays[degree - 1]

    def get(self, degree: int, index: int) -> int:
        """Return the encoded polynomial at ``index`` for ``degree``.

        The position just past the last polynomial holds the sentinel ``-1``.

        Raises
        ------
        CapacityExceeded
            If the degree is outside the table
        IndexError
            If ``index`` lies beyond the sentinel
        """
        array = self.polynomials(degree)
        if not 0 <= index < len(array):
            raise IndexError(
                f"Index {index} is out of range for degree {degree} "
                f"({len(array) - 1} polynomials)"
            )
        return int(array[index])

    def coefficients(self, degree: int, index: int) -> int:
        """Return the full coefficient bit pattern of one polynomial."""
        encoded = self.get(degree, index)
        if encoded == SENTINEL:
            raise IndexError(f"Index {index} is the sentinel for degree {degree}")
        return decode(encoded, degree)

    def __len__(self) -> int:
        return sum(len(array) - 1 for array in self._arrays)

    def __repr__(self) -> str:
        return (
            f"PolynomialTable(tier={self.n_max_degree}, "
            f"capacity={self.ppmt_max_dim})"
        )
