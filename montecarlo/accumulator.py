"""Histogram accumulator for empirical distributions of path samples."""

import math
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

import pandas as pd


class HistogramAccumulator:
    """Counts samples by value rounded to a fixed number of decimals.

    Buckets are keyed by the rounded value (half up, so ``1.2345`` lands in
    ``1.235`` at the default precision) and only ever grow. Duplicate an
    accumulator with :meth:`deep_copy`; the copy shares no state with the
    original.

    Parameters
    ----------
    precision : int, default=3
        Number of decimal digits kept when bucketing
    """

    def __init__(self, precision: int = 3):
        if precision < 0:
            raise ValueError("precision must be non-negative")
        self.precision = precision
        self._scale = 10.0 ** precision
        self._counts: Dict[float, int] = {}

    def quantize(self, x: float) -> float:
        """Return the bucket key for ``x``."""
        if not math.isfinite(x):
            raise ValueError(f"Cannot bucket non-finite value {x}")
        return math.floor(x * self._scale + 0.5) / self._scale

    def add_value(self, x: float) -> None:
        key = self.quantize(x)
        self._counts[key] = self._counts.get(key, 0) + 1

    def add_values(self, values: Iterable[float]) -> None:
        for x in values:
            self.add_value(float(x))

    @property
    def histogram(self) -> Mapping[float, int]:
        """Read-only view of bucket -> count."""
        return MappingProxyType(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def deep_copy(self) -> "HistogramAccumulator":
        """Return an independent copy of this accumulator."""
        duplicate = HistogramAccumulator(self.precision)
        duplicate._counts = dict(self._counts)
        return duplicate

    clone = deep_copy

    def __copy__(self) -> "HistogramAccumulator":
        return self.deep_copy()

    def __deepcopy__(self, memo) -> "HistogramAccumulator":
        return self.deep_copy()

    def merged(self, other: "HistogramAccumulator") -> "HistogramAccumulator":
        """Return a new accumulator holding the counts of both inputs.

        Neither input is modified, so per-worker accumulators can be combined
        after a parallel run.

        Raises
        ------
        ValueError
            If the two accumulators bucket at different precisions
        """
        if other.precision != self.precision:
            raise ValueError(
                f"Cannot merge accumulators with precisions "
                f"{self.precision} and {other.precision}"
            )
        result = self.deep_copy()
        for key, count in other._counts.items():
            result._counts[key] = result._counts.get(key, 0) + count
        return result

    def to_series(self) -> pd.Series:
        """Return counts as a pandas Series indexed by bucket, ascending."""
        series = pd.Series(self._counts, dtype="int64", name="count")
        series.index.name = "bucket"
        return series.sort_index()

    def __getitem__(self, key: float) -> int:
        return self._counts.get(self.quantize(key), 0)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (int, float)) and self.quantize(key) in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HistogramAccumulator):
            return NotImplemented
        return self.precision == other.precision and self._counts == other._counts

    def __repr__(self) -> str:
        return (
            f"HistogramAccumulator(precision={self.precision}, "
            f"buckets={len(self._counts)}, total={self.total})"
        )
