"""
Tests for the histogram accumulator.
"""

import copy

import pandas as pd
import pytest

from montecarlo.accumulator import HistogramAccumulator


class TestHistogramAccumulator:
    """Test suite for HistogramAccumulator."""

    @pytest.fixture
    def accumulator(self):
        """Create an accumulator holding one sample."""
        acc = HistogramAccumulator()
        acc.add_value(1.23456)
        return acc

    def test_rounds_to_three_decimals(self, accumulator):
        """Test that samples are bucketed at 3-decimal precision."""
        assert dict(accumulator.histogram) == {1.235: 1}

        accumulator.add_value(1.2346)

        assert accumulator.histogram[1.235] == 2
        assert len(accumulator) == 1
        assert accumulator.total == 2

    def test_rounds_half_up(self):
        """Test the rounding direction at a bucket midpoint."""
        acc = HistogramAccumulator(precision=0)
        acc.add_values([2.5, -2.5, 0.49])

        assert dict(acc.histogram) == {3.0: 1, -2.0: 1, 0.0: 1}

    def test_lookup_quantizes_key(self, accumulator):
        """Test item access and membership by raw value."""
        assert accumulator[1.2349] == 1
        assert 1.2351 in accumulator
        assert accumulator[7.0] == 0
        assert 7.0 not in accumulator
        assert "1.235" not in accumulator

    def test_deep_copy_is_independent(self, accumulator):
        """Test that a copy and its original never share buckets."""
        duplicate = accumulator.deep_copy()
        duplicate.add_value(2.0)
        duplicate.add_value(1.235)

        assert dict(accumulator.histogram) == {1.235: 1}
        assert dict(duplicate.histogram) == {1.235: 2, 2.0: 1}

        accumulator.add_value(3.0)
        assert 3.0 not in duplicate

    def test_clone_and_copy_module(self, accumulator):
        """Test the alternative copy entry points."""
        for duplicate in (accumulator.clone(), copy.copy(accumulator), copy.deepcopy(accumulator)):
            assert duplicate == accumulator
            assert duplicate is not accumulator
            duplicate.add_value(9.0)
            assert 9.0 not in accumulator

    def test_histogram_view_is_read_only(self, accumulator):
        """Test that buckets cannot be edited through the mapping view."""
        with pytest.raises(TypeError):
            accumulator.histogram[5.0] = 1

    def test_merged(self, accumulator):
        """Test combining two accumulators into a new one."""
        other = HistogramAccumulator()
        other.add_values([1.235, 4.0])

        combined = accumulator.merged(other)

        assert dict(combined.histogram) == {1.235: 2, 4.0: 1}
        assert dict(accumulator.histogram) == {1.235: 1}
        assert dict(other.histogram) == {1.235: 1, 4.0: 1}

    def test_merge_requires_same_precision(self, accumulator):
        """Test that accumulators with different buckets cannot merge."""
        with pytest.raises(ValueError, match="precisions"):
            accumulator.merged(HistogramAccumulator(precision=2))

    def test_to_series(self):
        """Test export of counts as a sorted Series."""
        acc = HistogramAccumulator()
        acc.add_values([3.0, 1.0, 2.0, 1.0])

        series = acc.to_series()

        assert isinstance(series, pd.Series)
        assert list(series.index) == [1.0, 2.0, 3.0]
        assert list(series) == [2, 1, 1]
        assert series.index.name == "bucket"

    def test_rejects_invalid_input(self):
        """Test validation of precision and sample values."""
        with pytest.raises(ValueError):
            HistogramAccumulator(precision=-1)

        acc = HistogramAccumulator()
        with pytest.raises(ValueError):
            acc.add_value(float("nan"))
        with pytest.raises(ValueError):
            acc.add_value(float("inf"))
        assert len(acc) == 0
