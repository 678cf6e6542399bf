"""
Tests for the primitive polynomial table and GF(2) helpers.
"""

import logging

import numpy as np
import pytest

from montecarlo.exceptions import CapacityExceeded
from montecarlo.polynomials import (
    DEFAULT_CAPACITY,
    MAX_CAPACITY,
    SENTINEL,
    TIERS,
    PolynomialTable,
    select_tier,
)
from montecarlo.polynomials.gf2 import decode, encode, is_primitive, prime_factors


class TestTierSelection:
    """Test suite for capacity tier selection."""

    def test_tiers_are_strictly_increasing(self):
        """Test that the 27 tier bounds form a strict total order."""
        assert len(TIERS) == 27
        assert [tier.index for tier in TIERS] == list(range(1, 28))
        bounds = [tier.cumulative_count for tier in TIERS]
        assert all(a < b for a, b in zip(bounds, bounds[1:]))
        assert bounds[-1] == MAX_CAPACITY == 8129334

    def test_capacity_between_tiers(self):
        """Test that capacity 5 selects tier 4, whose bound is 6."""
        table = PolynomialTable(5)

        assert table.n_max_degree == 4
        assert table.get_max_capacity() == 6

    @pytest.mark.parametrize("capacity", [-10, 0, 1])
    def test_small_capacity_clamps_to_first_tier(self, capacity):
        """Test that capacities at or below 1 select tier 1."""
        tier = select_tier(capacity)

        assert tier.index == 1
        assert tier.cumulative_count == 1

    def test_every_tier_boundary(self):
        """Test the selection exactly at, and just above, every bound."""
        for position, tier in enumerate(TIERS):
            assert select_tier(tier.cumulative_count) == tier
            if position + 1 < len(TIERS):
                assert select_tier(tier.cumulative_count + 1) == TIERS[position + 1]

    def test_capacity_above_maximum_raises(self):
        """Test that a capacity above tier 27 fails at construction."""
        with pytest.raises(CapacityExceeded, match="exceeds the maximum"):
            PolynomialTable(MAX_CAPACITY + 1)

    def test_default_capacity(self):
        """Test that the default table uses tier 18."""
        table = PolynomialTable()

        assert DEFAULT_CAPACITY == 21200
        assert table.n_max_degree == 18
        assert table.ppmt_max_dim == 21200


class TestPolynomialTable:
    """Test suite for PolynomialTable access."""

    @pytest.fixture(scope="class")
    def table(self):
        """Create a default-capacity table."""
        return PolynomialTable()

    def test_lists_end_with_sentinel(self, table):
        """Test that every degree yields distinct non-negative values then -1."""
        for degree in range(1, table.n_max_degree + 1):
            values = []
            index = 0
            while True:
                value = table.get(degree, index)
                if value == SENTINEL:
                    break
                values.append(value)
                index += 1

            assert values
            assert all(v >= 0 for v in values)
            assert len(set(values)) == len(values)
            assert values == sorted(values)

    def test_counts_match_tier_bounds(self):
        """Test that each bundled tier holds exactly its cumulative count."""
        for tier in TIERS[:18]:
            assert len(PolynomialTable(tier.cumulative_count)) == tier.cumulative_count

    def test_known_entries(self, table):
        """Test a few entries against the reference data."""
        assert table.get(1, 0) == 0
        assert table.get(2, 0) == 1
        assert table.get(4, 1) == 4
        assert table.get(5, 4) == 13
        assert table.get(18, 0) == 19
        assert table.get(18, 7776) == SENTINEL

    def test_degree_beyond_tier_raises(self):
        """Test that degrees above the selected tier are not built."""
        table = PolynomialTable(5)

        assert list(table.degrees) == [1, 2, 3, 4]
        with pytest.raises(CapacityExceeded):
            table.get(5, 0)
        with pytest.raises(CapacityExceeded):
            table.get(0, 0)

    def test_index_beyond_sentinel_raises(self, table):
        """Test that reading past the sentinel is an error."""
        with pytest.raises(IndexError):
            table.get(3, 3)
        with pytest.raises(IndexError):
            table.get(3, -1)

    def test_arrays_are_read_only(self, table):
        """Test that the table cannot be mutated through its arrays."""
        array = table.polynomials(7)

        assert array[-1] == SENTINEL
        with pytest.raises(ValueError):
            array[0] = 99

    def test_coefficients_restore_outer_bits(self, table):
        """Test decoding x^4 + x + 1 from the degree-4 list."""
        assert table.coefficients(4, 0) == 0b10011
        with pytest.raises(IndexError):
            table.coefficients(4, 2)

    def test_tier_beyond_bundled_data(self, caplog):
        """Test that high tiers construct but lack unbundled degrees."""
        with caplog.at_level(logging.WARNING, logger="montecarlo.polynomials.table"):
            table = PolynomialTable(50000)

        assert table.n_max_degree == 20
        assert table.get_max_capacity() == 72794
        assert "bundled" in caplog.text
        assert table.get(18, 0) == 19
        with pytest.raises(CapacityExceeded, match="bundled data"):
            table.get(19, 0)

    def test_shared_between_threads(self, table):
        """Test that concurrent readers see identical data."""
        from concurrent.futures import ThreadPoolExecutor

        def read(degree):
            return table.polynomials(degree).tolist()

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(read, [9, 9, 9, 9]))

        assert all(result == results[0] for result in results)


class TestGF2:
    """Test suite for the GF(2) helpers."""

    def test_encode_decode(self):
        """Test the documented encoding examples."""
        assert encode(0b10101, 4) == 2
        assert decode(2, 4) == 0b10101
        assert decode(13, 5) == 0b111011
        assert encode(0b11, 1) == 0

    def test_encode_rejects_bad_patterns(self):
        """Test that patterns without both outer coefficients are rejected."""
        with pytest.raises(ValueError):
            encode(0b10100, 4)
        with pytest.raises(ValueError):
            encode(0b1011, 4)
        with pytest.raises(ValueError):
            decode(8, 4)

    def test_prime_factors(self):
        """Test factorization of Mersenne numbers."""
        assert prime_factors(1) == []
        assert prime_factors(63) == [3, 7]
        assert prime_factors(2 ** 18 - 1) == [3, 7, 19, 73]
        assert prime_factors(2 ** 19 - 1) == [2 ** 19 - 1]

    def test_non_primitive_polynomials(self):
        """Test that reducible and non-primitive irreducibles are rejected."""
        # (x^2 + x + 1)^2
        assert not is_primitive(0b10101, 4)
        # irreducible, but x has order 5
        assert not is_primitive(0b11111, 4)
        assert not is_primitive(0b10010, 4)

    def test_bundled_low_degrees_are_primitive(self):
        """Test every bundled polynomial up to degree 10."""
        table = PolynomialTable(160)
        for degree in table.degrees:
            encoded = table.polynomials(degree)[:-1]
            for index in range(len(encoded)):
                assert is_primitive(table.coefficients(degree, index), degree)

    def test_bundled_degree_18_sample_is_primitive(self):
        """Test the first entries of the largest bundled degree."""
        table = PolynomialTable()
        for index in range(5):
            assert is_primitive(table.coefficients(18, index), 18)

    def test_primitive_count_for_degree_6(self):
        """Test that the degree-6 list is exactly the set of primitives."""
        found = [
            encode(bits, 6)
            for bits in range(1 << 6, 1 << 7)
            if bits & 1 and is_primitive(bits, 6)
        ]
        expected = PolynomialTable(18).polynomials(6)[:-1]

        np.testing.assert_array_equal(found, expected)
