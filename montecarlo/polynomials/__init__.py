"""Primitive polynomials modulo two for low-discrepancy generators."""

from montecarlo.polynomials.table import (
    DEFAULT_CAPACITY,
    MAX_CAPACITY,
    SENTINEL,
    TIERS,
    PolynomialTable,
    PolynomialTier,
    select_tier,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "MAX_CAPACITY",
    "SENTINEL",
    "TIERS",
    "PolynomialTable",
    "PolynomialTier",
    "select_tier",
]
