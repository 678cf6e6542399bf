"""Helpers for polynomials over GF(2) stored as integer bit patterns.

Bit ``k`` of a pattern is the coefficient of ``x**k``.
"""

from typing import List


def encode(bits: int, degree: int) -> int:
    """Strip the leading and trailing coefficients of a degree-``degree`` polynomial.

    Parameters
    ----------
    bits : int
        Full coefficient pattern; both outer coefficients must be 1
    degree : int
        Polynomial degree

    Returns
    -------
    int
        Interior coefficients only

    Raises
    ------
    ValueError
        If the pattern does not describe a degree-``degree`` polynomial with a
        non-zero constant term
    """
    if degree < 1 or bits >> degree != 1 or not bits & 1:
        raise ValueError(
            f"{bits:#b} is not a degree-{degree} polynomial with constant term 1"
        )
    return (bits ^ (1 << degree)) >> 1


def decode(encoded: int, degree: int) -> int:
    """Restore the implied leading and trailing coefficients."""
    if degree < 1 or encoded < 0 or encoded >> max(degree - 1, 0):
        raise ValueError(f"{encoded} cannot encode a degree-{degree} polynomial")
    return (1 << degree) | (encoded << 1) | 1


def prime_factors(n: int) -> List[int]:
    """Distinct prime factors of ``n`` in ascending order."""
    factors = []
    p = 2
    while p * p <= n:
        if n % p == 0:
            factors.append(p)
            while n % p == 0:
                n //= p
        p += 1 if p == 2 else 2
    if n > 1:
        factors.append(n)
    return factors


def _mulmod(a: int, b: int, modulus: int, degree: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        b >>= 1
        a <<= 1
        if a >> degree & 1:
            a ^= modulus
    return result


def _x_power(exponent: int, modulus: int, degree: int) -> int:
    # x**exponent reduced modulo the polynomial
    result = 1
    base = 2 if degree > 1 else 2 ^ modulus
    while exponent:
        if exponent & 1:
            result = _mulmod(result, base, modulus, degree)
        base = _mulmod(base, base, modulus, degree)
        exponent >>= 1
    return result


def is_primitive(bits: int, degree: int) -> bool:
    """Check whether a full coefficient pattern is a primitive polynomial.

    A polynomial of degree ``d`` with a non-zero constant term is primitive
    exactly when ``x`` has multiplicative order ``2**d - 1`` modulo it.

    Parameters
    ----------
    bits : int
        Full coefficient pattern, as returned by :func:`decode`
    degree : int
        Polynomial degree

    Returns
    -------
    bool
        True if the polynomial is primitive over GF(2)
    """
    if degree < 1 or bits >> degree != 1 or not bits & 1:
        return False
    order = (1 << degree) - 1
    if _x_power(order, bits, degree) != 1:
        return False
    return all(
        _x_power(order // q, bits, degree) != 1 for q in prime_factors(order)
    )
