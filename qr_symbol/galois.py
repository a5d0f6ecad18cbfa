"""
Galois Field GF(2^8) arithmetic for QR codes.

Uses the primitive polynomial x^8 + x^4 + x^3 + x^2 + 1 (0x11d = 285)
with generator alpha = 2. The exp/log tables are built once at import.

References:
- https://en.wikipedia.org/wiki/Finite_field_arithmetic
- https://research.swtch.com/field
"""

from typing import List, Tuple

PRIMITIVE_POLY = 0x11d  # x^8 + x^4 + x^3 + x^2 + 1 = 285


def multiply_no_table(a: int, b: int) -> int:
    """
    Multiply two GF(256) elements without using tables.
    Uses Russian peasant multiplication with polynomial reduction.
    """
    result = 0
    while b > 0:
        if b & 1:  # If lowest bit is set
            result ^= a  # Add (XOR) a to result
        b >>= 1
        a <<= 1
        if a & 0x100:  # If degree >= 8
            a ^= PRIMITIVE_POLY  # Reduce modulo primitive
    return result


def _build_tables() -> Tuple[List[int], List[int]]:
    """Build exponential and logarithm lookup tables using alpha = 2."""
    exp_table = [0] * 512  # Extended so log sums need no modulo
    log_table = [0] * 256
    x = 1
    for i in range(255):
        exp_table[i] = x
        exp_table[i + 255] = x
        log_table[x] = i
        x = multiply_no_table(x, 2)
    log_table[0] = -1  # log(0) is undefined
    return exp_table, log_table


EXP_TABLE, LOG_TABLE = _build_tables()


def gf_add(a: int, b: int) -> int:
    """Addition (and subtraction) in GF(256) is XOR."""
    return a ^ b


def gf_multiply(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[a] + LOG_TABLE[b]]


def gf_divide(a: int, b: int) -> int:
    """Divide a by b in GF(256)."""
    if b == 0:
        raise ZeroDivisionError("Division by zero in GF(256)")
    if a == 0:
        return 0
    return EXP_TABLE[(LOG_TABLE[a] - LOG_TABLE[b]) % 255]


def gf_power(a: int, n: int) -> int:
    if a == 0:
        return 0 if n > 0 else 1
    return EXP_TABLE[(LOG_TABLE[a] * n) % 255]


def gf_inverse(a: int) -> int:
    """Find multiplicative inverse of a in GF(256)."""
    if a == 0:
        raise ZeroDivisionError("No inverse for 0")
    # a^(-1) = a^254 since a^255 = 1
    return EXP_TABLE[255 - LOG_TABLE[a]]


#==============================================================================
# POLYNOMIALS OVER GF(256)
#==============================================================================
# Coefficient lists are stored highest degree first.

def poly_multiply(p: List[int], q: List[int]) -> List[int]:
    """Multiply two polynomials."""
    result = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        for j, b in enumerate(q):
            result[i + j] ^= gf_multiply(a, b)
    return result


def poly_evaluate(poly: List[int], x: int) -> int:
    """Evaluate polynomial at x using Horner's method."""
    result = 0
    for coeff in poly:
        result = gf_multiply(result, x) ^ coeff
    return result
