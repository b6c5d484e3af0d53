"""Signed 64.64 fixed-point math.

Values are plain Python ints holding a signed 128-bit fixed-point number
with 64 integer bits and 64 fractional bits: 1.0 is stored as 2**64.
The algorithms follow ABDK's Math64x64 library so that every result is
bit-exact and reproducible from integer inputs alone; no float is used.

Only the operations the curve engine needs are implemented: conversion
from unsigned integers and ratios, multiplication, binary and natural
logarithms, and truncation back to an integer.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "FixedPointError",
    "DomainError",
    "FixedPointOverflowError",
    # Functions
    "div_trunc",
    "from_uint",
    "divu",
    "mul",
    "to_int",
    "log_2",
    "ln",
    "ln_scaled",
    # Constants
    "ONE_64X64",
    "MIN_64X64",
    "MAX_64X64",
    "MAX_UINT_INPUT",
]

# =============================================================================
# Constants
# =============================================================================

ONE_64X64 = 1 << 64

MIN_64X64 = -(1 << 127)
MAX_64X64 = (1 << 127) - 1

# Largest unsigned integer from_uint accepts (int64 max)
MAX_UINT_INPUT = 0x7FFFFFFFFFFFFFFF

# ln(2) scaled by 2^128
LN2_128 = 0xB17217F7D1CF79ABC9E3B39803F2F6AF


# =============================================================================
# Error classes
# =============================================================================


class FixedPointError(ArithmeticError):
    """Base error for 64.64 fixed-point operations."""

    pass


class DomainError(FixedPointError):
    """Input is outside the domain of the operation (e.g. ln of x <= 0)."""

    pass


class FixedPointOverflowError(FixedPointError):
    """Result does not fit in signed 64.64."""

    pass


# =============================================================================
# Core functions
# =============================================================================


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // operator rounds toward negative infinity, but fixed-width
    signed division truncates toward zero. This matters for negative
    numbers: the curve divides a negative log difference by the scalar
    whenever the pool holds less than half short.

    Raises:
        ZeroDivisionError: If b is zero

    Examples:
        Python: -7 // 3 = -3 (rounds toward -inf)
        div_trunc(-7, 3) = -2 (truncates toward zero)
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in div_trunc")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _check_range(x: int) -> int:
    if not MIN_64X64 <= x <= MAX_64X64:
        raise FixedPointOverflowError(f"Value {x} outside signed 64.64 range")
    return x


def from_uint(x: int) -> int:
    """Convert an unsigned integer to 64.64.

    Raises:
        DomainError: If x is negative or exceeds MAX_UINT_INPUT
    """
    if x < 0 or x > MAX_UINT_INPUT:
        raise DomainError(f"Integer {x} outside [0, {MAX_UINT_INPUT}]")
    return x << 64


def divu(x: int, y: int) -> int:
    """Compute x / y for unsigned x and y as 64.64, rounding down.

    Raises:
        DomainError: If either operand is negative or y is zero
        FixedPointOverflowError: If the quotient does not fit in 64.64
    """
    if x < 0 or y <= 0:
        raise DomainError(f"divu requires x >= 0 and y > 0, got x={x}, y={y}")
    result = (x << 64) // y
    if result > MAX_64X64:
        raise FixedPointOverflowError(f"Quotient {x}/{y} outside signed 64.64 range")
    return result


def mul(x: int, y: int) -> int:
    """Multiply two 64.64 numbers, rounding toward negative infinity.

    Raises:
        FixedPointOverflowError: If the product does not fit in 64.64
    """
    return _check_range((x * y) >> 64)


def to_int(x: int) -> int:
    """Truncate a 64.64 number to its integer part (rounds toward -inf)."""
    return x >> 64


def log_2(x: int) -> int:
    """Compute the binary logarithm of a positive 64.64 number.

    The integer part comes from the position of the most significant bit.
    The fractional bits are produced one at a time by repeatedly squaring
    the normalized mantissa: each square that reaches 2.0 contributes the
    current bit and is halved back into [1, 2).

    Raises:
        DomainError: If x <= 0
        FixedPointOverflowError: If x is not a valid 64.64 value
    """
    if x <= 0:
        raise DomainError(f"log_2 undefined for {x}")
    _check_range(x)

    msb = x.bit_length() - 1
    result = (msb - 64) << 64

    # Mantissa normalized so that its top bit sits at position 127
    ux = x << (127 - msb)
    bit = 1 << 63
    while bit > 0:
        ux *= ux
        b = ux >> 255
        ux >>= 127 + b
        result += bit * b
        bit >>= 1

    return result


def ln(x: int) -> int:
    """Compute the natural logarithm of a positive 64.64 number.

    ln(x) = log_2(x) * ln(2)

    Raises:
        DomainError: If x <= 0
    """
    return (log_2(x) * LN2_128) >> 128


def ln_scaled(value: int, precision: int = 10**9) -> int:
    """Compute ln(value) for an unsigned integer, scaled by precision.

    The argument is lifted to 64.64 with from_uint, its logarithm is
    multiplied by precision (itself lifted to 64.64) and truncated back to
    an integer. With precision = 1e9 the result is in rate units.

    Args:
        value: Unsigned integer argument (1 <= value <= MAX_UINT_INPUT)
        precision: Unsigned scale of the result

    Returns:
        floor(ln(value) * precision) up to the 64.64 rounding of each step

    Raises:
        DomainError: If value is zero or exceeds MAX_UINT_INPUT
        FixedPointOverflowError: If the rescaled logarithm leaves 64.64
    """
    log = ln(from_uint(value))
    return to_int(mul(log, from_uint(precision)))
