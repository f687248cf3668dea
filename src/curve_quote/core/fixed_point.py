"""
Q64.64 fixed-point exponentiation aligned with the settlement program's `pow`.

Alignment notes:
- Binary exponentiation walks the exponent bit by bit below MAX_EXPONENTIAL.
- Every multiply is truncated back to Q64.64 by `>> 64` (no rounding).
- If base >= 1.0 it is replaced by U128_MAX // base and the invert flag flips,
  so squared values stay below 1.0 and each product fits in 128 bits.
- Negative exponents invert the final result with the same U128_MAX // x.
"""

from __future__ import annotations

from .constants import ONE_Q64, SCALE_OFFSET, MAX_EXPONENTIAL, U128_MAX
from .exc import MathOverflowError

# Debug printing control
DEBUG_FIXED_POINT = False

def _dbg(msg: str) -> None:
    if DEBUG_FIXED_POINT:
        print(msg)


def q64(x: int) -> int:
    """Integer x as Q64.64."""
    return x << SCALE_OFFSET


def mul_shift(a: int, b: int) -> int:
    """Q64.64 product truncated back to Q64.64."""
    return (a * b) >> SCALE_OFFSET


def pow_q64(base: int, exponent: int) -> int:
    """Return base ** exponent in Q64.64.

    Raises MathOverflowError when |exponent| >= MAX_EXPONENTIAL or when the
    running result collapses to zero.
    """
    if base < 0 or base > U128_MAX:
        raise MathOverflowError(f"pow base out of u128 range: {base}")

    invert = exponent < 0

    if exponent == 0:
        return ONE_Q64

    exp = abs(exponent)
    if exp >= MAX_EXPONENTIAL:
        raise MathOverflowError(f"pow exponent {exponent} exceeds bound {MAX_EXPONENTIAL}")

    squared_base = base
    result = ONE_Q64

    # Keep squared_base below 1.0 so squaring never needs more than 128 bits.
    if squared_base >= result:
        squared_base = U128_MAX // squared_base
        invert = not invert

    bit = 1
    while bit < MAX_EXPONENTIAL:
        if exp & bit:
            result = mul_shift(result, squared_base)
        bit <<= 1
        if bit < MAX_EXPONENTIAL:
            squared_base = mul_shift(squared_base, squared_base)

    _dbg(f"pow: base={base}, exp={exponent}, raw={result}, invert={invert}")

    if result == 0:
        raise MathOverflowError(f"pow result underflowed to zero (base={base}, exp={exponent})")

    if invert:
        result = U128_MAX // result

    return result


__all__ = [
    "q64",
    "mul_shift",
    "pow_q64",
]
