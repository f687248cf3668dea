"""
Checked integer helpers for the u64/u128/u256 ranges used by the settlement program.

Python integers never wrap, so every helper here re-imposes the fixed width of
the value it produces and raises instead of truncating:

- Casts: `to_u64` / `to_u128` reject negatives and anything above the width.
- Arithmetic: `safe_add`, `safe_sub`, `safe_mul` check against a chosen bound.
- Division: `floor_div` / `ceil_div` and `mul_div(x, y, d, round_up)`, the
  multiply-then-divide used by the curve formulas (product kept in u256).
"""

from __future__ import annotations

from .constants import U64_MAX, U128_MAX, U256_MAX
from .exc import MathOverflowError, DivisionByZeroError

# Debug printing control
DEBUG_SAFE_MATH = False

def _dbg(msg: str) -> None:
    if DEBUG_SAFE_MATH:
        print(msg)


# ----------------------------
# Range checks
# ----------------------------

def _check_range(x: int, bound: int, what: str) -> int:
    if x < 0 or x > bound:
        _dbg(f"range: {what} out of bounds x={x}")
        raise MathOverflowError(f"{what} out of range: {x}")
    return x


def to_u64(x: int) -> int:
    return _check_range(x, U64_MAX, "u64")


def to_u128(x: int) -> int:
    return _check_range(x, U128_MAX, "u128")


def to_u256(x: int) -> int:
    return _check_range(x, U256_MAX, "u256")


# ----------------------------
# Checked arithmetic
# ----------------------------

def safe_add(a: int, b: int, bound: int = U128_MAX) -> int:
    return _check_range(a + b, bound, "add")


def safe_sub(a: int, b: int) -> int:
    if b > a:
        raise MathOverflowError(f"subtraction underflow: {a} - {b}")
    return a - b


def safe_mul(a: int, b: int, bound: int = U128_MAX) -> int:
    return _check_range(a * b, bound, "mul")


def floor_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError("division by zero")
    return a // b


def ceil_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError("division by zero")
    return 0 if a == 0 else -(-a // b)


def mul_div(x: int, y: int, denominator: int, round_up: bool) -> int:
    """Return x * y / denominator, rounded up or down, as a u128.

    The product is held in u256 (as the settlement program does); only the
    quotient is narrowed back to u128.
    """
    if denominator == 0:
        raise DivisionByZeroError("mul_div denominator is zero")
    prod = to_u256(x * y)
    if round_up:
        result = ceil_div(prod, denominator)
    else:
        result = prod // denominator
    _dbg(f"mul_div: x={x}, y={y}, d={denominator}, up={round_up} -> {result}")
    return to_u128(result)


def shr_round(x: int, shift: int, round_up: bool) -> int:
    """Right shift by `shift` bits; when rounding up any discarded bit adds one."""
    if round_up:
        return (x + (1 << shift) - 1) >> shift
    return x >> shift


__all__ = [
    "to_u64",
    "to_u128",
    "to_u256",
    "safe_add",
    "safe_sub",
    "safe_mul",
    "floor_div",
    "ceil_div",
    "mul_div",
    "shr_round",
]
