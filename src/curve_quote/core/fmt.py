"""
Formatting helpers and Decimal views of Q64.64 values (non-core arithmetic).

Core arithmetic uses Python integers with explicit width checks. Decimal here
is only for display (logs, demo output, tests).
"""

from decimal import Decimal, localcontext, ROUND_DOWN

from .constants import ONE_Q64, RESOLUTION_SHIFT
from .exc import MathOverflowError


#: Significant digits for Decimal views; enough for a full u128.
DEFAULT_DECIMAL_PRECISION: int = 50


def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('123456')   -> '1.234560000000000000E+5'
    """
    return format(x, f".{places}E")


def q64_to_decimal(x: int) -> Decimal:
    """Q64.64 integer as an exact-as-possible Decimal."""
    if x < 0:
        raise MathOverflowError("negative Q64.64 value")
    with localcontext() as ctx:
        ctx.prec = DEFAULT_DECIMAL_PRECISION
        return Decimal(x) / Decimal(ONE_Q64)


def decimal_to_q64(x: Decimal) -> int:
    """Decimal to Q64.64, truncating toward zero."""
    if x.is_nan() or x.is_infinite() or x < 0:
        raise MathOverflowError(f"invalid Decimal for Q64.64: {x}")
    with localcontext() as ctx:
        ctx.prec = DEFAULT_DECIMAL_PRECISION
        return int((x * ONE_Q64).to_integral_value(rounding=ROUND_DOWN))


def price_from_sqrt_price(sqrt_price: int) -> int:
    """Integer linear price: (sqrt_price^2) >> 128."""
    return (sqrt_price * sqrt_price) >> RESOLUTION_SHIFT


def price_to_decimal(sqrt_price: int) -> Decimal:
    """Linear price (sqrt_price / 2^64)^2 as a Decimal, for display only."""
    with localcontext() as ctx:
        ctx.prec = DEFAULT_DECIMAL_PRECISION
        s = q64_to_decimal(sqrt_price)
        return s * s


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "q64_to_decimal",
    "decimal_to_q64",
    "price_from_sqrt_price",
    "price_to_decimal",
]
