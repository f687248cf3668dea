"""
Curve maths for a single constant-liquidity segment (pure formulas only).

All prices are Q64.64 sqrt prices and liquidity is pre-scaled by 2^64, so:

    Δbase  = L * (√P_upper - √P_lower) / (√P_upper * √P_lower)
    Δquote = L * (√P_upper - √P_lower) >> 128
    √P'    = L * √P / (L + Δbase_in * √P)          (base in, price falls)
    √P'    = √P + (Δquote_in << 128) / L            (quote in, price rises)
    √P'    = L * √P / (L - Δbase_out * √P)         (base out, price rises)
    √P'    = √P - (Δquote_out << 128) / L           (quote out, price falls)

Rounding is chosen by the caller so that the pool is never short-changed:
amounts the trader pays round up, amounts the trader receives round down.
"""

from __future__ import annotations

from .core.constants import RESOLUTION_SHIFT
from .core.exc import MathOverflowError, InvalidPriceError, DivisionByZeroError
from .core.safe_math import to_u64, to_u128, to_u256, mul_div, shr_round, ceil_div

# Debug printing control
DEBUG_CURVE = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE:
        print(f"[CURVE] {msg}")


def _validate_range(lower_sqrt_price: int, upper_sqrt_price: int, liquidity: int) -> None:
    if liquidity == 0:
        raise MathOverflowError("liquidity is zero")
    if lower_sqrt_price >= upper_sqrt_price:
        raise InvalidPriceError(
            f"lower sqrt price {lower_sqrt_price} must be below upper {upper_sqrt_price}"
        )


# ----------------------------
# Delta amounts
# ----------------------------

def get_delta_amount_base_unchecked(
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Δbase over [lower, upper) without the u64 bound (u256 intermediate)."""
    if lower_sqrt_price == 0 or upper_sqrt_price == 0:
        raise DivisionByZeroError("sqrt price is zero")
    numerator = to_u256(liquidity * (upper_sqrt_price - lower_sqrt_price))
    denominator = to_u256(upper_sqrt_price * lower_sqrt_price)
    if round_up:
        return ceil_div(numerator, denominator)
    return numerator // denominator


def get_delta_amount_base_unsigned(
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Base token amount spanned by [lower, upper) at `liquidity`, as a u64."""
    _validate_range(lower_sqrt_price, upper_sqrt_price, liquidity)
    result = get_delta_amount_base_unchecked(lower_sqrt_price, upper_sqrt_price, liquidity, round_up)
    _dbg(f"delta_base: [{lower_sqrt_price}, {upper_sqrt_price}) L={liquidity} up={round_up} -> {result}")
    return to_u64(result)


def get_delta_amount_quote_unchecked(
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Δquote over [lower, upper) without the u64 bound."""
    product = to_u256(liquidity * (upper_sqrt_price - lower_sqrt_price))
    return shr_round(product, RESOLUTION_SHIFT, round_up)


def get_delta_amount_quote_unsigned(
    lower_sqrt_price: int,
    upper_sqrt_price: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Quote token amount spanned by [lower, upper) at `liquidity`, as a u64."""
    _validate_range(lower_sqrt_price, upper_sqrt_price, liquidity)
    result = get_delta_amount_quote_unchecked(lower_sqrt_price, upper_sqrt_price, liquidity, round_up)
    _dbg(f"delta_quote: [{lower_sqrt_price}, {upper_sqrt_price}) L={liquidity} up={round_up} -> {result}")
    return to_u64(result)


# ----------------------------
# Next price from an input amount
# ----------------------------

def get_next_sqrt_price_from_amount_base(
    sqrt_price: int,
    liquidity: int,
    amount_in: int,
    round_up: bool,
) -> int:
    """Price after adding `amount_in` base tokens (price moves down)."""
    if liquidity == 0:
        raise MathOverflowError("liquidity is zero")
    if amount_in == 0:
        return sqrt_price
    product = to_u256(amount_in * sqrt_price)
    denominator = to_u256(liquidity + product)
    return mul_div(liquidity, sqrt_price, denominator, round_up)


def get_next_sqrt_price_from_amount_quote(
    sqrt_price: int,
    liquidity: int,
    amount_in: int,
) -> int:
    """Price after adding `amount_in` quote tokens (price moves up, rounded down)."""
    if liquidity == 0:
        raise MathOverflowError("liquidity is zero")
    quotient = (amount_in << RESOLUTION_SHIFT) // liquidity
    return to_u128(sqrt_price + quotient)


def get_next_sqrt_price_from_input(
    sqrt_price: int,
    liquidity: int,
    amount_in: int,
    base_for_quote: bool,
) -> int:
    """Dispatch on trade direction; base input rounds the price up."""
    if sqrt_price == 0:
        raise DivisionByZeroError("sqrt price is zero")
    if base_for_quote:
        return get_next_sqrt_price_from_amount_base(sqrt_price, liquidity, amount_in, True)
    return get_next_sqrt_price_from_amount_quote(sqrt_price, liquidity, amount_in)


# ----------------------------
# Next price from an output amount
# ----------------------------

def get_next_sqrt_price_from_amount_base_output(
    sqrt_price: int,
    liquidity: int,
    amount_out: int,
) -> int:
    """Price after removing `amount_out` base tokens (price moves up, rounded down).

    √P' = L * √P / (L - Δbase_out * √P)
    """
    if amount_out == 0:
        return sqrt_price
    product = to_u256(amount_out * sqrt_price)
    if product >= liquidity:
        raise MathOverflowError(f"base output {amount_out} drains liquidity {liquidity}")
    return mul_div(liquidity, sqrt_price, liquidity - product, False)


def get_next_sqrt_price_from_amount_quote_output(
    sqrt_price: int,
    liquidity: int,
    amount_out: int,
) -> int:
    """Price after removing `amount_out` quote tokens (price moves down, quotient rounded up).

    √P' = √P - ceil((Δquote_out << 128) / L)
    """
    if liquidity == 0:
        raise MathOverflowError("liquidity is zero")
    quotient = ceil_div(to_u256(amount_out << RESOLUTION_SHIFT), liquidity)
    if quotient > sqrt_price:
        raise MathOverflowError(f"quote output {amount_out} moves price below zero")
    return sqrt_price - quotient


def get_next_sqrt_price_from_output(
    sqrt_price: int,
    liquidity: int,
    amount_out: int,
    is_quote: bool,
) -> int:
    """Dispatch on the output token; rounding keeps the walk short of the target price."""
    if sqrt_price == 0:
        raise DivisionByZeroError("sqrt price is zero")
    if is_quote:
        return get_next_sqrt_price_from_amount_quote_output(sqrt_price, liquidity, amount_out)
    return get_next_sqrt_price_from_amount_base_output(sqrt_price, liquidity, amount_out)


__all__ = [
    "get_delta_amount_base_unchecked",
    "get_delta_amount_base_unsigned",
    "get_delta_amount_quote_unchecked",
    "get_delta_amount_quote_unsigned",
    "get_next_sqrt_price_from_amount_base",
    "get_next_sqrt_price_from_amount_quote",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_amount_base_output",
    "get_next_sqrt_price_from_amount_quote_output",
    "get_next_sqrt_price_from_output",
]
