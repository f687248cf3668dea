import pytest

from curve_quote.core.constants import ONE_Q64, U64_MAX, U128_MAX
from curve_quote.core.exc import MathOverflowError, InvalidPriceError, DivisionByZeroError
from curve_quote.curve_math import (
    get_delta_amount_base_unchecked,
    get_delta_amount_base_unsigned,
    get_delta_amount_quote_unchecked,
    get_delta_amount_quote_unsigned,
    get_next_sqrt_price_from_amount_base,
    get_next_sqrt_price_from_amount_quote,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_amount_base_output,
    get_next_sqrt_price_from_amount_quote_output,
    get_next_sqrt_price_from_output,
)


def Q(n: int) -> int:
    return n * ONE_Q64


# -----------------------------
# Delta amounts
# -----------------------------

def test_delta_quote_exact():
    # L * (upper - lower) >> 128 with L = 1000 (pre-scaled)
    assert get_delta_amount_quote_unsigned(Q(1), Q(2), Q(1000), False) == 1000
    assert get_delta_amount_quote_unsigned(Q(1), Q(2), Q(1000), True) == 1000
    assert get_delta_amount_quote_unsigned(Q(2), Q(4), Q(2000), False) == 4000


def test_delta_base_exact_and_rounding():
    assert get_delta_amount_base_unsigned(Q(1), Q(2), Q(1000), False) == 500
    # 1000 * 2 / 3 = 666.67
    down = get_delta_amount_base_unsigned(Q(1), Q(3), Q(1000), False)
    up = get_delta_amount_base_unsigned(Q(1), Q(3), Q(1000), True)
    print(f"[delta-base] [1,3) L=1000 -> down={down}, up={up}")
    assert (down, up) == (666, 667)


@pytest.mark.parametrize(
    "lower,upper,liquidity",
    [
        (Q(1), Q(1) + 1, Q(1)),
        (Q(1), Q(2), 1),
        (ONE_Q64 // 3, Q(7), Q(12345)),
        (4_295_048_016, Q(1), 10**30),
    ],
)
def test_delta_amounts_round_up_never_below_round_down(lower, upper, liquidity):
    for fn in (get_delta_amount_base_unchecked, get_delta_amount_quote_unchecked):
        down = fn(lower, upper, liquidity, False)
        up = fn(lower, upper, liquidity, True)
        print(f"[round] {fn.__name__}: down={down}, up={up}")
        assert up >= down
        assert up - down <= 1
        assert up > 0


@pytest.mark.parametrize(
    "lower,upper,liquidity",
    [
        (Q(1), Q(2), Q(1000)),
        (Q(1), Q(3), Q(7)),
        (ONE_Q64 // 2, Q(5), Q(10**6)),
    ],
)
def test_delta_amounts_positive_for_valid_ranges(lower, upper, liquidity):
    assert get_delta_amount_base_unsigned(lower, upper, liquidity, False) > 0
    assert get_delta_amount_quote_unsigned(lower, upper, liquidity, False) > 0


def test_delta_base_zero_liquidity_is_overflow():
    with pytest.raises(MathOverflowError):
        get_delta_amount_base_unsigned(Q(1), Q(2), 0, False)


def test_delta_quote_equal_prices_is_invalid():
    with pytest.raises(InvalidPriceError):
        get_delta_amount_quote_unsigned(Q(1), Q(1), Q(1), False)
    with pytest.raises(InvalidPriceError):
        get_delta_amount_base_unsigned(Q(2), Q(1), Q(1), False)


def test_delta_base_zero_price_divides_by_zero():
    with pytest.raises(DivisionByZeroError):
        get_delta_amount_base_unsigned(0, Q(1), Q(1), False)


def test_delta_above_u64_only_fails_when_checked():
    liquidity = (U64_MAX + 1) * ONE_Q64
    assert get_delta_amount_quote_unchecked(Q(1), Q(2), liquidity, False) == U64_MAX + 1
    with pytest.raises(MathOverflowError):
        get_delta_amount_quote_unsigned(Q(1), Q(2), liquidity, False)


# -----------------------------
# Next sqrt price
# -----------------------------

def test_next_price_from_quote():
    assert get_next_sqrt_price_from_amount_quote(Q(1), ONE_Q64, 1) == 36893488147419103232
    assert get_next_sqrt_price_from_amount_quote(Q(1), Q(1000), 1000) == Q(2)
    assert get_next_sqrt_price_from_amount_quote(Q(3), Q(1000), 0) == Q(3)


def test_next_price_from_base():
    # selling the full base capacity of [1, 2) brings the price back to 1
    assert get_next_sqrt_price_from_amount_base(Q(2), Q(1000), 500, False) == Q(1)
    assert get_next_sqrt_price_from_amount_base(Q(2), Q(1000), 500, True) == Q(1)
    assert get_next_sqrt_price_from_amount_base(Q(2), Q(1000), 0, True) == Q(2)
    # 2 * 1000 / (1000 + 1000 * 2) = 2/3, inexact
    down = get_next_sqrt_price_from_amount_base(Q(2), Q(1000), 1000, False)
    up = get_next_sqrt_price_from_amount_base(Q(2), Q(1000), 1000, True)
    assert up == down + 1


def test_next_price_consistent_with_delta():
    # quote in moves the price up by exactly what delta_quote spans
    nxt = get_next_sqrt_price_from_amount_quote(Q(2), Q(2000), 4000)
    assert nxt == Q(4)
    assert get_delta_amount_quote_unsigned(Q(2), nxt, Q(2000), False) == 4000


def test_next_price_errors():
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_quote(Q(1), 0, 1)
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_base(Q(1), 0, 1, True)
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_quote(U128_MAX - 1, ONE_Q64, 1)
    with pytest.raises(DivisionByZeroError):
        get_next_sqrt_price_from_input(0, Q(1), 1, True)


def test_next_price_from_input_dispatch():
    assert get_next_sqrt_price_from_input(Q(2), Q(1000), 500, True) == Q(1)
    assert get_next_sqrt_price_from_input(Q(1), Q(1000), 1000, False) == Q(2)


# -----------------------------
# Next sqrt price from an output amount
# -----------------------------

def test_next_price_from_base_output():
    # 1000 * 1 / (1000 - 250) = 4/3, rounded down
    assert get_next_sqrt_price_from_amount_base_output(Q(1), Q(1000), 250) == (4 * ONE_Q64) // 3
    assert get_next_sqrt_price_from_output(Q(1), Q(1000), 250, False) == (4 * ONE_Q64) // 3
    assert get_next_sqrt_price_from_amount_base_output(Q(1), Q(1000), 0) == Q(1)


def test_next_price_from_quote_output():
    assert get_next_sqrt_price_from_amount_quote_output(Q(4), Q(2000), 1000) == Q(7) // 2
    assert get_next_sqrt_price_from_output(Q(4), Q(2000), 1000, True) == Q(7) // 2
    assert get_next_sqrt_price_from_amount_quote_output(Q(4), Q(2000), 0) == Q(4)


def test_next_price_from_quote_output_rounds_step_up():
    # 2^128 / (3 * 2^64) is not exact; the step is rounded up so the price lands lower
    step = -(-ONE_Q64 // 3)
    assert get_next_sqrt_price_from_amount_quote_output(Q(1), Q(3), 1) == Q(1) - step


def test_output_that_drains_the_segment():
    # amount * sqrt_price >= liquidity leaves no denominator
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_base_output(Q(1), Q(1000), 1000)
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_quote_output(Q(1), Q(1), 2)
    with pytest.raises(MathOverflowError):
        get_next_sqrt_price_from_amount_quote_output(Q(1), 0, 1)


def test_next_price_from_output_zero_price():
    with pytest.raises(DivisionByZeroError):
        get_next_sqrt_price_from_output(0, Q(1000), 1, True)
