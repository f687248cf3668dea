import pytest

from curve_quote.core.constants import ONE_Q64, U128_MAX, MAX_EXPONENTIAL
from curve_quote.core.exc import MathOverflowError
from curve_quote.core.fixed_point import q64, mul_shift, pow_q64
from curve_quote.core.fmt import fmt_dec, q64_to_decimal
from curve_quote.price_math import get_price_from_id

HALF = ONE_Q64 // 2


def _qd(x: int) -> str:
    return fmt_dec(q64_to_decimal(x), places=12)


# -----------------------------
# Basic helpers
# -----------------------------

def test_q64_and_mul_shift():
    assert q64(3) == 3 * ONE_Q64
    assert mul_shift(q64(3), q64(5)) == q64(15)
    # truncation, not rounding
    assert mul_shift(1, 1) == 0


# -----------------------------
# pow_q64
# -----------------------------

@pytest.mark.parametrize("base", [1, HALF, ONE_Q64, 3 * ONE_Q64, U128_MAX])
def test_pow_zero_exponent_is_exactly_one(base):
    print(f"[pow-zero] base={base} -> expect ONE")
    assert pow_q64(base, 0) == ONE_Q64


@pytest.mark.parametrize(
    "exponent,expected",
    [
        (1, ONE_Q64 >> 1),
        (2, ONE_Q64 >> 2),
        (3, ONE_Q64 >> 3),
        (10, ONE_Q64 >> 10),
    ],
)
def test_pow_half_is_exact(exponent, expected):
    r = pow_q64(HALF, exponent)
    print(f"[pow-half] 0.5^{exponent} -> {_qd(r)}")
    assert r == expected


def test_pow_negative_exponent_inverts_with_u128_max():
    # 0.5^-1 is U128_MAX // 0.5, one unit below 2.0
    r = pow_q64(HALF, -1)
    print(f"[pow-neg] 0.5^-1 -> {_qd(r)}")
    assert r == U128_MAX // HALF
    assert r == 2 * ONE_Q64 - 1


def test_pow_base_above_one_uses_inverted_base():
    # base 2.0 is replaced by U128_MAX // 2.0 = 2^63 - 1, then inverted back
    r = pow_q64(2 * ONE_Q64, 1)
    print(f"[pow-above-one] 2^1 -> {r} ({_qd(r)})")
    assert r == 2 * ONE_Q64 + 4


@pytest.mark.parametrize("exponent", [MAX_EXPONENTIAL, -MAX_EXPONENTIAL, MAX_EXPONENTIAL + 1])
def test_pow_exponent_bound(exponent):
    with pytest.raises(MathOverflowError):
        pow_q64(HALF, exponent)


def test_pow_largest_allowed_exponent_walks_all_bits():
    # 2^19 - 1 sets every bit below the bound; a base just under 1.0 survives it
    r = pow_q64(ONE_Q64 - 1, MAX_EXPONENTIAL - 1)
    assert 0 < r < ONE_Q64


@pytest.mark.parametrize("base,exponent", [(0, 1), (1, 2), (HALF, 200)])
def test_pow_result_collapsing_to_zero_raises(base, exponent):
    with pytest.raises(MathOverflowError):
        pow_q64(base, exponent)


def test_pow_rejects_base_outside_u128():
    with pytest.raises(MathOverflowError):
        pow_q64(U128_MAX + 1, 1)
    with pytest.raises(MathOverflowError):
        pow_q64(-1, 1)


def test_pow_below_one_is_non_increasing_in_exponent():
    base = ONE_Q64 - ONE_Q64 // 100  # ~0.99
    prev = ONE_Q64
    for e in range(0, 64):
        r = pow_q64(base, e)
        assert r <= prev, f"exponent {e}: {r} > {prev}"
        prev = r


# -----------------------------
# Bin-id price
# -----------------------------

def test_price_from_id_zero_is_one():
    assert get_price_from_id(0, 1) == ONE_Q64


def test_price_from_id_sign_moves_price():
    up = get_price_from_id(100, 1)
    down = get_price_from_id(-100, 1)
    print(f"[price-id] (1.0001)^100 -> {_qd(up)}, (1.0001)^-100 -> {_qd(down)}")
    assert up > ONE_Q64
    assert down < ONE_Q64


def test_price_from_id_out_of_range():
    with pytest.raises(MathOverflowError):
        get_price_from_id(1_000_000, 100)
