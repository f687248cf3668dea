"""
Curve Quote Core Constants (integer domain)
===========================================

Only settlement-aligned integer constants live here. Decimal display helpers
live in `fmt.py`.
"""

# NOTE: Prices are sqrt prices in Q64.64; liquidity is stored pre-scaled by 2^64.

# ---------------------------------------------------------------------------
# Integer widths
# ---------------------------------------------------------------------------

U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1
U256_MAX: int = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Q64.64 fixed point
# ---------------------------------------------------------------------------

#: Number of fractional bits (position of the radix point).
SCALE_OFFSET: int = 64
ONE_Q64: int = 1 << SCALE_OFFSET

#: Curve products carry two Q64 factors; rescale by 2 * SCALE_OFFSET.
RESOLUTION_SHIFT: int = 2 * SCALE_OFFSET

#: Exponents at or above this bound overflow (bit 19 is the last one walked).
MAX_EXPONENTIAL: int = 0x80000


# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------

BASIS_POINT_MAX: int = 10_000

#: Fee numerators are basis points of the traded amount.
FEE_DENOMINATOR: int = BASIS_POINT_MAX
MAX_FEE_NUMERATOR: int = BASIS_POINT_MAX

#: Protocol/referral shares are whole percentages.
PERCENT_DENOMINATOR: int = 100

#: Variable fee scale-down: ceil(v_fee / 1e11).
DYNAMIC_FEE_SCALE: int = 100_000_000_000
DYNAMIC_FEE_ROUNDING: int = DYNAMIC_FEE_SCALE - 1


# ---------------------------------------------------------------------------
# Curve and pool
# ---------------------------------------------------------------------------

MAX_CURVE_POINT: int = 20

MIN_SQRT_PRICE: int = 4_295_048_016
MAX_SQRT_PRICE: int = 79_226_673_521_066_979_257_578_248_091

#: Whole tokens; scaled by 10**token_decimal for the raw supply.
MAX_TOKEN_SUPPLY: int = 10_000_000_000

#: Buffered initial supply = (swap + migration) * 5 / 4.
SUPPLY_BUFFER_NUM: int = 5
SUPPLY_BUFFER_DEN: int = 4


__all__ = [
    "U64_MAX",
    "U128_MAX",
    "U256_MAX",
    "SCALE_OFFSET",
    "ONE_Q64",
    "RESOLUTION_SHIFT",
    "MAX_EXPONENTIAL",
    "BASIS_POINT_MAX",
    "FEE_DENOMINATOR",
    "MAX_FEE_NUMERATOR",
    "PERCENT_DENOMINATOR",
    "DYNAMIC_FEE_SCALE",
    "DYNAMIC_FEE_ROUNDING",
    "MAX_CURVE_POINT",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "MAX_TOKEN_SUPPLY",
    "SUPPLY_BUFFER_NUM",
    "SUPPLY_BUFFER_DEN",
]
