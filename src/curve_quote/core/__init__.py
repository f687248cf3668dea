"""
Curve Quote Core
================

Unified exports for integer-domain primitives aligned with the settlement
program's arithmetic. All values are Python ints re-checked against the
u64/u128 widths the program uses; Decimal helpers exist *only* for display.
"""

# NOTE:
#   Prices are Q64.64 sqrt prices, liquidity is pre-scaled by 2^64 and token
#   amounts are u64. Any value leaving its width raises MathOverflowError
#   instead of wrapping.

# Integer-domain constants
from .constants import (
    U64_MAX,
    U128_MAX,
    SCALE_OFFSET,
    ONE_Q64,
    RESOLUTION_SHIFT,
    MAX_EXPONENTIAL,
    BASIS_POINT_MAX,
    FEE_DENOMINATOR,
    MAX_FEE_NUMERATOR,
    MAX_CURVE_POINT,
    MIN_SQRT_PRICE,
    MAX_SQRT_PRICE,
    MAX_TOKEN_SUPPLY,
)

# Checked arithmetic
from .safe_math import (
    to_u64,
    to_u128,
    safe_add,
    safe_sub,
    safe_mul,
    ceil_div,
    mul_div,
)

# Fixed-point power
from .fixed_point import q64, pow_q64

# Display helpers (non-core arithmetic)
from .fmt import (
    fmt_dec,
    q64_to_decimal,
    decimal_to_q64,
    price_from_sqrt_price,
    price_to_decimal,
)

# Datatypes
from .datatypes import (
    TradeDirection,
    CollectFeeMode,
    FeeSchedulerMode,
    ActivationType,
    CurvePoint,
    BaseFeeConfig,
    DynamicFeeConfig,
    PoolFees,
    PoolConfig,
    PoolMetrics,
    VirtualPool,
    FeeMode,
    FeeOnAmount,
    SwapAmount,
    SwapResult,
    FeeBreakdown,
    PriceSnapshot,
    QuoteResult,
    PartialFillQuoteResult,
    ExactOutQuoteResult,
)

# Exceptions
from .exc import (
    CurveQuoteError,
    MathOverflowError,
    InvalidPriceError,
    DivisionByZeroError,
    NotEnoughLiquidityError,
    InvalidCollectFeeModeError,
    InvalidFeeSchedulerModeError,
    InvalidActivationTypeError,
    PoolCompletedError,
    AmountIsZeroError,
    InvalidCurveError,
)

__all__ = [
    # constants
    "U64_MAX",
    "U128_MAX",
    "SCALE_OFFSET",
    "ONE_Q64",
    "RESOLUTION_SHIFT",
    "MAX_EXPONENTIAL",
    "BASIS_POINT_MAX",
    "FEE_DENOMINATOR",
    "MAX_FEE_NUMERATOR",
    "MAX_CURVE_POINT",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "MAX_TOKEN_SUPPLY",
    # safe math
    "to_u64",
    "to_u128",
    "safe_add",
    "safe_sub",
    "safe_mul",
    "ceil_div",
    "mul_div",
    # fixed point
    "q64",
    "pow_q64",
    # fmt
    "fmt_dec",
    "q64_to_decimal",
    "decimal_to_q64",
    "price_from_sqrt_price",
    "price_to_decimal",
    # datatypes
    "TradeDirection",
    "CollectFeeMode",
    "FeeSchedulerMode",
    "ActivationType",
    "CurvePoint",
    "BaseFeeConfig",
    "DynamicFeeConfig",
    "PoolFees",
    "PoolConfig",
    "PoolMetrics",
    "VirtualPool",
    "FeeMode",
    "FeeOnAmount",
    "SwapAmount",
    "SwapResult",
    "FeeBreakdown",
    "PriceSnapshot",
    "QuoteResult",
    "PartialFillQuoteResult",
    "ExactOutQuoteResult",
    # exceptions
    "CurveQuoteError",
    "MathOverflowError",
    "InvalidPriceError",
    "DivisionByZeroError",
    "NotEnoughLiquidityError",
    "InvalidCollectFeeModeError",
    "InvalidFeeSchedulerModeError",
    "InvalidActivationTypeError",
    "PoolCompletedError",
    "AmountIsZeroError",
    "InvalidCurveError",
]
