"""
Top-level API for curve_quote (integer-domain).

Off-chain quoting for a segmented-liquidity bonding curve, bit-compatible with
the settlement program's arithmetic:
  - quote_exact_in: exact-input quote with fee breakdown and prices
  - quote_partial_fill / quote_exact_out: buys that stop at the curve end, and
    the input needed for a wanted output
  - fee schedule: base fee decay, dynamic fee and the fee split
  - curve maths: per-segment delta amounts and next prices
  - pool config: supply derivations, curve padding and validation

Core datatypes and errors are re-exported from `curve_quote.core`.
"""

# NOTE:
#   Every function here is pure: snapshots go in, new values come out. Inputs
#   are never mutated, so quotes may be computed concurrently.

from __future__ import annotations

from .quote import (
    get_fee_mode,
    get_swap_amount_from_base_to_quote,
    get_swap_amount_from_quote_to_base,
    get_swap_result,
    quote_exact_in,
    quote_partial_fill,
    quote_exact_out,
)
from .fee_schedule import (
    get_fee_in_period,
    get_current_base_fee_numerator,
    get_max_base_fee_numerator,
    get_min_base_fee_numerator,
    get_dynamic_fee,
    get_total_trading_fee,
    get_fee_on_amount,
    get_included_fee_amount,
)
from .curve_math import (
    get_delta_amount_base_unsigned,
    get_delta_amount_quote_unsigned,
    get_next_sqrt_price_from_amount_base,
    get_next_sqrt_price_from_amount_quote,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)
from .pool_config import (
    get_max_supply,
    total_amount_with_buffer,
    get_initial_base_supply,
    is_curve_complete,
    get_current_point,
    initialize_curve,
    validate_curve,
    to_pool_fees_config,
    update_pool_config,
)
from .price_math import get_price_from_id

# Core data types and errors
from .core import (
    ONE_Q64,
    MAX_CURVE_POINT,
    MIN_SQRT_PRICE,
    MAX_SQRT_PRICE,
    pow_q64,
    TradeDirection,
    CollectFeeMode,
    FeeSchedulerMode,
    ActivationType,
    CurvePoint,
    BaseFeeConfig,
    DynamicFeeConfig,
    PoolFees,
    PoolConfig,
    VirtualPool,
    FeeMode,
    QuoteResult,
    PartialFillQuoteResult,
    ExactOutQuoteResult,
    FeeBreakdown,
    PriceSnapshot,
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
    # quoting
    "quote_exact_in",
    "quote_partial_fill",
    "quote_exact_out",
    "get_fee_mode",
    "get_swap_amount_from_base_to_quote",
    "get_swap_amount_from_quote_to_base",
    "get_swap_result",
    # fees
    "get_fee_in_period",
    "get_current_base_fee_numerator",
    "get_max_base_fee_numerator",
    "get_min_base_fee_numerator",
    "get_dynamic_fee",
    "get_total_trading_fee",
    "get_fee_on_amount",
    "get_included_fee_amount",
    # curve maths
    "get_delta_amount_base_unsigned",
    "get_delta_amount_quote_unsigned",
    "get_next_sqrt_price_from_amount_base",
    "get_next_sqrt_price_from_amount_quote",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
    # config
    "get_max_supply",
    "total_amount_with_buffer",
    "get_initial_base_supply",
    "is_curve_complete",
    "get_current_point",
    "initialize_curve",
    "validate_curve",
    "to_pool_fees_config",
    "update_pool_config",
    "get_price_from_id",
    # core
    "ONE_Q64",
    "MAX_CURVE_POINT",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "pow_q64",
    "TradeDirection",
    "CollectFeeMode",
    "FeeSchedulerMode",
    "ActivationType",
    "CurvePoint",
    "BaseFeeConfig",
    "DynamicFeeConfig",
    "PoolFees",
    "PoolConfig",
    "VirtualPool",
    "FeeMode",
    "QuoteResult",
    "PartialFillQuoteResult",
    "ExactOutQuoteResult",
    "FeeBreakdown",
    "PriceSnapshot",
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
