"""
Core datatypes for quoting, aligned with the settlement program's account layout.

These datatypes are immutable snapshots so that quoting remains a pure
function of its inputs. Only the logical shape of the on-chain accounts is
modelled; padding and account keys are not.

Notes:
- Prices are Q64.64 sqrt prices (u128); liquidity is u128; amounts are u64.
- Mode fields on configs hold the raw integers stored on chain. They are
  validated where they are used (`CollectFeeMode`, `FeeSchedulerMode`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Tuple


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TradeDirection(Enum):
    BASE_TO_QUOTE = "base_to_quote"
    QUOTE_TO_BASE = "quote_to_base"


class CollectFeeMode(IntEnum):
    """Which token fees are taken in."""
    QUOTE_TOKEN = 0
    OUTPUT_TOKEN = 1


class FeeSchedulerMode(IntEnum):
    """Base fee decay: cliff - period * reduction (linear) or cliff * (1 - r)^period."""
    LINEAR = 0
    EXPONENTIAL = 1


class ActivationType(IntEnum):
    """Unit of activation/current points."""
    SLOT = 0
    TIMESTAMP = 1


# ---------------------------------------------------------------------------
# Curve
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurvePoint:
    """Upper bound of one liquidity segment.

    Fields:
    - sqrt_price: Q64.64 sqrt price at which the segment ends (exclusive).
    - liquidity: constant liquidity inside the segment (pre-scaled by 2^64).
    """

    sqrt_price: int
    liquidity: int


# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseFeeConfig:
    cliff_fee_numerator: int = 0
    number_of_period: int = 0
    period_frequency: int = 0
    reduction_factor: int = 0
    fee_scheduler_mode: int = FeeSchedulerMode.LINEAR


@dataclass(frozen=True)
class DynamicFeeConfig:
    """Volatility-driven fee parameters plus a read-only snapshot of live state.

    The state fields (`volatility_accumulator`, `volatility_reference`,
    `sqrt_price_reference`, `last_update_timestamp`) are maintained by the
    settlement program; quoting only reads them.
    """

    initialized: bool = False
    bin_step: int = 0
    bin_step_u128: int = 0
    filter_period: int = 0
    decay_period: int = 0
    reduction_factor: int = 0
    max_volatility_accumulator: int = 0
    variable_fee_control: int = 0
    volatility_accumulator: int = 0
    volatility_reference: int = 0
    sqrt_price_reference: int = 0
    last_update_timestamp: int = 0


@dataclass(frozen=True)
class PoolFees:
    base_fee: BaseFeeConfig = field(default_factory=BaseFeeConfig)
    dynamic_fee: DynamicFeeConfig = field(default_factory=DynamicFeeConfig)
    protocol_fee_percent: int = 0
    referral_fee_percent: int = 0


# ---------------------------------------------------------------------------
# Config and pool snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PoolConfig:
    """Immutable pool configuration.

    `curve` is expected to hold MAX_CURVE_POINT entries (see
    `pool_config.initialize_curve`); segment i spans
    [curve[i-1].sqrt_price, curve[i].sqrt_price) with `sqrt_start_price`
    as the lower bound of segment 0.
    """

    curve: Tuple[CurvePoint, ...]
    sqrt_start_price: int
    migration_quote_threshold: int
    migration_base_threshold: int = 0
    swap_base_amount: int = 0
    migration_sqrt_price: int = 0
    pool_fees: PoolFees = field(default_factory=PoolFees)
    collect_fee_mode: int = CollectFeeMode.QUOTE_TOKEN
    activation_type: int = ActivationType.SLOT
    token_decimal: int = 9


@dataclass(frozen=True)
class PoolMetrics:
    total_protocol_base_fee: int = 0
    total_protocol_quote_fee: int = 0
    total_trading_base_fee: int = 0
    total_trading_quote_fee: int = 0


@dataclass(frozen=True)
class VirtualPool:
    """Runtime pool state as last read from the settlement program."""

    sqrt_price: int
    base_reserve: int = 0
    quote_reserve: int = 0
    activation_point: int = 0
    pool_fees: PoolFees = field(default_factory=PoolFees)
    protocol_base_fee: int = 0
    protocol_quote_fee: int = 0
    trading_base_fee: int = 0
    trading_quote_fee: int = 0
    metrics: PoolMetrics = field(default_factory=PoolMetrics)
    is_migrated: bool = False
    is_partner_withdraw_surplus: bool = False
    is_protocol_withdraw_surplus: bool = False


# ---------------------------------------------------------------------------
# Derived / per-call values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FeeMode:
    fees_on_input: bool
    fees_on_base_token: bool
    has_referral: bool


@dataclass(frozen=True)
class FeeOnAmount:
    """Split of one gross amount into the net amount and the fee shares.

    `trading_fee` is what stays with the pool after the protocol share;
    `protocol_fee` is what the protocol keeps after the referral share.
    """

    amount: int
    trading_fee: int
    protocol_fee: int
    referral_fee: int


@dataclass(frozen=True)
class SwapAmount:
    """Gross output of one curve walk and the price it ends at."""

    output_amount: int
    next_sqrt_price: int


@dataclass(frozen=True)
class SwapResult:
    """Settlement-side view of a swap: net output, end price and fee shares."""

    actual_input_amount: int
    output_amount: int
    next_sqrt_price: int
    trading_fee: int
    protocol_fee: int
    referral_fee: int


@dataclass(frozen=True)
class FeeBreakdown:
    trading: int = 0
    protocol: int = 0
    referral: int = 0

    def total(self) -> int:
        return self.trading + self.protocol + self.referral


@dataclass(frozen=True)
class PriceSnapshot:
    """Linear prices ((sqrt_price^2) >> 128), for display only."""

    before_swap: int
    after_swap: int


@dataclass(frozen=True)
class QuoteResult:
    amount_out: int
    minimum_amount_out: int
    next_sqrt_price: int
    fee: FeeBreakdown
    price: PriceSnapshot


@dataclass(frozen=True)
class PartialFillQuoteResult:
    """Exact-in quote that stops at the end of the curve.

    `amount_in_used` is the gross input actually taken (fees included);
    `amount_left` is the part of the request that is not spent.
    """

    amount_in_used: int
    amount_left: int
    amount_out: int
    minimum_amount_out: int
    next_sqrt_price: int
    fee: FeeBreakdown
    price: PriceSnapshot


@dataclass(frozen=True)
class ExactOutQuoteResult:
    amount_in: int
    maximum_amount_in: int
    amount_out: int
    next_sqrt_price: int
    fee: FeeBreakdown
    price: PriceSnapshot


__all__ = [
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
]
