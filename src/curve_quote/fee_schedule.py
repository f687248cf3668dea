"""
Fee schedule: base fee decay, volatility fee and the split of a fee across parties.

Alignment notes:
- The base fee numerator decays per elapsed period after activation:
  linear `cliff - period * reduction` or exponential
  `cliff * (1 - reduction / 10_000) ** period` (via Q64.64 `pow_q64`).
- Before activation the fee is the fully decayed one (period = number_of_period).
- The variable fee is `ceil((volatility_accumulator * bin_step)^2 * control / 1e11)`.
- Numerators are basis points; the total is capped at MAX_FEE_NUMERATOR.
"""

from __future__ import annotations

from .core.constants import (
    BASIS_POINT_MAX,
    FEE_DENOMINATOR,
    MAX_FEE_NUMERATOR,
    ONE_Q64,
    PERCENT_DENOMINATOR,
    SCALE_OFFSET,
    DYNAMIC_FEE_SCALE,
    DYNAMIC_FEE_ROUNDING,
    U128_MAX,
)
from .core.datatypes import (
    BaseFeeConfig,
    DynamicFeeConfig,
    FeeOnAmount,
    FeeSchedulerMode,
    PoolFees,
)
from .core.exc import DivisionByZeroError, InvalidFeeSchedulerModeError, MathOverflowError
from .core.fixed_point import pow_q64
from .core.safe_math import safe_add, safe_mul, safe_sub, to_u64, mul_div

# Debug printing control
DEBUG_FEES = False

def _dbg(msg: str) -> None:
    if DEBUG_FEES:
        print(f"[FEE] {msg}")


# ----------------------------
# Base fee
# ----------------------------

def get_fee_in_period(cliff_fee_numerator: int, reduction_factor: int, passed_period: int) -> int:
    """cliff_fee_numerator * (1 - reduction_factor / 10_000) ** passed_period."""
    # reduction factor in Q64.64: reduction_factor / BASIS_POINT_MAX
    bps = (reduction_factor << SCALE_OFFSET) // BASIS_POINT_MAX
    base = safe_sub(ONE_Q64, bps)
    result = pow_q64(base, passed_period)
    return safe_mul(result, cliff_fee_numerator) >> SCALE_OFFSET


def _passed_period(base_fee: BaseFeeConfig, current_point: int, activation_point: int) -> int:
    if current_point < activation_point:
        return base_fee.number_of_period
    return min(
        (current_point - activation_point) // base_fee.period_frequency,
        base_fee.number_of_period,
    )


def get_current_base_fee_numerator(
    base_fee: BaseFeeConfig,
    current_point: int,
    activation_point: int,
    *,
    saturate_linear: bool = False,
) -> int:
    """Base fee numerator at `current_point`.

    Linear decay that would drop below zero raises MathOverflowError, as the
    settlement program does; `saturate_linear=True` clamps it at zero instead.
    """
    if base_fee.period_frequency == 0:
        return base_fee.cliff_fee_numerator

    period = _passed_period(base_fee, current_point, activation_point)

    try:
        mode = FeeSchedulerMode(base_fee.fee_scheduler_mode)
    except ValueError:
        raise InvalidFeeSchedulerModeError(base_fee.fee_scheduler_mode) from None

    if mode is FeeSchedulerMode.LINEAR:
        reduction = period * base_fee.reduction_factor
        if reduction > base_fee.cliff_fee_numerator and saturate_linear:
            _dbg(f"linear fee saturated at 0 (period={period}, reduction={reduction})")
            return 0
        return safe_sub(base_fee.cliff_fee_numerator, reduction)

    return get_fee_in_period(base_fee.cliff_fee_numerator, base_fee.reduction_factor, period)


def get_max_base_fee_numerator(base_fee: BaseFeeConfig) -> int:
    return base_fee.cliff_fee_numerator


def get_min_base_fee_numerator(base_fee: BaseFeeConfig, *, saturate_linear: bool = False) -> int:
    """Fee after every period has elapsed (current_point < activation_point forces it)."""
    return get_current_base_fee_numerator(base_fee, 0, 1, saturate_linear=saturate_linear)


# ----------------------------
# Dynamic (variable) fee
# ----------------------------

def get_dynamic_fee(dynamic_fee: DynamicFeeConfig) -> int:
    """Volatility fee numerator; zero when the dynamic fee is not initialized."""
    if not dynamic_fee.initialized:
        return 0

    vfa_bin = safe_mul(dynamic_fee.volatility_accumulator, dynamic_fee.bin_step)
    square_vfa_bin = safe_mul(vfa_bin, vfa_bin)
    v_fee = safe_mul(square_vfa_bin, dynamic_fee.variable_fee_control)
    return safe_add(v_fee, DYNAMIC_FEE_ROUNDING, U128_MAX) // DYNAMIC_FEE_SCALE


def get_total_trading_fee(
    pool_fees: PoolFees,
    current_point: int,
    activation_point: int,
    *,
    saturate_linear: bool = False,
) -> int:
    """Base + dynamic fee numerator, capped at MAX_FEE_NUMERATOR."""
    base_fee_numerator = get_current_base_fee_numerator(
        pool_fees.base_fee,
        current_point,
        activation_point,
        saturate_linear=saturate_linear,
    )
    total = base_fee_numerator + get_dynamic_fee(pool_fees.dynamic_fee)
    _dbg(f"total fee numerator: base={base_fee_numerator}, total={total}")
    return min(total, MAX_FEE_NUMERATOR)


# ----------------------------
# Fee split on an amount
# ----------------------------

def get_fee_on_amount(
    pool_fees: PoolFees,
    amount: int,
    has_referral: bool,
    current_point: int,
    activation_point: int,
    *,
    saturate_linear: bool = False,
) -> FeeOnAmount:
    """Deduct the trading fee from `amount` and split it.

    The trading fee rounds up (in the pool's favour). The protocol share is a
    percentage of the trading fee and the referral share a percentage of the
    protocol share, each taken from the gross value of the previous share.
    """
    amount = to_u64(amount)
    numerator = get_total_trading_fee(
        pool_fees, current_point, activation_point, saturate_linear=saturate_linear
    )
    trading_fee = to_u64(mul_div(amount, numerator, FEE_DENOMINATOR, True))
    net_amount = safe_sub(amount, trading_fee)

    protocol_fee = to_u64(mul_div(trading_fee, pool_fees.protocol_fee_percent, PERCENT_DENOMINATOR, False))
    trading_fee = safe_sub(trading_fee, protocol_fee)

    referral_fee = 0
    if has_referral:
        referral_fee = to_u64(mul_div(protocol_fee, pool_fees.referral_fee_percent, PERCENT_DENOMINATOR, False))
    protocol_fee = safe_sub(protocol_fee, referral_fee)

    _dbg(
        f"fee_on_amount: amount={amount}, numerator={numerator} -> net={net_amount}, "
        f"trading={trading_fee}, protocol={protocol_fee}, referral={referral_fee}"
    )
    return FeeOnAmount(
        amount=net_amount,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
    )


# ----------------------------
# Inverse fee (exact-out)
# ----------------------------

def get_excluded_fee_amount(trade_fee_numerator: int, included_fee_amount: int) -> tuple[int, int]:
    """Net amount and trading fee for a gross amount (fee rounds up)."""
    trading_fee = to_u64(mul_div(included_fee_amount, trade_fee_numerator, FEE_DENOMINATOR, True))
    return safe_sub(included_fee_amount, trading_fee), trading_fee


def get_included_fee_amount(trade_fee_numerator: int, excluded_fee_amount: int) -> int:
    """Smallest gross amount whose net after the trading fee covers `excluded_fee_amount`.

    gross = ceil(net * FEE_DENOMINATOR / (FEE_DENOMINATOR - numerator))

    A numerator of FEE_DENOMINATOR leaves nothing after fees and raises
    DivisionByZeroError.
    """
    remaining = FEE_DENOMINATOR - trade_fee_numerator
    if remaining <= 0:
        raise DivisionByZeroError(f"fee numerator {trade_fee_numerator} takes the whole amount")
    included_fee_amount = to_u64(mul_div(excluded_fee_amount, FEE_DENOMINATOR, remaining, True))
    inverse_amount, _ = get_excluded_fee_amount(trade_fee_numerator, included_fee_amount)
    if inverse_amount < excluded_fee_amount:
        raise MathOverflowError(
            f"gross amount {included_fee_amount} nets {inverse_amount} < {excluded_fee_amount}"
        )
    _dbg(f"included_fee: net={excluded_fee_amount}, numerator={trade_fee_numerator} -> {included_fee_amount}")
    return included_fee_amount


__all__ = [
    "get_fee_in_period",
    "get_current_base_fee_numerator",
    "get_max_base_fee_numerator",
    "get_min_base_fee_numerator",
    "get_dynamic_fee",
    "get_total_trading_fee",
    "get_fee_on_amount",
    "get_excluded_fee_amount",
    "get_included_fee_amount",
]
