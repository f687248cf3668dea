"""
Pool configuration derivations (pure helpers for config-authoring tooling).

Helpers (public):
- get_max_supply(token_decimal): raw max supply for a token's decimals
- total_amount_with_buffer(swap_base_amount, migration_base_threshold): +25% buffer
- get_initial_base_supply(config): buffered supply as a u64
- is_curve_complete(config, quote_reserve): migration threshold reached
- get_current_point(config, slot, timestamp): clock used for fee decay
- initialize_curve(points) / validate_curve(start, points): curve shape
- to_base_fee_config / to_dynamic_fee_config / to_pool_fees_config: fee state
  from creation parameters
- update_pool_config(config, **changes): new snapshot with fields replaced

Nothing here mutates its inputs; every helper returns a new value.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional, Tuple

from .core.constants import (
    MAX_CURVE_POINT,
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    MAX_TOKEN_SUPPLY,
    SUPPLY_BUFFER_NUM,
    SUPPLY_BUFFER_DEN,
)
from .core.datatypes import (
    ActivationType,
    BaseFeeConfig,
    CurvePoint,
    DynamicFeeConfig,
    PoolConfig,
    PoolFees,
)
from .core.exc import InvalidActivationTypeError, InvalidCurveError
from .core.safe_math import safe_add, safe_mul, to_u64, to_u128

# Debug printing control
DEBUG_CONFIG = False

def _dbg(msg: str) -> None:
    if DEBUG_CONFIG:
        print(f"[CONFIG] {msg}")


# ----------------------------
# Supply
# ----------------------------

def get_max_supply(token_decimal: int) -> int:
    """10 ** token_decimal * MAX_TOKEN_SUPPLY, as a u128."""
    return safe_mul(to_u128(10 ** token_decimal), MAX_TOKEN_SUPPLY)


def total_amount_with_buffer(swap_base_amount: int, migration_base_threshold: int) -> int:
    """(migration_base_threshold + swap_base_amount) * 5 / 4."""
    total_amount = safe_add(to_u64(migration_base_threshold), to_u64(swap_base_amount))
    return safe_mul(total_amount, SUPPLY_BUFFER_NUM) // SUPPLY_BUFFER_DEN


def get_initial_base_supply(config: PoolConfig) -> int:
    return to_u64(total_amount_with_buffer(config.swap_base_amount, config.migration_base_threshold))


def is_curve_complete(config: PoolConfig, quote_reserve: int) -> bool:
    return quote_reserve >= config.migration_quote_threshold


# ----------------------------
# Activation clock
# ----------------------------

def get_current_point(config: PoolConfig, current_slot: int, current_timestamp: int) -> int:
    """Slot or timestamp, whichever `config.activation_type` counts fee periods in."""
    try:
        activation_type = ActivationType(config.activation_type)
    except ValueError:
        raise InvalidActivationTypeError(config.activation_type) from None
    if activation_type is ActivationType.SLOT:
        return to_u64(current_slot)
    return to_u64(current_timestamp)


# ----------------------------
# Curve shape
# ----------------------------

def initialize_curve(points: Iterable[CurvePoint]) -> Tuple[CurvePoint, ...]:
    """Pad `points` to MAX_CURVE_POINT entries with {MAX_SQRT_PRICE, 0}."""
    curve = list(points)
    if len(curve) > MAX_CURVE_POINT:
        raise InvalidCurveError(f"curve has {len(curve)} points; at most {MAX_CURVE_POINT} allowed")
    padding = CurvePoint(sqrt_price=MAX_SQRT_PRICE, liquidity=0)
    curve.extend([padding] * (MAX_CURVE_POINT - len(curve)))
    return tuple(curve)


def validate_curve(sqrt_start_price: int, points: Iterable[CurvePoint]) -> None:
    """Check the shape rules applied when a config is created.

    - start price within [MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    - at least one and at most MAX_CURVE_POINT points
    - prices strictly increasing above the start price and ≤ MAX_SQRT_PRICE
    - every point has positive liquidity
    """
    curve = list(points)
    if not (MIN_SQRT_PRICE <= sqrt_start_price < MAX_SQRT_PRICE):
        raise InvalidCurveError(f"sqrt_start_price {sqrt_start_price} out of range")
    if not curve:
        raise InvalidCurveError("curve is empty")
    if len(curve) > MAX_CURVE_POINT:
        raise InvalidCurveError(f"curve has {len(curve)} points; at most {MAX_CURVE_POINT} allowed")

    prev = sqrt_start_price
    for i, point in enumerate(curve):
        if point.sqrt_price <= prev:
            raise InvalidCurveError(f"curve[{i}].sqrt_price {point.sqrt_price} not above {prev}")
        if point.sqrt_price > MAX_SQRT_PRICE:
            raise InvalidCurveError(f"curve[{i}].sqrt_price above MAX_SQRT_PRICE")
        if point.liquidity <= 0:
            raise InvalidCurveError(f"curve[{i}].liquidity must be positive")
        prev = point.sqrt_price
    _dbg(f"validate_curve: {len(curve)} points ok from start={sqrt_start_price}")


# ----------------------------
# Fee state from creation parameters
# ----------------------------

def to_base_fee_config(params: Mapping[str, int]) -> BaseFeeConfig:
    return BaseFeeConfig(
        cliff_fee_numerator=params["cliff_fee_numerator"],
        number_of_period=params.get("number_of_period", 0),
        period_frequency=params.get("period_frequency", 0),
        reduction_factor=params.get("reduction_factor", 0),
        fee_scheduler_mode=params.get("fee_scheduler_mode", 0),
    )


def to_dynamic_fee_config(params: Optional[Mapping[str, int]]) -> DynamicFeeConfig:
    """Dynamic fee config with zeroed live state; None means disabled."""
    if params is None:
        return DynamicFeeConfig()
    return DynamicFeeConfig(
        initialized=True,
        bin_step=params["bin_step"],
        bin_step_u128=params.get("bin_step_u128", 0),
        filter_period=params.get("filter_period", 0),
        decay_period=params.get("decay_period", 0),
        reduction_factor=params.get("reduction_factor", 0),
        max_volatility_accumulator=params.get("max_volatility_accumulator", 0),
        variable_fee_control=params.get("variable_fee_control", 0),
    )


def to_pool_fees_config(
    base_fee: Mapping[str, int],
    dynamic_fee: Optional[Mapping[str, int]] = None,
    *,
    protocol_fee_percent: int = 0,
    referral_fee_percent: int = 0,
) -> PoolFees:
    return PoolFees(
        base_fee=to_base_fee_config(base_fee),
        dynamic_fee=to_dynamic_fee_config(dynamic_fee),
        protocol_fee_percent=protocol_fee_percent,
        referral_fee_percent=referral_fee_percent,
    )


def update_pool_config(config: PoolConfig, **changes) -> PoolConfig:
    """Return a copy of `config` with `changes` applied; the input is untouched."""
    return replace(config, **changes)


__all__ = [
    "get_max_supply",
    "total_amount_with_buffer",
    "get_initial_base_supply",
    "is_curve_complete",
    "get_current_point",
    "initialize_curve",
    "validate_curve",
    "to_base_fee_config",
    "to_dynamic_fee_config",
    "to_pool_fees_config",
    "update_pool_config",
]
