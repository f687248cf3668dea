from __future__ import annotations

from typing import Callable, Iterable, Optional

import pytest

# Import project primitives
from curve_quote.core import (
    ONE_Q64,
    U128_MAX,
    BaseFeeConfig,
    CollectFeeMode,
    CurvePoint,
    PoolConfig,
    PoolFees,
    VirtualPool,
)
from curve_quote.pool_config import initialize_curve, to_pool_fees_config
from curve_quote.price_math import get_price_from_id
from curve_quote.core.constants import MAX_SQRT_PRICE


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def make_config(
    points: Iterable[CurvePoint],
    *,
    sqrt_start_price: int = ONE_Q64,
    migration_quote_threshold: int = 10**12,
    collect_fee_mode: int = CollectFeeMode.QUOTE_TOKEN,
    pool_fees: Optional[PoolFees] = None,
) -> PoolConfig:
    return PoolConfig(
        curve=initialize_curve(points),
        sqrt_start_price=sqrt_start_price,
        migration_quote_threshold=migration_quote_threshold,
        collect_fee_mode=collect_fee_mode,
        pool_fees=pool_fees or PoolFees(),
    )


def flat_fees(cliff_fee_numerator: int, protocol_fee_percent: int = 0, referral_fee_percent: int = 0) -> PoolFees:
    """Fee state with a constant base fee (no decay, no dynamic fee)."""
    return PoolFees(
        base_fee=BaseFeeConfig(cliff_fee_numerator=cliff_fee_numerator),
        protocol_fee_percent=protocol_fee_percent,
        referral_fee_percent=referral_fee_percent,
    )


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def two_segment_points() -> list[CurvePoint]:
    # [1, 2) with L = 1000 and [2, 4) with L = 2000 (sqrt prices, Q64.64)
    # quote capacities: 1000 and 4000; base capacities: 500 and 500
    return [
        CurvePoint(sqrt_price=2 * ONE_Q64, liquidity=1000 * ONE_Q64),
        CurvePoint(sqrt_price=4 * ONE_Q64, liquidity=2000 * ONE_Q64),
    ]


@pytest.fixture()
def make_quote_env(two_segment_points) -> Callable[..., tuple[VirtualPool, PoolConfig]]:
    """Factory: (pool, config) over the two-segment curve at a chosen price."""

    def _make(
        sqrt_price: int = ONE_Q64,
        *,
        collect_fee_mode: int = CollectFeeMode.QUOTE_TOKEN,
        pool_fees: Optional[PoolFees] = None,
        quote_reserve: int = 0,
        activation_point: int = 0,
    ) -> tuple[VirtualPool, PoolConfig]:
        fees = pool_fees or PoolFees()
        config = make_config(two_segment_points, collect_fee_mode=collect_fee_mode, pool_fees=fees)
        pool = VirtualPool(
            sqrt_price=sqrt_price,
            quote_reserve=quote_reserve,
            activation_point=activation_point,
            pool_fees=fees,
        )
        return pool, config

    return _make


@pytest.fixture()
def reference_env() -> Callable[[int], tuple[VirtualPool, PoolConfig]]:
    """Single wide segment starting at (1.008)^-100, liquidity 1e24 << 64 wrapped to u128."""

    def _make(cliff_fee_numerator: int = 0) -> tuple[VirtualPool, PoolConfig]:
        sqrt_start_price = get_price_from_id(-100, 80)
        liquidity = (10**24 << 64) & U128_MAX
        fees = to_pool_fees_config({"cliff_fee_numerator": cliff_fee_numerator})
        config = make_config(
            [CurvePoint(sqrt_price=MAX_SQRT_PRICE, liquidity=liquidity)],
            sqrt_start_price=sqrt_start_price,
            migration_quote_threshold=50_000_000_000,
            collect_fee_mode=CollectFeeMode.OUTPUT_TOKEN,
            pool_fees=fees,
        )
        pool = VirtualPool(sqrt_price=sqrt_start_price, pool_fees=fees)
        return pool, config

    return _make


@pytest.fixture()
def fees_factory() -> Callable[..., PoolFees]:
    return flat_fees
