import pytest

from curve_quote.core.constants import (
    MAX_CURVE_POINT,
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    ONE_Q64,
    U64_MAX,
)
from curve_quote.core.datatypes import ActivationType, CurvePoint, DynamicFeeConfig, PoolConfig
from curve_quote.core.exc import InvalidActivationTypeError, InvalidCurveError, MathOverflowError
from curve_quote.pool_config import (
    get_max_supply,
    total_amount_with_buffer,
    get_initial_base_supply,
    is_curve_complete,
    get_current_point,
    initialize_curve,
    validate_curve,
    to_base_fee_config,
    to_dynamic_fee_config,
    to_pool_fees_config,
    update_pool_config,
)


def _points(n: int) -> list:
    return [CurvePoint(sqrt_price=(i + 2) * ONE_Q64, liquidity=ONE_Q64) for i in range(n)]


# -----------------------------
# Supply
# -----------------------------

@pytest.mark.parametrize(
    "decimals,expected",
    [
        (0, 10_000_000_000),
        (6, 10_000_000_000 * 10**6),
        (9, 10_000_000_000 * 10**9),
    ],
)
def test_max_supply(decimals, expected):
    assert get_max_supply(decimals) == expected


def test_max_supply_overflow():
    with pytest.raises(MathOverflowError):
        get_max_supply(40)


def test_total_amount_with_buffer():
    assert total_amount_with_buffer(800, 200) == 1250
    assert total_amount_with_buffer(3, 0) == 3  # 15 // 4
    with pytest.raises(MathOverflowError):
        total_amount_with_buffer(U64_MAX + 1, 0)


def test_initial_base_supply_must_fit_u64():
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1,
                     swap_base_amount=800, migration_base_threshold=200)
    assert get_initial_base_supply(cfg) == 1250
    big = update_pool_config(cfg, swap_base_amount=U64_MAX, migration_base_threshold=0)
    with pytest.raises(MathOverflowError):
        get_initial_base_supply(big)


def test_is_curve_complete():
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1000)
    assert not is_curve_complete(cfg, 999)
    assert is_curve_complete(cfg, 1000)
    assert is_curve_complete(cfg, 1001)


# -----------------------------
# Activation clock
# -----------------------------

@pytest.mark.parametrize(
    "activation_type,expected",
    [
        (ActivationType.SLOT, 250_000_000),
        (ActivationType.TIMESTAMP, 1_700_000_000),
        (0, 250_000_000),
        (1, 1_700_000_000),
    ],
)
def test_current_point_follows_activation_type(activation_type, expected):
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1,
                     activation_type=activation_type)
    assert get_current_point(cfg, 250_000_000, 1_700_000_000) == expected


@pytest.mark.parametrize("activation_type", [2, -1, None])
def test_current_point_unknown_activation_type(activation_type):
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1,
                     activation_type=activation_type)
    with pytest.raises(InvalidActivationTypeError) as ei:
        get_current_point(cfg, 1, 2)
    assert ei.value.activation_type == activation_type


def test_current_point_rejects_non_u64():
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1)
    with pytest.raises(MathOverflowError):
        get_current_point(cfg, -1, 0)


# -----------------------------
# Curve shape
# -----------------------------

def test_initialize_curve_pads_to_max():
    curve = initialize_curve(_points(3))
    print(f"[curve] padded length={len(curve)}")
    assert len(curve) == MAX_CURVE_POINT
    assert curve[:3] == tuple(_points(3))
    assert all(p == CurvePoint(MAX_SQRT_PRICE, 0) for p in curve[3:])


def test_initialize_curve_full_and_too_long():
    assert initialize_curve(_points(MAX_CURVE_POINT)) == tuple(_points(MAX_CURVE_POINT))
    with pytest.raises(InvalidCurveError):
        initialize_curve(_points(MAX_CURVE_POINT + 1))


def test_initialize_curve_does_not_touch_input():
    points = _points(2)
    initialize_curve(points)
    assert len(points) == 2


def test_validate_curve_accepts_well_formed():
    validate_curve(ONE_Q64, _points(5))
    validate_curve(MIN_SQRT_PRICE, [CurvePoint(MAX_SQRT_PRICE, 1)])


@pytest.mark.parametrize(
    "start,points",
    [
        (MIN_SQRT_PRICE - 1, [CurvePoint(2 * ONE_Q64, 1)]),
        (MAX_SQRT_PRICE, [CurvePoint(MAX_SQRT_PRICE, 1)]),
        (ONE_Q64, []),
        (ONE_Q64, [CurvePoint(ONE_Q64, 1)]),
        (ONE_Q64, [CurvePoint(3 * ONE_Q64, 1), CurvePoint(2 * ONE_Q64, 1)]),
        (ONE_Q64, [CurvePoint(MAX_SQRT_PRICE + 1, 1)]),
        (ONE_Q64, [CurvePoint(2 * ONE_Q64, 0)]),
        (ONE_Q64, _points(MAX_CURVE_POINT + 1)),
    ],
)
def test_validate_curve_rejects(start, points):
    with pytest.raises(InvalidCurveError):
        validate_curve(start, points)


# -----------------------------
# Fee config conversions
# -----------------------------

def test_fee_config_conversions():
    base = to_base_fee_config({"cliff_fee_numerator": 250, "period_frequency": 60, "number_of_period": 10})
    assert (base.cliff_fee_numerator, base.period_frequency, base.number_of_period) == (250, 60, 10)
    assert base.reduction_factor == 0

    assert to_dynamic_fee_config(None) == DynamicFeeConfig()
    dyn = to_dynamic_fee_config({"bin_step": 1, "variable_fee_control": 5000})
    assert dyn.initialized
    assert (dyn.volatility_accumulator, dyn.volatility_reference, dyn.last_update_timestamp) == (0, 0, 0)

    fees = to_pool_fees_config({"cliff_fee_numerator": 25}, protocol_fee_percent=20, referral_fee_percent=10)
    assert fees.base_fee.cliff_fee_numerator == 25
    assert not fees.dynamic_fee.initialized
    assert (fees.protocol_fee_percent, fees.referral_fee_percent) == (20, 10)


def test_update_pool_config_returns_new_snapshot():
    cfg = PoolConfig(curve=(), sqrt_start_price=ONE_Q64, migration_quote_threshold=1000)
    new = update_pool_config(cfg, migration_quote_threshold=2000)
    assert new.migration_quote_threshold == 2000
    assert cfg.migration_quote_threshold == 1000
    with pytest.raises(TypeError):
        update_pool_config(cfg, not_a_field=1)
