"""
Quoting over a segmented bonding curve (integer domain).

Alignment notes:
- Segment i spans [lower_i, curve[i].sqrt_price) with liquidity curve[i].liquidity;
  lower_0 is `config.sqrt_start_price`, lower_i is curve[i-1].sqrt_price.
- BASE_TO_QUOTE (selling base) walks down from the segment holding the current
  price; segment 0 absorbs whatever input is left.
- QUOTE_TO_BASE (buying base) walks up over segments above the current price;
  input left after the last segment is NotEnoughLiquidityError, except for a
  partial fill, which keeps it and charges only for what the curve took.
- Exact-out walks cover the same segments from a wanted output; the input
  needed rounds up and the next price stops short of the target.
- Segment capacities are unchecked deltas rounded up; the amount paid out inside
  a segment is rounded down.
- Fees come from `pool.pool_fees` and are taken on the input or the output as
  `get_fee_mode` decides. Nothing here mutates the pool or the config.
"""

from __future__ import annotations

from typing import Tuple

from .core.constants import BASIS_POINT_MAX, U64_MAX
from .core.datatypes import (
    CollectFeeMode,
    CurvePoint,
    ExactOutQuoteResult,
    FeeBreakdown,
    FeeMode,
    FeeOnAmount,
    PartialFillQuoteResult,
    PoolConfig,
    PriceSnapshot,
    QuoteResult,
    SwapAmount,
    SwapResult,
    TradeDirection,
    VirtualPool,
)
from .core.exc import (
    AmountIsZeroError,
    InvalidCollectFeeModeError,
    InvalidCurveError,
    NotEnoughLiquidityError,
    PoolCompletedError,
)
from .core.fmt import price_from_sqrt_price
from .core.safe_math import ceil_div, safe_add, safe_sub, to_u64, to_u128
from .curve_math import (
    get_delta_amount_base_unchecked,
    get_delta_amount_base_unsigned,
    get_delta_amount_quote_unchecked,
    get_delta_amount_quote_unsigned,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)
from .fee_schedule import get_fee_on_amount, get_included_fee_amount, get_total_trading_fee
from .pool_config import is_curve_complete

# Debug printing control
DEBUG_QUOTE = False

def _dbg(msg: str) -> None:
    if DEBUG_QUOTE:
        print(f"[QUOTE] {msg}")


# ----------------------------
# Fee mode
# ----------------------------

# (collect_fee_mode, direction) -> (fees_on_input, fees_on_base_token)
_FEE_MODE_TABLE = {
    (CollectFeeMode.QUOTE_TOKEN, TradeDirection.BASE_TO_QUOTE): (False, False),
    (CollectFeeMode.QUOTE_TOKEN, TradeDirection.QUOTE_TO_BASE): (True, False),
    (CollectFeeMode.OUTPUT_TOKEN, TradeDirection.BASE_TO_QUOTE): (False, False),
    (CollectFeeMode.OUTPUT_TOKEN, TradeDirection.QUOTE_TO_BASE): (False, True),
}


def get_fee_mode(collect_fee_mode: int, trade_direction: TradeDirection, has_referral: bool) -> FeeMode:
    """Where fees are taken for this collect mode and direction."""
    try:
        mode = CollectFeeMode(collect_fee_mode)
    except ValueError:
        raise InvalidCollectFeeModeError(collect_fee_mode) from None
    fees_on_input, fees_on_base_token = _FEE_MODE_TABLE[(mode, trade_direction)]
    return FeeMode(
        fees_on_input=fees_on_input,
        fees_on_base_token=fees_on_base_token,
        has_referral=has_referral,
    )


# ----------------------------
# Curve walks (exact in)
# ----------------------------

def _require_curve(config: PoolConfig) -> Tuple[CurvePoint, ...]:
    if not config.curve:
        raise InvalidCurveError("curve has no points")
    return config.curve


def _paid_out(lower: int, upper: int, liquidity: int, base_out: bool) -> int:
    # A tiny input can leave the price where it was; nothing is paid for it.
    if lower == upper:
        return 0
    if base_out:
        return get_delta_amount_base_unsigned(lower, upper, liquidity, False)
    return get_delta_amount_quote_unsigned(lower, upper, liquidity, False)


def get_swap_amount_from_base_to_quote(pool: VirtualPool, config: PoolConfig, amount_in: int) -> SwapAmount:
    """Walk down the curve selling `amount_in` base tokens."""
    curve = _require_curve(config)
    current_sqrt_price = pool.sqrt_price
    amount_left = to_u64(amount_in)
    total_output = 0

    for i in range(len(curve) - 1, 0, -1):
        lower = curve[i - 1].sqrt_price
        if lower >= current_sqrt_price:
            continue
        liquidity = curve[i].liquidity
        if liquidity == 0:
            raise NotEnoughLiquidityError(
                amount_left, filled_out=total_output, next_sqrt_price=current_sqrt_price
            )

        max_amount_in = get_delta_amount_base_unchecked(lower, current_sqrt_price, liquidity, True)
        if amount_left < max_amount_in:
            next_sqrt_price = get_next_sqrt_price_from_input(current_sqrt_price, liquidity, amount_left, True)
            output = _paid_out(next_sqrt_price, current_sqrt_price, liquidity, base_out=False)
            total_output = safe_add(total_output, output, U64_MAX)
            _dbg(f"b2q segment {i}: partial in={amount_left} out={output} -> {next_sqrt_price}")
            current_sqrt_price = next_sqrt_price
            amount_left = 0
            break

        output = get_delta_amount_quote_unsigned(lower, current_sqrt_price, liquidity, False)
        total_output = safe_add(total_output, output, U64_MAX)
        amount_left = safe_sub(amount_left, max_amount_in)
        _dbg(f"b2q segment {i}: full in={max_amount_in} out={output} -> {lower}")
        current_sqrt_price = lower

    if amount_left != 0:
        liquidity = curve[0].liquidity
        if liquidity == 0:
            raise NotEnoughLiquidityError(
                amount_left, filled_out=total_output, next_sqrt_price=current_sqrt_price
            )
        next_sqrt_price = get_next_sqrt_price_from_input(current_sqrt_price, liquidity, amount_left, True)
        output = _paid_out(next_sqrt_price, current_sqrt_price, liquidity, base_out=False)
        total_output = safe_add(total_output, output, U64_MAX)
        _dbg(f"b2q segment 0: remainder in={amount_left} out={output} -> {next_sqrt_price}")
        current_sqrt_price = next_sqrt_price

    return SwapAmount(output_amount=total_output, next_sqrt_price=current_sqrt_price)


def _walk_quote_to_base(pool: VirtualPool, config: PoolConfig, amount_in: int) -> Tuple[SwapAmount, int]:
    """Walk up the curve; returns the swap and the input no segment could take."""
    curve = _require_curve(config)
    current_sqrt_price = pool.sqrt_price
    amount_left = to_u64(amount_in)
    total_output = 0

    for i, point in enumerate(curve):
        upper = point.sqrt_price
        if upper <= current_sqrt_price:
            continue
        liquidity = point.liquidity
        if liquidity == 0:
            break

        max_amount_in = get_delta_amount_quote_unchecked(current_sqrt_price, upper, liquidity, True)
        if amount_left < max_amount_in:
            next_sqrt_price = get_next_sqrt_price_from_input(current_sqrt_price, liquidity, amount_left, False)
            output = _paid_out(current_sqrt_price, next_sqrt_price, liquidity, base_out=True)
            total_output = safe_add(total_output, output, U64_MAX)
            _dbg(f"q2b segment {i}: partial in={amount_left} out={output} -> {next_sqrt_price}")
            current_sqrt_price = next_sqrt_price
            amount_left = 0
            break

        output = get_delta_amount_base_unsigned(current_sqrt_price, upper, liquidity, False)
        total_output = safe_add(total_output, output, U64_MAX)
        amount_left = safe_sub(amount_left, max_amount_in)
        _dbg(f"q2b segment {i}: full in={max_amount_in} out={output} -> {upper}")
        current_sqrt_price = upper

    if amount_left != 0:
        _dbg(f"q2b: curve exhausted with {amount_left} left")
    return SwapAmount(output_amount=total_output, next_sqrt_price=current_sqrt_price), amount_left


def get_swap_amount_from_quote_to_base(pool: VirtualPool, config: PoolConfig, amount_in: int) -> SwapAmount:
    """Walk up the curve spending `amount_in` quote tokens."""
    swap, amount_left = _walk_quote_to_base(pool, config, amount_in)
    if amount_left != 0:
        raise NotEnoughLiquidityError(
            amount_left, filled_out=swap.output_amount, next_sqrt_price=swap.next_sqrt_price
        )
    return swap


# ----------------------------
# Curve walks (exact out)
# ----------------------------

def _paid_in(lower: int, upper: int, liquidity: int, base_in: bool) -> int:
    if lower == upper:
        return 0
    if base_in:
        return get_delta_amount_base_unsigned(lower, upper, liquidity, True)
    return get_delta_amount_quote_unsigned(lower, upper, liquidity, True)


def get_in_amount_from_base_to_quote(pool: VirtualPool, config: PoolConfig, amount_out: int) -> Tuple[int, int]:
    """Base input needed to receive `amount_out` quote tokens; returns (amount_in, next_sqrt_price).

    Segment 0 may be used down to `config.sqrt_start_price` and no further.
    """
    curve = _require_curve(config)
    current_sqrt_price = pool.sqrt_price
    amount_out = to_u64(amount_out)
    amount_left = amount_out
    total_input = 0

    for i in range(len(curve) - 1, 0, -1):
        if amount_left == 0:
            break
        lower = curve[i - 1].sqrt_price
        if lower >= current_sqrt_price:
            continue
        liquidity = curve[i].liquidity
        if liquidity == 0:
            raise NotEnoughLiquidityError(
                amount_left, filled_out=amount_out - amount_left, next_sqrt_price=current_sqrt_price
            )

        max_amount_out = get_delta_amount_quote_unchecked(lower, current_sqrt_price, liquidity, False)
        if amount_left < max_amount_out:
            next_sqrt_price = get_next_sqrt_price_from_output(current_sqrt_price, liquidity, amount_left, True)
            amount = _paid_in(next_sqrt_price, current_sqrt_price, liquidity, base_in=True)
            total_input = safe_add(total_input, amount, U64_MAX)
            _dbg(f"b2q-out segment {i}: partial out={amount_left} in={amount} -> {next_sqrt_price}")
            current_sqrt_price = next_sqrt_price
            amount_left = 0
            break

        amount = get_delta_amount_base_unsigned(lower, current_sqrt_price, liquidity, True)
        total_input = safe_add(total_input, amount, U64_MAX)
        amount_left = safe_sub(amount_left, max_amount_out)
        _dbg(f"b2q-out segment {i}: full out={max_amount_out} in={amount} -> {lower}")
        current_sqrt_price = lower

    if amount_left != 0:
        liquidity = curve[0].liquidity
        start = config.sqrt_start_price
        if (
            liquidity == 0
            or current_sqrt_price <= start
            or amount_left > get_delta_amount_quote_unchecked(start, current_sqrt_price, liquidity, False)
        ):
            raise NotEnoughLiquidityError(
                amount_left, filled_out=amount_out - amount_left, next_sqrt_price=current_sqrt_price
            )
        next_sqrt_price = get_next_sqrt_price_from_output(current_sqrt_price, liquidity, amount_left, True)
        amount = _paid_in(next_sqrt_price, current_sqrt_price, liquidity, base_in=True)
        total_input = safe_add(total_input, amount, U64_MAX)
        _dbg(f"b2q-out segment 0: remainder out={amount_left} in={amount} -> {next_sqrt_price}")
        current_sqrt_price = next_sqrt_price

    return total_input, current_sqrt_price


def get_in_amount_from_quote_to_base(pool: VirtualPool, config: PoolConfig, amount_out: int) -> Tuple[int, int]:
    """Quote input needed to receive `amount_out` base tokens; returns (amount_in, next_sqrt_price)."""
    curve = _require_curve(config)
    current_sqrt_price = pool.sqrt_price
    amount_out = to_u64(amount_out)
    amount_left = amount_out
    total_input = 0

    for i, point in enumerate(curve):
        if amount_left == 0:
            break
        upper = point.sqrt_price
        if upper <= current_sqrt_price:
            continue
        liquidity = point.liquidity
        if liquidity == 0:
            break

        max_amount_out = get_delta_amount_base_unchecked(current_sqrt_price, upper, liquidity, False)
        if amount_left < max_amount_out:
            next_sqrt_price = get_next_sqrt_price_from_output(current_sqrt_price, liquidity, amount_left, False)
            amount = _paid_in(current_sqrt_price, next_sqrt_price, liquidity, base_in=False)
            total_input = safe_add(total_input, amount, U64_MAX)
            _dbg(f"q2b-out segment {i}: partial out={amount_left} in={amount} -> {next_sqrt_price}")
            current_sqrt_price = next_sqrt_price
            amount_left = 0
            break

        amount = get_delta_amount_quote_unsigned(current_sqrt_price, upper, liquidity, True)
        total_input = safe_add(total_input, amount, U64_MAX)
        amount_left = safe_sub(amount_left, max_amount_out)
        _dbg(f"q2b-out segment {i}: full out={max_amount_out} in={amount} -> {upper}")
        current_sqrt_price = upper

    if amount_left != 0:
        raise NotEnoughLiquidityError(
            amount_left, filled_out=amount_out - amount_left, next_sqrt_price=current_sqrt_price
        )
    return total_input, current_sqrt_price


# ----------------------------
# Swap results
# ----------------------------

def _fee_on(pool: VirtualPool, amount: int, fee_mode: FeeMode, current_point: int, saturate_linear: bool) -> FeeOnAmount:
    return get_fee_on_amount(
        pool.pool_fees,
        amount,
        fee_mode.has_referral,
        current_point,
        pool.activation_point,
        saturate_linear=saturate_linear,
    )


def get_swap_result(
    pool: VirtualPool,
    config: PoolConfig,
    amount_in: int,
    fee_mode: FeeMode,
    trade_direction: TradeDirection,
    current_point: int,
    *,
    saturate_linear: bool = False,
) -> SwapResult:
    """Apply fees (input or output side) around one curve walk."""
    trading_fee = protocol_fee = referral_fee = 0
    actual_amount_in = to_u64(amount_in)

    if fee_mode.fees_on_input:
        fee = _fee_on(pool, actual_amount_in, fee_mode, current_point, saturate_linear)
        actual_amount_in = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    if trade_direction is TradeDirection.BASE_TO_QUOTE:
        swap = get_swap_amount_from_base_to_quote(pool, config, actual_amount_in)
    else:
        swap = get_swap_amount_from_quote_to_base(pool, config, actual_amount_in)

    output_amount = swap.output_amount
    if not fee_mode.fees_on_input:
        fee = _fee_on(pool, output_amount, fee_mode, current_point, saturate_linear)
        output_amount = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    return SwapResult(
        actual_input_amount=actual_amount_in,
        output_amount=output_amount,
        next_sqrt_price=swap.next_sqrt_price,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
    )


def get_swap_result_from_partial_input(
    pool: VirtualPool,
    config: PoolConfig,
    amount_in: int,
    fee_mode: FeeMode,
    trade_direction: TradeDirection,
    current_point: int,
    *,
    saturate_linear: bool = False,
) -> Tuple[SwapResult, int]:
    """Like `get_swap_result`, but a buy stops at the end of the curve.

    Returns the swap result and the gross input actually used. When fees are
    taken on the input and the curve runs out, the fee is recomputed on the
    smallest gross amount that covers the input the curve consumed.
    """
    trading_fee = protocol_fee = referral_fee = 0
    amount_in = to_u64(amount_in)
    excluded_fee_amount_in = amount_in

    if fee_mode.fees_on_input:
        fee = _fee_on(pool, amount_in, fee_mode, current_point, saturate_linear)
        excluded_fee_amount_in = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    if trade_direction is TradeDirection.BASE_TO_QUOTE:
        swap = get_swap_amount_from_base_to_quote(pool, config, excluded_fee_amount_in)
        amount_left = 0
    else:
        swap, amount_left = _walk_quote_to_base(pool, config, excluded_fee_amount_in)

    consumed_amount_in = safe_sub(excluded_fee_amount_in, amount_left)
    included_fee_amount_in = amount_in
    if amount_left != 0:
        if fee_mode.fees_on_input:
            numerator = get_total_trading_fee(
                pool.pool_fees, current_point, pool.activation_point, saturate_linear=saturate_linear
            )
            included_fee_amount_in = get_included_fee_amount(numerator, consumed_amount_in)
            fee = _fee_on(pool, included_fee_amount_in, fee_mode, current_point, saturate_linear)
            trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee
        else:
            included_fee_amount_in = consumed_amount_in
        _dbg(f"partial fill: used={included_fee_amount_in} of {amount_in}")

    output_amount = swap.output_amount
    if not fee_mode.fees_on_input:
        fee = _fee_on(pool, output_amount, fee_mode, current_point, saturate_linear)
        output_amount = fee.amount
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    result = SwapResult(
        actual_input_amount=consumed_amount_in,
        output_amount=output_amount,
        next_sqrt_price=swap.next_sqrt_price,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
    )
    return result, included_fee_amount_in


def get_swap_result_from_output(
    pool: VirtualPool,
    config: PoolConfig,
    amount_out: int,
    fee_mode: FeeMode,
    trade_direction: TradeDirection,
    current_point: int,
    *,
    saturate_linear: bool = False,
) -> SwapResult:
    """Reverse of `get_swap_result`: the gross input that yields `amount_out` net.

    Output-side fees gross up the amount the curve must pay out; input-side
    fees gross up the input the curve needs. Both use the inverse fee, so the
    returned input is never short of the requested output.
    """
    trading_fee = protocol_fee = referral_fee = 0
    amount_out = to_u64(amount_out)
    numerator = get_total_trading_fee(
        pool.pool_fees, current_point, pool.activation_point, saturate_linear=saturate_linear
    )

    included_fee_amount_out = amount_out
    if not fee_mode.fees_on_input:
        included_fee_amount_out = get_included_fee_amount(numerator, amount_out)
        fee = _fee_on(pool, included_fee_amount_out, fee_mode, current_point, saturate_linear)
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    if trade_direction is TradeDirection.BASE_TO_QUOTE:
        excluded_fee_amount_in, next_sqrt_price = get_in_amount_from_base_to_quote(
            pool, config, included_fee_amount_out
        )
    else:
        excluded_fee_amount_in, next_sqrt_price = get_in_amount_from_quote_to_base(
            pool, config, included_fee_amount_out
        )

    included_fee_amount_in = excluded_fee_amount_in
    if fee_mode.fees_on_input:
        included_fee_amount_in = get_included_fee_amount(numerator, excluded_fee_amount_in)
        fee = _fee_on(pool, included_fee_amount_in, fee_mode, current_point, saturate_linear)
        trading_fee, protocol_fee, referral_fee = fee.trading_fee, fee.protocol_fee, fee.referral_fee

    _dbg(
        f"exact out: out={amount_out} (gross {included_fee_amount_out}) "
        f"in={excluded_fee_amount_in} (gross {included_fee_amount_in})"
    )
    return SwapResult(
        actual_input_amount=included_fee_amount_in,
        output_amount=amount_out,
        next_sqrt_price=next_sqrt_price,
        trading_fee=trading_fee,
        protocol_fee=protocol_fee,
        referral_fee=referral_fee,
    )


# ----------------------------
# Quotes
# ----------------------------

def _check_request(pool: VirtualPool, config: PoolConfig, amount: int, what: str, slippage_bps: int) -> int:
    if is_curve_complete(config, pool.quote_reserve):
        raise PoolCompletedError(pool.quote_reserve, config.migration_quote_threshold)
    if amount == 0:
        raise AmountIsZeroError(f"{what} is zero")
    amount = to_u64(amount)
    to_u128(pool.sqrt_price)
    if not (0 <= slippage_bps <= BASIS_POINT_MAX):
        raise ValueError(f"slippage_bps must be within [0, {BASIS_POINT_MAX}], got {slippage_bps}")
    return amount


def _direction(swap_base_for_quote: bool) -> TradeDirection:
    return TradeDirection.BASE_TO_QUOTE if swap_base_for_quote else TradeDirection.QUOTE_TO_BASE


def _fee_breakdown(result: SwapResult) -> FeeBreakdown:
    return FeeBreakdown(
        trading=result.trading_fee,
        protocol=result.protocol_fee,
        referral=result.referral_fee,
    )


def _price_snapshot(pool: VirtualPool, result: SwapResult) -> PriceSnapshot:
    return PriceSnapshot(
        before_swap=price_from_sqrt_price(pool.sqrt_price),
        after_swap=price_from_sqrt_price(result.next_sqrt_price),
    )


def quote_exact_in(
    pool: VirtualPool,
    config: PoolConfig,
    swap_base_for_quote: bool,
    amount_in: int,
    has_referral: bool,
    current_point: int,
    *,
    slippage_bps: int = 0,
    saturate_linear: bool = False,
) -> QuoteResult:
    """Quote an exact-input swap against a pool snapshot.

    Parameters
    ----------
    pool, config : VirtualPool, PoolConfig
        Snapshots of the on-chain state; neither is modified.
    swap_base_for_quote : bool
        True sells base for quote (price falls); False buys base with quote.
    amount_in : int
        Raw input amount (u64), before fees.
    has_referral : bool
        Whether a referral account takes its share of the protocol fee.
    current_point : int
        Slot or timestamp (see `get_current_point`) used for fee decay.
    slippage_bps : int, keyword-only
        Tolerance applied to `minimum_amount_out` (0..10_000).
    saturate_linear : bool, keyword-only
        Clamp a linear base fee that decays below zero instead of raising.
    """
    amount_in = _check_request(pool, config, amount_in, "amount_in", slippage_bps)
    trade_direction = _direction(swap_base_for_quote)
    fee_mode = get_fee_mode(config.collect_fee_mode, trade_direction, has_referral)
    _dbg(f"quote: dir={trade_direction.value}, in={amount_in}, fee_mode={fee_mode}")

    result = get_swap_result(
        pool,
        config,
        amount_in,
        fee_mode,
        trade_direction,
        current_point,
        saturate_linear=saturate_linear,
    )

    minimum_amount_out = result.output_amount * (BASIS_POINT_MAX - slippage_bps) // BASIS_POINT_MAX
    return QuoteResult(
        amount_out=result.output_amount,
        minimum_amount_out=minimum_amount_out,
        next_sqrt_price=result.next_sqrt_price,
        fee=_fee_breakdown(result),
        price=_price_snapshot(pool, result),
    )


def quote_partial_fill(
    pool: VirtualPool,
    config: PoolConfig,
    swap_base_for_quote: bool,
    amount_in: int,
    has_referral: bool,
    current_point: int,
    *,
    slippage_bps: int = 0,
    saturate_linear: bool = False,
) -> PartialFillQuoteResult:
    """Quote an exact-input swap that may fill only partly.

    Takes the same arguments and runs the same checks as `quote_exact_in`. A
    buy larger than the remaining curve fills up to the last segment instead
    of raising; `amount_in_used` and `amount_left` report the split.
    """
    amount_in = _check_request(pool, config, amount_in, "amount_in", slippage_bps)
    trade_direction = _direction(swap_base_for_quote)
    fee_mode = get_fee_mode(config.collect_fee_mode, trade_direction, has_referral)
    _dbg(f"partial quote: dir={trade_direction.value}, in={amount_in}, fee_mode={fee_mode}")

    result, amount_in_used = get_swap_result_from_partial_input(
        pool,
        config,
        amount_in,
        fee_mode,
        trade_direction,
        current_point,
        saturate_linear=saturate_linear,
    )

    minimum_amount_out = result.output_amount * (BASIS_POINT_MAX - slippage_bps) // BASIS_POINT_MAX
    return PartialFillQuoteResult(
        amount_in_used=amount_in_used,
        amount_left=amount_in - amount_in_used,
        amount_out=result.output_amount,
        minimum_amount_out=minimum_amount_out,
        next_sqrt_price=result.next_sqrt_price,
        fee=_fee_breakdown(result),
        price=_price_snapshot(pool, result),
    )


def quote_exact_out(
    pool: VirtualPool,
    config: PoolConfig,
    swap_base_for_quote: bool,
    amount_out: int,
    has_referral: bool,
    current_point: int,
    *,
    slippage_bps: int = 0,
    saturate_linear: bool = False,
) -> ExactOutQuoteResult:
    """Quote the input needed to receive exactly `amount_out` after fees.

    `maximum_amount_in` is `amount_in` raised by `slippage_bps` (rounded up).
    A sell cannot push the price below `config.sqrt_start_price`; a buy
    cannot go past the last segment. Either raises NotEnoughLiquidityError.
    """
    amount_out = _check_request(pool, config, amount_out, "amount_out", slippage_bps)
    trade_direction = _direction(swap_base_for_quote)
    fee_mode = get_fee_mode(config.collect_fee_mode, trade_direction, has_referral)
    _dbg(f"exact-out quote: dir={trade_direction.value}, out={amount_out}, fee_mode={fee_mode}")

    result = get_swap_result_from_output(
        pool,
        config,
        amount_out,
        fee_mode,
        trade_direction,
        current_point,
        saturate_linear=saturate_linear,
    )

    amount_in = result.actual_input_amount
    return ExactOutQuoteResult(
        amount_in=amount_in,
        maximum_amount_in=ceil_div(amount_in * (BASIS_POINT_MAX + slippage_bps), BASIS_POINT_MAX),
        amount_out=result.output_amount,
        next_sqrt_price=result.next_sqrt_price,
        fee=_fee_breakdown(result),
        price=_price_snapshot(pool, result),
    )


__all__ = [
    "get_fee_mode",
    "get_swap_amount_from_base_to_quote",
    "get_swap_amount_from_quote_to_base",
    "get_in_amount_from_base_to_quote",
    "get_in_amount_from_quote_to_base",
    "get_swap_result",
    "get_swap_result_from_partial_input",
    "get_swap_result_from_output",
    "quote_exact_in",
    "quote_partial_fill",
    "quote_exact_out",
]
