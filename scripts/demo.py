"""Demo: exact-in quotes on a segmented bonding curve.

Scenarios covered:
Q1a) Buy inside the first segment (zero fees)
Q1b) Buy across a segment boundary, fee on the quote input
Q2a) Sell back down through both segments, fee on the quote output
Q2b) Sell past the start price (lowest segment absorbs the remainder)
Q3a) Exponential fee decay at activation
Q3b) The same trade two periods later
Q4a) Buy larger than the curve (not enough liquidity)
Q4b) Pool already at its migration threshold
Q5a) Partial fill of a buy larger than the curve
Q5b) Exact-out buy with the fee on the quote input
"""
from __future__ import annotations

from typing import Callable, List
import argparse
import sys

from curve_quote import (
    ONE_Q64,
    BaseFeeConfig,
    CollectFeeMode,
    CurvePoint,
    CurveQuoteError,
    FeeSchedulerMode,
    PoolConfig,
    PoolFees,
    VirtualPool,
    get_current_point,
    initialize_curve,
    quote_exact_in,
    quote_exact_out,
    quote_partial_fill,
)
from curve_quote.core.fmt import fmt_dec, q64_to_decimal, price_to_decimal
import curve_quote.quote as quote_mod

# ---------- pretty printers ----------

def brief_curve(config: PoolConfig) -> str:
    lower = config.sqrt_start_price
    parts = []
    for i, point in enumerate(config.curve):
        if point.liquidity == 0:
            break
        parts.append(
            f"seg[{i}]: sqrt=[{q64_to_decimal(lower):.4f}, {q64_to_decimal(point.sqrt_price):.4f}) "
            f"L={q64_to_decimal(point.liquidity):.0f}"
        )
        lower = point.sqrt_price
    return "; ".join(parts) if parts else "curve: (empty)"


def run_scenario(
    title: str,
    pool: VirtualPool,
    config: PoolConfig,
    *,
    sell: bool,
    amount_in: int,
    current_point: int = 0,
    has_referral: bool = False,
    slippage_bps: int = 0,
    compact: bool = False,
) -> None:
    print(f"\n=== {title} ===")
    if not compact:
        print(f"- {brief_curve(config)}")
        print(f"- pool sqrt={q64_to_decimal(pool.sqrt_price):.6f}, quote_reserve={pool.quote_reserve}")
        print(f"- {'SELL base' if sell else 'BUY base'} amount_in={amount_in}, point={current_point}")
    try:
        r = quote_exact_in(
            pool,
            config,
            sell,
            amount_in,
            has_referral,
            current_point,
            slippage_bps=slippage_bps,
        )
    except CurveQuoteError as e:
        print(f"Quote failed: {type(e).__name__}: {e}")
        return

    print(f"- amount_out={r.amount_out} (min {r.minimum_amount_out} at {slippage_bps} bps)")
    print(f"- fee: trading={r.fee.trading}, protocol={r.fee.protocol}, referral={r.fee.referral}")
    if not compact:
        print(
            f"- price: {fmt_dec(price_to_decimal(pool.sqrt_price), places=6)} -> "
            f"{fmt_dec(price_to_decimal(r.next_sqrt_price), places=6)}"
        )


def run_partial_fill(title: str, pool: VirtualPool, config: PoolConfig, *, amount_in: int, compact: bool = False) -> None:
    print(f"\n=== {title} ===")
    if not compact:
        print(f"- {brief_curve(config)}")
        print(f"- BUY base amount_in={amount_in}")
    try:
        r = quote_partial_fill(pool, config, False, amount_in, False, 0)
    except CurveQuoteError as e:
        print(f"Quote failed: {type(e).__name__}: {e}")
        return
    print(f"- used={r.amount_in_used}, left={r.amount_left}, amount_out={r.amount_out}")
    print(f"- fee: trading={r.fee.trading}, protocol={r.fee.protocol}, referral={r.fee.referral}")


def run_exact_out(
    title: str,
    pool: VirtualPool,
    config: PoolConfig,
    *,
    sell: bool,
    amount_out: int,
    slot: int = 0,
    timestamp: int = 0,
    slippage_bps: int = 0,
    compact: bool = False,
) -> None:
    print(f"\n=== {title} ===")
    current_point = get_current_point(config, slot, timestamp)
    if not compact:
        print(f"- {brief_curve(config)}")
        print(f"- {'SELL base' if sell else 'BUY base'} amount_out={amount_out}, point={current_point}")
    try:
        r = quote_exact_out(pool, config, sell, amount_out, False, current_point, slippage_bps=slippage_bps)
    except CurveQuoteError as e:
        print(f"Quote failed: {type(e).__name__}: {e}")
        return
    print(f"- amount_in={r.amount_in} (max {r.maximum_amount_in} at {slippage_bps} bps)")
    print(f"- fee: trading={r.fee.trading}, protocol={r.fee.protocol}, referral={r.fee.referral}")


# ---------- build common fixtures ----------

def mk_config(pool_fees: PoolFees, collect_fee_mode: int = CollectFeeMode.QUOTE_TOKEN) -> PoolConfig:
    # sqrt price 1 -> 2 at L=1000, then 2 -> 4 at L=2000
    return PoolConfig(
        curve=initialize_curve([
            CurvePoint(sqrt_price=2 * ONE_Q64, liquidity=1000 * ONE_Q64),
            CurvePoint(sqrt_price=4 * ONE_Q64, liquidity=2000 * ONE_Q64),
        ]),
        sqrt_start_price=ONE_Q64,
        migration_quote_threshold=4000,
        pool_fees=pool_fees,
        collect_fee_mode=collect_fee_mode,
    )


def mk_pool(config: PoolConfig, sqrt_price: int, quote_reserve: int = 0, activation_point: int = 0) -> VirtualPool:
    return VirtualPool(
        sqrt_price=sqrt_price,
        quote_reserve=quote_reserve,
        activation_point=activation_point,
        pool_fees=config.pool_fees,
    )


#
# -------- scenario registry helpers --------
class Scenario:
    def __init__(self, sid: str, fn: Callable[[], None]):
        self.sid = sid
        self.fn = fn

scenarios: List[Scenario] = []

def add(sid: str, fn: Callable[[], None]) -> None:
    scenarios.append(Scenario(sid, fn))

# ---------- run scenarios ----------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bonding-curve quote demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., Q1a,Q2b)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    parser.add_argument("--compact", action="store_true", help="Compact output: show only amounts and fees")
    parser.add_argument("--debug", action="store_true", help="Print per-segment walk diagnostics")
    args = parser.parse_args(sys.argv[1:])

    compact = bool(args.compact)
    quote_mod.DEBUG_QUOTE = bool(args.debug)

    no_fees = PoolFees()
    one_pct = PoolFees(
        base_fee=BaseFeeConfig(cliff_fee_numerator=100),
        protocol_fee_percent=20,
        referral_fee_percent=20,
    )
    decaying = PoolFees(
        base_fee=BaseFeeConfig(
            cliff_fee_numerator=5000,
            number_of_period=4,
            period_frequency=10,
            reduction_factor=5000,
            fee_scheduler_mode=FeeSchedulerMode.EXPONENTIAL,
        )
    )

    # --------------- Register scenarios ---------------
    cfg_free = mk_config(no_fees)
    add("Q1a", lambda: run_scenario(
        "Q1a) Buy inside the first segment (zero fees)",
        mk_pool(cfg_free, ONE_Q64), cfg_free,
        sell=False, amount_in=600, compact=compact,
    ))

    cfg_fee = mk_config(one_pct)
    add("Q1b", lambda: run_scenario(
        "Q1b) Buy across a segment boundary, fee on quote input (referral)",
        mk_pool(cfg_fee, ONE_Q64), cfg_fee,
        sell=False, amount_in=3000, has_referral=True, slippage_bps=50, compact=compact,
    ))

    add("Q2a", lambda: run_scenario(
        "Q2a) Sell through both segments, fee on quote output",
        mk_pool(cfg_fee, 4 * ONE_Q64), cfg_fee,
        sell=True, amount_in=1000, compact=compact,
    ))

    add("Q2b", lambda: run_scenario(
        "Q2b) Sell past the start price",
        mk_pool(cfg_free, 4 * ONE_Q64), cfg_free,
        sell=True, amount_in=1500, compact=compact,
    ))

    cfg_decay = mk_config(decaying, CollectFeeMode.OUTPUT_TOKEN)
    add("Q3a", lambda: run_scenario(
        "Q3a) Exponential decay at activation",
        mk_pool(cfg_decay, ONE_Q64, activation_point=100), cfg_decay,
        sell=False, amount_in=1000, current_point=100, compact=compact,
    ))
    add("Q3b", lambda: run_scenario(
        "Q3b) Exponential decay two periods later",
        mk_pool(cfg_decay, ONE_Q64, activation_point=100), cfg_decay,
        sell=False, amount_in=1000, current_point=120, compact=compact,
    ))

    add("Q4a", lambda: run_scenario(
        "Q4a) Buy larger than the curve",
        mk_pool(cfg_free, ONE_Q64), cfg_free,
        sell=False, amount_in=10_000, compact=compact,
    ))
    add("Q4b", lambda: run_scenario(
        "Q4b) Pool at its migration threshold",
        mk_pool(cfg_free, 4 * ONE_Q64, quote_reserve=4000), cfg_free,
        sell=True, amount_in=10, compact=compact,
    ))

    add("Q5a", lambda: run_partial_fill(
        "Q5a) Partial fill of a buy larger than the curve (fee on quote input)",
        mk_pool(cfg_fee, ONE_Q64), cfg_fee,
        amount_in=10_000, compact=compact,
    ))
    add("Q5b", lambda: run_exact_out(
        "Q5b) Exact-out buy of 750 base, fee on quote input",
        mk_pool(cfg_fee, ONE_Q64), cfg_fee,
        sell=False, amount_out=750, slot=42, slippage_bps=50, compact=compact,
    ))

    # --------------- Filter & run ---------------
    only_set = None
    skip_set = None
    if args.only:
        only_set = set([s.strip() for s in args.only.split(',') if s.strip()])
    if args.skip:
        skip_set = set([s.strip() for s in args.skip.split(',') if s.strip()])

    for sc in scenarios:
        if only_set is not None and sc.sid not in only_set:
            continue
        if skip_set is not None and sc.sid in skip_set:
            continue
        sc.fn()
