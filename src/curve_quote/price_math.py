"""Bin-id pricing: price = (1 + bin_step / 10_000) ** active_id in Q64.64."""

from __future__ import annotations

from .core.constants import BASIS_POINT_MAX, ONE_Q64, SCALE_OFFSET
from .core.fixed_point import pow_q64


def get_price_from_id(active_id: int, bin_step: int) -> int:
    """Return (1 + bin_step bps) ** active_id as Q64.64.

    bin_step = 1 gives a base of 1.0001; negative ids give prices below 1.0.
    Raises MathOverflowError when the exponent is out of range.
    """
    bps = (bin_step << SCALE_OFFSET) // BASIS_POINT_MAX
    base = ONE_Q64 + bps
    return pow_q64(base, active_id)


__all__ = ["get_price_from_id"]
