"""
Core exception types for curve_quote.core.

These are dependency-free and may be imported by all modules. Every failure of
the quoting engine is one of these; none are retried or swallowed internally.
"""

__all__ = [
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


class CurveQuoteError(Exception):
    """Base class for all quoting failures."""
    pass


class MathOverflowError(CurveQuoteError):
    """Raised when a value leaves the u64/u128 range or pow exceeds its exponent bound."""
    pass


class InvalidPriceError(CurveQuoteError):
    """Raised when a price range is not strictly increasing."""
    pass


class DivisionByZeroError(CurveQuoteError):
    """Raised when a zero price or zero liquidity would be used as a divisor."""
    pass


class NotEnoughLiquidityError(CurveQuoteError):
    """Raised when the curve cannot absorb the whole input.

    Attributes
    ----------
    amount_left : int
        Input that no segment could absorb.
    filled_out : int
        Output accumulated before the walk stopped.
    next_sqrt_price : int
        Price reached when the walk stopped.
    """

    def __init__(self, amount_left, *, filled_out=0, next_sqrt_price=None):
        super().__init__(
            f"Curve cannot absorb input: amount_left={amount_left}, filled_out={filled_out}"
        )
        self.amount_left = amount_left
        self.filled_out = filled_out
        self.next_sqrt_price = next_sqrt_price


class InvalidCollectFeeModeError(CurveQuoteError):
    """Raised when collect_fee_mode is outside the known enumeration."""

    def __init__(self, collect_fee_mode):
        super().__init__(f"Invalid collect fee mode: {collect_fee_mode!r}")
        self.collect_fee_mode = collect_fee_mode


class InvalidFeeSchedulerModeError(CurveQuoteError):
    """Raised when fee_scheduler_mode is outside the known enumeration."""

    def __init__(self, fee_scheduler_mode):
        super().__init__(f"Invalid fee scheduler mode: {fee_scheduler_mode!r}")
        self.fee_scheduler_mode = fee_scheduler_mode


class InvalidActivationTypeError(CurveQuoteError):
    """Raised when activation_type is neither slot nor timestamp."""

    def __init__(self, activation_type):
        super().__init__(f"Invalid activation type: {activation_type!r}")
        self.activation_type = activation_type


class PoolCompletedError(CurveQuoteError):
    """Raised when the pool's quote reserve already reached the migration threshold."""

    def __init__(self, quote_reserve, migration_quote_threshold):
        super().__init__(
            f"Virtual pool is completed: quote_reserve={quote_reserve} >= threshold={migration_quote_threshold}"
        )
        self.quote_reserve = quote_reserve
        self.migration_quote_threshold = migration_quote_threshold


class AmountIsZeroError(CurveQuoteError):
    """Raised for a zero-sized trade request."""
    pass


class InvalidCurveError(CurveQuoteError):
    """Raised when a curve definition breaks its shape rules."""
    pass
