"""Pricing engine error classes.

Every failure is fatal to the operation that raised it: no quote is
produced and no state delta exists to commit.
"""


class PricingError(Exception):
    """Base error for pricing operations."""

    code = "pricing_error"


class InvalidAmount(PricingError):
    """Trade amount is zero or negative."""

    code = "invalid_amount"


class InsufficientSupply(PricingError):
    """Buy exceeds remaining curve supply, or sell exceeds tokens sold."""

    code = "insufficient_supply"


class InvalidRange(PricingError):
    """Integral or logarithm requested outside its domain."""

    code = "invalid_range"


class MathOverflow(PricingError, ArithmeticError):
    """A checked arithmetic step left its integer width."""

    code = "math_overflow"


class ExponentOutOfRange(MathOverflow):
    """Exponent is outside the region where the Taylor series converges."""

    code = "exponent_out_of_range"


class InvalidPrice(PricingError):
    """Reference exchange rate is zero or otherwise out of domain."""

    code = "invalid_price"


class StalePrice(InvalidPrice):
    """Oracle price is older than the accepted staleness window."""

    code = "stale_price"


class InvalidCurveParameters(PricingError):
    """Curve configuration is inconsistent."""

    code = "invalid_curve_parameters"


class InvalidFee(PricingError):
    """Platform fee is outside [0, MAX_PLATFORM_FEE_BPS]."""

    code = "invalid_fee"


class SlippageExceeded(PricingError):
    """Quoted total is outside the caller's bound."""

    code = "slippage_exceeded"


class CurveGraduated(PricingError):
    """Curve has graduated; trading on it is closed."""

    code = "curve_graduated"


class InsufficientLiquidity(PricingError):
    """Reserve cannot cover the proceeds of a sell."""

    code = "insufficient_liquidity"


class StaleQuote(PricingError):
    """Quote was computed against a different curve position or side."""

    code = "stale_quote"
