"""Exponential bonding curve model.

Maps a sold-supply position to a price and integrates price over supply:

    price(s)    = start_price * e^(k*s)
    cost(a, b)  = (start_price / k) * (e^(k*b) - e^(k*a))

k is derived from the configuration so that price(curve_supply) equals
end_price, and is stored at precision**2 scale:

    k_scaled = ln(end_price / start_price) * precision * precision / curve_supply

so that the exponent at position s is k_scaled * s / precision.

Using the antiderivative keeps every cost O(1) (two exponentials) and makes
buys and sells over the same interval cost exactly the same amount.
"""

from __future__ import annotations

from functools import lru_cache

import structlog

from launchpad.curve.config import CurveConfig
from launchpad.errors import InsufficientSupply, InvalidCurveParameters, InvalidRange
from launchpad.math.fixed_point import exp_taylor, ln_fixed
from launchpad.safe_int import S

logger = structlog.get_logger()


@lru_cache(maxsize=256)
def growth_constant(config: CurveConfig) -> int:
    """Derive the growth constant k for a curve configuration.

    Deterministic: identical configurations always yield the same integer,
    and the value is cached per configuration.

    Args:
        config: Curve configuration

    Returns:
        k at precision**2 fixed-point scale

    Raises:
        InvalidCurveParameters: If k truncates to zero (supply too large for
            the configured precision)
        MathOverflow: If an intermediate leaves the u128 range
    """
    precision = config.precision
    ratio = S(config.end_price) * precision // config.start_price
    ln_ratio = ln_fixed(ratio.value, precision)
    k = S(ln_ratio) * precision // config.curve_supply

    if not k:
        raise InvalidCurveParameters(
            f"Growth constant truncates to zero for curve_supply={config.curve_supply} "
            f"at precision={precision}"
        )

    logger.debug(
        "growth_constant_derived",
        start_price=config.start_price,
        end_price=config.end_price,
        curve_supply=config.curve_supply,
        ln_ratio=ln_ratio,
        k=k.value,
    )
    return k.value


class CurveModel:
    """Price and integral of one exponential bonding curve.

    Attributes:
        config: The curve configuration
        k: Growth constant at precision**2 scale
    """

    def __init__(self, config: CurveConfig) -> None:
        self.config = config
        self.k = growth_constant(config)

    @classmethod
    def for_config(cls, config: CurveConfig) -> CurveModel:
        """Return the shared model for a configuration."""
        return _model_for(config)

    def exponent_at(self, tokens_sold: int) -> int:
        """k * tokens_sold at precision scale."""
        return (S(self.k) * tokens_sold // self.config.precision).value

    def exp_at(self, tokens_sold: int) -> int:
        """e^(k * tokens_sold) at precision scale."""
        return exp_taylor(self.exponent_at(tokens_sold), self.config.precision)

    def price_at(self, tokens_sold: int) -> int:
        """Spot price at a sold-supply position, in price_scale units.

        price_at(0) == start_price exactly.
        """
        return (S(self.config.start_price) * self.exp_at(tokens_sold) // self.config.precision).value

    def scaled_price_at(self, tokens_sold: int) -> int:
        """Spot price at price_scale * precision.

        Strictly increasing in tokens_sold, unlike price_at whose truncation
        maps neighbouring positions onto the same value.
        """
        return (S(self.config.start_price) * self.exp_at(tokens_sold)).value

    def integral(self, start: int, end: int) -> int:
        """Cost of moving the sold position from `start` to `end`.

        Args:
            start: Lower sold-supply position
            end: Upper sold-supply position, at most curve_supply

        Returns:
            Reference-currency value in price_scale units

        Raises:
            InvalidRange: If start > end
            InsufficientSupply: If end exceeds curve_supply
            MathOverflow: If an intermediate leaves the u128 range
        """
        if start < 0 or start > end:
            raise InvalidRange(f"Invalid integral range [{start}, {end}]")
        if end > self.config.curve_supply:
            raise InsufficientSupply(
                f"Position {end} exceeds curve supply {self.config.curve_supply}"
            )
        if start == end:
            return 0

        exp_diff = S(self.exp_at(end)) - self.exp_at(start)
        numerator = S(self.config.start_price) * exp_diff * self.config.precision
        return (numerator // self.k).value

    def __repr__(self) -> str:
        return f"CurveModel(k={self.k}, config={self.config!r})"


@lru_cache(maxsize=256)
def _model_for(config: CurveConfig) -> CurveModel:
    return CurveModel(config)
