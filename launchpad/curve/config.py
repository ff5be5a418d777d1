"""Curve configuration."""

from dataclasses import dataclass

from launchpad.constants import (
    CURVE_SUPPLY,
    END_PRICE_USD,
    GRADUATION_USD,
    MAX_EXPONENT_UNITS,
    PRECISION,
    PRICE_SCALE,
    SETTLEMENT_SCALE,
    START_PRICE_USD,
    U64_MAX,
)
from launchpad.errors import InvalidCurveParameters, MathOverflow
from launchpad.math.fixed_point import exp_taylor


@dataclass(frozen=True)
class CurveConfig:
    """Immutable parameters of one bonding curve.

    Prices are reference-currency (USD) values scaled by `price_scale`;
    supplies are whole-token counts with decimals already normalized away.

    Attributes:
        start_price: Price per token at zero tokens sold
        end_price: Price per token once `curve_supply` tokens are sold
        curve_supply: Total tokens transactable on the curve
        graduation_threshold: Minimum value raised (price_scale units) to graduate
        price_scale: Fixed-point scale of prices and exchange rates (default: 1e8)
        precision: Fixed-point scale of exponents (default: 1e12)
        settlement_scale: Settlement base units per whole coin (default: 1e9)
    """

    start_price: int = START_PRICE_USD
    end_price: int = END_PRICE_USD
    curve_supply: int = CURVE_SUPPLY
    graduation_threshold: int = GRADUATION_USD
    price_scale: int = PRICE_SCALE
    precision: int = PRECISION
    settlement_scale: int = SETTLEMENT_SCALE

    def __post_init__(self) -> None:
        for name in (
            "start_price",
            "end_price",
            "curve_supply",
            "graduation_threshold",
            "price_scale",
            "precision",
            "settlement_scale",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidCurveParameters(f"{name} must be an int, got {type(value).__name__}")
            if not 0 <= value <= U64_MAX:
                raise InvalidCurveParameters(f"{name} must fit in u64, got {value}")

        if self.start_price <= 0:
            raise InvalidCurveParameters("start_price must be > 0.")
        if self.end_price <= self.start_price:
            raise InvalidCurveParameters("end_price must be greater than start_price.")
        if self.curve_supply <= 0:
            raise InvalidCurveParameters("curve_supply must be > 0.")
        if self.price_scale <= 0 or self.precision <= 0 or self.settlement_scale <= 0:
            raise InvalidCurveParameters("Scales must be > 0.")

        # e^(k * curve_supply) = end/start must stay where the series converges
        try:
            max_ratio = exp_taylor(MAX_EXPONENT_UNITS * self.precision, self.precision)
        except MathOverflow as err:
            raise InvalidCurveParameters(
                f"precision {self.precision} is too large for u128 curve arithmetic"
            ) from err
        if self.end_price * self.precision > self.start_price * max_ratio:
            raise InvalidCurveParameters(
                f"end_price / start_price exceeds e^{MAX_EXPONENT_UNITS}; "
                "the exponential series would not converge to full precision."
            )


# Default configuration instance
DEFAULT_CURVE_CONFIG = CurveConfig()
