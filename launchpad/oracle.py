"""Reference exchange-rate handling.

The engine treats the exchange rate as an opaque positive integer. This
module is the caller-side glue that turns an oracle feed value into that
integer and decides which rate to price with:

1. If a fresh oracle update exists, normalize and use it
2. If the update is stale (or absent), fall back to the curve's last known rate
3. If neither is usable, refuse to price (InvalidPrice)
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from launchpad.constants import DEFAULT_MAX_PRICE_STALENESS
from launchpad.curve.state import CurveState
from launchpad.errors import InvalidPrice, MathOverflow, StalePrice
from launchpad.safe_int import S

logger = structlog.get_logger()

# Target decimals of normalized prices (matches PRICE_SCALE = 1e8)
PRICE_DECIMALS = 8

# Larger decimal shifts cannot fit a u128 (10^39 > 2^128)
MAX_DECIMAL_SHIFT = 38


@dataclass(frozen=True)
class OraclePrice:
    """One oracle price update.

    The quoted value is `price * 10^exponent` USD per settlement coin.

    Attributes:
        price: Raw feed mantissa
        exponent: Power-of-ten exponent of the mantissa
        publish_time: Unix timestamp (seconds) of the update
    """

    price: int
    exponent: int
    publish_time: int


def normalize_price(price: int, exponent: int, target_decimals: int = PRICE_DECIMALS) -> int:
    """Rescale `price * 10^exponent` to an integer with `target_decimals` decimals.

    Examples:
        normalize_price(10050, -2) == 10_050_000_000   # $100.50
        normalize_price(15_000_000_000, -8) == 15_000_000_000   # $150

    Raises:
        InvalidPrice: If the price is non-positive or truncates to zero
        MathOverflow: If the rescaled value does not fit in u64
    """
    if price <= 0:
        raise InvalidPrice(f"Oracle price must be > 0, got {price}")

    shift = exponent + target_decimals
    if shift > MAX_DECIMAL_SHIFT:
        raise MathOverflow(f"Decimal shift {shift} overflows")

    if shift >= 0:
        value = S(price) * 10**shift
    elif -shift > MAX_DECIMAL_SHIFT:
        value = S.zero()
    else:
        value = S(price) // 10**-shift

    if not value:
        raise InvalidPrice(f"Oracle price {price}e{exponent} truncates to zero")

    return value.to_u64()


def ensure_fresh(
    update: OraclePrice,
    now: int,
    max_staleness: int = DEFAULT_MAX_PRICE_STALENESS,
) -> None:
    """Reject updates from the future or older than `max_staleness` seconds.

    Raises:
        StalePrice: If the update is outside the accepted window
    """
    age = now - update.publish_time
    if age < 0 or age > max_staleness:
        raise StalePrice(f"Price age {age}s outside [0, {max_staleness}]s")


def resolve_exchange_rate(
    state: CurveState,
    update: OraclePrice | None,
    now: int,
    max_staleness: int = DEFAULT_MAX_PRICE_STALENESS,
) -> int:
    """Pick the exchange rate to price a trade with.

    Args:
        state: Curve snapshot holding the last known rate
        update: Latest oracle update, if any
        now: Current unix time in seconds
        max_staleness: Maximum accepted update age in seconds

    Returns:
        Exchange rate in price_scale units

    Raises:
        InvalidPrice: If the update is malformed, or no usable rate exists
    """
    if update is not None:
        try:
            ensure_fresh(update, now, max_staleness)
        except StalePrice as err:
            logger.warning(
                "stale_oracle_price",
                publish_time=update.publish_time,
                now=now,
                max_staleness=max_staleness,
                fallback=state.reference_price,
                reason=str(err),
            )
        else:
            return normalize_price(update.price, update.exponent)

    if state.reference_price <= 0:
        raise InvalidPrice("No fresh oracle price and no last known reference price")

    logger.debug("using_last_known_price", reference_price=state.reference_price)
    return state.reference_price
