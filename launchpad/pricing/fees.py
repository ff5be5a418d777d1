"""Platform fee calculation and slippage bounds.

The curve itself has no spread: a sell exactly reverses the equivalent buy.
Platform fees are the only asymmetry, charged on top of buy costs and
deducted from sell proceeds.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from launchpad.constants import BPS_DENOMINATOR, MAX_PLATFORM_FEE_BPS
from launchpad.errors import InvalidFee, SlippageExceeded
from launchpad.pricing.quote import Quote, TradeSide
from launchpad.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeeConfig:
    """Platform fee configuration.

    Attributes:
        platform_fee_bps: Fee in basis points (default: 100 = 1%)
    """

    platform_fee_bps: int = 100

    def __post_init__(self) -> None:
        if not 0 <= self.platform_fee_bps <= MAX_PLATFORM_FEE_BPS:
            raise InvalidFee(
                f"platform_fee_bps must be in [0, {MAX_PLATFORM_FEE_BPS}], "
                f"got {self.platform_fee_bps}"
            )


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()


@dataclass(frozen=True)
class FeeBreakdown:
    """Gross curve value, platform fee and what the trader pays or receives.

    Attributes:
        side: Buy or sell
        gross: Curve cost or proceeds (settlement units)
        fee: Platform fee (settlement units)
        total: gross + fee for buys, gross - fee for sells
    """

    side: TradeSide
    gross: int
    fee: int
    total: int

    def ensure_within(self, limit: int) -> None:
        """Check the total against a caller-supplied bound.

        For buys `limit` is the maximum the trader pays; for sells it is the
        minimum the trader accepts.

        Raises:
            SlippageExceeded: If the total is outside the bound
        """
        if self.side == TradeSide.BUY and self.total > limit:
            logger.info("slippage_exceeded", side=self.side.value, total=self.total, max_cost=limit)
            raise SlippageExceeded(f"Total cost {self.total} exceeds max cost {limit}")
        if self.side == TradeSide.SELL and self.total < limit:
            logger.info("slippage_exceeded", side=self.side.value, total=self.total, min_output=limit)
            raise SlippageExceeded(f"Net proceeds {self.total} below min output {limit}")


class FeeCalculator:
    """Apply the platform fee to curve quotes.

    Attributes:
        config: Fee configuration settings
    """

    def __init__(self, config: FeeConfig | None = None):
        self.config = config or DEFAULT_FEE_CONFIG

    def fee_for(self, gross: int) -> int:
        """Fee on a gross amount, truncated."""
        return (S(gross) * self.config.platform_fee_bps // BPS_DENOMINATOR).value

    def apply(self, quote: Quote) -> FeeBreakdown:
        """Split a quote into gross value, fee and trader total.

        Raises:
            MathOverflow: If the fee computation overflows
        """
        gross = S(quote.cost_or_proceeds)
        fee = self.fee_for(gross.value)

        if quote.side == TradeSide.BUY:
            total = gross + fee
        else:
            total = gross - fee

        return FeeBreakdown(side=quote.side, gross=gross.value, fee=fee, total=total.value)


# Default calculator instance
DEFAULT_FEE_CALCULATOR = FeeCalculator()
