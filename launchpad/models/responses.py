"""Pydantic models for quoting API responses."""

from pydantic import BaseModel, Field

from launchpad.models.types import Uint64
from launchpad.pricing.fees import FeeBreakdown
from launchpad.pricing.quote import Quote, TradeSide


class QuoteResponse(BaseModel):
    """A curve quote plus the platform fee split."""

    side: TradeSide
    amount: Uint64
    cost_or_proceeds: Uint64 = Field(description="Curve cost (buy) or proceeds (sell)")
    spot_price: Uint64 = Field(description="Settlement units per token")
    slippage_bps: int
    tokens_sold: Uint64
    platform_fee: Uint64
    total: Uint64 = Field(description="Cost plus fee (buy) or proceeds minus fee (sell)")

    @classmethod
    def from_quote(cls, quote: Quote, fees: FeeBreakdown) -> "QuoteResponse":
        return cls(
            side=quote.side,
            amount=quote.amount,
            cost_or_proceeds=quote.cost_or_proceeds,
            spot_price=quote.spot_price,
            slippage_bps=quote.slippage_bps,
            tokens_sold=quote.tokens_sold,
            platform_fee=fees.fee,
            total=fees.total,
        )


class SpotPriceResponse(BaseModel):
    """Current spot price with the position it was read at."""

    spot_price: Uint64
    tokens_sold: Uint64
    reserve: Uint64


class GraduationResponse(BaseModel):
    """Graduation status of a curve."""

    should_graduate: bool
    usd_raised: Uint64
    graduation_threshold: Uint64
    tokens_sold: Uint64
    curve_supply: Uint64


class ErrorResponse(BaseModel):
    """Typed pricing failure."""

    error: str
    detail: str
