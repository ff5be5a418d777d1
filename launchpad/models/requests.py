"""Pydantic models for quoting API requests."""

from pydantic import BaseModel, Field

from launchpad.constants import (
    CURVE_SUPPLY,
    END_PRICE_USD,
    GRADUATION_USD,
    PRECISION,
    PRICE_SCALE,
    SETTLEMENT_SCALE,
    START_PRICE_USD,
)
from launchpad.curve.config import CurveConfig
from launchpad.curve.state import CurveState
from launchpad.models.types import Uint64
from launchpad.oracle import OraclePrice


class CurveConfigModel(BaseModel):
    """Curve parameters. Omitted fields take the launchpad defaults."""

    start_price: Uint64 = Field(default=str(START_PRICE_USD), description="Price at zero sold (price_scale units)")
    end_price: Uint64 = Field(default=str(END_PRICE_USD), description="Price at full supply sold")
    curve_supply: Uint64 = Field(default=str(CURVE_SUPPLY), description="Whole tokens on the curve")
    graduation_threshold: Uint64 = Field(default=str(GRADUATION_USD), description="Value to raise (price_scale units)")
    price_scale: Uint64 = str(PRICE_SCALE)
    precision: Uint64 = str(PRECISION)
    settlement_scale: Uint64 = str(SETTLEMENT_SCALE)

    def to_config(self) -> CurveConfig:
        """Build the engine configuration (validated on construction)."""
        return CurveConfig(
            start_price=int(self.start_price),
            end_price=int(self.end_price),
            curve_supply=int(self.curve_supply),
            graduation_threshold=int(self.graduation_threshold),
            price_scale=int(self.price_scale),
            precision=int(self.precision),
            settlement_scale=int(self.settlement_scale),
        )


class CurveStateModel(BaseModel):
    """Snapshot of a curve's state as held by the ledger."""

    tokens_sold: Uint64 = "0"
    reserve: Uint64 = "0"
    reference_price: Uint64 = Field(default="0", description="Last known settlement coin price")
    is_graduated: bool = False
    total_volume: Uint64 = "0"
    trade_count: Uint64 = "0"

    def to_state(self) -> CurveState:
        return CurveState(
            tokens_sold=int(self.tokens_sold),
            reserve=int(self.reserve),
            reference_price=int(self.reference_price),
            is_graduated=self.is_graduated,
            total_volume=int(self.total_volume),
            trade_count=int(self.trade_count),
        )


class OraclePriceModel(BaseModel):
    """Oracle update: price * 10^exponent USD per settlement coin."""

    price: int
    exponent: int
    publish_time: int = Field(description="Unix timestamp in seconds")

    def to_update(self) -> OraclePrice:
        return OraclePrice(price=self.price, exponent=self.exponent, publish_time=self.publish_time)


class QuoteRequest(BaseModel):
    """Request a buy or sell quote.

    The exchange rate is taken from `exchange_rate` when given, else from a
    fresh `oracle` update, else from state.reference_price.
    """

    curve: CurveConfigModel = Field(default_factory=CurveConfigModel)
    state: CurveStateModel = Field(default_factory=CurveStateModel)
    amount: Uint64 = Field(description="Whole tokens to trade")
    exchange_rate: Uint64 | None = Field(default=None, description="Settlement coin price")
    oracle: OraclePriceModel | None = None
    platform_fee_bps: int = Field(default=0, ge=0, description="Platform fee in basis points")


class SpotPriceRequest(BaseModel):
    """Request the current spot price."""

    curve: CurveConfigModel = Field(default_factory=CurveConfigModel)
    state: CurveStateModel = Field(default_factory=CurveStateModel)
    exchange_rate: Uint64 | None = None
    oracle: OraclePriceModel | None = None


class GraduationRequest(BaseModel):
    """Request a graduation check."""

    curve: CurveConfigModel = Field(default_factory=CurveConfigModel)
    state: CurveStateModel
