"""API endpoints for the launchpad pricing service."""

import os
import time

import structlog
from fastapi import APIRouter, Depends

from launchpad.constants import DEFAULT_MAX_PRICE_STALENESS
from launchpad.curve.state import CurveState
from launchpad.errors import CurveGraduated
from launchpad.graduation import GraduationEvaluator
from launchpad.models.requests import GraduationRequest, OraclePriceModel, QuoteRequest, SpotPriceRequest
from launchpad.models.responses import GraduationResponse, QuoteResponse, SpotPriceResponse
from launchpad.oracle import resolve_exchange_rate
from launchpad.pricing.engine import DEFAULT_PRICING_ENGINE, PricingEngine
from launchpad.pricing.fees import FeeCalculator, FeeConfig

logger = structlog.get_logger()

router = APIRouter()

# Oracle updates older than this fall back to the curve's last known price
# Configurable via environment variable LAUNCHPAD_MAX_PRICE_STALENESS (seconds)
MAX_PRICE_STALENESS = int(
    os.environ.get("LAUNCHPAD_MAX_PRICE_STALENESS", str(DEFAULT_MAX_PRICE_STALENESS))
)


def get_engine() -> PricingEngine:
    """Dependency provider for the pricing engine.

    Override this in tests to inject a stub engine:
        app.dependency_overrides[get_engine] = lambda: stub_engine

    Returns:
        The engine to price requests with.
    """
    return DEFAULT_PRICING_ENGINE


def _exchange_rate(explicit: str | None, oracle: OraclePriceModel | None, state: CurveState) -> int:
    """Explicit request rate, else a fresh oracle price, else the last known rate."""
    if explicit is not None:
        return int(explicit)
    update = oracle.to_update() if oracle is not None else None
    return resolve_exchange_rate(state, update, now=int(time.time()), max_staleness=MAX_PRICE_STALENESS)


@router.post("/quote/buy")
def quote_buy(request: QuoteRequest, engine: PricingEngine = Depends(get_engine)) -> QuoteResponse:
    """Quote buying tokens from the curve.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Pricing failure: 400 with {"error": code, "detail": message}
    """
    config = request.curve.to_config()
    state = request.state.to_state()
    if state.is_graduated:
        raise CurveGraduated("Bonding curve has graduated; trading is closed")

    rate = _exchange_rate(request.exchange_rate, request.oracle, state)
    quote = engine.quote_buy(state, config, int(request.amount), rate)
    fees = FeeCalculator(FeeConfig(platform_fee_bps=request.platform_fee_bps)).apply(quote)

    logger.info(
        "buy_quoted",
        tokens_sold=state.tokens_sold,
        amount=quote.amount,
        cost=quote.cost_or_proceeds,
        fee=fees.fee,
        slippage_bps=quote.slippage_bps,
    )
    return QuoteResponse.from_quote(quote, fees)


@router.post("/quote/sell")
def quote_sell(request: QuoteRequest, engine: PricingEngine = Depends(get_engine)) -> QuoteResponse:
    """Quote selling tokens back to the curve."""
    config = request.curve.to_config()
    state = request.state.to_state()
    if state.is_graduated:
        raise CurveGraduated("Bonding curve has graduated; trading is closed")

    rate = _exchange_rate(request.exchange_rate, request.oracle, state)
    quote = engine.quote_sell(state, config, int(request.amount), rate)
    fees = FeeCalculator(FeeConfig(platform_fee_bps=request.platform_fee_bps)).apply(quote)

    logger.info(
        "sell_quoted",
        tokens_sold=state.tokens_sold,
        amount=quote.amount,
        proceeds=quote.cost_or_proceeds,
        fee=fees.fee,
    )
    return QuoteResponse.from_quote(quote, fees)


@router.post("/spot-price")
def spot_price(request: SpotPriceRequest, engine: PricingEngine = Depends(get_engine)) -> SpotPriceResponse:
    """Current spot price in settlement units per token."""
    config = request.curve.to_config()
    state = request.state.to_state()
    rate = _exchange_rate(request.exchange_rate, request.oracle, state)

    return SpotPriceResponse(
        spot_price=engine.spot_price(state, config, rate),
        tokens_sold=state.tokens_sold,
        reserve=state.reserve,
    )


@router.post("/graduation")
def graduation(request: GraduationRequest, engine: PricingEngine = Depends(get_engine)) -> GraduationResponse:
    """Value raised so far and whether the curve should graduate."""
    config = request.curve.to_config()
    state = request.state.to_state()

    raised = 0
    if state.reference_price > 0:
        raised = engine.usd_raised(state.reserve, state.reference_price, config.settlement_scale)

    return GraduationResponse(
        should_graduate=GraduationEvaluator(engine).should_graduate(state, config),
        usd_raised=raised,
        graduation_threshold=config.graduation_threshold,
        tokens_sold=state.tokens_sold,
        curve_supply=config.curve_supply,
    )
