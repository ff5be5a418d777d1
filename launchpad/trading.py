"""Curve state transitions for committed trades.

apply_buy and apply_sell turn a quote into the next CurveState snapshot.
They never touch their input: the caller persists the returned state and
moves funds in the same atomic step, or discards both.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from launchpad.curve.config import CurveConfig
from launchpad.curve.state import CurveState
from launchpad.errors import CurveGraduated, InsufficientLiquidity, InsufficientSupply, StaleQuote
from launchpad.graduation import DEFAULT_GRADUATION_EVALUATOR, GraduationEvaluator
from launchpad.pricing.quote import Quote, TradeSide
from launchpad.safe_int import S

logger = structlog.get_logger()


def apply_buy(
    state: CurveState,
    config: CurveConfig,
    quote: Quote,
    evaluator: GraduationEvaluator = DEFAULT_GRADUATION_EVALUATOR,
) -> CurveState:
    """Return the state after a quoted buy, graduating the curve if due.

    Args:
        state: Snapshot the quote was computed from
        config: Curve configuration
        quote: Buy quote for this snapshot
        evaluator: Graduation predicate to run on the new state

    Returns:
        New CurveState with tokens, reserve, volume and count advanced

    Raises:
        CurveGraduated: If the curve is already graduated
        StaleQuote: If the quote is not a buy at state.tokens_sold
        InsufficientSupply: If the buy would exceed the curve supply
        MathOverflow: If a counter overflows
    """
    _check_tradable(state, quote, TradeSide.BUY)

    tokens_sold = S(state.tokens_sold) + quote.amount
    if tokens_sold > config.curve_supply:
        raise InsufficientSupply(
            f"Buy of {quote.amount} exceeds curve supply {config.curve_supply}"
        )

    new_state = replace(
        state,
        tokens_sold=tokens_sold.to_u64(),
        reserve=(S(state.reserve) + quote.cost_or_proceeds).to_u64(),
        total_volume=(S(state.total_volume) + quote.cost_or_proceeds).to_u64(),
        trade_count=(S(state.trade_count) + 1).to_u64(),
    )

    if evaluator.should_graduate(new_state, config):
        logger.info(
            "graduation_reached",
            tokens_sold=new_state.tokens_sold,
            reserve=new_state.reserve,
            reference_price=new_state.reference_price,
        )
        new_state = replace(new_state, is_graduated=True)

    return new_state


def apply_sell(state: CurveState, config: CurveConfig, quote: Quote) -> CurveState:
    """Return the state after a quoted sell.

    Raises:
        CurveGraduated: If the curve is already graduated
        StaleQuote: If the quote is not a sell at state.tokens_sold
        InsufficientSupply: If more tokens are sold back than were sold
        InsufficientLiquidity: If the reserve cannot cover the proceeds
        MathOverflow: If a counter overflows
    """
    _check_tradable(state, quote, TradeSide.SELL)

    if quote.amount > state.tokens_sold:
        raise InsufficientSupply(
            f"Sell of {quote.amount} exceeds tokens sold {state.tokens_sold}"
        )
    if quote.cost_or_proceeds > state.reserve:
        logger.warning(
            "sell_exceeds_reserve",
            proceeds=quote.cost_or_proceeds,
            reserve=state.reserve,
        )
        raise InsufficientLiquidity(
            f"Proceeds {quote.cost_or_proceeds} exceed reserve {state.reserve}"
        )

    return replace(
        state,
        tokens_sold=(S(state.tokens_sold) - quote.amount).value,
        reserve=(S(state.reserve) - quote.cost_or_proceeds).value,
        total_volume=(S(state.total_volume) + quote.cost_or_proceeds).to_u64(),
        trade_count=(S(state.trade_count) + 1).to_u64(),
    )


def _check_tradable(state: CurveState, quote: Quote, side: TradeSide) -> None:
    if state.is_graduated:
        raise CurveGraduated("Bonding curve has graduated; trading is closed")
    if quote.side != side:
        raise StaleQuote(f"Expected a {side.value} quote, got {quote.side.value}")
    if quote.tokens_sold != state.tokens_sold:
        raise StaleQuote(
            f"Quote computed at position {quote.tokens_sold}, curve is at {state.tokens_sold}"
        )
