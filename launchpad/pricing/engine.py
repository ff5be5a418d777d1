"""Pricing engine for the exponential bonding curve.

Every operation is a pure function of an explicit CurveState snapshot, the
CurveConfig, a trade amount and a reference exchange rate. Nothing here
mutates state; the caller validates its own bounds and commits the
resulting delta atomically.

Unit conventions:
    - reference values (USD) are integers at config.price_scale
    - exchange rates are USD per settlement coin at config.price_scale
    - settlement values are base units (config.settlement_scale per coin)

Conversion from reference to settlement currency truncates toward zero:
    settlement = reference * settlement_scale // exchange_rate
"""

from __future__ import annotations

import structlog

from launchpad.constants import BPS_DENOMINATOR, SETTLEMENT_SCALE
from launchpad.curve.config import CurveConfig
from launchpad.curve.model import CurveModel
from launchpad.curve.state import CurveState
from launchpad.errors import InsufficientSupply, InvalidAmount, InvalidPrice
from launchpad.pricing.quote import Quote, TradeSide
from launchpad.safe_int import S

logger = structlog.get_logger()

# Smallest charge for any non-empty trade
MIN_SETTLEMENT_UNITS = 1


class PricingEngine:
    """Quote buys and sells against an exponential bonding curve.

    The engine holds no curve state. Models (and their growth constants)
    are shared per configuration through CurveModel.for_config.
    """

    def quote_buy(
        self,
        state: CurveState,
        config: CurveConfig,
        amount: int,
        exchange_rate: int,
    ) -> Quote:
        """Quote buying `amount` tokens at the current position.

        Args:
            state: Curve state snapshot
            config: Curve configuration
            amount: Whole tokens to buy
            exchange_rate: Settlement coin price in price_scale units

        Returns:
            Quote with the settlement cost (at least 1 unit), spot price and slippage

        Raises:
            InvalidAmount: If amount <= 0
            InsufficientSupply: If the buy would exceed the curve supply
            InvalidPrice: If exchange_rate <= 0
            MathOverflow: If any checked step overflows
        """
        _validate_amount(amount)
        _validate_rate(exchange_rate)

        remaining = state.remaining_supply(config.curve_supply)
        if amount > remaining:
            raise InsufficientSupply(
                f"Buy of {amount} exceeds remaining supply {remaining}"
            )

        return self._quote_interval(TradeSide.BUY, state.tokens_sold, amount, config, exchange_rate)

    def quote_sell(
        self,
        state: CurveState,
        config: CurveConfig,
        amount: int,
        exchange_rate: int,
    ) -> Quote:
        """Quote selling `amount` tokens back to the curve.

        Priced as a buy over [tokens_sold - amount, tokens_sold], so the
        proceeds equal the cost of the buy that produced the position.

        Raises:
            InvalidAmount: If amount <= 0
            InsufficientSupply: If amount exceeds tokens sold
            InvalidPrice: If exchange_rate <= 0
            MathOverflow: If any checked step overflows
        """
        _validate_amount(amount)
        _validate_rate(exchange_rate)

        if amount > state.tokens_sold:
            raise InsufficientSupply(
                f"Sell of {amount} exceeds tokens sold {state.tokens_sold}"
            )

        lower = (S(state.tokens_sold) - amount).value
        quote = self._quote_interval(TradeSide.SELL, lower, amount, config, exchange_rate)
        # Position refers to the pre-trade state, not the priced interval
        return Quote(
            side=quote.side,
            amount=quote.amount,
            cost_or_proceeds=quote.cost_or_proceeds,
            spot_price=quote.spot_price,
            slippage_bps=quote.slippage_bps,
            tokens_sold=state.tokens_sold,
        )

    def spot_price(self, state: CurveState, config: CurveConfig, exchange_rate: int) -> int:
        """Instantaneous price at the current position, in settlement units per token.

        Raises:
            InsufficientSupply: If the snapshot is past the curve supply
            InvalidPrice: If exchange_rate <= 0
            MathOverflow: If any checked step overflows, or the price exceeds u64
        """
        _validate_rate(exchange_rate)
        if state.tokens_sold > config.curve_supply:
            raise InsufficientSupply(
                f"Position {state.tokens_sold} exceeds curve supply {config.curve_supply}"
            )
        model = CurveModel.for_config(config)
        return self._spot_at(model, state.tokens_sold, exchange_rate)

    def slippage(
        self,
        state: CurveState,
        config: CurveConfig,
        amount: int,
        exchange_rate: int,
    ) -> int:
        """Slippage of buying `amount` tokens, in basis points.

        Measured as (average - spot) * 10000 / spot against the pre-trade
        spot price.

        Raises:
            InvalidAmount, InsufficientSupply, InvalidPrice, MathOverflow:
                As for quote_buy
        """
        return self.quote_buy(state, config, amount, exchange_rate).slippage_bps

    def usd_raised(
        self,
        reserve: int,
        exchange_rate: int,
        settlement_scale: int = SETTLEMENT_SCALE,
    ) -> int:
        """Reference value of a settlement reserve, in price_scale units.

        Raises:
            InvalidPrice: If exchange_rate <= 0
            MathOverflow: If the product overflows, or the value exceeds u64
        """
        _validate_rate(exchange_rate)
        return (S(reserve) * exchange_rate // settlement_scale).to_u64()

    # --- Internals ---

    def _quote_interval(
        self,
        side: TradeSide,
        lower: int,
        amount: int,
        config: CurveConfig,
        exchange_rate: int,
    ) -> Quote:
        """Price the interval [lower, lower + amount]."""
        model = CurveModel.for_config(config)
        upper = (S(lower) + amount).value

        cost_reference = model.integral(lower, upper)
        settlement = self._to_settlement(cost_reference, config, exchange_rate)
        settlement = settlement.max(MIN_SETTLEMENT_UNITS).to_u64()

        spot = self._spot_at(model, lower, exchange_rate)
        slippage_bps = self._slippage_bps(model, lower, amount, settlement, exchange_rate)

        logger.debug(
            "quote_computed",
            side=side.value,
            tokens_sold=lower,
            amount=amount,
            cost_reference=cost_reference,
            settlement=settlement,
            spot_price=spot,
            slippage_bps=slippage_bps,
        )

        return Quote(
            side=side,
            amount=amount,
            cost_or_proceeds=settlement,
            spot_price=spot,
            slippage_bps=slippage_bps,
            tokens_sold=lower,
        )

    @staticmethod
    def _to_settlement(value: int, config: CurveConfig, exchange_rate: int) -> S:
        return S(value) * config.settlement_scale // exchange_rate

    @staticmethod
    def _spot_at(model: CurveModel, tokens_sold: int, exchange_rate: int) -> int:
        config = model.config
        scaled_price = S(model.scaled_price_at(tokens_sold))
        return (scaled_price * config.settlement_scale // (S(exchange_rate) * config.precision)).to_u64()

    @staticmethod
    def _slippage_bps(
        model: CurveModel,
        tokens_sold: int,
        amount: int,
        settlement_cost: int,
        exchange_rate: int,
    ) -> int:
        """Average-versus-spot slippage, both at settlement units * precision per token."""
        config = model.config
        average = S(settlement_cost) * config.precision // amount
        spot = S(model.scaled_price_at(tokens_sold)) * config.settlement_scale // exchange_rate

        if not spot:
            return 0

        # Rounding can put the average a hair under spot for tiny trades
        return (average.saturating_sub(spot) * BPS_DENOMINATOR // spot).value


def _validate_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmount(f"Trade amount must be > 0, got {amount}")


def _validate_rate(exchange_rate: int) -> None:
    if exchange_rate <= 0:
        raise InvalidPrice(f"Exchange rate must be > 0, got {exchange_rate}")


# Default engine instance
DEFAULT_PRICING_ENGINE = PricingEngine()
