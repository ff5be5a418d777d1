"""Pricing module for the launchpad.

This module provides curve quoting and the fee layer around it:
- Buy and sell quotes priced by the closed-form curve integral
- Spot price, slippage and reserve valuation
- Platform fees and caller-side slippage bounds

Usage:
    from launchpad.pricing import DEFAULT_PRICING_ENGINE, FeeCalculator

    quote = DEFAULT_PRICING_ENGINE.quote_buy(state, config, amount, sol_price)
    breakdown = FeeCalculator().apply(quote)
    breakdown.ensure_within(max_cost)
"""

from launchpad.pricing.engine import DEFAULT_PRICING_ENGINE, MIN_SETTLEMENT_UNITS, PricingEngine
from launchpad.pricing.fees import (
    DEFAULT_FEE_CALCULATOR,
    DEFAULT_FEE_CONFIG,
    FeeBreakdown,
    FeeCalculator,
    FeeConfig,
)
from launchpad.pricing.quote import Quote, TradeSide

__all__ = [
    # Engine
    "PricingEngine",
    "DEFAULT_PRICING_ENGINE",
    "MIN_SETTLEMENT_UNITS",
    # Quote
    "Quote",
    "TradeSide",
    # Fees
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    "FeeBreakdown",
    "FeeCalculator",
    "DEFAULT_FEE_CALCULATOR",
]
