"""Launchpad pricing engine - fixed-point exponential bonding curve."""

from launchpad.curve import DEFAULT_CURVE_CONFIG, CurveConfig, CurveModel, CurveState
from launchpad.graduation import GraduationEvaluator, should_graduate
from launchpad.pricing import DEFAULT_PRICING_ENGINE, PricingEngine, Quote, TradeSide

__version__ = "0.1.0"
__all__ = [
    "CurveConfig",
    "CurveModel",
    "CurveState",
    "DEFAULT_CURVE_CONFIG",
    "DEFAULT_PRICING_ENGINE",
    "GraduationEvaluator",
    "PricingEngine",
    "Quote",
    "TradeSide",
    "should_graduate",
    "__version__",
]
