"""Graduation predicate.

A curve graduates to open trading once it has sold its whole supply AND
raised at least the configured threshold in reference currency. Either
condition alone is not enough: a sold-out curve priced against a collapsed
oracle rate must keep waiting.
"""

from __future__ import annotations

import structlog

from launchpad.curve.config import CurveConfig
from launchpad.curve.state import CurveState
from launchpad.pricing.engine import DEFAULT_PRICING_ENGINE, PricingEngine

logger = structlog.get_logger()


class GraduationEvaluator:
    """Decide whether a curve should graduate.

    Attributes:
        engine: Pricing engine used to value the reserve
    """

    def __init__(self, engine: PricingEngine | None = None):
        self.engine = engine or DEFAULT_PRICING_ENGINE

    def should_graduate(self, state: CurveState, config: CurveConfig) -> bool:
        """True when an active curve has sold out and raised the threshold.

        Already-graduated curves return False: the transition happens once.
        A curve with no known reference price cannot be valued and does not
        graduate.

        Raises:
            MathOverflow: If the reserve value does not fit in u64
        """
        if state.is_graduated:
            return False

        if state.tokens_sold < config.curve_supply:
            return False

        if state.reference_price <= 0:
            logger.debug("graduation_skipped_no_reference_price", tokens_sold=state.tokens_sold)
            return False

        raised = self.engine.usd_raised(state.reserve, state.reference_price, config.settlement_scale)
        return raised >= config.graduation_threshold


# Default evaluator instance
DEFAULT_GRADUATION_EVALUATOR = GraduationEvaluator()


def should_graduate(state: CurveState, config: CurveConfig) -> bool:
    """Evaluate graduation with the default evaluator."""
    return DEFAULT_GRADUATION_EVALUATOR.should_graduate(state, config)
