"""Test helpers module for shared test utilities.

- constants: Exchange rates and the worked-example curve parameters
- factories: CurveConfig and CurveState factory functions
"""

from tests.helpers.constants import (
    ONE_SOL,
    SCENARIO_END_PRICE,
    SCENARIO_START_PRICE,
    SCENARIO_SUPPLY,
    SOL_PRICE,
    SOL_PRICE_LOW,
)
from tests.helpers.factories import make_config, make_scenario_config, make_state

__all__ = [
    # Constants
    "SOL_PRICE",
    "SOL_PRICE_LOW",
    "ONE_SOL",
    "SCENARIO_START_PRICE",
    "SCENARIO_END_PRICE",
    "SCENARIO_SUPPLY",
    # Factories
    "make_config",
    "make_scenario_config",
    "make_state",
]
