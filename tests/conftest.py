"""Pytest configuration and fixtures."""

import pytest

from launchpad.curve.config import CurveConfig
from launchpad.pricing.engine import PricingEngine
from tests.helpers import make_scenario_config


@pytest.fixture
def default_config() -> CurveConfig:
    """Launchpad default curve: $0.0000042 -> $0.000069 over 800M tokens."""
    return CurveConfig()


@pytest.fixture
def scenario_config() -> CurveConfig:
    """Small worked-example curve: 420 -> 690 over 800M tokens."""
    return make_scenario_config()


@pytest.fixture
def engine() -> PricingEngine:
    """Fresh pricing engine."""
    return PricingEngine()
