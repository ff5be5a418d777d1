"""Bonding curve configuration, state and model."""

from launchpad.curve.config import DEFAULT_CURVE_CONFIG, CurveConfig
from launchpad.curve.model import CurveModel, growth_constant
from launchpad.curve.state import CurveState

__all__ = [
    "CurveConfig",
    "DEFAULT_CURVE_CONFIG",
    "CurveModel",
    "CurveState",
    "growth_constant",
]
