"""Pydantic models for the quoting API."""

from launchpad.models.requests import (
    CurveConfigModel,
    CurveStateModel,
    GraduationRequest,
    OraclePriceModel,
    QuoteRequest,
    SpotPriceRequest,
)
from launchpad.models.responses import (
    ErrorResponse,
    GraduationResponse,
    QuoteResponse,
    SpotPriceResponse,
)
from launchpad.models.types import Uint64, validate_uint64

__all__ = [
    "CurveConfigModel",
    "CurveStateModel",
    "QuoteRequest",
    "SpotPriceRequest",
    "GraduationRequest",
    "OraclePriceModel",
    "QuoteResponse",
    "SpotPriceResponse",
    "GraduationResponse",
    "ErrorResponse",
    "Uint64",
    "validate_uint64",
]
