"""
Contracts Module: output validation for reporting collaborators.

schema.py holds the pydantic models. Every payload produced by the
analytics core goes through these gates before it is emitted.
"""

from .schema import (
    SCHEMA_VERSION,
    PatternPayload,
    PredictionPayload,
    RecommendationPayload,
    RiskFactorPayload,
    TrendPayload,
    validate_patterns,
    validate_prediction,
)

__all__ = [
    "SCHEMA_VERSION",
    "PatternPayload",
    "PredictionPayload",
    "RecommendationPayload",
    "RiskFactorPayload",
    "TrendPayload",
    "validate_patterns",
    "validate_prediction",
]
