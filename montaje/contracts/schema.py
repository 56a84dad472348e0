"""
Schema Module: Pydantic Models for Prediction Payload Validation.

These models define the shape of the payloads handed to reporting
collaborators (dashboards, PDF/Excel exports). Payloads MUST validate before
they leave the analytics core; a failure is a bug in the core, not in the
caller's data.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# CONTRACT VERSION
# =============================================================================

SCHEMA_VERSION = "1.0.0"

PRIORITY_WEIGHTS = {"urgent": 4, "high": 3, "medium": 2, "low": 1}


# =============================================================================
# TREND
# =============================================================================


class TrendPointPayload(BaseModel):
    date: str
    value: float = Field(ge=0.0)


class TrendPayload(BaseModel):
    """Trend of the aggregate evaluation score."""

    direction: Literal["improving", "declining", "stable"]
    rate: float = Field(ge=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
    data_points: list[TrendPointPayload] = Field(default_factory=list)


# =============================================================================
# RISKS & RECOMMENDATIONS
# =============================================================================


class RiskFactorPayload(BaseModel):
    """Single risk factor."""

    type: Literal["progress", "quality", "time", "attendance"]
    severity: Literal["low", "medium", "high", "critical"]
    description: str
    probability: float = Field(ge=0.0, le=1.0)
    impact: str
    mitigation: list[str] = Field(default_factory=list)
    criterion: (
        Literal["tuning", "articulation", "rhythm", "cohesion", "dynamics", "memorization"] | None
    ) = None


class RecommendationPayload(BaseModel):
    """Single recommendation."""

    priority: Literal["low", "medium", "high", "urgent"]
    category: Literal["practice", "scheduling", "resources", "technique"]
    title: str
    description: str
    expected_impact: str
    effort: Literal["low", "medium", "high"]
    timeline: str


# =============================================================================
# PREDICTION
# =============================================================================


class PredictionPayload(BaseModel):
    """
    Full prediction for one work: REQUIRED shape for reporting.

    Recommendations must already be ordered by priority.
    """

    schema_version: str = SCHEMA_VERSION
    work_id: str
    estimated_completion_date: str
    confidence_level: float = Field(ge=0.0, le=1.0)
    risk_factors: list[RiskFactorPayload] = Field(default_factory=list)
    recommendations: list[RecommendationPayload] = Field(default_factory=list)
    trend_analysis: TrendPayload

    @model_validator(mode="after")
    def recommendations_ordered(self) -> "PredictionPayload":
        weights = [PRIORITY_WEIGHTS[r.priority] for r in self.recommendations]
        if any(a < b for a, b in zip(weights, weights[1:])):
            raise ValueError("recommendations must be sorted by non-increasing priority")
        return self


class PatternPayload(BaseModel):
    """Detected behavioral pattern."""

    pattern: str
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    actionable: bool
    supporting_data: dict = Field(default_factory=dict)


# =============================================================================
# GATES
# =============================================================================


def validate_prediction(payload: dict) -> dict:
    """
    Validate a prediction payload.

    Raises:
        pydantic.ValidationError on any shape or range violation.
    """
    return PredictionPayload.model_validate(payload).model_dump(mode="json")


def validate_patterns(payloads: list[dict]) -> list[dict]:
    """Validate a list of pattern payloads."""
    return [PatternPayload.model_validate(p).model_dump(mode="json") for p in payloads]
