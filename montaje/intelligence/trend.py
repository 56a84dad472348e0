"""
Trend Analysis for Rehearsal Evaluations.

Fits an ordinary least-squares line to the chronological series of aggregate
evaluation scores and reports direction, rate and an R²-derived confidence.

The regression uses the sequence index (0..n-1) as x, not elapsed time, so
irregular gaps between evaluations do not distort the slope.

All computations use pure Python; no numerical dependencies.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from montaje.config import DEFAULT_THRESHOLDS, AnalyticsThresholds
from montaje.models import EvaluationRecord, sort_chronologically

logger = logging.getLogger(__name__)

# Sums of squares below this are rounding noise from a flat series mean
FLAT_TOLERANCE = 1e-12


class TrendDirection(Enum):
    """Direction of the fitted aggregate-score line."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrendPoint:
    """One aggregate score used in the fit."""

    timestamp: datetime
    value: float

    def to_dict(self) -> dict:
        return {"date": self.timestamp.isoformat(), "value": round(self.value, 4)}


@dataclass
class TrendAnalysis:
    """Trend of the aggregate score series."""

    direction: TrendDirection
    rate: float  # |slope| * 100, heuristic magnitude
    confidence: float  # clamped R², 0.1-1.0
    points: list[TrendPoint] = field(default_factory=list)

    @property
    def latest_value(self) -> float | None:
        return self.points[-1].value if self.points else None

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "rate": round(self.rate, 4),
            "confidence": round(self.confidence, 4),
            "data_points": [p.to_dict() for p in self.points],
        }


def _mean(values: list[float]) -> float:
    """Compute arithmetic mean."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def linear_regression(values: list[float]) -> tuple[float, float]:
    """
    Least-squares line y = mx + b over x = 0..n-1.

    Returns: (slope, intercept)
    """
    n = len(values)
    if n < 2:
        return (0.0, values[0] if values else 0.0)

    x_mean = (n - 1) / 2.0
    y_mean = _mean(values)

    ss_xy = sum((i - x_mean) * (values[i] - y_mean) for i in range(n))
    ss_xx = sum((i - x_mean) ** 2 for i in range(n))

    slope = ss_xy / ss_xx
    intercept = y_mean - slope * x_mean
    return (slope, intercept)


def r_squared(actual: list[float], predicted: list[float]) -> float:
    """
    Coefficient of determination.

    A flat series has no variance to explain: a perfect fit of it scores
    1.0, anything else scores 0.1.
    """
    actual_mean = _mean(actual)
    ss_tot = sum((v - actual_mean) ** 2 for v in actual)
    ss_res = sum((v - p) ** 2 for v, p in zip(actual, predicted))

    if math.isclose(ss_tot, 0.0, abs_tol=FLAT_TOLERANCE):
        return 1.0 if math.isclose(ss_res, 0.0, abs_tol=FLAT_TOLERANCE) else 0.1
    return 1.0 - (ss_res / ss_tot)


def classify_direction(
    slope: float, thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> TrendDirection:
    if slope > thresholds.slope_threshold:
        return TrendDirection.IMPROVING
    if slope < -thresholds.slope_threshold:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def analyze_trend(
    records: list[EvaluationRecord],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> TrendAnalysis:
    """
    Analyze the aggregate-score trend of one work/instrument series.

    Args:
        records: Evaluation records in any order. Not modified.
        thresholds: Calibration constants.

    Returns:
        TrendAnalysis; the stable/0/0.1 default when there are too few records.
    """
    if len(records) < thresholds.min_trend_records:
        logger.debug(f"Insufficient data for trend: {len(records)} records")
        return TrendAnalysis(
            direction=TrendDirection.STABLE,
            rate=0.0,
            confidence=thresholds.min_confidence,
            points=[],
        )

    ordered = sort_chronologically(records)
    points = [TrendPoint(timestamp=r.timestamp, value=r.aggregate_score()) for r in ordered]
    values = [p.value for p in points]

    slope, intercept = linear_regression(values)
    predictions = [slope * i + intercept for i in range(len(values))]
    fit = r_squared(values, predictions)

    confidence = max(thresholds.min_confidence, min(thresholds.max_confidence, fit))
    direction = classify_direction(slope, thresholds)

    logger.debug(
        f"Trend over {len(values)} points: slope={slope:.4f} r2={fit:.4f} "
        f"direction={direction.value}"
    )

    return TrendAnalysis(
        direction=direction,
        rate=abs(slope) * 100,
        confidence=confidence,
        points=points,
    )
