"""
Completion-date projection for a work in rehearsal.

Progress is read off the latest aggregate score (score / 5). When a work is
already well advanced and improving, the target date is taken as met;
otherwise the remaining progress is extrapolated at the trend rate, treated
as a weekly rate.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from montaje.config import DEFAULT_THRESHOLDS, AnalyticsThresholds
from montaje.models import WorkTarget, as_utc

from .trend import TrendAnalysis, TrendDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionEstimate:
    """Projected readiness date with confidence."""

    estimated_date: datetime
    confidence: float
    method: str  # 'no_deadline' | 'on_track' | 'extrapolated' | 'flat_trend'

    def to_dict(self) -> dict:
        return {
            "estimated_date": self.estimated_date.isoformat(),
            "confidence": round(self.confidence, 4),
            "method": self.method,
        }


def estimate_current_progress(trend: TrendAnalysis) -> float:
    """Latest aggregate score normalized to 0-1; 0 with no data points."""
    latest = trend.latest_value
    if latest is None:
        return 0.0
    return min(1.0, max(0.0, latest / 5))


def predict_completion(
    target: WorkTarget,
    trend: TrendAnalysis,
    now: datetime | None = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> CompletionEstimate:
    """
    Project when the work will reach full readiness.

    Args:
        target: Work deadline metadata.
        trend: Trend of the work's evaluations.
        now: Reference time (defaults to current UTC time).
        thresholds: Calibration constants.

    Returns:
        CompletionEstimate. Never raises; missing deadlines and flat trends
        fall back to a fixed horizon with minimum confidence.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    fallback = CompletionEstimate(
        estimated_date=now + timedelta(days=thresholds.fallback_horizon_days),
        confidence=thresholds.fallback_confidence,
        method="no_deadline",
    )

    deadline = target.deadline()
    if deadline is None:
        return fallback

    progress = estimate_current_progress(trend)

    if progress > thresholds.on_track_progress and trend.direction is TrendDirection.IMPROVING:
        return CompletionEstimate(
            estimated_date=deadline,
            confidence=min(
                thresholds.on_track_max_confidence,
                trend.confidence + thresholds.on_track_confidence_bonus,
            ),
            method="on_track",
        )

    weekly_rate = trend.rate / 100
    if weekly_rate == 0:
        logger.debug(f"Flat trend for {target.work_id}; using fallback horizon")
        return CompletionEstimate(
            estimated_date=fallback.estimated_date,
            confidence=fallback.confidence,
            method="flat_trend",
        )

    remaining = 1 - progress
    estimated_days = remaining / (weekly_rate / 7)
    if estimated_days > thresholds.max_projection_days:
        logger.debug(
            f"Projection of {estimated_days:.0f} days for {target.work_id} "
            f"capped at {thresholds.max_projection_days}"
        )
        estimated_days = thresholds.max_projection_days

    return CompletionEstimate(
        estimated_date=now + timedelta(days=estimated_days),
        confidence=trend.confidence,
        method="extrapolated",
    )
