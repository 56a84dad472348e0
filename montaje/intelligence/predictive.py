"""
Predictive Analytics: Montaje

Single entry point that turns a work's evaluation history into a
completion projection with risks and recommendations, plus an independent
pattern scan.

Pipeline per call:
    records -> trend -> risks -> recommendations
                     -> completion date

Every call is a pure function of its inputs; instances hold only
thresholds and can be shared across threads.

Usage:
    from montaje.intelligence import predictive_analytics

    result = predictive_analytics.predict_work_completion(target, records)
    payload = result.to_payload()
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from montaje.config import AnalyticsThresholds, get_thresholds
from montaje.contracts import validate_patterns, validate_prediction
from montaje.models import EvaluationRecord, WorkTarget, as_utc, sort_chronologically
from montaje.observability import AnalysisContext

from .completion import CompletionEstimate, predict_completion
from .patterns import PatternResult, actionable_patterns, detect_patterns
from .recommendations import Recommendation, generate_recommendations
from .risk import RiskFactor, assess_risks
from .trend import TrendAnalysis, analyze_trend

logger = logging.getLogger(__name__)


@dataclass
class PredictionResult:
    """Completion projection for one work."""

    work_id: str
    completion: CompletionEstimate
    trend_analysis: TrendAnalysis
    risk_factors: list[RiskFactor] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def estimated_completion_date(self) -> datetime:
        return self.completion.estimated_date

    @property
    def confidence_level(self) -> float:
        return self.completion.confidence

    def to_dict(self) -> dict:
        return {
            "work_id": self.work_id,
            "estimated_completion_date": self.completion.estimated_date.isoformat(),
            "confidence_level": round(self.completion.confidence, 4),
            "risk_factors": [rf.to_dict() for rf in self.risk_factors],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "trend_analysis": self.trend_analysis.to_dict(),
        }

    def to_payload(self) -> dict:
        """Contract-validated dict for reporting collaborators."""
        return validate_prediction(self.to_dict())


class PredictiveAnalytics:
    """Trend, risk, recommendation and completion analysis for works in rehearsal."""

    def __init__(self, thresholds: AnalyticsThresholds | None = None) -> None:
        self.thresholds = thresholds or get_thresholds()

    def predict_work_completion(
        self,
        target: WorkTarget,
        records: list[EvaluationRecord],
        now: datetime | None = None,
    ) -> PredictionResult:
        """
        Predict when a work will be ready and what threatens it.

        Args:
            target: Work deadline metadata.
            records: Evaluations for one work/instrument pair, any order.
                The caller's list is not modified.
            now: Reference time shared by every component (defaults to now, UTC).

        Returns:
            PredictionResult, computed fresh and never persisted.
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        ordered = sort_chronologically(records)

        with AnalysisContext(target.work_id):
            trend = analyze_trend(ordered, self.thresholds)
            risk_factors = assess_risks(target, ordered, trend, now, self.thresholds)
            recommendations = generate_recommendations(ordered, risk_factors, self.thresholds)
            completion = predict_completion(target, trend, now, self.thresholds)

            logger.info(
                f"Prediction for {target.work_id}: {trend.direction.value} trend, "
                f"{len(risk_factors)} risks, {len(recommendations)} recommendations",
                extra={
                    "record_count": len(ordered),
                    "completion_method": completion.method,
                },
            )

        return PredictionResult(
            work_id=target.work_id,
            completion=completion,
            trend_analysis=trend,
            risk_factors=risk_factors,
            recommendations=recommendations,
        )

    def detect_patterns(self, records: list[EvaluationRecord]) -> list[PatternResult]:
        """All patterns with raw confidence; see `actionable_patterns` for filtering."""
        return detect_patterns(records, self.thresholds)

    def actionable_patterns(self, records: list[EvaluationRecord]) -> list[PatternResult]:
        """Patterns above the presentation thresholds."""
        return actionable_patterns(self.detect_patterns(records), self.thresholds)

    def pattern_payloads(self, records: list[EvaluationRecord]) -> list[dict]:
        """Contract-validated actionable patterns for reporting collaborators."""
        return validate_patterns([p.to_dict() for p in self.actionable_patterns(records)])


predictive_analytics = PredictiveAnalytics()
