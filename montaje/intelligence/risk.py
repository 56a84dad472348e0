"""
Risk Assessment: Montaje

Combines the work deadline, recent per-criterion averages and the score
trend into categorized risk factors. Each trigger condition yields at most
one factor; the result is an unordered union.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from montaje.config import DEFAULT_THRESHOLDS, AnalyticsThresholds
from montaje.criteria import Criterion, get_criterion
from montaje.models import (
    EvaluationRecord,
    WorkTarget,
    as_utc,
    average_scores,
    sort_chronologically,
)

from .trend import TrendAnalysis, TrendDirection

logger = logging.getLogger(__name__)

TIME_MITIGATIONS = (
    "Increase rehearsal frequency",
    "Prioritize the hardest sections",
    "Consider additional rehearsals",
)

PROGRESS_MITIGATIONS = (
    "Review the teaching method",
    "Increase individual practice",
    "Identify specific obstacles",
)


class RiskType(Enum):
    PROGRESS = "progress"
    QUALITY = "quality"
    TIME = "time"
    ATTENDANCE = "attendance"


class RiskSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RiskFactor:
    """A categorized concern that may delay or compromise the work."""

    risk_type: RiskType
    severity: RiskSeverity
    description: str
    probability: float  # 0-1
    impact: str
    mitigation: list[str] = field(default_factory=list)
    criterion: Optional[Criterion] = None  # set on quality risks

    def to_dict(self) -> dict:
        return {
            "type": self.risk_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "probability": round(self.probability, 2),
            "impact": self.impact,
            "mitigation": list(self.mitigation),
            "criterion": self.criterion.value if self.criterion else None,
        }


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days remaining, rounded up. Negative once the deadline has passed."""
    return math.ceil((deadline - now).total_seconds() / 86400)


def assess_time_risk(
    target: WorkTarget,
    now: datetime,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> RiskFactor | None:
    deadline = target.deadline()
    if deadline is None:
        return None

    days_remaining = days_until(deadline, as_utc(now))
    if days_remaining >= thresholds.time_risk_days:
        return None

    severity = (
        RiskSeverity.CRITICAL
        if days_remaining < thresholds.time_critical_days
        else RiskSeverity.HIGH
    )
    return RiskFactor(
        risk_type=RiskType.TIME,
        severity=severity,
        description=f"Only {days_remaining} days left until the target date",
        probability=thresholds.time_risk_probability,
        impact="Possible delay of the performance",
        mitigation=list(TIME_MITIGATIONS),
    )


def assess_quality_risks(
    records: list[EvaluationRecord],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> list[RiskFactor]:
    """One factor per criterion whose recent average is below standard."""
    recent = sort_chronologically(records)[-thresholds.quality_window :]
    factors = []

    for criterion, score in average_scores(recent).items():
        # Criteria nobody rated carry no quality signal
        if score is None or score >= thresholds.quality_risk_below:
            continue

        definition = get_criterion(criterion)
        severity = (
            RiskSeverity.CRITICAL
            if score < thresholds.quality_critical_below
            else RiskSeverity.HIGH
        )
        factors.append(
            RiskFactor(
                risk_type=RiskType.QUALITY,
                severity=severity,
                description=f"{definition.name} below standard ({score:.1f}/5)",
                probability=thresholds.quality_risk_probability,
                impact=f"Compromised quality in {definition.name.lower()}",
                mitigation=list(definition.mitigations),
                criterion=criterion,
            )
        )

    return factors


def assess_progress_risk(
    trend: TrendAnalysis,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> RiskFactor | None:
    if trend.direction is not TrendDirection.DECLINING:
        return None
    if trend.confidence <= thresholds.progress_min_confidence:
        return None

    severity = (
        RiskSeverity.HIGH if trend.rate > thresholds.progress_high_rate else RiskSeverity.MEDIUM
    )
    return RiskFactor(
        risk_type=RiskType.PROGRESS,
        severity=severity,
        description=f"Downward progress trend ({trend.rate:.1f} decline rate)",
        probability=min(1.0, max(0.0, trend.confidence)),
        impact="Learning objectives delayed",
        mitigation=list(PROGRESS_MITIGATIONS),
    )


def assess_risks(
    target: WorkTarget,
    records: list[EvaluationRecord],
    trend: TrendAnalysis,
    now: datetime | None = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> list[RiskFactor]:
    """
    Identify all triggered risk factors for a work.

    Args:
        target: Work deadline metadata.
        records: Evaluation records in any order. Not modified.
        trend: Trend of the same records.
        now: Reference time (defaults to current UTC time).
        thresholds: Calibration constants.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    factors: list[RiskFactor] = []

    time_risk = assess_time_risk(target, now, thresholds)
    if time_risk:
        factors.append(time_risk)

    factors.extend(assess_quality_risks(records, thresholds))

    progress_risk = assess_progress_risk(trend, thresholds)
    if progress_risk:
        factors.append(progress_risk)

    logger.debug(
        f"Risk assessment for {target.work_id}: {len(factors)} factors "
        f"({', '.join(f.risk_type.value for f in factors) or 'none'})"
    )
    return factors
