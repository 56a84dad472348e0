"""
Rule-based recommendations for a work in rehearsal.

Maps triggered risk factors, and the weakest rated criterion, to actionable
recommendations. Output is ordered by priority, most urgent first; equal
priorities keep the order they were generated in.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from montaje.config import DEFAULT_THRESHOLDS, AnalyticsThresholds
from montaje.criteria import CRITERIA, Criterion, get_criterion
from montaje.models import EvaluationRecord, average_scores, sort_chronologically

from .risk import RiskFactor, RiskType

logger = logging.getLogger(__name__)


class RecommendationPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self]


PRIORITY_WEIGHTS = {
    RecommendationPriority.URGENT: 4,
    RecommendationPriority.HIGH: 3,
    RecommendationPriority.MEDIUM: 2,
    RecommendationPriority.LOW: 1,
}


class RecommendationCategory(Enum):
    PRACTICE = "practice"
    SCHEDULING = "scheduling"
    RESOURCES = "resources"
    TECHNIQUE = "technique"


class Effort(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Recommendation:
    """An actionable recommendation for teachers or section leaders."""

    priority: RecommendationPriority
    category: RecommendationCategory
    title: str
    description: str
    expected_impact: str
    effort: Effort
    timeline: str

    def to_dict(self) -> dict:
        return {
            "priority": self.priority.value,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
            "expected_impact": self.expected_impact,
            "effort": self.effort.value,
            "timeline": self.timeline,
        }


def _intensify_schedule() -> Recommendation:
    return Recommendation(
        priority=RecommendationPriority.URGENT,
        category=RecommendationCategory.SCHEDULING,
        title="Intensify Rehearsal Schedule",
        description="Increase rehearsal frequency and length to meet the target date",
        expected_impact="25-30% faster progress",
        effort=Effort.HIGH,
        timeline="Immediate",
    )


def _technique_program(criterion: Criterion) -> Recommendation:
    program = get_criterion(criterion).program
    return Recommendation(
        priority=RecommendationPriority.HIGH,
        category=RecommendationCategory.TECHNIQUE,
        title=program.title,
        description=program.description,
        expected_impact=program.expected_impact,
        effort=Effort.MEDIUM,
        timeline=program.timeline,
    )


def _restructure_practice() -> Recommendation:
    return Recommendation(
        priority=RecommendationPriority.HIGH,
        category=RecommendationCategory.PRACTICE,
        title="Restructure Practice Methodology",
        description="Adopt more effective practice techniques with individual follow-up",
        expected_impact="Negative trend reversed within 2-4 weeks",
        effort=Effort.MEDIUM,
        timeline="1-2 weeks",
    )


def _focus_on(criterion: Criterion) -> Recommendation:
    name = get_criterion(criterion).name
    return Recommendation(
        priority=RecommendationPriority.MEDIUM,
        category=RecommendationCategory.TECHNIQUE,
        title=f"Focus on {name}",
        description=f"Dedicate extra time to improving {name.lower()} with targeted exercises",
        expected_impact=f"20-30% improvement in {name.lower()}",
        effort=Effort.LOW,
        timeline="3-4 weeks",
    )


def weakest_criterion(
    records: list[EvaluationRecord],
) -> tuple[Criterion, float] | None:
    """Lowest-averaging rated criterion; the first in table order wins ties."""
    weakest = None
    for criterion, score in average_scores(records).items():
        if score is None:
            continue
        if weakest is None or score < weakest[1]:
            weakest = (criterion, score)
    return weakest


def sort_by_priority(recommendations: list[Recommendation]) -> list[Recommendation]:
    return sorted(recommendations, key=lambda r: r.priority.weight, reverse=True)


def generate_recommendations(
    records: list[EvaluationRecord],
    risk_factors: list[RiskFactor],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> list[Recommendation]:
    """
    Build prioritized recommendations.

    Args:
        records: Evaluation records in any order. Not modified.
        risk_factors: Output of the risk assessor.
        thresholds: Calibration constants.
    """
    recommendations: list[Recommendation] = []

    if any(rf.risk_type is RiskType.TIME for rf in risk_factors):
        recommendations.append(_intensify_schedule())

    for rf in risk_factors:
        if rf.risk_type is RiskType.QUALITY and rf.criterion in CRITERIA:
            recommendations.append(_technique_program(rf.criterion))

    if any(rf.risk_type is RiskType.PROGRESS for rf in risk_factors):
        recommendations.append(_restructure_practice())

    recent = sort_chronologically(records)[-thresholds.recommendation_window :]
    weakest = weakest_criterion(recent)
    if weakest and weakest[1] < thresholds.focus_criterion_below:
        recommendations.append(_focus_on(weakest[0]))

    logger.debug(f"Generated {len(recommendations)} recommendations")
    return sort_by_priority(recommendations)
