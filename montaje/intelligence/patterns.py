"""
Behavioral Pattern Detection: Montaje

Looks for recurring, non-random structure in a work's evaluation series,
independently of the trend/risk pipeline.

Patterns are returned with their raw confidence. Dropping weak patterns is a
presentation decision made by `actionable_patterns()`:
- weekly_performance is kept when confidence > 0.6
- difficulty_correlation is kept when confidence > 0.5
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from montaje.config import DEFAULT_THRESHOLDS, AnalyticsThresholds
from montaje.models import EvaluationRecord, as_utc

logger = logging.getLogger(__name__)

WEEKLY_PERFORMANCE = "weekly_performance"
DIFFICULTY_CORRELATION = "difficulty_correlation"

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class PatternResult:
    """A detected pattern in the evaluation series."""

    pattern: str
    description: str
    confidence: float  # 0.0 to 0.9
    actionable: bool
    supporting_data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "pattern": self.pattern,
            "description": self.description,
            "confidence": round(self.confidence, 4),
            "actionable": self.actionable,
            "supporting_data": self.supporting_data,
        }


def analyze_weekly_pattern(
    records: list[EvaluationRecord],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> PatternResult:
    """
    Compare mean aggregate scores by day of week, with weekdays taken in UTC.

    Only days with enough samples take part; with too few qualifying days
    the result has confidence 0 and is not actionable.
    """
    day_scores: dict[int, list[float]] = defaultdict(list)
    for record in records:
        day_scores[as_utc(record.timestamp).weekday()].append(record.aggregate_score())

    day_averages = {
        day: sum(scores) / len(scores)
        for day, scores in sorted(day_scores.items())
        if len(scores) >= thresholds.min_bucket_samples
    }

    if len(day_averages) < thresholds.min_weekly_buckets:
        logger.debug(f"Weekly pattern: only {len(day_averages)} days with enough data")
        return PatternResult(
            pattern=WEEKLY_PERFORMANCE,
            description="Not enough evaluations per weekday to compare days",
            confidence=0.0,
            actionable=False,
            supporting_data={"qualifying_days": len(day_averages)},
        )

    best_day = max(day_averages, key=day_averages.get)
    worst_day = min(day_averages, key=day_averages.get)
    spread = day_averages[best_day] - day_averages[worst_day]
    confidence = max(0.0, min(thresholds.max_pattern_confidence, spread / 2))

    return PatternResult(
        pattern=WEEKLY_PERFORMANCE,
        description=(
            f"Best performance on {DAY_NAMES[best_day]}, "
            f"weakest performance on {DAY_NAMES[worst_day]}"
        ),
        confidence=confidence,
        actionable=True,
        supporting_data={
            "best_day": DAY_NAMES[best_day],
            "worst_day": DAY_NAMES[worst_day],
            "day_averages": {DAY_NAMES[d]: round(avg, 4) for d, avg in day_averages.items()},
        },
    )


def analyze_difficulty_correlation(records: list[EvaluationRecord]) -> PatternResult:
    """
    Placeholder: correlating progress with instrument difficulty needs
    per-instrument difficulty data the analytics core does not model.
    """
    return PatternResult(
        pattern=DIFFICULTY_CORRELATION,
        description="Instrument difficulty is not modeled; correlation not computed",
        confidence=0.3,
        actionable=False,
        supporting_data={"placeholder": True, "records": len(records)},
    )


def detect_patterns(
    records: list[EvaluationRecord],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> list[PatternResult]:
    """Run every pattern analysis; results carry raw, unfiltered confidence."""
    return [
        analyze_weekly_pattern(records, thresholds),
        analyze_difficulty_correlation(records),
    ]


def actionable_patterns(
    patterns: list[PatternResult],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> list[PatternResult]:
    """Keep the patterns confident enough to show to users."""
    minimums = {
        WEEKLY_PERFORMANCE: thresholds.weekly_pattern_min_confidence,
        DIFFICULTY_CORRELATION: thresholds.difficulty_pattern_min_confidence,
    }
    return [p for p in patterns if p.confidence > minimums.get(p.pattern, 0.0)]
