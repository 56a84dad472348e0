"""
Tests for the Recommendation Generator.
"""

from datetime import timedelta

from montaje.criteria import Criterion
from montaje.intelligence.recommendations import (
    RecommendationCategory,
    RecommendationPriority,
    generate_recommendations,
    weakest_criterion,
)
from montaje.intelligence.risk import RiskFactor, RiskSeverity, RiskType


def _risk(risk_type, criterion=None):
    return RiskFactor(
        risk_type=risk_type,
        severity=RiskSeverity.HIGH,
        description="test",
        probability=0.7,
        impact="test",
        criterion=criterion,
    )


STRONG = (5, 5, 5, 5, 5, 5)


class TestRiskDrivenRecommendations:
    def test_time_risk(self, make_record):
        recs = generate_recommendations([make_record(STRONG)], [_risk(RiskType.TIME)])
        assert len(recs) == 1
        assert recs[0].priority is RecommendationPriority.URGENT
        assert recs[0].category is RecommendationCategory.SCHEDULING
        assert recs[0].title == "Intensify Rehearsal Schedule"

    def test_quality_risk_uses_criterion_program(self, make_record):
        recs = generate_recommendations(
            [make_record(STRONG)], [_risk(RiskType.QUALITY, Criterion.TUNING)]
        )
        assert recs[0].title == "Intensive Tuning Programme"
        assert recs[0].category is RecommendationCategory.TECHNIQUE
        assert recs[0].priority is RecommendationPriority.HIGH

    def test_quality_risk_without_criterion_skipped(self, make_record):
        assert generate_recommendations([make_record(STRONG)], [_risk(RiskType.QUALITY)]) == []

    def test_progress_risk(self, make_record):
        recs = generate_recommendations([make_record(STRONG)], [_risk(RiskType.PROGRESS)])
        assert recs[0].title == "Restructure Practice Methodology"
        assert recs[0].category is RecommendationCategory.PRACTICE

    def test_multiple_time_risks_one_recommendation(self, make_record):
        recs = generate_recommendations(
            [make_record(STRONG)], [_risk(RiskType.TIME), _risk(RiskType.TIME)]
        )
        assert len(recs) == 1


class TestWeakestCriterion:
    def test_focus_recommendation(self, make_record):
        recs = generate_recommendations([make_record((4, 3, 4, 4, 4, 4))] * 3, [])
        assert len(recs) == 1
        assert recs[0].title == "Focus on Articulation"
        assert recs[0].priority is RecommendationPriority.MEDIUM

    def test_no_focus_when_all_strong(self, make_record):
        assert generate_recommendations([make_record((4, 4, 4, 4, 4, 4))], []) == []

    def test_unrated_criterion_not_weakest(self, make_record):
        assert generate_recommendations([make_record((5, 5, 5, 5, 5, 0))], []) == []

    def test_tie_goes_to_table_order(self, make_record):
        assert weakest_criterion([make_record((4, 4, 3, 4, 4, 3))]) == (Criterion.RHYTHM, 3.0)

    def test_only_last_twenty_records(self, make_record, now):
        old = [make_record((1, 1, 1, 1, 1, 1), now - timedelta(days=100 + i)) for i in range(5)]
        recent = [make_record((4, 4, 4, 4, 4, 4), now - timedelta(days=i)) for i in range(20)]
        assert generate_recommendations(old + recent, []) == []

    def test_no_records(self):
        assert weakest_criterion([]) is None


class TestOrdering:
    def test_sorted_by_priority(self, make_record):
        risks = [
            _risk(RiskType.PROGRESS),
            _risk(RiskType.QUALITY, Criterion.RHYTHM),
            _risk(RiskType.TIME),
        ]
        recs = generate_recommendations([make_record((3, 3, 2, 3, 3, 3))], risks)
        weights = [r.priority.weight for r in recs]
        assert weights == sorted(weights, reverse=True)
        assert [r.priority for r in recs] == [
            RecommendationPriority.URGENT,
            RecommendationPriority.HIGH,
            RecommendationPriority.HIGH,
            RecommendationPriority.MEDIUM,
        ]

    def test_ties_keep_insertion_order(self, make_record):
        risks = [
            _risk(RiskType.QUALITY, Criterion.TUNING),
            _risk(RiskType.QUALITY, Criterion.RHYTHM),
            _risk(RiskType.PROGRESS),
        ]
        recs = generate_recommendations([make_record(STRONG)], risks)
        assert [r.title for r in recs] == [
            "Intensive Tuning Programme",
            "Metronome Discipline Plan",
            "Restructure Practice Methodology",
        ]

    def test_to_dict(self, make_record):
        d = generate_recommendations([make_record(STRONG)], [_risk(RiskType.TIME)])[0].to_dict()
        assert d["priority"] == "urgent"
        assert d["effort"] == "high"
