# Montaje Insights - Core Library
"""
Exports for reporting and dashboard consumers.
"""

from .criteria import CRITERIA, Criterion, CriterionDefinition, get_criterion
from .models import EvaluationRecord, WorkStatus, WorkTarget, average_scores

__all__ = [
    "CRITERIA",
    "Criterion",
    "CriterionDefinition",
    "get_criterion",
    "EvaluationRecord",
    "WorkStatus",
    "WorkTarget",
    "average_scores",
]
