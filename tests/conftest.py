"""
Test configuration: ensures repo root is in sys.path + shared record builders.

Every test runs against a fixed reference time so date arithmetic is
deterministic.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import montaje.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from montaje.models import EvaluationRecord  # noqa: E402

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

# Six-criterion score sets with a known aggregate
SCORES_FOR = {
    2.0: (2, 2, 2, 2, 2, 2),
    2.5: (2, 2, 2, 3, 3, 3),
    3.0: (3, 3, 3, 3, 3, 3),
    3.5: (3, 3, 3, 4, 4, 4),
    4.0: (4, 4, 4, 4, 4, 4),
}


def build_record(
    scores: tuple[int, int, int, int, int, int] = (3, 3, 3, 3, 3, 3),
    timestamp: datetime | None = None,
    work_id: str = "work-1",
    instrument_id: str = "violin",
) -> EvaluationRecord:
    tuning, articulation, rhythm, cohesion, dynamics, memorization = scores
    return EvaluationRecord(
        work_id=work_id,
        instrument_id=instrument_id,
        evaluator_id="teacher-1",
        timestamp=timestamp or NOW,
        tuning=tuning,
        articulation=articulation,
        rhythm=rhythm,
        cohesion=cohesion,
        dynamics=dynamics,
        memorization=memorization,
    )


def build_series(aggregates: list[float], start: datetime | None = None) -> list[EvaluationRecord]:
    """One record per aggregate value, a week apart, oldest first."""
    start = start or NOW - timedelta(weeks=len(aggregates))
    return [
        build_record(SCORES_FOR[value], start + timedelta(weeks=i))
        for i, value in enumerate(aggregates)
    ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def make_series():
    return build_series
