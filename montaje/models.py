"""
Domain records consumed by the analytics core.

EvaluationRecord and WorkTarget are supplied by the evaluation repository.
Scores are passed through as given: the repository validates the 0-5 range,
and out-of-range values produce undefined (but non-raising) results.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from .criteria import CRITERIA, Criterion


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or pass a datetime through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Unparseable timestamp: {value!r}")


def as_utc(value: date | datetime) -> datetime:
    """
    Normalize a date or datetime to an aware UTC datetime.

    Plain dates become midnight UTC; naive datetimes are taken to be UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class EvaluationRecord:
    """One evaluation of an instrument/section on a work. 0 means not rated."""

    work_id: str
    instrument_id: str
    evaluator_id: str
    timestamp: datetime
    tuning: int = 0
    articulation: int = 0
    rhythm: int = 0
    cohesion: int = 0
    dynamics: int = 0
    memorization: int = 0
    comments: str = ""

    def score(self, criterion: Criterion) -> int:
        return getattr(self, criterion.value)

    def scores(self) -> dict[Criterion, int]:
        return {criterion: self.score(criterion) for criterion in CRITERIA}

    def aggregate_score(self) -> float:
        """Mean of the rated (non-zero) criteria; 0.0 when nothing is rated."""
        rated = [s for s in self.scores().values() if s > 0]
        if not rated:
            return 0.0
        return sum(rated) / len(rated)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EvaluationRecord":
        """
        Build a record from a repository document.

        Accepts both the stored document keys (workId, afinacion, updatedAt, ...)
        and the snake_case names of this class.

        Raises:
            KeyError if an identifier or the timestamp is missing.
            ValueError if the timestamp cannot be parsed.
        """

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            if default is not None:
                return default
            raise KeyError(keys[0])

        scores = {}
        for criterion, definition in CRITERIA.items():
            raw = pick(criterion.value, definition.source_key, default=0)
            scores[criterion.value] = int(raw)

        return cls(
            work_id=str(pick("work_id", "workId")),
            instrument_id=str(pick("instrument_id", "instrumentId")),
            evaluator_id=str(pick("evaluator_id", "evaluatorId")),
            timestamp=parse_timestamp(pick("timestamp", "updatedAt", "createdAt")),
            comments=str(pick("comments", "comentarios", default="")),
            **scores,
        )


class WorkStatus(Enum):
    """Lifecycle status of a musical work in rehearsal."""

    PLANNING = "planning"
    LEARNING = "learning"
    POLISHING = "polishing"
    PERFORMANCE_READY = "performance_ready"
    PERFORMED = "performed"


@dataclass(frozen=True)
class WorkTarget:
    """Deadline metadata for the work being predicted."""

    work_id: str
    target_date: Optional[date | datetime] = None
    priority: int = 0
    status: WorkStatus = WorkStatus.LEARNING

    def deadline(self) -> Optional[datetime]:
        """Target date as an aware UTC datetime, or None."""
        if self.target_date is None:
            return None
        return as_utc(self.target_date)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkTarget":
        """Build from a repository document (id, endDate, priority, status)."""
        work_id = data.get("work_id") or data.get("id")
        if not work_id:
            raise KeyError("work_id")

        raw_date = data.get("target_date") or data.get("endDate")
        target_date = parse_timestamp(raw_date) if raw_date else None

        return cls(
            work_id=str(work_id),
            target_date=target_date,
            priority=int(data.get("priority") or 0),
            status=WorkStatus(data.get("status") or WorkStatus.LEARNING.value),
        )


def sort_chronologically(records: Iterable[EvaluationRecord]) -> list[EvaluationRecord]:
    """New list of records, oldest first. Stable for equal timestamps."""
    return sorted(records, key=lambda r: as_utc(r.timestamp))


def average_scores(records: Iterable[EvaluationRecord]) -> dict[Criterion, Optional[float]]:
    """
    Per-criterion mean over the records, ignoring unrated (0) scores.

    A criterion nobody rated maps to None.
    """
    totals: dict[Criterion, list[int]] = {criterion: [] for criterion in CRITERIA}
    for record in records:
        for criterion, score in record.scores().items():
            if score > 0:
                totals[criterion].append(score)

    return {
        criterion: (sum(scores) / len(scores) if scores else None)
        for criterion, scores in totals.items()
    }
