"""
Per-prediction logging scope.

`PredictiveAnalytics.predict_work_completion` opens one AnalysisContext per
call. Every log line emitted inside it, from the trend, risk and completion
modules alike, is tagged with the analysis id and the work being analyzed.
"""

import contextvars
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AnalysisScope:
    """Identity of one prediction run."""

    analysis_id: str
    work_id: str

    def fields(self) -> dict[str, str]:
        return {"analysis_id": self.analysis_id, "work_id": self.work_id}


_current_scope: contextvars.ContextVar[Optional[AnalysisScope]] = contextvars.ContextVar(
    "analysis_scope", default=None
)


def current_scope() -> Optional[AnalysisScope]:
    """Scope of the prediction running in this context, if any."""
    return _current_scope.get()


def new_analysis_id() -> str:
    return f"ana-{uuid.uuid4().hex[:16]}"


class AnalysisContext:
    """
    Context manager binding a work to the log lines of one analysis.

    Usage:
        with AnalysisContext("work-1") as ctx:
            logger.info("Scoring")  # carries ctx.analysis_id and work_id

    Contexts nest; leaving an inner one restores the outer scope.
    """

    def __init__(self, work_id: str, analysis_id: Optional[str] = None):
        self.scope = AnalysisScope(analysis_id=analysis_id or new_analysis_id(), work_id=work_id)
        self._token: Optional[contextvars.Token] = None

    @property
    def analysis_id(self) -> str:
        return self.scope.analysis_id

    @property
    def work_id(self) -> str:
        return self.scope.work_id

    def __enter__(self) -> "AnalysisContext":
        self._token = _current_scope.set(self.scope)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _current_scope.reset(self._token)
            self._token = None
