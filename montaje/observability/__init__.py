"""
Observability module: log formatting scoped to one prediction run.

Usage:
    from montaje.observability import configure_logging

    configure_logging("DEBUG", json_format=True)
"""

from .context import AnalysisContext, AnalysisScope, current_scope, new_analysis_id
from .logging import HumanFormatter, JSONFormatter, configure_logging

__all__ = [
    # Logging
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Context
    "AnalysisContext",
    "AnalysisScope",
    "current_scope",
    "new_analysis_id",
]
