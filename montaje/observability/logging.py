"""
Log formatting for the montaje package.

Both formatters read the active AnalysisScope, so analytics modules log with
a plain `logging.getLogger(__name__)` and never pass work ids by hand.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .context import current_scope

PACKAGE_LOGGER = "montaje"

# Everything a bare LogRecord carries; the rest came in through `extra`
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

    {"timestamp": "2026-10-19T12:00:00.000+00:00", "level": "INFO",
     "logger": "montaje.intelligence.predictive", "message": "...",
     "analysis_id": "ana-...", "work_id": "work-1", "record_count": 5}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scope = current_scope()
        if scope:
            entry.update(scope.fields())
        entry.update(_extra_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line console format, e.g. `12:00:00 INFO trend (work-1 ana-1a2b3c4d) msg`."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        module = record.name.rsplit(".", 1)[-1]
        scope = current_scope()
        tag = f"({scope.work_id} {scope.analysis_id[:12]}) " if scope else ""
        line = f"{created} {record.levelname} {module} {tag}{record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> logging.Logger:
    """
    Attach a single stderr handler to the `montaje` logger.

    Only the package logger is touched; the host application's root logger
    keeps its own handlers. JSON is used when stderr is not a terminal unless
    `json_format` says otherwise.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    package_logger.addHandler(handler)
    return package_logger
