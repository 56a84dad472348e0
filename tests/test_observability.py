"""
Tests for analysis-scoped logging.
"""

import json
import logging
import sys
from datetime import timedelta

import pytest

from montaje.config import DEFAULT_THRESHOLDS
from montaje.intelligence import PredictiveAnalytics
from montaje.models import WorkTarget
from montaje.observability import (
    AnalysisContext,
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    current_scope,
)


def _record(msg="Prediction complete", exc_info=None, **extra):
    record = logging.LogRecord(
        name="montaje.intelligence.trend",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class _JSONCapture(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(JSONFormatter())
        self.entries = []

    def emit(self, record):
        self.entries.append(json.loads(self.format(record)))


@pytest.fixture
def package_logger():
    """The montaje logger at DEBUG, restored afterwards."""
    logger = logging.getLogger("montaje")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    logger.setLevel(logging.DEBUG)
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestAnalysisContext:
    def test_scope_set_and_cleared(self):
        assert current_scope() is None
        with AnalysisContext("w1") as ctx:
            assert ctx.analysis_id.startswith("ana-")
            assert current_scope().fields() == {"analysis_id": ctx.analysis_id, "work_id": "w1"}
        assert current_scope() is None

    def test_nested_restores_outer(self):
        with AnalysisContext("outer", analysis_id="ana-outer"):
            with AnalysisContext("inner"):
                assert current_scope().work_id == "inner"
            assert current_scope().work_id == "outer"
            assert current_scope().analysis_id == "ana-outer"

    def test_fresh_id_per_context(self):
        assert AnalysisContext("w1").analysis_id != AnalysisContext("w1").analysis_id


class TestJSONFormatter:
    def test_scope_fields_added(self):
        with AnalysisContext("w1", analysis_id="ana-123"):
            data = json.loads(JSONFormatter().format(_record()))
        assert data["message"] == "Prediction complete"
        assert data["level"] == "INFO"
        assert data["analysis_id"] == "ana-123"
        assert data["work_id"] == "w1"

    def test_extra_fields_kept_standard_attrs_dropped(self):
        data = json.loads(JSONFormatter().format(_record(record_count=5)))
        assert data["record_count"] == 5
        assert "lineno" not in data
        assert "pathname" not in data

    def test_without_scope(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert "analysis_id" not in data
        assert "work_id" not in data

    def test_exception_included(self):
        try:
            raise ValueError("bad thresholds")
        except ValueError:
            data = json.loads(JSONFormatter().format(_record(exc_info=sys.exc_info())))
        assert "ValueError: bad thresholds" in data["exception"]


class TestHumanFormatter:
    def test_tags_work_and_analysis(self):
        with AnalysisContext("w1", analysis_id="ana-abcdef"):
            output = HumanFormatter().format(_record())
        assert output.endswith("INFO trend (w1 ana-abcdef) Prediction complete")

    def test_without_scope(self):
        assert HumanFormatter().format(_record()).endswith("INFO trend Prediction complete")


class TestPredictionLogging:
    def test_every_line_carries_the_work(self, package_logger, make_series, now):
        pa = PredictiveAnalytics(thresholds=DEFAULT_THRESHOLDS)
        capture = _JSONCapture()
        package_logger.addHandler(capture)

        target = WorkTarget(work_id="w1", target_date=now + timedelta(days=10))
        pa.predict_work_completion(
            target, make_series([4.0, 3.5, 3.0, 2.5, 2.0]), now=now
        )

        assert len(capture.entries) >= 2
        assert {e["work_id"] for e in capture.entries} == {"w1"}
        assert len({e["analysis_id"] for e in capture.entries}) == 1

        summary = [e for e in capture.entries if e["logger"] == "montaje.intelligence.predictive"]
        assert summary[-1]["record_count"] == 5

    def test_scope_closed_after_prediction(self, make_series, now):
        pa = PredictiveAnalytics(thresholds=DEFAULT_THRESHOLDS)
        pa.predict_work_completion(WorkTarget(work_id="w1"), make_series([3.0]), now=now)
        assert current_scope() is None


class TestConfigureLogging:
    def test_package_logger_only(self, package_logger):
        root_handlers = logging.getLogger().handlers[:]

        configured = configure_logging("DEBUG", json_format=True)

        assert configured is package_logger
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger().handlers == root_handlers

    def test_reconfigure_replaces_handler(self, package_logger):
        configure_logging(json_format=True)
        configure_logging(json_format=False)
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, HumanFormatter)
