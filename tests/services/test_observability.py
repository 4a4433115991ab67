"""Structured Logging — JSON formatter fields."""

import json
import logging

from leavesys.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "leavesys.test", logging.INFO, __file__, 1, "Snapshot committed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "leavesys.test"
    assert log["message"] == "Snapshot committed"
    assert "epoch" not in log


def test_extra_fields_surface():
    log = json.loads(JSONFormatter().format(
        _record(epoch=3, outcome="committed", endpoint="/leaves", unrelated="x"),
    ))
    assert log["epoch"] == 3
    assert log["outcome"] == "committed"
    assert log["endpoint"] == "/leaves"
    assert "unrelated" not in log
