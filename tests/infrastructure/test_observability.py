"""Structured Logging — formatter output fields and handler installation."""

import json
import logging
import sys

import pytest

from ytgateway.infrastructure.observability import (
    JSONFormatter,
    TextFormatter,
    setup_logging,
)


def _record(exc_info=None, **extra):
    record = logging.LogRecord(
        "ytgateway.test", logging.INFO, __file__, 1, "hello %s", ("world",), exc_info,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_formats_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "ytgateway.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_timestamp_is_record_creation_time():
    record = _record()
    record.created = 0.0
    log = json.loads(JSONFormatter().format(record))
    assert log["timestamp"] == "1970-01-01T00:00:00+00:00"


def test_surfaces_known_extra_fields_only():
    log = json.loads(JSONFormatter().format(
        _record(action="search", exit_code=1, pid=None, unrelated="x"),
    ))
    assert log["action"] == "search"
    assert log["exit_code"] == 1
    assert "pid" not in log
    assert "unrelated" not in log


def test_exception_records_carry_type_and_traceback():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_info = sys.exc_info()
    log = json.loads(JSONFormatter().format(_record(exc_info=exc_info)))
    assert log["exc_type"] == "RuntimeError"
    assert "boom" in log["exception"]


def test_text_format_appends_run_fields():
    line = TextFormatter().format(_record(action="info", pid=42))
    assert "hello world" in line
    assert line.endswith("[action=info pid=42]")


def test_text_format_without_run_fields_is_plain():
    line = TextFormatter().format(_record())
    assert line.endswith("ytgateway.test: hello world")


def test_setup_logging_replaces_its_own_handler(restore_root):
    first = setup_logging("INFO", "json")
    second = setup_logging("DEBUG", "text")
    assert first not in restore_root.handlers
    assert second in restore_root.handlers
    assert isinstance(second.formatter, TextFormatter)
    assert restore_root.level == logging.DEBUG


def test_setup_logging_keeps_foreign_handlers(restore_root):
    foreign = logging.NullHandler()
    restore_root.addHandler(foreign)
    setup_logging()
    assert foreign in restore_root.handlers


def test_setup_logging_routes_uvicorn_through_root(restore_root):
    access = logging.getLogger("uvicorn.access")
    access.addHandler(logging.NullHandler())
    access.propagate = False
    setup_logging()
    assert access.handlers == []
    assert access.propagate is True
