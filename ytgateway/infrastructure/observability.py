"""Structured Logging — gateway log formats and root handler installation.

Invariants:
    - Every line carries timestamp (event time, UTC), level, logger and message
    - Extractor run fields (action, pid, exit_code, duration_ms, error_code, path)
      appear only when set on the record
    - "json" emits one JSON object per line; any other format emits text with
      the same run fields appended as key=value pairs
    - setup_logging replaces its own handler on repeat calls, never stacks
    - uvicorn loggers propagate to root so server and gateway lines share a format

Design Decisions:
    - setup_logging runs from the app lifespan; tests and reloads may call it
      more than once
"""

import json
import logging
from datetime import datetime, timezone

RUN_FIELDS = (
    "action", "pid", "exit_code", "duration_ms", "error_code", "path",
)

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def run_fields(record: logging.LogRecord) -> dict:
    """Extractor run fields present on the record, in declaration order."""
    fields = {}
    for key in RUN_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = val
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **run_fields(record),
        }
        if record.exc_info:
            log["exc_type"] = record.exc_info[0].__name__
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local runs, run fields appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = run_fields(record)
        if not fields:
            return line
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{head} [{pairs}]{sep}{tail}"


class _GatewayHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the gateway handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, _GatewayHandler):
            root.removeHandler(existing)

    handler = _GatewayHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    return handler
