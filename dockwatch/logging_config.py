"""Log output for dockwatch.

Every record goes to stdout, either as one JSON object per line (the default,
meant for the same log pipeline that consumes container events) or as a
terminal-friendly line. Container events are logged with their fields passed
through ``extra=``, so the JSON output carries them as structured data.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from dockwatch.config import settings

SERVICE_NAME = "dockwatch"

# Chatty HTTP-level loggers under the Docker SDK
QUIET_LOGGERS = ("docker", "urllib3")

# Attributes every LogRecord carries; anything else was passed via extra=
_STANDARD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
})


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed via extra=, stringified when JSON can't encode them."""
    fields = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        fields[key] = value
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp, level, logger, message and service are always present;
    hostname, exception and extra only when there is something to put there.
    """

    def __init__(self, hostname: str = ""):
        super().__init__()
        self.hostname = hostname

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": SERVICE_NAME,
        }
        if self.hostname:
            entry["hostname"] = self.hostname
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    """[2024-01-01 12:00:00] INFO     [host] dockwatch.main: container api started"""

    def __init__(self, hostname: str = ""):
        super().__init__()
        self.host_part = f" [{hostname}]" if hostname else ""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _record_time(record).strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{timestamp}] {record.levelname:8}{self.host_part} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


_FORMATTERS = {"json": JSONFormatter, "text": TextFormatter}


def setup_logging(hostname: str = "") -> None:
    """Replace the root logger's handlers with a single stdout handler.

    Format and level come from settings; an unknown format falls back to
    text and an unknown level to INFO.
    """
    formatter_cls = _FORMATTERS.get(settings.log_format.lower(), TextFormatter)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter_cls(hostname))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
