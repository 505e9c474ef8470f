"""
Formatters for client log records.

Records produced by ConsoleHttpLogger carry ``correlation_id`` and an
``extra_context`` dict (attempt numbers, delays, statuses). Each formatter
renders that context for its destination.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# LogRecord attributes copied into every JSON entry, keyed by output name
RECORD_FIELDS = {
    "logger": "name",
    "level": "levelname",
    "module": "module",
    "function": "funcName",
    "line": "lineno",
}


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_context", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; context keys are merged at the top level."""

    def __init__(self, service_name: str = "console-http", version: str = "unknown"):
        super().__init__()
        self.service = {"service": service_name, "version": version}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "message": record.getMessage(),
            **self.service,
        }
        entry.update({key: getattr(record, attr) for key, attr in RECORD_FIELDS.items()})

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            entry["correlation_id"] = correlation_id
        entry.update(_context(record))

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


class ContextFormatter(logging.Formatter):
    """Plain text line with the record's context appended as ``[key=value ...]``."""

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: str = CONSOLE_DATE_FORMAT):
        super().__init__(fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = _context(record)
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} [{pairs}]"


def create_rich_handler() -> logging.Handler:
    """Colourised stderr handler; context is shown the same way as ContextFormatter."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(ContextFormatter("%(message)s"))
    return handler
