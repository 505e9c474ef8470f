"""
Logger wrapper that takes structured context as keyword arguments.
"""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4


class ConsoleHttpLogger:
    """Thin wrapper over a stdlib logger.

    ``logger.warning("GET /x timed out", attempt=2)`` stores
    ``{"attempt": 2}`` on the record as ``extra_context``; the formatters
    render it. Every record also carries the logger's correlation id.
    """

    def __init__(self, name: str, correlation_id: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or str(uuid4())
        self.context = dict(context or {})

    def _log(self, level: int, msg: str, fields: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        extra: Dict[str, Any] = {"correlation_id": self.correlation_id}
        if self.context or fields:
            extra["extra_context"] = {**self.context, **fields}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, **fields):
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields):
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields):
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, **fields):
        self._log(logging.ERROR, msg, fields)

    def with_context(self, **fields) -> "ConsoleHttpLogger":
        """Child logger sharing the correlation id, with ``fields`` on every record."""
        return ConsoleHttpLogger(
            self.logger.name, self.correlation_id, {**self.context, **fields}
        )
