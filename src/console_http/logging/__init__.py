"""
Structured logging for console-http.

Modules log through ``get_logger(__name__)``; nothing is emitted beyond the
stdlib defaults until ``configure_logging`` installs handlers (the CLI does
this from the [logging] config section).
"""

from .config import LoggingConfig
from .formatters import ContextFormatter, StructuredFormatter
from .loggers import ConsoleHttpLogger
from .manager import LoggingManager, configure_logging, logging_manager

get_logger = logging_manager.get_logger

__all__ = [
    "ConsoleHttpLogger",
    "ContextFormatter",
    "LoggingConfig",
    "LoggingManager",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "logging_manager",
]
