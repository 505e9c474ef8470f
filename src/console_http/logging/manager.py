"""
Process-wide logging setup.

LoggingManager owns the handlers it installs on the root logger, so
reconfiguring (e.g. after the CLI reads -v) swaps them without touching
handlers installed by the host application.
"""

import logging
import logging.handlers
import sys
from typing import Optional

from .config import LoggingConfig
from .formatters import ContextFormatter, StructuredFormatter, create_rich_handler
from .loggers import ConsoleHttpLogger

PACKAGE_LOGGER = "console_http"


class LoggingManager:
    """Singleton holding the active LoggingConfig and its handlers."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.config = None
            instance.handlers = []
            cls._instance = instance
        return cls._instance

    def configure(self, config: LoggingConfig) -> None:
        root = logging.getLogger()
        self._remove_handlers(root)

        for output in config.output:
            handler = self._file_handler(config) if output == "file" else self._stream_handler(config)
            handler.setLevel(config.level)
            root.addHandler(handler)
            self.handlers.append(handler)

        root.setLevel(config.level)
        logging.getLogger(PACKAGE_LOGGER).setLevel(config.level)
        self.config = config

    def _remove_handlers(self, root: logging.Logger) -> None:
        for handler in self.handlers:
            root.removeHandler(handler)
            handler.close()
        self.handlers = []

    @staticmethod
    def _formatter(config: LoggingConfig) -> logging.Formatter:
        if config.format_type == "json":
            return StructuredFormatter(config.service_name, config.version)
        return ContextFormatter()

    def _stream_handler(self, config: LoggingConfig) -> logging.Handler:
        if config.format_type == "rich":
            return create_rich_handler()
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._formatter(config))
        return handler

    def _file_handler(self, config: LoggingConfig) -> logging.Handler:
        # rich output is console-only; files get plain or JSON lines
        path = config.log_file
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(self._formatter(config))
        return handler

    def get_logger(self, name: str, correlation_id: Optional[str] = None) -> ConsoleHttpLogger:
        return ConsoleHttpLogger(name, correlation_id)


logging_manager = LoggingManager()


def configure_logging(config: LoggingConfig) -> None:
    logging_manager.configure(config)
