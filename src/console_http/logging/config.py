"""
Runtime logging settings, resolved from the [logging] config section.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from ..constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_FILE_SIZE_BYTES,
)

LOG_OUTPUTS = ("console", "file")
LOG_FORMATS = ("console", "json", "rich")

# -v raises to INFO, -vv and above to DEBUG
VERBOSITY_LEVELS = {1: logging.INFO, 2: logging.DEBUG}


def _as_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level!r}")
    return resolved


@dataclass
class LoggingConfig:
    """Where client logs go and how they look.

    ``output`` accepts a single destination or a list of them; it is always
    stored as a tuple.
    """
    level: Union[str, int] = logging.WARNING
    format_type: str = "console"
    output: Union[str, Sequence[str]] = "console"
    file_path: Optional[Path] = None
    max_file_size: int = DEFAULT_LOG_FILE_SIZE_BYTES
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT
    service_name: str = "console-http"
    version: str = "unknown"

    def __post_init__(self):
        self.level = _as_level(self.level)
        outputs = (self.output,) if isinstance(self.output, str) else tuple(self.output)
        unknown = [name for name in outputs if name not in LOG_OUTPUTS]
        if unknown:
            raise ValueError(f"unknown log output(s): {', '.join(unknown)}")
        self.output = outputs
        if self.format_type not in LOG_FORMATS:
            raise ValueError(f"unknown log format {self.format_type!r}")
        self.file_path = Path(self.file_path) if self.file_path else None

    @property
    def log_file(self) -> Path:
        return self.file_path or Path(DEFAULT_LOG_FILE)

    @classmethod
    def from_section(cls, section, verbose: int = 0, **kwargs) -> "LoggingConfig":
        """Build from a LoggingSection; ``verbose`` counts -v flags."""
        level = _as_level(section.level.value)
        if verbose:
            level = min(level, VERBOSITY_LEVELS[min(verbose, 2)])
        return cls(
            level=level,
            format_type=section.format.value,
            output=section.outputs,
            file_path=section.file_path,
            **kwargs,
        )
