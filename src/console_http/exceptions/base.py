"""
Root of the console-http exception hierarchy.

Every error carries a short correlation id. The same id appears in the CLI
output and in the structured log entry, so a reported failure can be
matched to its log lines.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def new_error_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class ExceptionContext:
    """Optional details attached to a ConsoleHttpError."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None


class ConsoleHttpError(Exception):
    """Base class for errors raised by console-http itself.

    Transport exceptions from requests/httpx are not wrapped in this type.

    Attributes:
        message: Human-readable description
        help_text: How to fix it, when known
        error_code: Stable code for programmatic handling
        context: Key/value details (field names, URLs, statuses)
        correlation_id: Short id linking this error to its log entries
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        details = context or ExceptionContext()
        self.message = message
        self.help_text = details.help_text
        self.error_code = details.error_code
        self.context = dict(details.context)
        self.correlation_id = details.correlation_id or new_error_id()
        self.timestamp = datetime.now()
        super().__init__(message)

    def _sections(self) -> List[str]:
        sections = [self.message]
        if self.help_text:
            sections.append(f"Help: {self.help_text}")
        known = {key: value for key, value in self.context.items() if value is not None}
        if known:
            sections.append("Context: " + ", ".join(f"{key}: {value}" for key, value in known.items()))
        sections.append(f"Error ID: {self.correlation_id}")
        return sections

    def __str__(self) -> str:
        return "\n\n".join(self._sections())

    def to_dict(self) -> Dict[str, Any]:
        """Flat representation for structured logs."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code,
            "help_text": self.help_text,
            "context": self.context,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
        }

    def add_context(self, **kwargs) -> "ConsoleHttpError":
        self.context.update(kwargs)
        return self
