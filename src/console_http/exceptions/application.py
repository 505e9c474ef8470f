"""
Application-level exceptions.

The clients never raise these on their own: a well-formed response with
``success: false`` is returned as an ``Err`` value. ``Err.unwrap()`` converts
it into an ApplicationError for callers that prefer the exception channel.
"""

from typing import Optional

from .base import ConsoleHttpError, ExceptionContext


class ApplicationError(ConsoleHttpError):
    """Raised when an unsuccessful response is explicitly unwrapped."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        context = ExceptionContext(
            error_code="APPLICATION_ERROR",
            context={"status": status},
        )
        super().__init__(message, context)
