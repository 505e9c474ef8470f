"""
console-http Exception Hierarchy

Exception Hierarchy:
    ConsoleHttpError (base)
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   ├── MissingConfigurationError
    │   ├── ConfigurationValidationError
    │   └── RequestConfigurationError
    └── ApplicationError

Transport failures (timeouts, refused connections) are not wrapped: the
underlying HTTP library's exception reaches the caller unchanged.
"""

from .application import ApplicationError
from .base import ConsoleHttpError, ExceptionContext
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
    RequestConfigurationError,
)

__all__ = [
    "ConsoleHttpError",
    "ExceptionContext",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
    "RequestConfigurationError",
    "ApplicationError",
]
