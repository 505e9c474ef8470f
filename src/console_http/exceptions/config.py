"""
Configuration-related exceptions.

All exceptions related to configuration parsing, validation, and malformed
request descriptors.
"""

from typing import Any, List, Optional

from .base import ConsoleHttpError, ExceptionContext


class ConfigurationError(ConsoleHttpError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None, error_code: Optional[str] = None):
        super().__init__(message, ExceptionContext(help_text=help_text, error_code=error_code))


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = f"Invalid configuration for '{field}': got {repr(value)}, expected {expected}"
        help_text = f"Check the value of '{field}' and ensure it matches the expected format: {expected}"
        super().__init__(message, help_text=help_text, error_code="CONFIG_INVALID")


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_location: Optional[str] = None):
        self.field = field
        message = f"Missing required configuration: '{field}'"
        help_text = f"Set '{field}' in the [client] section of the configuration file"
        if config_location:
            help_text += f" ({config_location})"
        help_text += " or through its CONSOLE_HTTP_ environment variable"
        super().__init__(message, help_text=help_text, error_code="CONFIG_MISSING")


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"

        help_text = "Fix the validation errors listed above in your configuration file or environment"
        super().__init__(message, help_text=help_text, error_code="CONFIG_VALIDATION")


class RequestConfigurationError(ConfigurationError):
    """Raised when a request descriptor is malformed.

    Descriptors built by the clients are always well-formed, so this
    signals a programming error in the caller.
    """

    def __init__(self, reason: str, method: Optional[str] = None, url: Optional[str] = None):
        self.reason = reason
        message = f"Malformed request descriptor: {reason}"
        super().__init__(
            message,
            help_text="Build descriptors through the client's request helpers",
            error_code="REQUEST_MALFORMED",
        )
        self.context.update({"method": method, "url": url})
