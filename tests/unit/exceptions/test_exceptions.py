"""
Tests for the console-http exception hierarchy.
"""

import pytest

from console_http.exceptions import (
    ApplicationError,
    ConfigurationError,
    ConfigurationValidationError,
    ConsoleHttpError,
    ExceptionContext,
    InvalidConfigurationError,
    MissingConfigurationError,
    RequestConfigurationError,
)


class TestConsoleHttpError:

    def test_basic_error(self):
        error = ConsoleHttpError("Something failed")

        assert error.message == "Something failed"
        assert error.help_text is None
        assert error.context == {}
        assert len(error.correlation_id) == 8

    def test_error_with_context(self):
        context = ExceptionContext(
            help_text="Try again",
            error_code="E1",
            context={"url": "/x"},
            correlation_id="abc12345",
        )
        error = ConsoleHttpError("Failed", context)

        text = str(error)
        assert "Failed" in text
        assert "Help: Try again" in text
        assert "url: /x" in text
        assert "Error ID: abc12345" in text

    def test_to_dict(self):
        error = ConsoleHttpError("Failed", ExceptionContext(error_code="E1"))

        data = error.to_dict()
        assert data["error_type"] == "ConsoleHttpError"
        assert data["message"] == "Failed"
        assert data["error_code"] == "E1"
        assert "timestamp" in data

    def test_none_context_values_hidden(self):
        error = ConsoleHttpError("Failed", ExceptionContext(context={"method": "GET", "url": None}))

        assert "Context: method: GET" in str(error)
        assert "url" not in str(error)

    def test_add_context_chains(self):
        error = ConsoleHttpError("Failed").add_context(attempt=2)

        assert error.context == {"attempt": 2}

    def test_context_not_shared_between_errors(self):
        shared = ExceptionContext()
        first = ConsoleHttpError("a", shared).add_context(x=1)
        second = ConsoleHttpError("b", shared)

        assert first.context == {"x": 1}
        assert second.context == {}


class TestConfigurationErrors:

    @pytest.mark.parametrize("error", [
        InvalidConfigurationError("timeout_ms", -1, "a positive integer"),
        MissingConfigurationError("base_url"),
        ConfigurationValidationError(["bad"]),
        RequestConfigurationError("no headers"),
    ])
    def test_hierarchy(self, error):
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, ConsoleHttpError)

    def test_invalid_configuration(self):
        error = InvalidConfigurationError("timeout_ms", -1, "a positive integer")

        assert error.field == "timeout_ms"
        assert error.value == -1
        assert error.error_code == "CONFIG_INVALID"
        assert "timeout_ms" in error.message

    def test_missing_configuration_mentions_location(self):
        error = MissingConfigurationError("base_url", "/etc/console.toml")

        assert error.error_code == "CONFIG_MISSING"
        assert "/etc/console.toml" in error.help_text

    def test_validation_lists_errors(self):
        error = ConfigurationValidationError(["first problem", "second problem"])

        assert "  - first problem" in error.message
        assert "  - second problem" in error.message
        assert error.errors == ["first problem", "second problem"]

    def test_request_configuration_context(self):
        error = RequestConfigurationError("no headers", method="GET", url="/x")

        assert error.context == {"method": "GET", "url": "/x"}
        assert error.message == "Malformed request descriptor: no headers"


class TestApplicationError:

    def test_carries_status(self):
        error = ApplicationError("denied", 403)

        assert error.message == "denied"
        assert error.status == 403
        assert error.error_code == "APPLICATION_ERROR"
        assert not isinstance(error, ConfigurationError)
