"""
Configuration manager for console-http.

Loads the TOML configuration file, applies environment overrides and
validates the result into a ConsoleHttpConfig.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from console_http.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from console_http.exceptions.config import (
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from console_http.logging import get_logger

from .models import ClientSettings, ConsoleHttpConfig

logger = get_logger(__name__)


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: ClientSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_string_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply string setting if it's set and non-empty in environment."""
        value = getattr(self.settings, setting_name, None)
        if value:
            self.config_section[config_key] = value


def default_config_file() -> Path:
    """Location of the per-user configuration file."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ConfigManager:
    """Loads and caches the console-http configuration.

    Sources, lowest precedence first: the TOML file, CONSOLE_HTTP_*
    environment variables (or a .env file), then explicit overrides passed
    to load_config().
    """

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to a TOML config file. If None, uses the per-user location.
        """
        self.config_file = Path(config_file) if config_file else default_config_file()
        self._config: Optional[ConsoleHttpConfig] = None

    def load_config(self, **client_overrides: Any) -> ConsoleHttpConfig:
        """Load and validate configuration from file and environment.

        Args:
            **client_overrides: Values for the [client] section that win over
                every other source. None values are ignored.
        """
        if self._config is not None and not client_overrides:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file.exists():
            config_data = self._load_toml_file()

        config_data.setdefault("client", {})
        config_data.setdefault("logging", {})
        self._apply_env_overrides(config_data)
        config_data["client"].update(
            {k: v for k, v in client_overrides.items() if v is not None}
        )

        if not config_data["client"].get("base_url"):
            raise MissingConfigurationError("base_url", str(self.config_file))

        try:
            config = ConsoleHttpConfig(**config_data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationValidationError(errors) from e

        logger.debug(
            "Configuration loaded",
            config_file=str(self.config_file),
            base_url=config.client.base_url,
            timeout_ms=config.client.timeout_ms,
        )
        if not client_overrides:
            self._config = config
        return config

    def reload(self) -> ConsoleHttpConfig:
        """Drop the cached configuration and load it again."""
        self._config = None
        return self.load_config()

    def _load_toml_file(self) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file),
                f"Invalid TOML syntax: {e}",
                "valid TOML format"
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration."""
        settings = ClientSettings()

        client = EnvironmentOverride(config_data["client"], settings)
        client.apply_string_if_set("console_http_base_url", "base_url")
        client.apply_if_set("console_http_with_credentials", "with_credentials")
        client.apply_if_set("console_http_timeout_ms", "timeout_ms")
        client.apply_if_set("console_http_remember_me_token", "remember_me_token")
        client.apply_string_if_set("console_http_browser_fingerprint", "browser_fingerprint")
        client.apply_string_if_set("console_http_admin_header", "admin_header")
        client.apply_if_set("console_http_default_retry", "default_retry")
        client.apply_if_set("console_http_default_retry_delay_ms", "default_retry_delay_ms")

        log = EnvironmentOverride(config_data["logging"], settings)
        log.apply_string_if_set("console_http_logging_level", "level")
        log.apply_string_if_set("console_http_logging_format", "format")
        log.apply_string_if_set("console_http_logging_output", "output")
        log.apply_string_if_set("console_http_logging_file_path", "file_path")
