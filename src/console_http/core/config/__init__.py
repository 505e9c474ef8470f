"""
Configuration management for console-http.

Provides Pydantic-based configuration models with validation, TOML file
loading and environment variable overrides.
"""

from .manager import ConfigManager, default_config_file
from .models import (
    ClientConfig,
    ClientSettings,
    ConsoleHttpConfig,
    LogFormat,
    LoggingSection,
    LogLevel,
)

__all__ = [
    "ConfigManager",
    "default_config_file",
    "ClientConfig",
    "ClientSettings",
    "ConsoleHttpConfig",
    "LogFormat",
    "LoggingSection",
    "LogLevel",
]
