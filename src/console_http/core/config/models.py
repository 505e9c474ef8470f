"""
Configuration models for console-http.

Pydantic-based models that validate the client configuration loaded from
TOML files, plus the environment-variable settings that override them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from console_http.constants import (
    DEFAULT_ADMIN_HEADER_VALUE,
    DEFAULT_RETRY_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
    MAX_RETRY_ATTEMPTS,
    MAX_TIMEOUT_MS,
)


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Valid log output formats."""

    CONSOLE = "console"
    JSON = "json"
    RICH = "rich"


class LoggingSection(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")
    format: LogFormat = Field(LogFormat.CONSOLE, description="Log format: console, json, rich")
    output: str = Field("console", description="Log output: console, file, or console,file")
    file_path: Optional[str] = Field(None, description="Log file path when output includes file")

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: str) -> str:
        outputs = [part.strip() for part in v.split(",") if part.strip()]
        invalid = [part for part in outputs if part not in ("console", "file")]
        if not outputs or invalid:
            raise ValueError(f"output must be 'console', 'file' or both, got {v!r}")
        return ",".join(outputs)

    @property
    def outputs(self) -> list:
        return self.output.split(",")


class ClientConfig(BaseModel):
    """HTTP client configuration."""

    base_url: str = Field(..., description="Base URL all relative request paths resolve against")
    with_credentials: bool = Field(
        True, description="Keep cookies between requests"
    )
    timeout_ms: int = Field(
        DEFAULT_TIMEOUT_MS, ge=1, le=MAX_TIMEOUT_MS, description="Request timeout in milliseconds"
    )
    remember_me_token: str = Field("", description="Value of the remember-me-token header")
    browser_fingerprint: Optional[str] = Field(
        None, description="Value of the browser-fingerprint header (generated when unset)"
    )
    admin_header: str = Field(
        DEFAULT_ADMIN_HEADER_VALUE, min_length=1, description="Value of the admin-header header"
    )
    default_retry: int = Field(
        0, ge=0, le=MAX_RETRY_ATTEMPTS,
        description="Total attempts for requests that time out (0 disables retry)",
    )
    default_retry_delay_ms: int = Field(
        DEFAULT_RETRY_DELAY_MS, ge=0, description="Delay before each timeout retry"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("browser_fingerprint")
    @classmethod
    def blank_fingerprint_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v.strip()) == 0:
            return None
        return v


class ConsoleHttpConfig(BaseModel):
    """Complete console-http configuration."""

    client: ClientConfig
    logging: LoggingSection = Field(default_factory=LoggingSection)


class ClientSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    console_http_base_url: Optional[str] = Field(None, alias="CONSOLE_HTTP_BASE_URL")
    console_http_with_credentials: Optional[bool] = Field(
        None, alias="CONSOLE_HTTP_WITH_CREDENTIALS"
    )
    console_http_timeout_ms: Optional[int] = Field(None, alias="CONSOLE_HTTP_TIMEOUT_MS")
    console_http_remember_me_token: Optional[str] = Field(
        None, alias="CONSOLE_HTTP_REMEMBER_ME_TOKEN"
    )
    console_http_browser_fingerprint: Optional[str] = Field(
        None, alias="CONSOLE_HTTP_BROWSER_FINGERPRINT"
    )
    console_http_admin_header: Optional[str] = Field(None, alias="CONSOLE_HTTP_ADMIN_HEADER")
    console_http_default_retry: Optional[int] = Field(None, alias="CONSOLE_HTTP_DEFAULT_RETRY")
    console_http_default_retry_delay_ms: Optional[int] = Field(
        None, alias="CONSOLE_HTTP_DEFAULT_RETRY_DELAY_MS"
    )

    # Logging settings
    console_http_logging_level: Optional[str] = Field(None, alias="CONSOLE_HTTP_LOGGING_LEVEL")
    console_http_logging_format: Optional[str] = Field(None, alias="CONSOLE_HTTP_LOGGING_FORMAT")
    console_http_logging_output: Optional[str] = Field(None, alias="CONSOLE_HTTP_LOGGING_OUTPUT")
    console_http_logging_file_path: Optional[str] = Field(
        None, alias="CONSOLE_HTTP_LOGGING_FILE_PATH"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
