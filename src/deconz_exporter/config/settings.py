"""Exporter configuration settings.

This module provides the ExporterConfig class and settings singleton.
"""

from pathlib import Path
from typing import Any

import structlog
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deconz_exporter.config.env_loader import load_env_files
from deconz_exporter.config.validators import (
    validate_log_format,
    validate_log_level,
    validate_port,
    validate_scheme,
)
from deconz_exporter.gateway.types import ConfigurationError, GatewayEndpoint
from deconz_exporter.telemetry.events import CONFIG_INVALID, CONFIG_LOADED

log = structlog.get_logger(__name__)

DEFAULT_LISTEN_PORT = 2112


class ExporterConfig(BaseSettings):
    """Unified exporter configuration.

    Loads configuration from DECONZ_* environment variables, .env files, and
    keyword overrides (command-line flags). Token, host and port have no
    usable default: call validate_required() before using them.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECONZ_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gateway
    token: str = Field(default="", description="API token for the deCONZ gateway")
    host: str = Field(default="localhost", description="Host address of the deCONZ gateway")
    port: int = Field(default=0, description="Port of the deCONZ REST API (0 = unset)")
    scheme: str = Field(default="http", description="URL scheme of the deCONZ REST API")

    # Exporter
    verbose: bool = Field(default=False, description="Log raw poll results and poll errors")
    listen_host: str = Field(default="0.0.0.0", description="Address the metrics server binds")
    listen_port: int = Field(
        default=DEFAULT_LISTEN_PORT, description="Port the metrics server listens on"
    )

    # Telemetry
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_dir: Path | None = Field(
        default=None, description="Directory for JSON-lines log files (disabled when unset)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        """Validate gateway URL scheme."""
        return validate_scheme(v)

    @field_validator("port", "listen_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port range."""
        return validate_port(v)

    def validate_required(self) -> None:
        """Check that the gateway parameters are set.

        Raises:
            ConfigurationError: If token, host or port is missing (checked in that order).
        """
        if not self.token:
            raise ConfigurationError("token is required")
        if not self.host:
            raise ConfigurationError("host is required")
        if self.port == 0:
            raise ConfigurationError("port is required")

    def gateway_endpoint(self) -> GatewayEndpoint:
        """Build the gateway endpoint after validating required parameters.

        Raises:
            ConfigurationError: If a required parameter is missing.
        """
        self.validate_required()
        return GatewayEndpoint(scheme=self.scheme, host=self.host, port=self.port, token=self.token)


_settings: ExporterConfig | None = None


def load_exporter_config(**overrides: Any) -> ExporterConfig:
    """Load and validate exporter configuration.

    This function:
    1. Loads .env files (via env_loader)
    2. Creates ExporterConfig (environment variables, then overrides on top)
    3. Validates all values using Pydantic

    Args:
        **overrides: Field values taking precedence over the environment. None values are ignored.

    Returns:
        Validated ExporterConfig instance.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    load_env_files()

    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        config = ExporterConfig(**explicit)
    except ValidationError as e:
        log.error(CONFIG_INVALID, error=str(e), error_type=type(e).__name__)
        raise ConfigurationError(f"invalid configuration: {e}") from e

    log.debug(
        CONFIG_LOADED,
        host=config.host,
        port=config.port,
        scheme=config.scheme,
        verbose=config.verbose,
        listen_port=config.listen_port,
        log_level=config.log_level,
    )
    return config


def get_settings() -> ExporterConfig:
    """Get the exporter settings singleton.

    Returns:
        ExporterConfig instance built from the environment only.
    """
    global _settings
    if _settings is None:
        _settings = load_exporter_config()
    return _settings
