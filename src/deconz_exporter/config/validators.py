"""Custom Pydantic validators for configuration.

This module provides validators for custom type conversions and range checks.
"""


def validate_log_level(value: str) -> str:
    """Validate log level is one of the standard levels.

    Args:
        value: Log level string.

    Returns:
        Validated log level.

    Raises:
        ValueError: If log level is not valid.
    """
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if value.upper() not in valid_levels:
        raise ValueError(f"log_level must be one of {valid_levels}, got {value}")
    return value.upper()


def validate_log_format(value: str) -> str:
    """Validate log format is 'json' or 'console'.

    Args:
        value: Log format string.

    Returns:
        Validated log format.

    Raises:
        ValueError: If log format is not valid.
    """
    valid_formats = {"json", "console"}
    if value.lower() not in valid_formats:
        raise ValueError(f"log_format must be one of {valid_formats}, got {value}")
    return value.lower()


def validate_scheme(value: str) -> str:
    """Validate the gateway URL scheme."""
    valid_schemes = {"http", "https"}
    if value.lower() not in valid_schemes:
        raise ValueError(f"scheme must be one of {valid_schemes}, got {value}")
    return value.lower()


def validate_port(value: int) -> int:
    """Validate a TCP port. Zero means "not set" and is accepted here.

    Raises:
        ValueError: If the port is outside 0-65535.
    """
    if not 0 <= value <= 65535:
        raise ValueError(f"port must be between 0 and 65535, got {value}")
    return value
