"""Bootstrap configuration helpers (pre-settings).

These helpers exist for "chicken-and-egg" situations where logging must be
configured before the full Pydantic settings can be loaded (the settings
need CLI flags that are parsed later).

Constraints:
- Keep this module dependency-light (no telemetry imports) to avoid circular imports.
- Prefer validating values using existing config validators.
"""

from __future__ import annotations

import os
from pathlib import Path

from deconz_exporter.config.validators import validate_log_format, validate_log_level


def get_bootstrap_log_level(default: str = "INFO") -> str:
    """Get logging level from environment without importing settings.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    value = os.getenv("DECONZ_LOG_LEVEL", default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)


def get_bootstrap_log_format(default: str = "console") -> str:
    """Get log format from environment without importing settings."""
    value = os.getenv("DECONZ_LOG_FORMAT", default)
    try:
        return validate_log_format(value)
    except ValueError:
        return validate_log_format(default)


def get_bootstrap_log_dir() -> Path | None:
    """Get log directory from environment, None when unset."""
    value = os.getenv("DECONZ_LOG_DIR", "").strip()
    return Path(value) if value else None
