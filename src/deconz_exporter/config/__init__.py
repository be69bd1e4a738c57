"""Configuration management for the deCONZ exporter.

Environment variables (DECONZ_*), .env files and command-line flags are merged
into a single validated ExporterConfig.
"""

from deconz_exporter.config.settings import (
    DEFAULT_LISTEN_PORT,
    ExporterConfig,
    get_settings,
    load_exporter_config,
)

__all__ = [
    "DEFAULT_LISTEN_PORT",
    "ExporterConfig",
    "get_settings",
    "load_exporter_config",
]
