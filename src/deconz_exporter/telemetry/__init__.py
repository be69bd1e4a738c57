"""Telemetry module for structured logging.

This module provides:
- Structured logging via structlog
- Semantic event constants
"""

from deconz_exporter.telemetry.events import (
    CONFIG_INVALID,
    CONFIG_LOADED,
    SENSOR_DECODE_FAILED,
    SENSOR_FETCH_COMPLETED,
    SENSOR_FETCH_FAILED,
    SENSOR_POLL_COMPLETED,
    SENSOR_POLL_ERROR,
    SENSOR_POLL_FAILED,
    SENSOR_POLLER_STARTED,
    SENSOR_POLLER_STOPPED,
    SENSORS_DECODED,
    SERVICE_READY,
    SERVICE_STARTING,
    SERVICE_STOPPED,
)
from deconz_exporter.telemetry.logger import configure_logging, get_logger

__all__ = [
    # Core exports
    "get_logger",
    "configure_logging",
    # Event constants
    "SENSOR_FETCH_COMPLETED",
    "SENSOR_FETCH_FAILED",
    "SENSOR_DECODE_FAILED",
    "SENSOR_POLLER_STARTED",
    "SENSOR_POLLER_STOPPED",
    "SENSOR_POLL_COMPLETED",
    "SENSOR_POLL_FAILED",
    "SENSOR_POLL_ERROR",
    "SENSORS_DECODED",
    "SERVICE_STARTING",
    "SERVICE_READY",
    "SERVICE_STOPPED",
    "CONFIG_LOADED",
    "CONFIG_INVALID",
]
