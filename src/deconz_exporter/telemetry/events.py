"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying.
"""

# Gateway events
SENSOR_FETCH_COMPLETED = "sensor_fetch_completed"
SENSOR_FETCH_FAILED = "sensor_fetch_failed"
SENSOR_DECODE_FAILED = "sensor_decode_failed"

# Poller events
SENSOR_POLLER_STARTED = "sensor_poller_started"
SENSOR_POLLER_STOPPED = "sensor_poller_stopped"
SENSOR_POLL_COMPLETED = "sensor_poll_completed"
SENSOR_POLL_FAILED = "sensor_poll_failed"
SENSOR_POLL_ERROR = "sensor_poll_error"
SENSORS_DECODED = "sensors_decoded"

# Service events
SERVICE_STARTING = "service_starting"
SERVICE_READY = "service_ready"
SERVICE_STOPPED = "service_stopped"

# Configuration events
CONFIG_LOADED = "exporter_config_loaded"
CONFIG_INVALID = "exporter_config_invalid"
