"""deCONZ gateway access: endpoint, fetcher, and sensor record decoding."""

from deconz_exporter.gateway.fetcher import SensorFetcher
from deconz_exporter.gateway.models import (
    SensorCollection,
    SensorConfig,
    SensorRecord,
    SensorState,
    decode_sensors,
)
from deconz_exporter.gateway.types import (
    ConfigurationError,
    DecodeError,
    ExporterError,
    FetchError,
    GatewayEndpoint,
)

__all__ = [
    "GatewayEndpoint",
    "SensorFetcher",
    "SensorCollection",
    "SensorConfig",
    "SensorRecord",
    "SensorState",
    "decode_sensors",
    # Exception classes
    "ExporterError",
    "ConfigurationError",
    "FetchError",
    "DecodeError",
]
