"""Sensor type classification and value extraction.

Each deCONZ sensor type maps to the gauges it feeds and the scaling from the
gateway's integer units to the published unit. Types not listed here are
ignored.
"""

from collections.abc import Callable
from dataclasses import dataclass

from deconz_exporter.gateway.models import SensorRecord
from deconz_exporter.metrics.registry import MetricFamily, MetricSample

ZHA_TEMPERATURE = "ZHATemperature"
ZHA_HUMIDITY = "ZHAHumidity"
ZHA_PRESSURE = "ZHAPressure"


@dataclass(frozen=True)
class Extraction:
    """How one gauge is read from a record.

    Attributes:
        family: Target gauge family.
        read: Returns the raw integer value from the record.
        scale: Divisor turning the raw value into the published unit.
    """

    family: MetricFamily
    read: Callable[[SensorRecord], int]
    scale: float = 1.0

    def apply(self, record: SensorRecord) -> float:
        """Raw value converted to the published unit."""
        return float(self.read(record)) / self.scale


# Battery is only published for ZHATemperature records, never for
# humidity or pressure records of the same device.
EXTRACTIONS: dict[str, tuple[Extraction, ...]] = {
    ZHA_TEMPERATURE: (
        Extraction(MetricFamily.BATTERY, lambda r: r.config.battery),
        Extraction(MetricFamily.TEMPERATURE, lambda r: r.state.temperature, scale=100.0),
    ),
    ZHA_HUMIDITY: (
        Extraction(MetricFamily.HUMIDITY, lambda r: r.state.humidity, scale=100.0),
    ),
    ZHA_PRESSURE: (
        Extraction(MetricFamily.PRESSURE, lambda r: r.state.pressure),
    ),
}


def record_labels(record: SensorRecord) -> dict[str, str]:
    """Label set identifying a sensor's time series."""
    return {
        "name": record.name,
        "uid": record.uid,
        "manufacturer": record.manufacturer,
        "model": record.model_id,
        "type": record.sensor_type,
    }


def is_supported(sensor_type: str) -> bool:
    """Whether a sensor type feeds any gauge (exact, case-sensitive match)."""
    return sensor_type in EXTRACTIONS


def extract_samples(record: SensorRecord) -> list[MetricSample]:
    """Gauge samples for a sensor record.

    Args:
        record: Decoded sensor.

    Returns:
        Samples to publish; empty for unsupported sensor types.
    """
    extractions = EXTRACTIONS.get(record.sensor_type, ())
    if not extractions:
        return []

    labels = record_labels(record)
    return [
        MetricSample(family=extraction.family, labels=labels, value=extraction.apply(record))
        for extraction in extractions
    ]
