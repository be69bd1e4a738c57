"""Prometheus metric registry for deCONZ sensor readings.

Defines one gauge per physical quantity, labeled by sensor identity, plus a
counter of failed poll cycles. Each MetricRegistry owns its own
CollectorRegistry so several instances (tests, multiple apps) never collide.
The registry served by the running exporter also carries the process, platform
and GC collectors that the default prometheus_client registry would expose.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    disable_created_metrics,
    generate_latest,
)

NAMESPACE = "deconz"
SUBSYSTEM = "sensor"
LABEL_NAMES = ("name", "uid", "manufacturer", "model", "type")

# Counters are exposed as *_total only, without a *_created series.
disable_created_metrics()


class MetricFamily(str, Enum):
    """Gauge families published for sensors."""

    TEMPERATURE = "temperature"
    BATTERY = "battery"
    HUMIDITY = "humidity"
    PRESSURE = "pressure"

    @property
    def metric_name(self) -> str:
        """Fully qualified metric name, e.g. deconz_sensor_temperature."""
        return f"{NAMESPACE}_{SUBSYSTEM}_{self.value}"


_DESCRIPTIONS = {
    MetricFamily.TEMPERATURE: "Temperature of sensor in Celsius",
    MetricFamily.BATTERY: "Battery level of sensor in percent",
    MetricFamily.HUMIDITY: "Humidity of sensor in percent",
    MetricFamily.PRESSURE: "Air pressure in hectopascal (hPa)",
}


@dataclass(frozen=True)
class MetricSample:
    """A value for one gauge time series.

    Attributes:
        family: Gauge family the value belongs to.
        labels: Full label set (name, uid, manufacturer, model, type).
        value: Value in the family's unit.
    """

    family: MetricFamily
    labels: dict[str, str]
    value: float


class MetricRegistry:
    """Latest-value store for sensor gauges and the poll error counter.

    Gauges keep their last value until overwritten; nothing expires.
    prometheus_client metrics lock internally, so the poller can write
    while the metrics endpoint reads.

    Attributes:
        registry: Underlying prometheus_client registry served on /metrics.
        errors: Counter of failed poll cycles.
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        runtime_collectors: bool = False,
    ) -> None:
        """Create the gauges and counter.

        Args:
            registry: Registry to register into. A fresh one is created when None.
            runtime_collectors: Also register process, platform and GC collectors.
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        if runtime_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)
        self._gauges: dict[MetricFamily, Gauge] = {
            family: Gauge(
                family.value,
                _DESCRIPTIONS[family],
                labelnames=LABEL_NAMES,
                namespace=NAMESPACE,
                subsystem=SUBSYSTEM,
                registry=self.registry,
            )
            for family in MetricFamily
        }
        self.errors = Counter(
            "errors",
            "Failures to retrieve data from API",
            namespace=NAMESPACE,
            subsystem=SUBSYSTEM,
            registry=self.registry,
        )

    def set(self, sample: MetricSample) -> None:
        """Set a gauge series to the sample value, replacing any previous value.

        Raises:
            ValueError: If the sample's label set is incomplete.
        """
        missing = [label for label in LABEL_NAMES if label not in sample.labels]
        if missing:
            raise ValueError(f"sample for {sample.family.value} is missing labels: {missing}")
        self._gauges[sample.family].labels(**sample.labels).set(sample.value)

    def apply(self, samples: Iterable[MetricSample]) -> int:
        """Set every sample. Returns how many were applied."""
        count = 0
        for sample in samples:
            self.set(sample)
            count += 1
        return count

    def record_error(self) -> None:
        """Count one failed poll cycle."""
        self.errors.inc()

    def value(self, family: MetricFamily, labels: dict[str, str]) -> float | None:
        """Current value of a gauge series, None if it was never set."""
        return self.registry.get_sample_value(family.metric_name, labels)

    def error_count(self) -> float:
        """Number of failed poll cycles so far."""
        return self.registry.get_sample_value(f"{NAMESPACE}_{SUBSYSTEM}_errors_total") or 0.0

    def exposition(self) -> bytes:
        """Render the registry in the Prometheus text format."""
        return generate_latest(self.registry)
