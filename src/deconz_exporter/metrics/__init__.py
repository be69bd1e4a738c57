"""Prometheus metrics for deCONZ sensors.

Structure:
- registry.py: gauges, error counter and text exposition
- extractor.py: sensor type to gauge mapping with unit scaling
"""

from deconz_exporter.metrics.extractor import extract_samples, is_supported, record_labels
from deconz_exporter.metrics.registry import (
    LABEL_NAMES,
    MetricFamily,
    MetricRegistry,
    MetricSample,
)

__all__ = [
    "LABEL_NAMES",
    "MetricFamily",
    "MetricRegistry",
    "MetricSample",
    "extract_samples",
    "is_supported",
    "record_labels",
]
