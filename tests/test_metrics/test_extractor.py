"""Tests for sensor type classification and extraction."""

import pytest

from deconz_exporter.gateway.models import SensorConfig, SensorRecord, SensorState
from deconz_exporter.metrics.extractor import extract_samples, is_supported, record_labels
from deconz_exporter.metrics.registry import MetricFamily


def make_record(sensor_type: str, **state: int) -> SensorRecord:
    """Build a record with every field populated."""
    battery = state.pop("battery", 55)
    return SensorRecord(
        name="Kitchen",
        uid="00:11",
        manufacturer="dresden",
        model_id="SML001",
        sensor_type=sensor_type,
        state=SensorState(**state),
        config=SensorConfig(battery=battery),
    )


def by_family(record: SensorRecord) -> dict[MetricFamily, float]:
    """Extracted values keyed by family."""
    return {sample.family: sample.value for sample in extract_samples(record)}


class TestExtractSamples:
    """Test extract_samples()."""

    def test_temperature_sets_temperature_and_battery(self) -> None:
        """Test ZHATemperature publishes centi-degrees as degrees plus battery."""
        record = make_record("ZHATemperature", temperature=2150, humidity=4000, battery=87)

        assert by_family(record) == {
            MetricFamily.BATTERY: 87.0,
            MetricFamily.TEMPERATURE: 21.5,
        }

    def test_negative_temperature(self) -> None:
        """Test sub-zero readings scale with plain division."""
        record = make_record("ZHATemperature", temperature=-512)
        assert by_family(record)[MetricFamily.TEMPERATURE] == -5.12

    def test_humidity_sets_only_humidity(self) -> None:
        """Test ZHAHumidity publishes centi-percent as percent and nothing else."""
        record = make_record("ZHAHumidity", humidity=4512, temperature=2000, battery=90)

        assert by_family(record) == {MetricFamily.HUMIDITY: 45.12}

    def test_pressure_is_not_scaled(self) -> None:
        """Test ZHAPressure publishes hPa unchanged and nothing else."""
        record = make_record("ZHAPressure", pressure=1013, battery=90)

        assert by_family(record) == {MetricFamily.PRESSURE: 1013.0}

    @pytest.mark.parametrize(
        "sensor_type",
        ["ZHASwitch", "Daylight", "ZHALightLevel", "zhatemperature", "ZHATemperature ", ""],
    )
    def test_unknown_types_yield_nothing(self, sensor_type: str) -> None:
        """Test unsupported types (exact match only) produce no samples."""
        record = make_record(sensor_type, temperature=2150, humidity=4000, pressure=1000)
        assert extract_samples(record) == []

    def test_samples_carry_full_label_set(self) -> None:
        """Test every sample is labeled with the sensor identity."""
        record = make_record("ZHATemperature", temperature=2150)

        for sample in extract_samples(record):
            assert sample.labels == {
                "name": "Kitchen",
                "uid": "00:11",
                "manufacturer": "dresden",
                "model": "SML001",
                "type": "ZHATemperature",
            }

    def test_values_are_floats(self) -> None:
        """Test extracted values are floating point."""
        record = make_record("ZHAPressure", pressure=998)
        assert all(isinstance(s.value, float) for s in extract_samples(record))


class TestHelpers:
    """Test labeling and classification helpers."""

    def test_record_labels_with_empty_fields(self) -> None:
        """Test missing identity fields become empty label values."""
        labels = record_labels(SensorRecord(sensor_type="ZHAHumidity"))
        assert labels == {
            "name": "",
            "uid": "",
            "manufacturer": "",
            "model": "",
            "type": "ZHAHumidity",
        }

    def test_is_supported(self) -> None:
        """Test the supported type set."""
        assert is_supported("ZHATemperature")
        assert is_supported("ZHAHumidity")
        assert is_supported("ZHAPressure")
        assert not is_supported("ZHAOpenClose")
