"""Sensor records decoded from the deCONZ REST API.

The gateway answers `GET /api/<token>/sensors` with a JSON object mapping
sensor ids to sensor objects. Only the fields the exporter publishes are
modelled; everything else in the payload is ignored.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from deconz_exporter.gateway.types import DecodeError
from deconz_exporter.telemetry import get_logger
from deconz_exporter.telemetry.events import SENSOR_DECODE_FAILED

log = get_logger(__name__)

# Integer readings must fit a signed 64-bit int.
GatewayInt = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


class _GatewayModel(BaseModel):
    """Base for gateway payload models.

    Field types are checked strictly (a string temperature, a fractional
    battery level or an integer beyond 64 bits is a shape error). Absent and
    null fields fall back to their zero value. Keys match field names
    case-insensitively when there is no exact match.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Drop null fields so defaults apply and fold key case onto field names."""
        if isinstance(data, dict):
            known = {
                (info.alias or name).lower(): info.alias or name
                for name, info in cls.model_fields.items()
            }
            normalized: dict[str, Any] = {}
            for key, value in data.items():
                if value is None:
                    continue
                target = key if key in known.values() else known.get(key.lower(), key)
                if target != key and data.get(target) is not None:
                    continue
                normalized[target] = value
            return normalized
        if data is None:
            return {}
        return data


class SensorState(_GatewayModel):
    """Measured values. Temperature and humidity are in hundredths, pressure in hPa."""

    temperature: GatewayInt = 0
    humidity: GatewayInt = 0
    pressure: GatewayInt = 0


class SensorConfig(_GatewayModel):
    """Device configuration block."""

    battery: GatewayInt = 0  # percent, 0-100


class SensorRecord(_GatewayModel):
    """One sensor as reported by the gateway."""

    name: StrictStr = ""
    uid: StrictStr = ""
    manufacturer: StrictStr = ""
    model_id: StrictStr = Field(default="", alias="modelid")
    sensor_type: StrictStr = Field(default="", alias="type")
    state: SensorState = Field(default_factory=SensorState)
    config: SensorConfig = Field(default_factory=SensorConfig)


SensorCollection = dict[str, SensorRecord]

_collection_adapter: TypeAdapter[SensorCollection] = TypeAdapter(SensorCollection)


def decode_sensors(raw: bytes | str) -> SensorCollection:
    """Decode a sensors response body.

    Args:
        raw: Response body as returned by the gateway.

    Returns:
        Mapping of sensor id to SensorRecord. Sensors of any type are kept.

    Raises:
        DecodeError: If the body is not JSON or does not have the expected shape.
    """
    # Invalid UTF-8 sequences become U+FFFD instead of failing the whole body.
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw

    # A bare JSON null is an empty collection, not an error.
    if text.strip() == "null":
        return {}

    try:
        return _collection_adapter.validate_json(text)
    except ValidationError as e:
        log.debug(SENSOR_DECODE_FAILED, error_count=e.error_count(), body_bytes=len(raw))
        raise DecodeError(f"invalid sensors payload: {e.error_count()} error(s): {e}") from e
