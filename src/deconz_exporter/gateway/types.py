"""Type definitions for the gateway module.

This module defines:
- GatewayEndpoint: where the deCONZ REST API lives and how to reach it
- Error classes: hierarchy of exporter errors
"""

from dataclasses import dataclass

SENSORS_PATH_TEMPLATE = "/api/{token}/sensors"
TOKEN_MASK = "***"


@dataclass(frozen=True)
class GatewayEndpoint:
    """Location of the gateway REST API.

    The API token is part of the URL path, deCONZ does not use an
    authorization header.

    Attributes:
        scheme: URL scheme ("http" or "https").
        host: Gateway hostname or IP address.
        port: Gateway port.
        token: API key issued by the gateway.
    """

    scheme: str
    host: str
    port: int
    token: str

    @property
    def url(self) -> str:
        """Full URL of the sensors collection."""
        return self._build(self.token)

    @property
    def redacted_url(self) -> str:
        """Sensors URL with the token masked, safe for logs."""
        return self._build(TOKEN_MASK)

    def _build(self, token: str) -> str:
        path = SENSORS_PATH_TEMPLATE.format(token=token)
        return f"{self.scheme}://{self.host}:{self.port}{path}"


# Error hierarchy


class ExporterError(Exception):
    """Base exception for all exporter errors."""

    pass


class ConfigurationError(ExporterError):
    """Raised when a required startup parameter is missing or invalid."""

    pass


class FetchError(ExporterError):
    """Raised when the gateway cannot be reached (DNS, refused, timeout)."""

    pass


class DecodeError(ExporterError):
    """Raised when the gateway response is not a valid sensor collection."""

    pass
