"""HTTP fetcher for the deCONZ sensors collection.

One GET per call, no retries and no custom headers. Any HTTP status is a
successful fetch at this layer; only transport failures are errors.
"""

import httpx

from deconz_exporter.gateway.types import TOKEN_MASK, FetchError, GatewayEndpoint
from deconz_exporter.telemetry import get_logger
from deconz_exporter.telemetry.events import SENSOR_FETCH_COMPLETED, SENSOR_FETCH_FAILED

log = get_logger(__name__)


class SensorFetcher:
    """Fetches the raw sensors payload from a gateway.

    The fetcher owns a pooled httpx.AsyncClient; call aclose() when done.

    Attributes:
        endpoint: Gateway the fetcher talks to.
    """

    def __init__(
        self,
        endpoint: GatewayEndpoint,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            endpoint: Gateway location and token.
            transport: Optional httpx transport (tests inject httpx.MockTransport).
        """
        self.endpoint = endpoint
        self._client = httpx.AsyncClient(transport=transport)

    async def fetch(self) -> bytes:
        """Fetch the sensors collection.

        Returns:
            The full response body, whatever the status code.

        Raises:
            FetchError: If the request fails at the transport level.
        """
        try:
            # client.get() reads the body and returns the connection to the pool.
            response = await self._client.get(self.endpoint.url)
        except httpx.HTTPError as e:
            log.debug(
                SENSOR_FETCH_FAILED,
                url=self.endpoint.redacted_url,
                error=_redact(str(e), self.endpoint.token),
                error_type=type(e).__name__,
            )
            raise FetchError(
                f"failed to reach gateway at {self.endpoint.redacted_url}: "
                f"{_redact(str(e), self.endpoint.token) or type(e).__name__}"
            ) from e

        log.debug(
            SENSOR_FETCH_COMPLETED,
            url=self.endpoint.redacted_url,
            status_code=response.status_code,
            body_bytes=len(response.content),
        )
        return response.content

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()


def _redact(message: str, token: str) -> str:
    """Mask the API token in an error message."""
    if not token:
        return message
    return message.replace(token, TOKEN_MASK)
