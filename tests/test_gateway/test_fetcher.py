"""Tests for SensorFetcher."""

import httpx
import pytest

from deconz_exporter.gateway.fetcher import SensorFetcher
from deconz_exporter.gateway.types import FetchError, GatewayEndpoint

ENDPOINT = GatewayEndpoint(scheme="http", host="192.168.0.222", port=1702, token="SECRET123")


class TestGatewayEndpoint:
    """Test GatewayEndpoint URL building."""

    def test_url_embeds_token_in_path(self) -> None:
        """Test the token is part of the sensors path."""
        assert ENDPOINT.url == "http://192.168.0.222:1702/api/SECRET123/sensors"

    def test_redacted_url_masks_token(self) -> None:
        """Test the loggable URL hides the token."""
        assert ENDPOINT.redacted_url == "http://192.168.0.222:1702/api/***/sensors"
        assert "SECRET123" not in ENDPOINT.redacted_url


class TestSensorFetcher:
    """Test SensorFetcher class."""

    @pytest.mark.asyncio
    async def test_fetch_returns_body(self) -> None:
        """Test a successful GET returns the raw body."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b'{"1": {}}')

        fetcher = SensorFetcher(ENDPOINT, transport=httpx.MockTransport(handler))
        try:
            body = await fetcher.fetch()
        finally:
            await fetcher.aclose()

        assert body == b'{"1": {}}'
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == ENDPOINT.url
        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_non_2xx_is_not_an_error(self) -> None:
        """Test HTTP error statuses still return the body."""
        error_body = b'[{"error": {"type": 1, "description": "unauthorized user"}}]'

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, content=error_body)

        fetcher = SensorFetcher(ENDPOINT, transport=httpx.MockTransport(handler))
        try:
            body = await fetcher.fetch()
        finally:
            await fetcher.aclose()

        assert body == error_body

    @pytest.mark.asyncio
    async def test_connection_error_raises_fetch_error(self) -> None:
        """Test transport failures surface as FetchError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        fetcher = SensorFetcher(ENDPOINT, transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(FetchError) as exc_info:
                await fetcher.fetch()
        finally:
            await fetcher.aclose()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert "SECRET123" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_raises_fetch_error(self) -> None:
        """Test timeouts surface as FetchError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = SensorFetcher(ENDPOINT, transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(FetchError):
                await fetcher.fetch()
        finally:
            await fetcher.aclose()

    @pytest.mark.asyncio
    async def test_error_message_redacts_token(self) -> None:
        """Test a token echoed in the transport error is masked."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(f"cannot connect to {request.url}", request=request)

        fetcher = SensorFetcher(ENDPOINT, transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(FetchError) as exc_info:
                await fetcher.fetch()
        finally:
            await fetcher.aclose()

        assert "SECRET123" not in str(exc_info.value)
        assert "***" in str(exc_info.value)
