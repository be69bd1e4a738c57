"""FastAPI service exposing deCONZ sensor metrics."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from deconz_exporter.config.settings import ExporterConfig
from deconz_exporter.gateway.fetcher import SensorFetcher
from deconz_exporter.metrics.registry import MetricRegistry
from deconz_exporter.poller.poll_loop import POLL_INTERVAL_SECONDS, SensorPoller
from deconz_exporter.telemetry import (
    SERVICE_READY,
    SERVICE_STARTING,
    SERVICE_STOPPED,
    get_logger,
)

log = get_logger(__name__)

INDEX_HTML = """<html>
<head><title>Deconz Exporter</title></head>
<body>
<h1>Deconz Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
</body>
</html>"""


def create_app(
    config: ExporterConfig,
    registry: MetricRegistry | None = None,
    fetcher: SensorFetcher | None = None,
    interval_seconds: float = POLL_INTERVAL_SECONDS,
) -> FastAPI:
    """Build the exporter application.

    The poller starts with the application lifespan and is cancelled on
    shutdown.

    Args:
        config: Validated exporter configuration.
        registry: Metric registry to serve. When None, a fresh one is created
            with the process, platform and GC collectors registered.
        fetcher: Gateway fetcher. Built from config when None.
        interval_seconds: Delay between poll cycles.

    Returns:
        Configured FastAPI application.

    Raises:
        ConfigurationError: If config lacks token, host or port and no fetcher is given.
    """
    registry = registry if registry is not None else MetricRegistry(runtime_collectors=True)
    owns_fetcher = fetcher is None
    if fetcher is None:
        fetcher = SensorFetcher(config.gateway_endpoint())
    poller = SensorPoller(
        fetcher, registry, interval_seconds=interval_seconds, verbose=config.verbose
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan management."""
        log.info(SERVICE_STARTING, gateway=fetcher.endpoint.redacted_url)
        await poller.start()
        log.info(SERVICE_READY, port=config.listen_port)

        yield

        await poller.stop()
        if owns_fetcher:
            await fetcher.aclose()
        log.info(SERVICE_STOPPED)

    app = FastAPI(
        title="deCONZ Exporter",
        description="Prometheus exporter for deCONZ sensor readings",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.poller = poller

    app.add_api_route("/", index, methods=["GET"], response_class=HTMLResponse)
    app.add_api_route("/metrics", metrics, methods=["GET"], response_class=Response)
    app.add_api_route("/health", health_check, methods=["GET"])
    return app


# ============================================================================
# Endpoints
# ============================================================================


async def index() -> HTMLResponse:
    """Landing page linking to the metrics."""
    return HTMLResponse(INDEX_HTML)


async def metrics(request: Request) -> Response:
    """Prometheus metrics in the text exposition format."""
    registry: MetricRegistry = request.app.state.registry
    return Response(content=registry.exposition(), media_type=CONTENT_TYPE_LATEST)


async def health_check(request: Request) -> dict[str, Any]:
    """Service health check endpoint."""
    poller: SensorPoller = request.app.state.poller
    last_success = poller.last_success_at.isoformat() if poller.last_success_at else None
    return {
        "status": "healthy" if poller.running else "stopped",
        "poller": {
            "running": poller.running,
            "state": poller.state.value,
            "cycles": poller.cycles,
            "failures": poller.failures,
            "last_success_at": last_success,
        },
    }
