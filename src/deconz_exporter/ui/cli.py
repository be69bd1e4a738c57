"""Command-line entry point for the deCONZ exporter.

Parses the gateway flags, validates them, and serves the metrics endpoint
with the poller running in the background.

Examples:
    deconz-exporter --token ABCDEF0123 --host 192.168.0.222 --port 80
    DECONZ_TOKEN=ABCDEF0123 DECONZ_PORT=80 deconz-exporter --verbose
"""

from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from deconz_exporter.config.settings import ExporterConfig, load_exporter_config
from deconz_exporter.gateway.types import ConfigurationError
from deconz_exporter.service.app import create_app
from deconz_exporter.telemetry import CONFIG_INVALID, configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Prometheus exporter for deCONZ sensor readings", add_completion=False)
console = Console(stderr=True)


def _load_config(**overrides: object) -> ExporterConfig:
    """Load configuration and check the required gateway parameters.

    Raises:
        ConfigurationError: If a parameter is missing or invalid.
    """
    config = load_exporter_config(**overrides)
    config.validate_required()
    return config


@app.command()
def serve(
    token: Optional[str] = typer.Option(None, "--token", help="The API token for deconz"),
    host: Optional[str] = typer.Option(
        None, "--host", help="The host address of the deconz instance [default: localhost]"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", help="The port on which deconz is available"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
    listen_port: Optional[int] = typer.Option(
        None, "--listen-port", help="Port for the metrics server [default: 2112]"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Write JSON-lines logs to this directory"
    ),
) -> None:
    """Poll the deCONZ gateway and serve its sensors as Prometheus metrics."""
    try:
        config = _load_config(
            token=token,
            host=host,
            port=port,
            verbose=verbose or None,
            listen_port=listen_port,
            log_level=log_level,
            log_dir=log_dir,
        )
    except ConfigurationError as e:
        log.error(CONFIG_INVALID, error=str(e))
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    configure_logging(config.log_level, config.log_format, config.log_dir)

    application = create_app(config)
    typer.echo(f"Starting Server on localhost:{config.listen_port}")
    # log_config=None keeps uvicorn on the structlog-formatted root handlers
    uvicorn.run(
        application,
        host=config.listen_host,
        port=config.listen_port,
        log_config=None,
    )


if __name__ == "__main__":
    app()
