"""HTTP service serving the metrics endpoint."""

from deconz_exporter.service.app import create_app

__all__ = ["create_app"]
