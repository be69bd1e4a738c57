"""User interface modules (command line)."""

from deconz_exporter.ui.cli import app

__all__ = ["app"]
