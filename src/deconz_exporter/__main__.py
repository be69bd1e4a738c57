"""Allow `python -m deconz_exporter`."""

from deconz_exporter.ui.cli import app

app()
