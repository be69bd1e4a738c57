"""deCONZ Exporter.

Polls a deCONZ gateway's REST API for sensor readings and republishes them
as Prometheus gauges.
"""

__version__ = "0.1.0"
