"""Sensor polling package.

The poller runs as a background asyncio task next to the metrics server.
"""

from deconz_exporter.poller.poll_loop import (
    POLL_INTERVAL_SECONDS,
    PollResult,
    PollState,
    SensorPoller,
)

__all__ = ["POLL_INTERVAL_SECONDS", "PollResult", "PollState", "SensorPoller"]
