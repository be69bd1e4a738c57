"""Background poll loop feeding the metric registry.

Every cycle fetches the gateway's sensor collection, decodes it, and sets the
gauges for each supported sensor. A failed fetch or decode counts one error
and skips the cycle; gauges keep their previous values. Every cycle, failed
or not, is followed by the same fixed sleep.

Cycle states:
    IDLE → FETCHING → DECODING → PUBLISHING → SLEEPING → FETCHING ...
                 ↓ FetchError     ↓ DecodeError
                 SLEEPING         SLEEPING
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from deconz_exporter.gateway.fetcher import SensorFetcher
from deconz_exporter.gateway.models import SensorCollection, decode_sensors
from deconz_exporter.gateway.types import DecodeError, ExporterError, FetchError
from deconz_exporter.metrics.extractor import extract_samples
from deconz_exporter.metrics.registry import MetricRegistry
from deconz_exporter.telemetry import (
    SENSOR_POLL_COMPLETED,
    SENSOR_POLL_ERROR,
    SENSOR_POLL_FAILED,
    SENSOR_POLLER_STARTED,
    SENSOR_POLLER_STOPPED,
    SENSORS_DECODED,
    get_logger,
)

log = get_logger(__name__)

POLL_INTERVAL_SECONDS = 5.0


class PollState(str, Enum):
    """Where the poller is within a cycle."""

    IDLE = "idle"
    FETCHING = "fetching"
    DECODING = "decoding"
    PUBLISHING = "publishing"
    SLEEPING = "sleeping"


@dataclass(frozen=True)
class PollResult:
    """Outcome of one poll cycle.

    Attributes:
        ok: True when the fetch and decode succeeded.
        sensor_count: Number of decoded sensors, of any type.
        samples_published: Number of gauge values set.
        error: Failure description when ok is False.
    """

    ok: bool
    sensor_count: int = 0
    samples_published: int = 0
    error: str | None = None


class SensorPoller:
    """Polls the gateway forever and publishes readings to the registry.

    Usage:
        >>> poller = SensorPoller(fetcher, registry)
        >>> await poller.start()  # Runs in background
        >>> # ... later ...
        >>> await poller.stop()

    Attributes:
        fetcher: Source of raw sensor payloads.
        registry: Destination gauges and error counter.
        interval_seconds: Fixed delay after every cycle.
        verbose: Log decoded sensors and failures at INFO instead of DEBUG.
        state: Current cycle state.
        cycles: Number of cycles run.
        failures: Number of failed cycles.
        last_success_at: Completion time of the last successful cycle.
    """

    def __init__(
        self,
        fetcher: SensorFetcher,
        registry: MetricRegistry,
        interval_seconds: float = POLL_INTERVAL_SECONDS,
        verbose: bool = False,
    ) -> None:
        """Initialize the poller. Nothing runs until start()."""
        self.fetcher = fetcher
        self.registry = registry
        self.interval_seconds = interval_seconds
        self.verbose = verbose
        self.state = PollState.IDLE
        self.cycles = 0
        self.failures = 0
        self.last_success_at: datetime | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """Whether the background loop is active."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background poll loop.

        Raises:
            RuntimeError: If the poller is already running.
        """
        if self.running:
            raise RuntimeError("SensorPoller already running")

        self._task = asyncio.create_task(self._poll_loop())
        log.info(
            SENSOR_POLLER_STARTED,
            url=self.fetcher.endpoint.redacted_url,
            interval_seconds=self.interval_seconds,
            verbose=self.verbose,
        )

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return

        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass  # Expected

        self.state = PollState.IDLE
        log.info(SENSOR_POLLER_STOPPED, cycles=self.cycles, failures=self.failures)

    async def poll_once(self) -> PollResult:
        """Run one fetch → decode → publish cycle without sleeping.

        Returns:
            PollResult describing the cycle. Fetch and decode errors are
            counted and reported here, never raised.
        """
        self.cycles += 1

        self.state = PollState.FETCHING
        try:
            raw = await self.fetcher.fetch()
        except FetchError as e:
            return self._fail("fetch", e)

        self.state = PollState.DECODING
        try:
            sensors = decode_sensors(raw)
        except DecodeError as e:
            return self._fail("decode", e)

        self.state = PollState.PUBLISHING
        if self.verbose:
            log.info(SENSORS_DECODED, sensors=_describe(sensors))

        published = 0
        for record in sensors.values():
            published += self.registry.apply(extract_samples(record))

        self.last_success_at = datetime.now(timezone.utc)
        self.state = PollState.SLEEPING
        log.debug(
            SENSOR_POLL_COMPLETED,
            sensor_count=len(sensors),
            samples_published=published,
        )
        return PollResult(ok=True, sensor_count=len(sensors), samples_published=published)

    def _fail(self, stage: str, error: ExporterError) -> PollResult:
        """Count a failed cycle and move straight to sleeping."""
        self.failures += 1
        self.registry.record_error()
        self.state = PollState.SLEEPING

        emit = log.info if self.verbose else log.debug
        emit(
            SENSOR_POLL_FAILED,
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )
        return PollResult(ok=False, error=str(error))

    async def _poll_loop(self) -> None:
        """Background loop: one cycle, fixed sleep, repeat until cancelled."""
        while True:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Unexpected error - count it and keep polling
                self.failures += 1
                self.registry.record_error()
                log.error(
                    SENSOR_POLL_ERROR,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )

            self.state = PollState.SLEEPING
            await asyncio.sleep(self.interval_seconds)


def _describe(sensors: SensorCollection) -> dict[str, dict[str, Any]]:
    """Decoded sensors as plain dicts for verbose logging."""
    return {sensor_id: record.model_dump(by_alias=True) for sensor_id, record in sensors.items()}
