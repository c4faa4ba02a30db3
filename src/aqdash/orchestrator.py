"""Polling orchestrator: clock ticks and user actions in, fetches out.

The orchestrator owns no state of its own beyond its tasks. Every input
goes through :meth:`PollingOrchestrator.submit`, which hands it to the
store and runs whatever fetch the reconciler asks for. Fetch results come
back through ``submit`` as new events.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Protocol, assert_never

from aqdash.config import DashboardConfig
from aqdash.exceptions import AqDashError
from aqdash.models.reading import Reading, ReadingSeries
from aqdash.models.status import DeviceStatus
from aqdash.models.window import WindowDuration
from aqdash.state.events import (
    Channel,
    Effect,
    Event,
    FetchReadings,
    FetchStatus,
    HoverChanged,
    ReadingsFetched,
    StatusFetched,
    TimerFired,
    WindowChanged,
)
from aqdash.state.failures import FetchFailure, failure_message
from aqdash.state.store import ViewModelStore
from aqdash.state.view_model import ViewModel

_logger = logging.getLogger(__name__)


class SensorSource(Protocol):
    """What the orchestrator needs from :class:`aqdash.client.AirQualityClient`."""

    async def get_readings(self, window: WindowDuration) -> ReadingSeries:
        ...

    async def get_status(self) -> DeviceStatus:
        ...


class PollingOrchestrator:
    """Drive periodic and on-demand fetches into the view-model store.

    Usage::

        async with AirQualityClient(config) as client:
            async with PollingOrchestrator(client, config) as orchestrator:
                orchestrator.change_window(WindowDuration.DAY)
                ...

    Two independent timers (readings and status) each tick on their own
    phase. Overlapping fetches on the same channel are not deduplicated.
    """

    def __init__(
        self,
        source: SensorSource,
        config: DashboardConfig,
        *,
        store: ViewModelStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = source
        self._config = config
        self._store = store if store is not None else ViewModelStore(
            ViewModel.initial(config.initial_window),
            discard_stale=config.discard_stale_readings,
        )
        self._clock = clock
        self._timers: list[asyncio.Task[None]] = []
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def store(self) -> ViewModelStore:
        return self._store

    @property
    def snapshot(self) -> ViewModel:
        return self._store.snapshot

    @property
    def is_running(self) -> bool:
        return bool(self._timers)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PollingOrchestrator:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        """Fetch both channels immediately, then start the periodic timers."""
        if self.is_running:
            return
        _logger.info(
            "Starting polling: readings every %.1fs, status every %.1fs",
            self._config.readings_interval,
            self._config.status_interval,
        )
        now = self._clock()
        self.submit(TimerFired(channel=Channel.READINGS, at=now))
        self.submit(TimerFired(channel=Channel.STATUS, at=now))
        self._timers = [
            asyncio.create_task(self._run_timer(Channel.READINGS, self._config.readings_interval)),
            asyncio.create_task(self._run_timer(Channel.STATUS, self._config.status_interval)),
        ]

    async def stop(self) -> None:
        """Cancel the timers and any fetch still in flight."""
        tasks = [*self._timers, *self._inflight]
        self._timers = []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()
        if tasks:
            _logger.info("Polling stopped")

    async def _run_timer(self, channel: Channel, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.submit(TimerFired(channel=channel, at=self._clock()))

    # ------------------------------------------------------------------
    # Event intake
    # ------------------------------------------------------------------

    def submit(self, event: Event) -> None:
        """Single intake point for every event."""
        effect = self._store.apply(event)
        if effect is not None:
            self._schedule(effect)

    def change_window(self, window: WindowDuration) -> None:
        self.submit(WindowChanged(window=window))

    def hover(self, selection: Iterable[Reading]) -> None:
        self.submit(HoverChanged(selection=frozenset(selection)))

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _schedule(self, effect: Effect) -> None:
        task = asyncio.create_task(self._execute(effect))
        self._inflight.add(task)
        task.add_done_callback(self._on_fetch_done)

    def _on_fetch_done(self, task: asyncio.Task[None]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Fetch task crashed", exc_info=exc)

    async def _execute(self, effect: Effect) -> None:
        event: Event
        match effect:
            case FetchReadings():
                try:
                    readings = await self._source.get_readings(effect.window)
                except AqDashError as exc:
                    failure = FetchFailure.from_error(exc)
                    _logger.warning("Readings fetch failed (window=%s): %s", effect.window, failure_message(failure))
                    event = ReadingsFetched.failed(failure, generation=effect.generation)
                else:
                    event = ReadingsFetched.success(readings, generation=effect.generation)
            case FetchStatus():
                try:
                    status = await self._source.get_status()
                except AqDashError as exc:
                    failure = FetchFailure.from_error(exc)
                    _logger.warning("Status fetch failed: %s", failure_message(failure))
                    event = StatusFetched.failed(failure)
                else:
                    event = StatusFetched.success(status)
            case _:
                assert_never(effect)
        self.submit(event)
