"""Events consumed and effects emitted by the reconciler.

Every input to the view model (clock ticks, fetch results, user actions)
is one of the :data:`Event` variants; the reconciler answers with at most
one :data:`Effect` for the orchestrator to execute.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from aqdash.models.reading import Reading, ReadingSeries
from aqdash.models.status import DeviceStatus
from aqdash.models.window import WindowDuration
from aqdash.state.failures import FetchFailure


class Channel(StrEnum):
    READINGS = "readings"
    STATUS = "status"


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TimerFired(_Message):
    """A clock tick (periodic or startup) for one channel."""

    type: Literal["timer_fired"] = "timer_fired"
    channel: Channel
    at: float


class ReadingsFetched(_Message):
    """A readings fetch settled.

    Exactly one of ``readings`` and ``failure`` is set. ``generation`` is
    the readings generation the request was issued under.
    """

    type: Literal["readings_fetched"] = "readings_fetched"
    readings: ReadingSeries | None = None
    failure: FetchFailure | None = None
    generation: int = 0

    @model_validator(mode="after")
    def _one_outcome(self) -> ReadingsFetched:
        if (self.readings is None) == (self.failure is None):
            raise ValueError("exactly one of readings/failure must be set")
        return self

    @classmethod
    def success(cls, readings: ReadingSeries, *, generation: int = 0) -> ReadingsFetched:
        return cls(readings=tuple(readings), generation=generation)

    @classmethod
    def failed(cls, failure: FetchFailure, *, generation: int = 0) -> ReadingsFetched:
        return cls(failure=failure, generation=generation)


class StatusFetched(_Message):
    """A device status fetch settled. Exactly one of ``status``/``failure`` is set."""

    type: Literal["status_fetched"] = "status_fetched"
    status: DeviceStatus | None = None
    failure: FetchFailure | None = None

    @model_validator(mode="after")
    def _one_outcome(self) -> StatusFetched:
        if (self.status is None) == (self.failure is None):
            raise ValueError("exactly one of status/failure must be set")
        return self

    @classmethod
    def success(cls, status: DeviceStatus) -> StatusFetched:
        return cls(status=status)

    @classmethod
    def failed(cls, failure: FetchFailure) -> StatusFetched:
        return cls(failure=failure)


class WindowChanged(_Message):
    """The user selected an aggregation window."""

    type: Literal["window_changed"] = "window_changed"
    window: WindowDuration


class HoverChanged(_Message):
    """The presentation layer reports the readings under the pointer."""

    type: Literal["hover_changed"] = "hover_changed"
    selection: frozenset[Reading] = frozenset()


Event = Annotated[
    TimerFired | ReadingsFetched | StatusFetched | WindowChanged | HoverChanged,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


class FetchReadings(_Message):
    """Request the reading series for ``window``, tagged with ``generation``."""

    type: Literal["fetch_readings"] = "fetch_readings"
    window: WindowDuration
    generation: int = 0


class FetchStatus(_Message):
    """Request the device status."""

    type: Literal["fetch_status"] = "fetch_status"


Effect = Annotated[FetchReadings | FetchStatus, Field(discriminator="type")]
