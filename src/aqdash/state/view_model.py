"""The dashboard view model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aqdash.models.reading import ZERO_READING, Reading, ReadingSeries
from aqdash.models.status import IDLE_STATUS, DeviceStatus
from aqdash.models.window import WindowDuration


class ErrorSlot(BaseModel):
    """The single error banner shared by both channels."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    title: str = ""
    message: str = ""

    @classmethod
    def raised(cls, title: str, message: str) -> ErrorSlot:
        return cls(active=True, title=title, message=message)


NO_ERROR = ErrorSlot()


class ViewModel(BaseModel):
    """Everything the presentation layer renders.

    Replaced wholesale by the reconciler; never mutated in place.
    ``latest_reading`` is always the last element of ``all_readings``, or
    :data:`~aqdash.models.reading.ZERO_READING` when there are none.
    """

    model_config = ConfigDict(frozen=True)

    last_observed_time: float | None = None
    device_status: DeviceStatus = IDLE_STATUS
    latest_reading: Reading = ZERO_READING
    all_readings: ReadingSeries = ()
    selected_window: WindowDuration = WindowDuration.ALL
    # Set at startup and never cleared.
    loading: bool = True
    hover_selection: frozenset[Reading] = Field(default_factory=frozenset)
    error_slot: ErrorSlot = NO_ERROR
    readings_generation: int = 0

    @classmethod
    def initial(cls, window: WindowDuration = WindowDuration.ALL) -> ViewModel:
        return cls(selected_window=window)
