"""Pure state transitions for the dashboard view model.

``reconcile`` is the only function that produces a new :class:`ViewModel`.
It performs no I/O: fetches are requested by returning an effect, which
the orchestrator executes and answers with a new event.

Policy:
- Failed fetches never touch loaded data, they only raise the error slot.
- The error slot is shared: a success on either channel clears it, even
  when the active error came from the other channel.
- Readings responses are applied in the order they settle. A response
  for a window the user has since left can therefore overwrite newer
  data. Passing ``discard_stale=True`` drops responses whose generation
  predates the latest window change.
"""

from __future__ import annotations

import logging
from typing import assert_never

from aqdash.models.reading import latest_of
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
from aqdash.state.failures import failure_message
from aqdash.state.view_model import NO_ERROR, ErrorSlot, ViewModel

_logger = logging.getLogger(__name__)

READINGS_ERROR_TITLE = "Failed to retrieve read data"
STATUS_ERROR_TITLE = "Failed to retrieve device status"


def _on_timer(state: ViewModel, event: TimerFired) -> tuple[ViewModel, Effect]:
    next_state = state.model_copy(update={"last_observed_time": event.at})
    if event.channel == Channel.READINGS:
        return next_state, FetchReadings(window=state.selected_window, generation=state.readings_generation)
    return next_state, FetchStatus()


def _on_readings(state: ViewModel, event: ReadingsFetched, *, discard_stale: bool) -> ViewModel:
    if discard_stale and event.generation < state.readings_generation:
        _logger.debug(
            "Discarding stale readings response: generation=%d current=%d",
            event.generation,
            state.readings_generation,
        )
        return state

    if event.failure is not None:
        return state.model_copy(
            update={"error_slot": ErrorSlot.raised(READINGS_ERROR_TITLE, failure_message(event.failure))}
        )

    readings = event.readings or ()
    return state.model_copy(
        update={
            "all_readings": readings,
            "latest_reading": latest_of(readings),
            "error_slot": NO_ERROR,
        }
    )


def _on_status(state: ViewModel, event: StatusFetched) -> ViewModel:
    if event.failure is not None:
        return state.model_copy(
            update={"error_slot": ErrorSlot.raised(STATUS_ERROR_TITLE, failure_message(event.failure))}
        )
    return state.model_copy(update={"device_status": event.status, "error_slot": NO_ERROR})


def _on_window(state: ViewModel, event: WindowChanged) -> tuple[ViewModel, Effect | None]:
    if event.window == state.selected_window:
        return state, None
    generation = state.readings_generation + 1
    next_state = state.model_copy(update={"selected_window": event.window, "readings_generation": generation})
    return next_state, FetchReadings(window=event.window, generation=generation)


def reconcile(
    state: ViewModel,
    event: Event,
    *,
    discard_stale: bool = False,
) -> tuple[ViewModel, Effect | None]:
    """Apply *event* to *state*.

    Returns the next state (the same object when nothing changed) and the
    fetch to run, if any.
    """
    match event:
        case TimerFired():
            return _on_timer(state, event)
        case ReadingsFetched():
            return _on_readings(state, event, discard_stale=discard_stale), None
        case StatusFetched():
            return _on_status(state, event), None
        case WindowChanged():
            return _on_window(state, event)
        case HoverChanged():
            return state.model_copy(update={"hover_selection": event.selection}), None
        case _:
            assert_never(event)
