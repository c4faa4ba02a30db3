from __future__ import annotations

import pytest

from aqdash.models import ZERO_READING, DeviceStatus, Reading, ReaderState, WindowDuration
from aqdash.state.events import (
    Channel,
    FetchReadings,
    FetchStatus,
    HoverChanged,
    ReadingsFetched,
    StatusFetched,
    TimerFired,
    WindowChanged,
)
from aqdash.state.failures import FailureKind, FetchFailure
from aqdash.state.reconciler import READINGS_ERROR_TITLE, STATUS_ERROR_TITLE, reconcile
from aqdash.state.view_model import ErrorSlot, ViewModel


def _reading(n: float) -> Reading:
    return Reading(time=n, epa=n, pm25=n, pm10=n)


def _server_error() -> FetchFailure:
    return FetchFailure(kind=FailureKind.BAD_STATUS, status_code=500)


def _loaded_state() -> ViewModel:
    state = ViewModel.initial(WindowDuration.HOUR)
    state, _ = reconcile(state, ReadingsFetched.success((_reading(1), _reading(2))))
    state, _ = reconcile(
        state,
        StatusFetched.success(DeviceStatus(state=ReaderState.READING)),
    )
    return state


def test_initial_state() -> None:
    state = ViewModel.initial()
    assert state.loading is True
    assert state.all_readings == ()
    assert state.latest_reading == ZERO_READING
    assert state.last_observed_time is None
    assert state.error_slot == ErrorSlot()
    assert state.hover_selection == frozenset()


# ------------------------------------------------------------------
# Timers
# ------------------------------------------------------------------


def test_readings_timer_requests_current_window() -> None:
    state = ViewModel.initial(WindowDuration.DAY)
    next_state, effect = reconcile(state, TimerFired(channel=Channel.READINGS, at=1234.5))
    assert next_state.last_observed_time == 1234.5
    assert effect == FetchReadings(window=WindowDuration.DAY, generation=0)


def test_status_timer_requests_status() -> None:
    next_state, effect = reconcile(ViewModel.initial(), TimerFired(channel=Channel.STATUS, at=7.0))
    assert next_state.last_observed_time == 7.0
    assert effect == FetchStatus()


def test_timer_does_not_touch_data_or_error() -> None:
    state, _ = reconcile(_loaded_state(), StatusFetched.failed(_server_error()))
    next_state, _ = reconcile(state, TimerFired(channel=Channel.READINGS, at=99.0))
    assert next_state.model_copy(update={"last_observed_time": state.last_observed_time}) == state


# ------------------------------------------------------------------
# Readings
# ------------------------------------------------------------------


def test_readings_success_scenario() -> None:
    state, effect = reconcile(ViewModel.initial(), ReadingsFetched.success((_reading(1), _reading(2))))
    assert effect is None
    assert state.all_readings == (_reading(1), _reading(2))
    assert state.latest_reading == _reading(2)
    assert state.error_slot.active is False


def test_readings_replace_whole_series() -> None:
    state, _ = reconcile(_loaded_state(), ReadingsFetched.success((_reading(7),)))
    assert state.all_readings == (_reading(7),)
    assert state.latest_reading == _reading(7)


def test_empty_readings_reset_latest_to_zero() -> None:
    state, _ = reconcile(_loaded_state(), ReadingsFetched.success(()))
    assert state.all_readings == ()
    assert state.latest_reading == ZERO_READING


@pytest.mark.parametrize("count", [0, 1, 2, 5])
def test_latest_reading_is_last_element(count: int) -> None:
    series = tuple(_reading(i) for i in range(1, count + 1))
    state, _ = reconcile(ViewModel.initial(), ReadingsFetched.success(series))
    assert state.latest_reading == (series[-1] if series else ZERO_READING)


def test_readings_failure_keeps_data_and_raises_error() -> None:
    before = _loaded_state()
    failure = FetchFailure(kind=FailureKind.NETWORK, url="http://x/api/sensor_data")
    after, effect = reconcile(before, ReadingsFetched.failed(failure))
    assert effect is None
    assert after.all_readings == before.all_readings
    assert after.latest_reading == before.latest_reading
    assert after.device_status == before.device_status
    assert after.error_slot == ErrorSlot(
        active=True,
        title=READINGS_ERROR_TITLE,
        message="Unable to reach the server, check your network connection",
    )


# ------------------------------------------------------------------
# Status
# ------------------------------------------------------------------


def test_status_success_replaces_status() -> None:
    status = DeviceStatus(state=ReaderState.FAILING, last_exception="sensor timeout")
    state, effect = reconcile(ViewModel.initial(), StatusFetched.success(status))
    assert effect is None
    assert state.device_status == status


def test_status_500_scenario() -> None:
    state, _ = reconcile(ViewModel.initial(), StatusFetched.failed(_server_error()))
    assert state.error_slot == ErrorSlot(
        active=True,
        title="Failed to retrieve device status",
        message="The server had a problem, try again later",
    )
    assert STATUS_ERROR_TITLE == "Failed to retrieve device status"


def test_status_failure_keeps_data() -> None:
    before = _loaded_state()
    after, _ = reconcile(before, StatusFetched.failed(_server_error()))
    assert after.device_status == before.device_status
    assert after.all_readings == before.all_readings
    assert after.latest_reading == before.latest_reading


def test_decode_failure_message_is_diagnostic() -> None:
    failure = FetchFailure(kind=FailureKind.DECODE, detail="reader_status: Input should be 'IDLE'")
    state, _ = reconcile(ViewModel.initial(), StatusFetched.failed(failure))
    assert state.error_slot.message == "reader_status: Input should be 'IDLE'"


# ------------------------------------------------------------------
# Shared error slot
# ------------------------------------------------------------------


def test_readings_success_clears_status_error() -> None:
    # One banner for both channels: readings success clears a status error.
    state, _ = reconcile(_loaded_state(), StatusFetched.failed(_server_error()))
    assert state.error_slot.active
    state, _ = reconcile(state, ReadingsFetched.success((_reading(3),)))
    assert state.error_slot == ErrorSlot()


def test_status_success_clears_readings_error() -> None:
    state, _ = reconcile(_loaded_state(), ReadingsFetched.failed(_server_error()))
    assert state.error_slot.title == READINGS_ERROR_TITLE
    state, _ = reconcile(state, StatusFetched.success(DeviceStatus(state=ReaderState.IDLE)))
    assert state.error_slot.active is False


def test_latest_failure_overwrites_error() -> None:
    state, _ = reconcile(ViewModel.initial(), ReadingsFetched.failed(_server_error()))
    timeout = FetchFailure(kind=FailureKind.TIMEOUT)
    state, _ = reconcile(state, StatusFetched.failed(timeout))
    assert state.error_slot.title == STATUS_ERROR_TITLE
    assert state.error_slot.message == "Unable to reach the server, try again"


def test_loading_never_cleared() -> None:
    state = _loaded_state()
    assert state.loading is True


# ------------------------------------------------------------------
# Window / hover
# ------------------------------------------------------------------


def test_window_change_requests_new_window() -> None:
    state = ViewModel.initial(WindowDuration.HOUR)
    next_state, effect = reconcile(state, WindowChanged(window=WindowDuration.WEEK))
    assert next_state.selected_window == WindowDuration.WEEK
    assert next_state.readings_generation == 1
    assert effect == FetchReadings(window=WindowDuration.WEEK, generation=1)


def test_same_window_is_noop() -> None:
    state = _loaded_state()
    next_state, effect = reconcile(state, WindowChanged(window=state.selected_window))
    assert next_state is state
    assert effect is None


def test_window_change_keeps_old_data_until_fetch_settles() -> None:
    state = _loaded_state()
    next_state, _ = reconcile(state, WindowChanged(window=WindowDuration.DAY))
    assert next_state.all_readings == state.all_readings


def test_hover_replaces_selection_only() -> None:
    state = _loaded_state()
    selection = frozenset({_reading(1)})
    next_state, effect = reconcile(state, HoverChanged(selection=selection))
    assert effect is None
    assert next_state.hover_selection == selection
    assert next_state.model_copy(update={"hover_selection": state.hover_selection}) == state

    cleared, _ = reconcile(next_state, HoverChanged(selection=frozenset()))
    assert cleared.hover_selection == frozenset()


# ------------------------------------------------------------------
# Out-of-order responses
# ------------------------------------------------------------------


def _race(*, discard_stale: bool) -> ViewModel:
    hour_data = (_reading(10),)
    day_data = (_reading(20), _reading(21))

    state = ViewModel.initial(WindowDuration.HOUR)
    state, hour_fetch = reconcile(state, TimerFired(channel=Channel.READINGS, at=1.0), discard_stale=discard_stale)
    state, day_fetch = reconcile(state, WindowChanged(window=WindowDuration.DAY), discard_stale=discard_stale)
    assert isinstance(hour_fetch, FetchReadings)
    assert isinstance(day_fetch, FetchReadings)

    # Day response settles first, then the stale Hour response.
    state, _ = reconcile(
        state,
        ReadingsFetched.success(day_data, generation=day_fetch.generation),
        discard_stale=discard_stale,
    )
    state, _ = reconcile(
        state,
        ReadingsFetched.success(hour_data, generation=hour_fetch.generation),
        discard_stale=discard_stale,
    )
    return state


def test_last_settled_response_wins_by_default() -> None:
    state = _race(discard_stale=False)
    assert state.selected_window == WindowDuration.DAY
    assert state.all_readings == (_reading(10),)


def test_generation_guard_keeps_newer_window_data() -> None:
    state = _race(discard_stale=True)
    assert state.selected_window == WindowDuration.DAY
    assert state.all_readings == (_reading(20), _reading(21))
    assert state.latest_reading == _reading(21)


def test_generation_guard_drops_stale_failures_too() -> None:
    state = ViewModel.initial(WindowDuration.HOUR)
    state, _ = reconcile(state, WindowChanged(window=WindowDuration.DAY), discard_stale=True)
    after, _ = reconcile(state, ReadingsFetched.failed(_server_error(), generation=0), discard_stale=True)
    assert after is state
    assert after.error_slot.active is False


def test_events_reject_ambiguous_results() -> None:
    with pytest.raises(ValueError):
        ReadingsFetched()
    with pytest.raises(ValueError):
        StatusFetched(status=DeviceStatus(state=ReaderState.IDLE), failure=_server_error())
