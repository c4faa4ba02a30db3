"""Owner of the dashboard view model.

This is the only component allowed to replace the view model. Everyone
else reads :attr:`ViewModelStore.snapshot` or submits events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from aqdash.state.events import Effect, Event
from aqdash.state.reconciler import reconcile
from aqdash.state.view_model import ViewModel

_logger = logging.getLogger(__name__)

Observer = Callable[[ViewModel], None]


class ViewModelStore:
    """In-memory store for the current view model.

    Deterministic: given the same sequence of events it produces the same
    snapshots. ``apply`` is synchronous, so on a single event loop no two
    events are ever reconciled concurrently.
    """

    def __init__(
        self,
        initial: ViewModel | None = None,
        *,
        discard_stale: bool = False,
    ) -> None:
        self._state = initial if initial is not None else ViewModel.initial()
        self._discard_stale = discard_stale
        self._observers: list[Observer] = []

    @property
    def snapshot(self) -> ViewModel:
        """Current view model (immutable)."""
        return self._state

    def apply(self, event: Event) -> Effect | None:
        """Reconcile *event* and return the effect the orchestrator must run."""
        _logger.debug("Applying %s", event.type)
        next_state, effect = reconcile(self._state, event, discard_stale=self._discard_stale)
        if next_state is not self._state:
            self._state = next_state
            self._notify()
        if effect is not None:
            _logger.debug("Emitting %r", effect)
        return effect

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call *observer* with every new snapshot. Returns an unsubscribe callable."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self) -> None:
        state = self._state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                _logger.exception("View-model observer %r failed", observer)
