"""Single-writer state store.

This is the only component allowed to replace notifier state. Every
transition goes through :meth:`Store.dispatch`, one at a time.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from statebus.exceptions import InvalidArgumentError, ReentrancyViolationError
from statebus.freeze import FrozenDict, freeze
from statebus.notification import INIT_NOTIFIER_NAME, Notification, as_notification
from statebus.notifiers import Reducer

_logger = logging.getLogger(__name__)

StateListener = Callable[[FrozenDict], Any]


class DispatchStatus(StrEnum):
    IDLE = "idle"
    DISPATCHING = "dispatching"


class Store:
    """Holds the current state, the combined reducer and one listener.

    Given the same sequence of notifications and reducers, the store
    produces the same snapshots. Every snapshot is frozen before it is
    stored or handed to the listener.
    """

    def __init__(self, notifier: Reducer, *, init_notifier_name: str = INIT_NOTIFIER_NAME) -> None:
        if not callable(notifier):
            raise InvalidArgumentError("notifier must be a function")

        self._notifier: Reducer = notifier
        self._state: FrozenDict = FrozenDict()
        self._listener: StateListener | None = None
        self._status = DispatchStatus.IDLE
        # Only guards the IDLE -> DISPATCHING transition.
        self._guard = threading.Lock()

        self.dispatch(Notification(notifier_name=init_notifier_name))
        _logger.debug("Store created with initial state keys=%s", list(self._state))

    @property
    def state(self) -> FrozenDict:
        return self._state

    @property
    def status(self) -> DispatchStatus:
        return self._status

    @property
    def notifier(self) -> Reducer:
        return self._notifier

    def dispatch(self, notification: Notification | Mapping[str, Any]) -> Notification | Mapping[str, Any]:
        """Apply *notification* through the reducer and notify the listener.

        Returns *notification* unchanged.

        Raises
        ------
        InvalidArgumentError
            *notification* is not a plain object or lacks a notifier name.
        ReentrancyViolationError
            Called while another dispatch is in progress.
        """
        checked = as_notification(notification)

        with self._guard:
            if self._status is DispatchStatus.DISPATCHING:
                raise ReentrancyViolationError("subscribers may not generate notifications")
            self._status = DispatchStatus.DISPATCHING

        try:
            next_state = self._notifier(self._state, checked)
            if not isinstance(next_state, Mapping):
                raise InvalidArgumentError("notifier must return a mapping of notifier state")
            self._state = freeze(next_state)
            if self._listener is not None:
                self._listener(self._state)
        finally:
            self._status = DispatchStatus.IDLE

        return notification

    def subscribe(self, listener: StateListener) -> None:
        """Set the single state listener, replacing any previous one."""
        if not callable(listener):
            raise InvalidArgumentError("listener must be a function")
        self._listener = listener

    def replace_notifier(self, next_notifier: Reducer) -> None:
        """Swap the reducer used by future dispatches. Does not dispatch."""
        if not callable(next_notifier):
            raise InvalidArgumentError("new notifier must be a function")
        self._notifier = next_notifier
        _logger.debug("Store notifier replaced")
