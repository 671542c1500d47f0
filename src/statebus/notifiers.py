"""Notifier registry.

Holds the registered notifier names, in registration order, together with
one reducer per notifier, and combines them into the single reducer the
store runs on every dispatch.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from statebus.exceptions import DuplicateRegistrationError, InvalidArgumentError
from statebus.notification import Notification

NotifierState = Mapping[str, Any]
NotifierReducer = Callable[[NotifierState | None, Notification], NotifierState]
Reducer = Callable[[Mapping[str, NotifierState], Notification], dict[str, NotifierState]]


def attribute_reducer(notifier_name: str) -> NotifierReducer:
    """Build the default reducer for *notifier_name*.

    A notification from *notifier_name* replaces its state with the
    notification's attributes plus the ``change``. Any other notification
    keeps the previous attributes but drops ``change``, so the notifier is
    not re-broadcast on someone else's dispatch.
    """

    def reduce(previous: NotifierState | None, notification: Notification) -> NotifierState:
        if notification.notifier_name != notifier_name:
            if not previous:
                return {}
            return {key: value for key, value in previous.items() if key != "change"}

        state: dict[str, Any] = dict(notification.attributes)
        if notification.change is not None:
            state["change"] = notification.change.model_dump(by_alias=True)
        else:
            state.pop("change", None)
        return state

    reduce.__name__ = f"reduce_{notifier_name}"
    return reduce


class NotifierRegistry:
    """Ordered set of notifier names and their reducers."""

    def __init__(self) -> None:
        self._reducers: dict[str, NotifierReducer] = {}

    @property
    def registered(self) -> Mapping[str, bool]:
        return MappingProxyType(dict.fromkeys(self._reducers, True))

    def __contains__(self, notifier_name: object) -> bool:
        return notifier_name in self._reducers

    def __len__(self) -> int:
        return len(self._reducers)

    def add(self, notifier_name: str, reducer: NotifierReducer | None = None) -> None:
        if not isinstance(notifier_name, str) or not notifier_name:
            raise InvalidArgumentError("notifier_name argument must be a non-empty string")
        if notifier_name in self._reducers:
            raise DuplicateRegistrationError(notifier_name)
        if reducer is not None and not callable(reducer):
            raise InvalidArgumentError("reducer must be a function")
        self._reducers[notifier_name] = reducer or attribute_reducer(notifier_name)

    def remove(self, notifier_name: str) -> bool:
        """Remove *notifier_name*; return ``True`` if membership changed."""
        return self._reducers.pop(notifier_name, None) is not None

    def clear(self) -> None:
        self._reducers.clear()

    def combine(self) -> Reducer:
        """Combine the current reducers into one.

        The combined reducer is bound to the membership at call time:
        later :meth:`add`/:meth:`remove` calls need a new :meth:`combine`.
        Its output is keyed by notifier name in registration order, and
        names no longer registered drop out of the state.
        """
        reducers = dict(self._reducers)

        def combined(state: Mapping[str, NotifierState], notification: Notification) -> dict[str, NotifierState]:
            return {name: reducer(state.get(name), notification) for name, reducer in reducers.items()}

        return combined
