"""Notification bus.

This is how models communicate with other models, views and pages. Each
producer registers a notifier name, publishes its changes through
:meth:`NotificationBus.publish`, and anyone interested listens on
``change:<name>`` via :attr:`NotificationBus.subscribe`::

    bus = NotificationBus()
    bus.register("search")
    bus.subscribe.on("change:search", on_search)
    bus.publish({
        "notifierName": "search",
        "change": {"attribute": "query", "value": "cats", "lastValue": ""},
        "attributes": {"query": "cats"},
    })

The first listener argument is the search notifier's frozen state,
including a ``change`` entry describing the mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

from statebus.config import BusConfig
from statebus.emitter import Emitter
from statebus.exceptions import DuplicateRegistrationError, InvalidArgumentError
from statebus.freeze import is_plain_object
from statebus.notification import Notification, reshape
from statebus.notifiers import NotifierReducer, NotifierRegistry
from statebus.publisher import Publisher
from statebus.store import Store

_logger = logging.getLogger(__name__)


class NotificationBus:
    """Registration, publication and subscription entry point.

    The store behind the bus is built by the first :meth:`register` call;
    later registrations and removals swap its combined reducer.
    """

    def __init__(self, config: BusConfig | None = None) -> None:
        self._config = config or BusConfig()
        self._registry = NotifierRegistry()
        self._emitter = Emitter(max_listeners=self._config.max_listeners)
        self._publisher = Publisher(
            self._emitter,
            log_notifications=self._config.log_notifications,
            log_max_string=self._config.log_max_string,
        )
        self._store: Store | None = None

    @property
    def config(self) -> BusConfig:
        return self._config

    @property
    def registry(self) -> NotifierRegistry:
        return self._registry

    @property
    def store(self) -> Store | None:
        return self._store

    @property
    def subscribe(self) -> Emitter:
        """The emitter itself; attach listeners with ``on("change:<name>", fn)``."""
        return self._emitter

    def register(self, notifier_name: str, reducer: NotifierReducer | None = None) -> None:
        """Register a unique notifier (usually a model).

        Raises
        ------
        InvalidArgumentError
            *notifier_name* is not a non-empty string.
        DuplicateRegistrationError
            *notifier_name* is already registered.
        """
        if not isinstance(notifier_name, str):
            raise InvalidArgumentError("notifier_name argument must be a string")
        if notifier_name in self._registry:
            raise DuplicateRegistrationError(notifier_name)

        self._registry.add(notifier_name, reducer)
        combined = self._registry.combine()

        if self._store is None:
            self._store = Store(combined, init_notifier_name=self._config.init_notifier_name)
            self._store.subscribe(self._publisher.publish)
        else:
            self._store.replace_notifier(combined)
        _logger.debug("Registered notifier=%s (total=%d)", notifier_name, len(self._registry))

    def publish(self, notification: Notification | Mapping[str, Any]) -> None:
        """Dispatch a notification from a registered notifier.

        *notification* carries ``notifierName``, ``change``
        (``{attribute, value, lastValue}``) and ``attributes``; other keys
        are dropped.
        """
        if self._store is None:
            raise InvalidArgumentError("no notifiers registered; call register() before publish()")
        if isinstance(notification, Notification):
            self._store.dispatch(notification)
            return
        if not is_plain_object(notification):
            raise InvalidArgumentError("notification parameter is required and must be a plain object")
        self._store.dispatch(reshape(notification))

    def remove(self, notifier_name: str) -> None:
        """Remove a notifier. Unknown names are ignored."""
        if not self._registry.remove(notifier_name):
            return
        if self._store is not None:
            self._store.replace_notifier(self._registry.combine())
        _logger.debug("Removed notifier=%s (total=%d)", notifier_name, len(self._registry))

    def close(self) -> None:
        """Drop the store, every notifier and every listener."""
        self._store = None
        self._registry.clear()
        self._emitter.remove_all_listeners()
        _logger.debug("Notification bus closed")

    def __enter__(self) -> NotificationBus:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
