"""Multi-listener, named-topic event emitter."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from statebus.exceptions import InvalidArgumentError

_logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

DEFAULT_MAX_LISTENERS = 10


@dataclass(frozen=True)
class _Registration:
    listener: Listener
    once: bool = False


class Emitter:
    """Synchronous topic emitter.

    Listeners run in registration order on the caller's thread. Exceeding
    ``max_listeners`` on one topic only logs a warning; ``0`` disables the
    check.
    """

    def __init__(self, *, max_listeners: int = DEFAULT_MAX_LISTENERS) -> None:
        self._topics: dict[str, list[_Registration]] = {}
        self._max_listeners = 0
        self._warned: set[str] = set()
        self.set_max_listeners(max_listeners)

    @property
    def max_listeners(self) -> int:
        return self._max_listeners

    def set_max_listeners(self, count: int) -> None:
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise InvalidArgumentError("max_listeners must be a non-negative integer")
        self._max_listeners = count
        self._warned.clear()

    def _add(self, topic: str, listener: Listener, *, once: bool) -> Listener:
        if not isinstance(topic, str) or not topic:
            raise InvalidArgumentError("topic must be a non-empty string")
        if not callable(listener):
            raise InvalidArgumentError("listener must be a function")
        registrations = self._topics.setdefault(topic, [])
        registrations.append(_Registration(listener, once))

        count = len(registrations)
        if self._max_listeners and count > self._max_listeners and topic not in self._warned:
            self._warned.add(topic)
            _logger.warning(
                "Possible listener leak: %d listeners on topic=%s (max_listeners=%d)",
                count,
                topic,
                self._max_listeners,
            )
        return listener

    def on(self, topic: str, listener: Listener | None = None) -> Any:
        """Add *listener* for *topic*.

        Without *listener*, returns a decorator::

            @bus.subscribe.on("change:search")
            def _on_search(payload): ...
        """
        if listener is None:
            return lambda fn: self._add(topic, fn, once=False)
        return self._add(topic, listener, once=False)

    add_listener = on

    def once(self, topic: str, listener: Listener) -> Listener:
        """Add *listener* for the next emission on *topic* only."""
        return self._add(topic, listener, once=True)

    def off(self, topic: str, listener: Listener) -> bool:
        """Remove the first registration of *listener* on *topic*."""
        registrations = self._topics.get(topic)
        if not registrations:
            return False
        for index, registration in enumerate(registrations):
            if registration.listener == listener:
                del registrations[index]
                if not registrations:
                    del self._topics[topic]
                    self._warned.discard(topic)
                return True
        return False

    remove_listener = off

    def remove_all_listeners(self, topic: str | None = None) -> None:
        if topic is None:
            self._topics.clear()
            self._warned.clear()
            return
        self._topics.pop(topic, None)
        self._warned.discard(topic)

    def emit(self, topic: str, *args: Any) -> bool:
        """Call every listener of *topic* with *args*.

        Returns ``False`` when the topic had no listeners. Listener
        exceptions propagate to the caller.
        """
        registrations = self._topics.get(topic)
        if not registrations:
            return False
        for registration in list(registrations):
            if registration.once:
                self._discard(topic, registration)
            registration.listener(*args)
        return True

    def _discard(self, topic: str, registration: _Registration) -> None:
        registrations = self._topics.get(topic)
        if registrations is None:
            return
        for index, candidate in enumerate(registrations):
            if candidate is registration:
                del registrations[index]
                break
        if not registrations:
            self._topics.pop(topic, None)

    def listeners(self, topic: str) -> list[Listener]:
        return [registration.listener for registration in self._topics.get(topic, ())]

    def listener_count(self, topic: str) -> int:
        return len(self._topics.get(topic, ()))

    def topics(self) -> list[str]:
        return list(self._topics)
