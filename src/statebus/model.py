"""Model base class.

A :class:`Model` owns a set of attributes and publishes every mutation to
the bus under its own notifier name, so feature code only calls
``model.set("bar", 1234)``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from statebus.bus import NotificationBus
from statebus.freeze import freeze


class Model:
    def __init__(self, name: str, bus: NotificationBus, **attributes: Any) -> None:
        bus.register(name)
        self._name = name
        self._bus = bus
        self._attributes: dict[str, Any] = {}
        self._destroyed = False
        # Seed the store silently; subscribers only hear about later changes.
        try:
            bus.publish({"notifierName": name, "attributes": dict(attributes)})
        except Exception:
            bus.remove(name)
            raise
        self._attributes = dict(attributes)

    @property
    def name(self) -> str:
        return self._name

    @property
    def attributes(self) -> Mapping[str, Any]:
        return freeze(self._attributes)

    def get(self, attribute: str, default: Any = None) -> Any:
        return self._attributes.get(attribute, default)

    def set(self, attribute: str, value: Any) -> bool:
        """Set *attribute* and publish the change.

        Returns ``False`` (and publishes nothing) when the value is unchanged.
        """
        if attribute in self._attributes and self._attributes[attribute] == value:
            return False
        last_value = self._attributes.get(attribute)
        self._commit({**self._attributes, attribute: value}, attribute, value, last_value)
        return True

    def clear(self, attribute: str) -> bool:
        """Delete *attribute* and publish the change with ``value=None``."""
        if attribute not in self._attributes:
            return False
        attributes = dict(self._attributes)
        last_value = attributes.pop(attribute)
        self._commit(attributes, attribute, None, last_value)
        return True

    def destroy(self) -> None:
        """Remove this model's notifier from the bus."""
        if self._destroyed:
            return
        self._bus.remove(self._name)
        self._destroyed = True

    def _commit(self, attributes: dict[str, Any], attribute: str, value: Any, last_value: Any) -> None:
        """Publish *attributes* and adopt them only once the bus accepted them."""
        self._bus.publish(
            {
                "notifierName": self._name,
                "change": {"attribute": attribute, "value": value, "lastValue": last_value},
                "attributes": dict(attributes),
            }
        )
        self._attributes = attributes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, attributes={self._attributes!r})"
