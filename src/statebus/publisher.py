"""Publication layer.

Turns each new store state into immutable, per-notifier topic events.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from statebus._redact import redact_for_log
from statebus.emitter import Emitter
from statebus.exceptions import InvalidArgumentError
from statebus.freeze import FrozenDict, freeze

_logger = logging.getLogger(__name__)

TOPIC_PREFIX = "change:"


def topic_for(notifier_name: str) -> str:
    return f"{TOPIC_PREFIX}{notifier_name}"


def _has_change(payload: Any) -> bool:
    return isinstance(payload, Mapping) and bool(payload.get("change"))


class Publisher:
    """Freeze a state snapshot and emit ``change:<name>`` for changed notifiers.

    Only notifiers whose state carries a non-empty ``change`` are emitted;
    the rest of the snapshot is bookkeeping and stays silent. Emission
    follows the snapshot's key order, which the combined reducer sets to
    registration order.
    """

    def __init__(
        self,
        emitter: Emitter,
        *,
        log_notifications: bool = True,
        log_max_string: int = 512,
    ) -> None:
        self._emitter = emitter
        self._log_notifications = log_notifications
        self._log_max_string = log_max_string

    @property
    def emitter(self) -> Emitter:
        return self._emitter

    def publish(self, state: Mapping[str, Any]) -> FrozenDict:
        if not isinstance(state, Mapping):
            raise InvalidArgumentError("state must be a mapping of notifier name to attributes")
        frozen: FrozenDict = freeze(state)

        for key, payload in frozen.items():
            if not payload or not _has_change(payload):
                continue
            topic = topic_for(key)
            if self._log_notifications and _logger.isEnabledFor(logging.INFO):
                _logger.info(
                    "STORE NOTIFICATION %s %s",
                    topic,
                    redact_for_log(payload, max_string=self._log_max_string),
                )
            self._emitter.emit(topic, payload)
        return frozen

    __call__ = publish
