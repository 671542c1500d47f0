"""Bus configuration for statebus."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from statebus.exceptions import InvalidArgumentError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BusConfig:
    """Notification bus configuration.

    Parameters
    ----------
    max_listeners : int
        Listeners per topic before the emitter warns about a possible
        leak. Many views subscribe to the same few topics, so the
        default is well above the usual emitter default of 10.
    log_notifications : bool
        Emit one INFO log line per published ``change:<name>`` topic.
    log_max_string : int
        Truncate string values longer than this in logged payloads.
    init_notifier_name : str
        Notifier name of the bootstrap notification dispatched when the
        store is created.
    """

    max_listeners: int = 100
    log_notifications: bool = True
    log_max_string: int = 512
    init_notifier_name: str = "@@init"

    def __post_init__(self) -> None:
        if self.max_listeners < 0:
            raise InvalidArgumentError("max_listeners must be >= 0")
        if not self.init_notifier_name:
            raise InvalidArgumentError("init_notifier_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> BusConfig:
        """Create configuration from environment variables.

        Reads ``STATEBUS_MAX_LISTENERS``, ``STATEBUS_LOG_NOTIFICATIONS``
        and ``STATEBUS_LOG_MAX_STRING``. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        BusConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        max_listeners_env = env.get("STATEBUS_MAX_LISTENERS")
        if max_listeners_env is not None and "max_listeners" not in overrides:
            config_kwargs["max_listeners"] = int(max_listeners_env)

        if "log_notifications" not in overrides:
            config_kwargs["log_notifications"] = _env_bool(env.get("STATEBUS_LOG_NOTIFICATIONS"), True)

        max_string_env = env.get("STATEBUS_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            config_kwargs["log_max_string"] = int(max_string_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
