"""Notification models.

Every state change enters the store as a :class:`Notification`. Callers may
pass plain dicts using either the camelCase wire names (``notifierName``,
``lastValue``) or the snake_case field names; they are validated once here
and the store only ever sees the model.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from statebus.exceptions import InvalidArgumentError
from statebus.freeze import is_plain_object

INIT_NOTIFIER_NAME = "@@init"
"""Notifier name of the bootstrap notification dispatched on store creation."""

_NAME_KEYS = ("notifier_name", "notifierName")


class Change(BaseModel):
    """A single attribute mutation."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    attribute: str
    value: Any = None
    last_value: Any = None


class Notification(BaseModel):
    """A state change pushed by a registered notifier."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    notifier_name: str = Field(..., strict=True, description="Registered notifier name")
    change: Change | None = Field(default=None, description="Absent on init and on silent updates")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Full attribute state of the notifier")

    @field_validator("notifier_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("notifier_name must be non-empty")
        return value

    @property
    def is_init(self) -> bool:
        return self.notifier_name == INIT_NOTIFIER_NAME


def as_notification(value: Any) -> Notification:
    """Validate *value* into a :class:`Notification`.

    Checks run in a fixed order: *value* must be a plain object, then it
    must carry a non-empty string notifier name, then the remaining fields
    must validate.

    Raises
    ------
    InvalidArgumentError
        When any of the checks fails.
    """
    if isinstance(value, Notification):
        return value
    if not is_plain_object(value):
        raise InvalidArgumentError("notification parameter is required and must be a plain object")

    name = next((value[key] for key in _NAME_KEYS if key in value), None)
    if not name or not isinstance(name, str):
        raise InvalidArgumentError(
            "notifierName property of notification parameter is required and must be a string"
        )

    try:
        return Notification.model_validate(dict(value))
    except ValidationError as exc:
        raise InvalidArgumentError(f"invalid notification for {name}: {exc}") from exc


def reshape(notification: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the ``notifierName``/``change``/``attributes`` fields of *notification*."""
    fields = (*_NAME_KEYS, "change", "attributes")
    return {key: notification[key] for key in fields if key in notification}
