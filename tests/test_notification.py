from __future__ import annotations

from typing import Any

import pytest

from statebus.exceptions import InvalidArgumentError
from statebus.notification import INIT_NOTIFIER_NAME, Change, Notification, as_notification, reshape


def test_camel_case_wire_names_are_accepted() -> None:
    notification = as_notification(
        {
            "notifierName": "search",
            "change": {"attribute": "query", "value": "cats", "lastValue": ""},
            "attributes": {"query": "cats"},
        }
    )

    assert notification.notifier_name == "search"
    assert notification.change == Change(attribute="query", value="cats", last_value="")
    assert notification.attributes == {"query": "cats"}


def test_snake_case_names_are_accepted() -> None:
    notification = as_notification({"notifier_name": "tabs"})
    assert notification.notifier_name == "tabs"
    assert notification.change is None
    assert notification.attributes == {}


def test_models_pass_through() -> None:
    notification = Notification(notifier_name="search")
    assert as_notification(notification) is notification


def test_models_are_frozen() -> None:
    notification = Notification(notifier_name="search")
    with pytest.raises(ValueError):
        notification.notifier_name = "other"  # type: ignore[misc]


def test_init_notification() -> None:
    assert Notification(notifier_name=INIT_NOTIFIER_NAME).is_init
    assert not Notification(notifier_name="search").is_init


@pytest.mark.parametrize("value", ["not an object", None, 1, ["notifierName", "x"]])
def test_non_plain_objects_rejected(value: Any) -> None:
    with pytest.raises(InvalidArgumentError, match="plain object"):
        as_notification(value)


@pytest.mark.parametrize("value", [{}, {"notifierName": ""}, {"notifierName": 3}, {"attributes": {}}])
def test_missing_notifier_name_rejected(value: Any) -> None:
    with pytest.raises(InvalidArgumentError, match="notifierName"):
        as_notification(value)


def test_malformed_fields_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        as_notification({"notifierName": "search", "change": {"value": 1}})
    with pytest.raises(InvalidArgumentError):
        as_notification({"notifierName": "search", "attributes": "nope"})


def test_reshape_keeps_notification_fields_only() -> None:
    shaped = reshape({"notifierName": "a", "change": None, "attributes": {}, "extra": 1})
    assert shaped == {"notifierName": "a", "change": None, "attributes": {}}
