from __future__ import annotations

import logging
from typing import Any

import pytest

from statebus.emitter import DEFAULT_MAX_LISTENERS, Emitter
from statebus.exceptions import InvalidArgumentError


def test_emit_calls_every_listener_in_order() -> None:
    emitter = Emitter()
    calls: list[tuple[str, Any]] = []
    emitter.on("change:a", lambda payload: calls.append(("first", payload)))
    emitter.on("change:a", lambda payload: calls.append(("second", payload)))

    assert emitter.emit("change:a", 1) is True
    assert calls == [("first", 1), ("second", 1)]


def test_emit_without_listeners_is_noop() -> None:
    assert Emitter().emit("change:nobody", {"x": 1}) is False


def test_on_as_decorator() -> None:
    emitter = Emitter()
    seen: list[Any] = []

    @emitter.on("change:a")
    def handler(payload: Any) -> None:
        seen.append(payload)

    emitter.emit("change:a", "p")
    assert seen == ["p"]
    assert emitter.listeners("change:a") == [handler]


def test_once_fires_a_single_time() -> None:
    emitter = Emitter()
    seen: list[Any] = []
    emitter.once("change:a", seen.append)

    emitter.emit("change:a", 1)
    emitter.emit("change:a", 2)

    assert seen == [1]
    assert emitter.listener_count("change:a") == 0


def test_off_removes_listener() -> None:
    emitter = Emitter()
    seen: list[Any] = []
    emitter.on("change:a", seen.append)

    assert emitter.off("change:a", seen.append) is True
    assert emitter.off("change:a", seen.append) is False
    emitter.emit("change:a", 1)

    assert seen == []
    assert emitter.topics() == []


def test_remove_all_listeners() -> None:
    emitter = Emitter()
    emitter.on("change:a", lambda payload: None)
    emitter.on("change:b", lambda payload: None)

    emitter.remove_all_listeners("change:a")
    assert emitter.topics() == ["change:b"]

    emitter.remove_all_listeners()
    assert emitter.topics() == []


def test_listener_cap_warns_once_but_still_registers(caplog: pytest.LogCaptureFixture) -> None:
    emitter = Emitter(max_listeners=2)

    with caplog.at_level(logging.WARNING, logger="statebus.emitter"):
        for _ in range(4):
            emitter.on("change:a", lambda payload: None)

    assert emitter.listener_count("change:a") == 4
    assert len([r for r in caplog.records if "Possible listener leak" in r.getMessage()]) == 1


def test_listener_cap_zero_disables_warning(caplog: pytest.LogCaptureFixture) -> None:
    emitter = Emitter(max_listeners=0)
    with caplog.at_level(logging.WARNING, logger="statebus.emitter"):
        for _ in range(DEFAULT_MAX_LISTENERS + 5):
            emitter.on("change:a", lambda payload: None)
    assert caplog.records == []


@pytest.mark.parametrize("count", [-1, 1.5, True])
def test_set_max_listeners_validates(count: Any) -> None:
    with pytest.raises(InvalidArgumentError):
        Emitter().set_max_listeners(count)


def test_on_validates_arguments() -> None:
    emitter = Emitter()
    with pytest.raises(InvalidArgumentError):
        emitter.on("", lambda payload: None)
    with pytest.raises(InvalidArgumentError):
        emitter.on("change:a", "nope")  # type: ignore[arg-type]


def test_listener_exception_propagates() -> None:
    emitter = Emitter()

    def boom(payload: Any) -> None:
        raise RuntimeError("listener failed")

    emitter.on("change:a", boom)
    with pytest.raises(RuntimeError):
        emitter.emit("change:a", None)
