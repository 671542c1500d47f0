from __future__ import annotations

import pytest

from statebus.freeze import FrozenDict, freeze, is_plain_object


class TestFreeze:
    def test_nested_containers_become_immutable(self) -> None:
        frozen = freeze({"a": {"b": [1, {"c": 2}]}, "tags": {"x"}})

        assert isinstance(frozen, FrozenDict)
        assert isinstance(frozen["a"], FrozenDict)
        assert frozen["a"]["b"] == (1, {"c": 2})
        assert isinstance(frozen["a"]["b"][1], FrozenDict)
        assert frozen["tags"] == frozenset({"x"})

    def test_writes_are_rejected(self) -> None:
        frozen = freeze({"a": {"b": 1}})

        with pytest.raises(TypeError):
            frozen["new"] = 1
        with pytest.raises(TypeError):
            del frozen["a"]
        with pytest.raises(TypeError):
            frozen["a"]["b"] = 2
        with pytest.raises(TypeError):
            frozen.anything = 1  # type: ignore[attr-defined]
        assert frozen == {"a": {"b": 1}}

    def test_is_idempotent(self) -> None:
        frozen = freeze({"a": 1})
        assert freeze(frozen) is frozen

    def test_source_is_not_aliased(self) -> None:
        source = {"a": {"b": 1}}
        frozen = freeze(source)
        source["a"]["b"] = 2
        assert frozen["a"]["b"] == 1

    def test_bytearray_becomes_bytes(self) -> None:
        frozen = freeze({"a": {"buf": bytearray(b"x")}})

        assert frozen["a"]["buf"] == b"x"
        assert isinstance(frozen["a"]["buf"], bytes)
        with pytest.raises(AttributeError):
            frozen["a"]["buf"].append(1)

    def test_scalars_pass_through(self) -> None:
        assert freeze(1) == 1
        assert freeze("s") == "s"
        assert freeze(None) is None


class TestFrozenDict:
    def test_mapping_behaviour(self) -> None:
        frozen = FrozenDict(a=1, b=2)
        assert len(frozen) == 2
        assert list(frozen) == ["a", "b"]
        assert frozen.get("c") is None
        assert dict(frozen) == {"a": 1, "b": 2}
        assert repr(frozen) == "FrozenDict({'a': 1, 'b': 2})"

    def test_equality_with_plain_dicts(self) -> None:
        assert FrozenDict({"a": FrozenDict({"b": 1})}) == {"a": {"b": 1}}
        assert {"a": {"b": 1}} == FrozenDict({"a": FrozenDict({"b": 1})})
        assert FrozenDict() != {"a": 1}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({}, True),
        (FrozenDict(), True),
        ("not an object", False),
        ([("a", 1)], False),
        (None, False),
        (42, False),
    ],
)
def test_is_plain_object(value: object, expected: bool) -> None:
    assert is_plain_object(value) is expected
