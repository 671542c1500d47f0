"""Immutable state snapshots.

State handed to subscribers is built from :class:`FrozenDict` and tuples so
that no subscriber can mutate what another subscriber is about to read.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class FrozenDict(Mapping[str, Any]):
    """Read-only mapping.

    Item assignment, deletion and attribute assignment all raise
    ``TypeError``. Compares equal to any mapping with the same items.
    """

    __slots__ = ("_data",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        object.__setattr__(self, "_data", dict(*args, **kwargs))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def __setitem__(self, key: str, value: Any) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def __delitem__(self, key: str) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


def freeze(value: Any) -> Any:
    """Return a deeply immutable copy of *value*.

    Mappings become :class:`FrozenDict`, lists and tuples become tuples,
    sets become frozensets and ``bytearray`` becomes ``bytes``, recursively.
    Already-frozen mappings are returned as-is, so freezing twice is free.

    Any other object is kept by reference. Scalars are immutable already;
    custom objects stay as mutable as their class makes them, so attribute
    state should be built from the container types above.
    """
    if isinstance(value, FrozenDict):
        return value
    if isinstance(value, Mapping):
        return FrozenDict({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(item) for item in value)
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def is_plain_object(value: Any) -> bool:
    """Return ``True`` for dict-like values (``dict``, :class:`FrozenDict`, other mappings)."""
    return isinstance(value, Mapping)
