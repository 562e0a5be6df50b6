#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_entry.py
------------

The immutable key/value pair handed out by every map, plus the structural
helpers the maps use to hash, compare and print keys.

Keys and values may be unhashable containers (lists, dicts, sets); those are
hashed through a recursive frozen copy so ``[1, 2]`` can be used as a key of
the hash maps exactly like ``(1, 2)``.

Typical usage
~~~~~~~~~~~~~
>>> from map_entry import Entry
>>> e = Entry("a", [1, 2])
>>> e.key, e.value
('a', [1, 2])
>>> e == Entry("a", [1, 2])
True
>>> hash(e) == hash(Entry("a", [1, 2]))
True
>>> k, v = e
>>> str(e)
'a: [1, 2]'
"""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")


# ----------------------------------------------------------------------
#  Structural helpers
# ----------------------------------------------------------------------
def _frozen(obj: Any) -> Any:
    """
    Return a hashable stand-in for *obj*, recursing into containers.

    Containers are tagged by the abstract type ``==`` compares on, not by
    their concrete class: a ``set`` equals a ``frozenset`` and a list subclass
    equals a plain list, so each pair must freeze to the same form.
    """
    if isinstance(obj, list):
        return ("list", tuple(_frozen(item) for item in obj))
    if isinstance(obj, tuple):
        return ("tuple", tuple(_frozen(item) for item in obj))
    if isinstance(obj, dict):
        return (
            "dict",
            frozenset((_frozen(k), _frozen(v)) for k, v in obj.items()),
        )
    if isinstance(obj, (set, frozenset)):
        return ("set", frozenset(_frozen(item) for item in obj))
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    return obj


def deep_hash(obj: Any) -> int:
    """
    Hash *obj* by structure.

    Built-in containers (lists, tuples, dicts, sets, bytes) are always hashed
    through their frozen form, hashable or not; anything else hashes as
    usual. ``deep_equals(a, b)`` implies ``deep_hash(a) == deep_hash(b)`` for
    the built-in container types and their subclasses.

    Raises ``TypeError`` if *obj* is, or contains, an object that defines no
    hash of its own.
    """
    return hash(_frozen(obj))


def deep_equals(left: Any, right: Any) -> bool:
    """Structural equality; ``==`` already descends into built-in containers."""
    return left is right or bool(left == right)


def stringify(obj: Any) -> str:
    """Readable form of a key or value for messages and ``str(map)``."""
    if isinstance(obj, str):
        return obj
    return repr(obj)


# ----------------------------------------------------------------------
#  Entry
# ----------------------------------------------------------------------
class Entry(Generic[K, V]):
    """
    A single immutable key/value pair.

    Entries are created fresh on every iteration step or query, so holding on
    to one never pins the map's internal state.
    """

    __slots__ = ("_key", "_value")

    def __init__(self, key: K, value: V) -> None:
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_value", value)

    @property
    def key(self) -> K:
        return self._key

    @property
    def value(self) -> V:
        return self._value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Any]:
        """Allow ``key, value = entry``."""
        yield self._key
        yield self._value

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Entry):
            return NotImplemented
        return deep_equals(self._key, other._key) and deep_equals(
            self._value, other._value
        )

    def __hash__(self) -> int:
        return hash((deep_hash(self._key), deep_hash(self._value)))

    def __str__(self) -> str:
        return f"{stringify(self._key)}: {stringify(self._value)}"

    def __repr__(self) -> str:
        return f"Entry(key={self._key!r}, value={self._value!r})"
