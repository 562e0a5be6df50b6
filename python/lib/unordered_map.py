#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
unordered_map.py
----------------

A tiny array-backed map with no ordering requirement on its keys.

Keys and values sit in two parallel lists; lookup is a linear scan using
structural equality, so any key works, hashable or not. Pairs stay in
insertion order (a delete closes the gap by shifting left).

It is meant for a handful of entries, which is exactly what a bucket of
:class:`chaining_hash_map.ChainingHashMap` holds.

>>> from unordered_map import UnorderedMap
>>> m = UnorderedMap()
>>> m.put([1, 2], "list key")
True
>>> m.get([1, 2])
'list key'
>>> m.delete([1, 2])
True
>>> len(m)
0
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from map_contract import (
    MISSING,
    Map,
    MapView,
    key_not_found,
    require_not_none,
    require_positive_capacity,
)
from map_entry import Entry, deep_equals

K = TypeVar("K")
V = TypeVar("V")

INIT_CAPACITY = 4

logger = logging.getLogger(__name__)


class UnorderedMap(Map[K, V]):
    """
    Unordered map over parallel ``keys`` / ``values`` lists.

    Parameters
    ----------
    capacity : int, default ``INIT_CAPACITY``
        Initial length of the backing lists. The lists double when full and
        halve when only a quarter is in use, never dropping below *capacity*.
    """

    __slots__ = ("_keys", "_values", "_length", "_min_capacity")

    def __init__(self, capacity: int = INIT_CAPACITY) -> None:
        require_positive_capacity(capacity)
        self._keys: List[Optional[K]] = [None] * capacity
        self._values: List[Optional[V]] = [None] * capacity
        self._length: int = 0
        self._min_capacity: int = capacity

    def __repr__(self) -> str:
        return f"UnorderedMap({str(self)})"

    # ------------------------------------------------------------------
    #   Basic operations
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self._length

    def clear(self) -> None:
        self._keys = [None] * self._min_capacity
        self._values = [None] * self._min_capacity
        self._length = 0

    def contains(self, key: K) -> bool:
        return self._find(key) >= 0

    # ------------------------------------------------------------------
    #   Map operations
    # ------------------------------------------------------------------
    def get(self, key: K, fallback: Any = MISSING) -> V:
        i = self._find(key)
        if i >= 0:
            return self._values[i]  # type: ignore[return-value]
        if fallback is MISSING:
            raise key_not_found(key)
        return fallback

    def put(self, key: K, value: V) -> bool:
        i = self._find(key)
        if i >= 0:
            self._values[i] = value
            return False

        if self._length == len(self._keys):
            self._resize(2 * len(self._keys))
        self._keys[self._length] = key
        self._values[self._length] = value
        self._length += 1
        return True

    def delete(self, key: K) -> bool:
        i = self._find(key)
        if i < 0:
            return False

        # Close the gap, then clear the now unused last slot.
        last = self._length - 1
        self._keys[i:last] = self._keys[i + 1 : last + 1]
        self._values[i:last] = self._values[i + 1 : last + 1]
        self._keys[last] = None
        self._values[last] = None
        self._length -= 1

        if self._length == len(self._keys) // 4:
            self._resize(len(self._keys) // 2)
        return True

    # ------------------------------------------------------------------
    #   Duplication
    # ------------------------------------------------------------------
    def copy(self) -> "UnorderedMap[K, V]":
        cp: UnorderedMap[K, V] = UnorderedMap(self._min_capacity)
        cp._keys = list(self._keys)
        cp._values = list(self._values)
        cp._length = self._length
        return cp

    def deepcopy(
        self, key_copy_fn: Callable[[K], K], value_copy_fn: Callable[[V], V]
    ) -> "UnorderedMap[K, V]":
        require_not_none(key_copy_fn, "key_copy_fn")
        require_not_none(value_copy_fn, "value_copy_fn")
        cp: UnorderedMap[K, V] = UnorderedMap(self._min_capacity)
        for entry in self.entries():
            cp.put(key_copy_fn(entry.key), value_copy_fn(entry.value))
        return cp

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    def keys(self) -> MapView[K]:
        return MapView(lambda: self._walk(lambda i: self._keys[i]))

    def values(self) -> MapView[V]:
        return MapView(lambda: self._walk(lambda i: self._values[i]))

    def entries(self) -> MapView[Entry[K, V]]:
        return MapView(
            lambda: self._walk(lambda i: Entry(self._keys[i], self._values[i]))
        )

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _walk(self, result_fn: Callable[[int], Any]) -> Iterator[Any]:
        for i in range(self._length):
            yield result_fn(i)

    def _find(self, key: K) -> int:
        """Index of *key* among the live slots, ``-1`` if absent."""
        for i in range(self._length):
            if deep_equals(key, self._keys[i]):
                return i
        return -1

    def _resize(self, new_capacity: int) -> None:
        new_capacity = max(new_capacity, self._min_capacity)
        if new_capacity == len(self._keys):
            return
        logger.debug(
            "resizing unordered map: %d -> %d slots (%d entries)",
            len(self._keys),
            new_capacity,
            self._length,
        )
        keys: List[Optional[K]] = [None] * new_capacity
        values: List[Optional[V]] = [None] * new_capacity
        keys[: self._length] = self._keys[: self._length]
        values[: self._length] = self._values[: self._length]
        self._keys = keys
        self._values = values
