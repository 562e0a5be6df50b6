#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
probing_hash_map.py
-------------------

An open-addressing hash map using *linear probing*.

All entries live directly in one table. A key is stored at the first usable
slot found by stepping forward (and wrapping) from its hash index; the slots
visited form the key's *probe chain*.

Deleting from the middle of a chain would cut it, making every key stored
further along unreachable. So a deleted slot is normally turned into a
*tombstone*: a dead node that lookups step over and inserts may reuse. The one
exception is a slot whose successor is empty; no chain runs through it, so it
is cleared outright. A rehash (on growth or shrink) rebuilds the table and
drops every tombstone.

Growth is driven by a configurable load factor in ``(0.25, 1.0]``; shrinking
happens when a quarter or less of the table is in use.

>>> from probing_hash_map import ProbingHashMap
>>> m = ProbingHashMap(capacity=4, load_factor=0.7)
>>> for i, v in enumerate("abcde", start=1):
...     _ = m.put(i, v)
>>> m.capacity
8
>>> [m[i] for i in range(1, 6)]
['a', 'b', 'c', 'd', 'e']
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from map_contract import (
    MISSING,
    Map,
    MapView,
    key_not_found,
    require_not_none,
    require_positive_capacity,
)
from map_entry import Entry, deep_equals, deep_hash
from map_errors import InvalidArgumentError, ProbeExhaustedError
from map_search import Found, Missing, SearchResult

K = TypeVar("K")
V = TypeVar("V")

INIT_CAPACITY = 4
LOAD_FACTOR = 0.7
SHRINK_LOAD = 0.25

logger = logging.getLogger(__name__)


class _Node(Generic[K, V]):
    """A table slot's occupant; dead nodes are tombstones."""

    __slots__ = ("key", "value", "is_dead")

    def __init__(self, key: K, value: V) -> None:
        self.key: Optional[K] = key
        self.value: Optional[V] = value
        self.is_dead: bool = False

    def revive(self, key: K, value: V) -> None:
        if not self.is_dead:
            raise RuntimeError(f"can't revive live node {self!r}")
        self.key = key
        self.value = value
        self.is_dead = False

    def kill(self) -> None:
        if self.is_dead:
            raise RuntimeError("can't kill a node that is already dead")
        self.key = None
        self.value = None
        self.is_dead = True

    def __repr__(self) -> str:
        state = "D" if self.is_dead else "A"
        return f"{state}({self.key!r}: {self.value!r})"


class ProbingHashMap(Map[K, V]):
    """
    Linear-probing hash map with tombstone deletion.

    Parameters
    ----------
    capacity : int, default ``INIT_CAPACITY``
        Initial number of slots. Shrinking never goes below it.
    load_factor : float, default ``LOAD_FACTOR``
        The table doubles before an insert once ``size() >= load_factor *
        capacity``. Must be in ``(0.25, 1.0]``.
    """

    __slots__ = ("_table", "_length", "_load_factor", "_min_capacity")

    def __init__(
        self, capacity: int = INIT_CAPACITY, load_factor: float = LOAD_FACTOR
    ) -> None:
        require_positive_capacity(capacity)
        if not SHRINK_LOAD < load_factor <= 1.0:
            raise InvalidArgumentError(
                f"'load_factor' {load_factor} is not in range (0.25, 1]"
            )
        self._table: List[Optional[_Node[K, V]]] = [None] * capacity
        self._length: int = 0
        self._load_factor: float = load_factor
        self._min_capacity: int = capacity

    def __repr__(self) -> str:
        return (
            f"ProbingHashMap(load_factor={self._load_factor}, "
            f"size={self._length}, table={self._table!r})"
        )

    # ------------------------------------------------------------------
    #   Basic operations
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self._length

    def clear(self) -> None:
        self._table = [None] * self._min_capacity
        self._length = 0

    def contains(self, key: K) -> bool:
        return self._probe_to_find(self._hash(key), key) is not None

    @property
    def capacity(self) -> int:
        """Current number of slots."""
        return len(self._table)

    @property
    def load_factor(self) -> float:
        return self._load_factor

    # ------------------------------------------------------------------
    #   Map operations
    # ------------------------------------------------------------------
    def get(self, key: K, fallback: Any = MISSING) -> V:
        i = self._probe_to_find(self._hash(key), key)
        if i is not None:
            return self._table[i].value  # type: ignore[union-attr, return-value]
        if fallback is MISSING:
            raise key_not_found(key)
        return fallback

    def put(self, key: K, value: V) -> bool:
        code = deep_hash(key)
        if self._length >= self._load_factor * len(self._table):
            self._rehash(2 * len(self._table))

        result = self._probe_to_insert(self._index(code), key)
        node = self._table[result.index]
        if isinstance(result, Found):
            node.value = value  # type: ignore[union-attr]
            return False

        if node is None:
            self._table[result.index] = _Node(key, value)
        else:
            node.revive(key, value)
        self._length += 1
        return True

    def delete(self, key: K) -> bool:
        code = deep_hash(key)
        if self._length <= SHRINK_LOAD * len(self._table):
            self._rehash(len(self._table) // 2)

        i = self._probe_to_find(self._index(code), key)
        if i is None:
            return False

        if self._table[self._next_index(i)] is None:
            self._table[i] = None
        else:
            logger.debug("leaving tombstone at slot %d", i)
            self._table[i].kill()  # type: ignore[union-attr]
        self._length -= 1
        return True

    # ------------------------------------------------------------------
    #   Duplication
    # ------------------------------------------------------------------
    def copy(self) -> "ProbingHashMap[K, V]":
        return self.deepcopy(lambda key: key, lambda value: value)

    def deepcopy(
        self, key_copy_fn: Callable[[K], K], value_copy_fn: Callable[[V], V]
    ) -> "ProbingHashMap[K, V]":
        require_not_none(key_copy_fn, "key_copy_fn")
        require_not_none(value_copy_fn, "value_copy_fn")
        cp: ProbingHashMap[K, V] = ProbingHashMap(
            self._min_capacity, self._load_factor
        )
        for entry in self.entries():
            cp.put(key_copy_fn(entry.key), value_copy_fn(entry.value))
        return cp

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    def keys(self) -> MapView[K]:
        return MapView(lambda: self._walk(lambda node: node.key))

    def values(self) -> MapView[V]:
        return MapView(lambda: self._walk(lambda node: node.value))

    def entries(self) -> MapView[Entry[K, V]]:
        return MapView(lambda: self._walk(lambda node: Entry(node.key, node.value)))

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _walk(self, result_fn: Callable[[_Node[K, V]], Any]) -> Iterator[Any]:
        """Yield for every live node, in slot order."""
        for node in self._table:
            if node is not None and not node.is_dead:
                yield result_fn(node)

    def _hash(self, key: K) -> int:
        return self._index(deep_hash(key))

    def _index(self, code: int) -> int:
        """Slot for a precomputed :func:`map_entry.deep_hash` value."""
        return (code & 0x7FFFFFFF) % len(self._table)

    def _next_index(self, index: int) -> int:
        return 0 if index == len(self._table) - 1 else index + 1

    def _probe_to_find(self, start: int, key: K) -> Optional[int]:
        """
        Slot holding *key*, or ``None``.

        Stops at the first empty slot; tombstones are stepped over.
        """
        i = start
        for _ in range(len(self._table)):
            node = self._table[i]
            if node is None:
                return None
            if not node.is_dead and deep_equals(node.key, key):
                return i
            i = self._next_index(i)
        return None

    def _probe_to_insert(self, start: int, key: K) -> SearchResult:
        """
        ``Found(slot)`` if *key* is already stored, else ``Missing(slot)`` for
        the first empty or dead slot on the chain.

        A tombstone is only a candidate: *key* may still live further along,
        so the scan goes on until an empty slot or a match.
        """
        first_dead: Optional[int] = None
        i = start
        for _ in range(len(self._table)):
            node = self._table[i]
            if node is None:
                return Missing(i if first_dead is None else first_dead)
            if node.is_dead:
                if first_dead is None:
                    first_dead = i
            elif deep_equals(node.key, key):
                return Found(i)
            i = self._next_index(i)
        if first_dead is not None:
            return Missing(first_dead)
        raise ProbeExhaustedError(
            f"no free slot among {len(self._table)} slots "
            f"(size {self._length}, load factor {self._load_factor})"
        )

    def _rehash(self, new_capacity: int) -> None:
        new_capacity = max(new_capacity, self._min_capacity)
        if new_capacity == len(self._table):
            return
        logger.debug(
            "rehashing probing map: %d -> %d slots (%d entries)",
            len(self._table),
            new_capacity,
            self._length,
        )
        rebuilt: ProbingHashMap[K, V] = ProbingHashMap(
            new_capacity, self._load_factor
        )
        rebuilt._min_capacity = self._min_capacity
        for entry in self.entries():
            rebuilt.put(entry.key, entry.value)
        self._table = rebuilt._table

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Check that the live-node count matches ``size()`` and that every live
        key is reachable from its hash index without crossing an empty slot.
        """
        live = 0
        for index, node in enumerate(self._table):
            if node is None or node.is_dead:
                continue
            live += 1
            assert (
                self._probe_to_find(self._hash(node.key), node.key) == index
            ), f"key {node.key!r} unreachable from its hash slot"
        assert live == self._length, "live node count doesn't match length"
