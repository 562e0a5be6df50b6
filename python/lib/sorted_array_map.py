#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
sorted_array_map.py
-------------------

An ordered map kept in two parallel, sorted arrays (``keys`` and ``values``).

Lookups are a binary search, so ``get``, ``contains``, ``floor``, ``ceil``
and ``rank`` are O(log n); ``min``, ``max`` and ``select`` are O(1). Inserting
a new key or deleting one shifts the tail of both arrays by one slot and is
therefore O(n). The arrays double when full and halve when only a quarter is
in use.

Features
~~~~~~~~
* ``put`` / ``get`` / ``delete`` / ``contains`` plus ``m[k]``, ``m[k] = v``,
  ``del m[k]`` and ``k in m``
* ``min`` / ``max`` / ``delete_min`` / ``delete_max``
* ``floor`` / ``ceil`` / ``rank`` / ``select``
* ascending iteration over all keys or over an inclusive key range
* natural key order or any comparator (see :mod:`map_ordering`)

Typical usage
~~~~~~~~~~~~~
>>> from sorted_array_map import SortedArrayMap
>>> m = SortedArrayMap(capacity=4)
>>> for k, v in [(5, "e"), (2, "b"), (8, "h"), (1, "a")]:
...     m[k] = v
>>> list(m.keys())
[1, 2, 5, 8]
>>> m.floor(3), m.ceil(3)
(2, 5)
>>> m.rank(5), m.select(2)
(2, 5)
>>> list(m.keys(2, 6))
[2, 5]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from map_contract import (
    MISSING,
    MapView,
    OrderMap,
    key_not_found,
    require_not_none,
    require_positive_capacity,
)
from map_entry import Entry, stringify
from map_errors import (
    InvalidArgumentError,
    RankOutOfRangeError,
    UnderflowError,
    UnorderedKeyTypeError,
)
from map_ordering import Comparator, resolve_comparator
from map_search import Found, Missing, SearchResult, binary_search

K = TypeVar("K")
V = TypeVar("V")

INIT_CAPACITY = 4

logger = logging.getLogger(__name__)


class SortedArrayMap(OrderMap[K, V]):
    """
    Ordered map backed by sorted parallel arrays.

    Parameters
    ----------
    capacity : int, default ``INIT_CAPACITY``
        Initial length of the backing arrays. Shrinking never goes below it.
    comparator : Callable[[K, K], int], optional
        Defines the key order. When omitted the keys' own ``<`` is used; if
        the keys cannot be compared that way, the first operation that has to
        compare two keys raises :class:`UnorderedKeyTypeError`.

    ``None`` is never a valid key.
    """

    __slots__ = ("_keys", "_values", "_length", "_min_capacity", "_comp", "_compare")

    def __init__(
        self,
        capacity: int = INIT_CAPACITY,
        comparator: Optional[Comparator] = None,
    ) -> None:
        require_positive_capacity(capacity)
        self._keys: List[Optional[K]] = [None] * capacity
        self._values: List[Optional[V]] = [None] * capacity
        self._length: int = 0
        self._min_capacity: int = capacity
        self._comp: Optional[Comparator] = comparator
        self._compare: Comparator = resolve_comparator(comparator)

    def __repr__(self) -> str:
        return f"SortedArrayMap({str(self)})"

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
        require_not_none(key, "key")
        return isinstance(self._search(key), Found)

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._comp

    # ------------------------------------------------------------------
    #   Map operations
    # ------------------------------------------------------------------
    def get(self, key: K, fallback: Any = MISSING) -> V:
        require_not_none(key, "key")
        result = self._search(key)
        if isinstance(result, Found):
            return self._values[result.index]  # type: ignore[return-value]
        if fallback is MISSING:
            raise key_not_found(key)
        return fallback

    def put(self, key: K, value: V) -> bool:
        require_not_none(key, "key")
        result = self._search(key)
        if isinstance(result, Found):
            self._values[result.index] = value
            return False

        if self._length == len(self._keys):
            self._resize(2 * len(self._keys))
        i = result.index
        self._shift_right(i)
        self._keys[i] = key
        self._values[i] = value
        self._length += 1
        return True

    def delete(self, key: K) -> bool:
        require_not_none(key, "key")
        result = self._search(key)
        if isinstance(result, Missing):
            return False
        self._remove_at(result.index)
        return True

    # ------------------------------------------------------------------
    #   Ordered operations
    # ------------------------------------------------------------------
    def min(self) -> K:
        if self._length == 0:
            raise UnderflowError("can't find minimum, map is empty")
        return self._keys[0]  # type: ignore[return-value]

    def max(self) -> K:
        if self._length == 0:
            raise UnderflowError("can't find maximum, map is empty")
        return self._keys[self._length - 1]  # type: ignore[return-value]

    def floor(self, key: K) -> Optional[K]:
        require_not_none(key, "key")
        i = self._floor_index(key)
        return None if i < 0 else self._keys[i]

    def ceil(self, key: K) -> Optional[K]:
        require_not_none(key, "key")
        i = self._ceil_index(key)
        return None if i < 0 else self._keys[i]

    def rank(self, key: K) -> int:
        require_not_none(key, "key")
        # Both the hit index and the insertion point count the smaller keys.
        return self._search(key).index

    def select(self, rank: int) -> K:
        if not 0 <= rank < self._length:
            raise RankOutOfRangeError(
                f"rank {rank} out of range for map of size {self._length}"
            )
        return self._keys[rank]  # type: ignore[return-value]

    def delete_min(self) -> None:
        if self._length == 0:
            raise UnderflowError("can't delete-minimum from empty map")
        self._remove_at(0)

    def delete_max(self) -> None:
        if self._length == 0:
            raise UnderflowError("can't delete-maximum from empty map")
        self._remove_at(self._length - 1)

    # ------------------------------------------------------------------
    #   Duplication
    # ------------------------------------------------------------------
    def copy(self) -> "SortedArrayMap[K, V]":
        cp: SortedArrayMap[K, V] = SortedArrayMap(self._min_capacity, self._comp)
        cp._keys = list(self._keys)
        cp._values = list(self._values)
        cp._length = self._length
        return cp

    def deepcopy(
        self, key_copy_fn: Callable[[K], K], value_copy_fn: Callable[[V], V]
    ) -> "SortedArrayMap[K, V]":
        require_not_none(key_copy_fn, "key_copy_fn")
        require_not_none(value_copy_fn, "value_copy_fn")
        cp: SortedArrayMap[K, V] = SortedArrayMap(self._min_capacity, self._comp)
        for entry in self.entries():
            new_key = key_copy_fn(entry.key)
            if new_key is None:
                raise InvalidArgumentError(
                    f"'key_copy_fn' returned None for key '{stringify(entry.key)}'"
                )
            cp.put(new_key, value_copy_fn(entry.value))
        return cp

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    def keys(self, low: Any = MISSING, high: Any = MISSING) -> MapView[K]:
        bounds = self._bounds(low, high)
        return MapView(lambda: self._walk(bounds, lambda i: self._keys[i]))

    def values(self) -> MapView[V]:
        return MapView(lambda: self._walk(None, lambda i: self._values[i]))

    def entries(
        self, low: Any = MISSING, high: Any = MISSING
    ) -> MapView[Entry[K, V]]:
        bounds = self._bounds(low, high)
        return MapView(
            lambda: self._walk(
                bounds, lambda i: Entry(self._keys[i], self._values[i])
            )
        )

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _search(self, key: K) -> SearchResult:
        try:
            return binary_search(self._keys, self._length, key, self._compare)
        except TypeError as exc:
            raise UnorderedKeyTypeError(
                "keys of type "
                f"'{type(key).__name__}' have no natural order and no "
                "comparator was given at construction"
            ) from exc

    def _floor_index(self, key: K) -> int:
        """Index of the floor of *key*, ``-1`` if there is none."""
        result = self._search(key)
        if isinstance(result, Found):
            return result.index
        return result.index - 1

    def _ceil_index(self, key: K) -> int:
        """Index of the ceiling of *key*, ``-1`` if there is none."""
        result = self._search(key)
        if isinstance(result, Found):
            return result.index
        return -1 if result.index == self._length else result.index

    def _bounds(self, low: Any, high: Any) -> Optional[tuple]:
        """Validate an optional ``(low, high)`` range; ``None`` means everything."""
        if low is MISSING and high is MISSING:
            return None
        if low is MISSING or high is MISSING:
            raise InvalidArgumentError("both 'low' and 'high' must be given")
        require_not_none(low, "low")
        require_not_none(high, "high")
        return (low, high)

    def _walk(
        self, bounds: Optional[tuple], result_fn: Callable[[int], Any]
    ) -> Iterator[Any]:
        if bounds is None:
            start, stop = 0, self._length - 1
        else:
            start, stop = self._ceil_index(bounds[0]), self._floor_index(bounds[1])
            if start < 0 or stop < 0:
                return
        for i in range(start, stop + 1):
            yield result_fn(i)

    def _shift_right(self, index: int) -> None:
        """Move ``[index, length)`` one slot right; capacity must allow it."""
        end = self._length
        self._keys[index + 1 : end + 1] = self._keys[index:end]
        self._values[index + 1 : end + 1] = self._values[index:end]

    def _remove_at(self, index: int) -> None:
        last = self._length - 1
        self._keys[index:last] = self._keys[index + 1 : last + 1]
        self._values[index:last] = self._values[index + 1 : last + 1]
        self._keys[last] = None
        self._values[last] = None
        self._length -= 1

        if self._length == len(self._keys) // 4:
            self._resize(len(self._keys) // 2)

    def _resize(self, new_capacity: int) -> None:
        new_capacity = max(new_capacity, self._min_capacity)
        if new_capacity == len(self._keys):
            return
        logger.debug(
            "resizing sorted map: %d -> %d slots (%d entries)",
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

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify the internal invariants (strictly ascending live keys, empty
        tail, ``length <= capacity``). Raises ``AssertionError`` on the first
        violation.
        """
        assert 0 <= self._length <= len(self._keys), "length exceeds capacity"
        assert len(self._keys) == len(self._values), "array lengths differ"
        for i in range(self._length - 1):
            assert (
                self._compare(self._keys[i], self._keys[i + 1]) < 0
            ), f"keys out of order at index {i}"
        for i in range(self._length, len(self._keys)):
            assert self._keys[i] is None and self._values[i] is None, (
                f"stale slot at index {i}"
            )
