#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
chaining_hash_map.py
--------------------

A hash map using *separate chaining*: an array of buckets where each bucket
is a small :class:`unordered_map.UnorderedMap` holding every entry whose key
hashes to that index.

Buckets are created lazily on the first insert into them and dropped again as
soon as they become empty. The bucket array doubles when the number of
entries reaches the number of buckets and halves when it falls to a quarter;
the key is hashed first, then both checks run *before* that hash is reduced
to a bucket index, so a key is always placed against the array it will
actually live in and a key that can't be hashed leaves the map untouched.

Keys are hashed structurally (:func:`map_entry.deep_hash`), so unhashable
keys such as lists work.

>>> from chaining_hash_map import ChainingHashMap
>>> m = ChainingHashMap()
>>> m.put("a", 1), m.put("a", 2)
(True, False)
>>> m["a"]
2
>>> m.get("zzz", "fallback")
'fallback'
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
from map_entry import Entry, deep_hash
from unordered_map import UnorderedMap

K = TypeVar("K")
V = TypeVar("V")

INIT_CAPACITY = 4
BUCKET_CAPACITY = 2

logger = logging.getLogger(__name__)


class ChainingHashMap(Map[K, V]):
    """
    Separate-chaining hash map.

    Parameters
    ----------
    capacity : int, default ``INIT_CAPACITY``
        Initial number of buckets. Shrinking never goes below it.
    """

    __slots__ = ("_buckets", "_length", "_min_capacity")

    def __init__(self, capacity: int = INIT_CAPACITY) -> None:
        require_positive_capacity(capacity)
        self._buckets: List[Optional[UnorderedMap[K, V]]] = [None] * capacity
        self._length: int = 0
        self._min_capacity: int = capacity

    def __repr__(self) -> str:
        return f"ChainingHashMap({str(self)})"

    # ------------------------------------------------------------------
    #   Basic operations
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self._length

    def clear(self) -> None:
        self._buckets = [None] * self._min_capacity
        self._length = 0

    def contains(self, key: K) -> bool:
        bucket = self._buckets[self._hash(key)]
        return bucket is not None and bucket.contains(key)

    @property
    def capacity(self) -> int:
        """Current number of buckets."""
        return len(self._buckets)

    # ------------------------------------------------------------------
    #   Map operations
    # ------------------------------------------------------------------
    def get(self, key: K, fallback: Any = MISSING) -> V:
        bucket = self._buckets[self._hash(key)]
        if bucket is not None:
            return bucket.get(key, fallback)
        if fallback is MISSING:
            raise key_not_found(key)
        return fallback

    def put(self, key: K, value: V) -> bool:
        code = deep_hash(key)
        if self._length == len(self._buckets):
            self._rehash(2 * len(self._buckets))

        h = self._index(code)
        bucket = self._buckets[h]
        if bucket is None:
            bucket = self._buckets[h] = UnorderedMap(BUCKET_CAPACITY)
        inserted = bucket.put(key, value)
        if inserted:
            self._length += 1
        return inserted

    def delete(self, key: K) -> bool:
        code = deep_hash(key)
        if self._length == len(self._buckets) // 4:
            self._rehash(len(self._buckets) // 2)

        h = self._index(code)
        bucket = self._buckets[h]
        if bucket is None:
            return False
        deleted = bucket.delete(key)
        if deleted:
            if bucket.is_empty():
                self._buckets[h] = None
            self._length -= 1
        return deleted

    # ------------------------------------------------------------------
    #   Duplication
    # ------------------------------------------------------------------
    def copy(self) -> "ChainingHashMap[K, V]":
        return self.deepcopy(lambda key: key, lambda value: value)

    def deepcopy(
        self, key_copy_fn: Callable[[K], K], value_copy_fn: Callable[[V], V]
    ) -> "ChainingHashMap[K, V]":
        require_not_none(key_copy_fn, "key_copy_fn")
        require_not_none(value_copy_fn, "value_copy_fn")
        cp: ChainingHashMap[K, V] = ChainingHashMap(self._min_capacity)
        for entry in self.entries():
            cp.put(key_copy_fn(entry.key), value_copy_fn(entry.value))
        return cp

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    def keys(self) -> MapView[K]:
        return MapView(lambda: self._walk(lambda bucket: bucket.keys()))

    def values(self) -> MapView[V]:
        return MapView(lambda: self._walk(lambda bucket: bucket.values()))

    def entries(self) -> MapView[Entry[K, V]]:
        return MapView(lambda: self._walk(lambda bucket: bucket.entries()))

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _walk(
        self, view_fn: Callable[[UnorderedMap[K, V]], MapView[Any]]
    ) -> Iterator[Any]:
        """Yield from each non-empty bucket in index order."""
        for bucket in self._buckets:
            if bucket is not None:
                yield from view_fn(bucket)

    def _hash(self, key: K) -> int:
        return self._index(deep_hash(key))

    def _index(self, code: int) -> int:
        """Bucket for a precomputed :func:`map_entry.deep_hash` value."""
        return (code & 0x7FFFFFFF) % len(self._buckets)

    def _rehash(self, new_capacity: int) -> None:
        new_capacity = max(new_capacity, self._min_capacity)
        if new_capacity == len(self._buckets):
            return
        logger.debug(
            "rehashing chaining map: %d -> %d buckets (%d entries)",
            len(self._buckets),
            new_capacity,
            self._length,
        )
        rebuilt: ChainingHashMap[K, V] = ChainingHashMap(new_capacity)
        rebuilt._min_capacity = self._min_capacity
        # The target already has room for every entry; no nested resize.
        for entry in self.entries():
            rebuilt._insert_fresh(entry.key, entry.value)
        self._buckets = rebuilt._buckets

    def _insert_fresh(self, key: K, value: V) -> None:
        h = self._hash(key)
        bucket = self._buckets[h]
        if bucket is None:
            bucket = self._buckets[h] = UnorderedMap(BUCKET_CAPACITY)
        if bucket.put(key, value):
            self._length += 1

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Check that no empty bucket is retained, that every key sits in the
        bucket it hashes to, and that the bucket sizes add up to ``size()``.
        """
        total = 0
        for index, bucket in enumerate(self._buckets):
            if bucket is None:
                continue
            assert not bucket.is_empty(), f"empty bucket retained at {index}"
            for key in bucket.keys():
                assert self._hash(key) == index, f"key {key!r} in wrong bucket"
            total += bucket.size()
        assert total == self._length, "bucket sizes don't add up to length"
