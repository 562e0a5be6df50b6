#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_contract.py
---------------

The capability contract shared by every map, and the few algorithms that only
need a map's public operations.

* :class:`Map` declares the associative-map operations (``size``, ``get``,
  ``put``, ``delete``, ...) and layers the usual Python container protocol on
  top of them (``len(m)``, ``m[k]``, ``m[k] = v``, ``del m[k]``, ``k in m``,
  iteration over keys, ``copy.copy`` / ``copy.deepcopy``).
* :class:`OrderMap` adds the ordered-map operations (``min``, ``floor``,
  ``rank``, ``select``, range iteration, ...).
* :func:`maps_equal` and :func:`format_map` work on any two maps, whatever
  their internal layout, so ``==`` between a sorted map and a hash map holding
  the same entries is ``True`` from either side.

Nothing here knows how a map stores its entries.
"""

from __future__ import annotations

import copy as _copy
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
)

from map_entry import Entry, deep_equals, stringify
from map_errors import (
    InvalidArgumentError,
    KeyNotFoundError,
    UnorderedKeyTypeError,
)
from map_ordering import Comparator

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")

# Default for ``fallback`` meaning "none given"; ``None`` stays a legal fallback.
MISSING: Any = object()


# ----------------------------------------------------------------------
#  Argument checks
# ----------------------------------------------------------------------
def require_not_none(obj: Any, param_name: str) -> None:
    """Raise :class:`InvalidArgumentError` if *obj* is ``None``."""
    if obj is None:
        raise InvalidArgumentError(f"param '{param_name}' cannot be None")


def require_positive_capacity(capacity: int) -> None:
    if capacity <= 0:
        raise InvalidArgumentError(f"invalid capacity: {capacity}")


def key_not_found(key: Any) -> KeyNotFoundError:
    return KeyNotFoundError(f"key '{stringify(key)}' doesn't exist in the map")


# ----------------------------------------------------------------------
#  Lazy, restartable views
# ----------------------------------------------------------------------
class MapView(Generic[T]):
    """
    An iterable over some part of a map.

    Each call to ``iter()`` starts a brand-new pass by calling the factory it
    was built with, so a view can be looped over any number of times. The
    view reads the live map; mutating the map during a pass is undefined.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Iterator[T]]) -> None:
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def __repr__(self) -> str:
        return f"{type(self).__name__}([{', '.join(repr(x) for x in self)}])"


# ----------------------------------------------------------------------
#  Algorithms over any map
# ----------------------------------------------------------------------
def maps_equal(left: "Map[Any, Any]", right: "Map[Any, Any]") -> bool:
    """
    Structural equality of two maps of any variant.

    Equal sizes plus every entry of *right* present in *left* with a
    structurally equal value. Keys are unique on both sides, so this one-way
    check already implies the other direction. A key that *left* cannot even
    look up (``None`` in a sorted map, a key of an incomparable type) simply
    makes the maps unequal.
    """
    if left is right:
        return True
    if left.size() != right.size():
        return False
    try:
        for entry in right.entries():
            value = left.get(entry.key, MISSING)
            if value is MISSING or not deep_equals(value, entry.value):
                return False
    except (InvalidArgumentError, UnorderedKeyTypeError):
        return False
    return True


def format_map(entries: Iterable[Entry[Any, Any]], size: int) -> str:
    """Render ``[size]{ k: v, k: v }``; an empty map renders as ``[0]{ }``."""
    if size == 0:
        return "[0]{ }"
    body = ", ".join(str(entry) for entry in entries)
    return f"[{size}]{{ {body} }}"


# ----------------------------------------------------------------------
#  Map
# ----------------------------------------------------------------------
class Map(ABC, Generic[K, V]):
    """
    An associative container mapping unique keys to values.

    Subclasses implement the abstract operations; the dunder methods below
    are written purely in terms of them.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    #   Basic operations
    # ------------------------------------------------------------------
    @abstractmethod
    def size(self) -> int:
        """Number of key/value pairs."""

    def is_empty(self) -> bool:
        return self.size() == 0

    @abstractmethod
    def clear(self) -> None:
        """Drop every pair and return to the initial capacity."""

    @abstractmethod
    def contains(self, key: K) -> bool:
        """``True`` if *key* has a value in the map."""

    # ------------------------------------------------------------------
    #   Map operations
    # ------------------------------------------------------------------
    @abstractmethod
    def get(self, key: K, fallback: Any = MISSING) -> V:
        """
        Return the value for *key*.

        Raises :class:`KeyNotFoundError` if *key* is absent, unless a
        *fallback* was supplied, in which case *fallback* is returned.
        """

    @abstractmethod
    def put(self, key: K, value: V) -> bool:
        """
        Associate *value* with *key*.

        Returns ``True`` if *key* was new (the size grew), ``False`` if only
        the value of an existing key was replaced.
        """

    @abstractmethod
    def delete(self, key: K) -> bool:
        """Remove *key*; ``True`` if something was removed. Never raises for absence."""

    # ------------------------------------------------------------------
    #   Duplication
    # ------------------------------------------------------------------
    @abstractmethod
    def copy(self) -> "Map[K, V]":
        """Independent shallow copy (keys and values are shared)."""

    @abstractmethod
    def deepcopy(
        self, key_copy_fn: Callable[[K], K], value_copy_fn: Callable[[V], V]
    ) -> "Map[K, V]":
        """Independent copy whose keys and values are passed through the copy functions."""

    # ------------------------------------------------------------------
    #   Iteration
    # ------------------------------------------------------------------
    @abstractmethod
    def keys(self) -> Iterable[K]:
        ...

    @abstractmethod
    def values(self) -> Iterable[V]:
        ...

    @abstractmethod
    def entries(self) -> Iterable[Entry[K, V]]:
        ...

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise key_not_found(key)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return maps_equal(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return format_map(self.entries(), self.size())

    def __copy__(self) -> "Map[K, V]":
        return self.copy()

    def __deepcopy__(self, memo: Optional[dict] = None) -> "Map[K, V]":
        return self.deepcopy(
            lambda key: _copy.deepcopy(key, memo),
            lambda value: _copy.deepcopy(value, memo),
        )


# ----------------------------------------------------------------------
#  OrderMap
# ----------------------------------------------------------------------
class OrderMap(Map[K, V]):
    """
    A map whose keys are kept in order, either the keys' natural order or the
    order defined by a comparator given at construction.

    ``keys()`` and ``entries()`` iterate in ascending key order and accept an
    optional inclusive ``(low, high)`` range.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def comparator(self) -> Optional[Comparator]:
        """The comparator in use, ``None`` when keys use their natural order."""

    @abstractmethod
    def min(self) -> K:
        """Smallest key; :class:`UnderflowError` if empty."""

    @abstractmethod
    def max(self) -> K:
        """Largest key; :class:`UnderflowError` if empty."""

    @abstractmethod
    def floor(self, key: K) -> Optional[K]:
        """Largest key ``<= key``, or ``None`` if every key is larger."""

    @abstractmethod
    def ceil(self, key: K) -> Optional[K]:
        """Smallest key ``>= key``, or ``None`` if every key is smaller."""

    @abstractmethod
    def rank(self, key: K) -> int:
        """Number of keys strictly less than *key*."""

    @abstractmethod
    def select(self, rank: int) -> K:
        """The key whose rank is *rank*; :class:`RankOutOfRangeError` if out of range."""

    @abstractmethod
    def delete_min(self) -> None:
        ...

    @abstractmethod
    def delete_max(self) -> None:
        ...

    @abstractmethod
    def keys(self, low: Any = MISSING, high: Any = MISSING) -> Iterable[K]:
        ...

    @abstractmethod
    def entries(
        self, low: Any = MISSING, high: Any = MISSING
    ) -> Iterable[Entry[K, V]]:
        ...
