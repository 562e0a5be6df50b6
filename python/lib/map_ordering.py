#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_ordering.py
---------------

How an ordered map decides that one key comes before another.

A *comparator* is a two-argument callable returning a negative number, zero
or a positive number (the same shape ``functools.cmp_to_key`` accepts). When
a map is built without one it falls back to :func:`natural_order`, i.e. the
key's own ``<``.

>>> from map_ordering import by_key, natural_order, reverse_order
>>> natural_order(1, 2)
-1
>>> reverse_order(1, 2)
1
>>> by_len = by_key(len)
>>> by_len("abc", "de")
1
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from map_entry import deep_equals

K = TypeVar("K")
T = TypeVar("T")

Comparator = Callable[[Any, Any], int]


def natural_order(left: Any, right: Any) -> int:
    """
    Compare with the operands' own ordering.

    Natural order must be total over the keys of one map. Raises
    ``TypeError`` if the operands do not support ``<``, or if neither is less
    than the other and yet they are not equal (sets ordered by inclusion,
    for instance), so two distinct keys never collapse into one slot.
    """
    if left < right:
        return -1
    if right < left:
        return 1
    if not deep_equals(left, right):
        raise TypeError(f"{left!r} and {right!r} are not ordered against each other")
    return 0


def reverse_order(left: Any, right: Any) -> int:
    """Natural order, descending."""
    return natural_order(right, left)


def by_key(key: Callable[[K], T]) -> Comparator:
    """
    Build a comparator that orders keys by ``key(k)``, like ``sorted(..., key=…)``.
    """

    def compare(left: K, right: K) -> int:
        return natural_order(key(left), key(right))

    return compare


def resolve_comparator(comparator: Optional[Comparator]) -> Comparator:
    """Return *comparator* itself, or :func:`natural_order` when it is ``None``."""
    return natural_order if comparator is None else comparator
