#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_search.py
-------------

Tagged search results and the binary search used by the array-backed ordered
map.

Instead of folding "not found" and the insertion point into one negative
integer, a search returns either ``Found(index)`` or ``Missing(index)``:

>>> from map_search import Found, Missing, binary_search
>>> from map_ordering import natural_order
>>> binary_search([1, 3, 5, None], 3, 3, natural_order)
Found(index=1)
>>> binary_search([1, 3, 5, None], 3, 4, natural_order)
Missing(index=2)
>>> binary_search([1, 3, 5, None], 3, 9, natural_order)
Missing(index=3)
"""

from __future__ import annotations

from typing import Any, NamedTuple, Sequence, Union

from map_ordering import Comparator


class Found(NamedTuple):
    """The key lives at ``index``."""

    index: int


class Missing(NamedTuple):
    """
    The key is absent; ``index`` is where it would go (insertion point for a
    binary search, first free slot for a probe).
    """

    index: int


SearchResult = Union[Found, Missing]


def binary_search(
    keys: Sequence[Any], length: int, key: Any, compare: Comparator
) -> SearchResult:
    """
    Search ``keys[0:length]`` (ascending under *compare*) for *key*.

    Slots at and beyond ``length`` are never read, so *keys* may be a
    partially filled backing list. Exceptions raised by *compare* propagate.
    """
    lo, hi = 0, length - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        cmp = compare(keys[mid], key)
        if cmp < 0:
            lo = mid + 1
        elif cmp > 0:
            hi = mid - 1
        else:
            return Found(mid)
    return Missing(lo)
