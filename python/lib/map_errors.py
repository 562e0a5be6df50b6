#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
map_errors.py
-------------

Exceptions raised by the map family.

Every class derives from :class:`MapError` *and* from the built-in exception
that a plain ``dict`` user would expect in the same situation, so both

>>> try:
...     {}[1]
... except KeyError:
...     pass

and ``except KeyNotFoundError`` work against our maps.
"""

from __future__ import annotations


class MapError(Exception):
    """Base class for every error raised by the map modules."""


class InvalidArgumentError(MapError, ValueError):
    """A required argument was ``None`` or out of range (capacity, load factor)."""


class KeyNotFoundError(MapError, KeyError):
    """``get`` / ``del m[key]`` on a key that is not in the map."""

    def __str__(self) -> str:
        # KeyError quotes its argument with repr(); we already built a message.
        return str(self.args[0]) if self.args else ""


class UnderflowError(MapError, LookupError):
    """``min`` / ``max`` / ``delete_min`` / ``delete_max`` on an empty map."""


class RankOutOfRangeError(MapError, IndexError):
    """``select(rank)`` with ``rank`` outside ``[0, size)``."""


class UnorderedKeyTypeError(MapError, TypeError):
    """
    The keys of an ordered map cannot be compared: no comparator was given and
    the key type has no natural order (or the keys are of mixed types).

    The map that raised this is unusable and should be discarded.
    """


class ProbeExhaustedError(MapError, RuntimeError):
    """
    A linear probe visited every slot without finding a free one.

    The resize policy keeps at least one slot free, so seeing this means the
    table is corrupt.
    """
