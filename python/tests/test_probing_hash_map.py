#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_probing_hash_map.py
------------------------

Tests specific to `ProbingHashMap`:

* load-factor driven growth and quarter-load shrink
* load factor validation
* tombstones: an interior delete keeps later keys on the probe chain
  reachable, a delete at the end of a chain clears the slot, and inserts
  reuse tombstones
* probe chains that wrap around the end of the table
* the "table exhausted" internal error
"""

import random
import unittest

from map_errors import InvalidArgumentError, ProbeExhaustedError
from probing_hash_map import LOAD_FACTOR, ProbingHashMap, _Node


class FixedHashKey:
    """Hashes to whatever it is told to; equality is by name."""

    def __init__(self, name, hash_value=1):
        self.name = name
        self.hash_value = hash_value

    def __hash__(self):
        return self.hash_value

    def __eq__(self, other):
        return isinstance(other, FixedHashKey) and self.name == other.name

    def __repr__(self):
        return f"FixedHashKey({self.name!r})"


class NoHashKey:
    __hash__ = None


class TestProbingHashMap(unittest.TestCase):
    # ------------------------------------------------------------------
    #  Construction
    # ------------------------------------------------------------------
    def test_defaults(self):
        m = ProbingHashMap()
        self.assertEqual(m.capacity, 4)
        self.assertEqual(m.load_factor, LOAD_FACTOR)

    def test_load_factor_range(self):
        for bad in (0.0, 0.1, 0.25, 1.01, 2.0, -1.0):
            with self.subTest(load_factor=bad):
                with self.assertRaises(InvalidArgumentError):
                    ProbingHashMap(4, bad)
        for good in (0.26, 0.5, 1.0):
            self.assertEqual(ProbingHashMap(4, good).load_factor, good)

    # ------------------------------------------------------------------
    #  Resizing
    # ------------------------------------------------------------------
    def test_growth_scenario(self):
        m = ProbingHashMap(capacity=4, load_factor=0.7)
        m.put(1, "a")
        self.assertEqual(m.capacity, 4)
        m.put(2, "b")
        m.put(3, "c")
        self.assertEqual(m.capacity, 4)
        # 3 >= 0.7 * 4: doubles before the fourth insert
        m.put(4, "d")
        self.assertEqual(m.capacity, 8)
        m.put(5, "e")
        self.assertEqual(m.capacity, 8)
        for k, v in zip(range(1, 6), "abcde"):
            self.assertEqual(m.get(k), v)
        m.validate()

    def test_full_load_factor_never_exhausts(self):
        m = ProbingHashMap(capacity=4, load_factor=1.0)
        for i in range(4):
            m.put(i, i)
        self.assertEqual(m.capacity, 4)
        self.assertIsNone(m._probe_to_find(0, 99))
        self.assertFalse(m.contains(99))
        m.put(4, 4)
        self.assertEqual(m.capacity, 8)

    def test_shrinks_at_quarter_load(self):
        m = ProbingHashMap(capacity=4)
        for i in range(12):
            m.put(i, i)
        self.assertEqual(m.capacity, 16)
        for i in range(8):
            m.delete(i)
        # 4 <= 0.25 * 16: the next delete halves first
        self.assertEqual(m.capacity, 16)
        m.delete(8)
        self.assertEqual(m.capacity, 8)
        for i in range(9, 12):
            self.assertEqual(m.get(i), i)
        m.validate()

    def test_never_shrinks_below_initial_capacity(self):
        m = ProbingHashMap(capacity=4)
        m.put(1, 1)
        for _ in range(5):
            m.delete(1)
        self.assertEqual(m.capacity, 4)

    # ------------------------------------------------------------------
    #  Tombstones
    # ------------------------------------------------------------------
    def test_interior_delete_keeps_chain_intact(self):
        m = ProbingHashMap(capacity=8)
        a, b, c = FixedHashKey("a"), FixedHashKey("b"), FixedHashKey("c")
        m.put(a, "A")
        m.put(b, "B")
        m.put(c, "C")
        # one probe chain: slots 1, 2, 3
        self.assertEqual([m._table[i].key for i in (1, 2, 3)], [a, b, c])

        self.assertTrue(m.delete(b))
        self.assertTrue(m._table[2].is_dead)
        self.assertIsNone(m._table[2].key)
        self.assertEqual(m.get(c), "C")
        self.assertEqual(m.get(a), "A")
        self.assertFalse(m.contains(b))
        self.assertEqual(m.size(), 2)
        m.validate()

    def test_tombstone_is_logged(self):
        m = ProbingHashMap(capacity=8)
        a, b, c = FixedHashKey("a"), FixedHashKey("b"), FixedHashKey("c")
        for k in (a, b, c):
            m.put(k, k.name)
        with self.assertLogs("probing_hash_map", level="DEBUG") as logs:
            m.delete(b)
        self.assertIn("tombstone at slot 2", logs.output[0])

    def test_delete_at_chain_end_clears_slot(self):
        m = ProbingHashMap(capacity=8)
        a, b = FixedHashKey("a"), FixedHashKey("b")
        m.put(a, "A")
        m.put(b, "B")
        self.assertTrue(m.delete(b))
        self.assertIsNone(m._table[2])
        self.assertEqual(m.get(a), "A")

    def test_insert_revives_tombstone(self):
        m = ProbingHashMap(capacity=8)
        a, b, c, d = (FixedHashKey(n) for n in "abcd")
        for k in (a, b, c):
            m.put(k, k.name)
        m.delete(b)
        node = m._table[2]
        self.assertTrue(node.is_dead)

        self.assertTrue(m.put(d, "d"))
        self.assertIs(m._table[2], node)
        self.assertFalse(node.is_dead)
        self.assertEqual(node.key, d)
        self.assertEqual(m.size(), 3)
        self.assertEqual(m.get(c), "c")
        m.validate()

    def test_existing_key_past_tombstone_is_updated_not_duplicated(self):
        m = ProbingHashMap(capacity=8)
        a, b, c = (FixedHashKey(n) for n in "abc")
        for k in (a, b, c):
            m.put(k, k.name)
        m.delete(a)
        self.assertTrue(m._table[1].is_dead)
        # the first free slot is the tombstone; the key lives further along
        m.put(c, "C")
        self.assertEqual(m.get(c), "C")
        self.assertEqual(m.size(), 2)
        self.assertEqual(sorted(k.name for k in m.keys()), ["b", "c"])

    def test_rehash_discards_tombstones(self):
        m = ProbingHashMap(capacity=8)
        keys = [FixedHashKey(n) for n in "abcde"]
        for k in keys:
            m.put(k, k.name)
        m.delete(keys[1])
        m.delete(keys[2])
        self.assertTrue(any(n is not None and n.is_dead for n in m._table))
        m._rehash(16)
        self.assertFalse(any(n is not None and n.is_dead for n in m._table))
        self.assertEqual(sorted(k.name for k in m.keys()), ["a", "d", "e"])

    def test_chain_wraps_around_table_end(self):
        m = ProbingHashMap(capacity=8)
        x, y, z = (FixedHashKey(n, hash_value=7) for n in "xyz")
        for k in (x, y, z):
            m.put(k, k.name)
        self.assertEqual([m._table[i].key for i in (7, 0, 1)], [x, y, z])
        m.delete(y)
        self.assertTrue(m._table[0].is_dead)
        self.assertEqual(m.get(z), "z")
        # z sits at the last slot of the chain; its successor (2) is empty
        m.delete(z)
        self.assertIsNone(m._table[1])
        m.validate()

    # ------------------------------------------------------------------
    #  Internal errors
    # ------------------------------------------------------------------
    def test_probe_exhaustion_is_an_internal_error(self):
        m = ProbingHashMap(capacity=4, load_factor=1.0)
        for i in range(4):
            m.put(i, i)
        with self.assertRaises(ProbeExhaustedError):
            m._probe_to_insert(0, 99)
        with self.assertRaises(RuntimeError):
            m._probe_to_insert(2, 99)

    def test_node_state_changes_are_checked(self):
        node = _Node("k", "v")
        with self.assertRaises(RuntimeError):
            node.revive("x", "y")
        node.kill()
        self.assertTrue(node.is_dead)
        with self.assertRaises(RuntimeError):
            node.kill()
        node.revive("x", "y")
        self.assertEqual((node.key, node.value, node.is_dead), ("x", "y", False))

    def test_unhashable_key_leaves_table_untouched(self):
        m = ProbingHashMap(capacity=4, load_factor=0.7)
        for i in range(3):
            m.put(i, i)
        # the next put would double the table first
        with self.assertRaises(TypeError):
            m.put(NoHashKey(), "x")
        self.assertEqual(m.capacity, 4)
        self.assertEqual(m.size(), 3)

        m = ProbingHashMap(capacity=4)
        for i in range(12):
            m.put(i, i)
        for i in range(8):
            m.delete(i)
        # the next delete would halve the table first
        with self.assertRaises(TypeError):
            m.delete(NoHashKey())
        self.assertEqual(m.capacity, 16)
        m.validate()

    # ------------------------------------------------------------------
    #  Randomised stress with heavy collisions
    # ------------------------------------------------------------------
    def test_random_operations_with_collisions(self):
        rng = random.Random(99)
        m = ProbingHashMap(capacity=4, load_factor=0.9)
        reference = {}
        pool = [FixedHashKey(str(i), hash_value=i % 3) for i in range(60)]

        for _ in range(3_000):
            k = rng.choice(pool)
            if rng.random() < 0.55:
                m.put(k, k.name)
                reference[k.name] = k.name
            else:
                self.assertEqual(m.delete(k), k.name in reference)
                reference.pop(k.name, None)
            self.assertEqual(m.size(), len(reference))
        m.validate()
        self.assertEqual(sorted(k.name for k in m.keys()), sorted(reference))

    def test_repr_shows_tombstones(self):
        m = ProbingHashMap(capacity=8)
        a, b = FixedHashKey("a"), FixedHashKey("b")
        m.put(a, 1)
        m.put(b, 2)
        m.put(FixedHashKey("c"), 3)
        m.delete(b)
        self.assertIn("D(None: None)", repr(m))


if __name__ == "__main__":
    unittest.main(verbosity=2)
