# python
"""
Index module behavioral tests (chained subcommand name index).

Scope
- Validate fnv1a hashing and its ten-bit mixing.
- Validate insert/lookup, duplicate rejection, collisions and chain order.
- Validate growth (every name stays resolvable) and clear() accounting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from drapeau.index import MAX_CAPACITY, SubcommandIndex, fnv1a


def colliding(capacity, count):
    """first `count` generated names falling in the same bucket."""
    names, bucket = [], None
    for number in range(100000):
        name = "cmd%d" % number
        if bucket is None:
            bucket = fnv1a(name) & (capacity - 1)
        if fnv1a(name) & (capacity - 1) == bucket:
            names.append(name)
            if len(names) == count:
                return names
    raise AssertionError("not enough colliding names")


class TestFnv1a(TestCase):
    """Behavioral tests for the hash function."""

    def testEmptyNameKeepsLowBitsOfOffset(self):
        self.assertEqual(fnv1a(""), 0x811C9DC5 & 0x3FF)

    def testKnownValue(self):
        # FNV-1a("a") == 0xE40C292C
        self.assertEqual(fnv1a("a"), 0xE40C292C & 0x3FF)

    def testAlwaysBelowMaxCapacity(self):
        for name in ("install", "remove", "список", "x" * 300):
            with self.subTest(name=name):
                self.assertLess(fnv1a(name), MAX_CAPACITY)

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            fnv1a(b"install")


class TestSubcommandIndex(TestCase):
    """Behavioral tests for SubcommandIndex."""

    def testCapacityMustBePowerOfTwo(self):
        with self.assertRaises(ValueError):
            SubcommandIndex(48)
        with self.assertRaises(ValueError):
            SubcommandIndex(0)
        with self.assertRaises(ValueError):
            SubcommandIndex(MAX_CAPACITY * 2)
        with self.assertRaises(TypeError):
            SubcommandIndex(True)

    def testInsertAndLookup(self):
        index = SubcommandIndex()
        index.insert("install", 0)
        index.insert("remove", 1)
        self.assertEqual(index.lookup("install"), 0)
        self.assertEqual(index.lookup("remove"), 1)
        self.assertIsNone(index.lookup("update"))
        self.assertIn("remove", index)
        self.assertEqual(len(index), 2)

    def testDuplicateRejected(self):
        index = SubcommandIndex()
        index.insert("install", 0)
        with self.assertRaises(ValueError):
            index.insert("install", 1)
        self.assertEqual(len(index), 1)

    def testCollisionsAreChainedInInsertionOrder(self):
        index = SubcommandIndex(4)
        first, second = colliding(4, 2)
        index.insert(first, 0)
        index.insert(second, 1)
        self.assertEqual(index.chain(first), [first, second])
        self.assertEqual(index.lookup(second), 1)

    def testSmallTableStaysInRange(self):
        index = SubcommandIndex(1)
        index.insert("install", 0)
        self.assertEqual(index.lookup("install"), 0)

    def testGrowthKeepsEveryNameResolvable(self):
        index = SubcommandIndex(4)
        names = ["sub%d" % number for number in range(40)]
        for slot, name in enumerate(names):
            index.insert(name, slot)
        self.assertGreaterEqual(index.capacity, 64)
        for slot, name in enumerate(names):
            with self.subTest(name=name):
                self.assertEqual(index.lookup(name), slot)

    def testGrowthStopsAtMaxCapacity(self):
        index = SubcommandIndex(MAX_CAPACITY)
        for slot in range(MAX_CAPACITY):
            index.insert("sub%d" % slot, slot)
        self.assertEqual(index.capacity, MAX_CAPACITY)
        self.assertEqual(index.lookup("sub1000"), 1000)

    def testClearCountsChainNodes(self):
        index = SubcommandIndex(4)
        first, second, third = colliding(4, 3)
        index.insert(first, 0)
        index.insert(second, 1)
        self.assertEqual(index.clear(), 1)
        self.assertEqual(len(index), 0)
        self.assertIsNone(index.lookup(first))
        # a cleared index is reusable
        index.insert(third, 0)
        self.assertEqual(index.lookup(third), 0)

    def testIterYieldsEveryPair(self):
        index = SubcommandIndex()
        index.insert("install", 0)
        index.insert("remove", 1)
        self.assertEqual(sorted(index), [("install", 0), ("remove", 1)])


if __name__ == "__main__":
    unittest.main()
