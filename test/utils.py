# python
"""
Utils module behavioral tests (sentinel and wording helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import pickle
import unittest
from unittest import TestCase

from drapeau.utils import Unset, UnsetType, coalesce, ordinal, pluralize, rename


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertEqual(coalesce(0, 3), 0)
        self.assertIsNone(coalesce(Unset))


class TestWording(TestCase):
    """Behavioral tests for pluralize, ordinal and rename."""

    def testPluralize(self):
        self.assertEqual(pluralize("flag"), "flags")
        self.assertEqual(pluralize("positional argument"), "positional arguments")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("index"), "indexes")
        self.assertEqual(pluralize("FLAG"), "FLAGS")

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(112), "112th")

    def testRename(self):
        @rename("u16")
        def declare():
            pass

        self.assertEqual((declare.__name__, declare.__qualname__), ("u16", "u16"))
        with self.assertRaises(TypeError):
            rename(1, "x")


if __name__ == "__main__":
    unittest.main()
