"""
Utils module behavioral tests (sentinel and helpers).

Scope
- Validate the Unset sentinel (singleton, falsey, repr, non-subclassable).
- Validate coalesce/rename/mirror/unbounded and the value-list rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argbind.utils import Unset, UnsetType, coalesce, listing, mirror, rename, unbounded


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalescePreservesFalseyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)


class TestHelpers(TestCase):
    """Behavioral tests for the small helpers."""

    def testRenameDirectAndDecorator(self):
        def original():
            pass

        self.assertEqual(rename(original, "renamed").__name__, "renamed")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__qualname__, "decorated")

    def testRenameRejectsBuiltins(self):
        with self.assertRaises(TypeError):
            rename(len, "size")

    def testMirrorFreezesCollections(self):
        class Holder:
            items = mirror("items")
            tags = mirror("tags")

            def __init__(self):
                self._items = [1, 2]
                self._tags = {"a"}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertEqual(holder.tags, frozenset({"a"}))
        with self.assertRaises(AttributeError):
            holder.items = []

    def testUnbounded(self):
        self.assertTrue(unbounded(Unset))
        self.assertTrue(unbounded(None))
        self.assertTrue(unbounded(float("-inf")))
        self.assertFalse(unbounded(0))

    def testListingSortsOnlySets(self):
        self.assertEqual(listing({3, 1, 2}), "1, 2, 3")
        self.assertEqual(listing([3, 1, 2]), "3, 1, 2")
        self.assertEqual(listing(("b", "a"), quoted=True), '"b", "a"')


if __name__ == "__main__":
    unittest.main()
