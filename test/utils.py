"""
Tests for the Unset sentinel, coalesce() and the SpecType metaclass.

This module verifies:
- Unset is a single falsy instance that cannot be subclassed.
- Unset takes part in PEP 604 unions.
- coalesce() only replaces Unset.
- SpecType classes get a typename, read-only frozen fields and a repr.
"""
import unittest
from unittest import TestCase

from optrone.utils import Unset, UnsetType, SpecType, coalesce, rename


class Pair(metaclass=SpecType):
    __introspectable__ = ("items", "labels")
    __displayable__ = ("items",)

    def __init__(self, *items, labels=Unset):
        self._items = list(items)
        self._labels = coalesce(labels, {})


class UnsetTest(TestCase):
    """Unset sentinel semantics."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testMetaclassDefaultsToUnset(self):
        self.assertIs(SpecType.__displayable__, Unset)


class CoalesceTest(TestCase):
    """coalesce() only replaces Unset."""

    def testUnsetIsReplaced(self):
        self.assertEqual(coalesce(Unset, "x"), "x")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesAreKept(self):
        for value in (None, "", (), 0):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "x"), value)


class SpecTypeTest(TestCase):
    """Classes built by SpecType."""

    def testTypename(self):
        self.assertEqual(Pair.__typename__, "pair")

    def testFieldsAreFrozenCopies(self):
        pair = Pair("a", "b", labels={"a": ["x"]})
        self.assertEqual(pair.items, ("a", "b"))
        self.assertEqual(pair.labels["a"], ("x",))
        with self.assertRaises(TypeError):
            pair.labels["b"] = ()
        with self.assertRaises(AttributeError):
            pair.items = ()

    def testReprShowsDisplayableFields(self):
        self.assertEqual(repr(Pair("a")), "pair(items=('a',))")

    def testRename(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameRejectsNonString(self):
        with self.assertRaises(TypeError):
            rename(1)


if __name__ == "__main__":
    unittest.main()
