"""
Tests for the shared helpers.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, copying, finality).
- coalesce/aslist normalization of optional and "one or many" values.
- Numeric coercion of flag values.
- Rendering of scalars and splitting of descriptions and option declarations.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from smoothop.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy({"a": Unset})["a"], Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # noqa: F841
                pass

    def testPicklingKeepsIdentity(self) -> None:
        """
        Unpickling goes through __new__, which is cached.
        """
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)


class HelpersTest(TestCase):
    """
    Behavioral tests for coalesce, aslist, stringify, sentences and split_flags.
    """

    def testCoalesceKeepsFalseyValues(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")

    def testAslist(self) -> None:
        self.assertEqual(aslist(Unset), [])
        self.assertEqual(aslist(None), [])
        self.assertEqual(aslist("name"), ["name"])
        self.assertEqual(aslist(("a", "b")), ["a", "b"])
        self.assertEqual(aslist(3), [3])

    def testAslistReturnsFreshList(self) -> None:
        names = ["a"]
        self.assertIsNot(aslist(names), names)

    def testStringify(self) -> None:
        self.assertEqual(stringify(True), "true")
        self.assertEqual(stringify(False), "false")
        self.assertEqual(stringify(None), "null")
        self.assertEqual(stringify(3.0), "3")
        self.assertEqual(stringify(2.5), "2.5")
        self.assertEqual(stringify(42), "42")
        self.assertEqual(stringify("dist"), "dist")

    def testSentences(self) -> None:
        self.assertEqual(sentences("Build it. Then ship it!"), ["Build it.", "Then ship it!"])
        self.assertEqual(sentences("Really?  Yes."), ["Really?", "Yes."])
        self.assertEqual(sentences("Version 1.2 ships. ok"), ["Version 1.2 ships. ok"])

    def testSplitFlags(self) -> None:
        self.assertEqual(split_flags("-g, --global"), ["g", "global"])
        self.assertEqual(split_flags("--global -g"), ["global", "g"])
        self.assertEqual(split_flags("--dry-run"), ["dry-run"])
        self.assertEqual(split_flags(""), [])


class ToNumberTest(TestCase):
    """
    Numeric coercion of raw flag values.
    """

    def testIntegers(self) -> None:
        self.assertEqual(to_number("42"), 42)
        self.assertIsInstance(to_number("42"), int)
        self.assertEqual(to_number("-7"), -7)
        self.assertEqual(to_number(" 5 "), 5)

    def testFloats(self) -> None:
        self.assertEqual(to_number("3.14"), 3.14)
        self.assertEqual(to_number(".5"), 0.5)
        self.assertEqual(to_number("1e3"), 1000.0)

    def testRadixLiterals(self) -> None:
        self.assertEqual(to_number("0x1f"), 31)
        self.assertEqual(to_number("0o17"), 15)
        self.assertEqual(to_number("0b101"), 5)

    def testBlankIsZero(self) -> None:
        self.assertEqual(to_number(""), 0)
        self.assertEqual(to_number("   "), 0)

    def testRejected(self) -> None:
        for text in ("abc", "Infinity", "NaN", "1_000", "1e999", "12px"):
            with self.subTest(text=text):
                self.assertIs(to_number(text), Unset)

    def testNonAsciiDigitsRejected(self) -> None:
        """
        Only ASCII digits count; other Unicode digits stay text.
        """
        for text in ("\u0663", "\uff11\uff12", "1\u0663", "0x\u0661"):
            with self.subTest(text=text):
                self.assertIs(to_number(text), Unset)

    def testNonStringRaises(self) -> None:
        with self.assertRaises(TypeError):
            to_number(42)


if __name__ == "__main__":
    unittest.main()
