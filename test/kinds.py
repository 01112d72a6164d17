# python
"""
Kinds module behavioral tests (value kinds and the pure decoder).

Scope
- Validate Kind metadata: labels, bounds, zero values and accepts().
- Validate parse_integer on C-style literals (decimal, 0x hexadecimal, 0 octal, signs).
- Validate decode(): range checks per width, Unset on failure, raw strings, booleans.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from drapeau import Kind, decode, parse_integer
from drapeau.utils import Unset


class TestKind(TestCase):
    """Behavioral tests for the Kind enumeration."""

    def testLabelsMatchShorthandNames(self):
        self.assertEqual(
            [kind.label for kind in Kind],
            ["boolean", "i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "string"],
        )

    def testSignedBounds(self):
        self.assertEqual((Kind.I8.lower, Kind.I8.upper), (-128, 127))
        self.assertEqual((Kind.I64.lower, Kind.I64.upper), (-2 ** 63, 2 ** 63 - 1))

    def testUnsignedBounds(self):
        self.assertEqual((Kind.U16.lower, Kind.U16.upper), (0, 65535))
        self.assertEqual(Kind.U64.upper, 18446744073709551615)

    def testZeroValues(self):
        self.assertIs(Kind.BOOL.zero, False)
        self.assertIsNone(Kind.STR.zero)
        self.assertEqual(Kind.U32.zero, 0)

    def testIntegral(self):
        self.assertTrue(Kind.I32.integral)
        self.assertFalse(Kind.BOOL.integral)
        self.assertFalse(Kind.STR.integral)

    def testAcceptsRejectsBoolForIntegers(self):
        self.assertFalse(Kind.I32.accepts(True))
        self.assertTrue(Kind.I32.accepts(-5))

    def testAcceptsChecksRange(self):
        self.assertTrue(Kind.U8.accepts(255))
        self.assertFalse(Kind.U8.accepts(256))
        self.assertFalse(Kind.U8.accepts(-1))

    def testAcceptsStringOrNone(self):
        self.assertTrue(Kind.STR.accepts("x"))
        self.assertTrue(Kind.STR.accepts(None))
        self.assertFalse(Kind.STR.accepts(3))

    def testRepr(self):
        self.assertEqual(repr(Kind.U16), "Kind.U16")


class TestParseInteger(TestCase):
    """Behavioral tests for C-style integer literals."""

    def testDecimal(self):
        self.assertEqual(parse_integer("42"), 42)
        self.assertEqual(parse_integer("-42"), -42)
        self.assertEqual(parse_integer("+7"), 7)

    def testHexadecimal(self):
        self.assertEqual(parse_integer("0x1F"), 31)
        self.assertEqual(parse_integer("0XfF"), 255)
        self.assertEqual(parse_integer("-0x10"), -16)

    def testOctal(self):
        self.assertEqual(parse_integer("017"), 15)
        self.assertEqual(parse_integer("0"), 0)

    def testMalformedIsUnset(self):
        for token in ("", "abc", "12abc", "08", "0x", "1.5", " 1", "--1"):
            with self.subTest(token=token):
                self.assertIs(parse_integer(token), Unset)


class TestDecode(TestCase):
    """Behavioral tests for decode()."""

    def testBooleanIsAlwaysTrue(self):
        self.assertIs(decode(Kind.BOOL, "anything"), True)

    def testStringIsRaw(self):
        self.assertEqual(decode(Kind.STR, " ./out "), " ./out ")

    def testEveryWidthDecodesItsBounds(self):
        for kind in Kind:
            if not kind.integral:
                continue
            with self.subTest(kind=kind):
                self.assertEqual(decode(kind, str(kind.lower)), kind.lower)
                self.assertEqual(decode(kind, str(kind.upper)), kind.upper)

    def testEveryWidthRejectsOverflow(self):
        for kind in Kind:
            if not kind.integral:
                continue
            with self.subTest(kind=kind):
                self.assertIs(decode(kind, str(kind.upper + 1)), Unset)
                self.assertIs(decode(kind, str(kind.lower - 1)), Unset)

    def testNonNumericIsUnset(self):
        self.assertIs(decode(Kind.I32, "twelve"), Unset)

    def testOversizedDecimalIsUnset(self):
        self.assertIs(parse_integer("1" * 5000), Unset)
        self.assertIs(decode(Kind.I64, "1" * 5000), Unset)
        self.assertIs(decode(Kind.U64, "-" + "9" * 5000), Unset)

    def testOversizedHexadecimalIsUnset(self):
        self.assertIs(decode(Kind.U64, "0x" + "f" * 5000), Unset)

    def testOversizedOctalIsUnset(self):
        self.assertIs(decode(Kind.U64, "0" + "7" * 5000), Unset)

    def testDecodeIsPure(self):
        self.assertIs(decode(Kind.U8, "300"), Unset)
        self.assertEqual(decode(Kind.U8, "30"), 30)

    def testWrongArgumentTypes(self):
        with self.assertRaises(TypeError):
            decode("i32", "1")
        with self.assertRaises(TypeError):
            decode(Kind.I32, 1)


if __name__ == "__main__":
    unittest.main()
