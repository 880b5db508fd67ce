"""
Arguments module tests (Argument declaration and sanitization).

Scope
- Validate defaults, positional markers, short aliases and descriptions.
- Validate variadic lifting of single-valued validators.
- Validate read-only introspection and equality.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argschema import Argument
from argschema.validators import String, Integer, Sequence


class TestArgument(TestCase):
    """Argument construction and sanitization."""

    def testDefaults(self):
        argument = Argument()
        self.assertIsInstance(argument.type, String)
        self.assertIsNone(argument.positional)
        self.assertIsNone(argument.short)
        self.assertIsNone(argument.descr)
        self.assertFalse(argument.variadic)

    def testFixedPositional(self):
        self.assertEqual(Argument(int, positional=0).positional, 0)

    def testPositionalRejectsNegativeAndBool(self):
        with self.assertRaises(ValueError):
            Argument(str, positional=-1)
        with self.assertRaises(TypeError):
            Argument(str, positional=True)
        with self.assertRaises(TypeError):
            Argument(str, positional=1.5)

    def testVariadicViaEllipsisOrLiteral(self):
        for marker in (..., "..."):
            argument = Argument(Sequence(str), positional=marker)
            self.assertIs(argument.positional, Ellipsis)
            self.assertTrue(argument.variadic)

    def testVariadicLiftsSingleValidator(self):
        argument = Argument(int, positional=...)
        self.assertIsInstance(argument.type, Sequence)
        self.assertIsInstance(argument.type.item, Integer)

    def testShortAlias(self):
        self.assertEqual(Argument(str, short="-v").short, "v")
        self.assertEqual(Argument(str, short="7").short, "7")
        with self.assertRaises(ValueError):
            Argument(str, short="ab")
        with self.assertRaises(ValueError):
            Argument(str, short="_")
        with self.assertRaises(TypeError):
            Argument(str, short=1)

    def testDescrTrimmedAndNonEmpty(self):
        self.assertEqual(Argument(str, descr="  who to greet  ").descr, "who to greet")
        with self.assertRaises(ValueError):
            Argument(str, descr="   ")
        with self.assertRaises(TypeError):
            Argument(str, descr=1)

    def testUnresolvableType(self):
        with self.assertRaises(TypeError):
            Argument(object())

    def testReadOnly(self):
        argument = Argument(str)
        with self.assertRaises(AttributeError):
            argument.short = "x"

    def testEqualityAndRepr(self):
        self.assertEqual(Argument(int, short="c"), Argument(int, short="c"))
        self.assertNotEqual(Argument(int, short="c"), Argument(int, short="d"))
        self.assertTrue(repr(Argument(int, short="c")).startswith("argument("))


if __name__ == "__main__":
    unittest.main()
