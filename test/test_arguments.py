# python
"""
Entity (Argument/Command) behavioral tests.

Scope
- Declaration: flag/name normalization, variant selection, rejected shapes.
- Value containers: one-shot single values, multi-value accumulation, enum and
  conversion failure messages, defaults and reset.
- Custom validation: single installation, coercion of plain returns.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import enum
import unittest
from unittest import TestCase

from argot import Argument, Command, Option, Variant, File, ValidationResult


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class TestArgumentDeclaration(TestCase):
    """Construction and normalization of arguments."""

    def testFlagsAreNormalized(self):
        a = Argument("count", "c")
        self.assertEqual(a.longflag, "--count")
        self.assertEqual(a.shortflag, "-c")

    def testPrefixedFlagsKept(self):
        a = Argument("--count", "-c")
        self.assertEqual(a.flags, ("-c", "--count"))

    def testShortFlagIsOptional(self):
        a = Argument("--count")
        self.assertIsNone(a.shortflag)
        self.assertEqual(a.flags, ("--count",))

    def testEmptyLongFlagRejected(self):
        for flag in ("", "  ", "--"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    Argument(flag)

    def testBareDashShortFlagRejected(self):
        with self.assertRaises(ValueError):
            Argument("--count", "-")

    def testDoubleDashShortFlagRejected(self):
        with self.assertRaises(ValueError):
            Argument("--count", "--c")

    def testFlagsMustBeStrings(self):
        with self.assertRaises(TypeError):
            Argument(5)
        with self.assertRaises(TypeError):
            Argument("--count", 5)

    def testDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Argument("--count", descr=None)

    def testDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Argument("--count", descr="  ")

    def testMatchesIsExactEquality(self):
        a = Argument("--count", "-c")
        self.assertTrue(a.matches("-c"))
        self.assertTrue(a.matches("--count"))
        self.assertFalse(a.matches("--coun"))
        self.assertFalse(a.matches("-cx"))

    def testReprNamesTheEntity(self):
        self.assertTrue(repr(Argument("--count", type=int)).startswith("argument(longflag='--count'"))


class TestVariants(TestCase):
    """Variant selection from type/multiple."""

    def testPlain(self):
        a = Argument("--verbose")
        self.assertIs(a.variant, Variant.PLAIN)
        self.assertFalse(a.carries_value)
        self.assertIsNone(a.valuetype)

    def testTyped(self):
        self.assertIs(Argument("--count", type=int).variant, Variant.TYPED)

    def testEnum(self):
        self.assertIs(Argument("--color", type=Color).variant, Variant.ENUM)

    def testPath(self):
        self.assertIs(Argument("--input", type=File()).variant, Variant.PATH)

    def testMulti(self):
        a = Argument("--tags", type=str, multiple=True)
        self.assertIs(a.variant, Variant.MULTI)
        self.assertTrue(a.multiple)
        self.assertEqual(a.valuetype, "STRING_1 STRING_2 ...")

    def testMultiWithoutTypeRejected(self):
        with self.assertRaises(TypeError):
            Argument("--tags", multiple=True)

    def testPlainDefaultRejected(self):
        with self.assertRaises(TypeError):
            Argument("--verbose", default=True)

    def testNonCallableTypeRejected(self):
        with self.assertRaises(TypeError):
            Argument("--count", type=42)


class TestValueContainers(TestCase):
    """parse() semantics per variant."""

    def testSingleValueIsOneShot(self):
        a = Argument("--name", type=str)
        self.assertTrue(a.parse("first"))
        result = a.parse("second")
        self.assertFalse(result)
        self.assertIn("already contains a value", result.message)
        self.assertEqual(a.value, "first")

    def testMultiValueAccumulates(self):
        a = Argument("--tags", type=str, multiple=True)
        for raw in ("x", "y", "z"):
            self.assertTrue(a.parse(raw))
        self.assertEqual(a.values, ("x", "y", "z"))
        self.assertEqual(a.value, ("x", "y", "z"))

    def testConversionFailureNamesRawValueAndFlag(self):
        result = Argument("--count", type=int).parse("abc")
        self.assertEqual(result.message, "can't parse raw value 'abc' for argument '--count'")

    def testEnumFailureNamesMissingCase(self):
        result = Argument("--color", type=Color).parse("blue")
        self.assertEqual(result.message, "case 'blue' doesn't exist in Color for argument '--color'")

    def testEnumValue(self):
        a = Argument("--color", type=Color)
        a.parse("green")
        self.assertIs(a.value, Color.GREEN)

    def testPlainTakesNoValue(self):
        self.assertFalse(Argument("--verbose").parse("x"))

    def testDefaultFallback(self):
        a = Argument("--count", type=int, default=5)
        self.assertTrue(a.has_default)
        self.assertEqual(a.value, 5)
        a.parse("7")
        self.assertEqual(a.value, 7)

    def testNoDefaultMeansNone(self):
        a = Argument("--count", type=int)
        self.assertFalse(a.has_default)
        self.assertIsNone(a.value)

    def testResetClearsValuesAndSelection(self):
        a = Argument("--tags", type=str, multiple=True)
        a.parse("x")
        a.reset()
        self.assertEqual(a.values, ())
        self.assertFalse(a.selected)

    def testParseRequiresString(self):
        with self.assertRaises(TypeError):
            Argument("--count", type=int).parse(3)


class TestCustomValidation(TestCase):
    """validator() and validate()."""

    def testValidationObservesConvertedValue(self):
        a = Argument("--count", type=int)

        @a.validator
        def positive():
            return a.value > 0 or "count must be positive"

        a.parse("-2")
        self.assertEqual(a.validate().message, "count must be positive")
        a.reset()
        a.parse("2")
        self.assertIs(a.validate(), ValidationResult.success)

    def testValidationInstalledOnlyOnce(self):
        a = Argument("--count", type=int, validation=lambda: True)
        with self.assertRaises(TypeError):
            a.validator(lambda: True)

    def testValidationMustBeCallable(self):
        with self.assertRaises(TypeError):
            Argument("--count", validation="nope")

    def testNoValidationSucceeds(self):
        self.assertTrue(Argument("--count").validate())


class TestCommandDeclaration(TestCase):
    """Construction of commands."""

    def testNameKept(self):
        c = Command("build", descr="build it")
        self.assertEqual(c.name, "build")
        self.assertEqual(c.descr, "build it")
        self.assertEqual(c.label, "build")

    def testInvalidNamesRejected(self):
        for name in ("", "  ", "two words", "-x"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Command(name)

    def testRequiresAcceptsSingleArgument(self):
        output = Argument("--output", type=str)
        self.assertEqual(Command("build", requires=output).requires, (output,))

    def testRequiresIsReadOnlyTuple(self):
        output = Argument("--output", type=str)
        self.assertIsInstance(Command("build", requires=[output]).requires, tuple)

    def testRequiresOnlyArguments(self):
        with self.assertRaises(TypeError):
            Command("build", requires=["--output"])

    def testTypedCommand(self):
        c = Command("run", type=int, default=1)
        self.assertIs(c.variant, Variant.TYPED)
        self.assertEqual(c.value, 1)
        self.assertTrue(c.parse("3"))
        self.assertEqual(c.value, 3)
        self.assertEqual(c.parse("4").message, "single value command 'run' already contains a value 3")

    def testOptionIsCommand(self):
        self.assertIs(Option, Command)


if __name__ == "__main__":
    unittest.main()
