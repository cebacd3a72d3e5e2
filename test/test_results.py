# python
"""
ValidationResult behavioral tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import ValidationResult


class TestValidationResult(TestCase):

    def testSuccessIsSingleton(self):
        self.assertIs(ValidationResult(), ValidationResult.success)

    def testSuccessIsTruthyWithoutMessage(self):
        self.assertTrue(ValidationResult.success)
        self.assertTrue(ValidationResult.success.succeeded)
        self.assertIsNone(ValidationResult.success.message)

    def testFailureIsFalsyWithMessage(self):
        result = ValidationResult.fail("bad value")
        self.assertFalse(result)
        self.assertFalse(result.succeeded)
        self.assertEqual(result.message, "bad value")

    def testFailureMessageMustBeNonEmptyString(self):
        with self.assertRaises(ValueError):
            ValidationResult.fail("   ")
        with self.assertRaises(TypeError):
            ValidationResult.fail(3)

    def testEquality(self):
        self.assertEqual(ValidationResult.fail("x"), ValidationResult.fail("x"))
        self.assertNotEqual(ValidationResult.fail("x"), ValidationResult.success)

    def testRepr(self):
        self.assertEqual(repr(ValidationResult.success), "ValidationResult.success")
        self.assertEqual(repr(ValidationResult.fail("x")), "ValidationResult.fail('x')")


class TestCoerce(TestCase):

    def testResultKept(self):
        result = ValidationResult.fail("x")
        self.assertIs(ValidationResult.coerce(result), result)

    def testTrueAndNoneMeanSuccess(self):
        self.assertIs(ValidationResult.coerce(True), ValidationResult.success)
        self.assertIs(ValidationResult.coerce(None), ValidationResult.success)

    def testFalseIsGenericFailure(self):
        self.assertEqual(ValidationResult.coerce(False).message, "validation invalid")

    def testStringIsFailureMessage(self):
        self.assertEqual(ValidationResult.coerce("too small").message, "too small")

    def testOtherShapesRejected(self):
        with self.assertRaises(TypeError):
            ValidationResult.coerce(1)


if __name__ == "__main__":
    unittest.main()
