"""
Arguments module behavioral tests.

Scope
- Validate word values (Boolean, String) and kinds (Unknown, Flag, Option, Word):
  payload validation, equality, immutability.
- Validate Arg construction defaults, chained mutators and their validation.
- Validate that copies are independent (registration relies on it).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argsxd import Arg, ArgKind, Boolean, Flag, Option, String, Unknown, Word, WordValue


class TestWordValue(TestCase):

    def testBooleanAccessors(self):
        value = Boolean(True)
        self.assertIs(value.as_bool(), True)
        self.assertIsNone(value.as_string())
        self.assertIs(value.value, True)

    def testStringAccessors(self):
        value = String("wordargument")
        self.assertEqual(value.as_string(), "wordargument")
        self.assertIsNone(value.as_bool())

    def testPayloadTypeChecked(self):
        with self.assertRaises(TypeError):
            Boolean("true")
        with self.assertRaises(TypeError):
            String(False)

    def testEqualityByCaseAndPayload(self):
        self.assertEqual(Boolean(False), Boolean(False))
        self.assertNotEqual(Boolean(False), Boolean(True))
        self.assertNotEqual(String(""), Boolean(False))
        self.assertEqual(len({String("a"), String("a"), String("b")}), 2)

    def testAbstractBaseRejected(self):
        with self.assertRaises(TypeError):
            WordValue()

    def testImmutable(self):
        value = String("a")
        with self.assertRaises(AttributeError):
            value._value = "b"

    def testRepr(self):
        self.assertEqual(repr(Boolean(True)), "boolean(True)")
        self.assertEqual(repr(String("x")), "string('x')")

    def testPickleRoundTrip(self):
        self.assertEqual(pickle.loads(pickle.dumps(String("x"))), String("x"))


class TestArgKind(TestCase):

    def testFlagRequiresBool(self):
        self.assertIs(Flag(True).value, True)
        with self.assertRaises(TypeError):
            Flag(1)

    def testOptionRequiresString(self):
        self.assertEqual(Option("monke").value, "monke")
        with self.assertRaises(TypeError):
            Option(3)

    def testUnknownCarriesNoValue(self):
        self.assertIsNone(Unknown().value)
        self.assertEqual(Unknown(), Unknown())
        with self.assertRaises(TypeError):
            Unknown(True)

    def testWordWrapsPlainValues(self):
        self.assertEqual(Word(False).value, Boolean(False))
        self.assertEqual(Word("").value, String(""))
        self.assertEqual(Word(String("x")), Word("x"))
        with self.assertRaises(TypeError):
            Word(1.5)

    def testKindsAreDistinct(self):
        self.assertNotEqual(Flag(False), Word(False))
        self.assertNotEqual(Option(""), Word(""))

    def testAbstractBaseRejected(self):
        with self.assertRaises(TypeError):
            ArgKind()

    def testRepr(self):
        self.assertEqual(repr(Flag(False)), "flag(False)")
        self.assertEqual(repr(Unknown()), "unknown()")
        self.assertEqual(repr(Word(True)), "word(boolean(True))")


class TestArg(TestCase):

    def testDefaults(self):
        arg = Arg("testflag")
        self.assertEqual(arg.name, "testflag")
        self.assertEqual(arg.short, "t")
        self.assertEqual(arg.help, "")
        self.assertEqual(arg.kind, Unknown())
        self.assertFalse(arg.required)
        self.assertFalse(arg.set)

    def testNameValidation(self):
        with self.assertRaises(TypeError):
            Arg(None)
        with self.assertRaises(ValueError):
            Arg("")

    def testChainedMutatorsReturnSelf(self):
        arg = Arg("testoption")
        self.assertIs(
            arg.alias("o").describe("This is a test option.").require().option("option"),
            arg,
        )
        self.assertEqual(arg.short, "o")
        self.assertEqual(arg.help, "This is a test option.")
        self.assertTrue(arg.required)
        self.assertEqual(arg.kind, Option("option"))

    def testKindMutators(self):
        self.assertEqual(Arg("a").flag().kind, Flag(False))
        self.assertEqual(Arg("a").flag(True).kind, Flag(True))
        self.assertEqual(Arg("a").option().kind, Option(""))
        self.assertEqual(Arg("a").word(Boolean(True)).kind, Word(True))
        self.assertEqual(Arg("a").word("value").kind, Word(String("value")))

    def testLastKindWins(self):
        self.assertEqual(Arg("a").flag(True).option("x").kind, Option("x"))

    def testAliasValidation(self):
        with self.assertRaises(ValueError):
            Arg("a").alias("ab")
        with self.assertRaises(ValueError):
            Arg("a").alias("")
        with self.assertRaises(TypeError):
            Arg("a").alias(1)

    def testDescribeAndRequireValidation(self):
        with self.assertRaises(TypeError):
            Arg("a").describe(None)
        with self.assertRaises(TypeError):
            Arg("a").require("yes")

    def testFieldsAreReadOnly(self):
        arg = Arg("a")
        with self.assertRaises(AttributeError):
            arg.set = True
        with self.assertRaises(AttributeError):
            arg.name = "b"

    def testCopyIsIndependent(self):
        arg = Arg("testflag").flag(False)
        clone = copy.copy(arg)
        clone.flag(True)
        clone._mark()
        self.assertEqual(arg.kind, Flag(False))
        self.assertFalse(arg.set)
        self.assertEqual(clone.kind, Flag(True))
        self.assertTrue(clone.set)

    def testRepr(self):
        self.assertEqual(
            repr(Arg("output").alias("o").describe("where").option("out.txt")),
            "arg(name='output', short='o', help='where', kind=option('out.txt'), required=False, set=False)",
        )


if __name__ == "__main__":
    unittest.main()
