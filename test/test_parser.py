# python
"""
Parser behavioral tests (matching, faults, parse results).

Scope
- Validate command resolution and the unknown-command fault.
- Validate cardinal filling, greedy absorption, switches (long, short, inline).
- Validate fault classification: missing values, duplicates, conversions,
  unhandled tokens, missing arguments.
- Validate ParseResult helpers and determinism.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Parser, ParserSettings, Command, Cardinal, Option, Flag).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import Parser, ParserSettings, Command, Cardinal, Option, Flag, ValueType
from helmsman.faults import (
    MissingCommandError,
    DuplicateArgumentError,
    MissingValueError,
    TypeConversionError,
    MissingArgumentError,
    UnhandledArgumentError,
)


def _parser(settings=None):
    parser = Parser(settings) if settings is not None else Parser()
    parser.register(Command(
        "kick",
        Cardinal("target"),
        Option("reason", "r"),
        Flag("silent", "s"),
        help=True,
    ))
    parser.register(Command(
        "ban",
        Cardinal("target"),
        Option("duration", "d", ValueType.INTEGER, required=True),
        Option("scope", type=ValueType.TOKEN, choices=("server", "world"), default="server"),
    ))
    parser.register(Command("announce", Cardinal("message", greedy=True)))
    parser.register(Command("status"))
    parser.register(Command("trace", Flag("verbose", "v")))
    parser.register(Command("teleport", Cardinal("target"), Cardinal("x", ValueType.INTEGER, required=False)))
    return parser


def _kinds(result):
    return [type(error) for error in result.errors]


class TestResolution(TestCase):
    """Behavioral tests for command resolution."""

    def setUp(self):
        self.parser = _parser()

    def testUnknownCommandYieldsOneFatalFault(self):
        for line in ("frobnicate", "frobnicate --silent bob", "'kick me'"):
            with self.subTest(line=line):
                result = self.parser.parse(line)
                self.assertIsNone(result.command)
                self.assertEqual(_kinds(result), [MissingCommandError])
                self.assertTrue(result.fatal)
                self.assertEqual(result.values, {})
                self.assertEqual(result.unconsumed, ())

    def testUnknownCommandNamesTheToken(self):
        error, = self.parser.parse("frobnicate").errors
        self.assertIn("'frobnicate'", error.message)

    def testResolutionIsCaseInsensitive(self):
        result = self.parser.parse("KICK bob")
        self.assertEqual(result.command.name, "kick")
        self.assertEqual(result.values, {"target": "bob"})

    def testBlankLineYieldsEmptyResult(self):
        result = self.parser.parse("   ")
        self.assertIsNone(result.command)
        self.assertEqual(result.errors, ())
        self.assertFalse(result.fatal)


class TestCardinals(TestCase):
    """Behavioral tests for positional binding."""

    def setUp(self):
        self.parser = _parser()

    def testMissingRequiredCardinal(self):
        result = self.parser.parse("kick")
        kick = self.parser.registry.resolve("kick")
        self.assertIs(result.command, kick)
        self.assertEqual(result.missing, (kick.find("target"),))
        self.assertFalse(result.fatal)
        self.assertEqual(_kinds(result), [MissingArgumentError])

    def testOptionalCardinalMayBeOmitted(self):
        result = self.parser.parse("teleport bob")
        self.assertEqual(result.missing, ())
        self.assertEqual(result.errors, ())
        self.assertIsNone(result.find("x"))

    def testCardinalsFillInOrder(self):
        result = self.parser.parse("teleport bob -5")
        self.assertEqual(result.values, {"target": "bob", "x": -5})

    def testExcessTokensAreUnhandled(self):
        result = self.parser.parse("status extra1 extra2")
        self.assertEqual(result.unconsumed, ("extra1", "extra2"))
        self.assertEqual(_kinds(result), [UnhandledArgumentError, UnhandledArgumentError])
        self.assertFalse(result.fatal)

    def testUnhandledPositionIsReported(self):
        error = self.parser.parse("status extra1 extra2").errors[1]
        self.assertIn("third position", error.message)

    def testGreedyKeepsQuotedText(self):
        result = self.parser.parse('announce "hello world"')
        self.assertEqual(result.values, {"message": "hello world"})
        self.assertEqual(result.errors, ())

    def testGreedyJoinsTokens(self):
        result = self.parser.parse("announce  server   restart in 5")
        self.assertEqual(result.values["message"], "server restart in 5")

    def testGreedyAbsorbsDashedNumbers(self):
        result = self.parser.parse("announce -5 degrees -- brr")
        self.assertEqual(result.values["message"], "-5 degrees -- brr")

    def testGreedyAbsorbsUnknownDashedWords(self):
        result = self.parser.parse("announce meet at 5 -ish today")
        self.assertEqual(result.values["message"], "meet at 5 -ish today")
        self.assertEqual(result.unconsumed, ())
        self.assertEqual(result.errors, ())

    def testGreedyKeepsApostrophes(self):
        result = self.parser.parse("announce server's restarting in 5")
        self.assertEqual(result.values["message"], "server's restarting in 5")

    def testGreedyMissing(self):
        result = self.parser.parse("announce")
        self.assertEqual([argument.name for argument in result.missing], ["message"])


class TestSwitches(TestCase):
    """Behavioral tests for options and flags."""

    def setUp(self):
        self.parser = _parser()

    def testFlagLongAndShort(self):
        for line in ("trace -v", "trace --verbose"):
            with self.subTest(line=line):
                result = self.parser.parse(line)
                self.assertIs(result.values["verbose"], True)
                self.assertEqual(result.errors, ())

    def testUnboundFlagReadsFalse(self):
        self.assertIs(self.parser.parse("trace").find("verbose"), False)

    def testFlagInlineBoolean(self):
        self.assertIs(self.parser.parse("trace --verbose=off").values["verbose"], False)
        self.assertIs(self.parser.parse("trace -v=yes").values["verbose"], True)

    def testFlagInlineGarbage(self):
        result = self.parser.parse("trace --verbose=maybe")
        self.assertEqual(_kinds(result), [TypeConversionError])
        self.assertNotIn("verbose", result.values)

    def testOptionConsumesNextToken(self):
        for line in ("kick bob --reason spam", "kick bob -r spam", "kick --reason spam bob", "kick bob --reason=spam"):
            with self.subTest(line=line):
                result = self.parser.parse(line)
                self.assertEqual(result.values, {"target": "bob", "reason": "spam"})
                self.assertEqual(result.errors, ())

    def testOptionQuotedValue(self):
        result = self.parser.parse('kick bob -r "too much spam"')
        self.assertEqual(result.values["reason"], "too much spam")

    def testOptionWithoutValue(self):
        for line in ("kick bob --reason", "kick bob --reason="):
            with self.subTest(line=line):
                result = self.parser.parse(line)
                self.assertEqual(_kinds(result), [MissingValueError])
                self.assertTrue(result.fatal)
                self.assertNotIn("reason", result.values)

    def testOptionExplicitEmptyValue(self):
        result = self.parser.parse('kick bob -r ""')
        self.assertEqual(result.values, {"target": "bob", "reason": ""})
        self.assertEqual(result.errors, ())

    def testEmptyValueStillConverted(self):
        result = self.parser.parse('ban bob -d ""')
        self.assertEqual(_kinds(result), [TypeConversionError, MissingArgumentError])

    def testMissingValueMessage(self):
        error, = self.parser.parse("kick bob --reason").errors
        self.assertIn("'--reason'", error.message)
        self.assertIn("third position", error.message)
        self.assertIn("--reason=<string>", error.hint)

    def testDuplicateOptionKeepsFirst(self):
        result = self.parser.parse("kick bob -r first --reason second")
        self.assertEqual(_kinds(result), [DuplicateArgumentError])
        self.assertTrue(result.fatal)
        self.assertEqual(result.values["reason"], "first")
        self.assertEqual(result.unconsumed, ())

    def testDuplicateFlag(self):
        result = self.parser.parse("kick bob -s --silent")
        self.assertEqual(_kinds(result), [DuplicateArgumentError])
        self.assertIn("'--silent'", result.errors[0].message)

    def testUnknownSwitchIsUnhandled(self):
        result = self.parser.parse("kick bob --bogus -q")
        self.assertEqual(result.unconsumed, ("--bogus", "-q"))
        self.assertEqual(_kinds(result), [UnhandledArgumentError, UnhandledArgumentError])
        self.assertFalse(result.fatal)

    def testSwitchNamesAreCaseSensitive(self):
        result = self.parser.parse("kick bob --SILENT")
        self.assertEqual(result.unconsumed, ("--SILENT",))
        self.assertNotIn("silent", result.values)

    def testRequiredOptionMissing(self):
        result = self.parser.parse("ban bob")
        self.assertEqual([argument.name for argument in result.missing], ["duration"])
        self.assertFalse(result.fatal)


class TestConversion(TestCase):
    """Behavioral tests for value coercion."""

    def setUp(self):
        self.parser = _parser()

    def testIntegerOption(self):
        result = self.parser.parse("ban bob -d 30")
        self.assertEqual(result.values, {"target": "bob", "duration": 30})

    def testIntegerConversionFailure(self):
        result = self.parser.parse("ban bob -d soon")
        self.assertEqual(_kinds(result), [TypeConversionError, MissingArgumentError])
        self.assertTrue(result.fatal)
        self.assertNotIn("duration", result.values)

        error = result.errors[0]
        self.assertIn("'soon'", error.message)
        self.assertIn("integer", error.message)
        self.assertIn("third position", error.message)
        self.assertEqual(error.cause, "expected a base-10 integer")

    def testTokenChoice(self):
        result = self.parser.parse("ban bob -d 5 --scope WORLD")
        self.assertEqual(result.values["scope"], "world")

    def testTokenChoiceFailure(self):
        result = self.parser.parse("ban bob -d 5 --scope moon")
        self.assertEqual(_kinds(result), [TypeConversionError])
        self.assertIn("'server'", result.errors[0].hint)

    def testTokenDefault(self):
        self.assertEqual(self.parser.parse("ban bob -d 5").find("scope"), "server")

    def testCardinalConversionFailure(self):
        result = self.parser.parse("teleport bob north")
        self.assertEqual(_kinds(result), [TypeConversionError])
        self.assertIn("'x'", result.errors[0].message)


class TestParseResult(TestCase):
    """Behavioral tests for ParseResult helpers."""

    def setUp(self):
        self.parser = _parser()

    def testNamespaceCoversEveryArgument(self):
        result = self.parser.parse("kick bob")
        self.assertEqual(result.namespace(), {"target": "bob", "reason": None, "silent": False, "help": False})

    def testValuesAreReadOnly(self):
        result = self.parser.parse("kick bob")
        with self.assertRaises(TypeError):
            result.values["target"] = "alice"  # type: ignore[index]

    def testFindBySpecAndName(self):
        result = self.parser.parse("kick bob")
        target = result.command.find("target")
        self.assertEqual(result.find(target), "bob")
        self.assertEqual(result.find("reason", "none given"), "none given")

    def testFindUnknownNameRaises(self):
        with self.assertRaises(KeyError):
            self.parser.parse("kick bob").find("duration")

    def testWantsHelp(self):
        for line in ("kick --help", "kick -h", "kick bob -h"):
            with self.subTest(line=line):
                self.assertTrue(self.parser.parse(line).wants_help)
        self.assertFalse(self.parser.parse("kick bob").wants_help)
        self.assertFalse(self.parser.parse("status").wants_help)

    def testDeterminism(self):
        for line in ("kick bob -r spam", "ban bob -d soon --bogus x", "frobnicate", "kick", "status a b"):
            with self.subTest(line=line):
                self.assertEqual(self.parser.parse(line), self.parser.parse(line))


class TestSettings(TestCase):
    """Behavioral tests for configurable prefixes."""

    def testCustomPrefixes(self):
        parser = _parser(ParserSettings("/", "+", ":"))
        result = parser.parse("kick bob /reason:spam +s")
        self.assertEqual(result.values, {"target": "bob", "reason": "spam", "silent": True})

    def testInvalidSettingsRejected(self):
        with self.assertRaises(ValueError):
            ParserSettings("-", "-")
        with self.assertRaises(ValueError):
            ParserSettings("-", "--")
        with self.assertRaises(ValueError):
            ParserSettings("--", "-", "")
        with self.assertRaises(TypeError):
            ParserSettings(1)  # type: ignore[arg-type]

    def testParserRejectsForeignSettings(self):
        with self.assertRaises(TypeError):
            Parser({"prefix_long": "--"})  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
