"""
Commands module behavioral tests (parsing, binding, faults, rendering).

Scope
- Validate the parse result of common invocations (success, help, error).
- Validate tokenization forms: inline values, short aliases, bundles, '--'.
- Validate binding order: flags, fixed positionals, variadic tail.
- Validate strict/permissive policies and structural faults.
- Validate eager declaration checks and aggregated validation errors.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, command, invoke, run, Argument).
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase

from argschema import Argument, Command, command, invoke, run
from argschema import Success, Help, Error, Ok, Failed
from argschema.faults import (
    MalformedTokenError,
    UnknownSwitchError,
    MissingValueError,
    DuplicatedSwitchError,
    UnexpectedCardinalError,
    HelpRequested,
    ValidationError,
)
from argschema.validators import Integer, Number, Sequence, Optional


def greeter(**options):
    return Command("greet", "say hello to someone", {
        "name": Argument(str, short="n", descr="who to greet"),
    }, **options)


class TestScenarios(TestCase):
    """The reference invocations of a single command."""

    def testRequiredStringFlag(self):
        result = greeter().parse(["--name", "Alice"])
        self.assertEqual(result, Success({"name": "Alice"}))
        self.assertEqual(result.type, "success")

    def testHelpCarriesDescription(self):
        result = greeter().parse(["--help"])
        self.assertEqual(result.type, "help")
        self.assertIn("say hello to someone", result.help)
        self.assertIn("usage: greet", result.help)

    def testMissingRequiredNamesKey(self):
        result = greeter().parse([])
        self.assertEqual(result.type, "error")
        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(result.error.keys, ("name",))
        self.assertEqual(result.error.issues[0].reason, "required")
        self.assertIn("usage: greet", result.help)

    def testVariadicCollectsPositionals(self):
        collect = Command("collect", args={"items": Argument(Sequence(str), positional=...)})
        self.assertEqual(collect.parse(["a", "b", "c"]), Success({"items": ["a", "b", "c"]}))

    def testVariadicMayBeEmpty(self):
        collect = Command("collect", args={"items": Argument(str, positional=...)})
        self.assertEqual(collect.parse([]), Success({"items": []}))


class TestProperties(TestCase):
    """Invariants that hold for every schema and token sequence."""

    def setUp(self):
        self.command = Command("scale", "scale a value", {
            "count": Argument(Integer(min=1), short="c"),
            "ratio": Argument(Number()),
            "label": Argument(Optional(str, default="none")),
            "verbose": Argument(bool, short="v"),
        })

    def testOneKeyPerDeclaredArgument(self):
        result = self.command.parse(["-c", "2", "--ratio", "0.5"])
        self.assertEqual(result, Success({"count": 2, "ratio": 0.5, "label": "none", "verbose": False}))

    def testEveryInvalidArgumentReported(self):
        result = self.command.parse(["--count", "0", "--ratio", "half"])
        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(result.error.keys, ("count", "ratio"))
        self.assertEqual(result.error.message, "2 invalid arguments: 'count', 'ratio'")

    def testIdempotence(self):
        for tokens in (["-c", "2", "--ratio", "1"], ["--count", "x"], ["--bogus"], ["--help"]):
            self.assertEqual(self.command.parse(tokens), self.command.parse(tokens))

    def testHelpShortCircuits(self):
        for tokens in (["--help"], ["-h"], ["--bogus", "--help"], ["--count", "x", "-h"], ["stray", "--help"]):
            self.assertEqual(self.command.parse(tokens).type, "help")

    def testHelpAfterTerminatorIsPositional(self):
        collect = Command("collect", args={"items": Argument(str, positional=...)})
        self.assertEqual(collect.parse(["--", "--help"]), Success({"items": ["--help"]}))


class TestTokenization(TestCase):
    """Flag spellings, inline values and special tokens."""

    def testPromptString(self):
        self.assertEqual(invoke(greeter(), "--name 'Alice Smith'"), Success({"name": "Alice Smith"}))

    def testInlineValues(self):
        self.assertEqual(greeter().parse(["--name=Alice"]), Success({"name": "Alice"}))
        self.assertEqual(greeter().parse(["-nAlice"]), Success({"name": "Alice"}))
        self.assertEqual(greeter().parse(["-n=Alice"]), Success({"name": "Alice"}))
        self.assertEqual(greeter().parse(["-n", "Alice"]), Success({"name": "Alice"}))

    def testBundledBooleans(self):
        tool = Command("tool", args={
            "all": Argument(bool, short="a"),
            "brief": Argument(bool, short="b"),
        })
        self.assertEqual(tool.parse(["-ab"]), Success({"all": True, "brief": True}))
        self.assertEqual(tool.parse(["--brief=false"]), Success({"all": False, "brief": False}))

    def testKeyUnderscoresAndDashes(self):
        tool = Command("tool", args={"dry_run": Argument(bool)})
        self.assertEqual(tool.parse(["--dry-run"]), Success({"dry_run": True}))
        self.assertEqual(tool.parse(["--dry_run"]), Success({"dry_run": True}))

    def testNegativeNumberAndDashArePositional(self):
        tool = Command("tool", args={"n": Argument(int, positional=0)})
        self.assertEqual(tool.parse(["-5"]), Success({"n": -5}))
        echo = Command("echo", args={"path": Argument(str, positional=0)})
        self.assertEqual(echo.parse(["-"]), Success({"path": "-"}))

    def testOptionValueMayBeNegative(self):
        tool = Command("tool", args={"offset": Argument(int)})
        self.assertEqual(tool.parse(["--offset", "-2"]), Success({"offset": -2}))

    def testRepeatedSequenceFlagAccumulates(self):
        tool = Command("tool", args={"tags": Argument(Sequence(str), short="t")})
        self.assertEqual(tool.parse(["-t", "a", "--tags", "b", "--tags=c"]), Success({"tags": ["a", "b", "c"]}))
        self.assertEqual(tool.parse([]), Success({"tags": []}))

    def testMissingValue(self):
        result = greeter().parse(["--name"])
        self.assertIsInstance(result.error, MissingValueError)
        self.assertEqual(result.error.input, "--name")
        result = Command("tool", args={"a": Argument(str), "b": Argument(bool)}).parse(["--a", "--b"])
        self.assertIsInstance(result.error, MissingValueError)

    def testMalformedToken(self):
        for token in ("--=x", "---name", "-_"):
            self.assertIsInstance(greeter().parse([token]).error, MalformedTokenError)

    def testDuplicatedFlag(self):
        result = greeter().parse(["--name", "a", "-n", "b"])
        self.assertIsInstance(result.error, DuplicatedSwitchError)
        self.assertEqual(result.error.index, 3)


class TestBinding(TestCase):
    """Flags first, then fixed indices, then the variadic tail."""

    def setUp(self):
        self.copy = Command("copy", "copy files", {
            "src": Argument(str, positional=0),
            "dst": Argument(str, positional=1),
            "rest": Argument(str, positional=...),
        })

    def testFixedThenVariadic(self):
        self.assertEqual(
            self.copy.parse(["a", "b", "c", "d"]),
            Success({"src": "a", "dst": "b", "rest": ["c", "d"]}),
        )

    def testFlagWinsOverPosition(self):
        self.assertEqual(
            self.copy.parse(["--src", "x", "a", "b"]),
            Success({"src": "x", "dst": "b", "rest": ["a"]}),
        )

    def testMissingFixedPositionalNamesKey(self):
        result = self.copy.parse(["a"])
        self.assertEqual(result.error.keys, ("dst",))

    def testTerminator(self):
        self.assertEqual(
            self.copy.parse(["a", "--", "-b", "--c"]),
            Success({"src": "a", "dst": "-b", "rest": ["--c"]}),
        )


class TestPolicies(TestCase):
    """Strict, permissive and positional-less commands."""

    def testUnknownFlagStrict(self):
        result = greeter().parse(["--nme", "Alice"])
        self.assertIsInstance(result.error, UnknownSwitchError)
        self.assertEqual(result.error.input, "--nme")
        self.assertIn("--name", result.error.suggestions)
        self.assertIn("first position", result.error.message)

    def testUnknownFlagPermissive(self):
        result = greeter(strict=False).parse(["--name", "Alice", "--extra", "stray", "-x"])
        self.assertEqual(result, Success({"name": "Alice"}))

    def testUnexpectedPositionalStrict(self):
        result = greeter().parse(["--name", "Alice", "extra"])
        self.assertIsInstance(result.error, UnexpectedCardinalError)
        self.assertEqual(result.error.token, "extra")
        self.assertEqual(result.error.index, 3)
        self.assertIn("third position", result.error.message)

    def testPositionalsDisabled(self):
        result = greeter(strict=False, positionals=False).parse(["--name", "Alice", "extra"])
        self.assertIsInstance(result.error, UnexpectedCardinalError)

    def testHelperDisabledFreesShortH(self):
        tool = Command("tool", args={"host": Argument(str, short="h")}, helper=False)
        self.assertEqual(tool.parse(["-h", "localhost"]), Success({"host": "localhost"}))
        self.assertEqual(tool.parse(["--help"]).type, "help")
        self.assertEqual(tool.helps, ("--help",))


class TestDeclaration(TestCase):
    """Declaration defects are raised eagerly at construction."""

    def testDuplicateShort(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"a": Argument(str, short="x"), "b": Argument(str, short="x")})

    def testDuplicateIndex(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"a": Argument(str, positional=0), "b": Argument(str, positional=0)})

    def testVariadicPlacement(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"a": Argument(str, positional=...), "b": Argument(str, positional=...)})
        with self.assertRaises(ValueError):
            Command("tool", args={"a": Argument(str, positional=...), "b": Argument(str, positional=0)})

    def testReservedNames(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"help": Argument(bool)})
        with self.assertRaises(ValueError):
            Command("tool", args={"host": Argument(str, short="h")})

    def testInvalidKeysAndNames(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"1st": Argument(str)})
        with self.assertRaises(ValueError):
            Command("tool", args={"dry_run": Argument(bool), "dry-run": Argument(bool)})
        with self.assertRaises(ValueError):
            Command("two words")
        with self.assertRaises(TypeError):
            Command("tool", args=5)

    def testPositionalWhenDisabled(self):
        with self.assertRaises(ValueError):
            Command("tool", args={"a": Argument(str, positional=0)}, positionals=False)

    def testBareValidatorsAccepted(self):
        tool = Command("tool", args={"count": int})
        self.assertIsInstance(tool.args["count"], Argument)
        self.assertEqual(tool.parse(["--count", "3"]), Success({"count": 3}))

    def testArgsAreReadOnlyCopies(self):
        tool = greeter()
        tool.args["other"] = Argument(str)
        self.assertEqual(list(tool.args), ["name"])
        with self.assertRaises(AttributeError):
            tool.name = "other"

    def testFactoryKeepsKeywordOrder(self):
        tool = command("tool", "a tool", beta=Argument(str), alpha=Argument(int))
        self.assertEqual(list(tool.args), ["beta", "alpha"])
        self.assertEqual(tool.descr, "a tool")


class TestRendering(TestCase):
    """Plain help text produced for results."""

    def testArgumentsSection(self):
        tool = Command("tool", "do things", {
            "name": Argument(str, short="n", descr="who"),
            "quiet": Argument(bool, short="q"),
            "files": Argument(str, positional=...),
        })
        help = tool.render().plain
        self.assertTrue(help.startswith("usage: tool"))
        self.assertIn("arguments:", help)
        self.assertIn("-n, --name <string>", help)
        self.assertIn("who (required)", help)
        self.assertIn("-q, --quiet", help)
        self.assertIn("(remaining positionals)", help)
        self.assertIn("-h, --help", help)
        self.assertLess(help.index("--name"), help.index("--quiet"))

    def testRouteInUsage(self):
        self.assertIn("usage: app greet", greeter().render(route=("app", "greet")).plain)


class TestSafeParse(TestCase):
    """Ok/Failed shape."""

    def testOk(self):
        result = greeter().safe_parse(["-n", "Alice"])
        self.assertEqual(result, Ok({"name": "Alice"}))
        self.assertTrue(result.ok)

    def testFailedValidation(self):
        result = greeter().safe_parse([])
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, ValidationError)

    def testFailedHelp(self):
        result = greeter().safe_parse(["--help"])
        self.assertIsInstance(result, Failed)
        self.assertIsInstance(result.error, HelpRequested)
        self.assertIn("say hello to someone", result.error.help)


class TestEntryPoints(TestCase):
    """invoke() and run()."""

    def testInvokeRejectsNonCommands(self):
        with self.assertRaises(TypeError):
            invoke(object(), [])

    def testInvokeRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            invoke(greeter(), ["--name", 1])

    def testRunReturnsSuccess(self):
        self.assertEqual(run(greeter(), ["-n", "Alice"]), Success({"name": "Alice"}))

    def testRunExitsOnError(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream), self.assertRaises(SystemExit) as context:
            run(greeter(), [], colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("usage: greet", stream.getvalue())

    def testRunExitsOnHelp(self):
        stream = io.StringIO()
        with contextlib.redirect_stdout(stream), self.assertRaises(SystemExit) as context:
            run(greeter(), ["--help"], colorful=False)
        self.assertEqual(context.exception.code, 0)
        self.assertIn("say hello to someone", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
