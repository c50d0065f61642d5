"""
Flag set behavioral tests (declaration, binding, parsing, rendering).

Scope
- Validate flag()/option() declarations: names, destinations, inferred types.
- Validate binding: defaults and parsed values land on the bound target.
- Validate parsing: single/double dash spellings, inline values, stop-at-first-positional.
- Validate failures: unknown flags, missing values, failed conversions, choices.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from switchyard import FlagError, FlagSet, FlagSpec


class TestFlagDeclaration(TestCase):
    """Declaration-time rules and binding of defaults."""

    def testFlagDefaultBoundToTarget(self):
        target = SimpleNamespace()
        flags = FlagSet("run", target)
        flags.flag("verbose", "be chatty")
        self.assertIs(target.verbose, False)

    def testOptionDefaultBoundToTarget(self):
        target = SimpleNamespace()
        flags = FlagSet("run", target)
        flags.option("count", 3, "how many")
        self.assertEqual(target.count, 3)

    def testDashedNameUsesUnderscoreDestination(self):
        target = SimpleNamespace()
        flags = FlagSet("run", target)
        spec = flags.flag("dry-run")
        self.assertEqual(spec.dest, "dry_run")
        self.assertIs(target.dry_run, False)

    def testExplicitDestination(self):
        target = SimpleNamespace()
        flags = FlagSet("run", target)
        flags.option("out", "-", dest="output")
        self.assertEqual(target.output, "-")

    def testUnboundFlagSetKeepsValuesToItself(self):
        flags = FlagSet("run")
        flags.flag("verbose")
        self.assertEqual(dict(flags.values), {"verbose": False})

    def testOptionTypeInferredFromDefault(self):
        flags = FlagSet("run")
        self.assertIs(flags.option("ratio", 0.5).type, float)
        self.assertIs(flags.option("count", 1).type, int)
        self.assertIs(flags.option("name").type, str)

    def testOptionWithoutDefaultIsNone(self):
        flags = FlagSet("run")
        self.assertIsNone(flags.option("name").default)

    def testBooleanOptionRejected(self):
        flags = FlagSet("run")
        with self.assertRaises(TypeError):
            flags.option("verbose", True)

    def testDuplicateFlagRejected(self):
        flags = FlagSet("run")
        flags.flag("verbose")
        with self.assertRaises(ValueError):
            flags.option("verbose", "x")

    def testCollidingDestinationRejected(self):
        flags = FlagSet("run")
        flags.flag("dry-run")
        with self.assertRaises(ValueError):
            flags.flag("dry_run")

    def testInvalidNamesRejected(self):
        flags = FlagSet("run")
        for name in ("", "-verbose", "two words"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                flags.flag(name)

    def testFlagMayNotShadowTargetMethods(self):
        class Show:
            def info(self):
                return "show", "shows things"

            @property
            def size(self):
                return 1

        target = Show()
        flags = FlagSet("show", target)
        for name in ("info", "size"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                flags.flag(name)
        with self.assertRaises(ValueError):
            flags.option("label", dest="info")
        self.assertEqual(target.info(), ("show", "shows things"))
        self.assertEqual(len(flags), 0)

    def testUnboundFlagSetAcceptsAnyName(self):
        flags = FlagSet("show")
        flags.flag("info")
        self.assertIn("info", flags)

    def testIterationFollowsDeclarationOrder(self):
        flags = FlagSet("run")
        flags.option("zeta", "z")
        flags.flag("alpha")
        self.assertEqual([spec.name for spec in flags], ["zeta", "alpha"])
        self.assertTrue(all(isinstance(spec, FlagSpec) for spec in flags))
        self.assertEqual(len(flags), 2)
        self.assertIn("alpha", flags)
        self.assertNotIn("beta", flags)


class TestFlagParsing(TestCase):
    """Parsing rules and residual positional arguments."""

    def setUp(self):
        self.target = SimpleNamespace()
        self.flags = FlagSet("run", self.target)
        self.flags.flag("verbose", "be chatty")
        self.flags.option("count", 1, "how many")

    def testFlagSetsTargetAndLeavesPositionals(self):
        args = self.flags.parse(["-verbose", "x"])
        self.assertIs(self.target.verbose, True)
        self.assertEqual(args, ("x",))
        self.assertEqual(self.flags.args, ("x",))
        self.assertTrue(self.flags.parsed)

    def testDoubleDashSpellingAccepted(self):
        self.flags.parse(["--verbose"])
        self.assertIs(self.target.verbose, True)

    def testPresenceFlagInlineValue(self):
        self.flags.parse(["-verbose=false", "x"])
        self.assertIs(self.target.verbose, False)
        self.assertEqual(self.flags.args, ("x",))
        self.flags.parse(["--verbose=true"])
        self.assertIs(self.target.verbose, True)
        for value, expected in (("1", True), ("T", True), ("0", False), ("FALSE", False)):
            with self.subTest(value=value):
                self.flags.parse(["-verbose=" + value])
                self.assertIs(self.target.verbose, expected)

    def testPresenceFlagDoesNotTakeNextArgument(self):
        self.flags.parse(["-verbose", "false"])
        self.assertIs(self.target.verbose, True)
        self.assertEqual(self.flags.args, ("false",))

    def testPresenceFlagAfterValuedFlag(self):
        self.flags.parse(["-count", "2", "-verbose", "x"])
        self.assertEqual(self.target.count, 2)
        self.assertIs(self.target.verbose, True)
        self.assertEqual(self.flags.args, ("x",))

    def testPresenceFlagInvalidInlineValue(self):
        for value in ("maybe", "yes"):
            with self.subTest(value=value), self.assertRaises(FlagError):
                self.flags.parse(["-verbose=" + value])

    def testInlineAndSpacedValues(self):
        self.flags.parse(["-count=3"])
        self.assertEqual(self.target.count, 3)
        self.flags.parse(["-count", "4", "a", "b"])
        self.assertEqual(self.target.count, 4)
        self.assertEqual(self.flags.args, ("a", "b"))

    def testParsingStopsAtFirstPositional(self):
        self.flags.parse(["x", "-verbose"])
        self.assertIs(self.target.verbose, False)
        self.assertEqual(self.flags.args, ("x", "-verbose"))

    def testLeadingTerminatorDropped(self):
        self.flags.parse(["--", "-verbose"])
        self.assertIs(self.target.verbose, False)
        self.assertEqual(self.flags.args, ("-verbose",))

    def testNoArguments(self):
        self.assertEqual(self.flags.parse([]), ())
        self.assertEqual(self.target.count, 1)

    def testUnknownFlagRaises(self):
        with self.assertRaises(FlagError) as context:
            self.flags.parse(["-nope"])
        self.assertIn("-nope", str(context.exception))
        self.assertFalse(self.flags.parsed)

    def testMissingValueRaises(self):
        with self.assertRaises(FlagError):
            self.flags.parse(["-count"])

    def testConversionFailureRaises(self):
        with self.assertRaises(FlagError):
            self.flags.parse(["-count=many"])

    def testInvalidChoiceRaises(self):
        flags = FlagSet("mode")
        flags.option("mode", "fast", choices=("fast", "safe"))
        with self.assertRaises(FlagError):
            flags.parse(["-mode=slow"])
        flags.parse(["-mode=safe"])
        self.assertEqual(flags.values["mode"], "safe")

    def testNonStringArgumentsRejected(self):
        with self.assertRaises(TypeError):
            self.flags.parse(["-count", 3])


class TestFlagDefaults(TestCase):
    """Plain rendering of declared flags (help output)."""

    def testDefaultsListing(self):
        flags = FlagSet("run")
        flags.flag("verbose", "be chatty")
        flags.option("count", 3, "how many")
        flags.option("name", "", "who")
        plain = flags.defaults().plain
        lines = plain.splitlines()

        # Sorted by name: count, name, verbose.
        self.assertEqual([line.strip() for line in lines[0::2]], ["-count int", "-name str", "-verbose"])
        self.assertIn("how many (default 3)", lines[1])
        self.assertNotIn("default", lines[3])
        self.assertNotIn("default", lines[5])

    def testChoicesShown(self):
        flags = FlagSet("run")
        flags.option("mode", "fast", "speed", choices=("fast", "safe"))
        self.assertIn("(choices: fast, safe)", flags.defaults().plain)


if __name__ == "__main__":
    unittest.main()
