"""
Faults module behavioral tests (codes, messages, rendering and triggering).

Scope
- Validate FaultCode normalization and host overrides via __main__.
- Validate TemplateError and ArgumentError messages and properties.
- Validate trigger() in raising and shell modes (console output captured).
- Validate getdoc() lookups.

Conventions
- Test method names follow CamelCase per project convention.
- The shared console is swapped for a recording console on a StringIO buffer.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

import optrone.faults
from optrone import (
    FaultCode,
    OptroneException,
    TemplateError,
    ArgumentError,
    TextRange,
    OptionTemplate,
    parse_strict,
    trigger,
    getdoc,
)


def capture():
    """a console writing to a fresh buffer, and the buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


class TestFaultCode(TestCase):
    """FaultCode normalization."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNRECOGNIZED_OPTION.normalize(), "11112")

    def testHostCanRelabelCodes(self):
        codes = {FaultCode.UNRECOGNIZED_OPTION: "E-OPT"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNRECOGNIZED_OPTION.normalize(), "E-OPT")
            self.assertEqual(FaultCode.MISSING_NAME.normalize(), "21101")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


class TestTemplateError(TestCase):
    """TemplateError message and properties."""

    def testMessageWithoutPath(self):
        error = TemplateError("bad", code=FaultCode.MISSING_NAME)
        self.assertEqual(str(error), "bad")
        self.assertEqual(error.location, "")

    def testMessageWithPath(self):
        error = TemplateError("bad", path=["subcommands[0]:add", "options[1]"])
        self.assertEqual(error.path, ("subcommands[0]:add", "options[1]"))
        self.assertEqual(str(error), "bad (at subcommands[0]:add.options[1])")

    def testIsValueError(self):
        self.assertIsInstance(TemplateError("bad"), ValueError)

    def testOptionsAreReadOnly(self):
        error = TemplateError("bad")
        with self.assertRaises(TypeError):
            error.options["path"] = ()


class TestArgumentError(TestCase):
    """ArgumentError positions and previews."""

    def testPositionAndPreview(self):
        error = ArgumentError("unrecognized option", command_line="add --bad", range=TextRange(4, 5))
        self.assertEqual(error.position, "1:4-1:8")
        self.assertEqual(error.preview, "1 | add --bad\n  |     ^~~~>\n")
        self.assertEqual(str(error), "1:4-1:8: unrecognized option\n1 | add --bad\n  |     ^~~~>\n")

    def testEmptyTokenHasNoPosition(self):
        error = ArgumentError("unrecognized subcommand", command_line="", range=TextRange(0, 0))
        self.assertEqual(error.position, "")
        self.assertEqual(error.preview, "")
        self.assertEqual(str(error), "unrecognized subcommand")

    def testRangePastTheEndHasEmptyPreview(self):
        error = ArgumentError("bad", command_line="ab", range=TextRange(5, 2))
        self.assertEqual(error.preview, "")
        self.assertEqual(error.position, "")
        self.assertEqual(str(error), "bad")

    def testWithoutRange(self):
        error = ArgumentError("bad")
        self.assertIsNone(error.range)
        self.assertIsNone(error.record)
        self.assertEqual(str(error), "bad")

    def testEmptyArgumentFromParse(self):
        with self.assertRaises(ArgumentError) as context:
            parse_strict([""])
        self.assertEqual(context.exception.code, FaultCode.UNRECOGNIZED_SUBCOMMAND)
        self.assertEqual(str(context.exception), "unrecognized subcommand")

    def testReplaceKeepsMessage(self):
        error = ArgumentError("bad", command_line="x", range=TextRange(0, 1))
        replaced = error.__replace__(hint="try again")
        self.assertIsInstance(replaced, ArgumentError)
        self.assertEqual(replaced.message, "bad")
        self.assertEqual(replaced.options["hint"], "try again")
        self.assertEqual(replaced.command_line, "x")


class TestTrigger(TestCase):
    """trigger() and rich rendering."""

    def error(self):
        with self.assertRaises(ArgumentError) as context:
            parse_strict(["--bad"], [OptionTemplate(long_names=["good"])])
        return context.exception

    def testRaisesOutsideShell(self):
        error = self.error()
        with self.assertRaises(ArgumentError):
            trigger(error)

    def testShellDeferredPrints(self):
        recorder, buffer = capture()
        with mock.patch.object(optrone.faults, "console", recorder):
            trigger(self.error(), shell=True, deferred=True, colorful=False)
        output = buffer.getvalue()
        self.assertIn("11112", output)
        self.assertIn("Unrecognized Option", output)
        self.assertIn("1:0-1:4: unrecognized option", output)
        self.assertIn("1 | --bad", output)
        self.assertIn("^~~~>", output)
        self.assertIn(" → ", output)

    def testShellExits(self):
        recorder, _ = capture()
        with mock.patch.object(optrone.faults, "console", recorder):
            with self.assertRaises(SystemExit) as context:
                trigger(self.error(), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)

    def testFancyPanel(self):
        recorder, buffer = capture()
        with mock.patch.object(optrone.faults, "console", recorder):
            trigger(TemplateError("bad", code=FaultCode.MISSING_NAME), shell=True, deferred=True, fancy=True)
        self.assertIn("bad", buffer.getvalue())
        self.assertIn("21101", buffer.getvalue())

    def testHostDocsAreRendered(self):
        recorder, buffer = capture()
        docs = {FaultCode.MISSING_NAME: "see the naming rules"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            with mock.patch.object(optrone.faults, "console", recorder):
                trigger(TemplateError("bad", code=FaultCode.MISSING_NAME), shell=True, deferred=True, colorful=False)
        self.assertIn("see the naming rules", buffer.getvalue())

    def testNonFaultRejected(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("bad"))

    def testBaseExceptionTriggers(self):
        with self.assertRaises(OptroneException):
            trigger(OptroneException("bad"))


class TestGetdoc(TestCase):
    """getdoc() lookups."""

    def testMissingDocIsNone(self):
        with mock.patch.object(sys.modules["__main__"], "__docs__", {}, create=True):
            self.assertIsNone(getdoc(FaultCode.MISSING_NAME))

    def testDocLookup(self):
        docs = {FaultCode.MISSING_NAME: "doc"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_NAME), "doc")

    def testNonCodeRejected(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


if __name__ == "__main__":
    unittest.main()
