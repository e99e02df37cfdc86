"""
Validator module behavioral tests (structural rules, paths, idempotence).

Scope
- Validate every structural rule on options and subcommands.
- Validate fault codes and nesting paths reported by TemplateError.
- Validate that validation is repeatable and runs before any argument is read.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optrone import (
    OptionTemplate,
    SubcommandTemplate,
    TemplateError,
    FaultCode,
    validate_templates,
    parse_arguments,
    get_help_message,
)


class TestOptionRules(TestCase):
    """Structural rules for option templates."""

    def assertFault(self, code, options=(), subcommands=()):
        with self.assertRaises(TemplateError) as context:
            validate_templates(options, subcommands)
        self.assertEqual(context.exception.code, code)
        return context.exception

    def testValidForestPasses(self):
        options = [
            OptionTemplate(short_names="v", long_names=["verbose"]),
            OptionTemplate(long_names=["color"], params=["when"], defaults=["auto"]),
            OptionTemplate(long_names=["files"], variadic="+"),
        ]
        validate_templates(options, [])

    def testOptionRequiresAtLeastOneName(self):
        fault = self.assertFault(FaultCode.MISSING_NAME, [OptionTemplate()])
        self.assertEqual(fault.path, ("options[0]",))

    def testLongNameTooShort(self):
        self.assertFault(FaultCode.MALFORMED_NAME, [OptionTemplate(long_names=["a"])])

    def testLongNameMustBeLowercase(self):
        self.assertFault(FaultCode.UPPERCASE_NAME, [OptionTemplate(long_names=["Verbose"])])

    def testLongNameReservedCharacters(self):
        self.assertFault(FaultCode.RESERVED_CHARACTER, [OptionTemplate(long_names=["a=b"])])
        self.assertFault(FaultCode.RESERVED_CHARACTER, [OptionTemplate(long_names=["a:b"])])

    def testLongNameReservedPrefix(self):
        self.assertFault(FaultCode.RESERVED_PREFIX, [OptionTemplate(long_names=["-all"])])
        self.assertFault(FaultCode.RESERVED_PREFIX, [OptionTemplate(long_names=["/all"])])

    def testShortNameMustBeLowercase(self):
        self.assertFault(FaultCode.UPPERCASE_NAME, [OptionTemplate(short_names="A")])

    def testShortNameReservedCharacters(self):
        for char in "-/=:":
            with self.subTest(char=char):
                self.assertFault(FaultCode.RESERVED_CHARACTER, [OptionTemplate(short_names=char)])

    def testShortNameMustBeSingleCharacter(self):
        self.assertFault(FaultCode.MALFORMED_NAME, [OptionTemplate(short_names=["ab"])])

    def testShortNameMustBeAscii(self):
        self.assertFault(FaultCode.MALFORMED_NAME, [OptionTemplate(short_names="é")])

    def testDigitShortNameAccepted(self):
        validate_templates([OptionTemplate(short_names="1")], [])

    def testMoreDefaultsThanParams(self):
        self.assertFault(
            FaultCode.TOO_MANY_DEFAULTS,
            [OptionTemplate(short_names="a", params=["x"], defaults=["1", "2"])]
        )

    def testDefaultsWithVariadic(self):
        self.assertFault(
            FaultCode.DEFAULTS_WITH_VARIADIC,
            [OptionTemplate(short_names="a", params=["x"], defaults=["1"], variadic=True)]
        )


class TestSubcommandRules(TestCase):
    """Structural rules for subcommand templates."""

    def assertFault(self, code, subcommands):
        with self.assertRaises(TemplateError) as context:
            validate_templates([], subcommands)
        self.assertEqual(context.exception.code, code)
        return context.exception

    def testSubcommandRequiresAtLeastOneName(self):
        self.assertFault(FaultCode.MISSING_NAME, [SubcommandTemplate()])

    def testEmptyNameRejected(self):
        self.assertFault(FaultCode.MALFORMED_NAME, [SubcommandTemplate("")])

    def testSingleCharacterNameAccepted(self):
        validate_templates([], [SubcommandTemplate("a")])

    def testNameRules(self):
        self.assertFault(FaultCode.UPPERCASE_NAME, [SubcommandTemplate("Add")])
        self.assertFault(FaultCode.RESERVED_CHARACTER, [SubcommandTemplate("a=b")])
        self.assertFault(FaultCode.RESERVED_PREFIX, [SubcommandTemplate("-add")])

    def testDefaultsWithVariadic(self):
        self.assertFault(
            FaultCode.DEFAULTS_WITH_VARIADIC,
            [SubcommandTemplate("add", params=["x"], defaults=["1"], variadic="*")]
        )

    def testVariadicWithNestedSubcommands(self):
        self.assertFault(
            FaultCode.VARIADIC_WITH_SUBCOMMANDS,
            [SubcommandTemplate("add", variadic="+", subcommands=[SubcommandTemplate("now")])]
        )

    def testDefaultsWithNestedSubcommands(self):
        self.assertFault(
            FaultCode.DEFAULTS_WITH_SUBCOMMANDS,
            [SubcommandTemplate("add", params=["x"], defaults=["1"], subcommands=[SubcommandTemplate("now")])]
        )

    def testParamsWithNestedSubcommandsAccepted(self):
        validate_templates([], [SubcommandTemplate("add", params=["x"], subcommands=[SubcommandTemplate("now")])])

    def testNestedOptionFaultReportsPath(self):
        bad = OptionTemplate(long_names=["Bad"])
        fault = self.assertFault(
            FaultCode.UPPERCASE_NAME,
            [SubcommandTemplate("list"), SubcommandTemplate("add", options=[OptionTemplate(short_names="q"), bad])]
        )
        self.assertIs(fault.template, bad)
        self.assertEqual(fault.path, ("subcommands[1]:add", "options[1]:Bad"))
        self.assertIn("at subcommands[1]:add.options[1]:Bad", str(fault))

    def testDeeplyNestedSubcommandFaultReportsPath(self):
        fault = self.assertFault(
            FaultCode.MISSING_NAME,
            [SubcommandTemplate("a", subcommands=[SubcommandTemplate("b", subcommands=[SubcommandTemplate()])])]
        )
        self.assertEqual(fault.path, ("subcommands[0]:a", "subcommands[0]:b", "subcommands[0]"))


class TestForest(TestCase):
    """Forest-level behavior: foreign objects, idempotence, ordering."""

    def testForeignObjectInForest(self):
        with self.assertRaises(TemplateError) as context:
            validate_templates(["--verbose"], [])
        self.assertEqual(context.exception.code, FaultCode.MALFORMED_TEMPLATE)
        self.assertEqual(context.exception.path, ("options[0]",))

    def testSubcommandInOptionForestRejected(self):
        with self.assertRaises(TemplateError):
            validate_templates([SubcommandTemplate("add")], [])

    def testTemplateErrorIsValueError(self):
        with self.assertRaises(ValueError):
            validate_templates([OptionTemplate()], [])

    def testRevalidatingValidForestNeverFails(self):
        options = [OptionTemplate(short_names="v")]
        subcommands = [SubcommandTemplate("add", options=[OptionTemplate(long_names=["due"], params=["date"])])]
        for _ in range(3):
            validate_templates(options, subcommands)

    def testRevalidatingMalformedForestRaisesSameError(self):
        subcommands = [SubcommandTemplate("add", options=[OptionTemplate(long_names=["x"])])]
        faults = []
        for _ in range(2):
            with self.assertRaises(TemplateError) as context:
                validate_templates([], subcommands)
            faults.append(context.exception)
        first, second = faults
        self.assertEqual(first.code, second.code)
        self.assertEqual(first.path, second.path)
        self.assertEqual(str(first), str(second))
        self.assertIs(first.template, second.template)

    def testOptionsAreCheckedBeforeSubcommands(self):
        with self.assertRaises(TemplateError) as context:
            validate_templates([OptionTemplate()], [SubcommandTemplate()])
        self.assertEqual(context.exception.path, ("options[0]",))

    def testParseValidatesBeforeReadingArguments(self):
        # A non-string argument would be a TypeError, but templates come first.
        with self.assertRaises(TemplateError):
            parse_arguments([object()], [OptionTemplate()], [])

    def testHelpValidatesTemplates(self):
        with self.assertRaises(TemplateError):
            get_help_message([], [SubcommandTemplate("Add")])


if __name__ == "__main__":
    unittest.main()
