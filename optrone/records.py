"""
Parse results: per-token validity, template matches and parsed-argument records.

A match is exactly one of OptionMatch(template) or SubcommandMatch(template); an
unmatched token has no match at all (None). Records and matches hold plain
references to the caller's templates: they are back-references into a forest the
caller owns, valid for as long as the caller keeps that forest, and never a reason
to keep one alive.
"""
import enum
from collections import namedtuple


class Validity(enum.Enum):
    VALID = "valid"
    UNRECOGNIZED_OPTION = "unrecognized option"
    UNRECOGNIZED_SUBCOMMAND = "unrecognized subcommand"
    NOT_ENOUGH_VALUES = "not enough values"

    def __bool__(self):
        return self is Validity.VALID


class OptionMatch(namedtuple("OptionMatch", ("template",))):
    """the token named an option template."""
    __slots__ = ()


class SubcommandMatch(namedtuple("SubcommandMatch", ("template",))):
    """the token named a subcommand template."""
    __slots__ = ()


class ParsedArgument(namedtuple("ParsedArgument", ("token", "validity", "parsed", "match", "values"))):
    """
    one entry of a parse result.

    fields
    - token: the Token the record originates from.
    - validity: Validity of the outcome.
    - parsed: False only for "--" and the leftovers after it, which are never matched.
    - match: OptionMatch | SubcommandMatch | None.
    - values: tuple of explicit values followed by applied defaults, or the whole
      variadic tail.
    """
    __slots__ = ()

    @property
    def option(self):
        """the matched option template, or None."""
        return self.match.template if isinstance(self.match, OptionMatch) else None

    @property
    def subcommand(self):
        """the matched subcommand template, or None."""
        return self.match.template if isinstance(self.match, SubcommandMatch) else None

    @property
    def range(self):
        return self.token.range

    @property
    def valid(self):
        return self.validity is Validity.VALID


__all__ = (
    "Validity",
    "OptionMatch",
    "SubcommandMatch",
    "ParsedArgument",
)
