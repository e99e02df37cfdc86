"""
The parse driver and its strict convenience layer.

parse_arguments() validates the template forests, tokenizes the arguments and
walks the tokens once, keeping a single piece of state: the active subcommand
scope (None at first, meaning global).

- regular token: resolved as a subcommand (scope children, then global). A match
  collects its values, emits a record and becomes the new scope. A miss emits an
  UNRECOGNIZED_SUBCOMMAND record and keeps the scope (or resets it to global with
  reset_scope=True).
- option-shaped token: resolved as an option (scope options, then global). A match
  collects its values and emits a record; a miss emits UNRECOGNIZED_OPTION. Options
  never change the scope.
- "--": the terminator and every following token are emitted as unparsed, valid
  records without a match or values.

Bad input never raises: every token gets a record, so a caller can report every
problem at once. Bad templates raise TemplateError before any token is read.
parse_strict() is the raising alternative: it elevates the first problem into an
ArgumentError carrying a preview of the command line.
"""
import logging

from .collector import collect_values
from .faults import ArgumentError, FaultCode
from .matcher import match_option, match_subcommand
from .records import ParsedArgument, Validity
from .tokens import TokenKind, command_line, tokenize
from .validator import validate_templates

logger = logging.getLogger(__name__)

_CODES = {
    Validity.UNRECOGNIZED_OPTION: FaultCode.UNRECOGNIZED_OPTION,
    Validity.UNRECOGNIZED_SUBCOMMAND: FaultCode.UNRECOGNIZED_SUBCOMMAND,
    Validity.NOT_ENOUGH_VALUES: FaultCode.NOT_ENOUGH_VALUES,
}

_MESSAGES = {
    Validity.UNRECOGNIZED_OPTION: "unrecognized option",
    Validity.UNRECOGNIZED_SUBCOMMAND: "unrecognized subcommand",
    Validity.NOT_ENOUGH_VALUES: "not enough values provided for parameters",
}

_HINTS = {
    Validity.UNRECOGNIZED_OPTION: "check the spelling of the option, or whether it belongs to another subcommand",
    Validity.UNRECOGNIZED_SUBCOMMAND: "check the spelling of the subcommand; use '--' to pass values verbatim",
    Validity.NOT_ENOUGH_VALUES: "provide a value for every required parameter",
}


def parse_arguments(args, options=(), subcommands=(), /, *, insensitive=True, reset_scope=False):
    """
    parse raw arguments (program name excluded) against option and subcommand templates.

    parameters
    - args: iterable of strings.
    - options / subcommands: the global OptionTemplate and SubcommandTemplate forests.
    - insensitive: match switch names ("/x", "/name") ignoring case.
    - reset_scope: drop back to the global scope after an unrecognized subcommand.

    returns a tuple of ParsedArgument, in token order.

    raises
    - TemplateError: when the templates are malformed (checked on every call).
    - TypeError: when args is not an iterable of strings.
    """
    options, subcommands = tuple(options), tuple(subcommands)
    validate_templates(options, subcommands)

    tokens, _ = tokenize(args)

    records = []
    scope = None
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        match token.kind:
            case TokenKind.TERMINATOR:
                logger.debug("end of options at %d, %d leftover(s)", token.range.begin, len(tokens) - index)
                records.extend(ParsedArgument(leftover, Validity.VALID, False, None, ()) for leftover in tokens[index - 1:])
                break
            case TokenKind.REGULAR:
                if (found := match_subcommand(token, scope, subcommands)) is None:
                    logger.debug("unrecognized subcommand %r", token.value)
                    records.append(ParsedArgument(token, Validity.UNRECOGNIZED_SUBCOMMAND, True, None, ()))
                    if reset_scope:
                        scope = None
                    continue
                scope = found.template
                logger.debug("entered subcommand %r", token.value)
            case _:
                if (found := match_option(token, scope, options, insensitive=insensitive)) is None:
                    logger.debug("unrecognized option %r", token.value)
                    records.append(ParsedArgument(token, Validity.UNRECOGNIZED_OPTION, True, None, ()))
                    continue

        values, validity, consumed = collect_values(tokens, index, found.template)
        index += consumed
        records.append(ParsedArgument(token, validity, True, found, values))

    return tuple(records)


def problems(records, /):
    """yield every record whose validity is not VALID, in order."""
    for record in records:
        if not record.valid:
            yield record


def elevate(record, args, /, **options):
    """
    build the ArgumentError describing a non-valid record.

    args are the raw arguments the record was parsed from; extra options are
    forwarded to the error (e.g. hint, colorful).
    """
    if record.valid:
        raise ValueError("elevate() record must not be valid")
    return ArgumentError(
        _MESSAGES[record.validity],
        **{
            "code": _CODES[record.validity],
            "title": record.validity.value,
            "hint": _HINTS[record.validity],
            "command_line": command_line(args),
            "range": record.range,
            "record": record,
        } | options
    )


def parse_strict(args, options=(), subcommands=(), /, **settings):
    """
    parse like parse_arguments(), raising ArgumentError for the first problem.

    keyword settings are forwarded to parse_arguments().
    """
    if isinstance(args, str):
        raise TypeError("parse_strict() argument must be an iterable of strings, not a string")
    args = tuple(args)
    records = parse_arguments(args, options, subcommands, **settings)
    for record in problems(records):
        raise elevate(record, args)
    return records


__all__ = (
    "parse_arguments",
    "parse_strict",
    "problems",
    "elevate",
)
