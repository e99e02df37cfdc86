"""
Token to template resolution.

Both resolvers look in the active scope first (the subcommand matched last, if
any) and fall back to the global forest; neither changes any state.

Options
- "--name" matches a long name, "-x" a short name, both case-sensitively.
- "/x" tries short names first, then long names; "/name" tries long names.
  With insensitive set, switch names are compared ignoring case.

Subcommands
- a regular token matches a name of the scope's nested subcommands, then of the
  global subcommands, case-sensitively.
"""
from .records import OptionMatch, SubcommandMatch
from .tokens import TokenKind


def _find_short(name, options, insensitive, /):
    for option in options:
        for short_name in option.short_names:
            if short_name == name or insensitive and short_name == name.lower():
                return option
    return None


def _find_long(name, options, insensitive, /):
    for option in options:
        for long_name in option.long_names:
            if long_name == name or insensitive and long_name == name.lower():
                return option
    return None


def _find_option(token, options, insensitive, /):
    name = token.name
    match token.kind:
        case TokenKind.LONG:
            return _find_long(name, options, False)
        case TokenKind.SHORT:
            return _find_short(name, options, False)
        case TokenKind.SWITCH if len(name) == 1:
            return _find_short(name, options, insensitive) or _find_long(name, options, insensitive)
        case TokenKind.SWITCH:
            return _find_long(name, options, insensitive)
    return None


def match_option(token, scope, options, /, insensitive=True):
    """
    resolve an option-shaped token.

    parameters
    - token: a SHORT, LONG or SWITCH Token.
    - scope: the active SubcommandTemplate, or None.
    - options: the global option templates.
    - insensitive: compare switch names ignoring case.

    returns OptionMatch(template) or None.
    """
    scopes = (scope.options, options) if scope is not None else (options,)
    for candidates in scopes:
        if (option := _find_option(token, candidates, insensitive)) is not None:
            return OptionMatch(option)
    return None


def match_subcommand(token, scope, subcommands, /):
    """
    resolve a regular token against the scope's children, then the global subcommands.

    returns SubcommandMatch(template) or None.
    """
    scopes = (scope.subcommands, subcommands) if scope is not None else (subcommands,)
    for candidates in scopes:
        for subcommand in candidates:
            if token.value in subcommand.names:
                return SubcommandMatch(subcommand)
    return None


__all__ = (
    "match_option",
    "match_subcommand",
)
