"""
Optrone faults: codes, exceptions and their rich rendering.

Scope
- FaultCode: stable numeric identifiers, 11xxx for arguments and 21xxx for
  templates.
- OptroneException: a message plus rendering options; renders itself through
  rich as a header line, the message, an optional body (previews) and a hint.
- TemplateError: a template forest breaks a structural rule. Raised before any
  argument is read; also a ValueError.
- ArgumentError: an argument could not be parsed. Only the strict layer
  (parse_strict) raises it; parse_arguments() reports outcomes in its records.
- trigger(): raise a fault, or print it when running as a shell tool.
- getdoc(): documentation the host application attached to a code.

Host hooks, all read from __main__
- __prog__: program name shown in the header (defaults to sys.argv[0]).
- __styles__: palette overrides, keyed like PALETTE.
- __codes__: labels replacing the numeric codes.
- __docs__: documentation lines keyed by FaultCode.
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .preview import get_lines, get_line_row_col, preview_range
from .styling import format_saec, render
from .utils import Unset, coalesce

console = Console(stderr=True)

PALETTE = MappingProxyType({
    "prog": "bold #F2F2F2",
    "code": "bold #5FD7FF",
    "title": "bold #FF5F87",
    "message": "#D0D0D0",
    "arrow": "dim #87D787",
    "hint": "italic #87D787",
    "docs": "dim underline #5FD7FF",
})


def _host(name, default, /):
    return getattr(sys.modules.get("__main__"), name, default)


class FaultCode(IntEnum):
    """
    numeric fault identifiers; values are stable across releases.

    - 11xxx arguments: outcomes elevated by parse_strict().
    - 211xx templates: names (0x), parameters (1x), forest (2x).
    """
    # arguments
    UNRECOGNIZED_SUBCOMMAND     = 11102
    UNRECOGNIZED_OPTION         = 11112
    NOT_ENOUGH_VALUES           = 11122

    # template names
    MISSING_NAME                = 21101
    MALFORMED_NAME              = 21102
    UPPERCASE_NAME              = 21103
    RESERVED_CHARACTER          = 21104
    RESERVED_PREFIX             = 21105

    # template parameters
    TOO_MANY_DEFAULTS           = 21111
    DEFAULTS_WITH_VARIADIC      = 21112
    VARIADIC_WITH_SUBCOMMANDS   = 21113
    DEFAULTS_WITH_SUBCOMMANDS   = 21114

    # template forest
    MALFORMED_TEMPLATE          = 21121

    def normalize(self):
        """the label of this code: the host's __codes__ entry, or the number as a string."""
        return str(_host("__codes__", {}).get(self, self.value))


class OptroneException(Exception):
    """
    base fault: a message plus free-form rendering options.

    recognized options
    - code: FaultCode of the fault.
    - title / hint: short header title and a single actionable hint.
    - colorful / fancy: styled output, and a panel instead of plain lines.
    - shell / deferred: print instead of raising, and do not exit afterwards.
    """
    __defaults__ = MappingProxyType({
        "code": Unset,
        "title": "error",
        "hint": Unset,
        "colorful": True,
        "fancy": False,
        "shell": False,
        "deferred": False,
    })

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(*() if message is Unset else (message,))
        self.message = message
        self.options = MappingProxyType(type(self).__defaults__ | options)

    @property
    def code(self):
        return coalesce(self.options["code"])

    def __str__(self):
        return coalesce(self.message, "")

    def __summary__(self):
        """the single message line shown under the header."""
        return str(self)

    def __body__(self, text):
        """extra renderables placed between the message and the hint."""
        return ()

    def __rich__(self):
        colorful = self.options["colorful"]
        palette = defaultdict(str, PALETTE | _host("__styles__", {}))

        def text(fragment, role=""):
            # Text fragments (previews) already carry their own styles.
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment or ""), palette[role] if colorful and role else "")

        header = Text.assemble(
            "[ ",
            text(_host("__prog__", os.path.basename(sys.argv[0]) or "optrone"), "prog"),
            " : ",
            text(self.code.normalize() if self.code else "", "code"),
            " | ",
            text(self.options["title"].title(), "title"),
            " ]"
        )
        renders = [text(self.__summary__(), "message"), *self.__body__(text)]
        if hint := self.options["hint"]:
            renders.append(Text.assemble(text(" → ", "arrow"), text(hint, "hint")))
        if self.code and (doc := getdoc(self.code)):
            renders.append(text(doc, "docs"))

        if self.options["fancy"]:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if not self.options["deferred"]:
            sys.exit(1)

    def __replace__(self, /, **overrides):
        return type(self)(self.message, **(dict(self.options) | overrides))


class TemplateError(OptroneException, ValueError):
    """
    a template forest violates a structural rule.

    options
    - template: the offending OptionTemplate / SubcommandTemplate (or foreign object).
    - path: tuple of steps locating it, e.g. ("subcommands[0]", "options[1]").
    """
    __defaults__ = MappingProxyType(OptroneException.__defaults__ | {
        "title": "malformed template",
        "hint": "fix the template declaration; arguments are not read until templates are valid",
        "template": Unset,
        "path": (),
    })

    @property
    def template(self):
        return coalesce(self.options["template"])

    @property
    def path(self):
        return tuple(self.options["path"])

    @property
    def location(self):
        return ".".join(self.path)

    def __str__(self):
        message = coalesce(self.message, "")
        if not self.path:
            return message
        return f"{message} (at {self.location})"


class ArgumentError(OptroneException):
    """
    an argument could not be parsed.

    options
    - command_line: the arguments re-joined with single spaces.
    - range: TextRange of the offending token within command_line.
    - record: the ParsedArgument that was elevated, when there is one.

    the text property holds "row:col-row:col: message" followed by the preview,
    with style shorthands embedded; str() returns the same text stripped of them.
    """
    __defaults__ = MappingProxyType(OptroneException.__defaults__ | {
        "title": "bad argument",
        "command_line": "",
        "range": Unset,
        "record": Unset,
    })

    @property
    def command_line(self):
        return self.options["command_line"]

    @property
    def range(self):
        return coalesce(self.options["range"])

    @property
    def record(self):
        return coalesce(self.options["record"])

    @property
    def preview(self):
        if self.range is None:
            return ""
        return preview_range(self.command_line, self.range)

    @property
    def position(self):
        """the "row:col-row:col" span of the range (rows 1-based, columns 0-based), or ""."""
        if self.range is None:
            return ""
        lines = get_lines(self.command_line)
        try:
            begin_row, begin_col = get_line_row_col(lines, self.range.begin)
            end_row, end_col = get_line_row_col(lines, self.range.begin + max(self.range.length, 1) - 1)
        except IndexError:
            # Empty trailing tokens have no column to point at.
            return ""
        return f"{begin_row + 1}:{begin_col}-{end_row + 1}:{end_col}"

    @property
    def text(self):
        if not (position := self.position):
            return coalesce(self.message, "")
        return f"{position}: {coalesce(self.message, '')}\n{self.preview}"

    def __str__(self):
        return format_saec(self.text, unformat=True)

    def __summary__(self):
        if not (position := self.position):
            return coalesce(self.message, "")
        return f"{position}: {coalesce(self.message, '')}"

    def __body__(self, text):
        if not (preview := self.preview):
            return ()
        return (render(preview.rstrip("\n"), colorful=self.options["colorful"]),)


def trigger(fault, /, **options):
    """
    surface fault with extra rendering options.

    fault must implement __replace__ and __trigger__ (as OptroneException does);
    options are applied through __replace__ first. outside shell mode the fault is
    raised, in shell mode it is printed to stderr (and the process exits unless
    deferred is set).
    """
    for method in ("__replace__", "__trigger__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError(f"trigger() argument must implement {method}()")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """the host's __docs__ entry for code, or None."""
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return _host("__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "OptroneException",
    "TemplateError",
    "ArgumentError",
    "trigger",
    "getdoc",
)
