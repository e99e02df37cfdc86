"""
Style shorthand (SAEC) expansion.

A style shorthand is a dollar sign followed by a single character that stands
for a common ANSI escape sequence, e.g. "$r" for red, "$*" for bold and "$0" for
reset. Help messages and diagnostic previews are produced with shorthands embedded
and expanded (or stripped) right before display.

Codes
- $0 reset, $* bold, $_ underline
- $k $r $g $y $b $m $c $w      standard colors (30-37)
- $K $R $G $Y $B $M $C $W      bright colors (90-97)
- $$ is an escaped dollar sign; unknown codes and a trailing "$" are kept verbatim.
"""
from rich.text import Text

SHORTHANDS = {
    "0": "\x1b[0m",
    "*": "\x1b[1m",
    "_": "\x1b[4m",
    "k": "\x1b[30m",
    "r": "\x1b[31m",
    "g": "\x1b[32m",
    "y": "\x1b[33m",
    "b": "\x1b[34m",
    "m": "\x1b[35m",
    "c": "\x1b[36m",
    "w": "\x1b[37m",
    "K": "\x1b[90m",
    "R": "\x1b[91m",
    "G": "\x1b[92m",
    "Y": "\x1b[93m",
    "B": "\x1b[94m",
    "M": "\x1b[95m",
    "C": "\x1b[96m",
    "W": "\x1b[97m",
}


def format_saec(text, /, unformat=False):
    """
    expand every style shorthand in text into its ANSI escape sequence.

    when unformat is true the shorthands are removed instead, which yields the
    plain text (used to measure display width).
    """
    if not isinstance(text, str):
        raise TypeError("format_saec() argument must be a string")

    result = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "$" or index + 1 >= len(text):
            result.append(char)
            index += 1
            continue

        code = text[index + 1]
        if code == "$":
            result.append("$")
        elif code not in SHORTHANDS:
            result.append("$" + code)
        elif not unformat:
            result.append(SHORTHANDS[code])
        index += 2

    return "".join(result)


def sanitize_saec(text, /):
    """escape every dollar sign so that format_saec() leaves text untouched."""
    if not isinstance(text, str):
        raise TypeError("sanitize_saec() argument must be a string")
    return text.replace("$", "$$")


def style(value, shorthand, /):
    """wrap value in a shorthand and a trailing reset, unless shorthand is empty."""
    if not shorthand:
        return value
    return shorthand + value + "$0"


def render(text, /, colorful=True):
    """
    convert shorthand text into a rich Text, ready to be printed by a console.

    with colorful disabled the shorthands are stripped and a plain Text is returned.
    """
    if not colorful:
        return Text(format_saec(text, unformat=True))
    return Text.from_ansi(format_saec(text))


__all__ = (
    "format_saec",
    "sanitize_saec",
    "render",
)
