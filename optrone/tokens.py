"""
Tokenization of raw arguments.

tokenize() turns the raw argument list (program name excluded) into typed tokens
and reconstructs the command line the tokens point into.

Classification (by leading characters)
- "--x..."  LONG        (more than two characters)
- "--"      TERMINATOR  (end of options; everything after it is REGULAR)
- "-x..."   SHORT       (more than one character)
- "-"       REGULAR     (a literal dash is a value)
- "/x..."   SWITCH      (more than one character)
- anything else, "" and "/" included, is REGULAR

Splitting
- LONG and SHORT split at the first "=", SWITCH at the first ":". The right part
  (possibly empty) becomes a REGULAR token placed right after the left part.
- SHORT tokens longer than two characters expand into one SHORT token per
  character: "-abc" gives "-a", "-b" and "-c". The first covers "-a" in the command
  line, the following ones cover their own character.

Ranges
- The command line is the arguments joined with single spaces. Every token carries
  a TextRange(begin, length, pointer) into it; pointer is the token's own start.
"""
import enum
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    REGULAR = "regular"
    SHORT = "short"
    LONG = "long"
    SWITCH = "switch"
    TERMINATOR = "terminator"

    @property
    def optional(self):
        """true for option-shaped kinds (short, long and switch)."""
        return self in (TokenKind.SHORT, TokenKind.LONG, TokenKind.SWITCH)


class TextRange(namedtuple("TextRange", ("begin", "length", "pointer"))):
    """a span of the command line; pointer is an absolute offset inside it."""
    __slots__ = ()

    def __new__(cls, begin=0, length=0, pointer=None):
        return super().__new__(cls, begin, length, begin if pointer is None else pointer)

    @property
    def end(self):
        return self.begin + self.length


class Token(namedtuple("Token", ("value", "kind", "range"))):
    """
    a typed slice of the command line.

    value keeps the option prefix ("--all", "-a", "/A"); name drops it.
    """
    __slots__ = ()

    @property
    def name(self):
        match self.kind:
            case TokenKind.LONG:
                return self.value[2:]
            case TokenKind.SHORT | TokenKind.SWITCH:
                return self.value[1:]
            case _:
                return self.value


Tokenization = namedtuple("Tokenization", ("tokens", "command_line"))


def classify(argument, /):
    """return the TokenKind of a raw argument, judged by its leading characters."""
    if argument == "--":
        return TokenKind.TERMINATOR
    if argument.startswith("--"):
        return TokenKind.LONG
    if argument == "-":
        return TokenKind.REGULAR
    if argument.startswith("-"):
        return TokenKind.SHORT
    if argument.startswith("/") and len(argument) > 1:
        return TokenKind.SWITCH
    return TokenKind.REGULAR


def command_line(args, /):
    """the command line the token ranges refer to: arguments joined by single spaces."""
    return " ".join(args)


def _split(argument, kind, offset, /):
    """yield the tokens of a single option-shaped argument starting at offset."""
    name, separator, value = argument.partition(":" if kind is TokenKind.SWITCH else "=")

    if kind is TokenKind.SHORT and len(name) > 2:
        yield Token(name[:2], kind, TextRange(offset, 2))
        for index, char in enumerate(name[2:], start=2):
            yield Token("-" + char, kind, TextRange(offset + index, 1))
    else:
        yield Token(name, kind, TextRange(offset, len(name)))

    if separator:
        yield Token(value, TokenKind.REGULAR, TextRange(offset + len(name) + 1, len(value)))


def tokenize(args, /):
    """
    split raw arguments into tokens.

    returns a Tokenization(tokens, command_line) where tokens is a tuple of Token.
    after a "--" argument every remaining argument is a single REGULAR token, no
    matter its shape.
    """
    if isinstance(args, str):
        raise TypeError("tokenize() argument must be an iterable of strings, not a string")
    args = tuple(args)
    for argument in args:
        if not isinstance(argument, str):
            raise TypeError("tokenize() argument must contain only strings")

    tokens = []
    offset = 0
    terminated = False
    for argument in args:
        kind = TokenKind.REGULAR if terminated else classify(argument)
        if kind.optional:
            tokens.extend(_split(argument, kind, offset))
        else:
            tokens.append(Token(argument, kind, TextRange(offset, len(argument))))
        terminated = terminated or kind is TokenKind.TERMINATOR
        offset += len(argument) + 1

    logger.debug("tokenized %d argument(s) into %d token(s)", len(args), len(tokens))
    return Tokenization(tuple(tokens), command_line(args))


__all__ = (
    "TokenKind",
    "TextRange",
    "Token",
    "Tokenization",
    "classify",
    "command_line",
    "tokenize",
)
