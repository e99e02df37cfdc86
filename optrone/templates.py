r"""
Optrone templates: declarative descriptions of recognizable options and subcommands.

Overview
- OptionTemplate: a named, non-positional argument (-a, --all, /A, /ALL) carrying
  zero or more parameter values.
- SubcommandTemplate: a named positional verb carrying parameter values and/or
  nested options and subcommands, which become the active scope once matched.

Metadata (sanitized on construction)
- descr: Unset | str (defaults to "").
- params: Iterable[str] of parameter names (order is significant).
- defaults: Iterable[str] of right-anchored default values (the last N params).
- variadic: False | True | "*" | "+" (True means "*"; False is stored as None).
- OptionTemplate only
  • short_names: Iterable[str] of single characters (a plain string is split into characters).
  • long_names: Iterable[str] of multi-character names.
- SubcommandTemplate only
  • names: one or more str, given positionally.
  • options: Iterable[OptionTemplate] active only while the subcommand is in scope.
  • subcommands: Iterable[SubcommandTemplate] checked before the global list.

Construction only rejects wrong types and duplicated names. Structural rules
(name casing, forbidden characters, defaults/variadic/nesting exclusions) are left
to optrone.validator, so a forest is always checked as a whole and checked again
on every parse.

Templates are read-only once built: every field is published as a property that
returns an immutable copy.

Quick example:
    >>> from optrone.templates import OptionTemplate, SubcommandTemplate
    >>> verbose = OptionTemplate(short_names="v", long_names=["verbose"], descr="Chatty output.")
    >>> add = SubcommandTemplate("add", params=["title", "priority"], defaults=["normal"])
"""
from collections.abc import Iterable

from .utils import *


def _sanitize_strings(cls, metadata, name, /, split=False):
    """
    Internal: validate an iterable of strings and normalize it into a tuple.

    A plain string is rejected (it is almost always a forgotten list), unless
    split is set, in which case it is split into its characters.
    """
    if isinstance(strings := metadata[name], str):
        if not split:
            raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings, not a string")
        strings = tuple(strings)
    elif not isinstance(strings, Iterable):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")

    sanitized = []
    for string in strings:
        if not isinstance(string, str):
            raise TypeError(f"{cls.__typename__} {name!r} must contain only strings")
        sanitized.append(string)
    metadata[name] = tuple(sanitized)


def _sanitize_names(cls, metadata, *names):
    """
    Internal: reject duplicated names, across every given name field.

    Casing, length and character rules are validator concerns.
    """
    seen = set()
    for name in names:
        for value in metadata[name]:
            if value in seen:
                raise ValueError(f"{cls.__typename__} names cannot contain duplicates ({value!r})")
            seen.add(value)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every template.

    - descr: Unset | str, defaults to "".
    - params / defaults: iterables of strings, normalized into tuples.
    - variadic: False/None → None, True → "*", "*"/"+" as-is.

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when variadic is a string other than "*" or "+".
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr, "")

    _sanitize_strings(cls, metadata, "params")
    _sanitize_strings(cls, metadata, "defaults")

    match metadata["variadic"]:
        case None | False:
            metadata["variadic"] = None
        case True:
            metadata["variadic"] = "*"
        case "*" | "+":
            pass
        case str():
            raise ValueError(f"{cls.__typename__} 'variadic' must be one of '*' or '+'")
        case _:
            raise TypeError(f"{cls.__typename__} 'variadic' must be a boolean or a string")


def _sanitize_nested_metadata(cls, metadata, name, kind, /):
    """
    Internal: validate nested templates and normalize them into a tuple.
    """
    if not isinstance(templates := metadata[name], Iterable) or isinstance(templates, str):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of {kind.__typename__}s")
    templates = tuple(templates)
    for template in templates:
        if not isinstance(template, kind):
            raise TypeError(f"{cls.__typename__} {name!r} must contain only {kind.__typename__}s")
    metadata[name] = templates


class OptionTemplate(metaclass=SpecType):
    """
    Named, non-positional argument template.

    Short names are single characters matched by "-x" (and "/x"), long names are
    matched by "--name" (and "/name"). Values may follow the option as separate
    arguments or be attached with "=" ("--name=value") or ":" ("/name:value").

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "short_names",
        "long_names",
        "params",
        "defaults",
        "variadic",
        "descr",
    )

    def __init__(
            self,
            *,
            short_names=(),
            long_names=(),
            params=(),
            defaults=(),
            variadic=False,
            descr=Unset
    ):
        metadata = {
            "short_names": short_names,
            "long_names": long_names,
            "params": params,
            "defaults": defaults,
            "variadic": variadic,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_strings(type(self), metadata, "short_names", split=True)
        _sanitize_strings(type(self), metadata, "long_names")
        _sanitize_names(type(self), metadata, "short_names", "long_names")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def names(self):
        """every name of the option, short names first."""
        return self.short_names + self.long_names


class SubcommandTemplate(metaclass=SpecType):
    """
    Positional verb template, possibly nesting options and further subcommands.

    Once matched, a subcommand becomes the active scope: its nested options are
    tried before the global options and its nested subcommands before the global
    subcommands, until another subcommand is matched.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "names",
        "params",
        "defaults",
        "variadic",
        "options",
        "subcommands",
        "descr",
    )
    __displayable__ = (
        "names",
        "params",
        "defaults",
        "variadic",
        "descr",
    )

    def __init__(
            self,
            *names,
            params=(),
            defaults=(),
            variadic=False,
            options=(),
            subcommands=(),
            descr=Unset
    ):
        metadata = {
            "names": names,
            "params": params,
            "defaults": defaults,
            "variadic": variadic,
            "options": options,
            "subcommands": subcommands,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_strings(type(self), metadata, "names")
        _sanitize_names(type(self), metadata, "names")
        _sanitize_nested_metadata(type(self), metadata, "options", OptionTemplate)
        _sanitize_nested_metadata(type(self), metadata, "subcommands", SubcommandTemplate)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


__all__ = (
    "OptionTemplate",
    "SubcommandTemplate",
)
