"""
Optrone internals shared by templates, customizers and faults.

Overview
- Unset: the "not given" sentinel. It is falsey and distinct from None, so a
  caller can still pass None, "" or () on purpose.
- coalesce(value, default=None): Unset becomes default, anything else is kept.
- rename(name): decorator naming a generated function (for readable tracebacks).
- mirror(name): read-only property over "_{name}" returning an immutable copy.
- SpecType: metaclass of every declarative object of the package (templates,
  help and preview customizers). It derives __typename__ from the class name,
  publishes the __introspectable__ fields through mirror() and gives the class a
  __repr__ and a __rich_repr__.

Example
    >>> class Pair(metaclass=SpecType):
    ...     __introspectable__ = ("items",)
    ...     def __init__(self, *items):
    ...         self._items = list(items)
    >>> Pair("a", "b")
    pair(items=('a', 'b'))
"""
import functools
import re
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    type of the Unset sentinel (one instance per process, cannot be subclassed).

    instances take part in PEP 604 unions, so "str | Unset" works in isinstance().
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError(f"type {UnsetType.__name__!r} cannot be subclassed")

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    """object unless it is Unset, default otherwise."""
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a function a fixed __name__ and __qualname__.

    Accessors generated in loops would otherwise all be called "getter".
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    """
    Internal: copy containers into their immutable counterparts, recursively.

    Strings and every non-container (templates included) are returned as-is, so a
    frozen forest still points at the caller's templates.
    """
    match object:
        case str():
            return object
        case Sequence():
            return tuple(_freeze(item) for item in object)
        case Mapping():
            return MappingProxyType({key: _freeze(value) for key, value in object.items()})
        case Set():
            return frozenset(_freeze(item) for item in object)
        case _:
            return coalesce(object)


def mirror(name, /):
    """read-only property exposing a frozen copy of "_{name}"."""
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, f"_{name}"))

    return property(getter)


def _typename(name, /):
    # OptionTemplate -> option-template
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()


class SpecType(type):
    """
    Metaclass of the declarative, read-only objects of the package.

    - __typename__ is the hyphenated lowercase class name; sanitizers use it as
      the subject of their messages ("option-template 'params' must ...").
    - every name in __introspectable__ becomes a mirror() property.
    - __displayable__, when set, restricts what __repr__ and __rich_repr__ show
      (nested templates are left out of a subcommand's repr, for instance).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        fields = {field: mirror(field) for field in namespace.get("__introspectable__", ())}
        self = super().__new__(cls, name, bases, namespace | fields | {"__typename__": _typename(name)})

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)

        @rename("__repr__")
        def __repr__(self):
            fields = ", ".join(f"{field}={value!r}" for field, value in self.__rich_repr__())
            return f"{type(self).__typename__}({fields})"

        self.__rich_repr__ = __rich_repr__
        self.__repr__ = __repr__
        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",
    "SpecType",

    # Constants
    "Unset",
)
