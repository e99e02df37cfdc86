"""
Value collection for a matched template.

Only REGULAR tokens are ever consumed: a literal "-" counts as a value, while
anything option-shaped or the "--" terminator stops the collection (and with it,
every leftover after "--").

- fixed parameters: take up to len(params) tokens; when some are missing and the
  defaults can cover them, the last missing parameters take the last defaults
  (right-anchored). Otherwise the outcome is NOT_ENOUGH_VALUES, with whatever was
  collected.
- variadic: take every consecutive regular token. "+" needs at least one.
"""
from collections import namedtuple

from .records import Validity
from .tokens import TokenKind

Collection = namedtuple("Collection", ("values", "validity", "consumed"))


def _take(tokens, index, limit, /):
    values = []
    for token in tokens[index:]:
        if token.kind is not TokenKind.REGULAR or len(values) >= limit:
            break
        values.append(token.value)
    return values


def collect_values(tokens, index, template, /):
    """
    collect the values of template from tokens, starting at index.

    parameters
    - tokens: the token sequence of the parse.
    - index: position right after the token that matched template.
    - template: the matched OptionTemplate or SubcommandTemplate.

    returns a Collection(values, validity, consumed) where consumed is the number
    of tokens the caller must skip.
    """
    params, defaults = template.params, template.defaults

    if template.variadic:
        values = _take(tokens, index, len(tokens))
        if template.variadic == "+" and not values:
            return Collection((), Validity.NOT_ENOUGH_VALUES, 0)
        return Collection(tuple(values), Validity.VALID, len(values))

    values = _take(tokens, index, len(params))
    consumed = len(values)
    if 0 < (missing := len(params) - consumed) <= len(defaults):
        values.extend(defaults[len(defaults) - missing:])

    validity = Validity.VALID if len(values) == len(params) else Validity.NOT_ENOUGH_VALUES
    return Collection(tuple(values), validity, consumed)


__all__ = (
    "Collection",
    "collect_values",
)
