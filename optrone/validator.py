"""
Template forest validation.

validate_templates() walks the option and subcommand forests recursively and
raises a TemplateError on the first structural violation, carrying the fault code,
the offending template and the path that leads to it. The walk is read-only and
nothing is cached: every parse (and every help rendering) validates again, so a
forest that was valid once cannot drift unnoticed.

Rules, in checking order
- option: at least one name; long names are at least two characters long; short
  names are single ASCII characters other than "-", "/", "=" and ":"; every name is
  lowercase, contains no "=" or ":" and does not start with "-" or "/"; no more
  defaults than params; defaults and variadic are mutually exclusive.
- subcommand: at least one name; names are non-empty and follow the same rules as
  long names; no more defaults than params; defaults, variadic and nested
  subcommands are pairwise exclusive; then nested options, then nested subcommands.
"""
import logging

from .faults import FaultCode, TemplateError
from .templates import OptionTemplate, SubcommandTemplate

logger = logging.getLogger(__name__)


def _fault(code, message, template, path, /):
    return TemplateError(message, code=code, template=template, path=path)


def _validate_name(subject, name, template, path, /):
    if name != name.lower():
        raise _fault(FaultCode.UPPERCASE_NAME, f"{subject} {name!r} must be lowercase", template, path)
    if "=" in name or ":" in name:
        raise _fault(FaultCode.RESERVED_CHARACTER, f"{subject} {name!r} cannot contain '=' or ':'", template, path)
    if name.startswith(("-", "/")):
        raise _fault(FaultCode.RESERVED_PREFIX, f"{subject} {name!r} cannot start with '-' or '/'", template, path)


def _validate_parameters(subject, template, path, /):
    if len(template.defaults) > len(template.params):
        raise _fault(
            FaultCode.TOO_MANY_DEFAULTS,
            f"{subject} cannot have more default values than declared parameters",
            template,
            path
        )
    if template.defaults and template.variadic:
        raise _fault(
            FaultCode.DEFAULTS_WITH_VARIADIC,
            f"{subject} cannot have both default values and variadic parameters",
            template,
            path
        )


def _validate_option(option, path, /):
    if not option.short_names and not option.long_names:
        raise _fault(FaultCode.MISSING_NAME, "option must specify at least one short or long name", option, path)

    for name in option.long_names:
        if len(name) < 2:
            raise _fault(
                FaultCode.MALFORMED_NAME,
                f"option long name {name!r} must be at least 2 characters long",
                option,
                path
            )
        _validate_name("option long name", name, option, path)

    for name in option.short_names:
        if len(name) != 1 or not name.isascii():
            raise _fault(
                FaultCode.MALFORMED_NAME,
                f"option short name {name!r} must be a single ASCII character",
                option,
                path
            )
        if name in "-/=:":
            raise _fault(
                FaultCode.RESERVED_CHARACTER,
                "option short name cannot be '-', '/', '=' or ':'",
                option,
                path
            )
        _validate_name("option short name", name, option, path)

    _validate_parameters("option", option, path)


def _validate_subcommand(subcommand, path, /):
    if not subcommand.names:
        raise _fault(FaultCode.MISSING_NAME, "subcommand must specify at least one name", subcommand, path)

    for name in subcommand.names:
        if not name:
            raise _fault(FaultCode.MALFORMED_NAME, "subcommand name cannot be empty", subcommand, path)
        _validate_name("subcommand name", name, subcommand, path)

    _validate_parameters("subcommand", subcommand, path)

    if subcommand.variadic and subcommand.subcommands:
        raise _fault(
            FaultCode.VARIADIC_WITH_SUBCOMMANDS,
            "subcommand cannot have both variadic parameters and nested subcommands",
            subcommand,
            path
        )
    if subcommand.defaults and subcommand.subcommands:
        raise _fault(
            FaultCode.DEFAULTS_WITH_SUBCOMMANDS,
            "subcommand cannot have both default values and nested subcommands",
            subcommand,
            path
        )

    _validate_options(subcommand.options, path)
    _validate_subcommands(subcommand.subcommands, path)


def _validate_options(options, path, /):
    for index, option in enumerate(options):
        if not isinstance(option, OptionTemplate):
            raise _fault(
                FaultCode.MALFORMED_TEMPLATE,
                f"expected an option-template, got {type(option).__name__!r}",
                option,
                path + (f"options[{index}]",)
            )
        _validate_option(option, path + (f"options[{index}]:{option.names[0]}" if option.names else f"options[{index}]",))


def _validate_subcommands(subcommands, path, /):
    for index, subcommand in enumerate(subcommands):
        if not isinstance(subcommand, SubcommandTemplate):
            raise _fault(
                FaultCode.MALFORMED_TEMPLATE,
                f"expected a subcommand-template, got {type(subcommand).__name__!r}",
                subcommand,
                path + (f"subcommands[{index}]",)
            )
        _validate_subcommand(
            subcommand,
            path + (f"subcommands[{index}]:{subcommand.names[0]}" if subcommand.names else f"subcommands[{index}]",)
        )


def validate_templates(options=(), subcommands=(), /):
    """
    validate an option forest and a subcommand forest, failing fast.

    raises
    - TemplateError: on the first violation, with code, template and path set.
      validating the same malformed forest again raises an equivalent error.
    """
    options, subcommands = tuple(options), tuple(subcommands)
    logger.debug("validating %d option(s) and %d subcommand(s)", len(options), len(subcommands))
    _validate_options(options, ())
    _validate_subcommands(subcommands, ())


__all__ = (
    "validate_templates",
)
