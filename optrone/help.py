"""
Help messages rendered from the same templates the parser uses.

With the default HelpCustomizer:

      -a, --all <param> [param=default]     Description of the option, wrapped at
                                            the description column.
          --long-only                       Options without short names.

        subc-1, subc-2 <param>              A subcommand.

    subc-1:
      -x, --nested                          Options of subc-1.

        subc-3                              Subcommands of subc-1.

Mandatory parameters are enclosed in "<>", parameters covered by a default in
"[]" (with "=default" unless the default is empty). A "*" variadic template ends
with "..." and a "+" one, which needs at least one value, with "<...>". A
template line longer than the description column pushes its description to the
next line. With switch_style, option names are shown as "/A" and "/ALL".

Separators and enclosures are HelpCustomizer fields, so a customizer can render
"--all | -a <file>" or "-a,--all {file}" from the same templates.

The message contains style shorthands (see optrone.styling); print_help() expands
them and prints through a rich console.
"""
import textwrap
from collections.abc import Sequence

from rich.console import Console

from .styling import format_saec, render, style
from .utils import SpecType, Unset, coalesce
from .validator import validate_templates

console = Console()


class HelpCustomizer(metaclass=SpecType):
    """
    Layout knobs for get_help_message().

    Fields
    - short_names_indent: column of the first short name.
    - long_names_indent: column of the first long name when there are no short names.
    - subcommand_indent: column of subcommand names.
    - description_indent: column of descriptions.
    - description_width: wrapping width of descriptions.
    - template_style / description_style: style shorthands ("" for none).
    - switch_style: show options as "/X" and "/NAME" instead of "-x" and "--name".
    - short_names_separator / long_names_separator: between two names of a kind.
    - names_separator: between the short and the long names of an option.
    - subcommand_separator: between the names of a subcommand.
    - parameters_separator: between the names and each parameter.
    - default_prefix: between a parameter and its default.
    - mandatory_enclosure / optional_enclosure: (opening, closing) pairs around
      parameters without and with a default.
    - long_names_first: list long names before short names.
    """

    __introspectable__ = (
        "short_names_indent",
        "long_names_indent",
        "subcommand_indent",
        "description_indent",
        "description_width",
        "template_style",
        "description_style",
        "switch_style",
        "short_names_separator",
        "long_names_separator",
        "names_separator",
        "subcommand_separator",
        "parameters_separator",
        "default_prefix",
        "mandatory_enclosure",
        "optional_enclosure",
        "long_names_first",
    )

    def __init__(
            self,
            *,
            short_names_indent=2,
            long_names_indent=6,
            subcommand_indent=4,
            description_indent=40,
            description_width=40,
            template_style="",
            description_style="",
            switch_style=False,
            short_names_separator=", ",
            long_names_separator=", ",
            names_separator=", ",
            subcommand_separator=", ",
            parameters_separator=" ",
            default_prefix="=",
            mandatory_enclosure=("<", ">"),
            optional_enclosure=("[", "]"),
            long_names_first=False
    ):
        metadata = {
            "short_names_indent": short_names_indent,
            "long_names_indent": long_names_indent,
            "subcommand_indent": subcommand_indent,
            "description_indent": description_indent,
            "description_width": description_width,
            "template_style": template_style,
            "description_style": description_style,
            "switch_style": bool(switch_style),
            "short_names_separator": short_names_separator,
            "long_names_separator": long_names_separator,
            "names_separator": names_separator,
            "subcommand_separator": subcommand_separator,
            "parameters_separator": parameters_separator,
            "default_prefix": default_prefix,
            "mandatory_enclosure": mandatory_enclosure,
            "optional_enclosure": optional_enclosure,
            "long_names_first": bool(long_names_first),
        }
        for name in ("short_names_indent", "long_names_indent", "subcommand_indent", "description_indent"):
            if not isinstance(metadata[name], int) or isinstance(metadata[name], bool):
                raise TypeError(f"{type(self).__typename__} {name!r} must be an integer")
            elif metadata[name] < 0:
                raise ValueError(f"{type(self).__typename__} {name!r} cannot be negative")
        if not isinstance(width := metadata["description_width"], int) or isinstance(width, bool):
            raise TypeError(f"{type(self).__typename__} 'description_width' must be an integer")
        elif width < 1:
            raise ValueError(f"{type(self).__typename__} 'description_width' must be a positive integer")
        for name in (
                "template_style",
                "description_style",
                "short_names_separator",
                "long_names_separator",
                "names_separator",
                "subcommand_separator",
                "parameters_separator",
                "default_prefix",
        ):
            if not isinstance(metadata[name], str):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a string")
        for name in ("mandatory_enclosure", "optional_enclosure"):
            if isinstance(metadata[name], str) or not isinstance(metadata[name], Sequence):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a sequence of two strings")
            metadata[name] = tuple(metadata[name])
            if len(metadata[name]) != 2:
                raise ValueError(f"{type(self).__typename__} {name!r} must hold an opening and a closing string")
            elif not all(isinstance(part, str) for part in metadata[name]):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a sequence of two strings")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


def _wrap(description, width, /):
    lines = []
    for paragraph in description.splitlines():
        lines.extend(textwrap.wrap(paragraph, width) or [""])
    return lines


def _short_names(option, customizer, /):
    if customizer.switch_style:
        names = ("/" + style(name.upper(), customizer.template_style) for name in option.short_names)
    else:
        names = ("-" + style(name, customizer.template_style) for name in option.short_names)
    return customizer.short_names_separator.join(names)


def _long_names(option, customizer, /):
    if customizer.switch_style:
        names = ("/" + style(name.upper(), customizer.template_style) for name in option.long_names)
    else:
        names = ("--" + style(name, customizer.template_style) for name in option.long_names)
    return customizer.long_names_separator.join(names)


def _params(template, customizer, /):
    """every parameter, each preceded by the parameters separator."""
    params, defaults = template.params, template.defaults
    required = len(params) - len(defaults)
    opening, closing = customizer.mandatory_enclosure

    parts = []
    for index, param in enumerate(params):
        if index < required:
            parts.append(opening + style(param, customizer.template_style) + closing)
            continue
        default = defaults[index - required]
        text = style(param, customizer.template_style)
        if default:
            text += customizer.default_prefix + style(default, customizer.template_style)
        parts.append(customizer.optional_enclosure[0] + text + customizer.optional_enclosure[1])

    match template.variadic:
        case "*":
            parts.append("...")
        case "+":
            parts.append(opening + "..." + closing)
    return "".join(customizer.parameters_separator + part for part in parts)


def _description(width, description, customizer, /):
    """the description column for a template line of the given display width."""
    lines = _wrap(description, customizer.description_width)
    if not lines:
        return "\n"

    result = []
    if width <= customizer.description_indent:
        result.append(" " * (customizer.description_indent - width) + style(lines.pop(0), customizer.description_style) + "\n")
    else:
        result.append("\n")
    for line in lines:
        result.append(" " * customizer.description_indent + style(line, customizer.description_style) + "\n")
    return "".join(result)


def _option_help(option, customizer, /):
    short_names = _short_names(option, customizer)
    long_names = _long_names(option, customizer)

    # An option without short names starts at the long names column.
    if not short_names:
        line = " " * customizer.long_names_indent + long_names
    elif not long_names:
        line = " " * customizer.short_names_indent + short_names
    elif customizer.long_names_first:
        line = " " * customizer.short_names_indent + long_names + customizer.names_separator + short_names
    else:
        line = " " * customizer.short_names_indent + short_names + customizer.names_separator + long_names
    line += _params(option, customizer)

    return line + _description(len(format_saec(line, unformat=True)), option.descr, customizer)


def _subcommand_help(subcommand, customizer, /):
    line = " " * customizer.subcommand_indent
    line += customizer.subcommand_separator.join(style(name, customizer.template_style) for name in subcommand.names)
    line += _params(subcommand, customizer)

    return line + _description(len(format_saec(line, unformat=True)), subcommand.descr, customizer)


def _nested_help(subcommand, customizer, path, /):
    """sections for the nested templates of subcommand, depth first."""
    if not subcommand.options and not subcommand.subcommands:
        return ""

    path = f"{path} {subcommand.names[0]}" if path else subcommand.names[0]
    result = "\n" + path + ":\n"
    result += "".join(_option_help(option, customizer) for option in subcommand.options)
    if subcommand.options and subcommand.subcommands:
        result += "\n"
    result += "".join(_subcommand_help(nested, customizer) for nested in subcommand.subcommands)
    result += "".join(_nested_help(nested, customizer, path) for nested in subcommand.subcommands)
    return result


def get_help_message(options=(), subcommands=(), /, customizer=Unset):
    """
    render the help message of option and subcommand templates.

    templates are validated first (TemplateError on violation). the result
    contains style shorthands and ends with a newline (unless it is empty).
    """
    options, subcommands = tuple(options), tuple(subcommands)
    validate_templates(options, subcommands)
    customizer = coalesce(customizer, HelpCustomizer())
    if not isinstance(customizer, HelpCustomizer):
        raise TypeError("get_help_message() 'customizer' must be a help-customizer")

    result = "".join(_option_help(option, customizer) for option in options)
    if options and subcommands:
        result += "\n"
    result += "".join(_subcommand_help(subcommand, customizer) for subcommand in subcommands)
    result += "".join(_nested_help(subcommand, customizer, "") for subcommand in subcommands)
    return result


def print_help(options=(), subcommands=(), /, customizer=Unset, *, colorful=True, file=Unset):
    """
    print the help message through a rich console (stdout unless file is given).
    """
    message = get_help_message(options, subcommands, customizer)
    target = console if file is Unset else Console(file=file)
    target.print(render(message.rstrip("\n"), colorful=colorful), highlight=False, soft_wrap=True)


__all__ = (
    "HelpCustomizer",
    "get_help_message",
    "print_help",
)
