"""
Diagnostic previews: a numbered source line with a marker line underneath.

    1 | add --priority=high --due
      |                     ^~~~>

The marker line uses "<" for the first marked column, ">" for the last one,
"~" in between and "^" for the pointer (which wins over the other markers). A range spanning several lines is shown
line by line. Output contains style shorthands (see optrone.styling).
"""
import builtins

from .styling import sanitize_saec, style
from .utils import SpecType, Unset, coalesce


def _sanitize_marker(cls, metadata, name, /):
    if not isinstance(marker := metadata[name], str):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif len(marker) != 1:
        raise ValueError(f"{cls.__typename__} {name!r} must be a single character")


class PreviewCustomizer(metaclass=SpecType):
    """
    Rendering knobs for preview_range().

    Fields
    - begin_marker / end_marker / pointer_marker / underline: single characters.
    - separator: text between the line number and the line (" | ").
    - marker_style / normal_style / marked_style: style shorthands ("" for none).
    - line_numbers: show the line number column (and its separator).
    """

    __introspectable__ = (
        "begin_marker",
        "end_marker",
        "pointer_marker",
        "underline",
        "separator",
        "marker_style",
        "normal_style",
        "marked_style",
        "line_numbers",
    )

    def __init__(
            self,
            *,
            begin_marker="<",
            end_marker=">",
            pointer_marker="^",
            underline="~",
            separator=" | ",
            marker_style="",
            normal_style="",
            marked_style="",
            line_numbers=True
    ):
        metadata = {
            "begin_marker": begin_marker,
            "end_marker": end_marker,
            "pointer_marker": pointer_marker,
            "underline": underline,
            "separator": separator,
            "marker_style": marker_style,
            "normal_style": normal_style,
            "marked_style": marked_style,
            "line_numbers": bool(line_numbers),
        }
        for name in ("begin_marker", "end_marker", "pointer_marker", "underline"):
            _sanitize_marker(type(self), metadata, name)
        for name in ("separator", "marker_style", "normal_style", "marked_style"):
            if not isinstance(metadata[name], str):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a string")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


def get_lines(text, /):
    """
    split text into (begin, length) pairs, one per line, newlines excluded.

    an empty text has a single empty line; a trailing newline opens one more.
    """
    if not isinstance(text, str):
        raise TypeError("get_lines() argument must be a string")

    lines = []
    position = 0
    while position <= len(text):
        end = text.find("\n", position)
        if end == -1:
            end = len(text)
        lines.append((position, end - position))
        position = end + 1
    return lines


def get_line_row_col(lines, position, /):
    """
    locate position within lines as a 0-based (row, column) pair.

    raises IndexError when position falls outside every line (newlines included).
    """
    for row, (begin, length) in enumerate(lines):
        if begin <= position < begin + length:
            return row, position - begin
    raise IndexError(f"position {position} is out of range")


def preview_range(text, range, /, indent=0, customizer=Unset):
    """
    render the lines of text overlapped by range with a marker line under each.

    parameters
    - text: the previewed text, usually the reconstructed command line.
    - range: any object with begin, length and pointer (absolute offsets), such as
      optrone.tokens.TextRange.
    - indent: spaces placed in front of every produced line.
    - customizer: PreviewCustomizer; defaults to PreviewCustomizer().

    returns the preview as shorthand text, every line terminated by a newline.
    the previewed text itself is escaped, so a "$" in an argument stays literal.
    """
    if not isinstance(indent, int) or indent < 0:
        raise ValueError("preview_range() 'indent' must be a non-negative integer")
    customizer = coalesce(customizer, PreviewCustomizer())
    if not isinstance(customizer, PreviewCustomizer):
        raise TypeError("preview_range() 'customizer' must be a preview-customizer")

    end = range.begin + range.length
    lines = get_lines(text)
    width = len(str(len(lines)))
    padding = " " * indent

    result = []
    for row, (line_begin, line_length) in enumerate(lines):
        line_end = line_begin + line_length
        line = text[line_begin:line_end]

        if line_end <= range.begin or line_begin >= end:
            continue

        mark_begin = max(0, range.begin - line_begin)
        mark_end = min(line_length, end - line_begin)

        content = [padding]
        if customizer.line_numbers:
            content.append(str(row + 1).rjust(width) + customizer.separator)
        if mark_begin > 0:
            content.append(style(sanitize_saec(line[:mark_begin]), customizer.normal_style))
        content.append(style(sanitize_saec(line[mark_begin:mark_end]), customizer.marked_style))
        if mark_end < line_length:
            content.append(style(sanitize_saec(line[mark_end:]), customizer.normal_style))
        result.append("".join(content) + "\n")

        markers = []
        for column in builtins.range(mark_begin, mark_end):
            if line_begin <= range.pointer < line_end and column == range.pointer - line_begin:
                markers.append(customizer.pointer_marker)
            elif column == mark_begin:
                markers.append(customizer.begin_marker)
            elif column == mark_end - 1:
                markers.append(customizer.end_marker)
            else:
                markers.append(customizer.underline)

        marker = [padding]
        if customizer.line_numbers:
            marker.append(" " * width + customizer.separator)
        marker.append(" " * mark_begin)
        marker.append(style(sanitize_saec("".join(markers)), customizer.marker_style))
        result.append("".join(marker) + "\n")

    return "".join(result)


__all__ = (
    "PreviewCustomizer",
    "get_lines",
    "get_line_row_col",
    "preview_range",
)
