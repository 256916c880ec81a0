"""
Scalar emission: style selection, escaping, folding and block headers.

A string is written in exactly one of five styles:

- PLAIN: bare text, only when it cannot be mistaken for anything else
- SINGLE: single-quoted, for one-line text that is unsafe as plain
- LITERAL: `|` block, for multi-line text
- FOLDED: `>` block, for text with lines longer than the width budget
- DOUBLE: double-quoted with escapes, for anything non-printable

choose_scalar_style() picks the style; write_scalar() renders it.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import TYPE_CHECKING, Callable

from yamldump.chars import (
    CHAR_LINE_FEED,
    is_plain_safe,
    is_plain_safe_first,
    is_printable,
    is_whitespace,
)

if TYPE_CHECKING:
    from yamldump.serialize import DumpContext


class ScalarStyle(IntEnum):
    PLAIN = 1
    SINGLE = 2
    LITERAL = 3
    FOLDED = 4
    DOUBLE = 5


ESCAPE_SEQUENCES: dict[int, str] = {
    0x00: "\\0",
    0x07: "\\a",
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0B: "\\v",
    0x0C: "\\f",
    0x0D: "\\r",
    0x1B: "\\e",
    0x22: '\\"',
    0x5C: "\\\\",
    0x85: "\\N",
    0xA0: "\\_",
    0x2028: "\\L",
    0x2029: "\\P",
}

# YAML 1.1 boolean spellings that YAML 1.2 readers treat as plain strings.
DEPRECATED_BOOLEANS_SYNTAX = frozenset({
    "y", "Y", "yes", "Yes", "YES", "on", "On", "ON",
    "n", "N", "no", "No", "NO", "off", "Off", "OFF",
})

_LEADING_SPACE_RE = re.compile(r"\n* ")
# A fold point is a space followed by a non-space; the match index is
# always <= len(line) - 2.
_BREAK_RE = re.compile(r" [^ ]")
_LINE_RE = re.compile(r"(\n+)([^\n]*)")


# =============================================================================
# Escaping
# =============================================================================


def encode_hex(code_point: int) -> str:
    """Escape a code point as \\xHH, \\uHHHH or \\UHHHHHHHH."""
    if code_point <= 0xFF:
        handle, length = "x", 2
    elif code_point <= 0xFFFF:
        handle, length = "u", 4
    else:
        handle, length = "U", 8
    return f"\\{handle}{code_point:0{length}X}"


def escape_string(string: str) -> str:
    """
    Escape a string for use inside a double-quoted scalar.

    Adjacent surrogate halves (which can appear in strings decoded with
    surrogateescape or built from UTF-16 data) are combined into a single
    code point before being hex-escaped.
    """
    result = []
    i = 0
    length = len(string)
    while i < length:
        char = ord(string[i])
        if 0xD800 <= char <= 0xDBFF and i + 1 < length:
            next_char = ord(string[i + 1])
            if 0xDC00 <= next_char <= 0xDFFF:
                result.append(
                    encode_hex((char - 0xD800) * 0x400 + next_char - 0xDC00 + 0x10000)
                )
                i += 2
                continue
        escape_seq = ESCAPE_SEQUENCES.get(char)
        if escape_seq is None and is_printable(char):
            result.append(string[i])
        else:
            result.append(escape_seq or encode_hex(char))
        i += 1
    return "".join(result)


# =============================================================================
# Folding
# =============================================================================


def fold_line(line: str, width: int) -> str:
    """
    Greedy line breaking.

    Picks the longest line under the limit each time, otherwise settles
    for the shortest line over the limit. More-indented lines cannot be
    folded, since that would add an extra line break.
    """
    if line == "" or line[0] == " ":
        return line

    # start is inclusive; end, curr and next are exclusive.
    start = 0
    curr = 0
    result = ""
    for match in _BREAK_RE.finditer(line):
        next_ = match.start()
        # invariant: curr - start <= width
        if next_ - start > width:
            end = curr if curr > start else next_
            result += "\n" + line[start:end]
            # skip the space that was output as a line break
            start = end + 1
        curr = next_

    result += "\n"
    # Insert a break if the remainder is too long and a break is available.
    if len(line) - start > width and curr > start:
        result += line[start:curr] + "\n" + line[curr + 1:]
    else:
        result += line[start:]
    return result[1:]


def fold_string(string: str, width: int) -> str:
    """
    Fold every content line of a folded-style scalar.

    In folded style k consecutive line breaks read back as k - 1 breaks,
    except around more-indented lines and at the very beginning or end, so
    one extra break is inserted between two normal content lines.
    """
    next_lf = string.find("\n")
    if next_lf == -1:
        next_lf = len(string)
    result = fold_line(string[:next_lf], width)

    # Before the first content line, don't add an extra break.
    prev_more_indented = string[:1] in ("\n", " ")
    for match in _LINE_RE.finditer(string, next_lf):
        prefix, line = match.group(1), match.group(2)
        more_indented = line[:1] == " "
        result += prefix
        if not prev_more_indented and not more_indented and line != "":
            result += "\n"
        result += fold_line(line, width)
        prev_more_indented = more_indented
    return result


# =============================================================================
# Style selection
# =============================================================================


def need_indent_indicator(string: str) -> bool:
    return _LEADING_SPACE_RE.match(string) is not None


def choose_scalar_style(
    string: str,
    single_line_only: bool,
    indent_per_level: int,
    line_width: int,
    test_ambiguous_type: Callable[[str], bool],
) -> ScalarStyle:
    """
    Determine the preferred style for a non-empty string.

    Args:
        string: The text to write. Must not be empty.
        single_line_only: True for mapping keys and inside flow collections,
            where block styles are not allowed.
        indent_per_level: Configured indentation width.
        line_width: Width budget, or -1 for no limit.
        test_ambiguous_type: Returns True when the text would be read back
            as another implicit type (e.g. "true" or "12").

    Returns:
        PLAIN or SINGLE when the text has no line breaks; LITERAL when no
        line needs folding; FOLDED when some line is too long and can be
        folded; DOUBLE whenever escaping is required.
    """
    should_track_width = line_width != -1
    has_line_break = False
    has_foldable_line = False
    previous_line_break = -1
    plain = is_plain_safe_first(ord(string[0])) and not is_whitespace(ord(string[-1]))

    if single_line_only:
        for char in string:
            code = ord(char)
            if not is_printable(code):
                return ScalarStyle.DOUBLE
            plain = plain and is_plain_safe(code)
    else:
        for i, char in enumerate(string):
            code = ord(char)
            if code == CHAR_LINE_FEED:
                has_line_break = True
                if should_track_width:
                    # Foldable line: too long and not more-indented.
                    has_foldable_line = has_foldable_line or (
                        i - previous_line_break - 1 > line_width
                        and string[previous_line_break + 1] != " "
                    )
                    previous_line_break = i
            elif not is_printable(code):
                return ScalarStyle.DOUBLE
            plain = plain and is_plain_safe(code)

        # the last line, in case the string does not end with a break
        has_foldable_line = has_foldable_line or (
            should_track_width
            and len(string) - previous_line_break - 1 > line_width
            and string[previous_line_break + 1] != " "
        )

    if not has_line_break and not has_foldable_line:
        if plain and not test_ambiguous_type(string):
            return ScalarStyle.PLAIN
        return ScalarStyle.SINGLE

    # The block indentation indicator is a single digit.
    if indent_per_level > 9 and need_indent_indicator(string):
        return ScalarStyle.DOUBLE

    return ScalarStyle.FOLDED if has_foldable_line else ScalarStyle.LITERAL


# =============================================================================
# Rendering
# =============================================================================


def indent_string(string: str, spaces: int) -> str:
    """Indent every line of a string. Empty lines are left unindented."""
    ind = " " * spaces
    return "\n".join(ind + line if line else line for line in string.split("\n"))


def block_header(string: str, indent_per_level: int) -> str:
    """Indentation and chomping indicators for a block scalar."""
    indent_indicator = str(indent_per_level) if need_indent_indicator(string) else ""
    # the string "\n" counts as a trailing empty line
    clip = string.endswith("\n")
    keep = clip and (string[-2:-1] == "\n" or string == "\n")
    chomp = "+" if keep else "" if clip else "-"
    return f"{indent_indicator}{chomp}\n"


def drop_ending_newline(string: str) -> str:
    return string[:-1] if string.endswith("\n") else string


def write_scalar(context: DumpContext, string: str, level: int, iskey: bool) -> str:
    """
    Render a string scalar at the given nesting level.

    The last line break of a block scalar is dropped because the caller
    adds its own; a string without a trailing break is already using the
    strip ("-") indicator, so the content is unaffected either way.
    """
    if not string:
        return "''"
    if not context.no_compat_mode and string in DEPRECATED_BOOLEANS_SYNTAX:
        return f"'{string}'"

    # no 0-indent scalars
    indent = context.indent * max(1, level)
    # As indentation deepens the width shrinks, down to min(line_width, 40).
    if context.line_width == -1:
        line_width = -1
    else:
        line_width = max(min(context.line_width, 40), context.line_width - indent)

    # Keys are assumed to be implicit, so they must fit on one line.
    single_line_only = iskey or (
        context.flow_level > -1 and level >= context.flow_level
    )

    style = choose_scalar_style(
        string,
        single_line_only,
        context.indent,
        line_width,
        context.test_implicit_resolving,
    )
    if style == ScalarStyle.PLAIN:
        return string
    if style == ScalarStyle.SINGLE:
        return "'" + string.replace("'", "''") + "'"
    if style == ScalarStyle.LITERAL:
        return (
            "|"
            + block_header(string, context.indent)
            + drop_ending_newline(indent_string(string, indent))
        )
    if style == ScalarStyle.FOLDED:
        return (
            ">"
            + block_header(string, context.indent)
            + drop_ending_newline(indent_string(fold_string(string, line_width), indent))
        )
    return '"' + escape_string(string) + '"'
