"""
Character class predicates used by the scalar emitter.

Every predicate takes a single integer code point (as returned by ord())
and is O(1). The sets follow the YAML 1.2 productions they are named
after, simplified to what a plain-scalar emitter needs.
"""

CHAR_TAB = 0x09
CHAR_LINE_FEED = 0x0A
CHAR_SPACE = 0x20
CHAR_EXCLAMATION = 0x21  # !
CHAR_DOUBLE_QUOTE = 0x22  # "
CHAR_SHARP = 0x23  # #
CHAR_PERCENT = 0x25  # %
CHAR_AMPERSAND = 0x26  # &
CHAR_SINGLE_QUOTE = 0x27  # '
CHAR_ASTERISK = 0x2A  # *
CHAR_COMMA = 0x2C  # ,
CHAR_MINUS = 0x2D  # -
CHAR_COLON = 0x3A  # :
CHAR_GREATER_THAN = 0x3E  # >
CHAR_QUESTION = 0x3F  # ?
CHAR_COMMERCIAL_AT = 0x40  # @
CHAR_LEFT_SQUARE_BRACKET = 0x5B  # [
CHAR_RIGHT_SQUARE_BRACKET = 0x5D  # ]
CHAR_GRAVE_ACCENT = 0x60  # `
CHAR_LEFT_CURLY_BRACKET = 0x7B  # {
CHAR_VERTICAL_LINE = 0x7C  # |
CHAR_RIGHT_CURLY_BRACKET = 0x7D  # }

CHAR_BOM = 0xFEFF

# c-flow-indicator plus ":" and "#"
_PLAIN_UNSAFE = frozenset({
    CHAR_COMMA,
    CHAR_LEFT_SQUARE_BRACKET,
    CHAR_RIGHT_SQUARE_BRACKET,
    CHAR_LEFT_CURLY_BRACKET,
    CHAR_RIGHT_CURLY_BRACKET,
    CHAR_COLON,
    CHAR_SHARP,
})

# c-indicator
_INDICATORS = frozenset({
    CHAR_MINUS,
    CHAR_QUESTION,
    CHAR_COLON,
    CHAR_COMMA,
    CHAR_LEFT_SQUARE_BRACKET,
    CHAR_RIGHT_SQUARE_BRACKET,
    CHAR_LEFT_CURLY_BRACKET,
    CHAR_RIGHT_CURLY_BRACKET,
    CHAR_SHARP,
    CHAR_AMPERSAND,
    CHAR_ASTERISK,
    CHAR_EXCLAMATION,
    CHAR_VERTICAL_LINE,
    CHAR_GREATER_THAN,
    CHAR_SINGLE_QUOTE,
    CHAR_DOUBLE_QUOTE,
    CHAR_PERCENT,
    CHAR_COMMERCIAL_AT,
    CHAR_GRAVE_ACCENT,
})


def is_whitespace(c: int) -> bool:
    """s-white: space or tab."""
    return c == CHAR_SPACE or c == CHAR_TAB


def is_printable(c: int) -> bool:
    """
    Return True if the code point can be written without escaping.

    Derived from nb-char minus tab, NEL, NBSP and the two Unicode line
    separators; surrogate code points are never printable.
    """
    return (
        0x00020 <= c <= 0x00007E
        or (0x000A1 <= c <= 0x00D7FF and c != 0x2028 and c != 0x2029)
        or (0x0E000 <= c <= 0x00FFFD and c != CHAR_BOM)
        or 0x10000 <= c <= 0x10FFFF
    )


def is_plain_safe(c: int) -> bool:
    """Allowed after the first character of a plain scalar."""
    return is_printable(c) and c != CHAR_BOM and c not in _PLAIN_UNSAFE


def is_plain_safe_first(c: int) -> bool:
    """Allowed as the first character of a plain scalar."""
    return (
        is_printable(c)
        and c != CHAR_BOM
        and not is_whitespace(c)
        and c not in _INDICATORS
    )
