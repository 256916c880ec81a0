"""
Type descriptors for the yamldump emitter.

A YAMLType tells the emitter how to recognise a runtime value and how to
turn it into something the node dispatcher can write: a string, a list or
a dict. Each descriptor carries:

- tag: the YAML tag URI, written as `!<tag>` when the type is explicit
- instance_of / predicate: how a runtime value is matched
- represent: a function, or a dict of named style functions
- resolve: a lexical test telling whether plain text would be read back
  as this type (used to decide whether a string needs quoting)

The built-in descriptors below cover the YAML 1.2 core schema plus the
YAML 1.1 additions most readers understand (timestamp, merge, binary, set)
and a Python-specific regexp tag.

Style Aliases:
    A descriptor may accept aliases for its style names. The int type, for
    instance, takes `16` or `hex` for `hexadecimal`:

    >>> serialize(255, styles={"!!int": "hex"})
    '0xFF\\n'
"""

from __future__ import annotations

import base64
import datetime
import math
import re
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from yamldump.errors import UnsupportedStyleError


# =============================================================================
# Type Aliases
# =============================================================================

Kind = Literal["scalar", "sequence", "mapping"]

# represent(value, style) -> str | list | dict
RepresentFn = Callable[[Any, Optional[str]], Any]

# Prefix for the `!!name` tag shorthand
DEFAULT_TAG_PREFIX = "tag:yaml.org,2002:"

# Tag of a value resolved through an implicit type: written without a tag.
WILDCARD_TAG = "?"


# =============================================================================
# Descriptor
# =============================================================================


class YAMLType(BaseModel):
    """
    Describes how one kind of runtime value is written.

    A descriptor matches a value when at least one of `instance_of` and
    `predicate` is set and every one that is set accepts the value.
    Descriptors without either (str, seq, map, merge) never match; they
    exist for the lexical ambiguity test and to mirror the reader's schema.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag: str
    kind: Optional[Kind] = None
    instance_of: Optional[Union[type, tuple[type, ...]]] = None
    predicate: Optional[Callable[[Any], bool]] = None
    represent: Optional[Union[RepresentFn, dict[str, RepresentFn]]] = None
    default_style: Optional[str] = None
    style_aliases: dict[str, str] = Field(default_factory=dict)
    resolve: Optional[Callable[[str], bool]] = None

    def matches(self, value: Any) -> bool:
        if self.instance_of is None and self.predicate is None:
            return False
        if self.instance_of is not None and not isinstance(value, self.instance_of):
            return False
        if self.predicate is not None and not self.predicate(value):
            return False
        return True

    def resolves(self, text: str) -> bool:
        """Return True if plain `text` would be read back as this type."""
        return self.resolve is not None and bool(self.resolve(text))

    def canonical_style(self, style: str) -> str:
        return self.style_aliases.get(style, style)

    def represent_as(self, value: Any, style: Optional[str]) -> Any:
        """
        Produce the representation of `value` in the requested style.

        Raises:
            UnsupportedStyleError: `represent` is a style map without `style`.
        """
        if callable(self.represent):
            return self.represent(value, style)
        if style not in self.represent:
            raise UnsupportedStyleError(self.tag, style)
        return self.represent[style](value, style)


# =============================================================================
# Failsafe Types
# =============================================================================

str_type = YAMLType(tag=DEFAULT_TAG_PREFIX + "str", kind="scalar")
seq_type = YAMLType(tag=DEFAULT_TAG_PREFIX + "seq", kind="sequence")
map_type = YAMLType(tag=DEFAULT_TAG_PREFIX + "map", kind="mapping")


# =============================================================================
# Null and Bool
# =============================================================================


def _resolve_null(text: str) -> bool:
    return text in ("~", "null", "Null", "NULL")


null_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "null",
    kind="scalar",
    predicate=lambda value: value is None,
    represent={
        "canonical": lambda value, style: "~",
        "lowercase": lambda value, style: "null",
        "uppercase": lambda value, style: "NULL",
        "camelcase": lambda value, style: "Null",
    },
    default_style="lowercase",
    resolve=_resolve_null,
)


def _resolve_bool(text: str) -> bool:
    return text in ("true", "True", "TRUE", "false", "False", "FALSE")


bool_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "bool",
    kind="scalar",
    instance_of=bool,
    represent={
        "lowercase": lambda value, style: "true" if value else "false",
        "uppercase": lambda value, style: "TRUE" if value else "FALSE",
        "camelcase": lambda value, style: "True" if value else "False",
    },
    default_style="lowercase",
    resolve=_resolve_bool,
)


# =============================================================================
# Numbers
# =============================================================================

_INT_RE = re.compile(
    r"^(?:[-+]?0b[0-1_]+"
    r"|[-+]?0o[0-7_]+"
    r"|[-+]?0[0-7_]+"
    r"|[-+]?(?:0|[1-9][0-9_]*)"
    r"|[-+]?0x[0-9a-fA-F_]+"
    r"|[-+]?[1-9][0-9_]*(?::[0-5]?[0-9])+)$"
)

_FLOAT_RE = re.compile(
    r"^(?:[-+]?(?:0|[1-9][0-9_]*)(?:\.[0-9_]*)?(?:[eE][-+]?[0-9]+)?"
    r"|\.[0-9_]+(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*"
    r"|[-+]?\.(?:inf|Inf|INF)"
    r"|\.(?:nan|NaN|NAN))$"
)

# 1e+20 is not a float to a YAML 1.1 reader; 1.e+20 is.
_SCIENTIFIC_WITHOUT_DOT = re.compile(r"^[-+]?[0-9]+e")


def _resolve_int(text: str) -> bool:
    return _INT_RE.match(text) is not None and not text.endswith("_")


def _resolve_float(text: str) -> bool:
    return _FLOAT_RE.match(text) is not None and not text.endswith("_")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _signed(value: int, prefix: str, digits: str) -> str:
    return ("-" if value < 0 else "") + prefix + digits


int_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "int",
    kind="scalar",
    predicate=_is_int,
    represent={
        "binary": lambda value, style: _signed(value, "0b", format(abs(value), "b")),
        "octal": lambda value, style: _signed(value, "0o", format(abs(value), "o")),
        "decimal": lambda value, style: str(int(value)),
        "hexadecimal": lambda value, style: _signed(value, "0x", format(abs(value), "X")),
    },
    default_style="decimal",
    style_aliases={
        "2": "binary",
        "bin": "binary",
        "8": "octal",
        "oct": "octal",
        "10": "decimal",
        "dec": "decimal",
        "16": "hexadecimal",
        "hex": "hexadecimal",
    },
    resolve=_resolve_int,
)


_FLOAT_SPECIALS = {
    "lowercase": (".nan", ".inf", "-.inf"),
    "uppercase": (".NAN", ".INF", "-.INF"),
    "camelcase": (".NaN", ".Inf", "-.Inf"),
}


def _represent_float(value: float, style: Optional[str]) -> str:
    if math.isnan(value) or math.isinf(value):
        nan, inf, ninf = _FLOAT_SPECIALS.get(style, _FLOAT_SPECIALS["lowercase"])
        if math.isnan(value):
            return nan
        return inf if value > 0 else ninf
    res = repr(float(value))
    if _SCIENTIFIC_WITHOUT_DOT.match(res):
        return res.replace("e", ".e", 1)
    return res


float_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "float",
    kind="scalar",
    instance_of=float,
    represent=_represent_float,
    default_style="lowercase",
    resolve=_resolve_float,
)


# =============================================================================
# YAML 1.1 Extras
# =============================================================================

_TIMESTAMP_RE = re.compile(
    r"^[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]$"
    r"|^[0-9][0-9][0-9][0-9]-[0-9][0-9]?-[0-9][0-9]?"
    r"(?:[Tt]|[ \t]+)[0-9][0-9]?:[0-9][0-9]:[0-9][0-9]"
    r"(?:\.[0-9]*)?"
    r"(?:[ \t]*(?:Z|[-+][0-9][0-9]?(?::[0-9][0-9])?))?$"
)


def _resolve_timestamp(text: str) -> bool:
    return _TIMESTAMP_RE.match(text) is not None


timestamp_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "timestamp",
    kind="scalar",
    instance_of=datetime.date,
    represent=lambda value, style: value.isoformat(),
    resolve=_resolve_timestamp,
)

merge_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "merge",
    kind="scalar",
    resolve=lambda text: text == "<<",
)

binary_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "binary",
    kind="scalar",
    instance_of=(bytes, bytearray),
    represent=lambda value, style: base64.b64encode(bytes(value)).decode("ascii"),
)


def _represent_set(value: Union[set, frozenset], style: Optional[str]) -> dict:
    try:
        members = sorted(value)
    except TypeError:
        members = list(value)
    return dict.fromkeys(members)


set_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "set",
    kind="mapping",
    instance_of=(set, frozenset),
    represent=_represent_set,
)


# =============================================================================
# Python Extras
# =============================================================================

_REGEXP_FLAGS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"), (re.VERBOSE, "x"))


def _represent_regexp(value: re.Pattern, style: Optional[str]) -> str:
    flags = "".join(letter for flag, letter in _REGEXP_FLAGS if value.flags & flag)
    pattern = value.pattern
    if isinstance(pattern, bytes):
        pattern = pattern.decode("latin-1")
    return f"/{pattern}/{flags}"


regexp_type = YAMLType(
    tag=DEFAULT_TAG_PREFIX + "python/regexp",
    kind="scalar",
    instance_of=re.Pattern,
    represent=_represent_regexp,
)
