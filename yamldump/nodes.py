"""
Collection rendering: flow and block sequences and mappings.

Each renderer takes the dump context, the nesting level and the container,
re-enters `context.write_node` once per child and returns the rendered text.
A child the dispatcher rejects (under skip_invalid) is left out entirely,
together with its separator, and for mappings together with its key or
value counterpart.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Sequence

from yamldump.stypes import WILDCARD_TAG

if TYPE_CHECKING:
    from yamldump.serialize import DumpContext

logger = logging.getLogger(__name__)

# Longer keys must use the explicit "? " form.
MAX_IMPLICIT_KEY_LENGTH = 1024


def _is_explicit_tag(tag: str | None) -> bool:
    return tag is not None and tag != WILDCARD_TAG


# =============================================================================
# Sequences
# =============================================================================


def write_flow_sequence(context: DumpContext, level: int, items: Sequence) -> str:
    rendered = []
    for item in items:
        if context.write_node(level, item, False, False):
            rendered.append(context.dump)
        else:
            logger.debug("Skipped sequence entry of type %s", type(item).__name__)

    separator = "," if context.condense_flow else ", "
    return "[" + separator.join(rendered) + "]"


def write_block_sequence(
    context: DumpContext, level: int, items: Sequence, compact: bool = False
) -> str:
    """
    Render one `- item` per line.

    When `compact` is set the first entry continues the current line, which
    is how nested sequences come out as `- - a`.
    """
    result = ""
    for item in items:
        if not context.write_node(level + 1, item, True, True):
            logger.debug("Skipped sequence entry of type %s", type(item).__name__)
            continue
        if not compact or result:
            result += context.next_line(level)
        if context.dump.startswith("\n"):
            result += "-"
        else:
            result += "- "
        result += context.dump
    return result or "[]"


# =============================================================================
# Mappings
# =============================================================================


def _compare_fallback_key(key: Any) -> tuple[str, str]:
    return (type(key).__name__, str(key))


def sorted_keys(context: DumpContext, mapping: Mapping) -> list:
    """
    Apply the sort_keys option to a mapping's keys.

    `True` sorts naturally; keys that do not compare with each other (e.g.
    ints mixed with strings) are ordered by type name, then by text. A
    callable is used as an old-style `cmp(a, b)` comparator.
    """
    keys = list(mapping.keys())
    if context.sort_keys is True:
        try:
            keys.sort()
        except TypeError:
            keys.sort(key=_compare_fallback_key)
    elif callable(context.sort_keys):
        keys.sort(key=functools.cmp_to_key(context.sort_keys))
    return keys


def write_flow_mapping(context: DumpContext, level: int, mapping: Mapping) -> str:
    quote = '"' if context.condense_flow else ""
    pairs = []
    for key in list(mapping.keys()):
        value = mapping[key]
        used = list(context.used_duplicates)  # restored if the pair is dropped
        if not context.write_node(level, key, False, False):
            logger.debug("Skipped mapping key of type %s", type(key).__name__)
            continue
        pair = ""
        if len(context.dump) > MAX_IMPLICIT_KEY_LENGTH:
            pair += "? "
        pair += quote + context.dump + quote + ":" + ("" if context.condense_flow else " ")

        if not context.write_node(level, value, False, False):
            logger.debug("Skipped mapping value of type %s", type(value).__name__)
            context.used_duplicates = used
            continue
        pairs.append(pair + context.dump)

    return "{" + ", ".join(pairs) + "}"


def write_block_mapping(
    context: DumpContext, level: int, mapping: Mapping, compact: bool = False
) -> str:
    """
    Render one `key: value` pair per line.

    A key that carries an explicit tag, runs over the implicit key length or
    spans several lines (a collection used as a key) is written as an
    explicit pair:

        ? key
        : value
    """
    result = ""
    for key in sorted_keys(context, mapping):
        value = mapping[key]
        pair = ""
        used = list(context.used_duplicates)  # restored if the pair is dropped
        if not compact or result:
            pair += context.next_line(level)

        if not context.write_node(level + 1, key, True, True, iskey=True):
            logger.debug("Skipped mapping key of type %s", type(key).__name__)
            continue
        explicit_pair = (
            _is_explicit_tag(context.tag)
            or len(context.dump) > MAX_IMPLICIT_KEY_LENGTH
            or "\n" in context.dump
        )
        if explicit_pair:
            pair += "?" if context.dump.startswith("\n") else "? "
        pair += context.dump
        if explicit_pair:
            pair += context.next_line(level)

        if not context.write_node(level + 1, value, True, explicit_pair):
            logger.debug("Skipped mapping value of type %s", type(value).__name__)
            context.used_duplicates = used
            continue
        pair += ":" if context.dump.startswith("\n") else ": "
        pair += context.dump

        result += pair
    return result or "{}"
