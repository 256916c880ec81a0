"""
Schemas: ordered, composable collections of type descriptors.

A schema holds two ordered lists of YAMLType descriptors. Implicit types
are written without a tag (null, bool, numbers); explicit types are
written as `!<tag> value`. Schemas compose through `include`: included
schemas are compiled first, and a later descriptor with the same tag and
kind replaces an earlier one in place of appending a duplicate.

    >>> custom = DEFAULT_SCHEMA.extend(explicit=[point_type])
    >>> serialize(Point(1, 2), schema=custom)
"""

from __future__ import annotations

from functools import cached_property
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from yamldump.stypes import (
    DEFAULT_TAG_PREFIX,
    YAMLType,
    binary_type,
    bool_type,
    float_type,
    int_type,
    map_type,
    merge_type,
    null_type,
    regexp_type,
    seq_type,
    set_type,
    str_type,
    timestamp_type,
)


class Schema(BaseModel):
    """
    An immutable set of type descriptors.

    Attributes:
        implicit: Types tried first, written without a tag.
        explicit: Types tried when no implicit type matched, written tagged.
        include: Schemas whose types come before this schema's own.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    implicit: tuple[YAMLType, ...] = ()
    explicit: tuple[YAMLType, ...] = ()
    include: tuple[Schema, ...] = Field(default=())

    def extend(
        self,
        implicit: Iterable[YAMLType] = (),
        explicit: Iterable[YAMLType] = (),
    ) -> Schema:
        """Return a new schema layered on top of this one."""
        return Schema(implicit=tuple(implicit), explicit=tuple(explicit), include=(self,))

    @cached_property
    def compiled_implicit(self) -> list[YAMLType]:
        return _compile_list(self, "implicit", [])

    @cached_property
    def compiled_explicit(self) -> list[YAMLType]:
        return _compile_list(self, "explicit", [])

    @cached_property
    def compiled_type_map(self) -> dict[str, YAMLType]:
        """Tag -> descriptor over both lists; the last registration wins."""
        return {t.tag: t for t in self.compiled_implicit + self.compiled_explicit}

    def type_for_tag(self, tag: str) -> Optional[YAMLType]:
        return self.compiled_type_map.get(tag)

    def compile_style_map(self, styles: Optional[dict]) -> dict[str, str]:
        """
        Normalise a style override table.

        `!!name` keys expand to the default tag prefix, values are converted
        to strings, and a value that is one of the descriptor's style aliases
        is replaced with the canonical style name.
        """
        result: dict[str, str] = {}
        for tag, style in (styles or {}).items():
            style = str(style)
            if tag.startswith("!!"):
                tag = DEFAULT_TAG_PREFIX + tag[2:]
            stype = self.type_for_tag(tag)
            if stype is not None:
                style = stype.canonical_style(style)
            result[tag] = style
        return result


def _compile_list(schema: Schema, name: str, result: list[YAMLType]) -> list[YAMLType]:
    for included in schema.include:
        result = _compile_list(included, name, result)

    types: Sequence[YAMLType] = getattr(schema, name)
    for current in types:
        result = [
            previous
            for previous in result
            if not (previous.tag == current.tag and previous.kind == current.kind)
        ]
        result.append(current)
    return result


# =============================================================================
# Predefined Schemas
# =============================================================================

# Strings, sequences and mappings only.
FAILSAFE_SCHEMA = Schema(explicit=(str_type, seq_type, map_type))

JSON_SCHEMA = FAILSAFE_SCHEMA.extend(implicit=(null_type, bool_type, int_type, float_type))

CORE_SCHEMA = Schema(include=(JSON_SCHEMA,))

DEFAULT_SCHEMA = CORE_SCHEMA.extend(
    implicit=(timestamp_type, merge_type),
    explicit=(binary_type, set_type),
)

EXTENDED_SCHEMA = DEFAULT_SCHEMA.extend(explicit=(regexp_type,))
