"""
Configuration for the yamldump emitter.

DumpOptions is an immutable pydantic model. Every option can be given by
its snake_case name or its camelCase alias, so option tables written for
other YAML emitters can be passed through unchanged:

    >>> DumpOptions(line_width=-1) == DumpOptions(lineWidth=-1)
    True

Unknown option names are rejected.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from yamldump.errors import InvalidSortKeysError
from yamldump.schema import DEFAULT_SCHEMA, Schema

# cmp(a, b) -> negative, zero or positive
KeyComparator = Callable[[Any, Any], int]


class DumpOptions(BaseModel):
    """
    Options accepted by `serialize`.

    Attributes:
        indent: Spaces per nesting level.
        no_array_indent: Do not indent a block sequence nested in a mapping.
        skip_invalid: Drop values no type can represent instead of raising.
        flow_level: Depth from which collections are written in flow style;
            -1 keeps block style everywhere.
        styles: Tag (or `!!name`) -> style name, e.g. `{"!!null": "canonical"}`.
        schema: Types available for resolution.
        sort_keys: True to sort block mapping keys, or a cmp-style function.
        line_width: Width budget for folding; -1 disables it.
        no_refs: Write shared containers in full rather than anchoring them.
        no_compat_mode: Allow YAML 1.1 boolean spellings (yes, off, ...) as
            plain scalars.
        condense_flow: Drop spaces in flow collections.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    indent: int = Field(default=2, ge=1)
    no_array_indent: bool = False
    skip_invalid: bool = False
    flow_level: int = Field(default=-1, ge=-1)
    styles: dict[str, Union[str, int]] = Field(default_factory=dict)
    schema_: Schema = Field(default_factory=lambda: DEFAULT_SCHEMA, alias="schema")
    sort_keys: Union[bool, KeyComparator] = False
    line_width: int = 80
    no_refs: bool = False
    no_compat_mode: bool = False
    condense_flow: bool = False

    @property
    def schema(self) -> Schema:
        return self.schema_

    @field_validator("sort_keys", mode="before")
    @classmethod
    def _check_sort_keys(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, bool) or callable(value):
            return value
        raise InvalidSortKeysError(value)

    @field_validator("line_width")
    @classmethod
    def _check_line_width(cls, value: int) -> int:
        if value != -1 and value <= 0:
            raise ValueError("line_width must be -1 or a positive integer")
        return value

    def merged(self, overrides: Optional[dict[str, Any]] = None) -> DumpOptions:
        """Return a copy with `overrides` applied and validated."""
        if not overrides:
            return self
        aliases = {field.alias or name: name for name, field in type(self).model_fields.items()}
        data = dict(self)
        data.update({aliases.get(key, key): value for key, value in overrides.items()})
        return DumpOptions.model_validate(data)
