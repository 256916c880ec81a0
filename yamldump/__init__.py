"""
yamldump - YAML emission for in-memory Python values.

This library writes a value graph built from None, bool, int, float, str,
lists, tuples, mappings and custom tagged objects as a YAML document:

- Strings get the simplest safe style (plain, quoted, literal or folded)
- Long text is folded to a configurable width
- Containers reachable from several places, including cycles, are written
  once with an anchor (&ref_N) and aliased (*ref_N) afterwards
- Custom types plug in through schemas of type descriptors

Basic Usage:
    >>> from yamldump import serialize
    >>>
    >>> serialize({"a": 1, "b": [1, 2, 3]})
    'a: 1\\nb:\\n  - 1\\n  - 2\\n  - 3\\n'
    >>>
    >>> serialize("true")
    "'true'\\n"

Options:
    >>> serialize(data, sort_keys=True, line_width=-1)
    >>> serialize(data, {"flowLevel": 1, "condenseFlow": True})

To write custom types, extend a schema:
    >>> from yamldump import DEFAULT_SCHEMA, YAMLType
    >>>
    >>> point_type = YAMLType(
    ...     tag="!point",
    ...     kind="sequence",
    ...     instance_of=Point,
    ...     represent=lambda p, style: [p.x, p.y],
    ... )
    >>> serialize(Point(1, 2), schema=DEFAULT_SCHEMA.extend(explicit=[point_type]))
    '!<!point>\\n- 1\\n- 2\\n'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from yamldump.errors import (
    InvalidSortKeysError,
    UnresolvedTypeError,
    UnsupportedStyleError,
    YAMLError,
)
from yamldump.options import DumpOptions
from yamldump.schema import (
    CORE_SCHEMA,
    DEFAULT_SCHEMA,
    EXTENDED_SCHEMA,
    FAILSAFE_SCHEMA,
    JSON_SCHEMA,
    Schema,
)
from yamldump.serialize import DumpContext
from yamldump.stypes import YAMLType

__all__ = [
    "serialize",
    "DumpOptions",
    "DumpContext",
    "Schema",
    "YAMLType",
    "FAILSAFE_SCHEMA",
    "JSON_SCHEMA",
    "CORE_SCHEMA",
    "DEFAULT_SCHEMA",
    "EXTENDED_SCHEMA",
    "YAMLError",
    "UnresolvedTypeError",
    "UnsupportedStyleError",
    "InvalidSortKeysError",
]

logger = logging.getLogger(__name__)


def serialize(
    value: Any,
    options: Union[DumpOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> str:
    """
    Serialize a value to a YAML document.

    Args:
        value: The root of the value graph.
        options: A DumpOptions, or a mapping of option names (snake_case or
            camelCase), or None for the defaults.
        **kwargs: Individual options; these override `options`.

    Returns:
        The document text, ending with a single newline. An empty string if
        the root value was dropped under skip_invalid.

    Raises:
        pydantic.ValidationError: If an option has an invalid value.
        InvalidSortKeysError: If sort_keys is neither a bool nor callable.
        UnresolvedTypeError: If a value cannot be represented and
            skip_invalid is off.
        UnsupportedStyleError: If a style override is not defined by the
            type it targets.

    Example:
        >>> shared = {"x": 1}
        >>> print(serialize([shared, shared]), end="")
        - &ref_0
          x: 1
        - *ref_0
    """
    if isinstance(options, DumpOptions):
        options = options.merged(kwargs)
    else:
        options = DumpOptions().merged({**(options or {}), **kwargs})

    logger.debug(
        "Serializing %s (indent=%d, line_width=%d, flow_level=%d, refs=%s)",
        type(value).__name__,
        options.indent,
        options.line_width,
        options.flow_level,
        not options.no_refs,
    )
    return DumpContext(options).dump_document(value)
