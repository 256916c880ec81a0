"""
Dump context and node dispatch for the yamldump emitter.

This module contains the DumpContext class which drives a single
serialization call, including:
- Configuration copied from DumpOptions
- Type resolution against the schema's implicit and explicit types
- Anchors and aliases for containers reachable more than once
- Dispatch to the scalar and collection renderers

Every renderer communicates through two fields of the context: `tag` (the
tag of the node just written, `None`, or the wildcard `"?"` for an
implicitly typed value) and `dump` (the text of the node just written).
A context is created per call and never shared.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal, Optional

from yamldump.errors import UnresolvedTypeError
from yamldump.nodes import (
    write_block_mapping,
    write_block_sequence,
    write_flow_mapping,
    write_flow_sequence,
)
from yamldump.refs import get_duplicate_references
from yamldump.scalars import write_scalar
from yamldump.stypes import WILDCARD_TAG

if TYPE_CHECKING:
    from yamldump.options import DumpOptions
    from yamldump.stypes import YAMLType

logger = logging.getLogger(__name__)

NodeKind = Literal["mapping", "sequence", "string"]


def node_kind(value: Any) -> Optional[NodeKind]:
    """
    Classify a (represented) value for dispatch.

    Sequences are checked before mappings, so an object that is both is
    written as a sequence.
    """
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "sequence"
    if isinstance(value, Mapping):
        return "mapping"
    return None


# =============================================================================
# Dump Context
# =============================================================================


class DumpContext:
    """
    Per-call state of the emitter.

    Attributes:
        tag: Tag of the node written last.
        dump: Text of the node written last. Between type resolution and
            rendering it temporarily holds the represented value.
        duplicates: Containers that need an anchor, in anchor order.
        used_duplicates: Whether each duplicate has been written already.

    Example:
        >>> context = DumpContext(DumpOptions(indent=4))
        >>> context.dump_document({"a": [1, 2]})
        'a:\\n    - 1\\n    - 2\\n'
    """

    def __init__(self, options: DumpOptions):
        self.schema = options.schema
        self.implicit_types: list[YAMLType] = self.schema.compiled_implicit
        self.explicit_types: list[YAMLType] = self.schema.compiled_explicit
        self.indent = options.indent
        self.no_array_indent = options.no_array_indent
        self.skip_invalid = options.skip_invalid
        self.flow_level = options.flow_level
        self.style_map = self.schema.compile_style_map(options.styles)
        self.sort_keys = options.sort_keys
        self.line_width = options.line_width
        self.no_refs = options.no_refs
        self.no_compat_mode = options.no_compat_mode
        self.condense_flow = options.condense_flow

        self.tag: Optional[str] = None
        self.dump: Any = None

        self.duplicates: list = []
        self.used_duplicates: list[bool] = []
        # id() -> index into duplicates; the list keeps the objects alive
        self._duplicate_ids: dict[int, int] = {}

    # =========================================================================
    # Duplicate Table
    # =========================================================================

    def add_duplicate(self, obj: Any) -> None:
        self._duplicate_ids[id(obj)] = len(self.duplicates)
        self.duplicates.append(obj)

    def duplicate_index(self, obj: Any) -> int:
        """Anchor index of `obj`, or -1 if it is not shared."""
        return self._duplicate_ids.get(id(obj), -1)

    # =========================================================================
    # Helpers
    # =========================================================================

    def next_line(self, level: int) -> str:
        return "\n" + " " * (self.indent * level)

    def test_implicit_resolving(self, text: str) -> bool:
        """Return True if plain `text` would be read back as a non-string."""
        return any(stype.resolves(text) for stype in self.implicit_types)

    def detect_type(self, value: Any, explicit: bool = False) -> bool:
        """
        Find the first type in the implicit (or explicit) list matching `value`.

        On a match, sets `tag` and, if the type has a representation, replaces
        `dump` with it.

        Raises:
            UnsupportedStyleError: A style override names a style the
                matched type does not define.
        """
        type_list = self.explicit_types if explicit else self.implicit_types
        for stype in type_list:
            if not stype.matches(value):
                continue
            self.tag = stype.tag if explicit else WILDCARD_TAG
            if stype.represent is not None:
                style = self.style_map.get(stype.tag) or stype.default_style
                self.dump = stype.represent_as(value, style)
            return True
        return False

    # =========================================================================
    # Dispatch
    # =========================================================================

    def write_node(
        self,
        level: int,
        value: Any,
        block: bool,
        compact: bool,
        iskey: bool = False,
    ) -> bool:
        """
        Render `value` into `dump`.

        Args:
            level: Nesting depth, 0 for the document root.
            value: The value to write.
            block: Whether block notation is allowed here.
            compact: Whether a block collection may start on the current line.
            iskey: Whether the value is a mapping key.

        Returns:
            True on success, False if the value was rejected under
            skip_invalid.

        Raises:
            UnresolvedTypeError: No type matched and skip_invalid is off.
        """
        self.tag = None
        self.dump = value
        if not self.detect_type(value, False):
            self.detect_type(value, True)
        tag = self.tag

        kind = node_kind(self.dump)
        if block:
            block = self.flow_level < 0 or self.flow_level > level

        duplicate_index = -1
        if kind in ("mapping", "sequence"):
            duplicate_index = self.duplicate_index(value)
        duplicate = duplicate_index != -1

        if (tag is not None and tag != WILDCARD_TAG) or duplicate or (self.indent != 2 and level > 0):
            compact = False

        if duplicate and self.used_duplicates[duplicate_index]:
            self.dump = f"*ref_{duplicate_index}"
            return True

        if duplicate:
            self.used_duplicates[duplicate_index] = True

        if kind == "mapping":
            if block and len(self.dump) != 0:
                self.dump = write_block_mapping(self, level, self.dump, compact)
            else:
                self.dump = write_flow_mapping(self, level, self.dump)
        elif kind == "sequence":
            array_level = level - 1 if self.no_array_indent and level > 0 else level
            if block and len(self.dump) != 0:
                self.dump = write_block_sequence(self, array_level, self.dump, compact)
            else:
                self.dump = write_flow_sequence(self, array_level, self.dump)
        elif kind == "string":
            if tag != WILDCARD_TAG:
                self.dump = write_scalar(self, self.dump, level, iskey)
        else:
            if self.skip_invalid:
                return False
            raise UnresolvedTypeError(value)

        if duplicate:
            self.dump = self._decorate(f"&ref_{duplicate_index}", self.dump)
        if tag is not None and tag != WILDCARD_TAG:
            self.dump = self._decorate(f"!<{tag}>", self.dump)
        self.tag = tag
        return True

    @staticmethod
    def _decorate(prefix: str, text: str) -> str:
        # a block body already starts on its own line
        if text.startswith("\n"):
            return prefix + text
        return prefix + " " + text

    def dump_document(self, value: Any) -> str:
        """
        Render a whole document.

        Returns:
            The YAML text with a single trailing newline, or "" when the
            root value was rejected under skip_invalid.
        """
        if not self.no_refs:
            get_duplicate_references(value, self)
        if self.write_node(0, value, True, True):
            return f"{self.dump}\n"
        logger.debug("Root value of type %s skipped", type(value).__name__)
        return ""
