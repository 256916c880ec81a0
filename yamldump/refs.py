"""
Duplicate-reference detection.

Before anything is written, the whole value graph is walked once to find
containers reachable from more than one place. Those get an anchor
(`&ref_N`) on first emission and an alias (`*ref_N`) afterwards, which is
also what makes cyclic graphs finite.

Identity is `id()`-based, like the memo of a pickler: equal but distinct
containers are never merged. The objects themselves are kept in the list
for the duration of the call so their ids cannot be reused.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from yamldump.serialize import DumpContext

logger = logging.getLogger(__name__)


def is_reference_container(value: Any) -> bool:
    """
    Return True for values that may be anchored.

    The empty tuple is a singleton in CPython, so every `()` in a graph
    would otherwise look like a shared reference.
    """
    if isinstance(value, tuple) and not value:
        return False
    return isinstance(value, (list, tuple, Mapping))


def inspect_node(
    value: Any,
    objects: list,
    duplicate_indexes: list[int],
    seen: dict[int, int] | None = None,
) -> None:
    """
    Walk `value` depth first, collecting shared containers.

    Args:
        value: The node to inspect.
        objects: Every container seen so far, in first-seen order.
        duplicate_indexes: Indexes into `objects` of containers seen twice,
            each recorded once, in the order the second sighting happened.
        seen: id() -> index into `objects`; built on the fly when omitted.
    """
    if seen is None:
        seen = {id(obj): index for index, obj in enumerate(objects)}

    # iterative preorder walk
    stack = [value]
    while stack:
        node = stack.pop()
        if not is_reference_container(node):
            continue
        index = seen.get(id(node))
        if index is not None:
            if index not in duplicate_indexes:
                duplicate_indexes.append(index)
            continue
        seen[id(node)] = len(objects)
        objects.append(node)
        children = node.values() if isinstance(node, Mapping) and not isinstance(node, (list, tuple)) else node
        # pushed reversed so children pop in source order
        stack.extend(reversed(list(children)))


def get_duplicate_references(value: Any, context: DumpContext) -> None:
    """Fill `context.duplicates` with every container reachable twice."""
    objects: list = []
    duplicate_indexes: list[int] = []
    inspect_node(value, objects, duplicate_indexes)

    for index in duplicate_indexes:
        context.add_duplicate(objects[index])
    context.used_duplicates = [False] * len(duplicate_indexes)
    logger.debug(
        "Found %d shared containers among %d inspected", len(duplicate_indexes), len(objects)
    )
