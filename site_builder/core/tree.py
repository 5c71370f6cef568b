from __future__ import annotations

"""Tree model helpers: node construction and depth-first lookup.

These helpers are side-effect-free and contain no UI or disk I/O; they can be
used across all layers of the builder.
"""

import logging
import uuid
from typing import Any, Iterator, Mapping, Optional, Sequence

from .models import Forest, Node
from .registry import ElementRegistry, default_registry

__all__ = [
    "generate_node_id",
    "instantiate",
    "find",
    "iter_nodes",
    "root_index",
]

logger = logging.getLogger(__name__)


def generate_node_id() -> str:
    """Return a fresh 128-bit random identifier as a hex-with-dashes string."""
    return str(uuid.uuid4())


def instantiate(
    type_name: str,
    overrides: Optional[Mapping[str, Any]] = None,
    registry: Optional[ElementRegistry] = None,
) -> Node:
    """Build a new node of *type_name* with default props and a fresh id.

    Props are seeded from the descriptor defaults; *overrides* win per key.
    Container types receive an empty ``children`` list.

    Raises
    ------
    UnknownType
        If *type_name* is not registered.
    """
    descriptor = (registry or default_registry()).get(type_name)
    props = dict(descriptor.defaults)
    if overrides:
        props.update(overrides)
    return Node(
        id=generate_node_id(),
        type=descriptor.type,
        props=props,
        children=[] if descriptor.is_container else None,
    )


def iter_nodes(forest: Sequence[Node]) -> Iterator[Node]:
    """Yield every node of *forest* in pre-order, descending into containers."""
    for node in forest:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def find(forest: Sequence[Node], node_id: Optional[str]) -> Optional[Node]:
    """Return the first node whose id is *node_id* (pre-order DFS), or None."""
    if node_id is None:
        return None
    for node in iter_nodes(forest):
        if node.id == node_id:
            return node
    return None


def root_index(forest: Forest, node_id: Optional[str]) -> int:
    """Return the position of *node_id* among root-level nodes, or -1."""
    for index, node in enumerate(forest):
        if node.id == node_id:
            return index
    return -1
