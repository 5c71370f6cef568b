from __future__ import annotations

"""Service layer for structural edits on the block forest.

This module provides a UI-agnostic, testable service that encapsulates the
mutation rules for the document tree (adding, removing and editing blocks).

Scope and guarantees:
- Operates purely in-memory on forests, no file I/O nor UI imports.
- Every operation is total: a stale or unknown target yields
  OperationResult(success=False, ...) carrying the unchanged input forest,
  never an exception.
- Forests are never mutated in place. The returned forest is a new list;
  nodes not on the edited path are shared with the input.

Examples
--------
Basic usage:

    service = StructureEditingService(registry)
    result = service.add_block(forest, "heading")
    forest = result.forest

"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from site_builder.core.exceptions import UnknownType
from site_builder.core.models import Forest, Node
from site_builder.core.registry import ElementRegistry, default_registry
from site_builder.core.tree import instantiate, root_index
from site_builder.core.validation import is_json_scalar

__all__ = ["OperationResult", "StructureEditingService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of a structural editing operation.

    Attributes
    ----------
    success
        Whether the operation changed the forest.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    forest
        The resulting forest. On a no-op this is the input forest itself.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None
    forest: Optional[Forest] = None


class StructureEditingService:
    """Encapsulates add/remove/update-property on a forest of nodes.

    Design principles:
    - No UI dependencies, no disk I/O.
    - No exceptions for expected invalid actions; return OperationResult.
    - Copy-on-write: only the nodes along the path to an edited node are
      rebuilt.

    Notes
    -----
    Removal works on root-level nodes only. A node nested inside a container
    is reachable for selection and property edits but cannot be removed on
    its own; removing its root-level ancestor removes it with the subtree.
    """

    def __init__(self, registry: Optional[ElementRegistry] = None) -> None:
        self._registry = registry or default_registry()

    @property
    def registry(self) -> ElementRegistry:
        return self._registry

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def add_block(
        self,
        forest: Forest,
        type_name: str,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> OperationResult:
        """Append a freshly instantiated block of *type_name* at the root."""
        logger.info("Edit: add_block type=%s", type_name)
        try:
            node = instantiate(type_name, overrides, self._registry)
        except UnknownType as exc:
            logger.warning("Edit noop: add_block unknown_type type=%s", type_name)
            return OperationResult(False, str(exc), {"type": type_name}, forest)

        new_forest = list(forest) + [node]
        logger.info("Edit OK: add_block type=%s id=%s", type_name, node.id)
        return OperationResult(
            True, f"Added {type_name} block.", {"node_id": node.id, "type": type_name}, new_forest
        )

    def remove_block(self, forest: Forest, node_id: str) -> OperationResult:
        """Remove the root-level block *node_id* (with its subtree)."""
        logger.info("Edit: remove_block id=%s", node_id)
        index = root_index(forest, node_id)
        if index < 0:
            logger.info("Edit noop: remove_block not_found id=%s", node_id)
            return OperationResult(False, f"Block not found for id '{node_id}'.", {"node_id": node_id}, forest)

        new_forest = list(forest[:index]) + list(forest[index + 1:])
        logger.info("Edit OK: remove_block id=%s index=%d", node_id, index)
        return OperationResult(True, "Removed block.", {"node_id": node_id, "index": index}, new_forest)

    def update_property(self, forest: Forest, node_id: str, key: str, value: Any) -> OperationResult:
        """Replace ``props[key]`` on the node *node_id*, at any depth.

        Keys that the node does not already carry are refused so that props
        keep exactly the key set seeded from the type defaults. Values must be
        JSON scalars; anything else is refused before the forest is touched.
        """
        logger.info("Edit: update_property id=%s key=%s", node_id, key)
        if not is_json_scalar(value):
            logger.warning(
                "Edit noop: update_property invalid_value id=%s key=%s type=%s", node_id, key, type(value).__name__
            )
            return OperationResult(
                False,
                f"Value for '{key}' must be a string, number, boolean or null.",
                {"node_id": node_id, "key": key, "reason": "invalid_value"},
                forest,
            )
        new_forest, status = self._replace_prop(forest, node_id, key, value)
        if status == "not_found":
            logger.info("Edit noop: update_property not_found id=%s", node_id)
            return OperationResult(False, f"Block not found for id '{node_id}'.", {"node_id": node_id}, forest)
        if status == "unknown_key":
            logger.warning("Edit noop: update_property unknown_key id=%s key=%s", node_id, key)
            return OperationResult(
                False, f"Block '{node_id}' has no property '{key}'.", {"node_id": node_id, "key": key}, forest
            )
        if status == "unchanged":
            logger.info("Edit noop: update_property unchanged id=%s key=%s", node_id, key)
            return OperationResult(False, "Value unchanged.", {"node_id": node_id, "key": key}, forest)

        logger.info("Edit OK: update_property id=%s key=%s", node_id, key)
        return OperationResult(
            True, f"Updated '{key}'.", {"node_id": node_id, "key": key, "value": value}, new_forest
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _replace_prop(
        self, nodes: List[Node], node_id: str, key: str, value: Any
    ) -> Tuple[List[Node], str]:
        """Path-copying replacement; returns (nodes, status).

        Status is one of ``updated``, ``unchanged``, ``unknown_key`` or
        ``not_found``. When the status is not ``updated`` the returned list is
        the input list.
        """
        for index, node in enumerate(nodes):
            if node.id == node_id:
                if key not in node.props:
                    return nodes, "unknown_key"
                if node.props[key] == value and type(node.props[key]) is type(value):
                    return nodes, "unchanged"
                rebuilt = list(nodes)
                rebuilt[index] = node.with_props(**{key: value})
                return rebuilt, "updated"
            if node.children:
                children, status = self._replace_prop(node.children, node_id, key, value)
                if status == "not_found":
                    continue
                if status != "updated":
                    return nodes, status
                rebuilt = list(nodes)
                rebuilt[index] = node.with_children(children)
                return rebuilt, "updated"
        return nodes, "not_found"
