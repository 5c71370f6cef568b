from __future__ import annotations

"""Drag-reorder of root-level blocks.

The gesture layer turns pointer coordinates into a candidate drop target id;
this service only decides the resulting sibling order. Reordering inside a
container is not supported: a source or target that is not a root-level node
is rejected with a no-op result.
"""

import logging
from typing import List, Optional, Sequence, TypeVar

from site_builder.core.models import Forest
from site_builder.core.tree import find, root_index
from site_builder.core.services.structure_editing_service import OperationResult

__all__ = ["ReorderService", "array_move"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Return a copy of *items* with the element at *old_index* moved to *new_index*.

    Elements between the two positions shift by one; every other element keeps
    its relative order.
    """
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


class ReorderService:
    """Two-phase drag contract: ``drag_start`` then ``drag_end``.

    ``drag_start`` only records the lifted id so a presentation layer can
    render a "moving" affordance; ``drag_end`` computes the new forest.
    """

    def __init__(self) -> None:
        self._active_id: Optional[str] = None

    @property
    def active_id(self) -> Optional[str]:
        """Id of the node currently being dragged, if any."""
        return self._active_id

    def drag_start(self, node_id: str) -> None:
        logger.debug("Drag start id=%s", node_id)
        self._active_id = node_id

    def drag_cancel(self) -> None:
        self._active_id = None

    def drag_end(self, forest: Forest, source_id: str, target_id: Optional[str]) -> OperationResult:
        """Move *source_id* to the root position currently held by *target_id*."""
        self._active_id = None
        logger.info("Edit: reorder source=%s target=%s", source_id, target_id)

        if target_id is None or target_id == source_id:
            logger.info("Edit noop: reorder no_target source=%s", source_id)
            return OperationResult(False, "No drop target.", {"source_id": source_id}, forest)

        old_index = root_index(forest, source_id)
        new_index = root_index(forest, target_id)
        if old_index < 0 or new_index < 0:
            nested = (old_index < 0 and find(forest, source_id) is not None) or (
                new_index < 0 and find(forest, target_id) is not None
            )
            if nested:
                logger.warning(
                    "Edit noop: reorder nested_not_supported source=%s target=%s", source_id, target_id
                )
                return OperationResult(
                    False,
                    "Reordering inside a section is not supported.",
                    {"source_id": source_id, "target_id": target_id, "reason": "nested"},
                    forest,
                )
            logger.info("Edit noop: reorder not_found source=%s target=%s", source_id, target_id)
            return OperationResult(
                False,
                "Block not found.",
                {"source_id": source_id, "target_id": target_id, "reason": "not_found"},
                forest,
            )

        new_forest = array_move(forest, old_index, new_index)
        logger.info("Edit OK: reorder source=%s from=%d to=%d", source_id, old_index, new_index)
        return OperationResult(
            True,
            "Moved block.",
            {"source_id": source_id, "target_id": target_id, "from": old_index, "to": new_index},
            new_forest,
        )
