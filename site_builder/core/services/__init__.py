from __future__ import annotations

"""Editing services for the block forest.

Services are UI-agnostic and instantiated directly with their dependencies
injected (element registry, history size, export indent).
"""

from .structure_editing_service import OperationResult, StructureEditingService  # noqa: F401
from .reorder_service import ReorderService  # noqa: F401
from .undo_service import UndoService  # noqa: F401
from .serialization_service import SerializationService  # noqa: F401
from .render_service import PreviewResult, RenderService  # noqa: F401

__all__: list[str] = [
    "OperationResult",
    "StructureEditingService",
    "ReorderService",
    "UndoService",
    "SerializationService",
    "PreviewResult",
    "RenderService",
]
