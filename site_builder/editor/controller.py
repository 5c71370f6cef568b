from __future__ import annotations

"""Editor controller: the intent surface of the builder.

The controller turns user intents (add, select, edit, remove, drag, undo,
template, export, import) into service calls and routes every resulting
forest through :meth:`UndoService.commit`. It holds the transient editing
state (selection, drag, preview width) and contains no UI toolkit code.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from site_builder.core.exceptions import InvalidDocument, UnknownType
from site_builder.core.models import ElementType, FieldSpec, Forest, Node
from site_builder.core.registry import ElementRegistry
from site_builder.core.services.render_service import PREVIEW_WIDTHS, PreviewResult, RenderService
from site_builder.core.services.reorder_service import ReorderService
from site_builder.core.services.serialization_service import SerializationService
from site_builder.core.services.structure_editing_service import OperationResult, StructureEditingService
from site_builder.core.services.undo_service import UndoService
from site_builder.core.templates import TemplateLibrary
from site_builder.core.tree import find
from site_builder.core.validation import coerce_value

__all__ = ["EditorController"]

logger = logging.getLogger(__name__)


class EditorController:
    """Coordinate editing intents with the core services.

    Parameters
    ----------
    registry : ElementRegistry
        Element catalog shared by every service.
    editing_service : StructureEditingService
        Add/remove/update-property engine.
    reorder_service : ReorderService
        Drag-reorder engine.
    undo_service : UndoService
        Owner of the live forest and its history.
    serialization_service : SerializationService
        JSON export/import.
    template_library : TemplateLibrary
        Built-in seed documents.
    render_service : RenderService, optional
        Used for HTML previews.
    validate_properties : bool, default=True
        Coerce inspector values against the field schema before applying.

    Notes
    -----
    - Methods return OperationResult/booleans for routine failures; stale ids
      and empty history are silent no-ops.
    - Only successful operations are committed, so no-ops never add history.
    """

    def __init__(
        self,
        registry: ElementRegistry,
        editing_service: StructureEditingService,
        reorder_service: ReorderService,
        undo_service: UndoService,
        serialization_service: SerializationService,
        template_library: TemplateLibrary,
        render_service: Optional[RenderService] = None,
        validate_properties: bool = True,
    ) -> None:
        # Dependencies
        self.registry = registry
        self.editing_service = editing_service
        self.reorder_service = reorder_service
        self.undo_service = undo_service
        self.serialization_service = serialization_service
        self.template_library = template_library
        self.render_service = render_service or RenderService(registry)
        self.validate_properties = validate_properties

        # Transient editing state
        self.selected_id: Optional[str] = None
        self.preview_width: str = "desktop"

    # ---------------------------------------------------------------------------------
    # State accessors
    # ---------------------------------------------------------------------------------

    @property
    def forest(self) -> Forest:
        return self.undo_service.current

    @property
    def selected(self) -> Optional[Node]:
        """The selected node, or None when nothing (or something stale) is selected."""
        return find(self.undo_service.current, self.selected_id)

    @property
    def dragging_id(self) -> Optional[str]:
        return self.reorder_service.active_id

    def palette(self) -> List[ElementType]:
        return self.registry.palette()

    def inspector_fields(self, node_id: Optional[str] = None) -> List[FieldSpec]:
        """Editable fields for *node_id* (default: selection); empty for unknown types."""
        node = find(self.undo_service.current, node_id if node_id is not None else self.selected_id)
        if node is None or node.type not in self.registry:
            return []
        return list(self.registry.get(node.type).fields)

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _recorded_edit(self, result: OperationResult) -> OperationResult:
        """Commit the result's forest when the operation changed something."""
        if result.success and result.forest is not None:
            self.undo_service.commit(result.forest)
        return result

    def _noop(self, message: str, **details: Any) -> OperationResult:
        return OperationResult(False, message, details or None, self.undo_service.current)

    # ---------------------------------------------------------------------------------
    # Intents
    # ---------------------------------------------------------------------------------

    def add_block(self, type_name: str) -> OperationResult:
        return self._recorded_edit(self.editing_service.add_block(self.undo_service.current, type_name))

    def select(self, node_id: Optional[str]) -> bool:
        """Select *node_id*; an id that does not resolve clears the selection.

        Returns True if a node is selected afterwards.
        """
        if node_id is not None and find(self.undo_service.current, node_id) is None:
            logger.debug("Select stale id=%s; clearing selection", node_id)
            node_id = None
        self.selected_id = node_id
        return node_id is not None

    def update_property(self, node_id: str, key: str, value: Any) -> OperationResult:
        """Set ``props[key]`` on *node_id* after checking it against the field schema."""
        node = find(self.undo_service.current, node_id)
        if node is None:
            return self._noop(f"Block not found for id '{node_id}'.", node_id=node_id)

        try:
            descriptor = self.registry.get(node.type)
        except UnknownType as exc:
            logger.warning("Edit refused: %s id=%s", exc, node_id)
            return self._noop(f"{exc}; editing is disabled for this block.", node_id=node_id, reason="unknown_type")

        if self.validate_properties:
            spec = descriptor.field(key)
            if spec is None:
                return self._noop(f"'{key}' is not an editable property.", node_id=node_id, key=key)
            try:
                value = coerce_value(spec, value)
            except ValueError as exc:
                logger.info("Edit refused: invalid value id=%s key=%s: %s", node_id, key, exc)
                return self._noop(str(exc), node_id=node_id, key=key, reason="invalid_value")

        return self._recorded_edit(
            self.editing_service.update_property(self.undo_service.current, node_id, key, value)
        )

    def update_selected(self, key: str, value: Any) -> OperationResult:
        """Apply a property edit to the current selection."""
        if self.selected is None:
            return self._noop("Nothing selected.")
        return self.update_property(self.selected_id, key, value)  # type: ignore[arg-type]

    def remove_block(self, node_id: str) -> OperationResult:
        result = self._recorded_edit(self.editing_service.remove_block(self.undo_service.current, node_id))
        if result.success and self.selected is None:
            self.selected_id = None
        return result

    def drag_start(self, node_id: str) -> None:
        self.reorder_service.drag_start(node_id)

    def drag_end(self, source_id: str, target_id: Optional[str]) -> OperationResult:
        return self._recorded_edit(
            self.reorder_service.drag_end(self.undo_service.current, source_id, target_id)
        )

    def undo(self) -> bool:
        return self.undo_service.undo()

    def can_undo(self) -> bool:
        return self.undo_service.can_undo()

    def load_template(self, name: str) -> OperationResult:
        """Replace the document with a fresh copy of template *name*."""
        logger.info("Edit: load_template name=%s", name)
        if name not in self.template_library:
            return self._noop(f"Unknown template '{name}'.", template=name,
                              available=self.template_library.names())
        try:
            forest = self.template_library.build(name)
        except (UnknownType, ValueError) as exc:
            logger.error("Template %s cannot be built: %s", name, exc)
            return self._noop(f"Template '{name}' is broken: {exc}", template=name, reason="invalid_template")
        result = self._recorded_edit(
            OperationResult(True, f"Loaded template '{name}'.", {"template": name}, forest)
        )
        self.selected_id = None
        return result

    def export_json(self) -> str:
        return self.serialization_service.export_json(self.undo_service.current)

    def export_file(self, path: Union[str, Path]) -> OperationResult:
        """Write the exported document to *path* (UTF-8).

        The written path is returned in ``details["path"]``. The forest and
        history are never changed.
        """
        target = Path(path)
        try:
            target.write_text(self.export_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Export FAIL: cannot write %s: %s", target, exc)
            return self._noop(f"Cannot write '{target}': {exc}", path=target, reason="io_error")
        logger.info("Exported document to %s", target)
        return OperationResult(True, f"Exported to '{target}'.", {"path": target}, self.undo_service.current)

    def import_text(self, text: str) -> OperationResult:
        """Replace the document with the one decoded from *text*.

        On InvalidDocument the live forest, history and selection are left
        untouched and the error text is returned in ``message``.
        """
        logger.info("Edit: import chars=%d", len(text) if isinstance(text, str) else -1)
        try:
            forest = self.serialization_service.import_json(text)
        except InvalidDocument as exc:
            logger.warning("Import FAIL: %s", exc)
            return self._noop(str(exc), reason="invalid_document")
        result = self._recorded_edit(
            OperationResult(True, f"Imported {len(forest)} blocks.", {"roots": len(forest)}, forest)
        )
        self.selected_id = None
        return result

    def import_file(self, path: Union[str, Path]) -> OperationResult:
        """Read *path* (UTF-8) and import its contents."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Import FAIL: cannot read %s: %s", path, exc)
            return self._noop(f"Cannot read '{path}': {exc}", reason="io_error")
        return self.import_text(text)

    def set_preview_width(self, width: str) -> bool:
        if width not in PREVIEW_WIDTHS or width == self.preview_width:
            return False
        self.preview_width = width
        return True

    def render_preview(self) -> PreviewResult:
        return self.render_service.render_html_preview(self.undo_service.current, self.preview_width)
