from __future__ import annotations

"""Composition root: wire configuration, catalog and services into an editor."""

import logging
from typing import Any, Dict, Optional

from site_builder.config import ConfigManager
from site_builder.core.exceptions import UnknownType
from site_builder.core.registry import ElementRegistry, default_registry
from site_builder.core.services import (
    RenderService,
    ReorderService,
    SerializationService,
    StructureEditingService,
    UndoService,
)
from site_builder.core.services.undo_service import DEFAULT_MAX_HISTORY
from site_builder.core.templates import TemplateLibrary
from site_builder.editor.controller import EditorController

__all__ = ["create_editor"]

logger = logging.getLogger(__name__)


def _int_setting(
    editor_cfg: Dict[str, Any], key: str, default: Optional[int], allow_none: bool = False
) -> Optional[int]:
    """Read a non-negative integer setting, falling back to *default* on a bad value."""
    value = editor_cfg.get(key, default)
    if value is None and allow_none:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    logger.warning("Invalid editor setting %s=%r; using default %r", key, value, default)
    return default


def create_editor(
    registry: Optional[ElementRegistry] = None,
    template: Optional[str] = None,
) -> EditorController:
    """Build an :class:`EditorController` from the current configuration.

    The editor starts with *template* (default: ``editor.default_template``)
    installed as live state with an empty undo history. Pass ``template=""``
    to start from an empty document.
    """
    config = ConfigManager()
    editor_cfg = config.get_editor_config()
    registry = registry or default_registry()

    controller = EditorController(
        registry=registry,
        editing_service=StructureEditingService(registry),
        reorder_service=ReorderService(),
        undo_service=UndoService(max_history=_int_setting(editor_cfg, "max_history", DEFAULT_MAX_HISTORY)),
        serialization_service=SerializationService(
            indent=_int_setting(editor_cfg, "export_indent", 2, allow_none=True)
        ),
        template_library=TemplateLibrary(config.get_templates(), registry),
        render_service=RenderService(registry),
        validate_properties=bool(editor_cfg.get("validate_properties", True)),
    )
    controller.set_preview_width(str(editor_cfg.get("preview_width", "desktop")))

    start = editor_cfg.get("default_template", "") if template is None else template
    if start:
        if start in controller.template_library:
            try:
                controller.undo_service.reset(controller.template_library.build(start))
            except (UnknownType, ValueError) as exc:
                logger.error("Default template '%s' cannot be built: %s; starting empty", start, exc)
        else:
            logger.warning("Default template '%s' not found; starting empty", start)
    logger.info("Editor ready roots=%d", len(controller.forest))
    return controller
