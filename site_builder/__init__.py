"""Top-level package of the site builder.

This package hosts the GUI-agnostic document editing engine. Front-ends
should only depend on the public API exposed here rather than importing
internal modules directly.
"""

from .core.exceptions import InvalidDocument, SiteBuilderError, UnknownType
from .core.models import ElementType, FieldSpec, Node
from .core.registry import ElementRegistry, default_registry
from .editor.controller import EditorController

__all__: list[str] = [
    "EditorController",
    "ElementRegistry",
    "ElementType",
    "FieldSpec",
    "InvalidDocument",
    "Node",
    "SiteBuilderError",
    "UnknownType",
    "default_registry",
]
