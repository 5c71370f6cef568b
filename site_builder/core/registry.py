from __future__ import annotations

"""Element type registry.

Provides the immutable catalog of element-type descriptors. The catalog is
built once at start-up and injected into the services that need it; it is
never modified afterwards.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Tuple

from .exceptions import UnknownType
from .models import FIELD_KINDS, ElementType, FieldSpec

__all__ = ["ElementRegistry", "DEFAULT_ELEMENT_TYPES", "default_registry"]

logger = logging.getLogger(__name__)

_ALIGN = ("left", "center", "right")


def _margin_field() -> FieldSpec:
    return FieldSpec("marginY", "Vertical Margin (px)", "number", min=0, max=96)


DEFAULT_ELEMENT_TYPES: Tuple[ElementType, ...] = (
    ElementType(
        type="heading",
        label="Heading",
        icon="H",
        defaults={"text": "Your headline", "level": 2, "align": "left", "color": "#111827", "marginY": 12},
        fields=(
            FieldSpec("text", "Text", "text"),
            FieldSpec("level", "Level", "select", options=(1, 2, 3, 4)),
            FieldSpec("align", "Align", "select", options=_ALIGN),
            FieldSpec("color", "Color", "color"),
            _margin_field(),
        ),
    ),
    ElementType(
        type="text",
        label="Paragraph",
        icon="¶",
        defaults={"text": "Write something thoughtful here.", "align": "left", "color": "#374151", "marginY": 8},
        fields=(
            FieldSpec("text", "Text", "textarea"),
            FieldSpec("align", "Align", "select", options=_ALIGN),
            FieldSpec("color", "Color", "color"),
            _margin_field(),
        ),
    ),
    ElementType(
        type="image",
        label="Image",
        icon="\U0001f5bc",
        defaults={"src": "https://picsum.photos/800/400", "alt": "Placeholder image", "radius": 16, "marginY": 8},
        fields=(
            FieldSpec("src", "Image URL", "text"),
            FieldSpec("alt", "Alt Text", "text"),
            FieldSpec("radius", "Corner Radius (px)", "number", min=0, max=48),
            _margin_field(),
        ),
    ),
    ElementType(
        type="button",
        label="Button",
        icon="◉",
        defaults={"label": "Click me", "href": "#", "variant": "solid", "align": "left", "marginY": 10},
        fields=(
            FieldSpec("label", "Label", "text"),
            FieldSpec("href", "Link", "text"),
            FieldSpec("variant", "Style", "select", options=("solid", "outline", "ghost")),
            FieldSpec("align", "Align", "select", options=_ALIGN),
            _margin_field(),
        ),
    ),
    ElementType(
        type="section",
        label="Section",
        icon="▭",
        defaults={"bg": "#ffffff", "paddingY": 32, "paddingX": 16, "maxW": 900, "radius": 20, "shadow": True},
        fields=(
            FieldSpec("bg", "Background", "color"),
            FieldSpec("paddingY", "Padding Y (px)", "number", min=0, max=128),
            FieldSpec("paddingX", "Padding X (px)", "number", min=0, max=64),
            FieldSpec("maxW", "Max Width (px)", "number", min=300, max=1400),
            FieldSpec("radius", "Corner Radius (px)", "number", min=0, max=40),
            FieldSpec("shadow", "Shadow", "checkbox"),
        ),
        is_container=True,
    ),
    ElementType(
        type="spacer",
        label="Spacer",
        icon="↕",
        defaults={"height": 24},
        fields=(FieldSpec("height", "Height (px)", "number", min=0, max=160),),
    ),
)


class ElementRegistry:
    """Read-only lookup table of element types keyed by type tag.

    The registry preserves the order in which types were supplied; that order
    is the palette order.
    """

    def __init__(self, element_types: Iterable[ElementType] = DEFAULT_ELEMENT_TYPES) -> None:
        types: Dict[str, ElementType] = {}
        for element_type in element_types:
            if element_type.type in types:
                raise ValueError(f"Duplicate element type '{element_type.type}'")
            for spec in element_type.fields:
                if spec.kind not in FIELD_KINDS:
                    raise ValueError(
                        f"Field '{spec.key}' of '{element_type.type}' has unknown kind '{spec.kind}'"
                    )
                if spec.key not in element_type.defaults:
                    raise ValueError(
                        f"Field '{spec.key}' of '{element_type.type}' has no default value"
                    )
            types[element_type.type] = element_type
        self._types = types
        logger.debug("Element registry built with types: %s", ", ".join(types))

    def get(self, type_name: str) -> ElementType:
        """Return the descriptor for *type_name*.

        Raises
        ------
        UnknownType
            If no descriptor is registered under that tag.
        """
        try:
            return self._types[type_name]
        except (KeyError, TypeError):
            raise UnknownType(str(type_name)) from None

    def palette(self) -> List[ElementType]:
        """Return descriptors in palette order."""
        return list(self._types.values())

    def type_names(self) -> List[str]:
        return list(self._types)

    def __contains__(self, type_name: object) -> bool:
        try:
            return type_name in self._types
        except TypeError:
            return False

    def __iter__(self) -> Iterator[ElementType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


_DEFAULT_REGISTRY: ElementRegistry | None = None


def default_registry() -> ElementRegistry:
    """Return the process-wide registry built from :data:`DEFAULT_ELEMENT_TYPES`."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ElementRegistry(DEFAULT_ELEMENT_TYPES)
    return _DEFAULT_REGISTRY
