from __future__ import annotations

"""Renderer contract and HTML preview rendering.

For every node the core supplies ``(resolved props, rendered children)`` to
the renderer registered for the node's type and never inspects what comes
back. Nodes whose type has no registry entry are rendered through a visible
placeholder instead of failing the whole document.

The default renderers build ``lxml.html`` elements so the forest can be
serialized to a standalone HTML preview.
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from lxml import html as LH
from lxml.html.builder import E

from site_builder.core.models import Forest, Node
from site_builder.core.registry import ElementRegistry, default_registry

__all__ = [
    "Renderer",
    "PreviewResult",
    "RenderService",
    "DEFAULT_HTML_RENDERERS",
    "PREVIEW_WIDTHS",
]

logger = logging.getLogger(__name__)

Renderer = Callable[[Mapping[str, Any], Optional[List[Any]]], Any]
Placeholder = Callable[[Node], Any]

PREVIEW_WIDTHS: Dict[str, int] = {"desktop": 1100, "mobile": 420}


@dataclass
class PreviewResult:
    """Structured result for preview-oriented operations.

    Attributes
    ----------
    success : bool
        Indicates whether the operation completed successfully.
    content : Optional[str]
        HTML payload when successful.
    message : str
        Human-readable outcome message. Clear on failure, brief on success.
    details : Optional[Dict[str, Any]]
        Structured ancillary data (placeholder counts, widths, errors).
    """
    success: bool
    content: Optional[str]
    message: str
    details: Optional[Dict[str, Any]] = None


# -----------------------------
# Default HTML renderers
# -----------------------------

def _style(**rules: Any) -> str:
    return "; ".join(f"{name.replace('_', '-')}: {value}" for name, value in rules.items() if value is not None)


def _px(value: Any) -> str:
    return f"{value}px"


def _heading(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    try:
        level = min(6, max(1, int(props.get("level", 2))))
    except (TypeError, ValueError):
        level = 2
    return E(
        f"h{level}",
        {
            "class": "font-semibold tracking-tight",
            "style": _style(text_align=props.get("align"), color=props.get("color"),
                            margin=f"{_px(props.get('marginY', 0))} 0"),
        },
        str(props.get("text", "")),
    )


def _paragraph(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    return E.p(
        {
            "class": "leading-relaxed",
            "style": _style(text_align=props.get("align"), color=props.get("color"),
                            margin=f"{_px(props.get('marginY', 0))} 0"),
        },
        str(props.get("text", "")),
    )


def _image(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    return E.img({
        "src": str(props.get("src", "")),
        "alt": str(props.get("alt", "")),
        "class": "w-full object-cover",
        "style": _style(border_radius=_px(props.get("radius", 0)),
                        margin=f"{_px(props.get('marginY', 0))} 0"),
    })


_BUTTON_VARIANTS = {
    "solid": "bg-black text-white",
    "outline": "border border-black text-black",
    "ghost": "text-black/70 underline",
}


def _button(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    variant = _BUTTON_VARIANTS.get(str(props.get("variant")), _BUTTON_VARIANTS["ghost"])
    return E.div(
        {"style": _style(text_align=props.get("align"), margin=f"{_px(props.get('marginY', 0))} 0")},
        E.a({"href": str(props.get("href", "#")), "class": f"inline-block px-4 py-2 rounded-2xl {variant}"},
            str(props.get("label", ""))),
    )


def _section(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    return E.section(
        {
            "class": "mx-auto shadow-lg" if props.get("shadow") else "mx-auto",
            "style": _style(
                background=props.get("bg"),
                padding=f"{_px(props.get('paddingY', 0))} {_px(props.get('paddingX', 0))}",
                border_radius=_px(props.get("radius", 0)),
                max_width=_px(props.get("maxW", 900)),
            ),
        },
        *(children or []),
    )


def _spacer(props: Mapping[str, Any], children: Optional[List[Any]] = None) -> Any:
    return E.div({"style": _style(height=_px(props.get("height", 0)))})


def _placeholder(node: Node) -> Any:
    return E.div(
        {"class": "unknown-block", "data-type": str(node.type), "data-id": str(node.id)},
        f"Unknown block type '{node.type}'",
    )


DEFAULT_HTML_RENDERERS: Dict[str, Renderer] = {
    "heading": _heading,
    "text": _paragraph,
    "image": _image,
    "button": _button,
    "section": _section,
    "spacer": _spacer,
}


class RenderService:
    """Apply per-type renderers to a forest.

    Parameters
    ----------
    registry : ElementRegistry, optional
        Registry used to resolve defaults and detect unknown types.
    renderers : mapping, optional
        Type tag -> renderer. Defaults to :data:`DEFAULT_HTML_RENDERERS`.
    placeholder : callable, optional
        Called with the node when its type is unknown or has no renderer.
    """

    def __init__(
        self,
        registry: Optional[ElementRegistry] = None,
        renderers: Optional[Mapping[str, Renderer]] = None,
        placeholder: Optional[Placeholder] = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._renderers: Dict[str, Renderer] = dict(
            DEFAULT_HTML_RENDERERS if renderers is None else renderers
        )
        self._placeholder: Placeholder = placeholder or _placeholder

    def resolve_props(self, node: Node) -> Dict[str, Any]:
        """Return descriptor defaults overlaid with the node's own props."""
        descriptor = self._registry.get(node.type)
        return {**descriptor.defaults, **node.props}

    def render_node(self, node: Node) -> Any:
        renderer = self._renderers.get(node.type) if node.type in self._registry else None
        if renderer is None:
            logger.warning("Render placeholder: unknown type=%s id=%s", node.type, node.id)
            return self._placeholder(node)
        children = None
        if node.children is not None:
            children = [self.render_node(child) for child in node.children]
        return renderer(self.resolve_props(node), children)

    def render_forest(self, forest: Forest) -> List[Any]:
        return [self.render_node(node) for node in forest]

    def render_html_preview(self, forest: Forest, width: str = "desktop") -> PreviewResult:
        """Render *forest* with the default HTML renderers into a standalone page.

        Does not raise for routine errors; returns a structured failure.
        """
        logger.debug("Preview: render_html_preview roots=%d width=%s", len(forest), width)
        max_width = PREVIEW_WIDTHS.get(width)
        if max_width is None:
            return PreviewResult(False, None, f"Unknown preview width '{width}'.",
                                 {"allowed": sorted(PREVIEW_WIDTHS)})
        try:
            units = self.render_forest(forest)
            page = E.html(
                E.head(E.meta({"charset": "utf-8"}), E.title("Preview")),
                E.body(
                    E.div({"class": "canvas", "style": _style(max_width=_px(max_width), margin="0 auto")},
                          *units),
                ),
            )
            content = LH.tostring(page, pretty_print=True, doctype="<!DOCTYPE html>", encoding="unicode")
        except (TypeError, ValueError) as exc:
            logger.error("Preview FAIL: exception type=%s msg=%s", exc.__class__.__name__, exc, exc_info=True)
            return PreviewResult(False, None, "Failed to render HTML preview.",
                                 {"exception_type": exc.__class__.__name__, "exception_message": str(exc)})
        logger.debug("Preview OK: render_html_preview len=%d", len(content))
        return PreviewResult(True, content, "", {"width": width, "roots": len(forest)})
