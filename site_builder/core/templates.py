from __future__ import annotations

"""Built-in seed documents.

Templates are declared in ``config/templates.yml`` as lists of
``{type, props, children?}`` entries. Building a template instantiates every
entry through the registry, so each load yields fresh identifiers.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from site_builder.core.models import Forest
from site_builder.core.registry import ElementRegistry, default_registry
from site_builder.core.tree import instantiate
from site_builder.core.validation import is_json_scalar

__all__ = ["TemplateLibrary"]

logger = logging.getLogger(__name__)


class TemplateLibrary:
    """Named template definitions plus a builder for fresh forests."""

    def __init__(
        self,
        definitions: Mapping[str, List[Mapping[str, Any]]],
        registry: Optional[ElementRegistry] = None,
    ) -> None:
        self._definitions: Dict[str, List[Mapping[str, Any]]] = {
            str(name): list(entries or []) for name, entries in definitions.items()
        }
        self._registry = registry or default_registry()

    def names(self) -> List[str]:
        return list(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def build(self, name: str) -> Forest:
        """Instantiate template *name*.

        Raises
        ------
        KeyError
            If no template is registered under *name*.
        UnknownType
            If the template references an unregistered element type.
        ValueError
            If a prop value is not a JSON scalar (for example a date parsed
            from a YAML override).
        """
        entries = self._definitions[name]
        forest = self._build_entries(entries)
        logger.info("Template built name=%s roots=%d", name, len(forest))
        return forest

    def _build_entries(self, entries: List[Mapping[str, Any]]) -> Forest:
        forest: Forest = []
        for entry in entries:
            props = entry.get("props") or {}
            for key, value in props.items():
                if not is_json_scalar(value):
                    raise ValueError(
                        f"Prop '{key}' of {entry['type']} has unsupported value type {type(value).__name__}"
                    )
            node = instantiate(entry["type"], props, self._registry)
            nested = entry.get("children")
            if nested and node.children is not None:
                node = node.with_children(self._build_entries(nested))
            elif nested:
                logger.warning("Template entry type=%s is not a container; children ignored", node.type)
            forest.append(node)
        return forest
