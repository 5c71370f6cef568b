from __future__ import annotations

"""Shared data structures used across the site builder core.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, previews, etc.).
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

__all__ = ["FIELD_KINDS", "FieldSpec", "ElementType", "Node", "Forest"]

FIELD_KINDS = ("text", "textarea", "number", "select", "color", "checkbox")


@dataclass(frozen=True)
class FieldSpec:
    """One editable property shown in the inspector form.

    Attributes
    ----------
    key
        Property key; must be one of the owning type's default keys.
    label
        Human-readable label for the form control.
    kind
        One of :data:`FIELD_KINDS`.
    min, max
        Inclusive bounds for ``number`` fields.
    options
        Allowed values for ``select`` fields.
    """

    key: str
    label: str
    kind: str = "text"
    min: Optional[float] = None
    max: Optional[float] = None
    options: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class ElementType:
    """Static definition of an element type (registry entry).

    Attributes
    ----------
    type
        Type tag stored on nodes, e.g. ``"heading"``.
    label, icon
        Palette display strings.
    defaults
        Default props; every node of this type carries exactly these keys.
    fields
        Ordered inspector fields.
    is_container
        Whether nodes of this type own a ``children`` list.
    """

    type: str
    label: str
    defaults: Mapping[str, Any]
    fields: Tuple[FieldSpec, ...] = ()
    is_container: bool = False
    icon: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))
        object.__setattr__(self, "fields", tuple(self.fields))

    def field(self, key: str) -> Optional[FieldSpec]:
        """Return the field spec for *key*, or None when the key is not editable."""
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None


@dataclass(frozen=True)
class Node:
    """One block of the document tree.

    Nodes are treated as values: operations build new nodes instead of
    mutating existing ones, so a forest installed by a commit never changes
    afterwards.

    Attributes
    ----------
    id
        Globally unique identifier.
    type
        Type tag resolved through the element registry.
    props
        Property key -> scalar value.
    children
        Child nodes for container types, ``None`` for leaves.
    """

    id: str
    type: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: Optional[List["Node"]] = None

    @property
    def is_container(self) -> bool:
        return self.children is not None

    def with_props(self, **changes: Any) -> "Node":
        """Return a copy with *changes* applied on top of the current props."""
        return replace(self, props={**self.props, **changes})

    def with_children(self, children: List["Node"]) -> "Node":
        return replace(self, children=list(children))


Forest = List[Node]
