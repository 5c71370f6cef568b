from __future__ import annotations

"""Exception classes for the document editing core.

Only two conditions are errors in the editing core: a type tag with no
registry entry and an import payload that cannot be turned into a forest.
Stale identifiers and empty history are no-ops, not exceptions.
"""

from typing import Optional

__all__ = ["SiteBuilderError", "UnknownType", "InvalidDocument"]


class SiteBuilderError(Exception):
    """Base exception for all editing-core errors.

    All core exceptions inherit from this base class so callers can catch
    them in a single place and surface them to the user.
    """

    def __init__(self, message: str, node_id: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.cause = cause

    def __str__(self) -> str:
        if self.node_id:
            return f"[Node: {self.node_id}] {super().__str__()}"
        return super().__str__()


class UnknownType(SiteBuilderError):
    """Raised when a type tag has no entry in the element registry.

    Never raised for internally generated nodes; it arises from a foreign
    or corrupted import, or from a template referencing a missing type.
    """

    def __init__(self, type_name: str, node_id: Optional[str] = None) -> None:
        self.type_name = type_name
        super().__init__(f"Unknown element type '{type_name}'", node_id)


class InvalidDocument(SiteBuilderError):
    """Raised when import text does not decode to a sequence of nodes."""
    pass
