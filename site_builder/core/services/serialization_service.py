from __future__ import annotations

"""JSON export/import of forests.

Document format: a JSON array whose elements are objects with ``id``,
``type``, ``props`` and, for container types only, ``children`` (an array of
the same shape). There is no version field.

Import accepts unknown type tags; those fail later, at render or edit time.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from site_builder.core.exceptions import InvalidDocument
from site_builder.core.models import Forest, Node

__all__ = ["SerializationService", "forest_to_data", "forest_from_data"]

logger = logging.getLogger(__name__)


def forest_to_data(forest: Forest) -> List[Dict[str, Any]]:
    """Return plain JSON-compatible data for *forest*."""
    data: List[Dict[str, Any]] = []
    for node in forest:
        item: Dict[str, Any] = {"id": node.id, "type": node.type, "props": dict(node.props)}
        if node.children is not None:
            item["children"] = forest_to_data(node.children)
        data.append(item)
    return data


def forest_from_data(data: Any, _path: str = "$") -> Forest:
    """Build a forest from decoded JSON *data*.

    Raises
    ------
    InvalidDocument
        If *data* is not a list, or an entry cannot be turned into a node
        (not an object, or missing ``id``/``type``).
    """
    if not isinstance(data, list):
        raise InvalidDocument(f"Expected a JSON array at {_path}, got {type(data).__name__}")

    forest: Forest = []
    for index, item in enumerate(data):
        where = f"{_path}[{index}]"
        if not isinstance(item, dict):
            raise InvalidDocument(f"Expected an object at {where}, got {type(item).__name__}")
        if "id" not in item or "type" not in item:
            raise InvalidDocument(f"Block at {where} is missing 'id' or 'type'")

        props = item.get("props")
        if props is None:
            props = {}
        elif not isinstance(props, dict):
            raise InvalidDocument(f"Expected an object for props at {where}")

        children: Optional[Forest] = None
        if item.get("children") is not None:
            children = forest_from_data(item["children"], f"{where}.children")

        forest.append(Node(id=item["id"], type=item["type"], props=dict(props), children=children))
    return forest


class SerializationService:
    """Encode and decode forests as JSON text.

    Parameters
    ----------
    indent : int, default=2
        Indentation used for exported text. ``None`` produces compact output.
    """

    def __init__(self, indent: Optional[int] = 2) -> None:
        self._indent = indent

    def export_json(self, forest: Forest) -> str:
        text = json.dumps(forest_to_data(forest), indent=self._indent, ensure_ascii=False)
        logger.debug("Exported forest roots=%d chars=%d", len(forest), len(text))
        return text

    def import_json(self, text: str) -> Forest:
        """Decode *text* into a new forest.

        Raises
        ------
        InvalidDocument
            If *text* is not valid JSON or does not describe a list of blocks.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise InvalidDocument(f"Document is not valid JSON: {exc}", cause=exc) from exc
        except RecursionError as exc:
            raise InvalidDocument("Document is nested too deeply", cause=exc) from exc
        try:
            forest = forest_from_data(data)
        except RecursionError as exc:
            raise InvalidDocument("Document is nested too deeply", cause=exc) from exc
        logger.debug("Imported forest roots=%d", len(forest))
        return forest
