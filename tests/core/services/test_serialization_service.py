import json

import pytest

from site_builder.core.exceptions import InvalidDocument
from site_builder.core.models import Node
from site_builder.core.services import serialization_service
from site_builder.core.services.serialization_service import SerializationService


@pytest.fixture
def service():
    return SerializationService(indent=2)


def test_export_format(service, nested_forest):
    data = json.loads(service.export_json(nested_forest))
    section, spacer = data
    assert list(section) == ["id", "type", "props", "children"]
    assert section["type"] == "section"
    assert [c["type"] for c in section["children"]] == ["heading", "text"]
    assert "children" not in spacer
    assert "children" not in section["children"][0]


def test_export_is_indented(service, forest):
    assert service.export_json(forest).startswith("[\n  {")


def test_round_trip_preserves_structure(service, nested_forest, forest):
    document = nested_forest + forest
    assert service.import_json(service.export_json(document)) == document


def test_round_trip_empty(service):
    assert service.import_json(service.export_json([])) == []


@pytest.mark.parametrize("text", [
    "{not an array}",
    '{"id": "a", "type": "heading"}',
    "42",
    '"text"',
    "null",
    "",
    "[1, 2]",
    '[{"type": "heading"}]',
    '[{"id": "a", "type": "heading", "props": []}]',
    '[{"id": "a", "type": "section", "props": {}, "children": {}}]',
])
def test_invalid_documents(service, text):
    with pytest.raises(InvalidDocument):
        service.import_json(text)


def test_deeply_nested_document_is_invalid(service):
    with pytest.raises(InvalidDocument) as excinfo:
        service.import_json("[" * 100000 + "]" * 100000)
    assert isinstance(excinfo.value.cause, RecursionError)


def test_deeply_nested_children_are_invalid(service, monkeypatch):
    data = []
    for _ in range(5000):
        data = [{"id": "s", "type": "section", "props": {}, "children": data}]
    monkeypatch.setattr(serialization_service.json, "loads", lambda text: data)
    with pytest.raises(InvalidDocument) as excinfo:
        service.import_json("[]")
    assert isinstance(excinfo.value.cause, RecursionError)


def test_non_text_input(service):
    with pytest.raises(InvalidDocument):
        service.import_json(None)  # type: ignore[arg-type]


def test_unknown_types_are_accepted(service):
    forest = service.import_json('[{"id": "x", "type": "carousel", "props": {"speed": 3}}]')
    assert forest == [Node(id="x", type="carousel", props={"speed": 3})]


def test_missing_props_default_to_empty(service):
    assert service.import_json('[{"id": "x", "type": "spacer"}]')[0].props == {}


def test_compact_export():
    assert "\n" not in SerializationService(indent=None).export_json([Node("a", "spacer", {"height": 1})])
