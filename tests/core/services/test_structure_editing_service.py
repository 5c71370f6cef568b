import datetime

import pytest

from site_builder.core.services.structure_editing_service import (
    OperationResult,
    StructureEditingService,
)


@pytest.fixture
def service(registry):
    return StructureEditingService(registry)


def test_add_block_appends_at_root(service, forest, ids):
    result = service.add_block(forest, "button")
    assert isinstance(result, OperationResult)
    assert result.success is True
    assert len(result.forest) == len(forest) + 1
    assert ids(result.forest)[:3] == ids(forest)
    added = result.forest[-1]
    assert added.type == "button" and added.id == result.details["node_id"]
    # input untouched
    assert len(forest) == 3


def test_add_unknown_type_is_noop(service, forest):
    result = service.add_block(forest, "carousel")
    assert result.success is False
    assert result.forest is forest


def test_remove_block(service, forest, heading, ids):
    result = service.remove_block(forest, heading.id)
    assert result.success is True
    assert ids(result.forest) == ids(forest)[1:]


def test_remove_missing_is_noop(service, forest):
    result = service.remove_block(forest, "missing")
    assert result.success is False
    assert result.forest is forest


def test_remove_nested_is_noop(service, nested_forest):
    child = nested_forest[0].children[0]
    result = service.remove_block(nested_forest, child.id)
    assert result.success is False
    assert result.forest is nested_forest


def test_update_property_replaces_one_key(service, forest, heading):
    result = service.update_property(forest, heading.id, "text", "Hi")
    assert result.success is True
    updated = result.forest[0]
    assert updated.id == heading.id
    assert updated.props["text"] == "Hi"
    assert {k: v for k, v in updated.props.items() if k != "text"} == {
        k: v for k, v in heading.props.items() if k != "text"
    }
    # untouched siblings are shared, original node untouched
    assert result.forest[1] is forest[1]
    assert result.forest[2] is forest[2]
    assert heading.props["text"] == "Your headline"


def test_update_property_nested_path_copy(service, nested_forest):
    section, spacer = nested_forest
    inner_heading, inner_text = section.children
    result = service.update_property(nested_forest, inner_heading.id, "level", 3)
    assert result.success is True
    new_section = result.forest[0]
    assert new_section is not section
    assert new_section.id == section.id
    assert new_section.children[0].props["level"] == 3
    assert new_section.children[1] is inner_text
    assert result.forest[1] is spacer
    assert section.children[0].props["level"] == 2


@pytest.mark.parametrize("node_id", ["missing", "", None])
def test_update_property_missing_node_is_noop(service, forest, node_id):
    result = service.update_property(forest, node_id, "text", "x")
    assert result.success is False
    assert result.forest is forest


def test_update_property_unknown_key_is_noop(service, forest, heading):
    result = service.update_property(forest, heading.id, "font", "serif")
    assert result.success is False
    assert "font" not in result.forest[0].props


def test_update_property_same_value_is_noop(service, forest, heading):
    result = service.update_property(forest, heading.id, "level", 2)
    assert result.success is False
    assert result.forest is forest


def test_update_property_missing_nested_id_is_noop(service, nested_forest):
    result = service.update_property(nested_forest, "missing-child", "text", "x")
    assert result.success is False
    assert result.forest is nested_forest


@pytest.mark.parametrize("value", [["a"], {"a": 1}, datetime.date(2024, 1, 1), object()])
def test_update_property_rejects_non_scalar_values(service, forest, heading, value):
    result = service.update_property(forest, heading.id, "text", value)
    assert result.success is False
    assert result.details["reason"] == "invalid_value"
    assert result.forest is forest


def test_update_property_accepts_null(service, forest, heading):
    result = service.update_property(forest, heading.id, "text", None)
    assert result.success is True
    assert result.forest[0].props["text"] is None
