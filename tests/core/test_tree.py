import pytest

from site_builder.core.exceptions import UnknownType
from site_builder.core.tree import find, instantiate, iter_nodes, root_index


def test_instantiate_seeds_defaults_and_applies_overrides(registry):
    node = instantiate("heading", {"text": "Hi", "level": 1}, registry)
    assert node.type == "heading"
    assert node.props == {"text": "Hi", "level": 1, "align": "left", "color": "#111827", "marginY": 12}
    assert node.children is None


def test_instantiate_container_gets_empty_children(registry):
    assert instantiate("section", registry=registry).children == []


def test_instantiate_ids_are_unique(registry):
    ids = {instantiate("spacer", registry=registry).id for _ in range(500)}
    assert len(ids) == 500


def test_instantiate_unknown_type(registry):
    with pytest.raises(UnknownType):
        instantiate("carousel", registry=registry)


def test_instantiate_does_not_share_props_with_descriptor(registry):
    node = instantiate("spacer", registry=registry)
    node.props["height"] = 99
    assert registry.get("spacer").defaults["height"] == 24


def test_find_reaches_nested_nodes(registry):
    deep = instantiate("text", {"text": "deep"}, registry)
    inner = instantiate("section", registry=registry).with_children([deep])
    outer = instantiate("section", registry=registry).with_children([inner])
    forest = [instantiate("heading", registry=registry), outer]

    assert find(forest, deep.id) is deep
    assert find(forest, inner.id) is inner
    assert find(forest, "nope") is None
    assert find(forest, None) is None


def test_iter_nodes_is_pre_order(registry):
    a = instantiate("text", registry=registry)
    b = instantiate("text", registry=registry)
    section = instantiate("section", registry=registry).with_children([a, b])
    tail = instantiate("spacer", registry=registry)
    assert [n.id for n in iter_nodes([section, tail])] == [section.id, a.id, b.id, tail.id]


def test_root_index_ignores_nested(registry):
    child = instantiate("text", registry=registry)
    section = instantiate("section", registry=registry).with_children([child])
    assert root_index([section], section.id) == 0
    assert root_index([section], child.id) == -1
