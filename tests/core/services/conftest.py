import pytest

from site_builder.core.models import Node
from site_builder.core.tree import instantiate


@pytest.fixture
def heading(registry):
    return instantiate("heading", registry=registry)


@pytest.fixture
def paragraph(registry):
    return instantiate("text", registry=registry)


@pytest.fixture
def image(registry):
    return instantiate("image", registry=registry)


@pytest.fixture
def forest(heading, paragraph, image):
    # [H, T, I]
    return [heading, paragraph, image]


@pytest.fixture
def nested_forest(registry):
    # section(heading, text), spacer
    inner_heading = instantiate("heading", {"text": "Inside"}, registry)
    inner_text = instantiate("text", registry=registry)
    section = instantiate("section", registry=registry).with_children([inner_heading, inner_text])
    spacer = instantiate("spacer", registry=registry)
    return [section, spacer]


@pytest.fixture
def ids():
    def extract(nodes):
        return [n.id for n in nodes]
    return extract


@pytest.fixture
def foreign_node():
    return Node(id="foreign-1", type="carousel", props={"speed": 3})
