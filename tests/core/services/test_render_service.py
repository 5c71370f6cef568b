import pytest
from lxml import html as LH

from site_builder.core.services.render_service import RenderService
from site_builder.core.models import Node


@pytest.fixture
def service(registry):
    return RenderService(registry)


def test_renderer_receives_resolved_props_and_children(registry, nested_forest):
    calls = []

    def record(type_name):
        def renderer(props, children):
            calls.append((type_name, dict(props), children))
            return type_name
        return renderer

    service = RenderService(registry, renderers={t: record(t) for t in registry.type_names()})
    units = service.render_forest(nested_forest)
    assert units == ["section", "spacer"]
    section_call = [c for c in calls if c[0] == "section"][0]
    assert section_call[2] == ["heading", "text"]
    spacer_call = [c for c in calls if c[0] == "spacer"][0]
    assert spacer_call[2] is None


def test_missing_props_are_filled_from_defaults(service):
    node = Node(id="s", type="spacer", props={})
    assert service.resolve_props(node) == {"height": 24}


def test_unknown_type_renders_placeholder(service, foreign_node):
    element = service.render_node(foreign_node)
    assert element.get("class") == "unknown-block"
    assert "carousel" in element.text_content()


def test_heading_level_tag(service, registry):
    node = Node(id="h", type="heading", props={**registry.get("heading").defaults, "level": 1, "text": "Big"})
    element = service.render_node(node)
    assert element.tag == "h1"
    assert element.text == "Big"


def test_html_preview(service, nested_forest, foreign_node):
    result = service.render_html_preview(nested_forest + [foreign_node], "mobile")
    assert result.success is True
    doc = LH.fromstring(result.content)
    assert doc.xpath("//section//h2")[0].text == "Inside"
    assert doc.xpath("//div[@class='unknown-block']")
    assert "max-width: 420px" in doc.xpath("//div[@class='canvas']")[0].get("style")


def test_html_preview_unknown_width(service, forest):
    result = service.render_html_preview(forest, "tablet")
    assert result.success is False
    assert result.content is None
