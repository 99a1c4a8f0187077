# tests/integration/test_template_integration.py

from typing import List, Mapping, Sequence

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from codegen_renderer.config import RenderConfig
from codegen_renderer.naming import Name, Namespace, assign_names
from codegen_renderer.renderer import Renderer
from tests.test_utils import ClassEmitter, EnumTemplateEmitter


ENUM_TEMPLATE = """enum {{ enum | name }} {
{% for case in cases %}
    {{ case }},
{% endfor %}
}
{% if kind is if_eq("enum") %}
// kind: enum
{% endif %}
"""


def test_template_renders_with_resolved_names() -> None:
    emitter = EnumTemplateEmitter("Color", ["Red", "Green"])
    text = Renderer(emitter, type_graph=None).process_template(ENUM_TEMPLATE)
    assert text == "enum Color {\n    Red,\n    Green,\n}\n// kind: enum\n"


def test_template_missing_context_key_fails_fast() -> None:
    emitter = EnumTemplateEmitter("Color", [])
    renderer = Renderer(emitter, type_graph=None)
    with pytest.raises(UndefinedError):
        renderer.process_template("{{ missing }}")


def test_template_syntax_error_propagates() -> None:
    renderer = Renderer(EnumTemplateEmitter("Color", []), type_graph=None)
    with pytest.raises(TemplateSyntaxError):
        renderer.process_template("{% for %}")


def test_template_default_context_exposes_names() -> None:
    emitter = ClassEmitter([("Point", []), ("Point", [])])
    renderer = Renderer(emitter, type_graph=None)
    text = renderer.process_template(
        "{% for name in names %}{{ name | name }};{% endfor %}"
    )
    assert sorted(text.rstrip(";").split(";")) == ["Point", "Point2"]


def test_template_and_render_share_one_assignment() -> None:
    calls: List[int] = []

    def counting_assigner(namespaces: Sequence[Namespace]) -> Mapping[Name, str]:
        calls.append(len(namespaces))
        return assign_names(namespaces)

    renderer = Renderer(
        EnumTemplateEmitter("Color", ["Red"]),
        type_graph=None,
        config=RenderConfig(name_assigner=counting_assigner),
    )
    renderer.process_template(ENUM_TEMPLATE)
    names_after_template = renderer.names
    result = renderer.render()
    assert calls == [1]
    assert result.names is names_after_template
    assert result.lines == ("enum Color",)
