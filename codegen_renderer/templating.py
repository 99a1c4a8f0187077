"""Template fallback mode.

Targets that do not need the structural guarantees of the fragment tree can
render straight from a Jinja2 template. Each renderer owns its own
:class:`jinja2.Environment`, tuned for source text rather than HTML:

* no autoescaping,
* block tags do not leave stray newlines or leading spaces,
* ``StrictUndefined`` so a missing context key fails the render.

Helpers available inside templates:

* ``if_eq`` test: ``{% if kind is if_eq("enum") %}``.
* ``name`` filter: resolves a :class:`~codegen_renderer.naming.Name` through
  the render's name assignment, ``{{ type_name | name }}``.
"""

from typing import Any, Mapping

from jinja2 import BaseLoader, Environment, StrictUndefined
from loguru import logger

from codegen_renderer.naming import Name
from codegen_renderer.support import panic
from codegen_renderer.types import NameAssignment


def if_eq(a: Any, b: Any) -> bool:
    return a == b


def make_environment(names: NameAssignment) -> Environment:
    env = Environment(
        loader=BaseLoader(),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )

    def resolve_name(name: Name) -> str:
        if name not in names:
            panic(f"No name assigned for {name!r}")
        return names[name]

    env.tests["if_eq"] = if_eq
    env.filters["name"] = resolve_name
    return env


def render_template(
    env: Environment, template: str, context: Mapping[str, Any]
) -> str:
    """Render ``template`` with ``context`` in ``env``.

    Raises:
        jinja2.TemplateSyntaxError: If ``template`` does not parse.
        jinja2.UndefinedError: If the template uses a key missing from ``context``.
    """
    logger.debug("Rendering template with context keys {}", sorted(context))
    return env.from_string(template).render(**context)
