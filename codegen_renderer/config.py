"""Renderer configuration."""

from dataclasses import dataclass

from codegen_renderer.naming import assign_names
from codegen_renderer.serialize import DEFAULT_INDENTATION
from codegen_renderer.types import NameAssigner


@dataclass(frozen=True)
class RenderConfig:
    """Options shared by every render of a :class:`~codegen_renderer.renderer.Renderer`.

    Attributes:
        indentation (str): String written once per indentation level.
        name_assigner (NameAssigner): Turns the emitter's namespaces into the
            name assignment. Called at most once per renderer.
    """

    indentation: str = DEFAULT_INDENTATION
    name_assigner: NameAssigner = assign_names


DEFAULT_CONFIG = RenderConfig()
