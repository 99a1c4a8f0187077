"""codegen_renderer
=================

Rendering core of a multi-target code generator.

Target-language emitters describe their output through a
:class:`SourceBuilder` (lines, indentation, blank lines, tables, annotated
regions) and refer to identifiers through :class:`Name` placeholders. A
:class:`Renderer` assigns every name once, runs the emitter and serializes the
immutable fragment tree into text::

    from codegen_renderer import Name, Namespace, Renderer

    class HelloEmitter:
        def __init__(self):
            self.types = Namespace("types")
            self.greeter = self.types.add(Name("Greeter"))

        def set_up_naming(self):
            return [self.types]

        def emit_source(self, builder, names):
            builder.emit_line("class ", self.greeter, ":")
            builder.indent(lambda: builder.emit_line("pass"))

    print(Renderer(HelloEmitter(), type_graph=None).render().text)

"""

from .annotation import AnnotationData, IssueAnnotationData
from .builder import SourceBuilder
from .config import DEFAULT_CONFIG, RenderConfig
from .naming import FixedName, Name, Namespace, assign_names
from .renderer import RenderResult, Renderer, TargetEmitter, TemplateEmitter
from .serialize import (
    AnnotationLocation,
    Location,
    SerializedRenderResult,
    Span,
    serialize_render_result,
)
from .support import InternalError
from .types import INDENT_WIDTH, BlankLineLocations, NameAssignment, Sourcelike

__all__ = [
    # Building
    "SourceBuilder",
    "BlankLineLocations",
    "Sourcelike",
    "INDENT_WIDTH",
    # Annotations
    "AnnotationData",
    "IssueAnnotationData",
    # Naming
    "FixedName",
    "Name",
    "NameAssignment",
    "Namespace",
    "assign_names",
    # Rendering
    "DEFAULT_CONFIG",
    "RenderConfig",
    "RenderResult",
    "Renderer",
    "TargetEmitter",
    "TemplateEmitter",
    # Serialization
    "AnnotationLocation",
    "Location",
    "SerializedRenderResult",
    "Span",
    "serialize_render_result",
    # Errors
    "InternalError",
]
