"""Render orchestration.

A :class:`Renderer` drives one target-language emitter through a render:

1. The emitter declares the namespaces it needs (``set_up_naming``).
2. The configured name assigner resolves every name once; the resulting
   ``NameAssignment`` is reused for the rest of the renderer's life.
3. A fresh :class:`~codegen_renderer.builder.SourceBuilder` receives the
   leading comments and then every emission call of ``emit_source``.
4. The finished tree is serialized with the assignment.

The template fallback path (:meth:`Renderer.process_template`) shares step 2
and then hands ``make_template_context`` output to Jinja2, skipping the
fragment tree entirely.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Protocol, Sequence, Tuple

from jinja2 import Environment
from loguru import logger
from pyrsistent import pmap

from codegen_renderer.builder import SourceBuilder
from codegen_renderer.config import DEFAULT_CONFIG, RenderConfig
from codegen_renderer.naming import Namespace, unique_namespaces
from codegen_renderer.serialize import (
    AnnotationLocation,
    SerializedRenderResult,
    serialize_render_result,
)
from codegen_renderer.source import Source
from codegen_renderer.support import panic
from codegen_renderer.templating import make_environment, render_template
from codegen_renderer.types import NameAssignment


class TargetEmitter(Protocol):
    """Capability implemented by every target-language emitter."""

    def set_up_naming(self) -> Sequence[Namespace]:
        """Return the namespaces whose names must be assigned, in order."""
        ...

    def emit_source(self, builder: SourceBuilder, names: NameAssignment) -> None:
        """Build the output by calling emission primitives on ``builder``."""
        ...


class TemplateEmitter(TargetEmitter, Protocol):
    def make_template_context(self, names: NameAssignment) -> Mapping[str, Any]:
        ...


@dataclass(frozen=True)
class RenderResult:
    """Outcome of :meth:`Renderer.render`.

    Attributes:
        root_source (Source): Finished, immutable fragment tree.
        names (NameAssignment): Assignment used to serialize the tree.
        serialized (SerializedRenderResult): Output lines and annotation spans.
    """

    root_source: Source
    names: NameAssignment
    serialized: SerializedRenderResult

    @property
    def lines(self) -> Tuple[str, ...]:
        return self.serialized.lines

    @property
    def annotations(self) -> Tuple[AnnotationLocation, ...]:
        return self.serialized.annotations

    @property
    def issues(self) -> Iterator[AnnotationLocation]:
        return self.serialized.issues

    @property
    def text(self) -> str:
        return self.serialized.text


class Renderer:
    emitter: TargetEmitter
    leading_comments: Tuple[str, ...]
    config: RenderConfig

    def __init__(
        self,
        emitter: TargetEmitter,
        type_graph: Any,
        leading_comments: Optional[Sequence[str]] = None,
        config: RenderConfig = DEFAULT_CONFIG,
    ):
        self.emitter = emitter
        self._type_graph = type_graph
        self.leading_comments = tuple(leading_comments or ())
        self.config = config
        self._names: Optional[NameAssignment] = None
        self._environment: Optional[Environment] = None

    @property
    def type_graph(self) -> Any:
        return self._type_graph

    @property
    def names(self) -> NameAssignment:
        """The name assignment; fatal before names have been assigned."""
        if self._names is None:
            return panic("Names accessed before they were assigned")
        return self._names

    def _assign_names(self) -> NameAssignment:
        if self._names is None:
            namespaces = unique_namespaces(self.emitter.set_up_naming())
            self._names = pmap(self.config.name_assigner(namespaces))
            logger.debug(
                "{}: {} names in {} namespaces",
                type(self.emitter).__name__,
                len(self._names),
                len(namespaces),
            )
        return self._names

    def render(self) -> RenderResult:
        """Run the emitter and return the finished text with its names."""
        names = self._assign_names()
        builder = SourceBuilder()
        for comment in self.leading_comments:
            builder.emit_line(comment)
        builder.ensure_blank_line()
        self.emitter.emit_source(builder, names)
        root_source = builder.finished_source()
        serialized = serialize_render_result(
            root_source, names, indentation=self.config.indentation
        )
        logger.debug(
            "{}: rendered {} lines, {} annotations",
            type(self.emitter).__name__,
            len(serialized.lines),
            len(serialized.annotations),
        )
        return RenderResult(root_source, names, serialized)

    def process_template(self, template: str) -> str:
        """Render ``template`` from the emitter's template context."""
        names = self._assign_names()
        if self._environment is None:
            self._environment = make_environment(names)
        make_context = getattr(self.emitter, "make_template_context", None)
        context: Mapping[str, Any] = (
            make_context(names) if make_context is not None else {"names": names}
        )
        return render_template(self._environment, template, context)
