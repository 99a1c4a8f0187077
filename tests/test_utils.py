from typing import Any, Dict, List, Mapping, Sequence, Tuple

from pyrsistent import pmap

from codegen_renderer.builder import SourceBuilder
from codegen_renderer.naming import FixedName, Name, Namespace
from codegen_renderer.serialize import SerializedRenderResult, serialize_render_result
from codegen_renderer.types import INDENT_WIDTH, BlankLineLocations, NameAssignment


ClassSpec = Tuple[str, Sequence[str]]


def serialize(
    builder: SourceBuilder, names: Mapping[Name, str] = pmap()
) -> SerializedRenderResult:
    return serialize_render_result(builder.finished_source(), names)


def lines_of(builder: SourceBuilder, names: Mapping[Name, str] = pmap()) -> List[str]:
    return list(serialize(builder, names).lines)


def levels_of(lines: Sequence[str]) -> List[int]:
    """Indentation level of each line, assuming four-space indentation."""
    return [(len(line) - len(line.lstrip(" "))) // INDENT_WIDTH for line in lines]


class ClassEmitter:
    """Emits Python-like class declarations, one per ``ClassSpec``.

    Classes without fields are flagged with an issue region.
    """

    def __init__(
        self,
        classes: Sequence[ClassSpec],
        blank_lines: BlankLineLocations = BlankLineLocations.INTERPOSING,
    ):
        self.types = Namespace("types")
        self.classes: List[Tuple[Name, Sequence[str]]] = [
            (self.types.add(Name(proposed)), fields) for proposed, fields in classes
        ]
        self.blank_lines = blank_lines

    def set_up_naming(self) -> Sequence[Namespace]:
        return [self.types]

    def emit_source(self, builder: SourceBuilder, names: NameAssignment) -> None:
        builder.for_each_with_blank_lines(
            self.classes,
            self.blank_lines,
            lambda item: self.emit_class(builder, item[0], item[1]),
        )

    def emit_class(
        self, builder: SourceBuilder, name: Name, fields: Sequence[str]
    ) -> None:
        builder.emit_line("class ", name, ":")

        def body() -> None:
            if not fields:
                builder.emit_issue(
                    "Class has no fields", lambda: builder.emit_line("pass")
                )
            for field in fields:
                builder.emit_line(field, ": Any")

        builder.indent(body)


class KeywordClassEmitter(ClassEmitter):
    """``ClassEmitter`` whose class names must avoid target keywords."""

    def __init__(self, classes: Sequence[ClassSpec], keywords: Sequence[str]):
        self.keywords = Namespace("keywords")
        for keyword in keywords:
            self.keywords.add(FixedName(keyword))
        super().__init__(classes)
        self.types.forbidden = (self.keywords,)

    def set_up_naming(self) -> Sequence[Namespace]:
        return [self.keywords, self.types, self.keywords]


class EnumTemplateEmitter:
    """Emitter meant for the template fallback path."""

    def __init__(self, enum_name: str, cases: Sequence[str]):
        self.types = Namespace("types")
        self.enum = self.types.add(Name(enum_name))
        self.cases = list(cases)

    def set_up_naming(self) -> Sequence[Namespace]:
        return [self.types]

    def emit_source(self, builder: SourceBuilder, names: NameAssignment) -> None:
        builder.emit_line("enum ", self.enum)

    def make_template_context(self, names: NameAssignment) -> Dict[str, Any]:
        return {"enum": self.enum, "cases": self.cases, "kind": "enum"}
