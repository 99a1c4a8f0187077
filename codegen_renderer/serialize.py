"""Flatten a finished fragment tree into text.

Serialization walks the tree once, keeping the running indentation level: each
:class:`NewlineSource` ends the current line and adds its delta to the level,
and the next line that receives content is prefixed with the indentation
string repeated ``level`` times. Lines without content stay empty.

Tables are written one row per line with cells separated by a single space;
column alignment is left to consumers that read ``TableSource.rows``.
Annotated regions do not change the text; their spans are reported as
:class:`AnnotationLocation` records.
"""

from dataclasses import dataclass
from typing import Iterator, List, Mapping, Tuple

from loguru import logger

from codegen_renderer.annotation import AnnotationData, IssueAnnotationData
from codegen_renderer.naming import Name
from codegen_renderer.source import (
    AnnotatedSource,
    NameSource,
    NewlineSource,
    PendingNewline,
    SequenceSource,
    Source,
    TableSource,
    TextSource,
)
from codegen_renderer.support import assert_that, panic
from codegen_renderer.types import INDENT_WIDTH


DEFAULT_INDENTATION = " " * INDENT_WIDTH


@dataclass(frozen=True, order=True)
class Location:
    """0-based line and column in the serialized output."""

    line: int
    column: int


@dataclass(frozen=True)
class Span:
    start: Location
    end: Location


@dataclass(frozen=True)
class AnnotationLocation:
    annotation: AnnotationData
    span: Span


@dataclass(frozen=True)
class SerializedRenderResult:
    lines: Tuple[str, ...]
    annotations: Tuple[AnnotationLocation, ...] = ()

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    @property
    def issues(self) -> Iterator[AnnotationLocation]:
        for location in self.annotations:
            if isinstance(location.annotation, IssueAnnotationData):
                yield location


class _Serializer:
    def __init__(self, names: Mapping[Name, str], indentation: str):
        self.names = names
        self.indentation = indentation
        self.lines: List[str] = []
        self.annotations: List[AnnotationLocation] = []
        self.parts: List[str] = []
        self.column = 0
        self.level = 0

    def location(self) -> Location:
        if self.parts:
            return Location(len(self.lines), self.column)
        return Location(len(self.lines), len(self.indentation) * self.level)

    def write(self, text: str) -> None:
        if not text:
            return
        if not self.parts and self.level > 0:
            prefix = self.indentation * self.level
            self.parts.append(prefix)
            self.column += len(prefix)
        self.parts.append(text)
        self.column += len(text)

    def finish_line(self) -> None:
        self.lines.append("".join(self.parts))
        self.parts = []
        self.column = 0

    def newline(self, indentation_change: int) -> None:
        self.finish_line()
        self.level += indentation_change
        assert_that(self.level >= 0, "Indentation level dropped below zero")

    def serialize(self, source: Source) -> None:
        if isinstance(source, TextSource):
            self.write(source.text)
        elif isinstance(source, NewlineSource):
            self.newline(source.indentation_change)
        elif isinstance(source, SequenceSource):
            for child in source.children:
                self.serialize(child)
        elif isinstance(source, TableSource):
            for i, row in enumerate(source.rows):
                if i > 0:
                    self.finish_line()
                for j, cell in enumerate(row):
                    if j > 0:
                        self.write(" ")
                    self.serialize(cell)
        elif isinstance(source, AnnotatedSource):
            start = self.location()
            index = len(self.annotations)
            self.annotations.append(
                AnnotationLocation(source.annotation, Span(start, start))
            )
            self.serialize(source.source)
            span = Span(start, self.location())
            if isinstance(source.annotation, IssueAnnotationData):
                logger.debug(
                    "Issue at line {}: {}", start.line + 1, source.annotation.message
                )
            self.annotations[index] = AnnotationLocation(source.annotation, span)
        elif isinstance(source, NameSource):
            if source.name not in self.names:
                panic(f"No name assigned for {source.name!r}")
            self.write(self.names[source.name])
        elif isinstance(source, PendingNewline):
            panic("Cannot serialize a source tree that was not finished")
        else:
            panic(f"Unknown source fragment {source!r}")


def serialize_render_result(
    root_source: Source,
    names: Mapping[Name, str],
    indentation: str = DEFAULT_INDENTATION,
) -> SerializedRenderResult:
    """Serialize ``root_source`` into lines and annotation spans.

    Args:
        root_source: Finished tree, as returned by ``SourceBuilder.finished_source``.
        names: Assignment used to resolve every :class:`NameSource`.
        indentation: String written once per indentation level.

    Returns:
        SerializedRenderResult: Output lines (without terminators) and the
        spans of all annotated regions, outermost first.
    """
    serializer = _Serializer(names, indentation)
    serializer.serialize(root_source)
    if serializer.parts:
        serializer.finish_line()
    return SerializedRenderResult(
        tuple(serializer.lines), tuple(serializer.annotations)
    )
