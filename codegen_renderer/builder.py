"""Per-render source tree builder.

A :class:`SourceBuilder` is the build context handed to an emitter for exactly
one render. It owns the tree under construction, the stack of write targets
used by annotated regions, the pending blank-line request and the
:class:`~codegen_renderer.utils.indentation.LineArena` holding line break
indentation deltas. Nothing here is shared between builders, so independent
renders never interfere.

Blank lines are requested, not written: :meth:`SourceBuilder.ensure_blank_line`
sets a flag and the next real content consumes it, so any number of requests
collapse into a single blank line and a request made before anything has been
emitted is dropped.
"""

import re
from typing import Callable, Iterable, List, Sequence, TypeVar

from pyrsistent import pvector

from codegen_renderer.annotation import AnnotationData, IssueAnnotationData
from codegen_renderer.source import (
    AnnotatedSource,
    Source,
    SequenceSource,
    sourcelike_to_source,
    table,
)
from codegen_renderer.support import assert_that
from codegen_renderer.types import INDENT_WIDTH, BlankLineLocations, Sourcelike
from codegen_renderer.utils.indentation import LineArena, line_indentation


T = TypeVar("T")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class SourceBuilder:
    """Collects emission calls into a fragment tree."""

    def __init__(self) -> None:
        self._arena = LineArena()
        self._emitted: List[Source] = []
        self._current_target: List[Source] = self._emitted
        self._need_blank_line = False
        self._has_output = False
        self._finished = False

    @property
    def indentation_level(self) -> int:
        return self._arena.level

    @property
    def is_empty(self) -> bool:
        """True until a line or item has been written; empty regions do not count."""
        return not self._has_output

    def _emit_newline(self) -> None:
        assert_that(not self._finished, "Cannot emit into a finished source tree")
        self._current_target.append(self._arena.new_line())
        self._has_output = True

    def _emit_item(self, item: Sourcelike) -> None:
        assert_that(not self._finished, "Cannot emit into a finished source tree")
        if self._need_blank_line:
            self._emit_newline()
            self._need_blank_line = False
        self._current_target.append(sourcelike_to_source(item))
        self._has_output = True

    def ensure_blank_line(self) -> None:
        """Request one blank line before the next piece of content."""
        if self.is_empty:
            # no blank lines at start of file
            return
        self._need_blank_line = True

    def emit_line(self, *line_parts: Sourcelike) -> None:
        """Emit ``line_parts`` as the content of one line."""
        if len(line_parts) == 1:
            self._emit_item(line_parts[0])
        elif len(line_parts) > 1:
            self._emit_item(list(line_parts))
        self._emit_newline()

    def emit_multiline(self, lines_string: str) -> None:
        """Emit a block of text that is already indented in steps of four.

        The first line is emitted as is. Every following line is re-indented
        relative to the current level according to its leading whitespace;
        whitespace-only lines become bare blank lines. Indentation opened by
        the block is closed again before returning.

        Raises:
            InternalError: If a line is not indented by a multiple of four
                columns.
        """
        lines = _LINE_BREAK.split(lines_string)
        self.emit_line(lines[0])
        current_indent = 0
        for line in lines[1:]:
            indent, text = line_indentation(line)
            assert_that(
                indent % INDENT_WIDTH == 0,
                f"Indentation is not a multiple of {INDENT_WIDTH}: {line!r}",
            )
            if text is not None:
                new_indent = indent // INDENT_WIDTH
                self.change_indent(new_indent - current_indent)
                current_indent = new_indent
                self.emit_line(text)
            else:
                self._emit_newline()
        if current_indent != 0:
            self.change_indent(-current_indent)

    def emit_annotated(
        self, annotation: AnnotationData, emitter: Callable[[], None]
    ) -> None:
        """Run ``emitter`` against a fresh target and wrap its output.

        Raises:
            InternalError: If ``emitter`` leaves a different write target active.
        """
        old_target = self._current_target
        emit_target: List[Source] = []
        self._current_target = emit_target
        emitter()
        assert_that(
            self._current_target is emit_target,
            "Current emit target not restored correctly",
        )
        self._current_target = old_target
        source = sourcelike_to_source(emit_target)
        self._current_target.append(AnnotatedSource(annotation, source))

    def emit_issue(self, message: str, emitter: Callable[[], None]) -> None:
        """Emit a region flagged with an :class:`IssueAnnotationData`."""
        self.emit_annotated(IssueAnnotationData(message), emitter)

    def emit_table(self, rows: Sequence[Sequence[Sourcelike]]) -> None:
        """Emit a grid of cells followed by a line break; no column alignment."""
        self._emit_item(table(rows))
        self._emit_newline()

    def change_indent(self, offset: int) -> None:
        self._arena.change_indent(offset)

    def indent(self, emitter: Callable[[], None]) -> None:
        """Run ``emitter`` one level deeper than the current line."""
        self.change_indent(1)
        emitter()
        self.change_indent(-1)

    def for_each(
        self,
        items: Iterable[T],
        interposed_blank_lines: bool,
        leading_blank_line: bool,
        emitter: Callable[[T], None],
    ) -> None:
        on_first = True
        for item in items:
            if (leading_blank_line and on_first) or (
                interposed_blank_lines and not on_first
            ):
                self.ensure_blank_line()
            emitter(item)
            on_first = False

    def for_each_with_blank_lines(
        self,
        items: Iterable[T],
        blank_line_locations: BlankLineLocations | str,
        emitter: Callable[[T], None],
    ) -> None:
        locations = BlankLineLocations(blank_line_locations)
        self.for_each(items, locations.interposing, locations.leading, emitter)

    def finished_source(self) -> Source:
        """Freeze the tree and return it with every line break resolved.

        Called once per render; any emission afterwards is a contract
        violation.
        """
        assert_that(
            self._current_target is self._emitted,
            "Cannot finish while an annotated region is open",
        )
        self._finished = True
        return self._arena.resolve(SequenceSource(pvector(self._emitted)))
