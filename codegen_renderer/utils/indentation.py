"""Indentation bookkeeping.

Two pieces live here:

* :func:`line_indentation` parses the leading whitespace of one line of a
  pre-indented text block (spaces count one column, tabs advance to the next
  tab stop).
* :class:`LineArena` owns the indentation deltas of every line break created
  during a render. Builders append :class:`PendingNewline` indices to the tree
  and only ever adjust the delta of the most recent line; :meth:`LineArena.resolve`
  turns the finished tree into one holding plain :class:`NewlineSource` nodes.
  The running sum of those deltas is computed at serialization time.
"""

from typing import List, Optional, Tuple

from pyrsistent import pvector

from codegen_renderer.source import (
    AnnotatedSource,
    NewlineSource,
    PendingNewline,
    SequenceSource,
    Source,
    TableSource,
)
from codegen_renderer.support import panic
from codegen_renderer.types import INDENT_WIDTH


def line_indentation(line: str) -> Tuple[int, Optional[str]]:
    """Return the indentation column and remaining text of ``line``.

    A line made only of whitespace (or empty) yields ``(0, None)``.
    """
    indent = 0
    for i, c in enumerate(line):
        if c == " ":
            indent += 1
        elif c == "\t":
            indent = (indent // INDENT_WIDTH + 1) * INDENT_WIDTH
        else:
            return indent, line[i:]
    return 0, None


class LineArena:
    """Index-addressed store of line break indentation deltas."""

    def __init__(self) -> None:
        self._deltas: List[int] = []

    def __len__(self) -> int:
        return len(self._deltas)

    def new_line(self) -> PendingNewline:
        self._deltas.append(0)
        return PendingNewline(len(self._deltas) - 1)

    def change_indent(self, offset: int) -> None:
        """Add ``offset`` to the delta of the most recent line break."""
        if not self._deltas:
            panic("Cannot change indent for the first line")
        self._deltas[-1] += offset

    def delta(self, index: int) -> int:
        return self._deltas[index]

    @property
    def level(self) -> int:
        """Indentation level in effect after the most recent line break."""
        return sum(self._deltas)

    def resolve(self, source: Source) -> Source:
        """Replace every pending line break in ``source`` with its final delta."""
        if isinstance(source, PendingNewline):
            return NewlineSource(self._deltas[source.index])
        if isinstance(source, SequenceSource):
            return SequenceSource(pvector(self.resolve(c) for c in source.children))
        if isinstance(source, TableSource):
            return TableSource(
                pvector(
                    pvector(self.resolve(cell) for cell in row) for row in source.rows
                )
            )
        if isinstance(source, AnnotatedSource):
            return AnnotatedSource(source.annotation, self.resolve(source.source))
        return source
