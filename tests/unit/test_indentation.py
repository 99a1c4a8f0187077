# tests/unit/test_indentation.py

import pytest
from pyrsistent import pvector

from codegen_renderer.annotation import AnnotationData
from codegen_renderer.source import (
    AnnotatedSource,
    NewlineSource,
    PendingNewline,
    SequenceSource,
    TextSource,
)
from codegen_renderer.support import InternalError
from codegen_renderer.utils.indentation import LineArena, line_indentation


def test_line_indentation_counts_spaces() -> None:
    assert line_indentation("        x = 1") == (8, "x = 1")
    assert line_indentation("x") == (0, "x")


def test_line_indentation_tabs_advance_to_next_stop() -> None:
    assert line_indentation("\tx") == (4, "x")
    assert line_indentation("  \tx") == (4, "x")
    assert line_indentation("    \t x") == (9, "x")


def test_line_indentation_whitespace_only_line_has_no_text() -> None:
    assert line_indentation("") == (0, None)
    assert line_indentation("   \t ") == (0, None)


def test_change_indent_before_first_line_is_fatal() -> None:
    arena = LineArena()
    with pytest.raises(InternalError):
        arena.change_indent(1)


def test_change_indent_targets_most_recent_line() -> None:
    arena = LineArena()
    first = arena.new_line()
    arena.change_indent(1)
    second = arena.new_line()
    arena.change_indent(2)
    arena.change_indent(-1)
    assert arena.delta(first.index) == 1
    assert arena.delta(second.index) == 1
    assert arena.level == 2
    assert len(arena) == 2


def test_resolve_replaces_pending_newlines_everywhere() -> None:
    arena = LineArena()
    outer = arena.new_line()
    arena.change_indent(1)
    inner = arena.new_line()
    arena.change_indent(-1)
    tree = SequenceSource(
        pvector(
            [
                TextSource("a"),
                outer,
                AnnotatedSource(
                    AnnotationData(),
                    SequenceSource(pvector([TextSource("b"), inner])),
                ),
            ]
        )
    )
    resolved = arena.resolve(tree)
    assert isinstance(resolved, SequenceSource)
    assert resolved.children[1] == NewlineSource(1)
    annotated = resolved.children[2]
    assert isinstance(annotated, AnnotatedSource)
    assert annotated.source == SequenceSource(
        pvector([TextSource("b"), NewlineSource(-1)])
    )
    assert not isinstance(resolved.children[1], PendingNewline)
