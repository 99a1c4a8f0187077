"""Fragment model.

The output of an emitter is a tree of immutable fragments:

* :class:`TextSource` – a literal atom.
* :class:`SequenceSource` – ordered children.
* :class:`TableSource` – rows of cells; rows may differ in length.
* :class:`AnnotatedSource` – a subtree tagged with :class:`AnnotationData`.
* :class:`NameSource` – a placeholder resolved through the ``NameAssignment``
  when the tree is serialized.
* :class:`NewlineSource` – a line break carrying the signed indentation change
  that applies from the following line on.

While a render is in progress line breaks are stored as
:class:`PendingNewline` arena indices (see
:mod:`codegen_renderer.utils.indentation`); finishing the render replaces them
with resolved :class:`NewlineSource` nodes.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from pyrsistent import pvector
from pyrsistent.typing import PVector

from codegen_renderer.annotation import AnnotationData, IssueAnnotationData
from codegen_renderer.naming import Name
from codegen_renderer.support import panic
from codegen_renderer.types import Sourcelike


@dataclass(frozen=True)
class TextSource:
    text: str


@dataclass(frozen=True)
class NewlineSource:
    indentation_change: int = 0


@dataclass(frozen=True)
class PendingNewline:
    """Line break whose indentation change still lives in the line arena."""

    index: int


@dataclass(frozen=True)
class SequenceSource:
    children: PVector["Source"]


@dataclass(frozen=True)
class TableSource:
    rows: PVector[PVector["Source"]]


@dataclass(frozen=True)
class AnnotatedSource:
    annotation: AnnotationData
    source: "Source"


@dataclass(frozen=True)
class NameSource:
    name: Name


Source = Union[
    TextSource,
    NewlineSource,
    PendingNewline,
    SequenceSource,
    TableSource,
    AnnotatedSource,
    NameSource,
]

SOURCE_TYPES = (
    TextSource,
    NewlineSource,
    PendingNewline,
    SequenceSource,
    TableSource,
    AnnotatedSource,
    NameSource,
)


def sourcelike_to_source(sl: Sourcelike) -> Source:
    """Normalize loose emission input into a fragment.

    Strings become atoms, names become placeholders and sequences become
    :class:`SequenceSource` nodes; only ordered sequences (lists, tuples and
    persistent vectors) are accepted. A one-element sequence collapses into its
    only element. Already converted fragments are returned unchanged.
    """
    if isinstance(sl, str):
        return TextSource(sl)
    if isinstance(sl, Name):
        return NameSource(sl)
    if isinstance(sl, SOURCE_TYPES):
        return sl
    if isinstance(sl, (list, tuple, type(pvector()))):
        children = [sourcelike_to_source(child) for child in sl]
        if len(children) == 1:
            return children[0]
        return SequenceSource(pvector(children))
    return panic(f"Cannot convert {sl!r} to a source fragment")


def table(rows: Sequence[Sequence[Sourcelike]]) -> TableSource:
    return TableSource(
        pvector(pvector(sourcelike_to_source(cell) for cell in row) for row in rows)
    )


def annotated(annotation: AnnotationData, sl: Sourcelike) -> AnnotatedSource:
    return AnnotatedSource(annotation, sourcelike_to_source(sl))


def issue(message: str, sl: Sourcelike) -> AnnotatedSource:
    return annotated(IssueAnnotationData(message), sl)
