"""Out-of-band metadata attached to annotated source regions.

Annotations never change the rendered text of the region they wrap. They are
carried through serialization as :class:`codegen_renderer.serialize.AnnotationLocation`
spans so later consumers can surface warnings, highlight or strip regions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnnotationData:
    """Base class for annotation payloads."""


@dataclass(frozen=True)
class IssueAnnotationData(AnnotationData):
    """Flags a region whose generation involved an unresolved decision.

    Attributes:
        message:
            Human readable description of the issue.
    """

    message: str
