"""Common type aliases and enumerations.

``Sourcelike`` is the loose input accepted by every emission primitive; it is
normalized into a :class:`codegen_renderer.source.Source` fragment before it is
stored in the tree. ``BlankLineLocations`` is the declarative surface of the
blank-line coordinator used by ``SourceBuilder.for_each_with_blank_lines``.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, Callable, Mapping, Sequence, Union

from pyrsistent.typing import PMap


# Forward declarations to avoid circular imports:
if TYPE_CHECKING:
    from codegen_renderer.naming import Name, Namespace
    from codegen_renderer.source import Source

INDENT_WIDTH = 4
"""Number of columns that make up one indentation level."""

Sourcelike = Union[str, "Name", "Source", Sequence["Sourcelike"]]

NameAssignment = PMap["Name", str]
NameAssigner = Callable[[Sequence["Namespace"]], Mapping["Name", str]]


class BlankLineLocations(StrEnum):
    """Where ``for_each_with_blank_lines`` requests blank lines.

    Members:
        NONE: Never.
        INTERPOSING: Before every element after the first.
        LEADING: Before the first element only.
        LEADING_AND_INTERPOSING: Before every element.
    """

    NONE = "none"
    INTERPOSING = "interposing"
    LEADING = "leading"
    LEADING_AND_INTERPOSING = "leading-and-interposing"

    @property
    def interposing(self) -> bool:
        return self in (
            BlankLineLocations.INTERPOSING,
            BlankLineLocations.LEADING_AND_INTERPOSING,
        )

    @property
    def leading(self) -> bool:
        return self in (
            BlankLineLocations.LEADING,
            BlankLineLocations.LEADING_AND_INTERPOSING,
        )
