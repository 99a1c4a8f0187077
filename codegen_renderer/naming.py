"""Symbolic names and the default name assignment.

Emitters never write identifiers as strings directly. They declare
:class:`Name` placeholders in :class:`Namespace` groups during setup and emit
the placeholders; the strings are chosen once per render, after every
namespace is known, by a name assigner. :func:`assign_names` is the default
assigner: it keeps every string unique within a namespace and away from the
strings used by the namespace's ``forbidden`` namespaces.

Examples
--------
>>> types = Namespace("types")
>>> a, b = types.add(Name("Point")), types.add(Name("Point"))
>>> names = assign_names([types])
>>> names[a], names[b]
('Point', 'Point2')
"""

from itertools import count
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set

from loguru import logger
from pyrsistent import pmap

from codegen_renderer.support import assert_that, panic
from codegen_renderer.types import NameAssignment


class Name:
    """Identifier placeholder; equality is identity.

    Attributes:
        proposed: Preferred string for this name.
    """

    fixed = False

    def __init__(self, proposed: str):
        self.proposed = proposed
        self._namespace: Optional["Namespace"] = None

    @property
    def namespace(self) -> Optional["Namespace"]:
        return self._namespace

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.proposed!r})"


class FixedName(Name):
    """Name that must be rendered exactly as proposed (keywords, API names)."""

    fixed = True


class Namespace:
    """Group of names that must receive pairwise-distinct strings.

    Args:
        label: Descriptive label, used in diagnostics only.
        forbidden: Namespaces whose assigned strings this namespace may not
            reuse. They must be assigned earlier in the namespace order.
    """

    def __init__(self, label: str, forbidden: Iterable["Namespace"] = ()):
        self.label = label
        self.forbidden = tuple(forbidden)
        self._members: List[Name] = []
        self._sealed = False

    def add(self, name: Name) -> Name:
        """Add ``name`` as a member and return it."""
        assert_that(
            not self._sealed,
            f"Namespace {self.label!r} cannot change after names are assigned",
        )
        if name.namespace is not None:
            panic(f"{name!r} already belongs to namespace {name.namespace.label!r}")
        name._namespace = self
        self._members.append(name)
        return name

    def seal(self) -> None:
        self._sealed = True

    @property
    def members(self) -> Sequence[Name]:
        return tuple(self._members)

    def __iter__(self) -> Iterator[Name]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"Namespace({self.label!r}, members={len(self._members)})"


def unique_namespaces(namespaces: Iterable[Namespace]) -> List[Namespace]:
    """Merge namespaces preserving first-seen order."""
    seen: Set[int] = set()
    result: List[Namespace] = []
    for namespace in namespaces:
        if id(namespace) in seen:
            continue
        seen.add(id(namespace))
        result.append(namespace)
    return result


def _unique_string(proposed: str, taken: Set[str]) -> str:
    if proposed not in taken:
        return proposed
    candidates = (f"{proposed}{suffix}" for suffix in count(2))
    return next(c for c in candidates if c not in taken)


def assign_names(namespaces: Sequence[Namespace]) -> NameAssignment:
    """Assign a string to every member of ``namespaces``.

    Fixed names are placed first in each namespace; two fixed names with the
    same text in one namespace are a contract violation. The remaining names
    take their proposal, or the proposal followed by the smallest numeric
    suffix (starting at ``2``) that is still free. Fixed names may not clash
    with strings of forbidden namespaces, and every forbidden namespace must
    come earlier in ``namespaces``.

    Args:
        namespaces: Namespaces in assignment order; duplicates are ignored.

    Returns:
        PMap[Name, str]: Immutable mapping covering every declared name.
    """
    ordered = unique_namespaces(namespaces)
    used: Dict[int, Set[str]] = {}
    assigned: Dict[Name, str] = {}

    for namespace in ordered:
        taken: Set[str] = set()
        for other in namespace.forbidden:
            if id(other) not in used:
                panic(
                    f"Namespace {namespace.label!r} forbids {other.label!r}, "
                    "which must be assigned first"
                )
            taken |= used[id(other)]
        own: Set[str] = set()

        for name in namespace:
            if not name.fixed:
                continue
            assert_that(
                name.proposed not in own | taken,
                f"Fixed name {name.proposed!r} clashes in namespace {namespace.label!r}",
            )
            own.add(name.proposed)
            assigned[name] = name.proposed

        for name in namespace:
            if name.fixed:
                continue
            text = _unique_string(name.proposed, taken | own)
            own.add(text)
            assigned[name] = text

        used[id(namespace)] = own
        namespace.seal()

    logger.debug(
        "Assigned {} names across {} namespaces", len(assigned), len(ordered)
    )
    return pmap(assigned)
