"""Contract violation helpers.

An :class:`InternalError` signals a bug in the calling emitter (malformed
indentation, unbalanced write targets, premature name access). It is never a
data condition and nothing in this package catches it: the render aborts.
Data-dependent problems are expressed as issue annotations instead, see
:meth:`codegen_renderer.builder.SourceBuilder.emit_issue`.
"""

from typing import NoReturn


class InternalError(RuntimeError):
    """Unrecoverable programmer-contract violation."""


def panic(message: str) -> NoReturn:
    raise InternalError(message)


def assert_that(condition: bool, message: str = "Assertion failed") -> None:
    if not condition:
        panic(message)
