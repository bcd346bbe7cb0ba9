"""Exception hierarchy for field path parsing.

All errors raised by this package derive from ``FieldPathError``. The
concrete classes also subclass the matching builtin (``TypeError`` for a
missing expression, ``ValueError`` for a malformed one) so callers that
only know the builtins keep working.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "FieldPathError",
    "NullFieldPathError",
    "ParseError",
    "RecognitionError",
    "SyntaxErrorInfo",
]


@dataclass(frozen=True, slots=True)
class SyntaxErrorInfo:
    """One syntax error reported while parsing a field path.

    Attributes:
        line:    1-based line of the offending character.
        column:  0-based column of the offending character within its line.
        msg:     Human-readable description of the error.
    """

    line: int
    column: int
    msg: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.msg}"


class FieldPathError(Exception):
    """Base class for every error raised by fieldpath."""


class NullFieldPathError(FieldPathError, TypeError):
    """Raised when ``None`` is given where a path expression is expected."""


class RecognitionError(FieldPathError):
    """Low-level failure while tokenizing or recognizing an expression.

    Never reaches callers of the public API directly; the grammar adapter
    wraps it into a ``ParseError``.
    """

    def __init__(self, msg: str, line: int = 1, column: int = 0) -> None:
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.column = column


class ParseError(FieldPathError, ValueError):
    """Raised when an expression is not a valid field path.

    The primary ``line``, ``column`` and ``msg`` come from the first
    reported syntax error; ``errors`` holds every error in report order.
    """

    def __init__(
        self,
        text: str,
        errors: tuple[SyntaxErrorInfo, ...],
        cause: BaseException | None = None,
    ) -> None:
        if not errors:
            msg = "ParseError requires at least one syntax error"
            raise ValueError(msg)
        first = errors[0]
        super().__init__(f"'{text}' is not a valid FieldPath: {first}")
        self.text = text
        self.errors = errors
        self.line = first.line
        self.column = first.column
        self.msg = first.msg
        self.cause = cause
