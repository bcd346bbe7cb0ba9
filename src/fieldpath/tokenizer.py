"""Tokenizer for field path expressions.

Splits an expression into typed tokens with a single compiled master
regex. Characters that start no token are reported to an optional error
listener and skipped, so one pass can surface several errors; without a
listener the first one raises ``RecognitionError``.

Lexical rules:
- NAME:    one or more word characters, ``$`` or ``-``
- QUOTED:  ``"..."`` with ``\\`` escaping the next character
- DOT, LBRACK, RBRACK: ``.``, ``[``, ``]``
No whitespace is skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Protocol

from fieldpath.errors import RecognitionError

__all__ = [
    "ErrorListener",
    "Token",
    "TokenType",
    "is_bare_identifier",
    "position_of",
    "quote_identifier",
    "tokenize",
]

_BARE_IDENTIFIER = re.compile(r"[\w$\-]+")

_INTEGER = re.compile(r"[0-9]+")

_ESCAPED = re.compile(r"\\(.)", re.DOTALL)

_MASTER = re.compile(
    r"""
    (?P<QUOTED>"(?:[^"\\]|\\.)*")
    | (?P<NAME>[\w$\-]+)
    | (?P<DOT>\.)
    | (?P<LBRACK>\[)
    | (?P<RBRACK>\])
    """,
    re.VERBOSE | re.DOTALL,
)


class TokenType(StrEnum):
    NAME = auto()
    QUOTED = auto()
    DOT = auto()
    LBRACK = auto()
    RBRACK = auto()
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    Attributes:
        type:   Token kind.
        text:   Source text of the token, quotes included.
        value:  Identifier value for NAME and QUOTED (quotes and escapes
                removed); equal to ``text`` for the punctuation tokens.
        line:   1-based line of the first character.
        column: 0-based column of the first character.
    """

    type: TokenType
    text: str
    value: str
    line: int
    column: int

    @property
    def is_integer(self) -> bool:
        if self.type is not TokenType.NAME:
            return False
        return _INTEGER.fullmatch(self.text) is not None


class ErrorListener(Protocol):
    def syntax_error(self, line: int, column: int, msg: str) -> None: ...


def is_bare_identifier(name: str) -> bool:
    """True if ``name`` can be written without quotes."""
    return _BARE_IDENTIFIER.fullmatch(name) is not None


def quote_identifier(name: str) -> str:
    """Write ``name`` as a quoted identifier, escaping ``\\`` and ``"``."""
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def position_of(text: str, pos: int) -> tuple[int, int]:
    """Return the (line, column) of offset ``pos`` in ``text``."""
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1)
    return line, column


def _report(
    listener: ErrorListener | None, text: str, pos: int, msg: str
) -> None:
    line, column = position_of(text, pos)
    if listener is None:
        raise RecognitionError(msg, line, column)
    listener.syntax_error(line, column, msg)


def tokenize(text: str, listener: ErrorListener | None = None) -> list[Token]:
    """Split ``text`` into tokens, always ending with an EOF token.

    Args:
        text:     The path expression.
        listener: Receives one ``syntax_error`` call per unrecognized
                  character. When None, the first one raises instead.

    Returns:
        The token list in source order.

    Raises:
        RecognitionError: On the first lexical error when no listener is given.
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)
    while pos < end:
        m = _MASTER.match(text, pos)
        if m is None:
            if text[pos] == '"':
                _report(listener, text, pos, "unterminated quoted identifier")
                pos = end
            else:
                _report(
                    listener, text, pos, f"token recognition error at: '{text[pos]}'"
                )
                pos += 1
            continue

        kind = TokenType[m.lastgroup]  # type: ignore[misc]
        raw = m.group()
        value = _ESCAPED.sub(r"\1", raw[1:-1]) if kind is TokenType.QUOTED else raw
        line, column = position_of(text, pos)
        tokens.append(Token(kind, raw, value, line, column))
        pos = m.end()

    line, column = position_of(text, end)
    tokens.append(Token(TokenType.EOF, "<EOF>", "", line, column))
    return tokens
