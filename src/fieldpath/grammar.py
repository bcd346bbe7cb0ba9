"""Grammar adapter: turns a path expression into a FieldSegment chain.

Grammar::

    path     ::= segment ( "." segment | "[" INTEGER "]" )* EOF
    segment  ::= NAME | QUOTED

Lexical errors are reported to a ``SyntaxErrorListener`` and scanning
continues; the recursive-descent parser gives up at its first mismatch by
raising ``RecognitionError``. Every reported error is collected and the
first one becomes the primary message of the resulting ``ParseError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import cast

from fieldpath.errors import ParseError, RecognitionError, SyntaxErrorInfo
from fieldpath.segments import FieldSegment, IndexSegment, NameSegment
from fieldpath.tokenizer import Token, TokenType, tokenize

__all__ = ["SyntaxErrorListener", "parse_expression"]

logger = logging.getLogger(__name__)

# Builds one segment once its child is known.
_SegmentFactory = Callable[..., FieldSegment]


class SyntaxErrorListener:
    """Collects syntax errors in the order they are reported."""

    def __init__(self) -> None:
        self.errors: list[SyntaxErrorInfo] = []

    def syntax_error(self, line: int, column: int, msg: str) -> None:
        self.errors.append(SyntaxErrorInfo(line, column, msg))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class _PathParser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    @staticmethod
    def _mismatch(token: Token, expecting: str) -> RecognitionError:
        return RecognitionError(
            f"mismatched input '{token.text}' expecting {expecting}",
            token.line,
            token.column,
        )

    def parse(self) -> NameSegment:
        factories: list[_SegmentFactory] = [self._name()]
        while True:
            token = self._next()
            if token.type is TokenType.EOF:
                break
            if token.type is TokenType.DOT:
                factories.append(self._name())
            elif token.type is TokenType.LBRACK:
                factories.append(self._index())
                closing = self._next()
                if closing.type is not TokenType.RBRACK:
                    raise self._mismatch(closing, "']'")
            else:
                raise self._mismatch(token, "{'.', '[', <EOF>}")

        child: FieldSegment | None = None
        for factory in reversed(factories):
            child = factory(child=child)
        return cast(NameSegment, child)

    def _name(self) -> _SegmentFactory:
        token = self._next()
        if token.type is TokenType.NAME:
            return partial(NameSegment, token.value)
        if token.type is TokenType.QUOTED:
            return partial(NameSegment, token.value, quoted=True)
        raise self._mismatch(token, "{NAME, QUOTED}")

    def _index(self) -> _SegmentFactory:
        token = self._next()
        if not token.is_integer:
            raise self._mismatch(token, "INTEGER")
        try:
            index = int(token.text)
        except ValueError as exc:
            # int() refuses digit strings beyond sys.get_int_max_str_digits()
            raise self._mismatch(token, "INTEGER") from exc
        return partial(IndexSegment, index)


def parse_expression(text: str) -> NameSegment:
    """Parse ``text`` into the root segment of its chain.

    Args:
        text: A non-empty path expression such as ``a.b[3]."odd name"``.

    Returns:
        The root ``NameSegment`` of a freshly built chain.

    Raises:
        ParseError: If any syntax error was reported. The primary line,
            column and message come from the first reported error.
    """
    listener = SyntaxErrorListener()
    try:
        root = _PathParser(tokenize(text, listener)).parse()
    except RecognitionError as exc:
        listener.syntax_error(exc.line, exc.column, exc.msg)
        raise _parse_error(text, listener, exc) from exc

    if listener.has_errors:
        raise _parse_error(text, listener)
    return root


def _parse_error(
    text: str, listener: SyntaxErrorListener, cause: RecognitionError | None = None
) -> ParseError:
    error = ParseError(text, tuple(listener.errors), cause=cause)
    logger.debug("Error parsing %r as a FieldPath: %s", text, error.errors[0])
    return error
