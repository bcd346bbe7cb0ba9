"""Tests for the grammar adapter (``parse_expression``).

Covers:
- Chains produced for names, quoted names and indexes
- ParseError details: first error's line/column/message, all errors kept
- Wrapping of recognition failures as the ParseError cause
"""

from __future__ import annotations

import pytest

from fieldpath.errors import ParseError, RecognitionError
from fieldpath.grammar import parse_expression
from fieldpath.segments import IndexSegment, NameSegment

# ---------------------------------------------------------------------------
# Valid expressions
# ---------------------------------------------------------------------------


class TestValidExpressions:
    def test_single_name(self) -> None:
        assert parse_expression("a") == NameSegment("a")

    def test_dotted_names(self) -> None:
        assert parse_expression("a.b.c") == NameSegment(
            "a", NameSegment("b", NameSegment("c"))
        )

    def test_indexes(self) -> None:
        assert parse_expression("a[1][22].b") == NameSegment(
            "a", IndexSegment(1, IndexSegment(22, NameSegment("b")))
        )

    def test_quoted_names_flagged(self) -> None:
        root = parse_expression('"odd name".x')
        assert root.name == "odd name"
        assert root.quoted
        assert isinstance(root.child, NameSegment)
        assert not root.child.quoted

    def test_quoted_empty_name(self) -> None:
        root = parse_expression('""')
        assert root == NameSegment("")
        assert root.quoted

    def test_numeric_name_after_dot(self) -> None:
        assert parse_expression("a.0") == NameSegment("a", NameSegment("0"))


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        "text",
        ["a..b", "[", "a.", "a[", "a[x]", "a[-1]", "a[1", "a]", ".a", "[0]", "a b", "a!"],
    )
    def test_invalid_expressions(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_expression(text)

    def test_double_dot_position(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expression("a..b")
        err = exc_info.value
        assert (err.line, err.column) == (1, 2)
        assert err.msg == "mismatched input '.' expecting {NAME, QUOTED}"
        assert "1:2: mismatched input '.'" in str(err)
        assert err.text == "a..b"

    def test_first_error_is_primary(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expression("a b..c")
        err = exc_info.value
        assert err.column == 1
        assert "token recognition error" in err.msg
        assert len(err.errors) == 2
        assert err.errors[1].msg.startswith("mismatched input")

    def test_lexical_error_alone_has_no_cause(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expression("a!")
        assert exc_info.value.cause is None
        assert len(exc_info.value.errors) == 1

    def test_recognition_error_is_cause(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_expression("a[x]")
        err = exc_info.value
        assert isinstance(err.cause, RecognitionError)
        assert err.__cause__ is err.cause
        assert err.msg == "mismatched input 'x' expecting INTEGER"

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_expression("[")

    def test_oversized_index_is_parse_error(self) -> None:
        digits = "9" * 5000
        with pytest.raises(ParseError) as exc_info:
            parse_expression(f"a[{digits}]")
        err = exc_info.value
        assert err.column == 2
        assert err.msg.endswith("expecting INTEGER")
        assert isinstance(err.cause, RecognitionError)
        assert isinstance(err.cause.__cause__, ValueError)
