"""fieldpath - immutable dotted/indexed field paths for JSON-like documents."""

from __future__ import annotations

from fieldpath.cache import PathCache, default_cache, set_default_cache
from fieldpath.config import CacheConfig
from fieldpath.errors import (
    FieldPathError,
    NullFieldPathError,
    ParseError,
    SyntaxErrorInfo,
)
from fieldpath.path import EMPTY, FieldPath
from fieldpath.segments import FieldSegment, IndexSegment, NameSegment

__version__: str = "0.1.0"
__all__: list[str] = [
    "EMPTY",
    "CacheConfig",
    "FieldPath",
    "FieldPathError",
    "FieldSegment",
    "IndexSegment",
    "NameSegment",
    "NullFieldPathError",
    "ParseError",
    "PathCache",
    "SyntaxErrorInfo",
    "default_cache",
    "parse_from",
    "set_default_cache",
]


def parse_from(text: str | None) -> FieldPath:
    """Parse ``text`` into a FieldPath using the shared default cache."""
    return FieldPath.parse_from(text)
