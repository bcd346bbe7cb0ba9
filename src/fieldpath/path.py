"""FieldPath: immutable, ordered, hashable field path value.

Wraps the root of a FieldSegment chain and exposes parsing (through a
``PathCache``), rendering, ordering, iteration and the structural
ancestor/descendant/clone algorithms used by document models.

Example::

    from fieldpath import FieldPath

    fp = FieldPath.parse_from("a.b[3].c")
    fp.as_path_string()                                  # "a.b[3].c"
    fp.clone_after_ancestor(FieldPath.parse_from("a"))   # None (starts at [3])
    fp.is_at_or_above(FieldPath.parse_from("a.b"))       # True
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import total_ordering
from typing import TYPE_CHECKING

from fieldpath.errors import NullFieldPathError
from fieldpath.segments import FieldSegment, IndexSegment, NameSegment

if TYPE_CHECKING:
    from fieldpath.cache import PathCache

__all__ = ["EMPTY", "FieldPath"]


@total_ordering
class FieldPath:
    """An immutable field path such as ``a.b[3]."odd name"``.

    Equality, hashing and ordering are structural over the segment chain.
    Names written in quoted form are quoted again by
    ``as_path_string(escape=True)`` but compare equal to their bare form.

    Instances are never mutated, so a single instance (for example one
    held by the parse cache) can be shared freely between threads.
    """

    __slots__ = ("_root",)

    def __init__(self, root: NameSegment) -> None:
        if not isinstance(root, NameSegment):
            msg = f"root must be a NameSegment, got {type(root).__name__}"
            raise TypeError(msg)
        self._root = root

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_root"):
            msg = f"{type(self).__name__} is immutable"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse_from(cls, text: str | None, cache: PathCache | None = None) -> FieldPath:
        """Parse ``text`` into a FieldPath, reusing cached results.

        Args:
            text:  The path expression. The empty string yields ``EMPTY``.
            cache: Cache to consult. Defaults to the shared default cache.

        Raises:
            NullFieldPathError: If ``text`` is None.
            ParseError: If ``text`` is not a valid path expression.
        """
        if text is None:
            msg = "Can not parse None as a FieldPath."
            raise NullFieldPathError(msg)
        if cache is None:
            from fieldpath.cache import default_cache

            cache = default_cache()
        return cache.get_or_parse(text)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root_segment(self) -> NameSegment:
        return self._root

    @property
    def leaf(self) -> FieldSegment:
        return self._root.leaf()

    @property
    def depth(self) -> int:
        """Number of segments in the chain (``EMPTY`` has depth 1)."""
        return sum(1 for _ in self._root.walk())

    # ------------------------------------------------------------------
    # Value protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[FieldSegment]:
        return self._root.walk()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, FieldPath):
            return NotImplemented
        return self._root == other._root

    def __hash__(self) -> int:
        return hash(self._root)

    def __lt__(self, other: FieldPath) -> bool:
        if not isinstance(other, FieldPath):
            return NotImplemented
        return self.compare_to(other) < 0

    def __str__(self) -> str:
        return self.as_path_string()

    def __repr__(self) -> str:
        return f"FieldPath({self.as_path_string(escape=True)!r})"

    def compare_to(self, other: FieldPath) -> int:
        """Compare segment by segment from left to right.

        Names compare lexicographically and indexes numerically. At the
        same position a name segment is greater than an index segment,
        and a path sorts before its own descendants. Returns -1, 0 or 1.
        """
        return self._root.compare_to(other._root)

    def as_path_string(self, escape: bool = False) -> str:
        """Render this path; with ``escape`` the result parses back to it."""
        return self._root.as_path_string(escape)

    # ------------------------------------------------------------------
    # Structural algorithms
    # ------------------------------------------------------------------

    def clone_with_new_child(self, child: str | int) -> FieldPath:
        """Return a copy with a name (``str``) or index (``int``) appended."""
        leaf: FieldSegment
        if isinstance(child, str):
            leaf = NameSegment(child)
        elif isinstance(child, int) and not isinstance(child, bool):
            leaf = IndexSegment(child)
        else:
            msg = f"child must be a str or an int, got {type(child).__name__}"
            raise TypeError(msg)
        return FieldPath(self._root.clone_with_new_child(leaf))

    def clone_after_ancestor(self, ancestor: FieldPath) -> FieldPath | None:
        """Return the part of this path that follows ``ancestor``.

        For ``a.b.c.d`` and ancestor ``a.b`` the result is ``c.d``. Returns
        ``EMPTY`` when both paths are equal, and None when ``ancestor`` is
        not an ancestor of this path or when the remainder would start
        with an index segment.
        """
        if self is ancestor:
            return EMPTY

        mine: FieldSegment | None = self._root
        theirs: FieldSegment | None = ancestor._root
        while mine is not None and theirs is not None:
            if not mine.segment_equals(theirs):
                return None
            mine, theirs = mine.child, theirs.child

        if mine is None and theirs is None:
            return EMPTY
        if not isinstance(mine, NameSegment):
            # ancestor is actually a descendant, or the remainder starts at [n]
            return None
        return FieldPath(mine.clone())

    def is_at_or_below(self, other: FieldPath) -> bool:
        """True if ``other`` is this path or one of its descendants."""
        return self._root.is_at_or_below(other._root)

    def is_at_or_above(self, other: FieldPath) -> bool:
        """True if ``other`` is this path or one of its ancestors."""
        return self._root.is_at_or_above(other._root)


EMPTY: FieldPath = FieldPath(NameSegment(""))
