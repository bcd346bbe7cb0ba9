"""FieldSegment chain: the data model of a parsed field path.

A parsed path such as ``a.b[3].c`` is a singly-linked chain of segments::

    NameSegment("a") -> NameSegment("b") -> IndexSegment(3) -> NameSegment("c")

Each segment owns at most one child and segments are frozen once built,
so chains are assembled leaf-first and every "modifying" operation
returns a fresh copy. ``NameSegment.quoted`` only affects rendering; it
takes no part in equality, hashing or ordering.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import TypeVar, cast

from fieldpath.tokenizer import is_bare_identifier, quote_identifier

__all__ = ["FieldSegment", "IndexSegment", "NameSegment"]

_SegmentT = TypeVar("_SegmentT", bound="FieldSegment")


class FieldSegment(ABC):
    """Behaviour shared by both segment variants.

    Subclasses are frozen dataclasses that declare a ``child`` field.
    Equality and hashing walk the whole chain in a loop, so arbitrarily
    deep paths never hit the recursion limit.
    """

    __slots__ = ()

    child: FieldSegment | None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_leaf(self) -> bool:
        """True when this segment ends its chain."""
        return self.child is None

    @property
    def is_named(self) -> bool:
        return isinstance(self, NameSegment)

    @property
    def is_indexed(self) -> bool:
        return isinstance(self, IndexSegment)

    # ------------------------------------------------------------------
    # Per-variant hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def segment_equals(self, other: FieldSegment) -> bool:
        """Compare this segment with ``other`` ignoring both children."""

    @abstractmethod
    def _compare_value(self, other: FieldSegment) -> int: ...

    @abstractmethod
    def _render(self, escape: bool, is_root: bool) -> str: ...

    @abstractmethod
    def _key(self) -> tuple[str, str | int]:
        """Variant tag and value, the identity of this segment alone."""

    # ------------------------------------------------------------------
    # Value protocol
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSegment):
            return NotImplemented
        a: FieldSegment | None = self
        b: FieldSegment | None = other
        while a is not None and b is not None:
            if not a.segment_equals(b):
                return False
            a, b = a.child, b.child
        return a is None and b is None

    def __hash__(self) -> int:
        return hash(tuple(node._key() for node in self.walk()))

    # ------------------------------------------------------------------
    # Chain algorithms
    # ------------------------------------------------------------------

    def walk(self) -> Iterator[FieldSegment]:
        """Yield this segment and then each descendant down to the leaf."""
        node: FieldSegment | None = self
        while node is not None:
            yield node
            node = node.child

    def leaf(self) -> FieldSegment:
        node = self
        while node.child is not None:
            node = node.child
        return node

    def compare_to(self, other: FieldSegment) -> int:
        """Order two chains position by position.

        A chain that is a prefix of another sorts first. At a position
        where the variants differ, a name segment sorts after an index
        segment. Returns -1, 0 or 1.
        """
        a: FieldSegment | None = self
        b: FieldSegment | None = other
        while a is not None or b is not None:
            if a is None:
                return -1
            if b is None:
                return 1
            if type(a) is type(b):
                result = a._compare_value(b)
            else:
                result = 1 if a.is_named else -1
            if result:
                return result
            a, b = a.child, b.child
        return 0

    def is_at_or_below(self, other: FieldSegment) -> bool:
        """True if this chain is a prefix of, or equal to, ``other``."""
        a: FieldSegment | None = self
        b: FieldSegment | None = other
        while a is not None:
            if b is None or not a.segment_equals(b):
                return False
            a, b = a.child, b.child
        return True

    def is_at_or_above(self, other: FieldSegment) -> bool:
        """True if ``other`` is a prefix of, or equal to, this chain."""
        return other.is_at_or_below(self)

    def as_path_string(self, escape: bool = False) -> str:
        """Render the chain starting at this segment.

        With ``escape`` set, names that were quoted in the source or that
        are not bare identifiers are written in quoted form, so the
        result parses back to an equal chain.
        """
        return "".join(
            node._render(escape, is_root=node is self) for node in self.walk()
        )

    def clone(self: _SegmentT) -> _SegmentT:
        """Deep copy of the chain starting at this segment."""
        return _relink(self, None)

    def clone_with_new_child(self: _SegmentT, leaf: FieldSegment) -> _SegmentT:
        """Deep copy of this chain with ``leaf`` attached below its leaf."""
        return _relink(self, leaf.clone())


def _relink(root: _SegmentT, tail: FieldSegment | None) -> _SegmentT:
    """Copy the chain under ``root`` leaf-first, ending it with ``tail``.

    The copied root keeps the variant of ``root``.
    """
    for node in reversed(list(root.walk())):
        tail = replace(node, child=tail)  # type: ignore[type-var]
    return cast(_SegmentT, tail)


@dataclass(frozen=True, slots=True, eq=False)
class NameSegment(FieldSegment):
    """A named field access.

    Attributes:
        name:   Field name, compared case-sensitively.
        child:  Next segment in the chain, or None for a leaf.
        quoted: True when the name was written as a quoted identifier.
    """

    name: str
    child: FieldSegment | None = None
    quoted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            msg = f"name must be a str, got {type(self.name).__name__}"
            raise TypeError(msg)

    def segment_equals(self, other: FieldSegment) -> bool:
        return isinstance(other, NameSegment) and self.name == other.name

    def _compare_value(self, other: FieldSegment) -> int:
        name = cast(NameSegment, other).name
        return (self.name > name) - (self.name < name)

    def _key(self) -> tuple[str, str | int]:
        return ("name", self.name)

    def _needs_quoting(self, is_root: bool) -> bool:
        if self.quoted:
            return True
        if not self.name:
            # A bare empty root renders as "", which parses back to EMPTY.
            return not (is_root and self.child is None)
        return not is_bare_identifier(self.name)

    def _render(self, escape: bool, is_root: bool) -> str:
        text = self.name
        if escape and self._needs_quoting(is_root):
            text = quote_identifier(text)
        return text if is_root else "." + text


@dataclass(frozen=True, slots=True, eq=False)
class IndexSegment(FieldSegment):
    """An array element access.

    Attributes:
        index: Non-negative element position.
        child: Next segment in the chain, or None for a leaf.
    """

    index: int
    child: FieldSegment | None = None

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            msg = f"index must be an int, got {type(self.index).__name__}"
            raise TypeError(msg)
        if self.index < 0:
            msg = f"index must be >= 0, got {self.index}"
            raise ValueError(msg)

    def segment_equals(self, other: FieldSegment) -> bool:
        return isinstance(other, IndexSegment) and self.index == other.index

    def _compare_value(self, other: FieldSegment) -> int:
        index = cast(IndexSegment, other).index
        return (self.index > index) - (self.index < index)

    def _key(self) -> tuple[str, str | int]:
        return ("index", self.index)

    def _render(self, escape: bool, is_root: bool) -> str:
        return f"[{self.index}]"
