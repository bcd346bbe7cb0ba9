"""CacheConfig for the parsed-expression cache.

CacheConfig is a frozen (immutable) dataclass holding the sizing
parameters of a ``PathCache``.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_MAX_SIZE", "CacheConfig"]

DEFAULT_MAX_SIZE = 1000


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for a ``PathCache``.

    Attributes:
        max_size: Maximum number of parsed expressions held in memory (>= 1).
            When exceeded, the least-recently-used entry is silently evicted.
    """

    max_size: int = DEFAULT_MAX_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.max_size, bool) or not isinstance(self.max_size, int):
            msg = f"max_size must be an int, got {type(self.max_size).__name__}"
            raise TypeError(msg)
        if self.max_size < 1:
            msg = f"max_size must be >= 1, got {self.max_size}"
            raise ValueError(msg)
