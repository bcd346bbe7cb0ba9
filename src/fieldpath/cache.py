"""PathCache: LRU-backed memoization of parsed field path expressions.

Maps the literal expression text to the FieldPath it parses to. Cached
values are immutable, so a hit hands the same instance to every caller.
Failed parses are never cached; a retry parses again. LRU eviction occurs
silently when ``max_size`` is exceeded.

Each ``PathCache`` instance owns its own ``LRUCache``. ``default_cache()``
returns the instance used by ``FieldPath.parse_from`` when no cache is
passed; ``set_default_cache()`` swaps it (tests install a fresh one).

Example::

    from fieldpath.cache import PathCache

    cache = PathCache()
    a = cache.get_or_parse("a.b[0]")   # parsed
    b = cache.get_or_parse("a.b[0]")   # served from memory
    assert a is b
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from cachetools import LRUCache

from fieldpath.config import CacheConfig
from fieldpath.grammar import parse_expression
from fieldpath.path import EMPTY, FieldPath
from fieldpath.segments import NameSegment

__all__ = ["PathCache", "default_cache", "set_default_cache"]

logger = logging.getLogger(__name__)


class PathCache:
    """Bounded, thread-safe cache from expression text to FieldPath.

    Lookups and insertions happen under a lock that keeps the LRU order
    consistent. Parsing runs outside the lock, so two threads missing on
    the same text may both parse it; the results are equal and the later
    insert simply replaces the earlier one.

    Args:
        config: Sizing parameters. Defaults to ``CacheConfig()``.
        parser: Turns expression text into a root segment, raising
            ``ParseError`` on invalid input. Defaults to ``parse_expression``.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        parser: Callable[[str], NameSegment] = parse_expression,
    ) -> None:
        self._config: CacheConfig = config if config is not None else CacheConfig()
        self._parser = parser
        self._cache: LRUCache[str, FieldPath] = LRUCache(maxsize=self._config.max_size)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        with self._lock:
            return int(self._cache.currsize)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, text: object) -> bool:
        with self._lock:
            return text in self._cache

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_or_parse(self, text: str) -> FieldPath:
        """Return the FieldPath for ``text``, parsing it on a miss.

        Raises:
            ParseError: If ``text`` is not a valid path expression. Nothing
                is cached in that case.
        """
        if text == "":
            return EMPTY

        with self._lock:
            cached = self._cache.get(text)
        if cached is not None:
            return cached

        logger.debug("FieldPath cache miss for %r", text)
        path = FieldPath(self._parser(text))
        with self._lock:
            self._cache[text] = path
        return path

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


_default_lock = threading.Lock()
_default: PathCache | None = None


def default_cache() -> PathCache:
    """Return the shared cache, creating it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = PathCache()
        return _default


def set_default_cache(cache: PathCache | None) -> PathCache | None:
    """Install ``cache`` as the shared cache and return the previous one.

    Passing None drops the current cache; the next ``default_cache()``
    call creates a fresh one.
    """
    global _default
    with _default_lock:
        previous, _default = _default, cache
        return previous
