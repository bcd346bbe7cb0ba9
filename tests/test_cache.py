"""Unit tests for PathCache.

Tests cover:
- Cache hits (cached expressions bypass the parser on later calls)
- Empty string bypass (returns EMPTY, never stored)
- Failed parses are not cached and are retried
- LRU eviction at max_size
- Instance isolation (separate PathCache instances do not share state)
- Default cache replacement
- Concurrent access keeps a consistent cache
"""

from __future__ import annotations

import threading

import pytest

from fieldpath import EMPTY, FieldPath, ParseError
from fieldpath.cache import PathCache, default_cache, set_default_cache
from fieldpath.config import CacheConfig
from fieldpath.grammar import parse_expression
from fieldpath.segments import NameSegment

Spy = tuple[PathCache, list[str]]

# ---------------------------------------------------------------------------
# Spy helper
# ---------------------------------------------------------------------------


def _make_spy_parser() -> tuple[object, list[str]]:
    """Return (parser, call_log) where call_log records every parsed text.

    The spy delegates to ``parse_expression`` so results are unchanged.
    """
    call_log: list[str] = []

    def spy_parse(text: str) -> NameSegment:
        call_log.append(text)
        return parse_expression(text)

    return spy_parse, call_log


@pytest.fixture
def spy() -> Spy:
    parser, call_log = _make_spy_parser()
    return PathCache(parser=parser), call_log  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCacheHits:
    def test_second_call_served_from_cache(self, spy: Spy) -> None:
        cache, call_log = spy
        first = cache.get_or_parse("a.b.c")
        second = cache.get_or_parse("a.b.c")

        assert call_log == ["a.b.c"]
        assert first is second
        assert "a.b.c" in cache

    def test_distinct_texts_parse_separately(self, spy: Spy) -> None:
        cache, call_log = spy
        cache.get_or_parse("a")
        cache.get_or_parse('"a"')

        assert call_log == ["a", '"a"']
        assert len(cache) == 2


class TestEmptyBypass:
    def test_empty_returns_singleton(self, spy: Spy) -> None:
        cache, call_log = spy
        assert cache.get_or_parse("") is EMPTY
        assert call_log == []
        assert cache.curr_size == 0


class TestFailuresNotCached:
    def test_error_propagates_and_is_retried(self, spy: Spy) -> None:
        cache, call_log = spy
        for _ in range(2):
            with pytest.raises(ParseError):
                cache.get_or_parse("a..b")

        assert call_log == ["a..b", "a..b"]
        assert "a..b" not in cache
        assert len(cache) == 0


class TestLRUEviction:
    def test_least_recently_used_evicted(self) -> None:
        parser, call_log = _make_spy_parser()
        cache = PathCache(CacheConfig(max_size=2), parser=parser)  # type: ignore[arg-type]
        cache.get_or_parse("a")
        cache.get_or_parse("b")
        cache.get_or_parse("a")  # "b" is now least recently used
        cache.get_or_parse("c")

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert cache.curr_size == 2

        call_log.clear()
        cache.get_or_parse("b")
        assert call_log == ["b"]

    def test_default_max_size(self) -> None:
        assert PathCache().max_size == 1000

    def test_clear(self) -> None:
        cache = PathCache()
        cache.get_or_parse("a")
        cache.clear()
        assert len(cache) == 0


class TestInstanceIsolation:
    def test_instances_do_not_share(self) -> None:
        one = PathCache()
        two = PathCache()
        one.get_or_parse("a.b")

        assert "a.b" in one
        assert "a.b" not in two


class TestDefaultCache:
    def test_parse_from_uses_default(self, fresh_default_cache: PathCache) -> None:
        FieldPath.parse_from("x.y")
        assert default_cache() is fresh_default_cache
        assert "x.y" in fresh_default_cache

    def test_explicit_cache_overrides_default(self, fresh_default_cache: PathCache) -> None:
        mine = PathCache()
        FieldPath.parse_from("x.y", cache=mine)
        assert "x.y" in mine
        assert "x.y" not in fresh_default_cache

    def test_set_default_returns_previous(self, fresh_default_cache: PathCache) -> None:
        replacement = PathCache()
        previous = set_default_cache(replacement)
        try:
            assert previous is fresh_default_cache
            assert default_cache() is replacement
        finally:
            set_default_cache(previous)

    def test_none_creates_fresh_on_demand(self) -> None:
        previous = set_default_cache(None)
        try:
            created = default_cache()
            assert isinstance(created, PathCache)
            assert default_cache() is created
        finally:
            set_default_cache(previous)


class TestConcurrency:
    def test_concurrent_parses_stay_consistent(self) -> None:
        cache = PathCache(CacheConfig(max_size=50))
        texts = [f"f{i}.g[{i}]" for i in range(200)]
        failures: list[BaseException] = []

        def worker(offset: int) -> None:
            try:
                for i in range(len(texts)):
                    text = texts[(i + offset) % len(texts)]
                    path = cache.get_or_parse(text)
                    assert path.as_path_string() == text
            except BaseException as exc:  # noqa: BLE001
                failures.append(exc)

        threads = [threading.Thread(target=worker, args=(n * 17,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert failures == []
        assert len(cache) == 50
