"""Shared fixtures: every test runs against a fresh default PathCache."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from fieldpath.cache import PathCache, set_default_cache


@pytest.fixture(autouse=True)
def fresh_default_cache() -> Iterator[PathCache]:
    """Install an empty default cache for the duration of one test."""
    cache = PathCache()
    previous = set_default_cache(cache)
    yield cache
    set_default_cache(previous)
