"""Tests for the pending-emphasis scratch-set pool."""

import pytest

from sobre.autoemail.cache import DEFAULT_MAX_POOLED, PendingEmphasisCache


class TestAcquireRelease:
    """Basic pooling behavior."""

    def test_acquire_returns_empty_set(self) -> None:
        cache = PendingEmphasisCache()
        assert cache.acquire() == set()

    def test_release_clears_and_reuses(self) -> None:
        cache = PendingEmphasisCache()
        scratch = cache.acquire()
        scratch.update("*_")
        cache.release(scratch)

        assert len(cache) == 1
        again = cache.acquire()
        assert again is scratch
        assert again == set()

    def test_new_set_when_pool_empty(self) -> None:
        cache = PendingEmphasisCache()
        first = cache.acquire()
        second = cache.acquire()
        assert first is not second

    def test_pool_size_is_bounded(self) -> None:
        cache = PendingEmphasisCache(max_pooled=2)
        sets = [cache.acquire() for _ in range(4)]
        for scratch in sets:
            cache.release(scratch)
        assert len(cache) == 2

    def test_default_bound(self) -> None:
        cache = PendingEmphasisCache()
        sets = [cache.acquire() for _ in range(DEFAULT_MAX_POOLED + 3)]
        for scratch in sets:
            cache.release(scratch)
        assert len(cache) == DEFAULT_MAX_POOLED


class TestBorrow:
    """The borrow() context manager."""

    def test_borrow_releases_on_exit(self) -> None:
        cache = PendingEmphasisCache()
        with cache.borrow() as scratch:
            scratch.add("~")
            assert len(cache) == 0
        assert len(cache) == 1
        assert cache.acquire() == set()

    def test_borrow_releases_on_exception(self) -> None:
        cache = PendingEmphasisCache()
        with pytest.raises(RuntimeError), cache.borrow() as scratch:
            scratch.add("*")
            raise RuntimeError("boom")
        assert len(cache) == 1
        assert cache.acquire() == set()

    def test_nested_borrows_get_distinct_sets(self) -> None:
        cache = PendingEmphasisCache()
        with cache.borrow() as outer, cache.borrow() as inner:
            assert outer is not inner
        assert len(cache) == 2
