"""记忆化缓存测试。"""

from __future__ import annotations

import pytest

from tickkit.utils import MemoCache, memoize


def _counting(fn):
    calls: list = []

    def wrapped(*args, **kwargs):
        calls.append(args)
        return fn(*args, **kwargs)

    return wrapped, calls


def test_hit_does_not_recompute():
    fn, calls = _counting(lambda x: x * x)
    squared = memoize(fn, capacity=4)

    assert squared(3) == 9
    assert squared(3) == 9
    assert calls == [(3,)]
    assert squared.cache_info().hits == 1
    assert squared.cache_info().misses == 1


def test_evicts_least_recently_used():
    squared = memoize(lambda x: x * x, capacity=3)
    for key in (1, 2, 3, 4):
        squared(key)

    assert 1 not in squared.cache
    assert squared.cache.keys() == [2, 3, 4]
    assert len(squared.cache) == 3


def test_access_protects_from_eviction():
    squared = memoize(lambda x: x * x, capacity=3)
    for key in (1, 2, 3):
        squared(key)
    squared(1)
    squared(4)

    assert 1 in squared.cache
    assert 2 not in squared.cache
    assert squared.cache.keys() == [3, 1, 4]


def test_unbounded_never_evicts():
    identity = memoize(lambda x: x, capacity=0)
    for key in range(1000):
        identity(key)
    assert len(identity.cache) == 1000


def test_default_capacity_from_settings(monkeypatch):
    monkeypatch.setenv("MEMO_DEFAULT_CAPACITY", "2")

    @memoize
    def double(x):
        return x * 2

    for key in range(5):
        double(key)
    assert double.cache_info().capacity == 2
    assert double.cache.keys() == [3, 4]


def test_decorator_with_arguments_keeps_metadata():
    @memoize(capacity=8)
    def add(a, b=0):
        """加法。"""
        return a + b

    assert add.__name__ == "add"
    assert add.__doc__ == "加法。"
    assert add(1, b=2) == 3
    assert add(1, b=2) == 3
    assert add.cache_info().hits == 1


def test_single_argument_key_differs_from_multi_argument_key():
    fn, calls = _counting(lambda *args: args)
    packed = memoize(fn)

    packed((1, 2))
    packed(1, 2)
    assert len(calls) == 2


def test_none_result_is_cached():
    fn, calls = _counting(lambda x: None)
    nothing = memoize(fn)
    nothing("a")
    nothing("a")
    assert len(calls) == 1


def test_exception_propagates_and_is_not_cached():
    attempts: list[int] = []

    @memoize(capacity=2)
    def flaky(x):
        attempts.append(x)
        raise KeyError(x)

    with pytest.raises(KeyError):
        flaky(1)
    with pytest.raises(KeyError):
        flaky(1)
    assert attempts == [1, 1]
    assert len(flaky.cache) == 0


def test_unhashable_argument_raises_type_error():
    identity = memoize(lambda x: x)
    with pytest.raises(TypeError):
        identity([1, 2])


def test_cache_clear_resets_stats():
    identity = memoize(lambda x: x)
    identity(1)
    identity(1)
    identity.cache_clear()
    assert identity.cache_info() == (0, 0, 0, 0)


def test_memo_cache_put_and_get():
    cache: MemoCache[str, int] = MemoCache(capacity=2)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.get("a") == 1
    cache.put("c", 3)

    assert "b" not in cache
    assert cache.keys() == ["a", "c"]
    assert cache.get("missing", -1) == -1


def test_memo_cache_overwrite_does_not_evict():
    cache: MemoCache[str, int] = MemoCache(capacity=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)

    assert len(cache) == 2
    assert cache.keys() == ["b", "a"]
    assert cache.get("a") == 10


def test_memo_cache_rejects_negative_capacity():
    with pytest.raises(ValueError):
        MemoCache(capacity=-1)


def test_evict_on_empty_cache_returns_none():
    assert MemoCache(capacity=1).evict() is None
