"""有界 LRU 记忆化缓存实现。"""

from __future__ import annotations

import functools
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterator, NamedTuple, TypeVar, overload

from tickkit.core.config import get_settings

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    capacity: int
    size: int


@dataclass(frozen=True)
class _CallKey:
    """多参数调用的缓存键，与单个位置参数的键互不冲突。"""

    args: tuple[Any, ...]
    kwargs: tuple[tuple[str, Any], ...]


def cache_key(*args: Any, **kwargs: Any) -> Hashable:
    """根据调用参数生成缓存键。

    恰好一个位置参数时直接以该参数为键，其余情况组合为 `_CallKey`。
    参数不可哈希时在查表阶段抛出 TypeError。
    """

    if len(args) == 1 and not kwargs:
        return args[0]
    return _CallKey(args, tuple(sorted(kwargs.items())))


class MemoCache(Generic[K, V]):
    """按访问先后淘汰的缓存，capacity 为 0 时不限容量。

    OrderedDict 的顺序即访问顺序：表头最久未使用，表尾最近使用。
    """

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError(f"capacity 不能为负数：{capacity}")
        self.capacity = capacity
        self._store: OrderedDict[K, V] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __iter__(self) -> Iterator[K]:
        return iter(self._store)

    def keys(self) -> list[K]:
        """按最久未使用到最近使用的顺序返回键。"""

        return list(self._store)

    @property
    def full(self) -> bool:
        return self.capacity > 0 and len(self._store) >= self.capacity

    def get(self, key: K, default: Any = None) -> V | Any:
        """读取缓存并将该键标记为最近使用；未命中返回 default。"""

        if key not in self._store:
            return default
        self._store.move_to_end(key)
        return self._store[key]

    def put(self, key: K, value: V) -> None:
        """写入缓存；新键在容量已满时先淘汰最久未使用的键。"""

        if key in self._store:
            self._store[key] = value
            self._store.move_to_end(key)
            return
        self.make_room()
        self._store[key] = value

    def make_room(self) -> K | None:
        """容量已满时淘汰一个键，返回被淘汰的键。"""

        if self.full:
            return self.evict()
        return None

    def evict(self) -> K | None:
        """淘汰最久未使用的键；缓存为空时返回 None。"""

        if not self._store:
            return None
        key, _ = self._store.popitem(last=False)
        logger.debug("cache.memo.evict", extra={"key": repr(key), "capacity": self.capacity})
        return key

    def clear(self) -> None:
        """清空缓存。"""

        self._store.clear()


@overload
def memoize(func: Callable[..., T], *, capacity: int | None = None) -> Callable[..., T]: ...


@overload
def memoize(
    func: None = None, *, capacity: int | None = None
) -> Callable[[Callable[..., T]], Callable[..., T]]: ...


def memoize(func=None, *, capacity=None):
    """缓存纯函数的计算结果。

    可直接 `memoize(fn)` 或以 `@memoize(capacity=128)` 的形式装饰。
    capacity 为 None 时取配置中的默认容量。被包装函数抛出的异常原样上抛，且不写入缓存。
    包装后的函数附带 `cache`、`cache_info()` 与 `cache_clear()`。
    """

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        size = get_settings().memo_default_capacity if capacity is None else capacity
        cache: MemoCache[Hashable, T] = MemoCache(size)
        stats = {"hits": 0, "misses": 0}

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            key = cache_key(*args, **kwargs)
            cached = cache.get(key, _MISSING)
            if cached is not _MISSING:
                stats["hits"] += 1
                return cached
            stats["misses"] += 1
            # 先腾出空间再计算
            cache.make_room()
            result = fn(*args, **kwargs)
            cache.put(key, result)
            return result

        def cache_info() -> CacheInfo:
            return CacheInfo(stats["hits"], stats["misses"], cache.capacity, len(cache))

        def cache_clear() -> None:
            cache.clear()
            stats["hits"] = stats["misses"] = 0

        wrapper.cache = cache  # type: ignore[attr-defined]
        wrapper.cache_info = cache_info  # type: ignore[attr-defined]
        wrapper.cache_clear = cache_clear  # type: ignore[attr-defined]
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
