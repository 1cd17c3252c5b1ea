"""通用工具函数集。"""

from __future__ import annotations

from .cache import CacheInfo, MemoCache, cache_key, memoize
from .timing import Stopwatch, measure, now, now_ms

__all__ = [
    "CacheInfo",
    "MemoCache",
    "Stopwatch",
    "cache_key",
    "measure",
    "memoize",
    "now",
    "now_ms",
]
