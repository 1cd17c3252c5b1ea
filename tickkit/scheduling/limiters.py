"""防抖与节流。

两者都以小型有状态对象实现，调用对象本身即调用被包装的函数。
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Generic, TypeVar

from .clock import FrameClock
from .registry import DelayRegistry

T = TypeVar("T")


class Debouncer:
    """连续调用结束 `delay` 秒后才执行一次 `func`。

    每次调用若已有待执行回调则只推迟其触发时间，不新增登记项；
    触发时使用最近一次调用的参数。
    """

    def __init__(self, func: Callable[..., object], delay: float, registry: DelayRegistry) -> None:
        functools.update_wrapper(self, func)
        self.func = func
        self.delay = delay
        self.registry = registry
        self._pending = False
        self._schedule_id: int | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    @property
    def pending(self) -> bool:
        return self._pending

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._args, self._kwargs = args, kwargs
        if self._pending and self._schedule_id is not None:
            if self.registry.reschedule(self._schedule_id, self.delay):
                return
        # 登记项已被外部取消时重新登记
        self._schedule_id = self.registry.schedule(self._fire, self.delay)
        self._pending = True

    def _fire(self) -> None:
        # 先复位状态，func 内部再次调用时会登记新的回调并被正确跟踪
        args, kwargs = self._args, self._kwargs
        self._pending = False
        self._schedule_id = None
        self.func(*args, **kwargs)

    def cancel(self) -> bool:
        """取消待执行的调用，返回是否存在待执行调用。"""

        if not self._pending or self._schedule_id is None:
            return False
        found = self.registry.cancel(self._schedule_id)
        self._pending = False
        self._schedule_id = None
        return found


class Throttler(Generic[T]):
    """每 `delay` 秒窗口内最多执行一次 `func`，在窗口起始处执行。

    窗口起点初始化为创建时刻，当前时间严格大于窗口终点时才放行。
    """

    def __init__(self, func: Callable[..., T], delay: float, clock: FrameClock) -> None:
        functools.update_wrapper(self, func)
        self.func = func
        self.delay = delay
        self.clock = clock
        self.next_allowed = clock.now()

    def __call__(self, *args: Any, **kwargs: Any) -> T | None:
        now = self.clock.now()
        if now <= self.next_allowed:
            return None
        self.next_allowed = now + self.delay
        return self.func(*args, **kwargs)

    def reset(self) -> None:
        """立即重新开放窗口。"""

        self.next_allowed = float("-inf")


def debounce(func: Callable[..., object], delay: float, registry: DelayRegistry) -> Debouncer:
    return Debouncer(func, delay, registry)


def throttle(func: Callable[..., T], delay: float, clock: FrameClock) -> Throttler[T]:
    return Throttler(func, delay, clock)
