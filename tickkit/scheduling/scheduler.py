"""调度器上下文对象。

把帧时钟与延迟登记表打包在一起，由宿主创建一次并显式传给需要调度的代码。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from tickkit.utils.cache import memoize as _memoize

from .clock import FrameClock
from .limiters import Debouncer, Throttler
from .registry import Action, DelayRegistry

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Scheduler:
    """延迟调用、防抖、节流与记忆化的统一入口。"""

    def __init__(self, clock: FrameClock | None = None) -> None:
        self.clock = clock or FrameClock()
        self.registry = DelayRegistry(self.clock)

    def now(self) -> float:
        return self.clock.now()

    def adopt(self, previous: "Scheduler") -> None:
        """接管旧实例的延迟登记表。

        旧实例上待执行的回调与已创建的防抖器继续有效，并由本实例的时钟驱动。
        旧实例创建的节流器仍读取旧时钟。
        """

        if previous.registry is self.registry:
            return
        carried = len(previous.registry)
        previous.registry.clock = self.clock
        self.registry.merge_into(previous.registry)
        self.registry = previous.registry
        previous.clock = self.clock
        logger.info("scheduler.adopt", extra={"pending": carried, "total": len(self.registry)})

    def update(self, now: float | None = None) -> int:
        """每帧由宿主调用一次：推进时钟后执行到期回调，返回执行数量。"""

        if now is not None:
            self.clock.advance(now)
        return self.registry.tick(self.clock.now())

    def delay(self, func: Action, delay: float) -> int:
        """`delay` 秒后执行 `func`，返回回调 id。"""

        return self.registry.schedule(func, delay)

    def cancel_delay(self, callback_id: int) -> bool:
        return self.registry.cancel(callback_id)

    def refresh_delay(self, callback_id: int, delay: float) -> bool:
        """把回调的触发时间重置为 `delay` 秒后。"""

        return self.registry.reschedule(callback_id, delay)

    def debounce(self, func: Callable[..., object], delay: float) -> Debouncer:
        return Debouncer(func, delay, self.registry)

    def throttle(self, func: Callable[..., T], delay: float) -> Throttler[T]:
        return Throttler(func, delay, self.clock)

    @staticmethod
    def memoize(func: Callable[..., T], capacity: int | None = None) -> Callable[..., T]:
        """与时间无关，等同于 `tickkit.utils.memoize`。"""

        return _memoize(func, capacity=capacity)

    def shutdown(self) -> int:
        """丢弃所有待执行回调。"""

        dropped = self.registry.clear()
        logger.info("scheduler.shutdown", extra={"dropped": dropped})
        return dropped

    def stats(self) -> dict[str, Any]:
        return {"now": self.clock.now(), "pending": len(self.registry)}
