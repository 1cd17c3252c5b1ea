"""计时与时间工具。"""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Callable, Optional


def now() -> float:
    """返回单调递增的实时秒数，不受帧时钟影响。"""

    return time.perf_counter()


def now_ms() -> int:
    """返回当前毫秒时间戳。"""

    return int(now() * 1000)


@dataclass
class Stopwatch(AbstractContextManager["Stopwatch"]):
    """从创建时刻起计时的秒表，也可作为上下文计时器使用。

    `start_time` 创建后不再改变；`stop()` 或退出 with 块会写入 `end_time` 并冻结读数。
    """

    start_time: float = field(default_factory=now)
    end_time: Optional[float] = field(default=None)

    @classmethod
    def start(cls) -> "Stopwatch":
        """以当前时间创建秒表。"""

        return cls(start_time=now())

    def __exit__(self, exc_type, exc, exc_tb) -> None:  # type: ignore[override]
        self.stop()

    def stop(self) -> float:
        """冻结读数并返回耗时（秒）；重复调用保留首次冻结的值。"""

        if self.end_time is None:
            self.end_time = now()
        return self.elapsed

    @property
    def stopped(self) -> bool:
        return self.end_time is not None

    @property
    def elapsed(self) -> float:
        """以秒返回耗时。

        尚未停止时为当前时间减去 `start_time`；调用 `stop()` 后读数固定，不再随当前时间变化。
        """

        end = self.end_time if self.end_time is not None else now()
        return max(0.0, end - self.start_time)

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)


def measure(iterations: int, func: Callable[[], object]) -> float:
    """同步执行 `func` 共 `iterations` 次，返回总耗时（秒），不扣除循环开销。"""

    if iterations < 0:
        raise ValueError(f"iterations 不能为负数：{iterations}")
    stopwatch = Stopwatch.start()
    for _ in range(iterations):
        func()
    return stopwatch.elapsed
