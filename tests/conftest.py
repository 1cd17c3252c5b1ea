"""Pytest 公共 fixture。"""

from __future__ import annotations

import pytest

from tickkit.core.config import get_settings
from tickkit.scheduling import DelayRegistry, FrameClock, Scheduler, reset_scheduler


@pytest.fixture(autouse=True)
def _isolate_globals():
    """每个用例前后清理配置缓存与进程级调度器。"""

    get_settings.cache_clear()
    reset_scheduler()
    yield
    reset_scheduler()
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FrameClock:
    return FrameClock(start=0.0, strict=True)


@pytest.fixture
def registry(clock: FrameClock) -> DelayRegistry:
    return DelayRegistry(clock)


@pytest.fixture
def scheduler(clock: FrameClock) -> Scheduler:
    return Scheduler(clock)


class Recorder:
    """记录调用次数与参数的回调。"""

    def __init__(self, result=None) -> None:
        self.calls: list[tuple[tuple, dict]] = []
        self.result = result

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.result

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
