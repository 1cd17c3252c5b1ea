"""帧驱动的调度工具：延迟调用、防抖与节流。"""

from __future__ import annotations

from .clock import FrameClock
from .host import get_scheduler, init_scheduler, reset_scheduler
from .limiters import Debouncer, Throttler, debounce, throttle
from .registry import DelayRegistry, TimedCallback
from .scheduler import Scheduler

__all__ = [
    "Debouncer",
    "DelayRegistry",
    "FrameClock",
    "Scheduler",
    "Throttler",
    "TimedCallback",
    "debounce",
    "get_scheduler",
    "init_scheduler",
    "reset_scheduler",
    "throttle",
]
