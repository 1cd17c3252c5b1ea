"""宿主生命周期钩子：进程内唯一的调度器实例。

宿主启动时调用 `init_scheduler` 一次，之后通过 `get_scheduler` 取用。
重复初始化只记录警告，由 `Settings.duplicate_init_policy` 决定以哪个实例为准：
`replace` 以最新实例为准并接管旧实例的延迟登记表，`keep_first` 保留首个实例并丢弃新实例。
"""

from __future__ import annotations

import logging
from typing import Optional

from tickkit.core.config import get_settings

from .scheduler import Scheduler

logger = logging.getLogger(__name__)

_instance: Optional[Scheduler] = None


def init_scheduler(scheduler: Scheduler | None = None) -> Scheduler:
    """注册调度器实例并返回当前生效的实例。"""

    global _instance

    candidate = scheduler or Scheduler()
    if _instance is None:
        _instance = candidate
        return _instance
    if candidate is _instance:
        return _instance

    policy = get_settings().duplicate_init_policy
    logger.warning(
        "scheduler.init.duplicate: 检测到多个调度器实例，policy=%s",
        policy,
        extra={"policy": policy},
    )
    if policy == "replace":
        # 延迟登记表是进程级的，新实例沿用旧实例的待执行回调
        candidate.adopt(_instance)
        _instance = candidate
    return _instance


def get_scheduler() -> Optional[Scheduler]:
    """返回已初始化的调度器；尚未初始化时记录错误并返回 None。"""

    if _instance is None:
        logger.error("scheduler.access.uninitialized: 调度器在初始化之前被访问，请先调用 init_scheduler。")
    return _instance


def reset_scheduler() -> None:
    """宿主关闭时调用，丢弃当前实例及其待执行回调。"""

    global _instance

    if _instance is not None:
        _instance.shutdown()
    _instance = None
