"""延迟调用登记表。

所有待执行的延迟回调按 id 存放在一个保持插入顺序的字典中，
宿主每帧调用一次 `tick`，到期（fire_at 严格小于当前时间）的回调被执行并移除。
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from .clock import FrameClock

logger = logging.getLogger(__name__)

Action = Callable[[], object]


@dataclass
class TimedCallback:
    """一条待执行的延迟回调。"""

    id: int
    fire_at: float
    action: Action

    def overdue(self, now: float) -> bool:
        return self.fire_at < now


class DelayRegistry:
    """按 id 索引的延迟回调表，cancel/reschedule 均为 O(1)。"""

    def __init__(self, clock: FrameClock | None = None) -> None:
        self.clock = clock or FrameClock()
        self._pending: dict[int, TimedCallback] = {}
        # id 从 1 开始单调递增，取消后也不复用
        self._ids: Iterator[int] = itertools.count(1)

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, callback_id: object) -> bool:
        return callback_id in self._pending

    def pending_ids(self) -> list[int]:
        return list(self._pending)

    def fire_time(self, callback_id: int) -> float | None:
        """返回待执行回调的触发时间；未知 id 返回 None。"""

        entry = self._pending.get(callback_id)
        return entry.fire_at if entry else None

    def schedule(self, action: Action, delay: float) -> int:
        """在 `delay` 秒后执行 `action`，返回回调 id。"""

        callback_id = next(self._ids)
        fire_at = self.clock.now() + delay
        self._pending[callback_id] = TimedCallback(callback_id, fire_at, action)
        logger.debug("scheduler.delay.schedule", extra={"callback_id": callback_id, "fire_at": fire_at})
        return callback_id

    def cancel(self, callback_id: int) -> bool:
        """取消尚未执行的回调，返回是否找到。"""

        return self._pending.pop(callback_id, None) is not None

    def reschedule(self, callback_id: int, delay: float) -> bool:
        """把待执行回调的触发时间改为 `delay` 秒后，回调本身与 id 不变。"""

        entry = self._pending.get(callback_id)
        if entry is None:
            return False
        entry.fire_at = self.clock.now() + delay
        return True

    def tick(self, now: float | None = None) -> int:
        """执行所有到期回调并返回本帧执行的数量。

        到期列表在执行任何回调前确定；执行前再次核对，被前序回调取消或推迟的条目不会触发。
        本帧内新登记的回调留到之后的帧。回调先移除再执行，其异常直接抛给宿主，
        剩余到期回调保留到下一帧。
        """

        if now is None:
            now = self.clock.now()
        due = [entry for entry in self._pending.values() if entry.overdue(now)]
        fired = 0
        for entry in due:
            if self._pending.get(entry.id) is not entry or not entry.overdue(now):
                continue
            del self._pending[entry.id]
            entry.action()
            fired += 1
        return fired

    def merge_into(self, target: "DelayRegistry") -> dict[int, int]:
        """把全部待执行回调移入 `target`，保留触发时间。

        `target` 重新分配 id，返回旧 id 到新 id 的映射。
        """

        moved: dict[int, int] = {}
        for entry in self._pending.values():
            new_id = next(target._ids)
            target._pending[new_id] = TimedCallback(new_id, entry.fire_at, entry.action)
            moved[entry.id] = new_id
        self._pending.clear()
        return moved

    def clear(self) -> int:
        """丢弃全部待执行回调，返回丢弃的数量。"""

        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.info("scheduler.delay.clear", extra={"dropped": dropped})
        return dropped
