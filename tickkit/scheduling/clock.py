"""帧时钟：由宿主每帧推进一次，帧内读数保持不变。"""

from __future__ import annotations

import logging

from tickkit.core.config import get_settings

logger = logging.getLogger(__name__)


class FrameClock:
    """宿主驱动的时间源。

    `now()` 返回当前帧的时间，`advance()` 由宿主在每帧开始时调用。
    时间以宿主的帧时间为准，默认从 0 开始。
    strict 为 True 时时间回退直接抛出 ValueError，否则保持原时间并记录警告。
    """

    def __init__(self, start: float = 0.0, *, strict: bool | None = None) -> None:
        self._now = float(start)
        self.strict = get_settings().clock_strict if strict is None else strict

    def now(self) -> float:
        return self._now

    def advance(self, now: float) -> float:
        """把时钟推进到 `now` 并返回生效后的时间。"""

        if now < self._now:
            if self.strict:
                raise ValueError(f"帧时钟不能回退：{now} < {self._now}")
            logger.warning(
                "clock.frame.backwards",
                extra={"requested": now, "current": self._now},
            )
            return self._now
        self._now = float(now)
        return self._now

    def advance_by(self, seconds: float) -> float:
        """按增量推进时钟。"""

        if seconds < 0:
            raise ValueError(f"推进量不能为负数：{seconds}")
        return self.advance(self._now + seconds)
