"""日志初始化模块。

使用标准 logging + JSON Formatter，宿主启动时调用一次 `setup_logging`。
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from tickkit import __version__

from .config import get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# LogRecord 自带的属性，不作为附加字段输出
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def build_logging_config(
    level: str = "INFO", json_output: bool = True, precision: int = 6
) -> dict[str, Any]:
    """生成 dictConfig 所需的配置字典。"""

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "tickkit.core.logging.JsonFormatter",
                "precision": precision,
            },
            "text": {
                "format": TEXT_FORMAT,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_output else "text",
                "level": level,
            }
        },
        "root": {
            "handlers": ["stdout"],
            "level": level,
        },
    }


class JsonFormatter(logging.Formatter):
    """JSON 格式化器。

    每行带上 tickkit 版本；extra 中的浮点数（帧时间、触发时间等）按 `precision` 位小数输出。
    """

    def __init__(self, precision: int = 6) -> None:
        super().__init__()
        self.precision = precision

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "version": __version__,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        # 附加 extra 字段
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in payload or key in _RESERVED_ATTRS:
                continue
            if isinstance(value, float):
                value = round(value, self.precision)
            payload[key] = value
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None) -> None:
    """在宿主入口调用，确保日志配置生效。"""

    settings = get_settings()
    logging.config.dictConfig(
        build_logging_config(
            level=(level or settings.log_level).upper(),
            json_output=settings.log_json,
            precision=settings.log_float_precision,
        )
    )
