"""全局配置模块。

通过 `pydantic_settings.BaseSettings` 读取 `.env` 或系统环境变量，
宿主无需改代码即可调整日志与调度策略。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DuplicateInitPolicy = Literal["replace", "keep_first"]


class Settings(BaseSettings):
    """统一的运行时配置对象。"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        "INFO",
        description="根日志级别。",
    )
    log_json: bool = Field(
        True,
        description="是否以 JSON 行输出日志；关闭后使用纯文本格式。",
    )
    log_float_precision: int = Field(
        6,
        ge=0,
        description="JSON 日志中浮点附加字段保留的小数位数。",
    )

    memo_default_capacity: int = Field(
        0,
        ge=0,
        description="memoize 未指定容量时的默认值，0 表示不限容量。",
    )

    duplicate_init_policy: DuplicateInitPolicy = Field(
        "replace",
        description="重复初始化调度器时的处理策略：replace 以新实例为准，keep_first 保留首个实例。",
    )

    clock_strict: bool = Field(
        True,
        description="帧时钟回退时是否直接报错；关闭后仅记录警告并保持原时间。",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取全局唯一的 Settings 实例。"""

    return Settings()
