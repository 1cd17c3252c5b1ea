"""tickkit 包根模块。

帧驱动的通用工具集：计时、延迟调用、防抖、节流与记忆化缓存。
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
