"""
工具模組

提供日誌、計時等通用工具。
"""

from .logger import (
    TimingContext,
    get_logger,
    log_timing,
    setup_logger,
)

__all__ = [
    # 日誌工具
    "get_logger",
    "setup_logger",
    "log_timing",
    "TimingContext",
]
