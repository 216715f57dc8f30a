"""
日誌與計時工具

提供統一的 logger 取得方式與計時工具。
所有 logger 都掛在 "boxfix" 命名空間下，使用者可透過標準 logging 控制：

    import logging
    logging.getLogger("boxfix").setLevel(logging.DEBUG)

使用方式:
    from boxfix.utils.logger import get_logger, TimingContext

    logger = get_logger("corrector.diagram")
    with TimingContext("DiagramCorrector.correct_lines", logger):
        ...
"""

import functools
import logging
import time
from typing import Callable, Optional

ROOT_LOGGER_NAME = "boxfix"

_DEFAULT_FORMAT = "%(levelname)-5s:%(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 boxfix 命名空間下的 logger

    Args:
        name: 子模組名稱 (如 "corrector.diagram")，None 表示根 logger

    Returns:
        logging.Logger: "boxfix.<name>" logger
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = _DEFAULT_FORMAT) -> logging.Logger:
    """
    為 boxfix 根 logger 安裝 stream handler

    重複呼叫只會調整層級，不會重複安裝 handler。

    Args:
        level: 日誌層級
        fmt: 日誌格式

    Returns:
        logging.Logger: boxfix 根 logger
    """
    global _handler

    logger = get_logger()
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(_handler)
    logger.setLevel(level)
    return logger


class TimingContext:
    """
    計時 context manager

    結束時以指定層級記錄耗時，並可將 (operation, elapsed) 轉交給回呼函數。

    範例:
        >>> with TimingContext("analyze", logger, logging.DEBUG):
        ...     analyze()
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.level = level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms")
        if self.callback is not None:
            self.callback(self.operation, self.elapsed)
        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    計時裝飾器

    Args:
        operation: 操作名稱，預設為函數的 __qualname__
        level: 日誌層級
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__
        logger = get_logger(func.__module__.replace(f"{ROOT_LOGGER_NAME}.", "", 1))

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with TimingContext(name, logger, level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
