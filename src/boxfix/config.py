"""
全域配置模組

提供統一的配置類別，控制修正迴圈、門檻、日誌與回呼。

使用方式:
    from boxfix import DiagramCorrector, CorrectionConfig

    # 預設配置
    corrector = DiagramCorrector()

    # 開啟 verbose 模式並調整門檻
    corrector = DiagramCorrector(CorrectionConfig(min_score=0.6, verbose=True))

    # 進階: 使用標準 logging 控制
    import logging
    logging.getLogger("boxfix").setLevel(logging.DEBUG)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .core.events import CorrectionEventHandler
from .exceptions import ConfigError
from .utils.logger import setup_logger


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)


@dataclass
class CorrectionConfig:
    """
    修正配置

    屬性:
        max_iterations: 每個區塊最多執行幾輪修訂 (>= 1)
        min_score: 修訂與區塊信心的最低分數 (0.0 ~ 1.0)
        tab_width: tab 展開寬度 (>= 1)
        include_low_confidence: 處理所有候選區塊，不以信心分數篩選
        verbose: 是否開啟詳細日誌
        gap_tolerance: 區塊內可橋接的連續非圖表行數 (>= 0)
        on_timing: 計時回呼函數 (operation: str, elapsed: float) -> None
        on_event: 事件回呼函數，見 boxfix.core.events

    使用範例:
        def my_callback(op, elapsed):
            print(f"{op} took {elapsed:.3f}s")

        config = CorrectionConfig(verbose=True, on_timing=my_callback)
    """

    max_iterations: int = 10
    min_score: float = 0.5
    tab_width: int = 4
    include_low_confidence: bool = False
    verbose: bool = False
    gap_tolerance: int = 1

    # 回呼
    on_timing: Optional[Callable[[str, float], None]] = None
    on_event: Optional[CorrectionEventHandler] = None

    def __post_init__(self):
        """檢查數值範圍並設定 logger"""
        if self.max_iterations < 1:
            raise ConfigError(f"max_iterations must be a positive integer, got {self.max_iterations}")
        if not 0.0 <= self.min_score <= 1.0:
            raise ConfigError(f"min_score must be within [0, 1], got {self.min_score}")
        if self.tab_width < 1:
            raise ConfigError(f"tab_width must be a positive integer, got {self.tab_width}")
        if self.gap_tolerance < 0:
            raise ConfigError(f"gap_tolerance must not be negative, got {self.gap_tolerance}")
        configure_logging(self.verbose)

    @property
    def block_threshold(self) -> float:
        """區塊信心門檻；include_low_confidence 時不篩選"""
        return 0.0 if self.include_low_confidence else self.min_score


# 預設配置實例 (靜默模式)
DEFAULT_CONFIG = CorrectionConfig(verbose=False)
