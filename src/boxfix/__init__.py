"""
boxfix - 文字圖表框線修正器 (ASCII/Unicode Box Diagram Corrector)

核心概念：
- 在純文字文件中找出 ASCII/Unicode 框線圖表
- 以視覺寬度 (支援全形字與 emoji) 計算邊框欄位
- 只做插入 (補空白、補邊框)，不刪除或重排任何既有字元
- 每個區塊以有界的迭代修正，直到收斂或達到上限

官方入口（穩定 API）：
- `boxfix.DiagramCorrector`
- `boxfix.CorrectionConfig`
- `boxfix.correct`
"""

# =============================================================================
# 修正器（官方入口）
# =============================================================================
from boxfix.config import DEFAULT_CONFIG, CorrectionConfig
from boxfix.correction import (
    CorrectionResult,
    CorrectionStats,
    DiagramCorrector,
    correct,
)

# =============================================================================
# 分析工具
# =============================================================================
from boxfix.analysis import analyze_line, classify_line, expand_tabs, visual_width
from boxfix.core.chars import CharRole, classify
from boxfix.core.models import Block, LineKind, LineRecord

# =============================================================================
# 例外與日誌
# =============================================================================
from boxfix.exceptions import BoxfixError, ConfigError, RevisionOutOfRange
from boxfix.utils.logger import get_logger, setup_logger

__all__ = [
    # Correctors
    "DiagramCorrector",
    "CorrectionConfig",
    "CorrectionResult",
    "CorrectionStats",
    "DEFAULT_CONFIG",
    "correct",
    # Analysis
    "analyze_line",
    "classify_line",
    "expand_tabs",
    "visual_width",
    "CharRole",
    "classify",
    "Block",
    "LineKind",
    "LineRecord",
    # Errors
    "BoxfixError",
    "ConfigError",
    "RevisionOutOfRange",
    # Logging
    "get_logger",
    "setup_logger",
]

__version__ = "0.1.0"
