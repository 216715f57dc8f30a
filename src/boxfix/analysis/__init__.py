"""
行分析模組

提供視覺寬度、tab 展開與單行結構分析。
"""

from .line_analyzer import (
    SUFFIX_TOLERANCE,
    analyze_line,
    classify_line,
    detect_suffix_border,
    structure_signature,
)
from .width import char_width, column_index, expand_tabs, visual_width

__all__ = [
    "analyze_line",
    "classify_line",
    "detect_suffix_border",
    "structure_signature",
    "SUFFIX_TOLERANCE",
    "char_width",
    "column_index",
    "expand_tabs",
    "visual_width",
]
