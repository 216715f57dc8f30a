"""
核心層

字元角色分類、資料模型與事件定義。
"""

from .chars import (
    CharRole,
    classify,
    is_box_char,
    is_closing_char,
    is_corner,
    is_horizontal_fill,
    is_junction,
    is_vertical_border,
)
from .events import CorrectionEvent, CorrectionEventHandler
from .models import Block, BorderMark, LineKind, LineRecord

__all__ = [
    "CharRole",
    "classify",
    "is_corner",
    "is_horizontal_fill",
    "is_vertical_border",
    "is_junction",
    "is_box_char",
    "is_closing_char",
    "CorrectionEvent",
    "CorrectionEventHandler",
    "Block",
    "BorderMark",
    "LineKind",
    "LineRecord",
]
