"""
資料模型

- LineKind: 行分類 (DIAGRAM / PROSE / CODE / BLANK)
- BorderMark: 邊框字元與其視覺欄位
- LineRecord: 單行分析結果 (不可變，每次修正後整個替換)
- Block: 一段連續的圖表行
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class LineKind(Enum):
    DIAGRAM = "diagram"
    PROSE = "prose"
    CODE = "code"
    BLANK = "blank"


@dataclass(frozen=True)
class BorderMark:
    column: int
    char: str


@dataclass(frozen=True)
class LineRecord:
    """
    單行分析結果

    屬性:
        text: 原始內容 (已展開 tab)
        kind: 行分類
        width: 視覺寬度
        indent: 前導空白的視覺寬度
        suffix_border: 行尾 (去除尾端空白後) 的結尾字元，若存在
        leading_border: 行首第一個非空白字元，若為垂直邊框/角落/交會點
        border_columns: 所有垂直邊框字元所在的視覺欄位
        has_anchor: 是否包含角落或交會點
    """

    text: str
    kind: LineKind
    width: int
    indent: int = 0
    suffix_border: Optional[BorderMark] = None
    leading_border: Optional[BorderMark] = None
    border_columns: FrozenSet[int] = field(default_factory=frozenset)
    has_anchor: bool = False

    @property
    def is_blank(self) -> bool:
        return self.kind is LineKind.BLANK

    @property
    def is_diagram(self) -> bool:
        return self.kind is LineKind.DIAGRAM


@dataclass(frozen=True)
class Block:
    """
    圖表區塊

    start / end 為文件中的行號 (0-based, end 含在內)。
    """

    start: int
    end: int
    confidence: float
    records: Tuple[LineRecord, ...] = ()

    @property
    def stop(self) -> int:
        """切片用的結束位置 (不含)"""
        return self.end + 1

    def __len__(self) -> int:
        return self.end - self.start + 1

    def with_records(self, records) -> "Block":
        return Block(self.start, self.end, self.confidence, tuple(records))
