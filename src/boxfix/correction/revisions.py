"""
修訂引擎 (Revision Engine)

針對單一區塊產生候選修訂、評分並交給 CorrectionLoop 套用。

修訂種類是封閉集合 (REVISION_KINDS)，每種都實作 score() 與 apply()：
- PadBeforeSuffixBorder: 在既有的行尾邊框前插入填充，使其對齊目標邊框欄位
  (區塊中最右側的行尾邊框)
- AddSuffixBorder: 行缺少行尾邊框時，在目標邊框欄位插入邊框字元

所有修訂都只做插入，不刪除或重排既有字元。
評分是純函數，相同輸入必定得到相同分數。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import Levenshtein

from boxfix.analysis.line_analyzer import analyze_line, detect_suffix_border, structure_signature
from boxfix.analysis.width import column_index, visual_width
from boxfix.core.chars import is_horizontal_fill, is_vertical_border
from boxfix.core.models import LineRecord
from boxfix.detection.block_detector import dominant_column
from boxfix.exceptions import RevisionOutOfRange

# =============================================================================
# 評分參數
# =============================================================================

PAD_BASE_SCORE = 0.5
PAD_DEFICIT_WEIGHT = 0.3
PAD_DEFICIT_CAP = 8
PAD_DIAGRAM_BONUS = 0.1
PAD_SANITY_LIMIT = 40
PAD_SANITY_PENALTY = 0.4

ADD_BASE_SCORE = 0.4
ADD_SIMILARITY_WEIGHT = 0.1
ADD_WIDTH_WEIGHT = 0.1

DEFAULT_BORDER_CHAR = "|"


def _clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def has_closing_border(record: LineRecord) -> bool:
    """行尾邊框是否獨立於行首邊框 (單獨一個 "│" 的行沒有右側收邊)"""
    return record.suffix_border is not None and record.suffix_border != record.leading_border


def insert_at_column(text: str, column: int, insertion: str) -> str:
    """在視覺欄位 column 插入文字；位置不存在時拋出 RevisionOutOfRange"""
    index = column_index(text, column)
    if index < 0:
        raise RevisionOutOfRange(column, visual_width(text), text)
    return text[:index] + insertion + text[index:]


@dataclass(frozen=True)
class Revision(ABC):
    """
    修訂基底類別 (抽象)

    只有 REVISION_KINDS 中的子類別是有效的修訂種類。

    屬性:
        line_index: 區塊內的行索引
        column: 插入位置 (視覺欄位)
        text: 插入的文字
    """

    line_index: int
    column: int
    text: str

    @property
    def kind(self) -> str:
        return type(self).__name__

    @abstractmethod
    def score(self) -> float:
        """修訂分數 (0.0 ~ 1.0)"""

    def apply(self, record: LineRecord) -> LineRecord:
        """回傳插入後重新分析的新 LineRecord"""
        return analyze_line(insert_at_column(record.text, self.column, self.text))


@dataclass(frozen=True)
class PadBeforeSuffixBorder(Revision):
    deficit: int = 0
    diagram_line: bool = False
    sanity_limit: int = PAD_SANITY_LIMIT

    def score(self) -> float:
        score = PAD_BASE_SCORE + PAD_DEFICIT_WEIGHT * min(self.deficit, PAD_DEFICIT_CAP) / PAD_DEFICIT_CAP
        if self.diagram_line:
            score += PAD_DIAGRAM_BONUS
        if self.deficit > self.sanity_limit:
            score -= PAD_SANITY_PENALTY
        return _clamp(score)


@dataclass(frozen=True)
class AddSuffixBorder(Revision):
    similarity: float = 0.0
    width_ratio: float = 0.0

    def score(self) -> float:
        return _clamp(
            ADD_BASE_SCORE
            + ADD_SIMILARITY_WEIGHT * self.similarity
            + ADD_WIDTH_WEIGHT * min(1.0, self.width_ratio)
        )


REVISION_KINDS = (PadBeforeSuffixBorder, AddSuffixBorder)


def score(revision: Revision) -> float:
    """修訂分數 (0.0 ~ 1.0)"""
    if not isinstance(revision, REVISION_KINDS):
        raise TypeError(f"Unknown revision kind: {type(revision).__name__}")
    return revision.score()


def apply(revision: Revision, record: LineRecord) -> LineRecord:
    """套用修訂，回傳新的 LineRecord"""
    if not isinstance(revision, REVISION_KINDS):
        raise TypeError(f"Unknown revision kind: {type(revision).__name__}")
    return revision.apply(record)


# =============================================================================
# 區塊輪廓
# =============================================================================


@dataclass(frozen=True)
class BlockProfile:
    """
    區塊的對齊目標

    只參考有獨立行尾邊框的 DIAGRAM 行；散文、程式碼與只有單一邊框字元的行
    (例如目錄樹中的 "│") 不影響輪廓。

    屬性:
        suffix_column: 目標行尾邊框欄位 (最右側的行尾邊框)
        leading_column: 主要行首邊框欄位
        border_char: 區塊中最常見的垂直邊框字元
        body_signatures: 已正確收邊的內容行結構簽名
    """

    suffix_column: Optional[int]
    leading_column: Optional[int]
    border_char: str
    body_signatures: Tuple[str, ...]

    @classmethod
    def from_records(cls, records: Sequence[LineRecord]) -> "BlockProfile":
        bordered = [r for r in records if r.is_diagram and has_closing_border(r)]
        suffix_column = max((r.suffix_border.column for r in bordered), default=None)
        leading_column = dominant_column([r.leading_border.column for r in bordered if r.leading_border])

        counts = Counter(ch for r in records if r.is_diagram for ch in r.text if is_vertical_border(ch))
        border_char = max(counts, key=lambda ch: (counts[ch], ch)) if counts else DEFAULT_BORDER_CHAR

        body_signatures = tuple(
            sorted(
                {
                    structure_signature(r.text)
                    for r in bordered
                    if r.suffix_border.column == suffix_column
                    and r.leading_border is not None
                    and is_vertical_border(r.leading_border.char)
                }
            )
        )
        return cls(suffix_column, leading_column, border_char, body_signatures)


class RevisionEngine:
    """
    修訂引擎

    只對 DIAGRAM 行產生修訂，每行最多一個：
    - 行尾邊框在目標欄位左側 → PadBeforeSuffixBorder
    - 沒有行尾邊框，但行首邊框與其他行一致 → AddSuffixBorder
    """

    def __init__(self, sanity_limit: int = PAD_SANITY_LIMIT):
        self.sanity_limit = sanity_limit

    def propose(self, records: Sequence[LineRecord]) -> List[Revision]:
        """產生區塊的所有候選修訂 (未經門檻篩選)"""
        profile = BlockProfile.from_records(records)
        if profile.suffix_column is None:
            return []

        revisions: List[Revision] = []
        for index, record in enumerate(records):
            if not record.is_diagram:
                continue
            if has_closing_border(record):
                revision = self._pad_revision(index, record, profile)
            elif record.suffix_border is None:
                revision = self._add_revision(index, record, profile)
            else:
                # 單獨的邊框字元，如目錄樹的 "│"
                continue
            if revision is not None:
                revisions.append(revision)
        return revisions

    def _pad_revision(self, index: int, record: LineRecord, profile: BlockProfile) -> Optional[Revision]:
        border = record.suffix_border
        deficit = profile.suffix_column - border.column
        if deficit <= 0:
            return None

        # 水平線 (如 "+----+") 以前一個填充字元延伸，其餘用空白
        prefix = record.text.rstrip()[:-1]
        fill = " "
        if prefix and is_horizontal_fill(prefix[-1]) and not is_vertical_border(border.char):
            fill = prefix[-1]

        return PadBeforeSuffixBorder(
            line_index=index,
            column=border.column,
            text=fill * deficit,
            deficit=deficit,
            diagram_line=record.is_diagram,
            sanity_limit=self.sanity_limit,
        )

    def _add_revision(self, index: int, record: LineRecord, profile: BlockProfile) -> Optional[Revision]:
        leading = record.leading_border
        if leading is None or not is_vertical_border(leading.char):
            return None
        if profile.leading_column is not None and leading.column != profile.leading_column:
            return None
        if detect_suffix_border(record.text, profile.suffix_column) is not None:
            return None

        content = record.text.rstrip()
        content_width = visual_width(content)
        if content_width >= profile.suffix_column:
            return None

        insertion = " " * (profile.suffix_column - content_width) + profile.border_char
        return AddSuffixBorder(
            line_index=index,
            column=content_width,
            text=insertion,
            similarity=self._similarity(content + insertion, profile),
            width_ratio=content_width / profile.suffix_column,
        )

    @staticmethod
    def _similarity(repaired: str, profile: BlockProfile) -> float:
        if not profile.body_signatures:
            return 0.0
        signature = structure_signature(repaired)
        return max(Levenshtein.ratio(signature, other) for other in profile.body_signatures)

    def select(self, revisions: Sequence[Revision], min_score: float) -> Dict[int, Revision]:
        """
        篩選達到門檻的修訂

        同一行若有多個修訂，只保留分數最高者。
        """
        selected: Dict[int, Revision] = {}
        for revision in revisions:
            value = score(revision)
            if value < min_score:
                continue
            current = selected.get(revision.line_index)
            if current is None or value > score(current):
                selected[revision.line_index] = revision
        return selected
