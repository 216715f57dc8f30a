"""
區塊偵測器 (Block Detector)

把整份文件的 LineRecord 切分為候選圖表區塊，並為每個區塊計算信心分數。

掃描規則:
- 區塊起點：DIAGRAM 行，或包含角落/交會點的行
- 區塊延伸：後續的 DIAGRAM 行；最多 gap_tolerance 行連續的非 DIAGRAM 行
  (空白、散文、程式碼) 只有在其後緊接 DIAGRAM 行時才會被橋接
- 區塊結尾不會包含間隙行

偵測只在修正開始前執行一次，修正過程中不會重新合併區塊。
"""

from collections import Counter
from typing import List, Sequence

from boxfix.core.chars import is_corner
from boxfix.core.models import Block, LineRecord
from boxfix.utils.logger import get_logger, log_timing

# 信心分數權重
DIAGRAM_RATIO_WEIGHT = 0.5
CORNER_PAIR_WEIGHT = 0.25
COLUMN_CONSISTENCY_WEIGHT = 0.25

DEFAULT_GAP_TOLERANCE = 1


def dominant_column(columns: Sequence[int]):
    """出現次數最多的欄位；平手時取最右側。沒有欄位時回傳 None"""
    if not columns:
        return None
    counts = Counter(columns)
    return max(counts, key=lambda column: (counts[column], column))


def _has_corner_pair(record: LineRecord) -> bool:
    stripped = record.text.strip()
    return len(stripped) > 1 and is_corner(stripped[0]) and is_corner(stripped[-1])


def _column_consistency(columns: Sequence[int]) -> float:
    if not columns:
        return 0.0
    if len(columns) == 1:
        return 0.5

    mean = sum(columns) / len(columns)
    variance = sum((column - mean) ** 2 for column in columns) / len(columns)
    scale = max(1, dominant_column(columns))
    return 1.0 / (1.0 + variance / scale)


def score_confidence(records: Sequence[LineRecord]) -> float:
    """
    區塊信心分數 (0.0 ~ 1.0)

    加權組合:
    - 非空白行中 DIAGRAM 行的比例
    - 是否有頭尾皆為角落的行 (例如 "+----+" 或 "┌──┐")
    - 行尾邊框欄位的一致性 (變異數越小越高)
    """
    non_blank = [record for record in records if not record.is_blank]
    if not non_blank:
        return 0.0

    diagram_ratio = sum(1 for record in non_blank if record.is_diagram) / len(non_blank)
    corner_pair = 1.0 if any(_has_corner_pair(record) for record in non_blank) else 0.0
    columns = [record.suffix_border.column for record in non_blank if record.suffix_border]

    score = (
        DIAGRAM_RATIO_WEIGHT * diagram_ratio
        + CORNER_PAIR_WEIGHT * corner_pair
        + COLUMN_CONSISTENCY_WEIGHT * _column_consistency(columns)
    )
    return min(1.0, max(0.0, score))


class BlockDetector:
    """
    圖表區塊偵測器

    用法:
        detector = BlockDetector(gap_tolerance=1)
        blocks = detector.detect(records, min_confidence=0.5)
    """

    def __init__(self, gap_tolerance: int = DEFAULT_GAP_TOLERANCE):
        self.gap_tolerance = gap_tolerance
        self._logger = get_logger("detection.block")

    @staticmethod
    def _starts_run(record: LineRecord) -> bool:
        return record.is_diagram or record.has_anchor

    def find_runs(self, records: Sequence[LineRecord]) -> List[tuple]:
        """回傳所有候選區段的 (start, end)，end 含在內"""
        runs = []
        index = 0
        total = len(records)

        while index < total:
            if not self._starts_run(records[index]):
                index += 1
                continue

            start = end = index
            cursor = index + 1
            while cursor < total:
                if records[cursor].is_diagram:
                    end = cursor
                    cursor += 1
                    continue

                gap_end = cursor
                while gap_end < total and not records[gap_end].is_diagram:
                    gap_end += 1
                gap = gap_end - cursor
                if gap <= self.gap_tolerance and gap_end < total:
                    cursor = gap_end
                    continue
                break

            runs.append((start, end))
            index = end + 1

        return runs

    @log_timing("BlockDetector.detect")
    def detect(self, records: Sequence[LineRecord], min_confidence: float = 0.0) -> List[Block]:
        """
        偵測圖表區塊

        Args:
            records: 整份文件的行分析結果
            min_confidence: 最低信心分數，低於此值的區塊會被丟棄

        Returns:
            List[Block]: 依文件順序排列的區塊
        """
        blocks = []
        for start, end in self.find_runs(records):
            run = tuple(records[start:end + 1])
            confidence = score_confidence(run)
            if confidence < min_confidence:
                self._logger.debug(
                    f"Dropped lines {start + 1}-{end + 1} (confidence: {confidence:.2f} < {min_confidence:.2f})"
                )
                continue
            blocks.append(Block(start=start, end=end, confidence=confidence, records=run))

        return blocks
