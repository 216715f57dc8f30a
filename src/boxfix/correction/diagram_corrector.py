"""
圖表修正器模組 (Diagram Corrector)

這是整個修正系統的主要入口點。
負責串接各階段，處理整份文件：

    原始文字 → tab 展開 → 行分析 → 區塊偵測 → 逐區塊修正迴圈 → 重組文件

使用方式:
    from boxfix import DiagramCorrector, CorrectionConfig

    corrector = DiagramCorrector(CorrectionConfig(min_score=0.5))
    result = corrector.correct_text(text)
    print(result.text)
    print(result.stats.revisions_applied)

重組規則:
- 沒有被任何修訂碰到的行，原樣輸出 (包含 tab 與行尾空白)
- 被修訂的行以 tab 展開後的形式輸出 (修訂的欄位是以展開後的文字計算)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from boxfix.analysis.line_analyzer import analyze_line
from boxfix.analysis.width import expand_tabs
from boxfix.config import DEFAULT_CONFIG, CorrectionConfig
from boxfix.core.events import CorrectionEvent
from boxfix.detection.block_detector import BlockDetector
from boxfix.utils.logger import TimingContext, get_logger

from .loop import BlockOutcome, CorrectionLoop, LoopState
from .revisions import RevisionEngine


@dataclass
class CorrectionStats:
    """修正統計，供呼叫端輸出 verbose 資訊"""

    blocks_found: int = 0
    blocks_modified: int = 0
    revisions_applied: int = 0
    revisions_dropped: int = 0
    iterations: int = 0
    blocks_at_limit: int = 0


@dataclass
class CorrectionResult:
    """修正結果：修正後的行、統計與每個區塊的結果"""

    lines: List[str]
    stats: CorrectionStats = field(default_factory=CorrectionStats)
    outcomes: Tuple[BlockOutcome, ...] = ()
    trailing_newline: bool = False

    @property
    def text(self) -> str:
        joined = "\n".join(self.lines)
        return joined + "\n" if self.trailing_newline else joined

    @property
    def changed(self) -> bool:
        return self.stats.revisions_applied > 0


class DiagramCorrector:
    """
    圖表修正器

    功能:
    - 展開 tab 後分析每一行
    - 偵測圖表區塊並以信心分數篩選
    - 對每個區塊執行有界的修正迴圈
    - 依原始文件順序重組結果

    區塊之間沒有共享的可變狀態，依文件順序逐一處理。
    """

    def __init__(self, config: Optional[CorrectionConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._logger = get_logger("corrector.diagram")
        self.detector = BlockDetector(gap_tolerance=self.config.gap_tolerance)
        self.engine = RevisionEngine()
        self.loop = CorrectionLoop(
            engine=self.engine,
            max_iterations=self.config.max_iterations,
            min_score=self.config.min_score,
            on_event=self.config.on_event,
        )

    def _log_timing(self, operation: str) -> TimingContext:
        return TimingContext(
            operation=operation,
            logger=self._logger,
            level=logging.DEBUG,
            callback=self.config.on_timing,
        )

    def _emit(self, event: CorrectionEvent) -> None:
        if self.config.on_event is None:
            return
        try:
            self.config.on_event(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")

    def correct_lines(self, lines: Sequence[str]) -> CorrectionResult:
        """
        修正一組行 (不含換行字元)

        Args:
            lines: 文件的所有行

        Returns:
            CorrectionResult: 修正後的行與統計
        """
        with self._log_timing("DiagramCorrector.correct_lines"):
            original = list(lines)
            stats = CorrectionStats()

            expanded = [expand_tabs(line, self.config.tab_width) for line in original]
            records = [analyze_line(line) for line in expanded]

            blocks = self.detector.detect(records, self.config.block_threshold)
            stats.blocks_found = len(blocks)
            self._logger.debug(f"Found {len(blocks)} diagram block(s)")

            output = list(original)
            outcomes = []
            for number, block in enumerate(blocks, start=1):
                self._logger.debug(
                    f"  Block {number}: lines {block.start + 1}-{block.end + 1} "
                    f"(confidence: {block.confidence * 100:.0f}%)"
                )
                self._emit(
                    {
                        "type": "block_detected",
                        "block_start": block.start,
                        "block_end": block.end,
                        "confidence": block.confidence,
                    }
                )

                outcome = self.loop.run(block)
                outcomes.append(outcome)

                for line_number in outcome.changed_lines:
                    output[line_number] = outcome.records[line_number - block.start].text

                stats.iterations += outcome.iterations
                stats.revisions_applied += outcome.revisions_applied
                stats.revisions_dropped += outcome.revisions_dropped
                if outcome.modified:
                    stats.blocks_modified += 1
                if outcome.state is LoopState.ITERATION_LIMIT_REACHED:
                    stats.blocks_at_limit += 1

            self._logger.debug(
                f"Processed {stats.blocks_found} block(s), {stats.revisions_applied} revision(s) applied"
            )
            return CorrectionResult(lines=output, stats=stats, outcomes=tuple(outcomes))

    def correct_text(self, text: str) -> CorrectionResult:
        """
        修正整份文字

        以 "\\n" 切行；保留結尾換行與 "\\r"。
        """
        trailing_newline = text.endswith("\n")
        body = text[:-1] if trailing_newline else text
        lines = body.split("\n") if body or trailing_newline else []

        result = self.correct_lines(lines)
        result.trailing_newline = trailing_newline
        return result


def correct(text: str, config: Optional[CorrectionConfig] = None) -> str:
    """便利函數：修正文字並回傳結果字串"""
    return DiagramCorrector(config).correct_text(text).text
