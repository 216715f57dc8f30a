"""
修正迴圈 (Correction Loop)

對單一區塊反覆執行「分析 → 產生修訂 → 套用」，直到收斂或達到迭代上限。

狀態機:
    SCANNING → REVISING → SCANNING → ... → CONVERGED
                                         └→ ITERATION_LIMIT_REACHED

- SCANNING: 重新分析區塊內所有行；沒有修訂達到門檻 → CONVERGED
- 已完成 max_iterations 輪 → ITERATION_LIMIT_REACHED (保留部分修正結果，不是錯誤)
- REVISING: 套用所有達到門檻的修訂 (每行最多一個)，計數加一後回到 SCANNING
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from boxfix.analysis.line_analyzer import analyze_line
from boxfix.core.events import CorrectionEvent, CorrectionEventHandler
from boxfix.core.models import Block, LineRecord
from boxfix.exceptions import RevisionOutOfRange
from boxfix.utils.logger import get_logger

from .revisions import RevisionEngine, score


class LoopState(Enum):
    SCANNING = "scanning"
    REVISING = "revising"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration_limit_reached"


@dataclass(frozen=True)
class BlockOutcome:
    """單一區塊的修正結果"""

    block: Block
    records: Tuple[LineRecord, ...]
    state: LoopState
    iterations: int = 0
    revisions_applied: int = 0
    revisions_dropped: int = 0
    changed_lines: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def converged(self) -> bool:
        return self.state is LoopState.CONVERGED

    @property
    def modified(self) -> bool:
        return self.revisions_applied > 0


class CorrectionLoop:
    """
    有界的定點迭代

    Args:
        engine: 修訂引擎
        max_iterations: 最多執行幾輪 REVISING
        min_score: 修訂分數門檻
        on_event: 事件回呼
    """

    def __init__(
        self,
        engine: Optional[RevisionEngine] = None,
        max_iterations: int = 10,
        min_score: float = 0.5,
        on_event: Optional[CorrectionEventHandler] = None,
    ):
        self.engine = engine or RevisionEngine()
        self.max_iterations = max_iterations
        self.min_score = min_score
        self._on_event = on_event
        self._logger = get_logger("correction.loop")

    def _emit(self, event: CorrectionEvent) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")

    def run(self, block: Block) -> BlockOutcome:
        records = [analyze_line(record.text) for record in block.records]
        iterations = 0
        applied = 0
        dropped = 0
        changed = set()
        state = LoopState.SCANNING

        while True:
            # SCANNING
            selected = self.engine.select(self.engine.propose(records), self.min_score)
            if not selected:
                state = LoopState.CONVERGED
                break
            if iterations >= self.max_iterations:
                state = LoopState.ITERATION_LIMIT_REACHED
                break

            # REVISING
            state = LoopState.REVISING
            pass_applied = 0
            for index in sorted(selected):
                revision = selected[index]
                try:
                    records[index] = revision.apply(records[index])
                except RevisionOutOfRange as exc:
                    dropped += 1
                    self._logger.debug(f"  Dropped {revision.kind} on line {block.start + index + 1}: {exc}")
                    self._emit(
                        {
                            "type": "revision_dropped",
                            "revision": revision.kind,
                            "line": block.start + index,
                            "column": revision.column,
                            "reason": str(exc),
                        }
                    )
                    continue

                pass_applied += 1
                changed.add(block.start + index)
                self._emit(
                    {
                        "type": "revision_applied",
                        "revision": revision.kind,
                        "line": block.start + index,
                        "column": revision.column,
                        "text": revision.text,
                        "score": score(revision),
                    }
                )

            iterations += 1
            applied += pass_applied
            self._logger.debug(f"    Iteration {iterations}: applied {pass_applied} revision(s)")

        if state is LoopState.CONVERGED:
            if iterations:
                self._logger.debug(f"    Converged after {iterations} iteration(s)")
            self._emit({"type": "converged", "iterations": iterations, "revisions_applied": applied})
        else:
            self._logger.debug(f"    Iteration limit reached ({self.max_iterations})")
            self._emit({"type": "iteration_limit", "iterations": iterations, "revisions_applied": applied})

        return BlockOutcome(
            block=block,
            records=tuple(records),
            state=state,
            iterations=iterations,
            revisions_applied=applied,
            revisions_dropped=dropped,
            changed_lines=frozenset(changed),
        )
