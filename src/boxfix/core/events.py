"""
事件模型（Event Model）

核心預設不直接輸出到 stdout。
若需要取得「本次套用了哪些修訂」等資訊，請使用事件回呼（event handler）。

設計原則：
- 回呼失敗只記錄日誌，不中斷修正流程
- 事件內容只含基本型別，方便直接序列化成 JSON
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class CorrectionEvent(TypedDict, total=False):
    type: Literal[
        "block_detected",
        "revision_applied",
        "revision_dropped",
        "converged",
        "iteration_limit",
    ]

    # block
    block_start: int
    block_end: int
    confidence: float

    # revision
    revision: str
    line: int
    column: int
    text: str
    score: float
    reason: str

    # loop
    iterations: int
    revisions_applied: int


CorrectionEventHandler = Callable[[CorrectionEvent], None]
