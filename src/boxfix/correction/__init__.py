"""
Correction 模組

包含：
- 修訂引擎（RevisionEngine 與修訂種類）
- 區塊修正迴圈（CorrectionLoop）
- 文件修正器（DiagramCorrector）
"""

from .diagram_corrector import CorrectionResult, CorrectionStats, DiagramCorrector, correct
from .loop import BlockOutcome, CorrectionLoop, LoopState
from .revisions import (
    REVISION_KINDS,
    AddSuffixBorder,
    BlockProfile,
    PadBeforeSuffixBorder,
    Revision,
    RevisionEngine,
)

__all__ = [
    # Correctors
    "DiagramCorrector",
    "CorrectionResult",
    "CorrectionStats",
    "correct",
    # Loop
    "CorrectionLoop",
    "BlockOutcome",
    "LoopState",
    # Revisions
    "RevisionEngine",
    "BlockProfile",
    "Revision",
    "PadBeforeSuffixBorder",
    "AddSuffixBorder",
    "REVISION_KINDS",
]
