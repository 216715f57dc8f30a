"""
區塊偵測模組
"""

from .block_detector import BlockDetector, dominant_column, score_confidence

__all__ = [
    "BlockDetector",
    "dominant_column",
    "score_confidence",
]
