"""
行分析器 (Line Analyzer)

把單行文字轉換為 LineRecord：
1. 行分類 (classify_line)：BLANK / DIAGRAM / CODE / PROSE
2. 視覺寬度與縮排
3. 行首/行尾邊框與所有垂直邊框欄位

分析是純函數，每一輪修正都重新分析，不做增量快取。
"""

import re
from typing import Optional

from boxfix.core.chars import (
    ROLE_CODES,
    classify,
    is_box_char,
    is_closing_char,
    is_corner,
    is_junction,
    is_vertical_border,
)
from boxfix.core.models import BorderMark, LineKind, LineRecord

from .width import char_width, visual_width

# detect_suffix_border 的預設容許誤差 (欄)
SUFFIX_TOLERANCE = 2

# =============================================================================
# 程式碼判斷
# =============================================================================

_CODE_PATTERNS = (
    re.compile(
        r"^\s*(def|class|fn|func|function|let|const|var|return|import|from|"
        r"if|elif|else|for|while|switch|case|public|private|static|struct|enum|impl|use)\b"
    ),
    re.compile(r"^\s*(#include|#define|//|/\*|\*/|@\w+)"),
    re.compile(r"[;{}]\s*$"),
    re.compile(r"\w+\([^)]*\)"),
    re.compile(r"(==|!=|<=|>=|=>|->|::|&&|\|\||\+=|-=)"),
)

_PROSE_WORD = re.compile(r"^[A-Za-z][a-z]{2,}[,.;:!?]?$")


def _looks_like_code(stripped: str) -> bool:
    hits = sum(1 for pattern in _CODE_PATTERNS if pattern.search(stripped))
    if hits == 0:
        return False

    words = stripped.split()
    prose_words = sum(1 for word in words if _PROSE_WORD.match(word))
    # 句子型的行 (多個一般單字) 即使出現括號也視為散文
    if prose_words >= 4 and prose_words * 2 >= len(words):
        return False

    non_space = [ch for ch in stripped if not ch.isspace()]
    symbols = sum(1 for ch in non_space if not ch.isalnum())
    return hits >= 2 or symbols * 10 >= len(non_space)


def classify_line(text: str) -> LineKind:
    """
    行分類決策樹

    1. 只有空白 → BLANK
    2. 以垂直邊框開頭、頭尾都是結尾字元、或框線字元佔非空白字元過半 → DIAGRAM
    3. 符合程式碼樣式且沒有散文單字 → CODE
    4. 其他 → PROSE (平手時偏向 PROSE，避免誤判為圖表)
    """
    stripped = text.strip()
    if not stripped:
        return LineKind.BLANK

    non_space = [ch for ch in stripped if not ch.isspace()]
    box_chars = sum(1 for ch in non_space if is_box_char(ch))

    first, last = stripped[0], stripped[-1]
    if is_vertical_border(first):
        return LineKind.DIAGRAM
    if len(stripped) > 1 and is_closing_char(first) and is_closing_char(last):
        return LineKind.DIAGRAM
    if box_chars * 2 > len(non_space):
        return LineKind.DIAGRAM

    if _looks_like_code(stripped):
        return LineKind.CODE
    return LineKind.PROSE


def _leading_border(text: str) -> Optional[BorderMark]:
    column = 0
    for ch in text:
        if ch.isspace():
            column += char_width(ch)
            continue
        if is_closing_char(ch):
            return BorderMark(column, ch)
        return None
    return None


def _suffix_border(text: str) -> Optional[BorderMark]:
    trimmed = text.rstrip()
    if not trimmed:
        return None
    last = trimmed[-1]
    if not is_closing_char(last):
        return None
    return BorderMark(visual_width(trimmed) - char_width(last), last)


def detect_suffix_border(text: str, expected_column: int, tolerance: int = SUFFIX_TOLERANCE) -> Optional[int]:
    """
    從行的視覺尾端往回掃描垂直邊框字元

    Args:
        text: 行內容
        expected_column: 預期的邊框欄位 (區塊的目標邊框欄位)
        tolerance: 容許誤差

    Returns:
        落在 expected_column ± tolerance 內的邊框欄位，找不到則為 None
    """
    column = visual_width(text)
    for ch in reversed(text):
        column -= char_width(ch)
        if column < expected_column - tolerance:
            break
        if is_vertical_border(ch) and abs(column - expected_column) <= tolerance:
            return column
    return None


def structure_signature(text: str) -> str:
    """
    行的結構簽名

    每個字元轉為角色代碼 (空白為 'S')，連續相同代碼合併，並去掉頭尾空白。
    例如 "| hi    |" → "VSPSV"。
    """
    codes = []
    for ch in text.strip():
        code = "S" if ch.isspace() else ROLE_CODES[classify(ch)]
        if not codes or codes[-1] != code:
            codes.append(code)
    return "".join(codes)


def analyze_line(text: str) -> LineRecord:
    """分析單行，產生不可變的 LineRecord"""
    kind = classify_line(text)
    indent = visual_width(text) - visual_width(text.lstrip())

    border_columns = set()
    has_anchor = False
    column = 0
    for ch in text:
        if is_vertical_border(ch):
            border_columns.add(column)
        elif is_corner(ch) or is_junction(ch):
            has_anchor = True
        column += char_width(ch)

    return LineRecord(
        text=text,
        kind=kind,
        width=column,
        indent=indent,
        suffix_border=_suffix_border(text),
        leading_border=_leading_border(text),
        border_columns=frozenset(border_columns),
        has_anchor=has_anchor,
    )
