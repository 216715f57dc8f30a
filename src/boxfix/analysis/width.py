"""
視覺寬度計算

所有對齊運算都以視覺寬度 (終端機顯示欄數) 為單位，而非字元數或位元組數：
- 0: 組合字元、格式字元 (含 ZWJ / ZWSP)
- 2: East Asian Wide / Fullwidth、常見 emoji 區段
- 1: 其他 (含未知字元)
"""

import unicodedata
from functools import lru_cache

# 常見 emoji 區段 (部分字元的 east_asian_width 不是 W)
_EMOJI_RANGES = (
    (0x1F000, 0x1F02F),  # Mahjong
    (0x1F0A0, 0x1F0FF),  # Playing cards
    (0x1F300, 0x1F5FF),  # Misc symbols and pictographs
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F680, 0x1F6FF),  # Transport and map
    (0x1F900, 0x1F9FF),  # Supplemental symbols and pictographs
    (0x1FA70, 0x1FAFF),  # Symbols and pictographs extended-A
)

_ZERO_WIDTH = frozenset("\u200b\u200c\u200d\u2060\ufeff")


@lru_cache(maxsize=4096)
def char_width(char: str) -> int:
    """單一字元的視覺寬度 (0 / 1 / 2)"""
    if len(char) != 1:
        return 1
    if char in _ZERO_WIDTH:
        return 0
    if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2

    code = ord(char)
    for low, high in _EMOJI_RANGES:
        if low <= code <= high:
            return 2
    return 1


def visual_width(text: str) -> int:
    """字串的視覺寬度 (各字元寬度總和)"""
    return sum(char_width(ch) for ch in text)


def expand_tabs(line: str, tab_width: int = 4) -> str:
    """
    展開 tab

    每個 tab 以空白補到下一個 tab_width 倍數的視覺欄位。
    欄位以視覺寬度計算，所以 tab 前的全形字元也會正確對齊。
    """
    if "\t" not in line:
        return line

    parts = []
    column = 0
    for ch in line:
        if ch == "\t":
            spaces = tab_width - (column % tab_width)
            parts.append(" " * spaces)
            column += spaces
        else:
            parts.append(ch)
            column += char_width(ch)
    return "".join(parts)


def column_index(text: str, column: int) -> int:
    """
    將視覺欄位轉換為字串索引

    回傳最後一個「前綴寬度剛好等於 column」的索引，
    因此零寬字元會留在插入點左側。找不到對應邊界 (超出行尾，
    或落在寬字元中間) 時回傳 -1。
    """
    if column < 0:
        return -1

    found = -1
    current = 0
    if current == column:
        found = 0
    for index, ch in enumerate(text, start=1):
        current += char_width(ch)
        if current == column:
            found = index
        elif current > column:
            break
    return found
