"""
字元角色分類 (Character Classifier)

把單一字元對應到框線結構中的角色：
- CORNER: 角落 (ASCII '+'、細/粗/雙線/圓角)
- HORIZONTAL_FILL: 水平填充 ('-'、'='、'~'、─ ━ ═ 與虛線)
- VERTICAL_BORDER: 垂直邊框 ('|'、│ ┃ ║ 與虛線)
- JUNCTION: T 型與十字交會 (├ ┤ ┬ ┴ ┼ ...)
- PLAIN: 其他所有字元

分類是全函數：未知字元、控制字元、emoji、空字串都歸為 PLAIN，不會拋出例外。
"""

from enum import Enum


class CharRole(Enum):
    CORNER = "corner"
    HORIZONTAL_FILL = "horizontal_fill"
    VERTICAL_BORDER = "vertical_border"
    JUNCTION = "junction"
    PLAIN = "plain"


# =============================================================================
# 角色集合 (唯讀)
# =============================================================================

CORNERS = frozenset(
    "+"
    "┌┐└┘"  # 細線
    "┏┓┗┛"  # 粗線
    "╔╗╚╝"  # 雙線
    "╒╓╕╖╘╙╛╜"  # 單雙混合
    "╭╮╯╰"  # 圓角
)

HORIZONTAL_FILLS = frozenset("-~=─━═╌╍┄┅┈┉")

VERTICAL_BORDERS = frozenset("|│┃║╎╏┆┇┊┋")

JUNCTIONS = frozenset(
    "┬┴├┤┼"
    "┳┻┣┫╋"
    "╦╩╠╣╬"
    "╤╧╟╢╫╪"
)

_ROLE_TABLE = {
    **{ch: CharRole.CORNER for ch in CORNERS},
    **{ch: CharRole.HORIZONTAL_FILL for ch in HORIZONTAL_FILLS},
    **{ch: CharRole.VERTICAL_BORDER for ch in VERTICAL_BORDERS},
    **{ch: CharRole.JUNCTION for ch in JUNCTIONS},
}

# 角色對應的單字母代碼，用於結構簽名 (structure signature)
ROLE_CODES = {
    CharRole.CORNER: "C",
    CharRole.HORIZONTAL_FILL: "H",
    CharRole.VERTICAL_BORDER: "V",
    CharRole.JUNCTION: "J",
    CharRole.PLAIN: "P",
}


def classify(char: str) -> CharRole:
    """回傳字元的結構角色，O(1) 查表"""
    return _ROLE_TABLE.get(char, CharRole.PLAIN)


def is_corner(char: str) -> bool:
    return classify(char) is CharRole.CORNER


def is_horizontal_fill(char: str) -> bool:
    return classify(char) is CharRole.HORIZONTAL_FILL


def is_vertical_border(char: str) -> bool:
    return classify(char) is CharRole.VERTICAL_BORDER


def is_junction(char: str) -> bool:
    return classify(char) is CharRole.JUNCTION


def is_box_char(char: str) -> bool:
    """任何非 PLAIN 的角色"""
    return classify(char) is not CharRole.PLAIN


def is_closing_char(char: str) -> bool:
    """可作為一行右側結尾的字元：垂直邊框、角落或交會點"""
    return classify(char) in (CharRole.VERTICAL_BORDER, CharRole.CORNER, CharRole.JUNCTION)
