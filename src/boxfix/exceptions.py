"""
例外定義

核心只有兩種例外來源：
- ConfigError: 配置值不合法 (建立 CorrectionConfig 時檢查)
- RevisionOutOfRange: 內部防禦性條件，CorrectionLoop 一律攔截並丟棄該修訂

「達到迭代上限」不是錯誤，而是 CorrectionLoop 的終止狀態。
"""


class BoxfixError(Exception):
    """boxfix 所有例外的基底類別"""


class ConfigError(BoxfixError, ValueError):
    """配置值不合法"""


class RevisionOutOfRange(BoxfixError):
    """
    修訂的插入位置已不存在於目標行

    單調插入的不變式下不應發生，但 apply() 仍必須防禦。
    """

    def __init__(self, column: int, width: int, text: str = ""):
        self.column = column
        self.width = width
        self.text = text
        super().__init__(f"insertion column {column} is out of range for line of width {width}")
