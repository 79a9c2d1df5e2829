"""
异常定义

只用于调用方错误 (程序错误/环境错误)。
规则违例不抛异常，而是返回 ValidationResult / ActionResult。
"""


class CrownsError(Exception):
    """所有引擎异常的基类"""
    pass


class RoundOutOfRangeError(CrownsError, ValueError):
    """请求的局数不在 [1, total_rounds] 内"""

    def __init__(self, round_number: int, total_rounds: int):
        self.round_number = round_number
        self.total_rounds = total_rounds
        super().__init__(f"Invalid round: {round_number} (expected 1..{total_rounds})")


class EmptyPileError(CrownsError, ValueError):
    """从空牌堆取牌"""

    def __init__(self, pile: str):
        self.pile = pile
        super().__init__(f"{pile} pile empty")


class GameSetupError(CrownsError, ValueError):
    """非法的开局参数或配置"""
    pass
