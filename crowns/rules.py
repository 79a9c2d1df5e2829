"""
每局规则表

第 n 局: 手牌数 = n + 2，百搭点数 = 手牌数 (3..13，永不为王)
所有函数都是纯函数
"""
from dataclasses import dataclass

from .cards import Card, JOKER
from .errors import RoundOutOfRangeError

TOTAL_ROUNDS = 11


@dataclass(frozen=True)
class RoundRule:
    """
    单局规则

    Attributes:
        round: 局数 (1..11)
        hand_size: 手牌数 (3..13)
        wild_rank: 本局百搭点数 (3..13)
    """
    round: int
    hand_size: int
    wild_rank: int

    def to_dict(self) -> dict:
        return {"round": self.round, "hand_size": self.hand_size, "wild_rank": self.wild_rank}


def get_round_rule(round_number: int, total_rounds: int = TOTAL_ROUNDS) -> RoundRule:
    """
    获取指定局的规则

    Args:
        round_number: 局数
        total_rounds: 总局数 (不超过 11)

    Returns:
        RoundRule

    Raises:
        RoundOutOfRangeError: 局数越界
    """
    limit = min(total_rounds, TOTAL_ROUNDS)
    if round_number < 1 or round_number > limit:
        raise RoundOutOfRangeError(round_number, limit)
    hand_size = round_number + 2
    return RoundRule(round=round_number, hand_size=hand_size, wild_rank=hand_size)


def is_joker(card: Card) -> bool:
    return card.rank == JOKER


def is_wild(card: Card, rule: RoundRule) -> bool:
    """王或本局百搭点数的牌"""
    return card.rank == JOKER or card.rank == rule.wild_rank
