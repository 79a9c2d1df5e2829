"""
牌的定义与编码

Five Crowns 使用两副牌，共 116 张：
- 5 种花色 (星、红心、梅花、黑桃、方块) × 3-K 共 11 种点数 × 2 副
- 每副 3 张王 (Joker)，花色为 NONE 占位
"""
from enum import Enum
from dataclasses import dataclass
from typing import List, Dict, Iterable, Optional
from itertools import count

import numpy as np


class Suit(Enum):
    """花色定义 (枚举顺序即排序/编码顺序)"""
    STARS = "STARS"
    HEARTS = "HEARTS"
    CLUBS = "CLUBS"
    SPADES = "SPADES"
    DIAMONDS = "DIAMONDS"
    NONE = "NONE"  # 仅用于王


# 常规花色 (不含 NONE)
SUITS = (Suit.STARS, Suit.HEARTS, Suit.CLUBS, Suit.SPADES, Suit.DIAMONDS)

# 点数: 0 为王，3..13 为面值 (11/12/13 = J/Q/K)
JOKER = 0
JACK = 11
QUEEN = 12
KING = 13
RANKS = (3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13)

# 点数到显示字符的映射
RANK_TO_STR: Dict[int, str] = {
    3: '3', 4: '4', 5: '5', 6: '6', 7: '7',
    8: '8', 9: '9', 10: '10', 11: 'J', 12: 'Q', 13: 'K',
}

STR_TO_RANK: Dict[str, int] = {v: k for k, v in RANK_TO_STR.items()}

# 花色到显示字符的映射
SUIT_TO_STR: Dict[Suit, str] = {
    Suit.STARS: '*',
    Suit.HEARTS: 'H',
    Suit.CLUBS: 'C',
    Suit.SPADES: 'S',
    Suit.DIAMONDS: 'D',
}

STR_TO_SUIT: Dict[str, Suit] = {v: k for k, v in SUIT_TO_STR.items()}

JOKER_STR = 'JK'

# 编码矩阵的行 (花色，含 NONE) 与列 (点数 0..13)
SUIT_ROW: Dict[Suit, int] = {suit: i for i, suit in enumerate(Suit)}
NUM_RANK_COLUMNS = KING + 1

_parsed_ids = count(1)


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变的牌

    Attributes:
        id: 唯一标识 (身份由 id 决定)
        suit: 花色
        rank: 点数 (0 = 王)
        deck_index: 来自第几副牌 (从 1 开始)
    """
    id: str
    suit: Suit
    rank: int
    deck_index: int = 1

    @property
    def is_joker(self) -> bool:
        return self.rank == JOKER

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "suit": self.suit.value,
            "rank": self.rank,
            "deck_index": self.deck_index,
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Card':
        return cls(
            id=d["id"],
            suit=Suit(d["suit"]),
            rank=int(d["rank"]),
            deck_index=int(d.get("deck_index", 1)),
        )

    def __str__(self) -> str:
        return card_to_str(self)


def rank_label(rank: int) -> str:
    """点数的显示名称"""
    if rank == JOKER:
        return "JOKER"
    return RANK_TO_STR.get(rank, '?')


def card_to_str(card: Card) -> str:
    """单张牌转字符串，如 "H5"、"SK"、"JK" """
    if card.is_joker:
        return JOKER_STR
    return SUIT_TO_STR.get(card.suit, '?') + RANK_TO_STR.get(card.rank, '?')


def cards_to_str(cards: Iterable[Card]) -> str:
    """
    将牌列表转换为可读字符串 (保持原顺序)

    Returns:
        如 "H5 H6 JK"
    """
    return ' '.join(card_to_str(c) for c in cards)


def parse_card(text: str, card_id: Optional[str] = None, deck_index: int = 1) -> Card:
    """
    将字符串解析为牌

    Args:
        text: 如 "H5"、"*10"、"SK"、"JK"
        card_id: 指定 id；为空时自动生成唯一 id
        deck_index: 所属副数

    Returns:
        Card
    """
    text = text.strip().upper()
    if text == JOKER_STR:
        suit, rank = Suit.NONE, JOKER
    else:
        if len(text) < 2 or text[0] not in STR_TO_SUIT or text[1:] not in STR_TO_RANK:
            raise ValueError(f"Cannot parse card: {text!r}")
        suit, rank = STR_TO_SUIT[text[0]], STR_TO_RANK[text[1:]]
    if card_id is None:
        card_id = f"X-{text}-{next(_parsed_ids)}"
    return Card(id=card_id, suit=suit, rank=rank, deck_index=deck_index)


def parse_cards(text: str) -> List[Card]:
    """解析空格分隔的多张牌"""
    return [parse_card(t) for t in text.split()]


def sort_by_rank(cards: Iterable[Card]) -> List[Card]:
    """按点数、再按花色排序"""
    return sorted(cards, key=lambda c: (c.rank, SUIT_ROW[c.suit]))


def sort_by_suit(cards: Iterable[Card]) -> List[Card]:
    """按花色、再按点数排序"""
    return sorted(cards, key=lambda c: (SUIT_ROW[c.suit], c.rank))


def cards_to_array(cards: Iterable[Card]) -> np.ndarray:
    """
    将牌列表转换为 花色 × 点数 的计数矩阵

    编码方式:
    - 行: Suit 枚举顺序 (最后一行为 NONE，即王)
    - 列: 点数 0..13 (列 0 为王，1、2 恒为 0)

    Args:
        cards: 牌列表

    Returns:
        (6, 14) int64 numpy 数组
    """
    matrix = np.zeros((len(SUIT_ROW), NUM_RANK_COLUMNS), dtype=np.int64)
    for card in cards:
        matrix[SUIT_ROW[card.suit], card.rank] += 1
    return matrix
