"""
游戏配置

定义牌组构成、局数与计分常量
"""
import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Tuple, Union

from .cards import Suit, SUITS, RANKS
from .errors import GameSetupError


@dataclass(frozen=True)
class GameConfig:
    """
    游戏配置 (与 Five Crowns 规则兼容)

    Attributes:
        suits: 常规花色 (有序)
        ranks: 非王点数 (有序)
        decks: 副数
        jokers_per_deck: 每副王的数量
        total_rounds: 总局数
        joker_penalty: 王的罚分
        wild_penalty: 本局百搭牌的罚分
        start_discard: 发牌后是否翻一张作为弃牌堆起始
        min_players: 最少玩家数
        allow_all_wild_melds: 是否允许全部由百搭组成的牌组
    """
    suits: Tuple[Suit, ...] = SUITS
    ranks: Tuple[int, ...] = RANKS
    decks: int = 2
    jokers_per_deck: int = 3

    total_rounds: int = 11

    # 计分
    joker_penalty: int = 50
    wild_penalty: int = 20

    start_discard: bool = True
    min_players: int = 2

    # 全百搭牌组 (house rule，默认允许)
    allow_all_wild_melds: bool = True

    def __post_init__(self):
        if self.decks < 1:
            raise GameSetupError(f"decks must be >= 1, got {self.decks}")
        if self.jokers_per_deck < 0:
            raise GameSetupError(f"jokers_per_deck must be >= 0, got {self.jokers_per_deck}")
        if not 1 <= self.total_rounds <= 11:
            raise GameSetupError(f"total_rounds must be in 1..11, got {self.total_rounds}")
        if Suit.NONE in self.suits:
            raise GameSetupError("Suit.NONE is reserved for jokers")
        if any(r < 3 or r > 13 for r in self.ranks):
            raise GameSetupError(f"ranks must be within 3..13, got {self.ranks}")

    @property
    def deck_size(self) -> int:
        """牌的总数"""
        per_deck = len(self.suits) * len(self.ranks) + self.jokers_per_deck
        return per_deck * self.decks

    @property
    def max_hand_size(self) -> int:
        return self.total_rounds + 2

    @property
    def max_players(self) -> int:
        """最后一局发完牌后至少还剩 1 张牌的最大玩家数"""
        return (self.deck_size - 1) // self.max_hand_size

    def to_dict(self) -> dict:
        d = asdict(self)
        d["suits"] = [s.value for s in self.suits]
        d["ranks"] = list(self.ranks)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> 'GameConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        if "suits" in filtered:
            filtered["suits"] = tuple(Suit(s) for s in filtered["suits"])
        if "ranks" in filtered:
            filtered["ranks"] = tuple(int(r) for r in filtered["ranks"])
        return cls(**filtered)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'GameConfig':
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


DEFAULT_CONFIG = GameConfig()
