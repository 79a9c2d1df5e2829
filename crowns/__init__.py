"""
Crowns - Five Crowns 风格回合制纸牌游戏规则引擎 (纯游戏逻辑)

Modules:
    cards: 牌定义与编码
    config: 游戏配置
    rules: 每局规则表
    deck: 牌组、洗牌与牌堆操作
    validator: 牌组合法性验证
    scoring: 计分
    actions: 动作类型与结果
    state: 游戏状态与回合状态机
"""
from .cards import (
    Suit,
    Card,
    SUITS,
    RANKS,
    JOKER,
    card_to_str,
    cards_to_str,
    cards_to_array,
    parse_card,
    parse_cards,
    rank_label,
    sort_by_rank,
    sort_by_suit,
)

from .config import GameConfig, DEFAULT_CONFIG

from .errors import (
    CrownsError,
    RoundOutOfRangeError,
    EmptyPileError,
    GameSetupError,
)

from .rules import RoundRule, TOTAL_ROUNDS, get_round_rule, is_joker, is_wild

from .deck import (
    Rng,
    Mulberry32,
    mulberry32,
    shuffle,
    create_deck,
    deal,
    DealResult,
    draw_one,
    take_discard_top,
    discard_one,
    recycle_discard_into_draw,
)

from .validator import (
    MeldType,
    ValidationResult,
    MeldValidator,
    validate_meld,
    validate_layoff,
)

from .scoring import (
    RoundScore,
    score_hand,
    round_scores,
    add_round_score,
    determine_winners,
    rankings,
)

from .actions import ActionType, SortKey, Action, ActionResult

from .state import (
    TurnPhase,
    Status,
    Player,
    Meld,
    GameState,
    new_game,
    end_round,
    next_round,
)

__all__ = [
    # cards
    "Suit",
    "Card",
    "SUITS",
    "RANKS",
    "JOKER",
    "card_to_str",
    "cards_to_str",
    "cards_to_array",
    "parse_card",
    "parse_cards",
    "rank_label",
    "sort_by_rank",
    "sort_by_suit",
    # config
    "GameConfig",
    "DEFAULT_CONFIG",
    # errors
    "CrownsError",
    "RoundOutOfRangeError",
    "EmptyPileError",
    "GameSetupError",
    # rules
    "RoundRule",
    "TOTAL_ROUNDS",
    "get_round_rule",
    "is_joker",
    "is_wild",
    # deck
    "Rng",
    "Mulberry32",
    "mulberry32",
    "shuffle",
    "create_deck",
    "deal",
    "DealResult",
    "draw_one",
    "take_discard_top",
    "discard_one",
    "recycle_discard_into_draw",
    # validator
    "MeldType",
    "ValidationResult",
    "MeldValidator",
    "validate_meld",
    "validate_layoff",
    # scoring
    "RoundScore",
    "score_hand",
    "round_scores",
    "add_round_score",
    "determine_winners",
    "rankings",
    # actions
    "ActionType",
    "SortKey",
    "Action",
    "ActionResult",
    # state
    "TurnPhase",
    "Status",
    "Player",
    "Meld",
    "GameState",
    "new_game",
    "end_round",
    "next_round",
]
