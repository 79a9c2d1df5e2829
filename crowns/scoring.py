"""
计分

每局结束时按剩余手牌计罚分 (越低越好)：
- 王: 50
- 本局百搭点数: 20
- 其余: 面值 (J/Q/K = 11/12/13)
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .cards import Card, JOKER
from .config import GameConfig, DEFAULT_CONFIG
from .rules import RoundRule

if TYPE_CHECKING:
    from .state import Player


@dataclass(frozen=True)
class RoundScore:
    """单个玩家的单局得分"""
    player_id: str
    points: int
    went_out: bool


def score_hand(
    hand: Iterable[Card],
    rule: RoundRule,
    config: GameConfig = DEFAULT_CONFIG,
) -> int:
    """
    计算手牌罚分

    Args:
        hand: 剩余手牌
        rule: 本局规则
        config: 罚分常量

    Returns:
        罚分总和
    """
    total = 0
    for card in hand:
        if card.rank == JOKER:
            total += config.joker_penalty
        elif card.rank == rule.wild_rank:
            total += config.wild_penalty
        else:
            total += card.rank
    return total


def round_scores(
    players: Sequence['Player'],
    rule: RoundRule,
    out_player_id: Optional[str] = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> List[RoundScore]:
    """
    计算本局所有玩家得分

    Args:
        players: 玩家列表
        rule: 本局规则
        out_player_id: 率先出完牌的玩家

    Returns:
        各玩家 RoundScore (按座位顺序)
    """
    return [
        RoundScore(
            player_id=p.id,
            points=score_hand(p.hand, rule, config),
            went_out=p.id == out_player_id,
        )
        for p in players
    ]


def add_round_score(player: 'Player', points: int) -> 'Player':
    """
    记录一局得分

    Args:
        player: 玩家
        points: 本局罚分

    Returns:
        新的 Player (round_points 追加一项，score 为其总和)
    """
    round_points = player.round_points + (points,)
    return replace(player, round_points=round_points, score=sum(round_points))


def determine_winners(players: Sequence['Player']) -> Tuple[str, ...]:
    """
    累计分最低者获胜，平局时全部返回 (按座位顺序)
    """
    if not players:
        return ()
    best = min(p.score for p in players)
    return tuple(p.id for p in players if p.score == best)


def rankings(players: Sequence['Player']) -> List['Player']:
    """按累计分升序排列 (同分保持座位顺序)"""
    return sorted(players, key=lambda p: p.score)
