"""
动作类型定义与动作结果

调用方 (CLI、服务、界面) 构造 Action 交给 GameState.apply，
得到 ActionResult: 成功时携带新状态，失败时携带原状态与原因
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState


class ActionType(Enum):
    """动作类型"""
    DRAW_FROM_DECK = "draw_from_deck"        # 从摸牌堆摸牌
    DRAW_FROM_DISCARD = "draw_from_discard"  # 取弃牌堆顶
    SUBMIT_MELD = "submit_meld"              # 亮出新牌组
    LAY_OFF = "lay_off"                      # 向已有牌组追加
    DISCARD = "discard"                      # 弃牌 (结束回合)
    SORT_HAND = "sort_hand"                  # 整理手牌
    NEXT_ROUND = "next_round"                # 进入下一局


class SortKey(Enum):
    """手牌排序方式"""
    RANK = "rank"  # 点数 -> 花色
    SUIT = "suit"  # 花色 -> 点数


@dataclass(frozen=True, slots=True)
class Action:
    """
    不可变动作表示

    Attributes:
        action_type: 动作类型
        card_ids: 选中的牌 id
        meld_id: 追加目标牌组 (仅 LAY_OFF)
        sort_key: 排序方式 (仅 SORT_HAND)
    """
    action_type: ActionType
    card_ids: Tuple[str, ...] = ()
    meld_id: Optional[str] = None
    sort_key: SortKey = SortKey.RANK

    @classmethod
    def draw_from_deck(cls) -> 'Action':
        return cls(ActionType.DRAW_FROM_DECK)

    @classmethod
    def draw_from_discard(cls) -> 'Action':
        return cls(ActionType.DRAW_FROM_DISCARD)

    @classmethod
    def submit_meld(cls, card_ids: Sequence[str]) -> 'Action':
        return cls(ActionType.SUBMIT_MELD, card_ids=tuple(card_ids))

    @classmethod
    def lay_off(cls, meld_id: str, card_ids: Sequence[str]) -> 'Action':
        return cls(ActionType.LAY_OFF, card_ids=tuple(card_ids), meld_id=meld_id)

    @classmethod
    def discard(cls, card_id: str) -> 'Action':
        return cls(ActionType.DISCARD, card_ids=(card_id,))

    @classmethod
    def sort_hand(cls, sort_key: SortKey = SortKey.RANK) -> 'Action':
        return cls(ActionType.SORT_HAND, sort_key=sort_key)

    @classmethod
    def next_round(cls) -> 'Action':
        return cls(ActionType.NEXT_ROUND)


@dataclass(frozen=True)
class ActionResult:
    """
    动作结果

    Attributes:
        ok: 是否成功
        state: 成功时为新状态，失败时为原状态
        reason: 失败原因 (可直接展示给玩家)
    """
    ok: bool
    state: 'GameState'
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, state: 'GameState') -> 'ActionResult':
        return cls(ok=True, state=state)

    @classmethod
    def rejected(cls, state: 'GameState', reason: str) -> 'ActionResult':
        return cls(ok=False, state=state, reason=reason)

    def __bool__(self) -> bool:
        return self.ok
