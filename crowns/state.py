"""
游戏状态定义与回合状态机

使用不可变数据结构，支持:
- 每个动作都是 (state, input) -> ActionResult 的纯函数
- 规则违例返回 ActionResult(ok=False)，状态不变
- 给定种子完全可复现 (Mulberry32 状态保存在 GameState 中)
- 易于序列化 (to_dict / from_dict)
"""
from dataclasses import dataclass, field, replace
from typing import Dict, Tuple, Optional, List, Sequence, Union
from enum import Enum
from itertools import chain
import logging
import random

import numpy as np

from .cards import Card, cards_to_array, sort_by_rank, sort_by_suit
from .config import GameConfig, DEFAULT_CONFIG
from .deck import (
    Rng,
    Mulberry32,
    MASK32,
    create_deck,
    shuffle,
    deal,
    draw_one,
    take_discard_top,
    discard_one,
    recycle_discard_into_draw,
)
from .errors import GameSetupError
from .rules import RoundRule, get_round_rule
from .scoring import RoundScore, round_scores, add_round_score, determine_winners
from .validator import MeldType, MeldValidator, ValidationResult
from .actions import Action, ActionType, ActionResult, SortKey

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """回合阶段"""
    NEED_DRAW = "NEED_DRAW"        # 等待摸牌
    NEED_DISCARD = "NEED_DISCARD"  # 已摸牌，可亮牌/追加，必须弃牌


class Status(Enum):
    """生命周期状态"""
    PLAYING = "PLAYING"      # 本局进行中
    ROUND_END = "ROUND_END"  # 本局已计分，等待下一局
    GAME_OVER = "GAME_OVER"  # 游戏结束


DEFAULT_PLAYER_NAMES = ("Player 1", "Player 2")


@dataclass(frozen=True)
class Player:
    """
    玩家

    Attributes:
        id: 玩家 id (P1..Pn)
        name: 显示名
        hand: 手牌 (顺序仅用于展示)
        score: 累计罚分
        round_points: 已结束各局的罚分 (按局顺序)
    """
    id: str
    name: str
    hand: Tuple[Card, ...] = ()
    score: int = 0
    round_points: Tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hand": [c.to_dict() for c in self.hand],
            "score": self.score,
            "round_points": list(self.round_points),
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Player':
        return cls(
            id=d["id"],
            name=d["name"],
            hand=tuple(Card.from_dict(c) for c in d["hand"]),
            score=int(d["score"]),
            round_points=tuple(int(p) for p in d.get("round_points", [])),
        )


@dataclass(frozen=True)
class Meld:
    """
    桌面上的公开牌组，只能通过追加 (lay off) 增长

    Attributes:
        id: 牌组 id
        owner_id: 亮出该牌组的玩家
        meld_type: BOOK 或 RUN
        cards: 牌 (至少 3 张)
        round: 所在局数
    """
    id: str
    owner_id: str
    meld_type: MeldType
    cards: Tuple[Card, ...]
    round: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "meld_type": self.meld_type.value,
            "cards": [c.to_dict() for c in self.cards],
            "round": self.round,
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Meld':
        return cls(
            id=d["id"],
            owner_id=d["owner_id"],
            meld_type=MeldType(d["meld_type"]),
            cards=tuple(Card.from_dict(c) for c in d["cards"]),
            round=int(d["round"]),
        )


@dataclass(frozen=True)
class GameState:
    """
    不可变游戏状态 (聚合根)

    Attributes:
        round: 当前局数
        players: 玩家 (座位顺序)
        current_player_index: 当前行动玩家下标
        draw_pile: 摸牌堆 (index 0 为顶)
        discard_pile: 弃牌堆 (最后一张为顶)
        melds: 桌面牌组
        turn_phase: 回合阶段
        status: 生命周期状态
        out_triggered_by_player_id: 本局率先出完牌的玩家 (本局内只写一次)
        turns_remaining_after_out: 出完牌后其他玩家剩余的最后回合数 (只减不增)
        config: 游戏配置
        seed: 开局种子
        rng_state: Mulberry32 当前状态 (用于回收洗牌与后续局)
        meld_counter: 本局已亮出的牌组数 (用于生成牌组 id)
        last_round_scores: 最近一局的得分明细
    """
    round: int
    players: Tuple[Player, ...]
    current_player_index: int = 0

    draw_pile: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    melds: Tuple[Meld, ...] = ()

    turn_phase: TurnPhase = TurnPhase.NEED_DRAW
    status: Status = Status.PLAYING

    # 出完牌触发
    out_triggered_by_player_id: Optional[str] = None
    turns_remaining_after_out: Optional[int] = None

    config: GameConfig = DEFAULT_CONFIG

    # 随机状态
    seed: Optional[int] = None
    rng_state: int = 0

    meld_counter: int = 0
    last_round_scores: Tuple[RoundScore, ...] = field(default=())

    # ------------------------------------------------------------------
    # 构建
    # ------------------------------------------------------------------

    @classmethod
    def new_game(
        cls,
        player_names: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        start_discard: Optional[bool] = None,
        config: GameConfig = DEFAULT_CONFIG,
    ) -> 'GameState':
        """
        创建初始游戏状态 (第 1 局)

        Args:
            player_names: 玩家显示名
            seed: 随机种子 (为空时从系统熵源取一个，并记录在状态中)
            start_discard: 发牌后是否翻一张作为弃牌堆起始 (为空时用配置)
            config: 游戏配置

        Returns:
            初始状态

        Raises:
            GameSetupError: 玩家数不合法
        """
        names = list(player_names) if player_names is not None else list(DEFAULT_PLAYER_NAMES)
        if len(names) < config.min_players:
            raise GameSetupError(f"Need at least {config.min_players} players, got {len(names)}")
        if len(names) > config.max_players:
            raise GameSetupError(f"At most {config.max_players} players fit this deck, got {len(names)}")

        if start_discard is not None and start_discard != config.start_discard:
            config = replace(config, start_discard=start_discard)

        if seed is None:
            seed = random.SystemRandom().getrandbits(32)
        seed &= MASK32

        rng = Mulberry32(seed)
        rule = get_round_rule(1, config.total_rounds)
        dealt = deal(
            shuffle(create_deck(config), rng),
            len(names),
            rule.hand_size,
            start_discard=config.start_discard,
        )

        players = tuple(
            Player(id=f"P{i + 1}", name=name, hand=dealt.hands[i])
            for i, name in enumerate(names)
        )

        logger.info(f"New game: {len(players)} players, seed {seed}")

        return cls(
            round=1,
            players=players,
            draw_pile=dealt.draw_pile,
            discard_pile=dealt.discard_pile,
            config=config,
            seed=seed,
            rng_state=rng.state,
        )

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def rule(self) -> RoundRule:
        """当前局规则 (由局数推导)"""
        return get_round_rule(self.round, self.config.total_rounds)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def is_finished(self) -> bool:
        return self.status == Status.GAME_OVER

    @property
    def winners(self) -> Tuple[str, ...]:
        """累计分最低的玩家 id (可能并列)"""
        return determine_winners(self.players)

    def get_player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def get_meld(self, meld_id: str) -> Optional[Meld]:
        for m in self.melds:
            if m.id == meld_id:
                return m
        return None

    def legal_actions(self) -> List[ActionType]:
        """
        获取当前允许的动作类型

        Returns:
            ActionType 列表
        """
        if self.status == Status.ROUND_END:
            return [ActionType.NEXT_ROUND]
        if self.status != Status.PLAYING:
            return []

        actions: List[ActionType] = []
        if self.turn_phase == TurnPhase.NEED_DRAW:
            if self.draw_pile or len(self.discard_pile) > 1:
                actions.append(ActionType.DRAW_FROM_DECK)
            if self.discard_pile:
                actions.append(ActionType.DRAW_FROM_DISCARD)
        else:
            hand_size = len(self.current_player.hand)
            # 亮牌至少 3 张且需留 1 张弃牌
            if hand_size > 3:
                actions.append(ActionType.SUBMIT_MELD)
            if self.melds and hand_size > 1:
                actions.append(ActionType.LAY_OFF)
            actions.append(ActionType.DISCARD)
        actions.append(ActionType.SORT_HAND)
        return actions

    # ------------------------------------------------------------------
    # 内部工具
    # ------------------------------------------------------------------

    def _reject(self, reason: str) -> ActionResult:
        logger.debug(f"Rejected ({self.current_player.id}, {self.turn_phase.value}): {reason}")
        return ActionResult.rejected(self, reason)

    def _check_turn(self, phase: TurnPhase) -> Optional[str]:
        """检查生命周期与回合阶段，返回违例原因"""
        if self.status != Status.PLAYING:
            return "Round is not in progress."
        if self.turn_phase != phase:
            if phase == TurnPhase.NEED_DRAW:
                return "You have already drawn this turn."
            return "Draw 1 card first."
        return None

    def _select_from_hand(self, card_ids: Sequence[str]) -> Tuple[List[Card], Optional[str]]:
        """按选择顺序取出当前玩家手中的牌"""
        if not card_ids:
            return [], "Select cards first."
        if len(set(card_ids)) != len(card_ids):
            return [], "Selection contains the same card twice."
        by_id: Dict[str, Card] = {c.id: c for c in self.current_player.hand}
        selected = []
        for card_id in card_ids:
            card = by_id.get(card_id)
            if card is None:
                return [], f"Card {card_id} is not in your hand."
            selected.append(card)
        return selected, None

    def _with_current_hand(self, hand: Sequence[Card]) -> Tuple[Player, ...]:
        idx = self.current_player_index
        return tuple(
            replace(p, hand=tuple(hand)) if i == idx else p
            for i, p in enumerate(self.players)
        )

    def _hand_without(self, cards: Sequence[Card]) -> Tuple[Card, ...]:
        remove = {c.id for c in cards}
        return tuple(c for c in self.current_player.hand if c.id not in remove)

    def _detect_meld_type(self, cards: Sequence[Card]) -> Tuple[MeldType, ValidationResult]:
        """先尝试 BOOK，再尝试 RUN"""
        allow = self.config.allow_all_wild_melds
        result = MeldValidator.validate_meld(cards, MeldType.BOOK, self.rule, allow)
        if result.ok:
            return MeldType.BOOK, result
        return MeldType.RUN, MeldValidator.validate_meld(cards, MeldType.RUN, self.rule, allow)

    # ------------------------------------------------------------------
    # 动作
    # ------------------------------------------------------------------

    def draw_from_deck(self, rng: Optional[Rng] = None) -> ActionResult:
        """
        从摸牌堆顶摸一张 (摸牌堆为空时先回收弃牌堆)

        Args:
            rng: 回收洗牌用的随机数函数；为空时延续状态中的 Mulberry32

        Raises:
            EmptyPileError: 摸牌堆为空且弃牌堆无法回收
        """
        reason = self._check_turn(TurnPhase.NEED_DRAW)
        if reason:
            return self._reject(reason)

        draw_pile, discard_pile = self.draw_pile, self.discard_pile
        rng_state = self.rng_state
        if not draw_pile:
            source = rng if rng is not None else Mulberry32(self.rng_state)
            draw_pile, discard_pile = recycle_discard_into_draw(draw_pile, discard_pile, source)
            if rng is None:
                rng_state = source.state
            if draw_pile:
                logger.debug(f"Recycled {len(draw_pile)} discards into the draw pile")

        card, draw_pile = draw_one(draw_pile)
        me = self.current_player

        logger.debug(f"{me.id} drew from deck")

        return ActionResult.accepted(replace(
            self,
            players=self._with_current_hand(me.hand + (card,)),
            draw_pile=draw_pile,
            discard_pile=discard_pile,
            turn_phase=TurnPhase.NEED_DISCARD,
            rng_state=rng_state,
        ))

    def draw_from_discard(self) -> ActionResult:
        """取弃牌堆顶的一张"""
        reason = self._check_turn(TurnPhase.NEED_DRAW)
        if reason:
            return self._reject(reason)
        if not self.discard_pile:
            return self._reject("Discard pile is empty.")

        card, discard_pile = take_discard_top(self.discard_pile)
        me = self.current_player

        logger.debug(f"{me.id} took {card} from discard")

        return ActionResult.accepted(replace(
            self,
            players=self._with_current_hand(me.hand + (card,)),
            discard_pile=discard_pile,
            turn_phase=TurnPhase.NEED_DISCARD,
        ))

    def submit_meld(self, card_ids: Sequence[str]) -> ActionResult:
        """
        将选中的手牌组成新的公开牌组 (自动识别 BOOK / RUN)

        不能因此清空手牌: 出完牌只能通过弃牌完成
        """
        reason = self._check_turn(TurnPhase.NEED_DISCARD)
        if reason:
            return self._reject(reason)

        cards, reason = self._select_from_hand(card_ids)
        if reason:
            return self._reject(reason)

        meld_type, result = self._detect_meld_type(cards)
        if not result.ok:
            return self._reject(f"Invalid meld: {result.reason}")

        new_hand = self._hand_without(cards)
        if not new_hand:
            return self._reject("Must keep 1 card to discard. (Go out happens on discard.)")

        me = self.current_player
        counter = self.meld_counter + 1
        meld = Meld(
            id=f"R{self.round}-{me.id}-{counter}",
            owner_id=me.id,
            meld_type=meld_type,
            cards=tuple(cards),
            round=self.round,
        )

        logger.debug(f"{me.id} submitted {meld_type.value} {meld.id} ({len(cards)} cards)")

        return ActionResult.accepted(replace(
            self,
            players=self._with_current_hand(new_hand),
            melds=self.melds + (meld,),
            meld_counter=counter,
        ))

    def lay_off(self, meld_id: str, card_ids: Sequence[str]) -> ActionResult:
        """向已有牌组追加手牌 (整体重新验证)"""
        reason = self._check_turn(TurnPhase.NEED_DISCARD)
        if reason:
            return self._reject(reason)

        cards, reason = self._select_from_hand(card_ids)
        if reason:
            return self._reject(reason)

        me = self.current_player
        if len(me.hand) - len(cards) < 1:
            return self._reject("Must keep 1 card to discard. (Go out happens on discard.)")

        target = self.get_meld(meld_id)
        if target is None:
            return self._reject("Target meld not found.")

        result = MeldValidator.validate_layoff(
            target.meld_type,
            target.cards,
            cards,
            self.rule,
            self.config.allow_all_wild_melds,
        )
        if not result.ok:
            return self._reject(f"Lay off failed: {result.reason}")

        melds = tuple(
            replace(m, cards=m.cards + tuple(cards)) if m.id == meld_id else m
            for m in self.melds
        )

        logger.debug(f"{me.id} laid off {len(cards)} card(s) onto {meld_id}")

        return ActionResult.accepted(replace(
            self,
            players=self._with_current_hand(self._hand_without(cards)),
            melds=melds,
        ))

    def discard(self, card_ids: Union[str, Sequence[str]]) -> ActionResult:
        """
        弃一张牌，结束回合

        弃牌后:
        1. 手牌为 0 且本局尚无人出完 -> 记录出完者，其他玩家各有一个最后回合
        2. 否则若已由其他玩家出完 -> 剩余回合数减 1 (即使本次也清空了手牌)，
           减到 0 立即结束本局并计分
        3. 否则轮到下一位玩家摸牌
        """
        reason = self._check_turn(TurnPhase.NEED_DISCARD)
        if reason:
            return self._reject(reason)

        if isinstance(card_ids, str):
            card_ids = (card_ids,)
        if len(card_ids) != 1:
            return self._reject("To discard, select exactly 1 card.")

        cards, reason = self._select_from_hand(card_ids)
        if reason:
            return self._reject(reason)

        card = cards[0]
        me = self.current_player
        new_hand = self._hand_without(cards)

        state = replace(
            self,
            players=self._with_current_hand(new_hand),
            discard_pile=discard_one(self.discard_pile, card),
        )

        logger.debug(f"{me.id} discarded {card}")

        if not new_hand and state.out_triggered_by_player_id is None:
            state = replace(
                state,
                out_triggered_by_player_id=me.id,
                turns_remaining_after_out=len(self.players) - 1,
            )
            logger.info(f"{me.name} went out in round {self.round}; others get one final turn each")
        elif state.out_triggered_by_player_id is not None and state.out_triggered_by_player_id != me.id:
            remaining = state.turns_remaining_after_out - 1
            state = replace(state, turns_remaining_after_out=remaining)
            if remaining <= 0:
                return ActionResult.accepted(state.end_round())

        return ActionResult.accepted(replace(
            state,
            current_player_index=(self.current_player_index + 1) % len(self.players),
            turn_phase=TurnPhase.NEED_DRAW,
        ))

    def sort_hand(self, sort_key: SortKey = SortKey.RANK, player_id: Optional[str] = None) -> ActionResult:
        """整理手牌 (只改变展示顺序，游戏结束后不可用)"""
        if self.status == Status.GAME_OVER:
            return self._reject("Game is over.")
        target = self.current_player if player_id is None else self.get_player(player_id)
        if target is None:
            return self._reject(f"Unknown player {player_id}.")

        ordered = sort_by_rank(target.hand) if sort_key == SortKey.RANK else sort_by_suit(target.hand)
        players = tuple(
            replace(p, hand=tuple(ordered)) if p.id == target.id else p
            for p in self.players
        )
        return ActionResult.accepted(replace(self, players=players))

    def apply(self, action: Action, rng: Optional[Rng] = None) -> ActionResult:
        """
        执行动作

        Args:
            action: 动作
            rng: 仅用于 DRAW_FROM_DECK 回收洗牌与 NEXT_ROUND

        Returns:
            ActionResult
        """
        t = action.action_type
        if t == ActionType.DRAW_FROM_DECK:
            return self.draw_from_deck(rng)
        if t == ActionType.DRAW_FROM_DISCARD:
            return self.draw_from_discard()
        if t == ActionType.SUBMIT_MELD:
            return self.submit_meld(action.card_ids)
        if t == ActionType.LAY_OFF:
            return self.lay_off(action.meld_id, action.card_ids)
        if t == ActionType.DISCARD:
            return self.discard(action.card_ids)
        if t == ActionType.SORT_HAND:
            return self.sort_hand(action.sort_key)
        if t == ActionType.NEXT_ROUND:
            return self.next_round(rng=rng)
        raise ValueError(f"Unknown action type: {t}")

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    def end_round(self) -> 'GameState':
        """
        结束本局: 按手牌计分并累加，清除出完牌标记

        Returns:
            ROUND_END 状态 (最后一局为 GAME_OVER)
        """
        if self.status != Status.PLAYING:
            raise ValueError("Round is not in progress")

        rule = self.rule
        scores = round_scores(self.players, rule, self.out_triggered_by_player_id, self.config)
        players = tuple(
            add_round_score(p, s.points)
            for p, s in zip(self.players, scores)
        )

        is_game_over = self.round >= self.config.total_rounds
        status = Status.GAME_OVER if is_game_over else Status.ROUND_END

        logger.info(
            f"Round {self.round} ended: "
            + ", ".join(f"{p.id}+{s.points}={p.score}" for p, s in zip(players, scores))
        )
        if is_game_over:
            logger.info(f"Game over. Winners: {', '.join(determine_winners(players))}")

        return replace(
            self,
            players=players,
            turn_phase=TurnPhase.NEED_DRAW,
            status=status,
            out_triggered_by_player_id=None,
            turns_remaining_after_out=None,
            last_round_scores=tuple(scores),
        )

    def next_round(
        self,
        seed: Optional[int] = None,
        start_discard: Optional[bool] = None,
        rng: Optional[Rng] = None,
    ) -> ActionResult:
        """
        开始下一局: 新牌组、洗牌、发牌，保留玩家与累计分

        Args:
            seed: 本局洗牌种子 (为空时延续状态中的 Mulberry32)
            start_discard: 是否翻一张起始弃牌 (为空时用配置)
            rng: 外部随机数函数 (优先于 seed)

        Returns:
            ActionResult (已是最后一局时转为 GAME_OVER)
        """
        if self.status == Status.GAME_OVER:
            return self._reject("Game is over.")
        if self.status != Status.ROUND_END:
            return self._reject("Round is still in progress.")

        if self.round >= self.config.total_rounds:
            logger.info(f"Game over. Winners: {', '.join(self.winners)}")
            return ActionResult.accepted(replace(self, status=Status.GAME_OVER))

        round_number = self.round + 1
        rule = get_round_rule(round_number, self.config.total_rounds)

        rng_state = self.rng_state
        if rng is None:
            own_rng = Mulberry32(seed if seed is not None else self.rng_state)
            shuffled = shuffle(create_deck(self.config), own_rng)
            rng_state = own_rng.state
        else:
            shuffled = shuffle(create_deck(self.config), rng)

        if start_discard is None:
            start_discard = self.config.start_discard
        dealt = deal(shuffled, len(self.players), rule.hand_size, start_discard=start_discard)

        players = tuple(
            replace(p, hand=dealt.hands[i])
            for i, p in enumerate(self.players)
        )

        logger.info(f"Round {round_number} started. Wild rank: {rule.wild_rank}")

        return ActionResult.accepted(replace(
            self,
            round=round_number,
            players=players,
            current_player_index=0,
            draw_pile=dealt.draw_pile,
            discard_pile=dealt.discard_pile,
            melds=(),
            turn_phase=TurnPhase.NEED_DRAW,
            status=Status.PLAYING,
            out_triggered_by_player_id=None,
            turns_remaining_after_out=None,
            rng_state=rng_state,
            meld_counter=0,
        ))

    # ------------------------------------------------------------------
    # 审计与序列化
    # ------------------------------------------------------------------

    def all_cards(self) -> List[Card]:
        """所有区域 (手牌、摸牌堆、弃牌堆、牌组) 中的牌"""
        return list(chain(
            chain.from_iterable(p.hand for p in self.players),
            self.draw_pile,
            self.discard_pile,
            chain.from_iterable(m.cards for m in self.melds),
        ))

    def invariant_violations(self) -> List[str]:
        """
        检查状态不变量

        Returns:
            违例描述列表 (为空表示正常)
        """
        violations: List[str] = []
        cards = self.all_cards()

        ids = [c.id for c in cards]
        if len(ids) != len(set(ids)):
            violations.append("Duplicate card ids across zones.")

        expected = cards_to_array(create_deck(self.config))
        actual = cards_to_array(cards)
        if not np.array_equal(expected, actual):
            violations.append(
                f"Card counts differ from a full deck: {int(actual.sum())} in play, "
                f"{int(expected.sum())} expected."
            )

        if self.status == Status.PLAYING:
            rule = self.rule
            for m in self.melds:
                if len(m.cards) < 3:
                    violations.append(f"Meld {m.id} has fewer than 3 cards.")
                result = MeldValidator.validate_meld(
                    m.cards, m.meld_type, rule, self.config.allow_all_wild_melds
                )
                if not result.ok:
                    violations.append(f"Meld {m.id} is invalid: {result.reason}")

        if (self.out_triggered_by_player_id is None) != (self.turns_remaining_after_out is None):
            violations.append("Out trigger fields are inconsistent.")

        for p in self.players:
            if p.score != sum(p.round_points):
                violations.append(f"{p.id} score {p.score} differs from its round history.")

        return violations

    def to_dict(self) -> dict:
        """导出为纯数据 (可直接 JSON 序列化)"""
        return {
            "round": self.round,
            "rule": self.rule.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "current_player_index": self.current_player_index,
            "draw_pile": [c.to_dict() for c in self.draw_pile],
            "discard_pile": [c.to_dict() for c in self.discard_pile],
            "melds": [m.to_dict() for m in self.melds],
            "turn_phase": self.turn_phase.value,
            "status": self.status.value,
            "out_triggered_by_player_id": self.out_triggered_by_player_id,
            "turns_remaining_after_out": self.turns_remaining_after_out,
            "config": self.config.to_dict(),
            "seed": self.seed,
            "rng_state": self.rng_state,
            "meld_counter": self.meld_counter,
            "last_round_scores": [
                {"player_id": s.player_id, "points": s.points, "went_out": s.went_out}
                for s in self.last_round_scores
            ],
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'GameState':
        """从 to_dict 的结果恢复状态 ("rule" 由局数重新推导)"""
        return cls(
            round=int(d["round"]),
            players=tuple(Player.from_dict(p) for p in d["players"]),
            current_player_index=int(d["current_player_index"]),
            draw_pile=tuple(Card.from_dict(c) for c in d["draw_pile"]),
            discard_pile=tuple(Card.from_dict(c) for c in d["discard_pile"]),
            melds=tuple(Meld.from_dict(m) for m in d["melds"]),
            turn_phase=TurnPhase(d["turn_phase"]),
            status=Status(d["status"]),
            out_triggered_by_player_id=d.get("out_triggered_by_player_id"),
            turns_remaining_after_out=d.get("turns_remaining_after_out"),
            config=GameConfig.from_dict(d.get("config", {})),
            seed=d.get("seed"),
            rng_state=int(d.get("rng_state", 0)),
            meld_counter=int(d.get("meld_counter", 0)),
            last_round_scores=tuple(RoundScore(**s) for s in d.get("last_round_scores", [])),
        )


def new_game(
    player_names: Optional[Sequence[str]] = None,
    seed: Optional[int] = None,
    start_discard: Optional[bool] = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> GameState:
    return GameState.new_game(player_names, seed, start_discard, config)


def end_round(state: GameState) -> GameState:
    return state.end_round()


def next_round(
    state: GameState,
    seed: Optional[int] = None,
    start_discard: Optional[bool] = None,
    rng: Optional[Rng] = None,
) -> ActionResult:
    return state.next_round(seed=seed, start_discard=start_discard, rng=rng)
