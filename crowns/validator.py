"""
牌组 (BOOK / RUN) 与追加 (lay off) 合法性验证

所有方法都是纯函数，无状态；规则违例以 ValidationResult 返回，不抛异常
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card
from .rules import RoundRule, is_wild

MIN_MELD_LEN = 3


class MeldType(Enum):
    """牌组类型"""
    BOOK = "BOOK"  # 同点数
    RUN = "RUN"    # 同花色连续


@dataclass(frozen=True)
class ValidationResult:
    """验证结果"""
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> 'ValidationResult':
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> 'ValidationResult':
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


class MeldValidator:
    """
    牌组验证器

    百搭牌: 王 (rank 0) 或点数等于本局 wild_rank 的牌
    所有方法都是静态方法，无状态
    """

    @staticmethod
    def validate_meld(
        cards: Sequence[Card],
        meld_type: MeldType,
        rule: RoundRule,
        allow_all_wild: bool = True,
    ) -> ValidationResult:
        """
        验证牌组

        Args:
            cards: 牌列表
            meld_type: BOOK 或 RUN
            rule: 本局规则
            allow_all_wild: 是否接受全部由百搭组成的牌组

        Returns:
            ValidationResult
        """
        if len(cards) < MIN_MELD_LEN:
            return ValidationResult.failure("Need at least 3 cards.")

        if meld_type == MeldType.BOOK:
            return MeldValidator.validate_book(cards, rule, allow_all_wild)
        return MeldValidator.validate_run(cards, rule, allow_all_wild)

    @staticmethod
    def validate_book(
        cards: Sequence[Card],
        rule: RoundRule,
        allow_all_wild: bool = True,
    ) -> ValidationResult:
        """BOOK: 非百搭牌点数相同，花色不限"""
        non_wild = [c for c in cards if not is_wild(c, rule)]
        if not non_wild:
            if allow_all_wild:
                return ValidationResult.success()
            return ValidationResult.failure("BOOK needs at least one natural card.")

        target = non_wild[0].rank
        if any(c.rank != target for c in non_wild):
            return ValidationResult.failure("BOOK must share the same rank.")
        return ValidationResult.success()

    @staticmethod
    def validate_run(
        cards: Sequence[Card],
        rule: RoundRule,
        allow_all_wild: bool = True,
    ) -> ValidationResult:
        """
        RUN: 同花色连续

        - 非百搭牌花色相同
        - 非百搭牌点数互不相同
        - 排序后相邻点数的空缺总数不超过百搭牌数 (百搭填补空缺)
        """
        non_wild = [c for c in cards if not is_wild(c, rule)]
        if not non_wild:
            if allow_all_wild:
                return ValidationResult.success()
            return ValidationResult.failure("RUN needs at least one natural card.")

        suit = non_wild[0].suit
        if any(c.suit != suit for c in non_wild):
            return ValidationResult.failure("RUN must be a single suit (non-wild cards).")

        ranks = sorted(c.rank for c in non_wild)
        for i in range(1, len(ranks)):
            if ranks[i] == ranks[i - 1]:
                return ValidationResult.failure("RUN cannot contain duplicate ranks.")

        wild_count = len(cards) - len(non_wild)

        needed = 0
        for prev, cur in zip(ranks, ranks[1:]):
            gap = cur - prev - 1
            if gap < 0:
                return ValidationResult.failure("Invalid rank ordering.")
            needed += gap

        if needed > wild_count:
            return ValidationResult.failure("Not enough wild cards to complete the RUN sequence.")
        return ValidationResult.success()

    @staticmethod
    def validate_layoff(
        meld_type: MeldType,
        meld_cards: Sequence[Card],
        added_cards: Sequence[Card],
        rule: RoundRule,
        allow_all_wild: bool = True,
    ) -> ValidationResult:
        """
        验证向已有牌组追加牌

        对 (原牌组 + 追加牌) 整体重新验证，保证桌面上的牌组始终合法

        Args:
            meld_type: 目标牌组类型
            meld_cards: 目标牌组的牌
            added_cards: 追加的牌
            rule: 本局规则

        Returns:
            ValidationResult
        """
        if not added_cards:
            return ValidationResult.failure("Select cards to lay off.")
        return MeldValidator.validate_meld(
            list(meld_cards) + list(added_cards), meld_type, rule, allow_all_wild
        )


validate_meld = MeldValidator.validate_meld
validate_layoff = MeldValidator.validate_layoff
