"""每局规则表测试"""
import pytest

from crowns.cards import parse_card
from crowns.errors import RoundOutOfRangeError, CrownsError
from crowns.rules import RoundRule, TOTAL_ROUNDS, get_round_rule, is_wild, is_joker


class TestGetRoundRule:
    """get_round_rule 测试"""

    def test_first_round(self):
        assert get_round_rule(1) == RoundRule(round=1, hand_size=3, wild_rank=3)

    def test_last_round(self):
        assert get_round_rule(11) == RoundRule(round=11, hand_size=13, wild_rank=13)

    def test_all_rounds(self):
        for n in range(1, TOTAL_ROUNDS + 1):
            rule = get_round_rule(n)
            assert rule.hand_size == n + 2
            assert rule.wild_rank == rule.hand_size
            assert 3 <= rule.wild_rank <= 13

    @pytest.mark.parametrize("n", [0, -1, 12])
    def test_out_of_range(self, n):
        with pytest.raises(RoundOutOfRangeError):
            get_round_rule(n)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_round_rule(12)
        with pytest.raises(CrownsError):
            get_round_rule(0)

    def test_shorter_game(self):
        assert get_round_rule(3, total_rounds=3).hand_size == 5
        with pytest.raises(RoundOutOfRangeError):
            get_round_rule(4, total_rounds=3)


class TestWild:
    """百搭判定测试"""

    def test_joker_is_wild(self):
        rule = get_round_rule(1)
        assert is_wild(parse_card("JK"), rule)
        assert is_joker(parse_card("JK"))

    def test_round_wild_rank(self):
        rule = get_round_rule(5)  # 百搭为 7
        assert is_wild(parse_card("H7"), rule)
        assert is_wild(parse_card("*7"), rule)
        assert not is_wild(parse_card("H8"), rule)
        assert not is_joker(parse_card("H7"))
