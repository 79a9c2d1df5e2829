"""动作定义测试"""
import pytest

from crowns.actions import ActionType, SortKey, Action, ActionResult
from crowns.state import GameState


class TestAction:
    """Action 数据类测试"""

    def test_draw_actions(self):
        assert Action.draw_from_deck().action_type == ActionType.DRAW_FROM_DECK
        assert Action.draw_from_discard().action_type == ActionType.DRAW_FROM_DISCARD

    def test_submit_meld(self):
        action = Action.submit_meld(["a", "b", "c"])
        assert action.action_type == ActionType.SUBMIT_MELD
        assert action.card_ids == ("a", "b", "c")
        assert action.meld_id is None

    def test_lay_off(self):
        action = Action.lay_off("R1-P1-1", ["a"])
        assert action.meld_id == "R1-P1-1"
        assert action.card_ids == ("a",)

    def test_discard(self):
        action = Action.discard("a")
        assert action.action_type == ActionType.DISCARD
        assert action.card_ids == ("a",)

    def test_sort_hand(self):
        assert Action.sort_hand().sort_key == SortKey.RANK
        assert Action.sort_hand(SortKey.SUIT).sort_key == SortKey.SUIT

    def test_frozen(self):
        action = Action.draw_from_deck()
        with pytest.raises(Exception):
            action.meld_id = "x"


class TestActionResult:
    """ActionResult 测试"""

    def test_accepted(self):
        state = GameState.new_game(seed=1)
        result = ActionResult.accepted(state)
        assert result.ok
        assert result
        assert result.reason is None

    def test_rejected_keeps_state(self):
        state = GameState.new_game(seed=1)
        result = ActionResult.rejected(state, "Nope.")
        assert not result
        assert result.state is state
        assert result.reason == "Nope."
