"""终端对局脚本测试"""
import importlib.util
from pathlib import Path

import pytest

from crowns.actions import Action
from crowns.cards import parse_cards
from crowns.state import GameState, Player, TurnPhase

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "play.py"


@pytest.fixture(scope="module")
def play():
    spec = importlib.util.spec_from_file_location("crowns_play_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def exhausted_state():
    """摸牌堆为空且弃牌堆只有 1 张"""
    return GameState(
        round=1,
        players=(
            Player(id="P1", name="A", hand=tuple(parse_cards("H5 C6"))),
            Player(id="P2", name="B", hand=tuple(parse_cards("SK"))),
        ),
        discard_pile=tuple(parse_cards("H9")),
        turn_phase=TurnPhase.NEED_DRAW,
    )


class TestApplyAction:
    """apply_action 测试"""

    def test_empty_piles_keep_session(self, play, capsys):
        state = exhausted_state()
        assert play.apply_action(state, Action.draw_from_deck()) is None
        assert "Draw pile empty" in capsys.readouterr().out

    def test_discard_still_available(self, play):
        state = exhausted_state()
        new = play.apply_action(state, Action.draw_from_discard())
        assert new is not None
        assert len(new.players[0].hand) == 3

    def test_rejection_printed(self, play, capsys):
        state = exhausted_state()
        assert play.apply_action(state, Action.discard(state.players[0].hand[0].id)) is None
        assert "Draw 1 card first." in capsys.readouterr().out
