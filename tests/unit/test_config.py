"""游戏配置测试"""
import json

import pytest

from crowns.cards import Suit
from crowns.config import GameConfig, DEFAULT_CONFIG
from crowns.errors import GameSetupError


class TestGameConfig:
    """GameConfig 测试"""

    def test_defaults(self):
        assert DEFAULT_CONFIG.decks == 2
        assert DEFAULT_CONFIG.jokers_per_deck == 3
        assert DEFAULT_CONFIG.total_rounds == 11
        assert DEFAULT_CONFIG.joker_penalty == 50
        assert DEFAULT_CONFIG.wild_penalty == 20
        assert DEFAULT_CONFIG.allow_all_wild_melds is True

    def test_deck_size(self):
        assert DEFAULT_CONFIG.deck_size == 116

    def test_max_players(self):
        # 8 * 13 = 104 <= 115
        assert DEFAULT_CONFIG.max_players == 8

    def test_from_dict_ignores_unknown_keys(self):
        config = GameConfig.from_dict({"decks": 3, "unknown": 1})
        assert config.decks == 3

    def test_dict_round_trip(self):
        config = GameConfig(suits=(Suit.HEARTS, Suit.CLUBS), total_rounds=5, start_discard=False)
        assert GameConfig.from_dict(config.to_dict()) == config

    def test_to_dict_is_json_compatible(self):
        json.dumps(DEFAULT_CONFIG.to_dict())

    def test_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"total_rounds": 3, "wild_penalty": 25}), encoding="utf-8")
        config = GameConfig.from_json(path)
        assert config.total_rounds == 3
        assert config.wild_penalty == 25

    @pytest.mark.parametrize("kwargs", [
        {"decks": 0},
        {"jokers_per_deck": -1},
        {"total_rounds": 12},
        {"suits": (Suit.HEARTS, Suit.NONE)},
        {"ranks": (2, 3, 4)},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(GameSetupError):
            GameConfig(**kwargs)
