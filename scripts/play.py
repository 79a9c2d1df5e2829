#!/usr/bin/env python3
"""
终端多人同屏对局脚本

Usage:
    python scripts/play.py --names Alice Bob
    python scripts/play.py --names Alice Bob Carol --seed 42
    python scripts/play.py --config configs/short.json --debug

命令:
    d               从摸牌堆摸牌
    p               取弃牌堆顶
    m 1 2 3         用手牌第 1、2、3 张亮出牌组
    l 2 4 5         把手牌第 4、5 张追加到第 2 个牌组
    x 3             弃掉手牌第 3 张
    sr / ss         按点数 / 花色整理手牌
    q               退出
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from crowns.actions import Action, ActionResult, ActionType, SortKey
from crowns.cards import cards_to_str, card_to_str, rank_label
from crowns.config import GameConfig, DEFAULT_CONFIG
from crowns.errors import EmptyPileError
from crowns.state import GameState, Status

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Crowns hot-seat play")

    parser.add_argument("--names", nargs="+", default=["Player 1", "Player 2"], help="Player names")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument("--config", type=str, default=None, help="GameConfig JSON file")
    parser.add_argument(
        "--no-start-discard",
        action="store_true",
        help="Do not flip a card onto the discard pile after dealing",
    )
    parser.add_argument("--debug", action="store_true", help="Log every transition and audit invariants")

    return parser.parse_args()


def print_table(state: GameState):
    """打印桌面"""
    me = state.current_player
    rule = state.rule

    print("\n" + "=" * 60)
    print(f"Round {state.round}/{state.config.total_rounds} | "
          f"hand size {rule.hand_size} | wild {rank_label(rule.wild_rank)}s + jokers")
    print("-" * 60)

    for p in state.players:
        marker = ">" if p.id == me.id else " "
        print(f"{marker} {p.name:<12} cards: {len(p.hand):>2}  score: {p.score}")

    top = card_to_str(state.discard_pile[-1]) if state.discard_pile else "-"
    print(f"\nDraw pile: {len(state.draw_pile)}  Discard top: {top}")

    if state.melds:
        print("\nMelds:")
        for i, meld in enumerate(state.melds, 1):
            print(f"  {i}. {meld.meld_type.value:<4} [{meld.owner_id}] {cards_to_str(meld.cards)}")

    if state.out_triggered_by_player_id:
        print(f"\n{state.out_triggered_by_player_id} went out! "
              f"Final turns left: {state.turns_remaining_after_out}")

    print("-" * 60)
    hand = "  ".join(f"{i}:{card_to_str(c)}" for i, c in enumerate(me.hand, 1))
    print(f"{me.name} ({state.turn_phase.value}): {hand}")
    print("=" * 60)


def pick_ids(state: GameState, positions: List[str]) -> Optional[List[str]]:
    """手牌位置 (从 1 开始) 转牌 id"""
    hand = state.current_player.hand
    ids = []
    for pos in positions:
        if not pos.isdigit() or not 1 <= int(pos) <= len(hand):
            print(f"No card at position {pos}")
            return None
        ids.append(hand[int(pos) - 1].id)
    return ids


def read_action(state: GameState) -> Optional[Action]:
    """读取一条命令"""
    raw = input("> ").strip().split()
    if not raw:
        return None
    cmd, args = raw[0].lower(), raw[1:]

    if cmd == "q":
        raise KeyboardInterrupt
    if cmd == "d":
        return Action.draw_from_deck()
    if cmd == "p":
        return Action.draw_from_discard()
    if cmd == "sr":
        return Action.sort_hand(SortKey.RANK)
    if cmd == "ss":
        return Action.sort_hand(SortKey.SUIT)
    if cmd == "m":
        ids = pick_ids(state, args)
        return Action.submit_meld(ids) if ids is not None else None
    if cmd == "l" and args:
        if not args[0].isdigit() or not 1 <= int(args[0]) <= len(state.melds):
            print(f"No meld {args[0]}")
            return None
        ids = pick_ids(state, args[1:])
        meld_id = state.melds[int(args[0]) - 1].id
        return Action.lay_off(meld_id, ids) if ids is not None else None
    if cmd == "x":
        ids = pick_ids(state, args)
        return Action(ActionType.DISCARD, card_ids=tuple(ids)) if ids is not None else None

    print("Unknown command")
    return None


def print_round_summary(state: GameState):
    """打印本局得分"""
    print("\n" + "*" * 60)
    print(f"Round {state.round} scores")
    for p, s in zip(state.players, state.last_round_scores):
        out = " (out)" if s.went_out else ""
        print(f"  {p.name:<12} +{s.points:<4} total {p.score}{out}")
    print("*" * 60)


def apply_action(state: GameState, action: Action) -> Optional[GameState]:
    """
    执行一条命令

    Returns:
        新状态；被拒绝或无牌可摸时打印原因并返回 None
    """
    try:
        result: ActionResult = state.apply(action)
    except EmptyPileError as e:
        print(f"! {e}. Take the discard instead.")
        return None
    if not result.ok:
        print(f"! {result.reason}")
        return None
    return result.state


def play(state: GameState, debug: bool = False) -> GameState:
    """主循环: 脚本持有状态，引擎只做状态转换"""
    while state.status != Status.GAME_OVER:
        if state.status == Status.ROUND_END:
            print_round_summary(state)
            input("Press Enter for the next round...")
            state = state.next_round().state
            continue

        print_table(state)
        action = read_action(state)
        if action is None:
            continue

        new_state = apply_action(state, action)
        if new_state is None:
            continue
        state = new_state

        if debug:
            for violation in state.invariant_violations():
                logger.error(f"Invariant violated: {violation}")

    print_round_summary(state)
    names = {p.id: p.name for p in state.players}
    print(f"Game over. Winner(s): {', '.join(names[w] for w in state.winners)}")
    return state


def main():
    args = parse_args()

    if args.debug:
        logging.getLogger("crowns").setLevel(logging.DEBUG)

    config = GameConfig.from_json(args.config) if args.config else DEFAULT_CONFIG
    state = GameState.new_game(
        player_names=args.names,
        seed=args.seed,
        start_discard=False if args.no_start_discard else None,
        config=config,
    )
    logger.info(f"Seed: {state.seed}")

    try:
        play(state, debug=args.debug)
    except (KeyboardInterrupt, EOFError):
        print("\nBye")


if __name__ == "__main__":
    main()
