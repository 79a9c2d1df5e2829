"""
牌组构建、洗牌、发牌与牌堆操作

随机数由调用方注入 (Rng: () -> [0, 1) 浮点数)，引擎内部不使用全局随机状态。
Mulberry32 的位运算必须逐位保持一致，同一种子在任意实现中得到相同的洗牌结果。
"""
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple, TypeVar

from .cards import Card, Suit, JOKER
from .config import GameConfig, DEFAULT_CONFIG
from .errors import EmptyPileError

T = TypeVar("T")

Rng = Callable[[], float]

MASK32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """32 位截断乘法"""
    return (a * b) & MASK32


class Mulberry32:
    """
    Mulberry32 伪随机数生成器

    状态为一个 32 位无符号整数，可直接序列化，用于在 GameState 中延续随机序列。
    """

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = seed & MASK32

    def __call__(self) -> float:
        self.state = (self.state + MULBERRY_INCREMENT) & MASK32
        t = self.state
        x = _imul(t ^ (t >> 15), t | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & MASK32
        return ((x ^ (x >> 14)) & MASK32) / TWO_POW_32


def mulberry32(seed: int) -> Rng:
    """创建以 seed 为种子的 Mulberry32 生成器"""
    return Mulberry32(seed)


def shuffle(seq: Sequence[T], rng: Rng) -> List[T]:
    """
    Fisher-Yates 洗牌 (从末尾向前)

    Args:
        seq: 输入序列 (不会被修改)
        rng: 随机数函数

    Returns:
        洗好的新列表
    """
    a = list(seq)
    for i in range(len(a) - 1, 0, -1):
        j = int(rng() * (i + 1))
        a[i], a[j] = a[j], a[i]
    return a


def create_deck(config: GameConfig = DEFAULT_CONFIG) -> List[Card]:
    """
    构建完整牌组

    顺序: 按副数 -> 花色 -> 点数，每副的王追加在该副末尾

    Args:
        config: 游戏配置

    Returns:
        牌列表 (默认 116 张)
    """
    out: List[Card] = []
    for d in range(1, config.decks + 1):
        for suit in config.suits:
            for rank in config.ranks:
                out.append(Card(
                    id=f"D{d}-{suit.value}-{rank}-{len(out)}",
                    suit=suit,
                    rank=rank,
                    deck_index=d,
                ))
        for _ in range(config.jokers_per_deck):
            out.append(Card(
                id=f"D{d}-JOKER-{JOKER}-{len(out)}",
                suit=Suit.NONE,
                rank=JOKER,
                deck_index=d,
            ))
    return out


@dataclass(frozen=True)
class DealResult:
    """发牌结果"""
    hands: Tuple[Tuple[Card, ...], ...]
    draw_pile: Tuple[Card, ...]
    discard_pile: Tuple[Card, ...]


def deal(
    deck: Sequence[Card],
    player_count: int,
    hand_size: int,
    start_discard: bool = True,
) -> DealResult:
    """
    轮流发牌: 共 hand_size 轮，每轮每位玩家一张

    Args:
        deck: 已洗好的牌组
        player_count: 玩家数
        hand_size: 每人手牌数
        start_discard: 是否把剩余牌的第一张翻到弃牌堆

    Returns:
        DealResult
    """
    needed = player_count * hand_size
    if needed > len(deck):
        raise EmptyPileError("Draw")

    hands: List[List[Card]] = [[] for _ in range(player_count)]
    index = 0
    for _ in range(hand_size):
        for p in range(player_count):
            hands[p].append(deck[index])
            index += 1

    draw_pile = tuple(deck[index:])
    discard_pile: Tuple[Card, ...] = ()
    if start_discard and draw_pile:
        discard_pile = (draw_pile[0],)
        draw_pile = draw_pile[1:]

    return DealResult(
        hands=tuple(tuple(h) for h in hands),
        draw_pile=draw_pile,
        discard_pile=discard_pile,
    )


def draw_one(draw_pile: Sequence[Card]) -> Tuple[Card, Tuple[Card, ...]]:
    """
    从摸牌堆顶 (index 0) 摸一张

    Returns:
        (摸到的牌, 剩余摸牌堆)

    Raises:
        EmptyPileError: 摸牌堆为空 (调用方应先回收弃牌堆)
    """
    if not draw_pile:
        raise EmptyPileError("Draw")
    return draw_pile[0], tuple(draw_pile[1:])


def take_discard_top(discard_pile: Sequence[Card]) -> Tuple[Card, Tuple[Card, ...]]:
    """
    取弃牌堆顶 (最后一张)

    Returns:
        (取到的牌, 剩余弃牌堆)
    """
    if not discard_pile:
        raise EmptyPileError("Discard")
    return discard_pile[-1], tuple(discard_pile[:-1])


def discard_one(discard_pile: Sequence[Card], card: Card) -> Tuple[Card, ...]:
    """弃一张牌到弃牌堆顶"""
    return tuple(discard_pile) + (card,)


def recycle_discard_into_draw(
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    rng: Rng,
) -> Tuple[Tuple[Card, ...], Tuple[Card, ...]]:
    """
    摸牌堆为空时，把弃牌堆 (除顶牌外) 洗匀作为新的摸牌堆

    摸牌堆非空或弃牌堆不足 2 张时原样返回。

    Returns:
        (新摸牌堆, 新弃牌堆)
    """
    if draw_pile or len(discard_pile) <= 1:
        return tuple(draw_pile), tuple(discard_pile)

    top = discard_pile[-1]
    rest = discard_pile[:-1]
    return tuple(shuffle(rest, rng)), (top,)
