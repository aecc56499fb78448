"""Three-reel slot machine"""
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import product
from random import Random
from typing import Dict, List, Sequence, Tuple

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import SlotsPrediction
from casino_engine.domain.games.outcome import GameOutcome
from casino_engine.domain.games.paytable import expected_return

REELS = 3


@dataclass(frozen=True)
class SlotSymbols:
    """Reel strip and base symbol values before house-edge scaling"""

    VALUES: Dict[str, int] = field(default_factory=lambda: {
        '🍒': 2,
        '🍋': 3,
        '🍊': 4,
        '🍇': 5,
        '🔔': 8,
        '⭐': 10,
        '💎': 15,
        '🎰': 25,
        '💰': 50,
        '👑': 100
    })

    # Higher symbols appear fewer times on the strip
    STRIP: Tuple[str, ...] = (
        '🍒', '🍋', '🍊', '🍇', '🔔', '⭐', '💎', '🎰', '💰', '👑',
        '🍒', '🍋', '🍊', '🍇', '🔔', '⭐', '💎',
        '🍒', '🍋', '🍊', '🍇', '🔔',
        '🍒', '🍋', '🍊'
    )

    def get_value(self, symbol: str) -> int:
        return self.VALUES.get(symbol, 0)


SYMBOLS = SlotSymbols()


def base_line(reels: Sequence[str]) -> Tuple[str, float]:
    """Unscaled multiplier and line name for a stop"""
    first, second, third = reels
    if first == second == third:
        return "three_of_a_kind", SYMBOLS.get_value(first)
    if first == second or second == third or first == third:
        pair = second if second in (first, third) else first
        return "two_of_a_kind", max(1, SYMBOLS.get_value(pair) // 3)
    if {'🍒', '🍋', '🍊'} <= set(reels):
        return "fruit_combo", 3
    if {'💎', '⭐'} <= set(reels):
        return "lucky_stars", 2
    return "none", 0


@lru_cache(maxsize=None)
def scale_factor(target_rtp: float) -> float:
    """Factor applied to base multipliers, from exact enumeration of every stop"""
    stops = list(product(SYMBOLS.STRIP, repeat=REELS))
    base = [base_line(stop)[1] for stop in stops]
    return target_rtp / expected_return(base, [1 / len(stops)] * len(stops))


def paytable(target_rtp: float) -> Dict[Tuple[str, ...], float]:
    """Scaled multiplier for every distinct paying stop"""
    factor = scale_factor(target_rtp)
    table = {}
    for stop in set(product(SYMBOLS.STRIP, repeat=REELS)):
        base = base_line(stop)[1]
        if base:
            table[stop] = base * factor
    return table


def spin(rng: Random) -> List[str]:
    return [rng.choice(SYMBOLS.STRIP) for _ in range(REELS)]


def resolve(prediction: SlotsPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    reels = spin(rng)
    line, base = base_line(reels)
    multiplier = base * scale_factor(config.target_rtp)
    win = multiplier > 0
    result = {"reels": reels, "line": line, "win": win}
    return GameOutcome.settle(stake, multiplier, win, result)
