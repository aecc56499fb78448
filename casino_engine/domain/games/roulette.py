"""European roulette, one bet per spin"""
from random import Random
from typing import FrozenSet

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import RoulettePrediction
from casino_engine.domain.games.outcome import GameOutcome

POCKETS = 37

RED_NUMBERS = frozenset([1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36])
BLACK_NUMBERS = frozenset([2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35])

OUTSIDE_BETS = {
    "red": RED_NUMBERS,
    "black": BLACK_NUMBERS,
    "odd": frozenset(n for n in range(1, 37) if n % 2 == 1),
    "even": frozenset(n for n in range(1, 37) if n % 2 == 0),
    "low": frozenset(range(1, 19)),
    "high": frozenset(range(19, 37)),
    "dozen1": frozenset(range(1, 13)),
    "dozen2": frozenset(range(13, 25)),
    "dozen3": frozenset(range(25, 37)),
    "column1": frozenset(n for n in range(1, 37) if n % 3 == 1),
    "column2": frozenset(n for n in range(1, 37) if n % 3 == 2),
    "column3": frozenset(n for n in range(1, 37) if n % 3 == 0),
}


def covered_numbers(prediction: RoulettePrediction) -> FrozenSet[int]:
    if prediction.bet_type == "number":
        return frozenset([prediction.value])
    return OUTSIDE_BETS[prediction.bet_type]


def multiplier_for(prediction: RoulettePrediction) -> float:
    """Stake plus winnings: 36x straight up, 3x dozens and columns, 2x even money"""
    return 36 / len(covered_numbers(prediction))


def color_of(number: int) -> str:
    if number in RED_NUMBERS:
        return "red"
    if number in BLACK_NUMBERS:
        return "black"
    return "green"


def resolve(prediction: RoulettePrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    number = rng.randrange(POCKETS)
    win = number in covered_numbers(prediction)
    result = {"number": number, "color": color_of(number), "win": win}
    return GameOutcome.settle(stake, multiplier_for(prediction), win, result)
