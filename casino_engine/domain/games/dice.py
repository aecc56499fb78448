"""Dice: roll 0.00-99.99 and predict over or under a target"""
from random import Random

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import DicePrediction
from casino_engine.domain.games.outcome import GameOutcome


def win_chance(prediction: DicePrediction) -> float:
    if prediction.prediction == "over":
        return (100 - prediction.target) / 100
    return prediction.target / 100


def multiplier_for(prediction: DicePrediction, house_edge: float) -> float:
    return (1 - house_edge) / win_chance(prediction)


def roll(rng: Random) -> float:
    return rng.randrange(10000) / 100


def is_win(rolled: float, prediction: DicePrediction) -> bool:
    # Landing exactly on the target loses in both directions
    if prediction.prediction == "over":
        return rolled > prediction.target
    return rolled < prediction.target


def resolve(prediction: DicePrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    multiplier = multiplier_for(prediction, config.house_edge)
    rolled = roll(rng)
    win = is_win(rolled, prediction)
    return GameOutcome.settle(stake, multiplier, win, {"roll": rolled, "win": win})
