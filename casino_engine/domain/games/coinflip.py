"""Coinflip: even-money call on a fair coin"""
from random import Random

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import CoinflipPrediction
from casino_engine.domain.games.outcome import GameOutcome

SIDES = ("heads", "tails")


def multiplier_for(house_edge: float) -> float:
    return (1 - house_edge) * 2


def resolve(prediction: CoinflipPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    side = rng.choice(SIDES)
    win = side == prediction.prediction
    return GameOutcome.settle(stake, multiplier_for(config.house_edge), win, {"result": side, "win": win})
