"""Crash: settle a client-side cashout against a drawn crash point"""
from random import Random
import math

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import CrashPrediction
from casino_engine.domain.exceptions import InvalidPrediction
from casino_engine.domain.games.outcome import GameOutcome


def crash_point(uniform: float, house_edge: float) -> float:
    """max(1, floor(100 * log(1 - U) / log(1 - edge)) / 100)"""
    return max(1.0, math.floor(100 * math.log(1 - uniform) / math.log(1 - house_edge)) / 100)


def resolve(prediction: CrashPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    cashout = prediction.cashout_multiplier
    if cashout > config.max_payout_multiplier:
        raise InvalidPrediction(
            f"cashoutMultiplier cannot exceed {config.max_payout_multiplier}"
        )

    point = crash_point(rng.random(), config.house_edge)
    win = cashout <= point
    result = {
        "crashPoint": point,
        "cashoutMultiplier": cashout if win else None,
        "win": win
    }
    return GameOutcome.settle(stake, cashout if win else 0, win, result)
