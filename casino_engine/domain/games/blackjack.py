"""Blackjack: map a client-reported terminal hand to a payout

No cards are dealt here; the hand outcome is trusted as submitted.
"""
from random import Random

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import BlackjackPrediction
from casino_engine.domain.games.outcome import GameOutcome

NATURAL_MULTIPLIER = 2.5
WIN_MULTIPLIER = 2.0
PUSH_MULTIPLIER = 1.0


def resolve(prediction: BlackjackPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    win = prediction.result == "win"
    push = prediction.result == "push"
    if win:
        multiplier = NATURAL_MULTIPLIER if prediction.is_natural else WIN_MULTIPLIER
    elif push:
        multiplier = PUSH_MULTIPLIER
    else:
        multiplier = 0

    result = prediction.to_dict()
    result["win"] = win
    result["blackjack"] = win and prediction.is_natural
    return GameOutcome.settle(stake, multiplier, win, result, push=push)
