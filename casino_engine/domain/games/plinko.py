"""Plinko: a ball bounces through 16 rows of pegs into one of 17 slots"""
from functools import lru_cache
from math import comb
from random import Random
from typing import Dict, List, Tuple

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import PlinkoPrediction
from casino_engine.domain.games.outcome import GameOutcome
from casino_engine.domain.games.paytable import scale_to_rtp

ROWS = 16
SLOTS = ROWS + 1

# Slot shapes per risk level before house-edge scaling
BASE_MULTIPLIERS: Dict[str, Tuple[float, ...]] = {
    "low": (110, 41, 10, 5, 3, 1.5, 1.4, 1.4, 1.2, 1.4, 1.4, 1.5, 3, 5, 10, 41, 110),
    "medium": (1000, 130, 26, 9, 4, 2, 1.5, 1.2, 1, 1.2, 1.5, 2, 4, 9, 26, 130, 1000),
    "high": (1000, 130, 26, 9, 4, 2, 1.5, 1.2, 0.2, 1.2, 1.5, 2, 4, 9, 26, 130, 1000),
}


def slot_probabilities(rows: int = ROWS) -> List[float]:
    """Binomial landing distribution for an unbiased board"""
    return [comb(rows, k) / 2 ** rows for k in range(rows + 1)]


@lru_cache(maxsize=None)
def multipliers(risk_level: str, target_rtp: float) -> Tuple[float, ...]:
    return tuple(scale_to_rtp(BASE_MULTIPLIERS[risk_level], slot_probabilities(), target_rtp))


def drop(rng: Random) -> List[int]:
    """Bounce path: 1 for right, 0 for left, one entry per row"""
    return [rng.randrange(2) for _ in range(ROWS)]


def resolve(prediction: PlinkoPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    path = drop(rng)
    slot = sum(path)
    multiplier = multipliers(prediction.risk_level, config.target_rtp)[slot]
    result = {
        "riskLevel": prediction.risk_level,
        "path": path,
        "slot": slot,
        "multiplier": round(multiplier, 4),
        "win": True
    }
    return GameOutcome.settle(stake, multiplier, True, result)
