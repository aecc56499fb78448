"""Mines: pick tiles on a 5x5 grid and avoid the hidden mines"""
from random import Random

from casino_engine.domain.entities.game_type import GameConfig
from casino_engine.domain.entities.predictions import MINES_GRID_SIZE, MinesPrediction
from casino_engine.domain.exceptions import InvalidPrediction
from casino_engine.domain.games.outcome import GameOutcome


def survival_probability(mines: int, reveals: int, grid_size: int = MINES_GRID_SIZE) -> float:
    """Chance that `reveals` distinct tiles are all safe"""
    safe = grid_size - mines
    probability = 1.0
    for i in range(reveals):
        probability *= (safe - i) / (grid_size - i)
    return probability


def multiplier_for(mines: int, reveals: int, house_edge: float) -> float:
    return (1 - house_edge) / survival_probability(mines, reveals)


def resolve(prediction: MinesPrediction, stake: float, config: GameConfig, rng: Random) -> GameOutcome:
    multiplier = multiplier_for(prediction.mines, len(prediction.tiles), config.house_edge)
    if multiplier > config.max_payout_multiplier:
        raise InvalidPrediction(
            f"Selection pays {multiplier:.2f}x, above the {config.max_payout_multiplier}x limit"
        )

    mine_positions = sorted(rng.sample(range(MINES_GRID_SIZE), prediction.mines))
    hit = [tile for tile in prediction.tiles if tile in mine_positions]
    win = not hit
    result = {
        "minePositions": mine_positions,
        "revealedTiles": list(prediction.tiles),
        "hitMine": hit[0] if hit else None,
        "win": win
    }
    return GameOutcome.settle(stake, multiplier, win, result)
