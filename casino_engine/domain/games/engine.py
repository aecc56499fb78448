"""Payout engine: dispatches a wager to its game's resolver"""
from random import Random, SystemRandom
from typing import Any, Callable, Dict, Optional, Union

from casino_engine.domain.entities.game_type import GAME_CONFIGS, GameConfig, GameType, get_game_config
from casino_engine.domain.entities.predictions import PREDICTION_TYPES, Prediction, parse_prediction
from casino_engine.domain.games import blackjack, coinflip, crash, dice, mines, plinko, roulette, slots
from casino_engine.domain.games.outcome import GameOutcome

Resolver = Callable[[Prediction, float, GameConfig, Random], GameOutcome]

RESOLVERS: Dict[GameType, Resolver] = {
    GameType.DICE: dice.resolve,
    GameType.COINFLIP: coinflip.resolve,
    GameType.CRASH: crash.resolve,
    GameType.BLACKJACK: blackjack.resolve,
    GameType.ROULETTE: roulette.resolve,
    GameType.SLOTS: slots.resolve,
    GameType.MINES: mines.resolve,
    GameType.PLINKO: plinko.resolve,
}


class PayoutEngine:
    """Stateless outcome calculation; the random source is the only dependency"""

    def __init__(self, rng: Optional[Random] = None,
                 configs: Optional[Dict[GameType, GameConfig]] = None):
        self.rng = rng or SystemRandom()
        self.configs = configs or GAME_CONFIGS

    def resolve(self, game_type: Union[str, GameType], prediction: Any, stake: float) -> GameOutcome:
        """Resolve one wager; raises UnknownGame or InvalidPrediction on bad input"""
        game = GameType.parse(game_type)
        config = get_game_config(game, self.configs)
        if not isinstance(prediction, PREDICTION_TYPES[game]):
            prediction = parse_prediction(game, prediction)
        return RESOLVERS[game](prediction, stake, config, self.rng)
