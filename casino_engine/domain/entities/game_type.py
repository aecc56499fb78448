"""Game types and the static per-game configuration table"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from casino_engine.domain.exceptions import UnknownGame


class GameType(str, Enum):
    DICE = "dice"
    COINFLIP = "coinflip"
    CRASH = "crash"
    BLACKJACK = "blackjack"
    ROULETTE = "roulette"
    SLOTS = "slots"
    MINES = "mines"
    PLINKO = "plinko"

    @classmethod
    def parse(cls, value: Union[str, "GameType"]) -> "GameType":
        """Resolve a raw game type, raising UnknownGame for anything else"""
        try:
            return cls(value)
        except ValueError:
            raise UnknownGame(f"Invalid game type: {value}")


@dataclass(frozen=True)
class GameConfig:
    """Bet limits and house edge for one game"""

    min_bet: float
    max_bet: float
    house_edge: float
    max_payout_multiplier: float

    @property
    def target_rtp(self) -> float:
        return 1 - self.house_edge


GAME_CONFIGS: Dict[GameType, GameConfig] = {
    GameType.DICE: GameConfig(min_bet=0.01, max_bet=1000, house_edge=0.01, max_payout_multiplier=99),
    GameType.COINFLIP: GameConfig(min_bet=0.01, max_bet=1000, house_edge=0.02, max_payout_multiplier=1.96),
    GameType.CRASH: GameConfig(min_bet=0.01, max_bet=1000, house_edge=0.01, max_payout_multiplier=100),
    # European single-zero wheel
    GameType.ROULETTE: GameConfig(min_bet=0.01, max_bet=500, house_edge=1 / 37, max_payout_multiplier=36),
    GameType.BLACKJACK: GameConfig(min_bet=0.01, max_bet=500, house_edge=0.005, max_payout_multiplier=2.5),
    GameType.SLOTS: GameConfig(min_bet=0.01, max_bet=100, house_edge=0.05, max_payout_multiplier=1000),
    GameType.MINES: GameConfig(min_bet=0.01, max_bet=1000, house_edge=0.01, max_payout_multiplier=1000),
    GameType.PLINKO: GameConfig(min_bet=0.01, max_bet=1000, house_edge=0.01, max_payout_multiplier=1000),
}


def get_game_config(game_type: Union[str, GameType],
                    configs: Dict[GameType, GameConfig] = None) -> GameConfig:
    """Look up the configuration for a game, raising UnknownGame if absent"""
    table = GAME_CONFIGS if configs is None else configs
    config = table.get(GameType.parse(game_type))
    if config is None:
        raise UnknownGame(f"Game type not configured: {game_type}")
    return config
