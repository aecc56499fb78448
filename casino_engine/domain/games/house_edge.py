"""Exact return-to-player figures used to audit the game table at startup"""
from itertools import product
import logging
from typing import Dict, Optional

import numpy as np

from casino_engine.domain.entities.game_type import GAME_CONFIGS, GameConfig, GameType
from casino_engine.domain.entities.predictions import RoulettePrediction
from casino_engine.domain.exceptions import ConfigurationError
from casino_engine.domain.games import plinko, roulette, slots
from casino_engine.domain.games.paytable import expected_return

logger = logging.getLogger(__name__)

TOLERANCE = 1e-9


def roulette_rtp(bet_type: str = "red", value: Optional[int] = None) -> float:
    prediction = RoulettePrediction(bet_type=bet_type, value=value)
    hits = len(roulette.covered_numbers(prediction))
    return hits / roulette.POCKETS * roulette.multiplier_for(prediction)


def slots_rtp(target_rtp: float) -> float:
    stops = list(product(slots.SYMBOLS.STRIP, repeat=slots.REELS))
    factor = slots.scale_factor(target_rtp)
    multipliers = np.array([slots.base_line(stop)[1] for stop in stops], dtype=float) * factor
    return float(multipliers.mean())


def plinko_rtp(risk_level: str, target_rtp: float) -> float:
    return expected_return(plinko.multipliers(risk_level, target_rtp), plinko.slot_probabilities())


def max_table_multiplier(game_type: GameType, config: GameConfig) -> Optional[float]:
    if game_type == GameType.SLOTS:
        return max(slots.paytable(config.target_rtp).values())
    if game_type == GameType.PLINKO:
        return max(max(plinko.multipliers(risk, config.target_rtp)) for risk in plinko.BASE_MULTIPLIERS)
    if game_type == GameType.ROULETTE:
        return 36.0
    return None


def theoretical_rtp(game_type: GameType, config: Optional[GameConfig] = None) -> Dict[str, float]:
    """Exact RTP per bet variant for the table-driven games"""
    config = config or GAME_CONFIGS[game_type]
    if game_type == GameType.ROULETTE:
        variants = {"number": roulette_rtp("number", 17)}
        variants.update({bet: roulette_rtp(bet) for bet in roulette.OUTSIDE_BETS})
        return variants
    if game_type == GameType.SLOTS:
        return {"spin": slots_rtp(config.target_rtp)}
    if game_type == GameType.PLINKO:
        return {risk: plinko_rtp(risk, config.target_rtp) for risk in plinko.BASE_MULTIPLIERS}
    return {}


def verify_game_configs(configs: Optional[Dict[GameType, GameConfig]] = None) -> None:
    """Check every paytable returns exactly 1 - house edge and respects its cap"""
    configs = configs or GAME_CONFIGS
    for game_type, config in configs.items():
        if not 0 <= config.house_edge < 1:
            raise ConfigurationError(f"{game_type.value}: house edge must be in [0, 1)")
        if not 0 < config.min_bet <= config.max_bet:
            raise ConfigurationError(f"{game_type.value}: invalid bet limits")

        for variant, rtp in theoretical_rtp(game_type, config).items():
            if abs(rtp - config.target_rtp) > TOLERANCE:
                raise ConfigurationError(
                    f"{game_type.value}/{variant}: RTP {rtp:.6f} does not match "
                    f"house edge {config.house_edge:.6f}"
                )

        top = max_table_multiplier(game_type, config)
        if top is not None and top > config.max_payout_multiplier + TOLERANCE:
            raise ConfigurationError(
                f"{game_type.value}: top multiplier {top:.2f} exceeds cap {config.max_payout_multiplier}"
            )

    logger.info(f"Verified house edge for {len(configs)} games")
