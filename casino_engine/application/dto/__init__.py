from .place_bet_request import PlaceBetRequest
from .place_bet_response import PlaceBetResponse
from .adjust_balance_request import AdjustBalanceRequest
from .adjust_balance_response import AdjustBalanceResponse
from .stats import PlayerStats, GameStats

__all__ = [
    'PlaceBetRequest',
    'PlaceBetResponse',
    'AdjustBalanceRequest',
    'AdjustBalanceResponse',
    'PlayerStats',
    'GameStats'
]
