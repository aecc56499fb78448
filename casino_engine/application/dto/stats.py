"""Aggregated betting statistics DTOs"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class PlayerStats:
    """Per-player totals; a bet counts as won when it paid more than it staked"""

    total_bets: int = 0
    total_wagered: float = 0.0
    total_won: float = 0.0
    net_profit: float = 0.0
    win_rate: float = 0.0
    favorite_game: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "totalBets": self.total_bets,
            "totalWagered": self.total_wagered,
            "totalWon": self.total_won,
            "netProfit": self.net_profit,
            "winRate": self.win_rate,
            "favoriteGame": self.favorite_game
        }


@dataclass
class GameStats:
    """House-side totals over a period"""

    total_bets: int = 0
    total_volume: float = 0.0
    total_payout: float = 0.0
    house_profit: float = 0.0
    average_bet: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalBets": self.total_bets,
            "totalVolume": self.total_volume,
            "totalPayout": self.total_payout,
            "houseProfit": self.house_profit,
            "averageBet": self.average_bet
        }
