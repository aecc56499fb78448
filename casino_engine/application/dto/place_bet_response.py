"""Place bet response DTO"""
from dataclasses import dataclass

from casino_engine.domain.entities.bet import Bet


@dataclass
class PlaceBetResponse:
    """Response DTO for a settled bet"""

    bet: Bet
    new_balance: float
    win: bool

    @property
    def message(self) -> str:
        return 'Congratulations! You won!' if self.bet.payout > self.bet.amount else 'Better luck next time!'

    def to_dict(self) -> dict:
        return {
            "bet": self.bet.to_public_dict(),
            "newBalance": self.new_balance,
            "win": self.win
        }
