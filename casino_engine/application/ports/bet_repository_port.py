"""Bet repository port (interface)"""
from abc import ABC, abstractmethod
from typing import List, Optional

from casino_engine.domain.entities.bet import Bet


class BetRepositoryPort(ABC):
    """Port for bet persistence"""

    @abstractmethod
    def save(self, bet: Bet, acting_identity: Optional[str] = None) -> Bet:
        """Save a bet, authored as `acting_identity` when given instead of the service identity"""
        pass

    @abstractmethod
    def list_by_user(self, user_id: str, limit: int = 50, game_type: Optional[str] = None) -> List[Bet]:
        """Newest bets for a user"""
        pass

    @abstractmethod
    def list_since(self, since: float) -> List[Bet]:
        """All bets created at or after `since`"""
        pass
