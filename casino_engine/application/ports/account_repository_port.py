"""Account repository port (interface)"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from casino_engine.domain.entities.account import Account


class AccountRepositoryPort(ABC):
    """Port for accounts and their balances"""

    @abstractmethod
    def get(self, account_id: str) -> Optional[Account]:
        """Get an account, or None if it does not exist"""
        pass

    @abstractmethod
    def create(self, account: Account) -> Account:
        """Insert the account unless one with the same id exists; returns the stored account"""
        pass

    @abstractmethod
    def apply_balance_delta(self, account_id: str, delta: float, required_balance: float = 0.0,
                            max_balance: Optional[float] = None) -> Tuple[float, float]:
        """Atomically add `delta` to the balance, returns (balance_before, balance_after)

        The update only applies while balance >= required_balance and, when
        max_balance is given, while the result stays <= max_balance. Raises
        AccountNotFound, InsufficientFunds or InvalidAmount otherwise.
        """
        pass

    @abstractmethod
    def list(self, limit: int = 100, offset: int = 0) -> List[Account]:
        """Newest accounts first"""
        pass
