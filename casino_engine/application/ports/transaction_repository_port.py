"""Ledger repository port (interface)"""
from abc import ABC, abstractmethod
from typing import List, Optional

from casino_engine.domain.entities.transaction import Transaction


class TransactionRepositoryPort(ABC):
    """Append-only ledger"""

    @abstractmethod
    def save(self, transaction: Transaction) -> Transaction:
        pass

    @abstractmethod
    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        """Newest entries first; all entries when limit is None"""
        pass

    @abstractmethod
    def list_recent(self, limit: int = 100, offset: int = 0) -> List[Transaction]:
        pass
