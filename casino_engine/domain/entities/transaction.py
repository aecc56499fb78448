"""Ledger entry entity"""
from dataclasses import dataclass, field
from enum import Enum
import time
import uuid


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    BET = "bet"
    WIN = "win"
    ADMIN_ADJUSTMENT = "admin_adjustment"


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one balance change"""

    user_id: str
    type: TransactionType
    amount: float
    balance_before: float
    balance_after: float
    description: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "user_id": self.user_id,
            "type": self.type.value,
            "amount": self.amount,
            "balance_before": self.balance_before,
            "balance_after": self.balance_after,
            "description": self.description,
            "created_at": self.created_at
        }

    def to_public_dict(self) -> dict:
        data = self.to_dict()
        data["id"] = data.pop("_id")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Transaction':
        return cls(
            id=str(data.get("_id") or data.get("id")),
            user_id=data.get("user_id"),
            type=TransactionType(data.get("type")),
            amount=data.get("amount", 0),
            balance_before=data.get("balance_before", 0),
            balance_after=data.get("balance_after", 0),
            description=data.get("description", ""),
            created_at=data.get("created_at", time.time())
        )
