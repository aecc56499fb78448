"""Admin balance adjustment response DTO"""
from dataclasses import dataclass


@dataclass
class AdjustBalanceResponse:

    user_id: str
    previous_balance: float
    new_balance: float
    adjustment: float
    transaction_id: str

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "previous_balance": self.previous_balance,
            "new_balance": self.new_balance,
            "adjustment": self.adjustment,
            "transaction_id": self.transaction_id
        }
