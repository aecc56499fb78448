"""Admin balance adjustment request DTO"""
from dataclasses import dataclass
from typing import Optional

from casino_engine.domain.exceptions import InvalidAmount


@dataclass
class AdjustBalanceRequest:

    admin_id: str
    user_id: str
    amount: float
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, admin_id: str) -> 'AdjustBalanceRequest':
        amount = data.get('amount')
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidAmount("amount must be a number")
        user_id = data.get('user_id')
        if not user_id:
            raise InvalidAmount("user_id is required")
        return cls(
            admin_id=admin_id,
            user_id=str(user_id),
            amount=float(amount),
            description=data.get('description')
        )
