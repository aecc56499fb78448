"""Place bet request DTO"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from casino_engine.domain.exceptions import InvalidAmount


def _parse_amount(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidAmount("amount must be a number")
    return float(raw)


@dataclass
class PlaceBetRequest:
    """Request DTO for placing a bet"""

    user_id: str
    game_type: str
    amount: float
    prediction: Dict[str, Any] = field(default_factory=dict)
    caller_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, user_id: str, caller_token: Optional[str] = None) -> 'PlaceBetRequest':
        """Create from the snake_case JSON body; the user comes from the auth layer"""
        return cls(
            user_id=user_id,
            game_type=data.get('game_type', ''),
            amount=_parse_amount(data.get('amount')),
            prediction=data.get('prediction') or {},
            caller_token=caller_token
        )
