"""Bet entity"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import time
import uuid

FINISHED = "finished"


@dataclass
class Bet:
    """Domain entity representing one resolved game round"""

    user_id: str
    game_type: str
    amount: float
    multiplier: float
    prediction: Dict[str, Any]
    result: Dict[str, Any]
    payout: float
    status: str = FINISHED
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    def __post_init__(self):
        # Rounds resolve instantly, so a bet is finished when it is created
        if self.finished_at is None:
            self.finished_at = self.created_at

    @property
    def balance_change(self) -> float:
        """Calculate net balance change"""
        return -self.amount + self.payout

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "_id": self.id,
            "user_id": self.user_id,
            "game_type": self.game_type,
            "amount": self.amount,
            "multiplier": self.multiplier,
            "prediction": self.prediction,
            "result": self.result,
            "payout": self.payout,
            "status": self.status,
            "created_at": self.created_at,
            "finished_at": self.finished_at
        }

    def to_public_dict(self) -> dict:
        data = self.to_dict()
        data["id"] = data.pop("_id")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Bet':
        """Create from dictionary"""
        return cls(
            id=str(data.get("_id") or data.get("id")),
            user_id=data.get("user_id"),
            game_type=data.get("game_type"),
            amount=data.get("amount", 0),
            multiplier=data.get("multiplier", 0),
            prediction=data.get("prediction") or {},
            result=data.get("result") or {},
            payout=data.get("payout", 0),
            status=data.get("status", FINISHED),
            created_at=data.get("created_at", time.time()),
            finished_at=data.get("finished_at")
        )
