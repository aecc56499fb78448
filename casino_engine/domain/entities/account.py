"""Account entity"""
from dataclasses import dataclass, field
from typing import Optional
import time
import uuid

PLAYER = "player"
ADMIN = "admin"


@dataclass
class Account:
    """A player or admin; balance is owned by the storage collaborator"""

    username: str
    balance: float
    role: str = PLAYER
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)
    updated_at: Optional[float] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "username": self.username,
            "balance": self.balance,
            "role": self.role,
            "created_at": self.created_at,
            "updated_at": self.updated_at or self.created_at
        }

    def to_public_dict(self) -> dict:
        data = self.to_dict()
        data["id"] = data.pop("_id")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Account':
        return cls(
            id=str(data.get("_id") or data.get("id")),
            username=data.get("username", ""),
            balance=data.get("balance", 0.0),
            role=data.get("role", PLAYER),
            created_at=data.get("created_at", time.time()),
            updated_at=data.get("updated_at")
        )
