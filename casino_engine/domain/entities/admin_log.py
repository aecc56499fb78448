"""Admin audit log entry"""
from dataclasses import dataclass, field
from typing import Any, Dict
import time
import uuid


@dataclass(frozen=True)
class AdminLog:
    admin_id: str
    action: str
    target_id: str
    details: Dict[str, Any]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "admin_id": self.admin_id,
            "action": self.action,
            "target_id": self.target_id,
            "details": self.details,
            "created_at": self.created_at
        }
