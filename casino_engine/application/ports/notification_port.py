"""Notification port (interface)"""
from abc import ABC, abstractmethod
from typing import Any


class NotificationPort(ABC):
    """Port for best-effort pushes to a player's live channel"""

    @abstractmethod
    def notify_account(self, account_id: str, event_name: str, payload: Any) -> None:
        """Push an event to one account; raises NotificationFailure on delivery errors"""
        pass
