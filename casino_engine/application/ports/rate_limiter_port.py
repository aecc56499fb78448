"""Rate limiter port (interface)"""
from abc import ABC, abstractmethod


class RateLimiterPort(ABC):

    @abstractmethod
    def hit(self, key: str) -> bool:
        """Record one request for `key`; False when the key is over its limit"""
        pass
