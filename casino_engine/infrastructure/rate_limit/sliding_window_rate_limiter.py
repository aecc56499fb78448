"""In-process sliding window rate limiter"""
import time
import logging
from collections import deque
from threading import Lock
from typing import Callable, Deque, Dict

from casino_engine.application.ports.rate_limiter_port import RateLimiterPort

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter(RateLimiterPort):
    """Allows `limit` hits per key within any `window` seconds"""

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = Lock()

    def hit(self, key: str) -> bool:
        now = self.clock()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= now - self.window:
                hits.popleft()
            if len(hits) >= self.limit:
                logger.warning(f"Rate limit exceeded for {key}")
                return False
            hits.append(now)
            return True
