"""Per-account mutual exclusion for balance mutations"""
from contextlib import contextmanager
from threading import Lock
from typing import Iterator
from weakref import WeakValueDictionary


class AccountLocks:
    """One lock per account id; different accounts never contend

    Locks are only kept while some caller holds or waits on them.
    """

    def __init__(self):
        self._locks: 'WeakValueDictionary[str, Lock]' = WeakValueDictionary()
        self._registry_lock = Lock()

    def _lock_for(self, account_id: str) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = Lock()
                self._locks[account_id] = lock
            return lock

    @contextmanager
    def hold(self, account_id: str) -> Iterator[None]:
        lock = self._lock_for(account_id)
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
