"""Per-key admission locks for a single server process."""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable


class KeyedLock:
    """
    One threading.Lock per key, created on first use.

    Serializes work for the same key while different keys run in parallel.
    Cross-process exclusion is the database's job (row lock + unique constraint).
    """

    def __init__(self):
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable):
        lock = self._lock_for(key)
        with lock:
            yield

    def __len__(self):
        return len(self._locks)


# Admission for one doctor-clinic at a time
admission_locks = KeyedLock()
