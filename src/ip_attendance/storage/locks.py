from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class IdentityLocks:
    """One mutex per identity, created on first use.

    Serializes the history check and the write for the same person while
    leaving different people free to proceed in parallel.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, identity: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(identity)
            if lock is None:
                lock = self._locks[identity] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, identity: str) -> Iterator[None]:
        lock = self._lock_for(identity)
        with lock:
            yield
