"""Keyed re-entrant locks used to serialize writers per channel."""

from __future__ import annotations

import threading
from collections.abc import Hashable
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLocks:
    """Lazily allocate one RLock per key; distinct keys never contend."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, threading.RLock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _lock_for(self, key: Hashable) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault(key, threading.RLock())

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Acquire the write lock for one key."""
        with self._lock_for(key):
            yield
