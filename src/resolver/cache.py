"""Memo table for resolution results.

Entries never expire: a key resolved once keeps its result (including a
negative ``None`` result) for the lifetime of the owning resolver.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")

_MISSING = object()


class ResolutionCache(Generic[T]):
    """Per-key locked memo table.

    Concurrent callers asking for the same key compute it once; callers on
    different keys never wait on each other.
    """

    def __init__(self) -> None:
        self._values: Dict[Hashable, Optional[T]] = {}
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def _key_lock(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def lookup(self, key: Hashable) -> Tuple[bool, Optional[T]]:
        """Return ``(found, value)``; ``found`` distinguishes a cached None."""
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value  # type: ignore[return-value]

    def put(self, key: Hashable, value: Optional[T]) -> None:
        with self._guard:
            self._values[key] = value

    def get_or_compute(self, key: Hashable, compute: Callable[[], Optional[T]]) -> Optional[T]:
        """Return the cached value for key, computing and storing it on first use."""
        found, value = self.lookup(key)
        if found:
            return value
        with self._key_lock(key):
            found, value = self.lookup(key)
            if found:
                return value
            value = compute()
            self.put(key, value)
            return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
