"""Small time-to-live cache for upstream responses."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Hashable, Tuple


class TTLCache:
    """Key/value cache whose entries expire a fixed duration after insertion.

    Expired entries are dropped lazily when read; there is no size-based
    eviction. Pass ``clock`` to control time in tests.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be >= 0")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}

    def get(self, key: Hashable) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        inserted_at, value = entry
        if self._clock() - inserted_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return value

    def put(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def __len__(self) -> int:
        return len(self._entries)
