"""Response Cache — keyed in-memory cache with lazy expiry and prefix invalidation.

Invariants:
    - get() never returns an entry older than ttl_seconds (expired entries evicted on read)
    - invalidate(prefix) removes exactly the keys starting with prefix; no prefix clears all
    - ttl_seconds <= 0 disables caching (set() is a no-op)

Design Decisions:
    - One instance per app, created in the lifespan and injected as a route
      dependency (no module-level cache state)
    - Clock injectable: tests advance time without sleeping
"""

import time
from collections.abc import Callable
from typing import Any

from bff.core.domain_types import MatriculaId, TransferId


def property_key(matricula_id: MatriculaId) -> str:
    return f"property:{matricula_id}:full"


def transfer_key(transfer_id: TransferId) -> str:
    return f"transfer:{transfer_id}:status"


class ResponseCache:
    """key → (value, stored_at) with max age ttl_seconds."""

    def __init__(
        self,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        self._entries[key] = (value, self._clock())

    def invalidate(self, prefix: str | None = None) -> int:
        """Remove matching keys; returns how many were removed."""
        if prefix is None:
            count = len(self._entries)
            self._entries.clear()
            return count
        doomed = [k for k in self._entries if k.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._entries)
