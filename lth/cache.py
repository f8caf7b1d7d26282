from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class CacheSnapshot:
    enabled: bool
    entries: int
    ttl: Optional[float]


@dataclass(frozen=True)
class _Entry:
    value: Any
    created_at: float
    token: Hashable


class ResourceCache:
    """
    Process-wide in-memory cache shared by every url builder.

    Entries may carry a change token: a lookup with a different token is a miss.
    There is no lock. Two callers missing on the same key both compute,
    the last writer wins; the values are equal so readers never see a wrong list.
    """

    def __init__(self, *, enabled: Optional[bool] = None, ttl: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        env = os.environ.get("LTH_CACHE", None)
        if env is not None:
            self.enabled = env.strip().lower() not in {"0", "false", "no", "off", ""}
        elif enabled is not None:
            self.enabled = bool(enabled)
        else:
            self.enabled = True
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def get(self, key: str, *, token: Hashable = None) -> Any:
        """Cached value or None on a miss (disabled, absent, expired or stale token)."""
        value = self._lookup(key, token)
        return None if value is _MISSING else value

    def set(self, key: str, value: Any, *, token: Hashable = None) -> None:
        if not self.enabled:
            return
        self._entries[key] = _Entry(value=value, created_at=self._clock(), token=token)

    def get_or_set(self, key: str, factory: Callable[[], T], *, token: Hashable = None) -> T:
        """
        Return the cached value for `key`, computing and storing it on a miss.

        Args:
            key: Cache key
            factory: Computes the value; exceptions propagate and nothing is stored
            token: Change token the entry must carry to be reused
        """
        value = self._lookup(key, token)
        if value is not _MISSING:
            return value
        value = factory()
        self.set(key, value, token=token)
        return value

    def _lookup(self, key: str, token: Hashable) -> Any:
        if not self.enabled:
            return _MISSING
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        if self.ttl is not None and self._clock() - entry.created_at >= self.ttl:
            self._entries.pop(key, None)
            return _MISSING
        if entry.token != token:
            return _MISSING
        return entry.value

    # --------------------------- MAINTENANCE --------------------------- #

    def purge_all(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(enabled=bool(self.enabled), entries=len(self._entries), ttl=self.ttl)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ResourceCache", "CacheSnapshot"]
