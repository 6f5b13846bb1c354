"""Time-to-live extension for LRUCache.

Entries carry a monotonic expiration timestamp. An entry leaves the cache
on whichever comes first: LRU eviction, explicit removal or expiry.
Expired entries are invisible to every operation even before a sweep
physically drops them; ``run_sweeper`` drops them in the background.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Generic, List, Optional, Tuple, TypeVar

from core.cache import LRUCache
from core.errors import InvalidTTLError, ValidationError

T = TypeVar("T")

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    # Stores value + monotonic expiration time
    value: T
    expires_at: float  # time.monotonic()

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


class ExpiringLRUCache(Generic[T]):
    """LRU cache whose entries also expire ``ttl_seconds`` after their last write."""

    def __init__(self, capacity: int, *, ttl_seconds: float) -> None:
        ttl = float(ttl_seconds)
        if ttl <= 0:
            raise InvalidTTLError(f"TTL must be positive, got {ttl_seconds}")

        self._ttl = ttl
        self._inner: LRUCache[CacheEntry[T]] = LRUCache(capacity)

        # Guards check-then-act sequences on the inner cache.
        # Lock order is always self._lock -> inner lock.
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._inner.capacity

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def add(self, key: str, value: T) -> bool:
        with self._lock:
            now = time.monotonic()
            self._drop_if_expired(key, now)
            if key not in self._inner and len(self._inner) >= self._inner.capacity:
                # Expired entries must not push a live one out
                self._purge(now)
            return self._inner.add(key, self._entry(value, now))

    def get(self, key: str) -> Tuple[Optional[T], bool]:
        with self._lock:
            if self._drop_if_expired(key, time.monotonic()):
                return None, False

            entry, found = self._inner.get(key)
            if not found:
                return None, False
            return entry.value, True

    def change_value(self, key: str, value: T) -> bool:
        """Overwrite an existing entry, promote it and restart its TTL."""
        with self._lock:
            now = time.monotonic()
            if self._drop_if_expired(key, now):
                return False
            return self._inner.change_value(key, self._entry(value, now))

    def remove(self, key: str) -> bool:
        with self._lock:
            if self._drop_if_expired(key, time.monotonic()):
                return False
            return self._inner.remove(key)

    def clear(self) -> int:
        """Drop every entry and return how many live entries were dropped."""
        with self._lock:
            self._purge(time.monotonic())
            return self._inner.clear()

    def change_capacity(self, capacity: int) -> None:
        with self._lock:
            if capacity > 0:
                self._purge(time.monotonic())
            self._inner.change_capacity(capacity)

    def keys(self) -> List[str]:
        with self._lock:
            self._purge(time.monotonic())
            return self._inner.keys()

    def values(self) -> List[T]:
        with self._lock:
            self._purge(time.monotonic())
            return [entry.value for entry in self._inner.values()]

    def expire(self) -> int:
        """Drop every expired entry now and return how many were dropped."""
        with self._lock:
            removed = self._purge(time.monotonic())

        if removed:
            log.debug("Expired %d entries", removed)
        return removed

    async def run_sweeper(self, interval_seconds: float) -> None:
        """Call ``expire`` every ``interval_seconds`` until the task is cancelled."""
        interval = float(interval_seconds)
        if interval <= 0:
            raise ValidationError("Sweep interval must be positive")

        log.info("TTL sweeper started (ttl=%.3fs, interval=%.3fs)", self._ttl, interval)
        try:
            while True:
                self.expire()
                await asyncio.sleep(interval)
        finally:
            log.info("TTL sweeper stopped")

    def __len__(self) -> int:
        with self._lock:
            self._purge(time.monotonic())
            return len(self._inner)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry, found = self._inner.peek(key)
            return found and not entry.expired(time.monotonic())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self._inner)}, capacity={self.capacity}, "
            f"ttl_seconds={self._ttl})"
        )

    # ---- helpers (caller holds self._lock) ----

    def _entry(self, value: T, now: float) -> CacheEntry[T]:
        return CacheEntry(value=value, expires_at=now + self._ttl)

    def _drop_if_expired(self, key: str, now: float) -> bool:
        entry, found = self._inner.peek(key)
        if found and entry.expired(now):
            self._inner.remove(key)
            return True
        return False

    def _purge(self, now: float) -> int:
        removed = 0
        for key, entry in self._inner.items():
            if entry.expired(now) and self._inner.remove(key):
                removed += 1
        return removed
